"""Reusable UI widgets."""

from yamactrl.ui.widgets.value_slider import ValueSlider

__all__ = ["ValueSlider"]
