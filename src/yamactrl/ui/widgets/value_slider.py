"""Bounded slider with a numeric value readout."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QWidget

from yamactrl.ui.theme import theme_manager
from yamactrl.ui.tokens import sizing, spacing


class ValueSlider(QWidget):
    """Horizontal slider with the current value shown beside it.

    Emits ``value_changed`` only for user changes; programmatic updates
    through ``set_value`` and ``set_range`` stay silent so rendering a
    fresh status never echoes a command back to the device.

    Example:
        slider = ValueSlider(0, 60)
        slider.set_value(20)
        slider.value_changed.connect(worker.set_volume)
    """

    value_changed = Signal(int)

    def __init__(self, minimum: int = 0, maximum: int = 100, value: int | None = None) -> None:
        """Initialize the slider.

        Args:
            minimum: Lowest selectable value.
            maximum: Highest selectable value.
            value: Initial value (defaults to minimum).
        """
        super().__init__()

        layout = QHBoxLayout(self)
        layout.setContentsMargins(spacing.lg, 0, spacing.lg, 0)
        layout.setSpacing(spacing.md)

        self._slider = QSlider(Qt.Orientation.Horizontal)
        self._slider.setFixedWidth(sizing.slider_width)
        self._slider.valueChanged.connect(self._on_value_changed)
        layout.addWidget(self._slider)

        self._value_label = QLabel()
        self._value_label.setFixedWidth(sizing.value_label_width)
        self._value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._value_label.setStyleSheet(f"color: {theme_manager.palette.text_secondary};")
        layout.addWidget(self._value_label)

        self.setFixedSize(sizing.slider_row_width, sizing.slider_row_height)

        self.set_range(minimum, maximum)
        self.set_value(minimum if value is None else value)

    def _on_value_changed(self, value: int) -> None:
        """Handle slider value change from user interaction."""
        self._value_label.setText(str(value))
        self.value_changed.emit(value)

    @property
    def value(self) -> int:
        """Return current value."""
        return self._slider.value()

    @property
    def minimum(self) -> int:
        """Return lower bound."""
        return self._slider.minimum()

    @property
    def maximum(self) -> int:
        """Return upper bound."""
        return self._slider.maximum()

    def set_value(self, value: int) -> None:
        """Set the value without emitting ``value_changed``.

        Values outside the range are clamped.
        """
        self._slider.blockSignals(True)
        self._slider.setValue(value)
        self._slider.blockSignals(False)
        self._value_label.setText(str(self._slider.value()))

    def set_range(self, minimum: int, maximum: int) -> None:
        """Set the bounds without emitting ``value_changed``.

        An inverted range collapses to ``minimum``.
        """
        maximum = max(minimum, maximum)
        self._slider.blockSignals(True)
        self._slider.setRange(minimum, maximum)
        self._slider.blockSignals(False)
        self._value_label.setText(str(self._slider.value()))
