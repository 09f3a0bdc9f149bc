"""Design tokens: single source of truth for spacing, sizing and typography.

Color tokens live in theme.py (ThemePalette). Layout tokens live here.

Usage:
    from yamactrl.ui.tokens import spacing, typography, sizing

    layout.setContentsMargins(spacing.sm, spacing.sm, spacing.sm, spacing.sm)
    slider.setFixedWidth(sizing.slider_width)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpacingTokens:
    """Spacing scale based on a 4px base unit."""

    xs: int = 2  # Default: margins, small gaps
    sm: int = 4  # Comfortable: between elements
    md: int = 8  # Loose: slider to value label
    lg: int = 12  # Spacious: menu row padding


@dataclass(frozen=True)
class TypographyTokens:
    """Font size scale in points and font family stacks."""

    font_family: str = "'SF Pro Text', 'Segoe UI', 'Helvetica Neue', sans-serif"
    mono_family: str = "'SF Mono', 'Menlo', 'Consolas', monospace"
    small: int = 10  # Log text
    body: int = 11  # Default body text


@dataclass(frozen=True)
class SizingTokens:
    """Widget sizing constants in pixels."""

    border_radius_md: int = 6  # Slider handle
    slider_width: int = 120  # Menu slider track
    value_label_width: int = 40  # Numeric readout next to a slider
    slider_row_width: int = 180  # Whole slider row inside the menu
    slider_row_height: int = 30
    tray_icon: int = 64  # Rendered tray icon pixmap
    log_window_width: int = 500
    log_window_height: int = 400


# Module-level singletons, import these in widgets
spacing = SpacingTokens()
typography = TypographyTokens()
sizing = SizingTokens()
