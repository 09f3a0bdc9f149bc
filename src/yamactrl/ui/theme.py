"""Dark and light palettes for the tray menu and error log.

The active palette follows the system color scheme. Widgets read colors
from ``theme_manager.palette`` and restyle on ``theme_changed``.

Usage:
    from yamactrl.ui.theme import theme_manager

    p = theme_manager.palette
    label.setStyleSheet(f"color: {p.text_secondary};")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from yamactrl.ui.tokens import sizing, spacing, typography

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThemePalette:
    """Named color palette for UI theming.

    All values are CSS color strings (e.g. '#1e1e1e').
    """

    # Surfaces
    background: str  # App/window background
    surface: str  # Log view background

    # Outlines
    border: str

    # Foreground
    text: str  # Primary text
    text_secondary: str  # Slider value readouts

    # Reachability dot and highlights
    success: str  # Device reachable
    error: str  # Device unreachable
    accent: str  # Selected menu item

    # Slider
    slider_groove: str  # Slider track
    slider_fill: str  # Slider filled portion
    slider_handle: str  # Slider thumb

    @property
    def name(self) -> str:
        """Return 'dark' or 'light' based on background luminance."""
        _luminance_threshold = 128
        if self.background.startswith("#"):
            r = int(self.background[1:3], 16)
            return "dark" if r < _luminance_threshold else "light"
        return "dark"


DARK_PALETTE = ThemePalette(
    background="#1e1e1e",
    surface="#2d2d2d",
    border="#333333",
    text="#e0e0e0",
    text_secondary="#aaaaaa",
    success="#4CAF50",
    error="#F44336",
    accent="#7B5CFF",
    slider_groove="#444444",
    slider_fill="#7B5CFF",
    slider_handle="#cccccc",
)

LIGHT_PALETTE = ThemePalette(
    background="#f5f5f5",
    surface="#ffffff",
    border="#cccccc",
    text="#1a1a1a",
    text_secondary="#555555",
    success="#388E3C",
    error="#D32F2F",
    accent="#5A3FD6",
    slider_groove="#cccccc",
    slider_fill="#5A3FD6",
    slider_handle="#555555",
)


def _gui_app() -> QGuiApplication | None:
    """Return the running application, if one exists yet."""
    app = QGuiApplication.instance()
    return cast(QGuiApplication, app) if app is not None else None


class ThemeManager(QObject):
    """Holds the active palette and follows the system color scheme.

    Widgets read ``palette`` when styling themselves and reconnect to
    ``theme_changed`` to restyle after a dark/light switch.

    Example:
        theme_manager.apply_theme()
        theme_manager.theme_changed.connect(widget.apply_style)
    """

    theme_changed = Signal()

    def __init__(self) -> None:
        super().__init__()
        self._palette = DARK_PALETTE
        self._following_system = False

    @property
    def palette(self) -> ThemePalette:
        """Return the active palette."""
        return self._palette

    @property
    def is_dark(self) -> bool:
        """Return True if the active palette is dark."""
        return self._palette.name == "dark"

    def detect_system_theme(self) -> ThemePalette:
        """Return the palette matching the system color scheme.

        Dark is used when there is no application yet or the Qt build
        cannot report a color scheme (before 6.5).
        """
        app = _gui_app()
        if app is None:
            return DARK_PALETTE
        try:
            scheme = app.styleHints().colorScheme()
        except AttributeError:
            logger.debug("Color scheme not reported by Qt, using dark palette")
            return DARK_PALETTE
        return LIGHT_PALETTE if scheme == Qt.ColorScheme.Light else DARK_PALETTE

    def apply_theme(self, palette: ThemePalette | None = None) -> None:
        """Make a palette active and restyle the application.

        Args:
            palette: Palette to use; the system scheme decides when None.
        """
        new_palette = palette or self.detect_system_theme()
        switched = new_palette.name != self._palette.name
        self._palette = new_palette
        logger.info("Theme applied: %s", new_palette.name)

        app = QApplication.instance()
        if isinstance(app, QApplication):
            app.setStyleSheet(self._global_stylesheet())

        if switched:
            self.theme_changed.emit()

    def connect_system_theme_changes(self) -> None:
        """Re-apply the theme whenever the system scheme changes (e.g. macOS dark mode)."""
        app = _gui_app()
        if app is None or self._following_system:
            return
        try:
            app.styleHints().colorSchemeChanged.connect(self._on_system_theme_changed)
        except AttributeError:
            logger.debug("Color scheme change notifications not available")
            return
        self._following_system = True

    def _on_system_theme_changed(self) -> None:
        logger.info("System color scheme changed")
        self.apply_theme()

    def _global_stylesheet(self) -> str:
        """Generate a global stylesheet for QApplication."""
        p = self._palette
        return f"""
            QMenu {{
                font-family: {typography.font_family};
                font-size: {typography.body}pt;
            }}
            QMenu::item {{
                padding: {spacing.sm}px {spacing.lg}px;
            }}
            QMenu::item:selected {{
                background-color: {p.accent};
            }}
            QToolTip {{
                background-color: {p.surface};
                color: {p.text};
                border: 1px solid {p.border};
                padding: {spacing.xs}px;
            }}
            QSlider::groove:horizontal {{
                background: {p.slider_groove};
                height: 4px;
                border-radius: 2px;
            }}
            QSlider::sub-page:horizontal {{
                background: {p.slider_fill};
                border-radius: 2px;
            }}
            QSlider::handle:horizontal {{
                background: {p.slider_handle};
                width: 12px;
                margin: -5px 0;
                border-radius: {sizing.border_radius_md}px;
            }}
        """


# Module-level singleton, import this in widgets
theme_manager = ThemeManager()
