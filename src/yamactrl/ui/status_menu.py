"""Status bar / system tray menu with receiver controls.

Provides a QSystemTrayIcon wrapper whose menu shows the receiver status as
sliders and checkable toggles, refreshed every time the menu opens.

Usage:
    from yamactrl.ui.status_menu import StatusMenuManager

    tray = StatusMenuManager(state_store)
    controller.connect_menu(tray)
"""

from __future__ import annotations

import contextlib
import logging

from PySide6.QtCore import QObject, QRect, Qt, Signal
from PySide6.QtGui import QAction, QBrush, QColor, QFont, QIcon, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon, QWidgetAction

from yamactrl.core.state import StateStore
from yamactrl.models.status import (
    DIALOGUE_MAX,
    DIALOGUE_MIN,
    SUBWOOFER_MAX,
    SUBWOOFER_MIN,
    TONE_MAX,
    TONE_MIN,
    DeviceStatus,
    Toggle,
)
from yamactrl.ui.theme import theme_manager
from yamactrl.ui.tokens import sizing
from yamactrl.ui.widgets.value_slider import ValueSlider

logger = logging.getLogger(__name__)

_APP_NAME = "YamaCTRL"
_ICON_GLYPH = "♫"  # beamed eighth notes


class StatusMenuManager(QObject):
    """Manages the tray icon and its control menu.

    The menu is built once. Each status update changes slider values,
    labels, and check marks in place so widgets under the cursor are
    never destroyed while the user drags them.

    Features:
    - Master volume slider bounded by the device's max volume
    - Subwoofer, bass/treble and dialogue level sliders
    - Pure Direct / Enhancer / Extra Bass / Adaptive DRC toggles
    - Error log and Quit actions

    Example:
        tray = StatusMenuManager(state_store)
        tray.toggle_requested.connect(on_toggle_requested)
        tray.show()
    """

    # User interaction signals
    volume_changed = Signal(int)
    bass_changed = Signal(int)  # subwoofer volume
    tone_changed = Signal(int, int)  # bass, treble
    dialogue_level_changed = Signal(int)
    toggle_requested = Signal(object, bool)  # Toggle, requested state
    refresh_requested = Signal()
    error_log_requested = Signal()

    def __init__(
        self,
        state_store: StateStore,
        host: str = "",
        refresh_on_open: bool = True,
    ) -> None:
        """Initialize the tray menu manager.

        Args:
            state_store: The state store providing status and toggle state.
            host: Device host shown in the tooltip.
            refresh_on_open: Emit ``refresh_requested`` whenever the menu opens.
        """
        super().__init__()
        self._state = state_store
        self._host = host
        self._refresh_on_open = refresh_on_open

        self._menu = QMenu()
        self._control_actions: list[QAction] = []
        self._toggle_actions: dict[Toggle, QAction] = {}
        self._build_menu()

        self._tray = QSystemTrayIcon(self._build_status_icon())
        self._tray.setContextMenu(self._menu)
        self._update_tooltip()

        self._menu.aboutToShow.connect(self._on_about_to_show)
        self._state.status_changed.connect(self.render)
        self._state.toggles_changed.connect(self._sync_toggles)
        self._state.connection_changed.connect(self._on_connection_changed)

        if self._state.status is not None:
            self.render(self._state.status)
        else:
            self._set_controls_visible(False)

    @property
    def available(self) -> bool:
        """Return True if system tray is available on this platform."""
        return QSystemTrayIcon.isSystemTrayAvailable()

    @property
    def menu(self) -> QMenu:
        """Return the tray menu."""
        return self._menu

    @property
    def volume_slider(self) -> ValueSlider:
        """Return the master volume slider."""
        return self._volume_slider

    @property
    def bass_slider(self) -> ValueSlider:
        """Return the subwoofer volume slider."""
        return self._bass_slider

    @property
    def tone_bass_slider(self) -> ValueSlider:
        """Return the tone control bass slider."""
        return self._tone_bass_slider

    @property
    def tone_treble_slider(self) -> ValueSlider:
        """Return the tone control treble slider."""
        return self._tone_treble_slider

    @property
    def dialogue_slider(self) -> ValueSlider:
        """Return the dialogue level slider."""
        return self._dialogue_slider

    def toggle_action(self, toggle: Toggle) -> QAction:
        """Return the checkable menu action for a toggle."""
        return self._toggle_actions[toggle]

    def show(self) -> None:
        """Show the tray icon."""
        if self.available:
            self._tray.show()
            logger.info("Tray icon shown")
        else:
            logger.warning("System tray not available on this platform")

    def hide(self) -> None:
        """Hide the tray icon."""
        self._tray.hide()

    def _build_menu(self) -> None:
        """Create every menu entry once."""
        menu = self._menu

        self._waiting_action = QAction("Waiting for device…", menu)
        self._waiting_action.setEnabled(False)
        menu.addAction(self._waiting_action)

        # Volume
        self._volume_label = self._add_label()
        self._volume_slider = self._add_slider(0, 100)
        self._volume_slider.value_changed.connect(self.volume_changed.emit)

        # Subwoofer
        self._bass_label = self._add_label()
        self._bass_slider = self._add_slider(SUBWOOFER_MIN, SUBWOOFER_MAX)
        self._bass_slider.value_changed.connect(self.bass_changed.emit)
        self._add_separator()

        # Tone
        self._tone_label = self._add_label()
        self._tone_bass_slider = self._add_slider(TONE_MIN, TONE_MAX)
        self._tone_treble_slider = self._add_slider(TONE_MIN, TONE_MAX)
        self._tone_bass_slider.value_changed.connect(self._on_tone_changed)
        self._tone_treble_slider.value_changed.connect(self._on_tone_changed)
        self._add_separator()

        # Dialogue level
        self._dialogue_label = self._add_label()
        self._dialogue_slider = self._add_slider(DIALOGUE_MIN, DIALOGUE_MAX)
        self._dialogue_slider.value_changed.connect(self.dialogue_level_changed.emit)
        self._add_separator()

        # Toggles - read state at trigger time, not build time
        for toggle in Toggle:
            action = QAction(toggle.label, menu)
            action.setCheckable(True)
            action.triggered.connect(lambda _checked=False, t=toggle: self._on_toggle_triggered(t))
            menu.addAction(action)
            self._toggle_actions[toggle] = action
            self._control_actions.append(action)
        self._add_separator()

        # Static items
        log_action = QAction("Show Error Log…", menu)
        log_action.triggered.connect(self.error_log_requested.emit)
        menu.addAction(log_action)

        quit_action = QAction("Quit", menu)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self._on_quit)
        menu.addAction(quit_action)

    def _add_label(self) -> QAction:
        """Add a disabled text entry used as a slider header."""
        action = QAction("", self._menu)
        action.setEnabled(False)
        self._menu.addAction(action)
        self._control_actions.append(action)
        return action

    def _add_slider(self, minimum: int, maximum: int) -> ValueSlider:
        """Add an embedded slider via QWidgetAction."""
        slider = ValueSlider(minimum, maximum)
        widget_action = QWidgetAction(self._menu)
        widget_action.setDefaultWidget(slider)
        self._menu.addAction(widget_action)
        self._control_actions.append(widget_action)
        return slider

    def _add_separator(self) -> None:
        self._control_actions.append(self._menu.addSeparator())

    def _set_controls_visible(self, visible: bool) -> None:
        """Show controls once a status is known, otherwise the waiting entry."""
        self._waiting_action.setVisible(not visible)
        for action in self._control_actions:
            action.setVisible(visible)

    def render(self, status: DeviceStatus) -> None:
        """Update every control from a status snapshot without emitting signals.

        Args:
            status: The status to display.
        """
        self._volume_label.setText(f"Volume: {status.display_volume}")
        self._volume_slider.set_range(0, status.max_volume)
        self._volume_slider.set_value(status.volume)

        self._bass_label.setText(f"Bass Vol: {status.subwoofer_volume}")
        self._bass_slider.set_value(status.subwoofer_volume)

        tone = status.tone_control
        self._tone_label.setText(f"Bass: {tone.bass} / Treble: {tone.treble}")
        self._tone_bass_slider.set_value(tone.bass)
        self._tone_treble_slider.set_value(tone.treble)

        self._dialogue_label.setText(f"Dial: {status.dialogue_level}")
        self._dialogue_slider.set_value(status.dialogue_level)

        self._sync_toggles()
        self._set_controls_visible(True)

    def _sync_toggles(self, *_args: object) -> None:
        """Set toggle check marks from the state store."""
        for toggle, action in self._toggle_actions.items():
            action.setChecked(self._state.toggle_state(toggle))

    def _on_toggle_triggered(self, toggle: Toggle) -> None:
        """Request the opposite of the currently displayed toggle state."""
        new_state = not self._state.toggle_state(toggle)
        logger.debug("Toggle %s -> %s", toggle.name, new_state)
        self.toggle_requested.emit(toggle, new_state)
        # Check mark follows the store, which the handler may have updated
        self._sync_toggles()

    def _on_tone_changed(self, _value: int) -> None:
        """Emit both tone values whenever either slider moves."""
        self.tone_changed.emit(self._tone_bass_slider.value, self._tone_treble_slider.value)

    def _on_about_to_show(self) -> None:
        """Re-fetch status each time the menu opens."""
        if self._refresh_on_open:
            self.refresh_requested.emit()

    def _build_status_icon(self) -> QIcon:
        """Build a tray icon with a reachability dot overlay.

        Returns:
            QIcon with a note glyph and a green (reachable) or red dot.
        """
        size = sizing.tray_icon
        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.GlobalColor.transparent)

        p = theme_manager.palette
        painter = QPainter(pixmap)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)

            font = QFont()
            font.setPixelSize(size - 12)
            painter.setFont(font)
            painter.setPen(QColor(p.text))
            painter.drawText(QRect(0, 0, size, size), Qt.AlignmentFlag.AlignCenter, _ICON_GLYPH)

            dot_radius = 8
            dot_x = size - dot_radius * 2 - 2
            dot_y = size - dot_radius * 2 - 2
            color = QColor(p.success) if self._state.is_reachable else QColor(p.error)

            painter.setPen(QPen(QColor(p.background), 2))
            painter.setBrush(QBrush(color))
            painter.drawEllipse(dot_x, dot_y, dot_radius * 2, dot_radius * 2)
        finally:
            painter.end()

        return QIcon(pixmap)

    def _update_tooltip(self) -> None:
        state = "Connected" if self._state.is_reachable else "Unreachable"
        where = f" — {self._host}" if self._host else ""
        self._tray.setToolTip(f"{_APP_NAME}{where} — {state}")

    def _on_connection_changed(self, _reachable: bool) -> None:
        """Update icon and tooltip when reachability changes."""
        self._tray.setIcon(self._build_status_icon())
        self._update_tooltip()

    @property
    def tooltip(self) -> str:
        """Return the tray tooltip text."""
        return self._tray.toolTip()

    def cleanup(self) -> None:
        """Clean up resources before quitting.

        Disconnects state signals to prevent callbacks during destruction.
        Safe to call more than once; Quit runs it before the entry point does.
        """
        for signal, slot in (
            (self._state.status_changed, self.render),
            (self._state.toggles_changed, self._sync_toggles),
            (self._state.connection_changed, self._on_connection_changed),
        ):
            with contextlib.suppress(RuntimeError):
                signal.disconnect(slot)
        self._tray.hide()

    def _on_quit(self) -> None:
        """Quit the application."""
        self.cleanup()
        app = QApplication.instance()
        if app:
            app.quit()
