"""Controller - bridges menu signals, the device worker and the state store.

The Controller lives on the UI thread. Worker signals connected to its
slots are therefore queued onto the UI thread by Qt before they touch the
StateStore or the error sink.
"""

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, Slot

from yamactrl.core.reporting import ErrorSink
from yamactrl.core.state import StateStore
from yamactrl.core.worker import DeviceWorker
from yamactrl.models.status import DeviceStatus, Toggle

if TYPE_CHECKING:
    from yamactrl.ui.status_menu import StatusMenuManager

logger = logging.getLogger(__name__)

_TOGGLES_BY_ENDPOINT = {toggle.endpoint: toggle for toggle in Toggle}


class Controller(QObject):
    """Controller connecting menu signals to device commands.

    Example:
        controller = Controller(worker, state_store, error_sink)
        controller.connect_worker()
        controller.connect_menu(tray)

        # user flips a toggle -> StatusMenuManager.toggle_requested
        # -> Controller.on_toggle_requested
        # -> StateStore.apply_optimistic_toggle (optimistic)
        # -> DeviceWorker.set_toggle
        # on failure: Controller.on_command_failed
        # -> StateStore.revert_toggle + DeviceWorker.request_status
    """

    def __init__(self, worker: DeviceWorker, state_store: StateStore, errors: ErrorSink) -> None:
        """Initialize the controller.

        Args:
            worker: The background device worker.
            state_store: The state store for status and toggle state.
            errors: Sink receiving every failure report.
        """
        super().__init__()
        self._worker = worker
        self._state = state_store
        self._errors = errors

    def connect_worker(self) -> None:
        """Route worker results to this controller's slots."""
        self._worker.status_received.connect(self.on_status_received)
        self._worker.status_failed.connect(self.on_status_failed)
        self._worker.command_succeeded.connect(self.on_command_succeeded)
        self._worker.command_failed.connect(self.on_command_failed)
        self._worker.error_occurred.connect(self.on_error)

    def connect_menu(self, menu: "StatusMenuManager") -> None:
        """Route menu interactions to this controller's slots."""
        menu.volume_changed.connect(self.on_volume_changed)
        menu.bass_changed.connect(self.on_bass_changed)
        menu.tone_changed.connect(self.on_tone_changed)
        menu.dialogue_level_changed.connect(self.on_dialogue_level_changed)
        menu.toggle_requested.connect(self.on_toggle_requested)
        menu.refresh_requested.connect(self.on_refresh_requested)

    # Worker results

    @Slot(object)
    def on_status_received(self, status: object) -> None:
        """Store a freshly fetched status."""
        if not isinstance(status, DeviceStatus):
            logger.warning("Ignoring unexpected status payload: %r", status)
            return
        logger.debug("Status received: %s", status)
        self._state.update_from_status(status)

    @Slot(str)
    def on_status_failed(self, message: str) -> None:
        """Mark the device unreachable, keeping the last rendered status."""
        logger.debug("Status fetch failed: %s", message)
        self._state.set_reachable(False)

    @Slot(str, object)
    def on_command_succeeded(self, endpoint: str, params: object) -> None:
        """Log a completed command and re-sync after a toggle.

        A fetch already in flight when the toggle was sent can still carry
        the old state and clear the optimistic value, so the display is
        confirmed with a fetch issued after the command.
        """
        logger.info("%s %s", endpoint, params)
        if endpoint in _TOGGLES_BY_ENDPOINT:
            self._worker.request_status("Re-sync after toggle")

    @Slot(str, object, str)
    def on_command_failed(self, endpoint: str, params: object, message: str) -> None:
        """Undo the optimistic toggle value and re-sync from the device.

        Args:
            endpoint: The endpoint that failed.
            params: The parameters that were sent.
            message: Error description.
        """
        logger.debug("%s %s failed: %s", endpoint, params, message)
        toggle = _TOGGLES_BY_ENDPOINT.get(endpoint)
        if toggle is None:
            return
        self._state.revert_toggle(toggle)
        self._worker.request_status("Re-sync after failed toggle")

    @Slot(str, str)
    def on_error(self, message: str, context: str) -> None:
        """Forward a failure report to the error sink."""
        self._errors.report(message, context)

    # Menu interactions

    @Slot(int)
    def on_volume_changed(self, volume: int) -> None:
        """Send a new master volume."""
        self._worker.set_volume(volume)

    @Slot(int)
    def on_bass_changed(self, volume: int) -> None:
        """Send a new subwoofer volume."""
        self._worker.set_bass(volume)

    @Slot(int, int)
    def on_tone_changed(self, bass: int, treble: int) -> None:
        """Send new bass and treble levels."""
        self._worker.set_tone_control(bass, treble)

    @Slot(int)
    def on_dialogue_level_changed(self, level: int) -> None:
        """Send a new dialogue level."""
        self._worker.set_dialogue_level(level)

    @Slot(object, bool)
    def on_toggle_requested(self, toggle: object, state: bool) -> None:
        """Show the toggle in its new state right away, then send it."""
        if not isinstance(toggle, Toggle):
            logger.warning("Ignoring unknown toggle: %r", toggle)
            return
        self._state.apply_optimistic_toggle(toggle, state)
        self._worker.set_toggle(toggle, state)

    @Slot()
    def on_refresh_requested(self) -> None:
        """Fetch a fresh status."""
        self._worker.request_status("Menu refresh")
