"""Central state store with Qt signals for reactive UI updates.

The StateStore holds the last status fetched from the receiver and emits
Qt signals when it changes. UI widgets connect to these signals to update
themselves.

Toggle state is derived from the last successful fetch. A pending toggle
command can overlay an optimistic value, which is dropped again when the
command fails or the next fetch arrives.
"""

import logging

from PySide6.QtCore import QObject, Signal

from yamactrl.models.status import DeviceStatus, Toggle

logger = logging.getLogger(__name__)


class StateStore(QObject):
    """Central state store emitting Qt signals on changes.

    Must only be touched from the UI thread; worker results reach it
    through queued signal connections.

    Example:
        state = StateStore()
        state.status_changed.connect(lambda status: print(status.volume))
        state.update_from_status(status)
    """

    # Device reachability (True after a successful fetch, False after a failed one)
    connection_changed = Signal(bool)

    # Note: Using object for complex types (PySide6 limitation)
    status_changed = Signal(object)  # DeviceStatus
    toggles_changed = Signal(object)  # dict[Toggle, bool]

    def __init__(self) -> None:
        """Initialize the state store with empty state."""
        super().__init__()
        self._status: DeviceStatus | None = None
        self._reachable = False
        self._overrides: dict[Toggle, bool] = {}

    @property
    def status(self) -> DeviceStatus | None:
        """Return the last fetched status, or None before the first fetch."""
        return self._status

    @property
    def has_status(self) -> bool:
        """Return True once a status has been received."""
        return self._status is not None

    @property
    def is_reachable(self) -> bool:
        """Return True if the last status fetch succeeded."""
        return self._reachable

    @property
    def toggles(self) -> dict[Toggle, bool]:
        """Return the displayed state of every toggle."""
        return {toggle: self.toggle_state(toggle) for toggle in Toggle}

    def toggle_state(self, toggle: Toggle) -> bool:
        """Return the displayed state of a toggle.

        An optimistic value wins over the fetched one; without either the
        toggle reads as off.
        """
        if toggle in self._overrides:
            return self._overrides[toggle]
        if self._status is None:
            return False
        return self._status.toggle_state(toggle)

    def is_pending(self, toggle: Toggle) -> bool:
        """Return True if the toggle shows an unconfirmed optimistic value."""
        return toggle in self._overrides

    def update_from_status(self, status: DeviceStatus) -> None:
        """Replace the snapshot with a freshly fetched status.

        Optimistic toggle values are discarded: the fetch is the truth.

        Args:
            status: The new status.
        """
        old_toggles = self.toggles
        self._status = status
        self._overrides.clear()
        self.set_reachable(True)

        self.status_changed.emit(status)
        new_toggles = self.toggles
        if new_toggles != old_toggles:
            self.toggles_changed.emit(new_toggles)

    def set_reachable(self, reachable: bool) -> None:
        """Record whether the device answered the last fetch."""
        if reachable != self._reachable:
            self._reachable = reachable
            logger.debug("Device reachable: %s", reachable)
            self.connection_changed.emit(reachable)

    def apply_optimistic_toggle(self, toggle: Toggle, state: bool) -> None:
        """Show a toggle in its requested state before the device confirms.

        Args:
            toggle: The toggle being changed.
            state: The requested state.
        """
        self._overrides[toggle] = state
        self.toggles_changed.emit(self.toggles)

    def revert_toggle(self, toggle: Toggle) -> None:
        """Drop an optimistic toggle value after its command failed.

        The toggle falls back to the last fetched state.
        """
        if self._overrides.pop(toggle, None) is None:
            return
        logger.debug("Reverted %s to %s", toggle.name, self.toggle_state(toggle))
        self.toggles_changed.emit(self.toggles)

    def clear(self) -> None:
        """Forget all state."""
        self._status = None
        self._overrides.clear()
        self.set_reachable(False)
