"""Tests for StateStore."""

from dataclasses import replace

from pytestqt.qtbot import QtBot

from yamactrl.core.state import StateStore
from yamactrl.models.status import DeviceStatus, Toggle


class TestStateStoreInitial:
    """Test the empty store."""

    def test_empty(self, qtbot: QtBot) -> None:
        """Test a new store has no status and is unreachable."""
        state = StateStore()
        assert state.status is None
        assert not state.has_status
        assert not state.is_reachable

    def test_toggles_default_off(self, qtbot: QtBot) -> None:
        """Test toggles read as off before the first fetch."""
        state = StateStore()
        assert all(value is False for value in state.toggles.values())


class TestStateStoreUpdate:
    """Test applying fetched status."""

    def test_update_emits_signals(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test update emits status, toggle and connection signals."""
        state = StateStore()
        statuses: list[object] = []
        toggles: list[object] = []
        connection: list[bool] = []
        state.status_changed.connect(statuses.append)
        state.toggles_changed.connect(toggles.append)
        state.connection_changed.connect(connection.append)

        state.update_from_status(device_status)

        assert state.status is device_status
        assert state.is_reachable
        assert statuses == [device_status]
        assert toggles == [device_status.toggles]
        assert connection == [True]

    def test_unchanged_toggles_not_emitted(
        self, qtbot: QtBot, device_status: DeviceStatus
    ) -> None:
        """Test toggles_changed only fires when a toggle differs."""
        state = StateStore()
        state.update_from_status(device_status)
        toggles: list[object] = []
        state.toggles_changed.connect(toggles.append)

        state.update_from_status(replace(device_status, volume=30))

        assert toggles == []

    def test_toggle_state_follows_fetch(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test toggle state reads from the latest status."""
        state = StateStore()
        state.update_from_status(device_status)
        assert state.toggle_state(Toggle.ENHANCER) is True

        state.update_from_status(replace(device_status, enhancer=False))
        assert state.toggle_state(Toggle.ENHANCER) is False


class TestStateStoreReachability:
    """Test reachability tracking."""

    def test_set_reachable_emits_once(self, qtbot: QtBot) -> None:
        """Test connection_changed only fires on change."""
        state = StateStore()
        events: list[bool] = []
        state.connection_changed.connect(events.append)

        state.set_reachable(True)
        state.set_reachable(True)
        state.set_reachable(False)

        assert events == [True, False]

    def test_unreachable_keeps_status(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test a failed fetch keeps the last status for display."""
        state = StateStore()
        state.update_from_status(device_status)
        state.set_reachable(False)
        assert state.status is device_status


class TestStateStoreOptimisticToggles:
    """Test optimistic toggle values."""

    def test_apply_overrides_fetched_value(
        self, qtbot: QtBot, device_status: DeviceStatus
    ) -> None:
        """Test an optimistic value wins until resolved."""
        state = StateStore()
        state.update_from_status(device_status)
        events: list[object] = []
        state.toggles_changed.connect(events.append)

        state.apply_optimistic_toggle(Toggle.ENHANCER, False)

        assert state.toggle_state(Toggle.ENHANCER) is False
        assert state.is_pending(Toggle.ENHANCER)
        assert len(events) == 1

    def test_revert_restores_fetched_value(
        self, qtbot: QtBot, device_status: DeviceStatus
    ) -> None:
        """Test reverting falls back to the last fetched state."""
        state = StateStore()
        state.update_from_status(device_status)
        state.apply_optimistic_toggle(Toggle.ENHANCER, False)

        state.revert_toggle(Toggle.ENHANCER)

        assert state.toggle_state(Toggle.ENHANCER) is True
        assert not state.is_pending(Toggle.ENHANCER)

    def test_revert_without_override_is_silent(self, qtbot: QtBot) -> None:
        """Test reverting a toggle with no pending value emits nothing."""
        state = StateStore()
        events: list[object] = []
        state.toggles_changed.connect(events.append)

        state.revert_toggle(Toggle.PURE_DIRECT)

        assert events == []

    def test_fetch_clears_overrides(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test a fresh fetch replaces optimistic values."""
        state = StateStore()
        state.apply_optimistic_toggle(Toggle.ADAPTIVE_DRC, False)

        state.update_from_status(device_status)

        assert not state.is_pending(Toggle.ADAPTIVE_DRC)
        assert state.toggle_state(Toggle.ADAPTIVE_DRC) is True

    def test_clear(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test clear forgets status and overrides."""
        state = StateStore()
        state.update_from_status(device_status)
        state.apply_optimistic_toggle(Toggle.ENHANCER, False)

        state.clear()

        assert state.status is None
        assert not state.is_reachable
        assert not state.is_pending(Toggle.ENHANCER)
