"""Tests for the status menu manager."""

from dataclasses import replace

from pytestqt.qtbot import QtBot

from yamactrl.core.state import StateStore
from yamactrl.models.status import DeviceStatus, Toggle
from yamactrl.ui.status_menu import StatusMenuManager


def _manager(state: StateStore, refresh_on_open: bool = True) -> StatusMenuManager:
    return StatusMenuManager(state, host="192.168.1.86", refresh_on_open=refresh_on_open)


class TestStatusMenuCreation:
    """Test the menu before any status arrives."""

    def test_waiting_state(self, qtbot: QtBot) -> None:
        """Test only the waiting entry is visible before the first fetch."""
        manager = _manager(StateStore())
        texts = [a.text() for a in manager.menu.actions() if a.isVisible() and a.text()]
        assert texts == ["Waiting for device…", "Show Error Log…", "Quit"]
        manager.cleanup()

    def test_tooltip_unreachable(self, qtbot: QtBot) -> None:
        """Test the tooltip names the host and reachability."""
        manager = _manager(StateStore())
        assert "192.168.1.86" in manager.tooltip
        assert manager.tooltip.endswith("Unreachable")
        manager.cleanup()


class TestStatusMenuRender:
    """Test rendering a status."""

    def test_volume_bounded_by_max_volume(
        self, qtbot: QtBot, device_status: DeviceStatus
    ) -> None:
        """Test the volume slider spans 0 to max_volume at the current volume."""
        state = StateStore()
        manager = _manager(state)

        state.update_from_status(device_status)

        slider = manager.volume_slider
        assert (slider.minimum, slider.maximum, slider.value) == (0, 60, 20)
        manager.cleanup()

    def test_sliders_and_labels(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test every slider and label shows the status."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)

        assert manager.bass_slider.value == 4
        assert manager.tone_bass_slider.value == -3
        assert manager.tone_treble_slider.value == 5
        assert manager.dialogue_slider.value == 1
        texts = [a.text() for a in manager.menu.actions() if a.isVisible()]
        assert "Volume: -60.5" in texts
        assert "Bass Vol: 4" in texts
        assert "Bass: -3 / Treble: 5" in texts
        assert "Dial: 1" in texts
        assert "Waiting for device…" not in texts
        manager.cleanup()

    def test_render_does_not_emit(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test rendering never sends values back to the device."""
        state = StateStore()
        manager = _manager(state)
        sent: list[int] = []
        manager.volume_changed.connect(sent.append)
        manager.bass_changed.connect(sent.append)
        manager.dialogue_level_changed.connect(sent.append)

        state.update_from_status(device_status)

        assert sent == []
        manager.cleanup()

    def test_existing_status_rendered(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test a store that already holds a status is rendered on creation."""
        state = StateStore()
        state.update_from_status(device_status)
        manager = _manager(state)
        assert manager.volume_slider.value == 20
        assert manager.tooltip.endswith("Connected")
        manager.cleanup()

    def test_toggle_check_marks(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test check marks mirror the fetched toggles."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)

        assert manager.toggle_action(Toggle.ENHANCER).isChecked()
        assert manager.toggle_action(Toggle.ADAPTIVE_DRC).isChecked()
        assert not manager.toggle_action(Toggle.PURE_DIRECT).isChecked()

        state.update_from_status(replace(device_status, enhancer=False))
        assert not manager.toggle_action(Toggle.ENHANCER).isChecked()
        manager.cleanup()


class TestStatusMenuInteraction:
    """Test user interaction signals."""

    def test_volume_slider_emits(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test moving the volume slider emits volume_changed."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)
        sent: list[int] = []
        manager.volume_changed.connect(sent.append)

        manager.volume_slider._slider.setValue(25)

        assert sent == [25]
        manager.cleanup()

    def test_tone_emits_both_values(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test moving either tone slider emits bass and treble."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)
        sent: list[tuple[int, int]] = []
        manager.tone_changed.connect(lambda bass, treble: sent.append((bass, treble)))

        manager.tone_treble_slider._slider.setValue(7)

        assert sent == [(-3, 7)]
        manager.cleanup()

    def test_toggle_requests_opposite(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test triggering a toggle requests the opposite of its shown state."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)
        requested: list[tuple[object, bool]] = []
        manager.toggle_requested.connect(lambda t, s: requested.append((t, s)))

        manager.toggle_action(Toggle.ENHANCER).trigger()

        assert requested == [(Toggle.ENHANCER, False)]
        # Nothing updated the store, so the check mark stays
        assert manager.toggle_action(Toggle.ENHANCER).isChecked()
        manager.cleanup()

    def test_toggle_follows_optimistic_state(
        self, qtbot: QtBot, device_status: DeviceStatus
    ) -> None:
        """Test the check mark follows an optimistic store update."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)
        manager.toggle_requested.connect(state.apply_optimistic_toggle)

        manager.toggle_action(Toggle.PURE_DIRECT).trigger()

        assert manager.toggle_action(Toggle.PURE_DIRECT).isChecked()
        manager.cleanup()

    def test_refresh_on_open(self, qtbot: QtBot) -> None:
        """Test opening the menu requests a refresh."""
        manager = _manager(StateStore())
        with qtbot.waitSignal(manager.refresh_requested, timeout=1000):
            manager.menu.aboutToShow.emit()
        manager.cleanup()

    def test_no_refresh_on_open_when_disabled(self, qtbot: QtBot) -> None:
        """Test refresh on open can be disabled."""
        manager = _manager(StateStore(), refresh_on_open=False)
        requested: list[bool] = []
        manager.refresh_requested.connect(lambda: requested.append(True))

        manager.menu.aboutToShow.emit()

        assert requested == []
        manager.cleanup()

    def test_error_log_action(self, qtbot: QtBot) -> None:
        """Test the error log entry emits error_log_requested."""
        manager = _manager(StateStore())
        action = next(a for a in manager.menu.actions() if a.text() == "Show Error Log…")
        with qtbot.waitSignal(manager.error_log_requested, timeout=1000):
            action.trigger()
        manager.cleanup()

    def test_connection_updates_tooltip(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test reachability changes update the tooltip."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)
        assert manager.tooltip.endswith("Connected")

        state.set_reachable(False)
        assert manager.tooltip.endswith("Unreachable")
        manager.cleanup()


class TestStatusMenuCleanup:
    """Test tearing the menu down."""

    def test_cleanup_twice(self, qtbot: QtBot, device_status: DeviceStatus) -> None:
        """Test a second cleanup is harmless and state changes stay detached."""
        state = StateStore()
        manager = _manager(state)
        state.update_from_status(device_status)

        manager.cleanup()
        manager.cleanup()

        state.set_reachable(False)
        assert manager.tooltip.endswith("Connected")
        state.update_from_status(replace(device_status, volume=30))
        assert manager.volume_slider.value == 20
