"""Tests for the error log window."""

from datetime import datetime

from pytestqt.qtbot import QtBot

from yamactrl.core.reporting import ErrorSink
from yamactrl.ui.error_log import ErrorLogWindow, format_entry

FIXED = datetime(2024, 3, 1, 21, 5, 9)


def _window(qtbot: QtBot) -> ErrorLogWindow:
    window = ErrorLogWindow(clock=lambda: FIXED)
    qtbot.addWidget(window)
    return window


class TestFormatEntry:
    """Test entry formatting."""

    def test_format(self) -> None:
        """Test timestamp, message and context layout."""
        assert format_entry("Connection refused", "Menu refresh", FIXED) == (
            "2024-03-01 21:05:09: Connection refused\nContext: Menu refresh\n\n"
        )


class TestErrorLogWindow:
    """Test ErrorLogWindow."""

    def test_initially_empty(self, qtbot: QtBot) -> None:
        """Test the window starts hidden and empty."""
        window = _window(qtbot)
        assert window.text == ""
        assert window.entry_count == 0
        assert not window.isVisible()

    def test_report_appends_and_shows(self, qtbot: QtBot) -> None:
        """Test a report appends an entry and shows the window."""
        window = _window(qtbot)

        window.report("Connection refused", "Failed to set volume")

        assert window.entry_count == 1
        assert window.text.startswith("2024-03-01 21:05:09: Connection refused")
        assert "Context: Failed to set volume" in window.text
        assert window.isVisible()

    def test_entries_in_order(self, qtbot: QtBot) -> None:
        """Test entries are appended after earlier ones."""
        window = _window(qtbot)
        window.report("first", "a")
        window.report("second", "b")

        assert window.entry_count == 2
        assert window.text.index("first") < window.text.index("second")

    def test_clear(self, qtbot: QtBot) -> None:
        """Test clear removes all entries."""
        window = _window(qtbot)
        window.report("boom", "ctx")
        window.clear()
        assert window.text == ""
        assert window.entry_count == 0

    def test_is_error_sink(self, qtbot: QtBot) -> None:
        """Test the window can be used as an ErrorSink."""
        assert isinstance(_window(qtbot), ErrorSink)
