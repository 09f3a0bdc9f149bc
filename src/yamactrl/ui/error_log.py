"""Error log window.

A plain read-only log the user can keep open next to the menu. It pops up
by itself whenever a new error is reported.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QVBoxLayout, QWidget

from yamactrl.ui.theme import theme_manager
from yamactrl.ui.tokens import sizing, typography

logger = logging.getLogger(__name__)


def format_entry(message: str, context: str, when: datetime) -> str:
    """Format one log entry."""
    return f"{when:%Y-%m-%d %H:%M:%S}: {message}\nContext: {context}\n\n"


class ErrorLogWindow(QWidget):
    """Window listing reported errors, usable as an ErrorSink.

    Reports are expected on the UI thread; worker errors arrive there via
    queued signal connections.

    Example:
        log_window = ErrorLogWindow()
        worker.error_occurred.connect(log_window.report)
    """

    def __init__(
        self,
        parent: QWidget | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the window.

        Args:
            parent: Parent widget.
            clock: Time source for entry timestamps.
        """
        super().__init__(parent)
        self._clock = clock
        self._entry_count = 0

        self.setWindowTitle("Error Log")
        self.resize(sizing.log_window_width, sizing.log_window_height)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._text = QPlainTextEdit()
        self._text.setReadOnly(True)
        layout.addWidget(self._text)

        self._apply_style()
        theme_manager.theme_changed.connect(self._apply_style)

    @property
    def entry_count(self) -> int:
        """Return the number of reports received."""
        return self._entry_count

    @property
    def text(self) -> str:
        """Return the full log text."""
        return self._text.toPlainText()

    def report(self, message: str, context: str) -> None:
        """Append an entry and bring the window up if hidden.

        Args:
            message: What went wrong.
            context: The operation that was being attempted.
        """
        self._entry_count += 1
        logger.debug("Error log entry %d: %s", self._entry_count, context)
        self._text.moveCursor(QTextCursor.MoveOperation.End)
        self._text.insertPlainText(format_entry(message, context, self._clock()))
        self._text.moveCursor(QTextCursor.MoveOperation.End)
        self._text.ensureCursorVisible()

        if not self.isVisible():
            self.show_log()

    def show_log(self) -> None:
        """Show and raise the window."""
        self.show()
        self.raise_()
        self.activateWindow()

    def clear(self) -> None:
        """Remove all entries."""
        self._text.clear()
        self._entry_count = 0

    def _apply_style(self) -> None:
        """Apply palette colors to the log view."""
        p = theme_manager.palette
        self._text.setStyleSheet(f"""
            QPlainTextEdit {{
                background-color: {p.surface};
                color: {p.text};
                border: none;
                font-family: {typography.mono_family};
                font-size: {typography.small}pt;
            }}
        """)
