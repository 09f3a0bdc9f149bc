"""Error reporting sinks.

Components that surface failures to the user receive an ErrorSink at
construction time instead of reaching for a shared global log window.
"""

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ErrorSink(Protocol):
    """Anything that accepts ``(message, context)`` error reports."""

    def report(self, message: str, context: str) -> None:
        """Record an error.

        Args:
            message: What went wrong.
            context: The operation that was being attempted.
        """
        ...


class LoggingErrorSink:
    """ErrorSink that writes reports to a logger at ERROR level."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def report(self, message: str, context: str) -> None:
        """Log the report."""
        self._log.error("%s (context: %s)", message, context)


class CompositeErrorSink:
    """ErrorSink that forwards every report to several sinks in order.

    Example:
        sink = CompositeErrorSink([LoggingErrorSink(), error_log_window])
        sink.report("Connection refused", "Menu refresh")
    """

    def __init__(self, sinks: Iterable[ErrorSink]) -> None:
        self._sinks = list(sinks)

    @property
    def sinks(self) -> list[ErrorSink]:
        """Return the wrapped sinks."""
        return list(self._sinks)

    def add(self, sink: ErrorSink) -> None:
        """Append another sink."""
        self._sinks.append(sink)

    def report(self, message: str, context: str) -> None:
        """Forward the report to every sink."""
        for sink in self._sinks:
            sink.report(message, context)
