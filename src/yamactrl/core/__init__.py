"""Core business logic layer.

This module contains the core application logic that bridges the
async device client with the Qt UI layer.

Classes:
    StateStore: Central state store with Qt signals.
    DeviceWorker: QThread worker for the async client.
    ConfigManager: QSettings wrapper for configuration.
    Controller: Bridges menu signals to device commands.
    ErrorSink: Protocol for error reporting sinks.
"""

from yamactrl.core.config import ConfigManager
from yamactrl.core.controller import Controller
from yamactrl.core.reporting import CompositeErrorSink, ErrorSink, LoggingErrorSink
from yamactrl.core.state import StateStore
from yamactrl.core.worker import DeviceWorker

__all__ = [
    "CompositeErrorSink",
    "ConfigManager",
    "Controller",
    "DeviceWorker",
    "ErrorSink",
    "LoggingErrorSink",
    "StateStore",
]
