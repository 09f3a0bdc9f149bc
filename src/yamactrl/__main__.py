"""Main entry point for the YamaCTRL application."""

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from yamactrl.core.config import ENV_HOST, ConfigManager
from yamactrl.core.controller import Controller
from yamactrl.core.reporting import CompositeErrorSink, LoggingErrorSink
from yamactrl.core.state import StateStore
from yamactrl.core.worker import DeviceWorker
from yamactrl.ui.error_log import ErrorLogWindow
from yamactrl.ui.status_menu import StatusMenuManager
from yamactrl.ui.theme import theme_manager

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="yamactrl",
        description="YamaCTRL: menu bar control for Yamaha receivers",
    )
    parser.add_argument(
        "host", nargs="?", default=None, help="receiver hostname or IP",
    )
    parser.add_argument(
        "--host", dest="host_flag", default=None, help="receiver hostname or IP",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="HTTP timeout in seconds (default: 5)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="enable debug logging",
    )
    return parser


def configure_logging(debug: bool) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Run the YamaCTRL application.

    Returns:
        Exit code (0 for success).
    """
    # Set app metadata before creating QApplication (required for macOS)
    QApplication.setApplicationName("YamaCTRL")
    QApplication.setApplicationDisplayName("YamaCTRL")
    QApplication.setOrganizationName("YamaCTRL")
    QApplication.setOrganizationDomain("yamactrl.local")

    app = QApplication(sys.argv)
    # Tray-only app: closing the error log must not quit
    app.setQuitOnLastWindowClosed(False)

    parsed = build_parser().parse_args(app.arguments()[1:])
    configure_logging(parsed.debug)

    config = ConfigManager()
    host = config.resolve_host(parsed.host_flag or parsed.host)
    if not host:
        QMessageBox.critical(
            None,
            "No Receiver Configured",
            "No receiver address is configured.\n\n"
            "Please specify the receiver address:\n"
            f"  yamactrl <host>\n\nor set {ENV_HOST}.",
        )
        return 1
    timeout = config.resolve_timeout(parsed.timeout)
    logger.info("Controlling receiver at %s (timeout %.1fs)", host, timeout)

    theme_manager.apply_theme()
    theme_manager.connect_system_theme_changes()

    # Create core components
    state_store = StateStore()
    worker = DeviceWorker(host, timeout)
    error_log = ErrorLogWindow()
    errors = CompositeErrorSink([LoggingErrorSink(), error_log])

    tray = StatusMenuManager(state_store, host=host, refresh_on_open=config.get_refresh_on_open())

    controller = Controller(worker, state_store, errors)
    controller.connect_worker()
    controller.connect_menu(tray)
    tray.error_log_requested.connect(error_log.show_log)

    if not tray.available:
        logger.warning("No system tray available; showing the error log window instead")
        error_log.show_log()
    tray.show()

    # Start worker thread (fetches the initial status)
    worker.start()

    exit_code = app.exec()

    # Cleanup
    tray.cleanup()
    worker.stop()
    worker.wait()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
