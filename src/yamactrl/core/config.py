"""Configuration manager reading QSettings with CLI and environment overrides.

The application never writes settings. Values can be provided externally,
for example on macOS with
``defaults write com.YamaCTRL.YamaCTRL device.host 192.168.1.86``.
"""

import logging
import os
from collections.abc import Mapping

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

# Settings keys
_KEY_HOST = "device/host"
_KEY_TIMEOUT = "device/timeout"
_KEY_REFRESH_ON_OPEN = "ui/refresh_on_open"

# Environment override for the device host
ENV_HOST = "YAMACTRL_HOST"

_DEFAULT_TIMEOUT = 5.0
_MIN_TIMEOUT = 1.0
_MAX_TIMEOUT = 30.0


class ConfigManager:
    """Read-only wrapper around QSettings for type-safe config access.

    QSettings reads config from platform-specific locations:
    - Windows: HKEY_CURRENT_USER\\Software\\YamaCTRL\\YamaCTRL
    - macOS: ~/Library/Preferences/com.YamaCTRL.YamaCTRL.plist
    - Linux: ~/.config/YamaCTRL/YamaCTRL.conf

    Example:
        config = ConfigManager()
        host = config.resolve_host(args.host)
    """

    def __init__(
        self,
        organization: str = "YamaCTRL",
        application: str = "YamaCTRL",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
            environ: Environment mapping (defaults to ``os.environ``).
        """
        self._settings = QSettings(organization, application)
        self._environ = os.environ if environ is None else environ

    @property
    def settings(self) -> QSettings:
        """Return the underlying QSettings instance."""
        return self._settings

    def get_host(self) -> str:
        """Return the configured device host.

        Returns:
            Host string, or empty string if unset.
        """
        value = self._settings.value(_KEY_HOST, "", str)
        return str(value).strip() if value else ""

    def get_timeout(self) -> float:
        """Return the HTTP timeout in seconds.

        Returns:
            Timeout clamped to 1-30 seconds (default 5).
        """
        raw = self._settings.value(_KEY_TIMEOUT, _DEFAULT_TIMEOUT)
        try:
            value = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid timeout setting: %r", raw)
            return _DEFAULT_TIMEOUT
        return max(_MIN_TIMEOUT, min(_MAX_TIMEOUT, value))

    def get_refresh_on_open(self) -> bool:
        """Return whether the status is re-fetched every time the menu opens."""
        return bool(self._settings.value(_KEY_REFRESH_ON_OPEN, True, bool))

    def resolve_host(self, cli_host: str | None = None) -> str | None:
        """Pick the device host from CLI, environment, then settings.

        Args:
            cli_host: Host given on the command line, if any.

        Returns:
            The host, or None if nothing is configured.
        """
        if cli_host and cli_host.strip():
            return cli_host.strip()

        env_host = self._environ.get(ENV_HOST, "").strip()
        if env_host:
            logger.debug("Using device host from %s", ENV_HOST)
            return env_host

        return self.get_host() or None

    def resolve_timeout(self, cli_timeout: float | None = None) -> float:
        """Pick the HTTP timeout from CLI, then settings."""
        if cli_timeout is not None:
            return max(_MIN_TIMEOUT, min(_MAX_TIMEOUT, cli_timeout))
        return self.get_timeout()
