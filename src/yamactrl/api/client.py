"""Yamaha Extended Control HTTP client.

The receiver speaks plain HTTP GET with JSON responses. Requests are made
with urllib in the event loop's default executor so callers can await them
from asyncio code without blocking the loop.
"""

import asyncio
import http.client
import json
import logging
import urllib.error
import urllib.request
from collections.abc import Mapping

from yamactrl.api.errors import DecodeError, EmptyResponseError, InvalidURLError, NetworkError
from yamactrl.api.protocol import (
    DIALOGUE_LEVEL_ENDPOINT,
    STATUS_ENDPOINT,
    SUBWOOFER_ENDPOINT,
    TONE_CONTROL_ENDPOINT,
    TONE_MODE_MANUAL,
    VOLUME_ENDPOINT,
    bool_param,
    build_url,
)
from yamactrl.models.status import DeviceStatus, Toggle

logger = logging.getLogger(__name__)

# User agent sent with every request
USER_AGENT = "YamaCTRL/1.0"


class YamahaClient:
    """Async client for the receiver's main zone.

    Each call is one independent GET request. Nothing is retried; the
    caller decides whether to poll again.

    Example:
        client = YamahaClient("192.168.1.86")
        status = await client.fetch_status()
        await client.set_volume(status.volume + 1)
    """

    _DEFAULT_TIMEOUT: float = 5.0

    def __init__(self, host: str, timeout: float = _DEFAULT_TIMEOUT) -> None:
        """Initialize the client.

        Args:
            host: Device hostname or IP address.
            timeout: Per-request timeout in seconds.
        """
        self._host = host
        self._timeout = timeout

    @property
    def host(self) -> str:
        """Return device host."""
        return self._host

    @property
    def timeout(self) -> float:
        """Return request timeout in seconds."""
        return self._timeout

    @property
    def status_url(self) -> str:
        """Return the status endpoint URL.

        Raises:
            InvalidURLError: If the configured host is not usable in a URL.
        """
        return build_url(self._host, STATUS_ENDPOINT)

    def command_url(self, endpoint: str, params: Mapping[str, str]) -> str:
        """Return the URL a command would be sent to.

        Raises:
            InvalidURLError: If the endpoint or parameters cannot form a URL.
        """
        return build_url(self._host, endpoint, params)

    async def fetch_status(self) -> DeviceStatus:
        """Fetch and decode the current device status.

        Returns:
            A fresh DeviceStatus snapshot.

        Raises:
            InvalidURLError: If the host cannot form a URL.
            NetworkError: On transport failure.
            EmptyResponseError: If the device returned no body.
            DecodeError: If the body is not status JSON.
        """
        url = self.status_url
        body = await self._get(url)
        if not body:
            raise EmptyResponseError(f"Empty response from {url}")
        return decode_status(body)

    async def send_command(self, endpoint: str, params: Mapping[str, str]) -> None:
        """Send a command to a control endpoint.

        Any completed HTTP exchange counts as success; the device response
        body is not inspected.

        Args:
            endpoint: Endpoint name, e.g. ``setVolume``.
            params: Query parameters.

        Raises:
            InvalidURLError: If the endpoint or parameters cannot form a URL.
            NetworkError: On transport failure.
        """
        url = self.command_url(endpoint, params)
        await self._get(url)

    # Specific control helpers

    async def set_volume(self, volume: int) -> None:
        """Set master volume (setVolume)."""
        await self.send_command(VOLUME_ENDPOINT, volume_params(volume))

    async def set_bass(self, volume: int) -> None:
        """Set subwoofer volume offset (setSubwooferVolume)."""
        await self.send_command(SUBWOOFER_ENDPOINT, volume_params(volume))

    async def set_tone_control(self, bass: int, treble: int) -> None:
        """Set manual tone control (setToneControl).

        Args:
            bass: Bass level in [-12, 12].
            treble: Treble level in [-12, 12].
        """
        await self.send_command(TONE_CONTROL_ENDPOINT, tone_control_params(bass, treble))

    async def set_dialogue_level(self, level: int) -> None:
        """Set dialogue lift level (setDialogueLevel)."""
        await self.send_command(DIALOGUE_LEVEL_ENDPOINT, dialogue_level_params(level))

    async def set_toggle(self, toggle: Toggle, state: bool) -> None:
        """Enable or disable a toggle (setPureDirect, setEnhancer, ...)."""
        await self.send_command(toggle.endpoint, toggle_params(state))

    async def _get(self, url: str) -> bytes:
        """Run a blocking GET in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._fetch, url)

    def _fetch(self, url: str) -> bytes:
        """Perform a GET request (blocking).

        HTTP error statuses still carry a completed response, so their body
        is returned like any other.

        Args:
            url: URL to fetch.

        Returns:
            Response body bytes.

        Raises:
            InvalidURLError: If urllib rejects the URL.
            NetworkError: On transport failure.
        """
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT}, method="GET")
        logger.debug("GET %s", url)
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                body = response.read()
                logger.debug("GET %s -> %s (%d bytes)", url, response.status, len(body))
                return body
        except urllib.error.HTTPError as e:
            logger.warning("GET %s returned HTTP %d", url, e.code)
            return self._read_error_body(url, e)
        except ValueError as e:
            raise InvalidURLError(f"Invalid URL {url}: {e}") from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            reason = e.reason if isinstance(e, urllib.error.URLError) else e
            raise NetworkError(f"Request to {url} failed: {reason}") from e

    @staticmethod
    def _read_error_body(url: str, error: urllib.error.HTTPError) -> bytes:
        """Read the body of an HTTP error response.

        Raises:
            NetworkError: If the body cannot be read completely.
        """
        try:
            return error.read()
        except (http.client.HTTPException, OSError) as e:
            raise NetworkError(f"Reading error response from {url} failed: {e}") from e


def decode_status(body: bytes) -> DeviceStatus:
    """Decode a ``getStatus`` response body.

    Raises:
        DecodeError: If the body is not a JSON object matching the schema.
    """
    try:
        data = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Invalid status JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Status JSON must be an object, got {type(data).__name__}")

    try:
        return DeviceStatus.from_dict(data)
    except KeyError as e:
        raise DecodeError(f"Missing status field: {e}") from e
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Unexpected status field: {e}") from e


def volume_params(volume: int) -> dict[str, str]:
    """Build parameters for volume-style endpoints."""
    return {"volume": str(int(volume))}


def tone_control_params(bass: int, treble: int) -> dict[str, str]:
    """Build parameters for setToneControl."""
    return {"mode": TONE_MODE_MANUAL, "bass": str(int(bass)), "treble": str(int(treble))}


def dialogue_level_params(level: int) -> dict[str, str]:
    """Build parameters for setDialogueLevel."""
    return {"value": str(int(level))}


def toggle_params(state: bool) -> dict[str, str]:
    """Build parameters for toggle endpoints."""
    return {"enable": bool_param(state)}
