"""Yamaha Extended Control endpoints and URL construction.

The receiver exposes plain HTTP GET endpoints under a fixed path. Commands
carry their arguments as query items; no request body is ever sent.
"""

import re
import urllib.parse
from collections.abc import Mapping

from yamactrl.api.errors import InvalidURLError

API_PATH = "/YamahaExtendedControl/v1/main"

STATUS_ENDPOINT = "getStatus"
VOLUME_ENDPOINT = "setVolume"
SUBWOOFER_ENDPOINT = "setSubwooferVolume"
TONE_CONTROL_ENDPOINT = "setToneControl"
DIALOGUE_LEVEL_ENDPOINT = "setDialogueLevel"

TONE_MODE_MANUAL = "manual"

# One path segment, no reserved characters
_ENDPOINT_RE = re.compile(r"^[A-Za-z0-9_.~-]+$")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def bool_param(state: bool) -> str:
    """Format a boolean the way the device expects it."""
    return "true" if state else "false"


def _validate_host(host: str) -> None:
    if not host or any(ch.isspace() for ch in host):
        raise InvalidURLError(f"Invalid device host: {host!r}")
    try:
        parts = urllib.parse.urlsplit(f"http://{host}")
        _ = parts.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidURLError(f"Invalid device host: {host!r}: {e}") from e
    if not parts.hostname or parts.username or parts.path or parts.query or parts.fragment:
        raise InvalidURLError(f"Invalid device host: {host!r}")


def build_url(host: str, endpoint: str, params: Mapping[str, str] | None = None) -> str:
    """Build the request URL for an endpoint.

    Query items keep the mapping's insertion order and are percent-encoded.

    Args:
        host: Device hostname or IP (optionally with ``:port``).
        endpoint: Endpoint path segment, e.g. ``setVolume``.
        params: Query parameters.

    Returns:
        The absolute URL.

    Raises:
        InvalidURLError: If the host, endpoint, or parameters cannot form a URL.
    """
    _validate_host(host)
    if not _ENDPOINT_RE.match(endpoint):
        raise InvalidURLError(f"Invalid endpoint: {endpoint!r}")

    url = f"http://{host}{API_PATH}/{endpoint}"
    if not params:
        return url

    items: list[tuple[str, str]] = []
    for name, value in params.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidURLError(f"Parameter {name!r} must map a string to a string")
        if not name or _CONTROL_CHARS_RE.search(name) or _CONTROL_CHARS_RE.search(value):
            raise InvalidURLError(f"Invalid parameter {name!r}={value!r}")
        items.append((name, value))

    query = urllib.parse.urlencode(items, quote_via=urllib.parse.quote, safe="")
    return f"{url}?{query}"
