"""API client for the Yamaha Extended Control HTTP interface."""

from yamactrl.api.client import YamahaClient, decode_status
from yamactrl.api.errors import (
    DecodeError,
    EmptyResponseError,
    InvalidURLError,
    NetworkError,
    YamahaError,
)

__all__ = [
    "YamahaClient",
    "decode_status",
    "YamahaError",
    "InvalidURLError",
    "NetworkError",
    "EmptyResponseError",
    "DecodeError",
]
