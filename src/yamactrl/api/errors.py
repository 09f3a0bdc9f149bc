"""Errors raised by the Yamaha Extended Control client."""


class YamahaError(Exception):
    """Base class for all device client errors."""


class InvalidURLError(YamahaError):
    """The endpoint or parameters cannot form a valid request URL."""


class NetworkError(YamahaError):
    """Transport-level failure talking to the device."""


class EmptyResponseError(YamahaError):
    """The device answered with an empty body."""


class DecodeError(YamahaError):
    """The response body is not valid status JSON.

    The underlying parse failure is chained as ``__cause__``.
    """
