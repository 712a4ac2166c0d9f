from __future__ import annotations


class RttError(RuntimeError):
    """Raised when a RealTimeTrains request cannot be completed."""


class TransportError(RttError):
    """The request failed on the network or the API answered with an error status."""


class AuthHeaderError(RttError):
    """The configured credentials cannot be sent as a Basic auth header."""


class DecodeError(RttError):
    """The response body was not JSON of the expected shape."""
