"""Exception types raised by pyhttpget.

A non-2xx HTTP status is deliberately not represented here: text operations
return an empty string and stream operations write nothing in that case.
"""

from typing import Any, Optional


class HttpUtilityError(Exception):
    """Base exception for all pyhttpget errors.

    Attributes:
        message: Human-readable error message
        url: URL involved in the failure (if any)
        details: Additional context passed as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


class InvalidConfig(HttpUtilityError):
    """Raised for bad configuration values (e.g. a non-positive connection limit)."""


class InvalidRequest(HttpUtilityError):
    """Raised for a malformed URL or parameters, before any network activity."""


class TransportError(HttpUtilityError):
    """Raised when the request could not be completed at the network level.

    Covers DNS failures, refused connections, proxy errors and timeouts.
    The underlying httpx exception is available as ``__cause__``.
    """


class EncodingError(HttpUtilityError):
    """Raised when the declared or overridden charset is not a known codec.

    Attributes:
        encoding: The codec name that could not be resolved
    """

    def __init__(self, message: str, url: Optional[str] = None, encoding: Optional[str] = None) -> None:
        super().__init__(message, url, encoding=encoding)
        self.encoding = encoding
