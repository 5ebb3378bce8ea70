"""Exception hierarchy for veezi.

All exceptions inherit from :class:`VeeziError`.  Client methods never
return error values; every recoverable failure (bad configuration, network
failure, unexpected response body) is raised as one of the types below so
callers can catch as broadly or as narrowly as they need.

Subclass hierarchy::

    VeeziError
    +-- ConfigurationError      (invalid builder input, raised by build())
    +-- TransportError          (network failure or non-2xx response)
    |   +-- ConnectionError_    (timeout, DNS resolution, connection refused)
    |   +-- AuthError           (HTTP 401 / 403)
    |   +-- NotFoundError       (HTTP 404)
    |   +-- ServerError         (HTTP 5xx and any other non-2xx status)
    +-- DeserializationError    (body is not JSON or does not match the schema)
    +-- CacheError              (cache lock could not be acquired)
"""

from __future__ import annotations

from typing import Optional


class VeeziError(Exception):
    """Base exception for all veezi errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(VeeziError):
    """Raised when a :class:`~veezi.client.ClientBuilder` holds invalid or missing settings."""


class TransportError(VeeziError):
    """Raised when a request cannot be completed or the API answers with a non-2xx status.

    Args:
        message: Human-readable error description.
        status_code: The HTTP status received, or ``None`` when no response
            arrived at all.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class ConnectionError_(TransportError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """


class AuthError(TransportError):
    """Raised when the API rejects the access token (HTTP 401 or 403)."""


class NotFoundError(TransportError):
    """Raised when the API returns HTTP 404 (resource not found)."""


class ServerError(TransportError):
    """Raised for HTTP 5xx responses and any other unexpected non-2xx status."""


class DeserializationError(VeeziError):
    """Raised when a response body is not JSON or does not match the expected schema.

    Values that fail to deserialize are never written to the response cache.

    Args:
        message: Human-readable error description.
        cause: The underlying :class:`pydantic.ValidationError` or JSON
            decoding error.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class CacheError(VeeziError):
    """Raised when the response cache cannot be accessed (lock contention)."""
