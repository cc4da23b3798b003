"""Structured exceptions for the Mati SDK."""

from __future__ import annotations

from typing import Any, Optional


class MatiError(Exception):
    """Base exception for everything raised by the Mati SDK."""


class ValidationError(MatiError, ValueError):
    """A required argument is missing or malformed. Raised before any request."""


class AuthenticationError(MatiError):
    """The client-credentials exchange failed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            super().__init__(f"[{status_code}] {message}")
        else:
            super().__init__(message)


class TransportError(MatiError):
    """No response reached the client (DNS, refused connection, timeout)."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"{type(cause).__name__}: {cause}")


class ApiError(MatiError):
    """Non-2xx response from a resource endpoint.

    ``body`` is the upstream payload exactly as received: decoded JSON when
    the response was JSON, raw text otherwise.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        body: Any = None,
        request_id: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        self.request_id = request_id
        super().__init__(f"[{status_code}] {message}")


class UnauthorizedError(ApiError):
    """401 Unauthorized — token rejected by the API."""
    pass


class ForbiddenError(ApiError):
    """403 Forbidden — insufficient permissions."""
    pass


class NotFoundError(ApiError):
    """404 Not Found — unknown identity, document, picture or webhook."""
    pass


class UnprocessableEntityError(ApiError):
    """422 Unprocessable Entity — the API rejected the payload."""
    pass


class RateLimitedError(ApiError):
    """429 Too Many Requests."""
    pass


class ServerError(ApiError):
    """500+ — server-side error."""
    pass


_STATUS_ERRORS = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    422: UnprocessableEntityError,
    429: RateLimitedError,
}


def error_for_status(
    status_code: int,
    message: str,
    body: Any = None,
    request_id: Optional[str] = None,
) -> ApiError:
    """Build the ApiError subclass matching ``status_code``."""
    if status_code >= 500:
        cls = ServerError
    else:
        cls = _STATUS_ERRORS.get(status_code, ApiError)
    return cls(status_code, message, body, request_id)
