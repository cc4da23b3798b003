"""Mati Python SDK — client for the Mati identity-verification API."""

from mati_sdk.client import MatiClient
from mati_sdk.async_client import AsyncMatiClient
from mati_sdk.errors import (
    ApiError,
    AuthenticationError,
    ForbiddenError,
    MatiError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TransportError,
    UnauthorizedError,
    UnprocessableEntityError,
    ValidationError,
)
from mati_sdk.forms import MultipartForm
from mati_sdk.models import Credentials, DocumentField, Token

__version__ = "1.0.0"

__all__ = [
    "MatiClient",
    "AsyncMatiClient",
    "MatiError",
    "ApiError",
    "AuthenticationError",
    "TransportError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "UnprocessableEntityError",
    "RateLimitedError",
    "ServerError",
    "MultipartForm",
    "Credentials",
    "DocumentField",
    "Token",
]
