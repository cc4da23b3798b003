"""Utilities: request-ID helpers, argument checks and error-body decoding."""

from __future__ import annotations

import uuid
from typing import Any
from urllib.parse import quote

import httpx

from mati_sdk.errors import ValidationError


def generate_request_id() -> str:
    """Generate a short UUID4 hex string for X-Request-ID."""
    return uuid.uuid4().hex[:12]


def require(value: Any, name: str) -> Any:
    """Return ``value`` unless it is None or empty, else raise ValidationError."""
    if value is None:
        raise ValidationError(f"{name} is required")
    if isinstance(value, (str, bytes, list, tuple, dict)) and len(value) == 0:
        raise ValidationError(f"{name} must not be empty")
    return value


def path_segment(value: Any, name: str) -> str:
    """Validate an id and quote it so it stays inside one path segment."""
    require(value, name)
    return quote(str(value), safe="")


def decode_body(resp: httpx.Response) -> Any:
    """Return the response body as JSON when it parses, else as text."""
    try:
        return resp.json()
    except ValueError:
        return resp.text


def error_message(body: Any) -> str:
    """Pick a human-readable message out of an error payload."""
    if isinstance(body, dict):
        # Support error envelopes: {"error": {"code": ..., "message": ...}}
        err = body.get("error")
        if isinstance(err, dict):
            return str(err.get("message") or err.get("code") or body)
        return str(body.get("message") or body.get("detail") or err or body)
    return str(body) if body else "empty response body"
