"""Authenticated request dispatch for the Mati SDK.

``send`` performs exactly one HTTP attempt: it attaches the current bearer
token, encodes the body as JSON or multipart, and maps the outcome onto the
SDK's error types. There is no retry here; callers own that policy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import httpx

from mati_sdk.auth import AsyncAuthenticator, Authenticator
from mati_sdk.errors import TransportError, ValidationError, error_for_status
from mati_sdk.forms import MultipartForm
from mati_sdk.utils import decode_body, error_message, generate_request_id

logger = logging.getLogger(__name__)

METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

Body = Union[MultipartForm, Any]


def _check_call(method: str, path: str) -> str:
    verb = (method or "").upper()
    if verb not in METHODS:
        raise ValidationError(f"Unsupported method: {method!r}")
    if not isinstance(path, str) or not path.startswith("/"):
        raise ValidationError(f"API path must start with '/': {path!r}")
    return verb


def _build_kwargs(
    token: str,
    body: Optional[Body],
    headers: Optional[Dict[str, str]],
) -> Dict[str, Any]:
    merged: Dict[str, str] = {
        k: v for k, v in (headers or {}).items() if k.lower() != "authorization"
    }
    merged["Authorization"] = f"Bearer {token}"
    if "x-request-id" not in {k.lower() for k in merged}:
        merged["X-Request-ID"] = generate_request_id()
    kwargs: Dict[str, Any] = {"headers": merged}
    if isinstance(body, MultipartForm):
        encoded = body.as_httpx()
        merged.update(encoded.pop("headers", {}))
        kwargs.update(encoded)
    elif body is not None:
        kwargs["json"] = body
    return kwargs


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    body = decode_body(resp)
    raise error_for_status(
        resp.status_code,
        error_message(body),
        body,
        resp.headers.get("x-request-id"),
    )


def _decode(resp: httpx.Response, binary: bool) -> Any:
    if binary:
        return resp.content
    if not resp.content:
        return None
    if "json" in resp.headers.get("content-type", "").lower():
        try:
            return resp.json()
        except ValueError:
            logger.debug("Undecodable JSON body, returning raw bytes")
    return resp.content


class RequestDispatcher:
    """Issues authenticated requests through a shared ``httpx.Client``."""

    def __init__(self, http: httpx.Client, authenticator: Authenticator) -> None:
        self._http = http
        self._auth = authenticator

    def send(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
        *,
        binary: bool = False,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send one request and return the decoded success body.

        ``body`` is a JSON-serializable value or a ``MultipartForm``.
        Raises ApiError (non-2xx), TransportError (no response) or
        AuthenticationError (token exchange failed).
        """
        verb = _check_call(method, path)
        token = self._auth.get_token()
        kwargs = _build_kwargs(token.value, body, headers)
        try:
            resp = self._http.request(verb, path, **kwargs)
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", verb, path, type(exc).__name__)
            raise TransportError(exc) from exc
        logger.debug("%s %s -> %d", verb, path, resp.status_code)
        _raise_for_status(resp)
        return _decode(resp, binary)


class AsyncRequestDispatcher:
    """Issues authenticated requests through a shared ``httpx.AsyncClient``."""

    def __init__(self, http: httpx.AsyncClient, authenticator: AsyncAuthenticator) -> None:
        self._http = http
        self._auth = authenticator

    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
        *,
        binary: bool = False,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Async counterpart of ``RequestDispatcher.send``."""
        verb = _check_call(method, path)
        token = await self._auth.get_token()
        kwargs = _build_kwargs(token.value, body, headers)
        try:
            resp = await self._http.request(verb, path, **kwargs)
        except httpx.TransportError as exc:
            logger.debug("%s %s failed: %s", verb, path, type(exc).__name__)
            raise TransportError(exc) from exc
        logger.debug("%s %s -> %d", verb, path, resp.status_code)
        _raise_for_status(resp)
        return _decode(resp, binary)
