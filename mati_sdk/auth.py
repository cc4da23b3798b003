"""Client-credentials authentication for the Mati SDK.

The API hands out short-lived bearer tokens in exchange for a client id and
secret. Each client instance owns one token cache; a still-valid token is
returned without any I/O, and an absent or expired one triggers exactly one
exchange no matter how many callers are waiting on it.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable, Optional

import httpx

from mati_sdk.config import DEFAULT_TOKEN_PATH
from mati_sdk.errors import AuthenticationError
from mati_sdk.models import Credentials, Token, TokenResponse
from mati_sdk.utils import decode_body, error_message

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

GRANT = {"grant_type": "client_credentials"}


def token_from_response(resp: httpx.Response, now: float) -> Token:
    """Turn a token-endpoint response into a Token, or raise AuthenticationError."""
    if not resp.is_success:
        body = decode_body(resp)
        logger.warning("Token exchange rejected with HTTP %d", resp.status_code)
        raise AuthenticationError(
            f"Credential exchange rejected: {error_message(body)}",
            status_code=resp.status_code,
            body=body,
        )
    try:
        parsed = TokenResponse.model_validate(resp.json())
    except ValueError as exc:
        logger.warning("Token endpoint returned an unusable body")
        raise AuthenticationError(
            "Malformed token response (expected access_token and expires_in)",
            status_code=resp.status_code,
            body=resp.text,
        ) from exc
    logger.info("Access token obtained, valid for %ss", parsed.expires_in)
    return Token(value=parsed.access_token, expires_at=now + parsed.expires_in)


def _unreachable(exc: httpx.TransportError) -> AuthenticationError:
    logger.warning("Token endpoint unreachable: %s", type(exc).__name__)
    return AuthenticationError(f"Token endpoint unreachable: {type(exc).__name__}: {exc}")


class _TokenCache:
    def __init__(
        self,
        credentials: Credentials,
        token_path: str = DEFAULT_TOKEN_PATH,
        clock: Clock = time.time,
    ) -> None:
        self._credentials = credentials
        self._token_path = token_path
        self._clock = clock
        self._token: Optional[Token] = None

    @property
    def token(self) -> Optional[Token]:
        """The cached token, valid or not. None before the first exchange."""
        return self._token

    def _valid_token(self) -> Optional[Token]:
        token = self._token
        if token is not None and not token.is_expired(self._clock()):
            return token
        return None

    def _basic_auth(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self._credentials.client_id, self._credentials.secret_id)


class Authenticator(_TokenCache):
    """Blocking token cache for ``MatiClient``.

    Refreshes are serialized by a lock; threads that arrive during a refresh
    wait for it and reuse its token instead of exchanging again.
    """

    def __init__(
        self,
        http: httpx.Client,
        credentials: Credentials,
        token_path: str = DEFAULT_TOKEN_PATH,
        clock: Clock = time.time,
    ) -> None:
        super().__init__(credentials, token_path, clock)
        self._http = http
        self._lock = threading.Lock()

    def get_token(self) -> Token:
        token = self._valid_token()
        if token is not None:
            return token
        with self._lock:
            token = self._valid_token()
            if token is not None:
                return token
            # Only a successful exchange replaces the cached token.
            self._token = self._exchange()
            return self._token

    def invalidate(self) -> None:
        """Drop the cached token; the next call exchanges credentials again."""
        with self._lock:
            self._token = None

    def _exchange(self) -> Token:
        logger.debug("POST %s (client credentials)", self._token_path)
        try:
            resp = self._http.post(self._token_path, auth=self._basic_auth(), data=GRANT)
        except httpx.TransportError as exc:
            raise _unreachable(exc) from exc
        return token_from_response(resp, self._clock())


class AsyncAuthenticator(_TokenCache):
    """Asyncio token cache for ``AsyncMatiClient``.

    A refresh runs as a single task shared by every waiter. Waiters await it
    through ``asyncio.shield`` so cancelling one caller never cancels the
    exchange the others are waiting on.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        credentials: Credentials,
        token_path: str = DEFAULT_TOKEN_PATH,
        clock: Clock = time.time,
    ) -> None:
        super().__init__(credentials, token_path, clock)
        self._http = http
        self._refresh: Optional["asyncio.Task[Token]"] = None

    async def get_token(self) -> Token:
        token = self._valid_token()
        if token is not None:
            return token
        # No await between the check and the assignment, so there is at most
        # one refresh task per expiry.
        refresh = self._refresh
        if refresh is None:
            refresh = asyncio.ensure_future(self._exchange())
            refresh.add_done_callback(self._refresh_done)
            self._refresh = refresh
        return await asyncio.shield(refresh)

    def invalidate(self) -> None:
        """Drop the cached token; the next call exchanges credentials again."""
        self._token = None

    def _refresh_done(self, task: "asyncio.Task[Token]") -> None:
        if self._refresh is task:
            self._refresh = None
        if not task.cancelled():
            # Mark retrieved; waiters re-raise it themselves.
            task.exception()

    async def _exchange(self) -> Token:
        logger.debug("POST %s (client credentials)", self._token_path)
        try:
            resp = await self._http.post(
                self._token_path, auth=self._basic_auth(), data=GRANT
            )
        except httpx.TransportError as exc:
            raise _unreachable(exc) from exc
        token = token_from_response(resp, self._clock())
        self._token = token
        return token
