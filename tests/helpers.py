"""Test doubles for the Mati SDK: a fake API for httpx.MockTransport and a fake clock."""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Union

import httpx

from mati_sdk import AsyncMatiClient

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMatiApi:
    """In-memory stand-in for the Mati API.

    The token endpoint hands out ``tok-1``, ``tok-2``... on each exchange.
    Resource requests are recorded and answered from ``routes``; unknown
    routes echo the method and path back as JSON.
    """

    def __init__(self, expires_in: float = 3600) -> None:
        self.expires_in = expires_in
        self.exchanges = 0
        self.token_requests: List[httpx.Request] = []
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.token_error: Optional[Exception] = None
        self.token_response: Optional[httpx.Response] = None

    def route(self, method: str, path: str, response: Route) -> None:
        self.routes[(method, path)] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth":
            return self._token(request)
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(
                200, json={"method": request.method, "path": request.url.path}
            )
        if isinstance(handler, Exception):
            raise handler
        if isinstance(handler, httpx.Response):
            return handler
        return handler(request)

    def _token(self, request: httpx.Request) -> httpx.Response:
        self.token_requests.append(request)
        self.exchanges += 1
        if self.token_error is not None:
            raise self.token_error
        if self.token_response is not None:
            return self.token_response
        return httpx.Response(
            200,
            json={"access_token": f"tok-{self.exchanges}", "expires_in": self.expires_in},
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class Part(NamedTuple):
    name: str
    filename: Optional[str]
    value: bytes


def parse_multipart(request: httpx.Request) -> List[Part]:
    """Split a multipart/form-data request body into its parts, in wire order."""
    content_type = request.headers["content-type"]
    assert content_type.startswith("multipart/form-data")
    boundary = content_type.split("boundary=", 1)[1].strip('"').encode()
    parts = []
    for chunk in request.content.split(b"--" + boundary)[1:-1]:
        head, _, value = chunk[2:].partition(b"\r\n\r\n")
        name = re.search(rb'; name="([^"]*)"', head)
        filename = re.search(rb'; filename="([^"]*)"', head)
        parts.append(
            Part(
                name=name.group(1).decode() if name else "",
                filename=filename.group(1).decode() if filename else None,
                value=value[:-2],
            )
        )
    return parts


def make_async_client(handler: Callable[[httpx.Request], Any], clock: FakeClock) -> AsyncMatiClient:
    """Async SDK client wired to ``handler``; close it inside the event loop."""
    return AsyncMatiClient(
        client_id="client-123",
        secret_id="secret-456",
        transport=httpx.MockTransport(handler),
        clock=clock,
    )
