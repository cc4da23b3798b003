"""AsyncMatiClient — asyncio Python SDK for the Mati identity-verification API."""

from __future__ import annotations

import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from mati_sdk import endpoints
from mati_sdk.auth import AsyncAuthenticator, Clock
from mati_sdk.config import ClientSettings
from mati_sdk.dispatcher import AsyncRequestDispatcher, Body
from mati_sdk.endpoints import ApiRequest, FieldInput
from mati_sdk.forms import FileInput


class AsyncMatiClient:
    """Asynchronous client for the Mati API.

    Calls may run concurrently on one instance; they share a single token
    and at most one credential exchange is in flight at a time.

    Usage::

        import asyncio
        from mati_sdk import AsyncMatiClient

        async def main():
            async with AsyncMatiClient(client_id="...", secret_id="...") as mati:
                identities, hooks = await asyncio.gather(
                    mati.list_identities(), mati.list_subscriptions()
                )

        asyncio.run(main())
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        secret_id: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        token_path: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Clock = time.time,
    ) -> None:
        self._settings = ClientSettings.from_env(
            client_id=client_id,
            secret_id=secret_id,
            base_url=base_url,
            token_path=token_path,
            timeout=timeout,
        )
        credentials = self._settings.credentials()
        self._client = httpx.AsyncClient(
            base_url=self._settings.api_url,
            timeout=self._settings.timeout,
            transport=transport,
        )
        self._auth = AsyncAuthenticator(
            self._client, credentials, self._settings.token_path, clock
        )
        self._dispatcher = AsyncRequestDispatcher(self._client, self._auth)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def authenticator(self) -> AsyncAuthenticator:
        return self._auth

    # ── Internal helpers ─────────────────────────────────────────

    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
        *,
        binary: bool = False,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Authenticated request to any API path; see ``AsyncRequestDispatcher.send``."""
        return await self._dispatcher.send(
            method, path, body, binary=binary, headers=headers
        )

    async def _call(self, request: ApiRequest) -> Any:
        body = request.form if request.form is not None else request.body
        return await self._dispatcher.send(
            request.method, request.path, body, binary=request.binary
        )

    # ── Webhooks ─────────────────────────────────────────────────

    async def subscribe_webhook(self, url: str, secret: str) -> Dict[str, Any]:
        """POST /v1/webhooks"""
        return await self._call(endpoints.subscribe_webhook(url, secret))

    async def get_subscription(self, webhook_id: str) -> Dict[str, Any]:
        """GET /v1/webhooks/{webhook_id}"""
        return await self._call(endpoints.get_subscription(webhook_id))

    async def list_subscriptions(self) -> List[Dict[str, Any]]:
        """GET /v1/webhooks"""
        return await self._call(endpoints.list_subscriptions())

    async def delete_subscription(self, webhook_id: str) -> Any:
        """DELETE /v1/webhooks/{webhook_id}"""
        return await self._call(endpoints.delete_subscription(webhook_id))

    # ── Identities ───────────────────────────────────────────────

    async def create_identity(
        self,
        metadata: Optional[Mapping[str, Any]] = None,
        file: Optional[FileInput] = None,
    ) -> Dict[str, Any]:
        """POST /v1/identities"""
        return await self._call(endpoints.create_identity(metadata, file))

    async def list_identities(self) -> List[Dict[str, Any]]:
        """GET /v1/identities"""
        return await self._call(endpoints.list_identities())

    async def get_identity(self, identity_id: str) -> Dict[str, Any]:
        """GET /v1/identities/{identity_id}"""
        return await self._call(endpoints.get_identity(identity_id))

    # ── Documents ────────────────────────────────────────────────

    async def upload_id_front(
        self,
        identity_id: str,
        file: Optional[FileInput] = None,
        type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """POST /v1/identities/{identity_id}/documents"""
        return await self._call(endpoints.upload_id_front(identity_id, file, type))

    async def upload_id_back(
        self, document_id: str, file: Optional[FileInput] = None
    ) -> Dict[str, Any]:
        """PUT /v1/documents/{document_id}"""
        return await self._call(endpoints.upload_id_back(document_id, file))

    async def update_fields(
        self, document_id: str, fields: Iterable[FieldInput]
    ) -> Dict[str, Any]:
        """PATCH /v1/documents/{document_id}"""
        return await self._call(endpoints.update_fields(document_id, fields))

    async def list_documents(self, identity_id: str) -> List[Dict[str, Any]]:
        """GET /v1/identities/{identity_id}/documents"""
        return await self._call(endpoints.list_documents(identity_id))

    async def get_document(self, document_id: str) -> Dict[str, Any]:
        """GET /v1/documents/{document_id}"""
        return await self._call(endpoints.get_document(document_id))

    async def get_verified_data(self, document_id: str) -> Dict[str, Any]:
        """GET /v1/documents/{document_id}/verified-data"""
        return await self._call(endpoints.get_verified_data(document_id))

    # ── Pictures ─────────────────────────────────────────────────

    async def list_pictures(self, document_id: str) -> List[Dict[str, Any]]:
        """GET /v1/documents/{document_id}/pictures"""
        return await self._call(endpoints.list_pictures(document_id))

    async def get_picture(self, picture_id: str) -> Dict[str, Any]:
        """GET /v1/pictures/{picture_id}"""
        return await self._call(endpoints.get_picture(picture_id))

    async def download_picture(self, picture_id: str) -> bytes:
        """GET /v1/pictures/{picture_id}.jpg — returns the raw JPEG."""
        return await self._call(endpoints.download_picture(picture_id))

    # ── Context Manager ─────────────────────────────────────────

    async def __aenter__(self) -> "AsyncMatiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    aclose = close
