"""MatiClient — synchronous Python SDK for the Mati identity-verification API."""

from __future__ import annotations

import time
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from mati_sdk import endpoints
from mati_sdk.auth import Authenticator, Clock
from mati_sdk.config import ClientSettings
from mati_sdk.dispatcher import Body, RequestDispatcher
from mati_sdk.endpoints import ApiRequest, FieldInput
from mati_sdk.forms import FileInput


class MatiClient:
    """Synchronous client for the Mati API.

    Usage::

        from mati_sdk import MatiClient

        with MatiClient(client_id="...", secret_id="...") as mati:
            identity = mati.create_identity(metadata={"user": "42"})
            mati.upload_id_front(identity["_id"], open("front.jpg", "rb"))

    Credentials fall back to ``MATI_CLIENT_ID`` / ``MATI_SECRET_ID``.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        secret_id: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        token_path: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
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
        self._client = httpx.Client(
            base_url=self._settings.api_url,
            timeout=self._settings.timeout,
            transport=transport,
        )
        self._auth = Authenticator(
            self._client, credentials, self._settings.token_path, clock
        )
        self._dispatcher = RequestDispatcher(self._client, self._auth)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def authenticator(self) -> Authenticator:
        return self._auth

    # ── Internal helpers ─────────────────────────────────────────

    def send(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
        *,
        binary: bool = False,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Authenticated request to any API path; see ``RequestDispatcher.send``."""
        return self._dispatcher.send(method, path, body, binary=binary, headers=headers)

    def _call(self, request: ApiRequest) -> Any:
        body = request.form if request.form is not None else request.body
        return self._dispatcher.send(
            request.method, request.path, body, binary=request.binary
        )

    # ── Webhooks ─────────────────────────────────────────────────

    def subscribe_webhook(self, url: str, secret: str) -> Dict[str, Any]:
        """POST /v1/webhooks"""
        return self._call(endpoints.subscribe_webhook(url, secret))

    def get_subscription(self, webhook_id: str) -> Dict[str, Any]:
        """GET /v1/webhooks/{webhook_id}"""
        return self._call(endpoints.get_subscription(webhook_id))

    def list_subscriptions(self) -> List[Dict[str, Any]]:
        """GET /v1/webhooks"""
        return self._call(endpoints.list_subscriptions())

    def delete_subscription(self, webhook_id: str) -> Any:
        """DELETE /v1/webhooks/{webhook_id}"""
        return self._call(endpoints.delete_subscription(webhook_id))

    # ── Identities ───────────────────────────────────────────────

    def create_identity(
        self,
        metadata: Optional[Mapping[str, Any]] = None,
        file: Optional[FileInput] = None,
    ) -> Dict[str, Any]:
        """POST /v1/identities — metadata fields plus an optional selfie."""
        return self._call(endpoints.create_identity(metadata, file))

    def list_identities(self) -> List[Dict[str, Any]]:
        """GET /v1/identities"""
        return self._call(endpoints.list_identities())

    def get_identity(self, identity_id: str) -> Dict[str, Any]:
        """GET /v1/identities/{identity_id}"""
        return self._call(endpoints.get_identity(identity_id))

    # ── Documents ────────────────────────────────────────────────

    def upload_id_front(
        self,
        identity_id: str,
        file: Optional[FileInput] = None,
        type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """POST /v1/identities/{identity_id}/documents

        ``type`` defaults to ``national-id``.
        """
        return self._call(endpoints.upload_id_front(identity_id, file, type))

    def upload_id_back(
        self, document_id: str, file: Optional[FileInput] = None
    ) -> Dict[str, Any]:
        """PUT /v1/documents/{document_id}"""
        return self._call(endpoints.upload_id_back(document_id, file))

    def update_fields(
        self, document_id: str, fields: Iterable[FieldInput]
    ) -> Dict[str, Any]:
        """PATCH /v1/documents/{document_id}"""
        return self._call(endpoints.update_fields(document_id, fields))

    def list_documents(self, identity_id: str) -> List[Dict[str, Any]]:
        """GET /v1/identities/{identity_id}/documents"""
        return self._call(endpoints.list_documents(identity_id))

    def get_document(self, document_id: str) -> Dict[str, Any]:
        """GET /v1/documents/{document_id}"""
        return self._call(endpoints.get_document(document_id))

    def get_verified_data(self, document_id: str) -> Dict[str, Any]:
        """GET /v1/documents/{document_id}/verified-data"""
        return self._call(endpoints.get_verified_data(document_id))

    # ── Pictures ─────────────────────────────────────────────────

    def list_pictures(self, document_id: str) -> List[Dict[str, Any]]:
        """GET /v1/documents/{document_id}/pictures"""
        return self._call(endpoints.list_pictures(document_id))

    def get_picture(self, picture_id: str) -> Dict[str, Any]:
        """GET /v1/pictures/{picture_id}"""
        return self._call(endpoints.get_picture(picture_id))

    def download_picture(self, picture_id: str) -> bytes:
        """GET /v1/pictures/{picture_id}.jpg — returns the raw JPEG."""
        return self._call(endpoints.download_picture(picture_id))

    # ── Context Manager ──────────────────────────────────────────

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "MatiClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
