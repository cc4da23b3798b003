"""Route table for the Mati REST API.

Each builder validates its arguments and returns an ``ApiRequest``; the
clients hand that to a dispatcher. Nothing here touches the network, so a
``ValidationError`` always fires before any request is made.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

from mati_sdk.errors import ValidationError
from mati_sdk.forms import FileInput, MultipartForm
from mati_sdk.models import DocumentField
from mati_sdk.utils import path_segment, require

DEFAULT_DOCUMENT_TYPE = "national-id"

FieldInput = Union[DocumentField, Mapping[str, Any]]


@dataclass(frozen=True)
class ApiRequest:
    """One resource call: verb, relative path and an optional body."""

    method: str
    path: str
    body: Any = None
    form: Optional[MultipartForm] = None
    binary: bool = False


# ── Webhooks ─────────────────────────────────────────────────────

def subscribe_webhook(url: str, secret: str) -> ApiRequest:
    """POST /v1/webhooks"""
    require(url, "url")
    require(secret, "secret")
    return ApiRequest("POST", "/v1/webhooks", body={"url": url, "secret": secret})


def get_subscription(webhook_id: str) -> ApiRequest:
    """GET /v1/webhooks/{webhook_id}"""
    return ApiRequest("GET", f"/v1/webhooks/{path_segment(webhook_id, 'webhook_id')}")


def list_subscriptions() -> ApiRequest:
    """GET /v1/webhooks"""
    return ApiRequest("GET", "/v1/webhooks")


def delete_subscription(webhook_id: str) -> ApiRequest:
    """DELETE /v1/webhooks/{webhook_id}"""
    return ApiRequest("DELETE", f"/v1/webhooks/{path_segment(webhook_id, 'webhook_id')}")


# ── Identities ───────────────────────────────────────────────────

def create_identity(
    metadata: Optional[Mapping[str, Any]] = None,
    file: Optional[FileInput] = None,
) -> ApiRequest:
    """POST /v1/identities — optional metadata fields and selfie photo."""
    form = MultipartForm()
    if metadata:
        form.extend(metadata, key_format="metadata[{}]")
    if file is not None:
        form.append_file("photo", file, "identity.jpeg")
    return ApiRequest("POST", "/v1/identities", form=form)


def list_identities() -> ApiRequest:
    """GET /v1/identities"""
    return ApiRequest("GET", "/v1/identities")


def get_identity(identity_id: str) -> ApiRequest:
    """GET /v1/identities/{identity_id}"""
    return ApiRequest("GET", f"/v1/identities/{path_segment(identity_id, 'identity_id')}")


# ── Documents ────────────────────────────────────────────────────

def upload_id_front(
    identity_id: str,
    file: Optional[FileInput] = None,
    type: Optional[str] = None,
) -> ApiRequest:
    """POST /v1/identities/{identity_id}/documents — front side of an ID."""
    segment = path_segment(identity_id, "identity_id")
    require(file, "file")
    form = MultipartForm()
    form.append("type", type or DEFAULT_DOCUMENT_TYPE)
    form.append("side", "front")
    form.append_file("picture", file, "front.jpeg")
    return ApiRequest("POST", f"/v1/identities/{segment}/documents", form=form)


def upload_id_back(document_id: str, file: Optional[FileInput] = None) -> ApiRequest:
    """PUT /v1/documents/{document_id} — back side of an already created document."""
    segment = path_segment(document_id, "document_id")
    require(file, "file")
    form = MultipartForm()
    form.append("side", "back")
    form.append_file("picture", file, "back.jpeg")
    return ApiRequest("PUT", f"/v1/documents/{segment}", form=form)


def update_fields(document_id: str, fields: Iterable[FieldInput]) -> ApiRequest:
    """PATCH /v1/documents/{document_id} — JSON array of ``{id, value}``."""
    segment = path_segment(document_id, "document_id")
    require(fields, "fields")
    payload: List[dict] = []
    for item in fields:
        if not isinstance(item, DocumentField):
            try:
                item = DocumentField.model_validate(dict(item))
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"invalid document field {item!r}: {exc}") from exc
        payload.append(item.model_dump())
    require(payload, "fields")
    return ApiRequest("PATCH", f"/v1/documents/{segment}", body=payload)


def list_documents(identity_id: str) -> ApiRequest:
    """GET /v1/identities/{identity_id}/documents"""
    segment = path_segment(identity_id, "identity_id")
    return ApiRequest("GET", f"/v1/identities/{segment}/documents")


def get_document(document_id: str) -> ApiRequest:
    """GET /v1/documents/{document_id}"""
    return ApiRequest("GET", f"/v1/documents/{path_segment(document_id, 'document_id')}")


def get_verified_data(document_id: str) -> ApiRequest:
    """GET /v1/documents/{document_id}/verified-data"""
    segment = path_segment(document_id, "document_id")
    return ApiRequest("GET", f"/v1/documents/{segment}/verified-data")


# ── Pictures ─────────────────────────────────────────────────────

def list_pictures(document_id: str) -> ApiRequest:
    """GET /v1/documents/{document_id}/pictures"""
    segment = path_segment(document_id, "document_id")
    return ApiRequest("GET", f"/v1/documents/{segment}/pictures")


def get_picture(picture_id: str) -> ApiRequest:
    """GET /v1/pictures/{picture_id}"""
    return ApiRequest("GET", f"/v1/pictures/{path_segment(picture_id, 'picture_id')}")


def download_picture(picture_id: str) -> ApiRequest:
    """GET /v1/pictures/{picture_id}.jpg — raw JPEG bytes."""
    segment = path_segment(picture_id, "picture_id")
    return ApiRequest("GET", f"/v1/pictures/{segment}.jpg", binary=True)
