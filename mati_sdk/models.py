"""Data models for the Mati SDK.

Credentials are a plain frozen dataclass so the secret never shows up in a
repr; everything parsed from or sent to the API is a pydantic model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Credentials:
    """Client-credentials pair issued in the Mati dashboard."""

    client_id: str
    secret_id: str = field(repr=False)


# ── Auth ─────────────────────────────────────────────────────────

class TokenResponse(BaseModel):
    """Body of a successful credential exchange."""

    model_config = ConfigDict(extra="allow")

    access_token: str = Field(min_length=1)
    expires_in: float = Field(
        gt=0, validation_alias=AliasChoices("expires_in", "expiresIn")
    )


class Token(BaseModel):
    """Bearer token plus the absolute time (clock seconds) it stops being valid."""

    model_config = ConfigDict(frozen=True)

    value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def __repr__(self) -> str:
        return f"Token(value='***', expires_at={self.expires_at})"

    __str__ = __repr__


# ── Documents ────────────────────────────────────────────────────

class DocumentField(BaseModel):
    """One corrected document field, as sent to PATCH /v1/documents/{id}.

    Keys beyond ``id`` and ``value`` are sent through untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(min_length=1)
    value: Any
