"""Client configuration for the Mati SDK.

Reads ``MATI_*`` environment variables with sensible defaults. Explicit
arguments always win over the environment. Never exposes the secret in repr.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from mati_sdk.errors import ValidationError
from mati_sdk.models import Credentials

DEFAULT_BASE_URL = "https://api.getmati.com"
DEFAULT_TOKEN_PATH = "/oauth"


def _str_env(key: str, default: str = "") -> str:
    val = (os.environ.get(key) or "").strip()
    return val or default


def _float_env(key: str, default: Optional[float] = None) -> Optional[float]:
    """Parse a float env var with fallback."""
    val = os.environ.get(key)
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


@dataclass(frozen=True)
class ClientSettings:
    """Immutable client configuration. Safe to log — the secret is masked."""

    client_id: str = ""
    secret_id: str = field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    token_path: str = DEFAULT_TOKEN_PATH
    # None disables httpx timeouts; callers bound calls themselves.
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientSettings":
        """Build settings from the environment, then apply non-None overrides."""
        settings = cls(
            client_id=_str_env("MATI_CLIENT_ID"),
            secret_id=_str_env("MATI_SECRET_ID"),
            base_url=_str_env("MATI_API_URL", DEFAULT_BASE_URL),
            token_path=_str_env("MATI_TOKEN_PATH", DEFAULT_TOKEN_PATH),
            timeout=_float_env("MATI_TIMEOUT"),
        )
        explicit = {k: v for k, v in overrides.items() if v is not None}
        if explicit:
            settings = replace(settings, **explicit)
        return settings

    @property
    def api_url(self) -> str:
        return self.base_url.rstrip("/")

    def credentials(self) -> Credentials:
        """Return the credentials pair, or raise if either half is missing."""
        missing = [
            name
            for name, value in (("client_id", self.client_id), ("secret_id", self.secret_id))
            if not value
        ]
        if missing:
            raise ValidationError(
                f"Missing Mati credentials: {', '.join(missing)} "
                "(pass them explicitly or set MATI_CLIENT_ID / MATI_SECRET_ID)"
            )
        return Credentials(client_id=self.client_id, secret_id=self.secret_id)
