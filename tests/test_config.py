"""Tests for ClientSettings environment handling."""

from __future__ import annotations

import pytest

from mati_sdk import ValidationError
from mati_sdk.config import DEFAULT_BASE_URL, DEFAULT_TOKEN_PATH, ClientSettings


class TestClientSettings:
    def test_defaults(self) -> None:
        s = ClientSettings.from_env()
        assert s.base_url == DEFAULT_BASE_URL
        assert s.token_path == DEFAULT_TOKEN_PATH
        assert s.timeout is None

    def test_env_values(self, monkeypatch) -> None:
        monkeypatch.setenv("MATI_CLIENT_ID", "cid")
        monkeypatch.setenv("MATI_SECRET_ID", "secret")
        monkeypatch.setenv("MATI_API_URL", "https://sandbox.example.com/")
        monkeypatch.setenv("MATI_TIMEOUT", "12.5")
        s = ClientSettings.from_env()
        assert s.credentials().client_id == "cid"
        assert s.api_url == "https://sandbox.example.com"
        assert s.timeout == 12.5

    def test_explicit_overrides_env(self, monkeypatch) -> None:
        monkeypatch.setenv("MATI_CLIENT_ID", "env-id")
        s = ClientSettings.from_env(client_id="arg-id", secret_id=None)
        assert s.client_id == "arg-id"

    def test_empty_env_values_use_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("MATI_API_URL", "  ")
        monkeypatch.setenv("MATI_TOKEN_PATH", "")
        s = ClientSettings.from_env()
        assert s.base_url == DEFAULT_BASE_URL
        assert s.token_path == DEFAULT_TOKEN_PATH

    def test_bad_timeout_falls_back(self, monkeypatch) -> None:
        monkeypatch.setenv("MATI_TIMEOUT", "soon")
        assert ClientSettings.from_env().timeout is None

    def test_secret_masked_in_repr(self) -> None:
        s = ClientSettings(client_id="cid", secret_id="top-secret")
        assert "top-secret" not in repr(s)
        assert "top-secret" not in repr(s.credentials())

    def test_missing_credentials_named(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ClientSettings(client_id="cid").credentials()
        assert "secret_id" in str(exc_info.value)
