"""Shared test fixtures for Mati SDK tests.

All HTTP goes through httpx.MockTransport backed by FakeMatiApi.
No real server process, no network calls.
"""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

# Ensure repo modules are importable without an install.
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from helpers import FakeClock, FakeMatiApi
from mati_sdk import MatiClient

_MATI_ENV_VARS = [
    "MATI_CLIENT_ID",
    "MATI_SECRET_ID",
    "MATI_API_URL",
    "MATI_TOKEN_PATH",
    "MATI_TIMEOUT",
]


@pytest.fixture(autouse=True)
def _clean_mati_env(monkeypatch):
    """Keep the developer's MATI_* variables out of the tests."""
    for var in _MATI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeMatiApi:
    return FakeMatiApi()


@pytest.fixture
def client(fake_api, clock):
    """Sync SDK client wired to the fake API."""
    c = MatiClient(
        client_id="client-123",
        secret_id="secret-456",
        transport=httpx.MockTransport(fake_api),
        clock=clock,
    )
    yield c
    c.close()
