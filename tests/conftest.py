# tests/conftest.py
import sys
from pathlib import Path

import httpx
import pytest
from httpx import AsyncClient as _orig_AsyncClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# ---------------------------------------------------------------------------
# Custom AsyncClient wrapper
# ---------------------------------------------------------------------------
ASGITransport = getattr(httpx, "ASGITransport", None)


class AsyncClient(_orig_AsyncClient):
    """
    Injects ASGITransport(app=...) automatically when tests pass `app=...`
    to AsyncClient.
    """

    def __init__(self, *args, app=None, **kwargs):
        if app is not None and ASGITransport is not None and "transport" not in kwargs:
            kwargs["transport"] = ASGITransport(app=app)
        super().__init__(*args, **kwargs)


@pytest.fixture(autouse=True)
def patch_httpx_async_client(monkeypatch):
    monkeypatch.setattr(httpx, "AsyncClient", AsyncClient)
    yield


# ---------------------------------------------------------------------------
# Shared grants
# ---------------------------------------------------------------------------
@pytest.fixture
def mock_grants():
    return {
        "editor": ["content.edit.*", "image.upload"],
        "viewer": ["content.view.*", "image.view"],
        "admin": ["*"],
    }


@pytest.fixture(autouse=True)
def clean_rolecheck_env(monkeypatch):
    """Keep a developer's .env or shell from leaking into settings."""
    for name in (
        "ROLECHECK_GRANTS_FILE",
        "ROLECHECK_BASE_ROLES",
        "ROLECHECK_AUTHENTICATED_ROLE",
        "ROLECHECK_ANONYMOUS_ROLE",
        "ROLECHECK_ROLES_HEADER",
        "ROLECHECK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
