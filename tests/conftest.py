"""Pytest bootstrap configuration.

Point the template/static directory at the bundled kodata/ before any
module that reads settings is imported.
"""
import os
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
KO_PATH = str(ROOT / "kodata")

os.environ.setdefault("KO_DATA_PATH", KO_PATH)

from typing import Callable, Optional

import httpx
import pytest

from core.config import BackendSettings, Settings


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**backend) -> Settings:
        return Settings(KO_DATA_PATH=KO_PATH, backend=BackendSettings(**backend))
    return _make


@pytest.fixture
async def make_client(make_settings):
    """Build an ASGI client around ``create_app`` with an injected backend."""
    clients = []

    def _make(backend=None, settings: Optional[Settings] = None, **backend_settings) -> httpx.AsyncClient:
        from main import create_app

        app = create_app(settings or make_settings(**backend_settings), backend=backend)
        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()
