"""Pytest configuration and fixtures for docindex.

Uses docindex.main:app for HTTP tests. Collaborators that need Postgres,
object storage or the inference endpoint are replaced through
app.dependency_overrides, so the suite runs without external services.
"""

import os
import tempfile
from collections.abc import Iterator

# Settings are read once (lru_cache); pin the environment before the app imports them.
# No database and no API key: every external collaborator is overridden per test.
os.environ["DATABASE_URL"] = ""
os.environ["GEMINI_API_KEY"] = ""
os.environ["STORAGE_BACKEND"] = "local"
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="docindex-test-"))

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from docindex.main import app as _app


@pytest.fixture
def app() -> Iterator[FastAPI]:
    """The FastAPI app; dependency overrides are cleared after each test."""
    yield _app
    _app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
