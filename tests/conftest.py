"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from db.documents import InMemoryDocumentStore, JsonFileDocumentStore
from services.bookmark_store import BookmarkStore


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
async def store(documents: InMemoryDocumentStore) -> BookmarkStore:
    """Initialized store backed by memory; starts with only "Uncategorized"."""
    bookmark_store = BookmarkStore(documents)
    await bookmark_store.initialize()
    return bookmark_store


@pytest.fixture
def file_documents(tmp_path: Path) -> JsonFileDocumentStore:
    """JSON file document store rooted in a per-test temp directory."""
    return JsonFileDocumentStore(tmp_path)


@pytest.fixture
async def client(file_documents: JsonFileDocumentStore) -> AsyncGenerator[AsyncClient]:
    """Create a test client whose store writes JSON files to a temp directory."""
    # Clear the settings cache so it picks up values from the environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.dependencies import get_store
    from api.main import app

    bookmark_store = BookmarkStore(file_documents)
    await bookmark_store.initialize()

    app.dependency_overrides[get_store] = lambda: bookmark_store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
