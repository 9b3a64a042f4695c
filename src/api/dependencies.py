"""FastAPI dependencies for injection."""
from core.config import get_settings
from services.bookmark_store import BookmarkStore, get_bookmark_store


def get_store() -> BookmarkStore:
    """Return the store created at application startup."""
    store = get_bookmark_store()
    if store is None:
        raise RuntimeError("Bookmark store is not initialized")
    return store


__all__ = [
    "get_settings",
    "get_store",
]
