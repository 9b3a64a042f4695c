"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from schemas.common import MessageResponse
from services.bookmark_store import BookmarkStore
from services.exceptions import BookmarkNotFoundError, StoreValidationError

router = APIRouter(prefix="/api/bookmarks", tags=["bookmarks"])


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_store),
) -> list[BookmarkResponse]:
    """List all bookmarks. No particular order is implied."""
    bookmarks = await store.list_bookmarks()
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse)
async def create_bookmark(
    data: BookmarkCreate,
    store: BookmarkStore = Depends(get_store),
) -> BookmarkResponse:
    """
    Create a bookmark.

    `category` defaults to "Uncategorized" when omitted or empty.
    Returns 400 if title or url is missing or the category doesn't exist.
    """
    try:
        bookmark = await store.add_bookmark(data.title, data.url, data.category)
    except StoreValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return BookmarkResponse.model_validate(bookmark)


@router.put("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate,
    store: BookmarkStore = Depends(get_store),
) -> BookmarkResponse:
    """
    Update a bookmark with full or partial fields.

    This is how a bookmark is moved to another category. Returns 404 if the
    bookmark doesn't exist, 400 if a field is blank or the category is unknown.
    """
    try:
        bookmark = await store.update_bookmark(
            bookmark_id, title=data.title, url=data.url, category=data.category,
        )
    except BookmarkNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except StoreValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", response_model=MessageResponse)
async def delete_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_store),
) -> MessageResponse:
    """Delete a bookmark. Deleting an unknown id succeeds and changes nothing."""
    await store.delete_bookmark(bookmark_id)
    return MessageResponse(message="Bookmark deleted")
