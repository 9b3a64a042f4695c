"""Category endpoints: create, delete (with cascade) and reorder."""
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store
from schemas.category import CategoryCreate, CategoryReorderRequest, CategoryResponse
from schemas.common import MessageResponse
from services.bookmark_store import BookmarkStore
from services.exceptions import (
    CategoryAlreadyExistsError,
    ProtectedCategoryError,
    StoreValidationError,
)

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    store: BookmarkStore = Depends(get_store),
) -> list[CategoryResponse]:
    """List categories in display order, "Uncategorized" last."""
    categories = await store.list_categories()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("", response_model=CategoryResponse)
async def create_category(
    data: CategoryCreate,
    store: BookmarkStore = Depends(get_store),
) -> CategoryResponse:
    """
    Create a category at the end of the display order.

    Returns 400 if name or color is missing or the name already exists.
    """
    try:
        category = await store.add_category(data.name, data.color)
    except (StoreValidationError, CategoryAlreadyExistsError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return CategoryResponse.model_validate(category)


@router.put("/reorder", response_model=list[CategoryResponse])
async def reorder_categories(
    data: CategoryReorderRequest,
    store: BookmarkStore = Depends(get_store),
) -> list[CategoryResponse]:
    """
    Set the display order from a list of category names.

    Unknown and duplicate names are ignored; categories not listed keep their
    position. Returns the full collection in its new order.
    """
    categories = await store.reorder_categories(data.ordered_categories)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.delete("/{name:path}", response_model=MessageResponse)
async def delete_category(
    name: str,
    store: BookmarkStore = Depends(get_store),
) -> MessageResponse:
    """
    Delete a category, moving its bookmarks to "Uncategorized".

    Returns 400 for "Uncategorized", which can never be deleted. Deleting an
    unknown category succeeds and changes nothing.
    """
    try:
        await store.delete_category(name)
    except ProtectedCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return MessageResponse(message="Category deleted")
