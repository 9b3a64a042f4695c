"""Health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_store
from schemas.common import MessageResponse
from services.bookmark_store import BookmarkStore
from services.exceptions import StorageUnavailableError


logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    storage: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    store: BookmarkStore = Depends(get_store),
) -> HealthResponse:
    """Check application and storage health."""
    storage_status = "healthy"
    try:
        await store.list_categories()
    except StorageUnavailableError:
        logger.exception("Storage health check failed")
        storage_status = "unhealthy"

    return HealthResponse(
        status="healthy" if storage_status == "healthy" else "degraded",
        storage=storage_status,
    )


@router.get("/api/test", response_model=MessageResponse)
async def server_test() -> MessageResponse:
    """Liveness probe that touches nothing but the process."""
    return MessageResponse(message="Server is running!")
