"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import bookmarks, categories, health
from core.config import get_settings
from core.log_config import configure_logging
from db.documents import BOOKMARKS, CATEGORIES, JsonFileDocumentStore
from services.bookmark_store import BookmarkStore, set_bookmark_store
from services.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    configure_logging(app_settings.log_level)

    # Startup: open the documents and make sure "Uncategorized" exists
    documents = JsonFileDocumentStore(
        app_settings.data_dir,
        {
            BOOKMARKS: app_settings.bookmarks_file,
            CATEGORIES: app_settings.categories_file,
        },
    )
    store = BookmarkStore(documents, uncategorized_color=app_settings.uncategorized_color)
    await store.initialize()
    set_bookmark_store(store)
    logger.info("Bookmark store ready in %s", app_settings.data_dir)

    yield

    # Shutdown
    set_bookmark_store(None)


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="Bookmarks organized into named, colored, orderable categories.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(
    request: Request, exc: StorageUnavailableError,
) -> JSONResponse:
    """Report storage failures as a generic server error."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Storage is unavailable. Please try again later."},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)
app.include_router(categories.router)
