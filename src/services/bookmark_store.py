"""
Bookmark/category store: the authoritative state behind the API.

Every operation is a whole-document load -> mutate -> save against a
DocumentStore. Mutations are serialized per collection with one asyncio.Lock
each; anything that touches both collections takes the categories lock first
and the bookmarks lock second, so lock order is fixed and cannot deadlock.
Reads take no lock and rely on the document store's atomic save.
"""
import asyncio
import logging
import time
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from pydantic import ValidationError

from db.documents import BOOKMARKS, CATEGORIES, COLLECTIONS, DocumentStore
from models.bookmark import Bookmark
from models.category import UNCATEGORIZED, UNCATEGORIZED_ORDER, Category
from services.category_ordering import next_order, reorder, sort_categories
from services.exceptions import (
    BookmarkNotFoundError,
    CategoryAlreadyExistsError,
    ProtectedCategoryError,
    StorageUnavailableError,
    StoreValidationError,
    UnknownCategoryError,
)

logger = logging.getLogger(__name__)

DEFAULT_UNCATEGORIZED_COLOR = "#808080"


def _require(field: str, value: Any) -> str:
    """Return the stripped value, or raise if it is missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise StoreValidationError(field)
    return value.strip()


def _category_or_default(value: str | None) -> str:
    """Blank or missing category names mean "Uncategorized"."""
    if value is None or not value.strip():
        return UNCATEGORIZED
    return value.strip()


def _new_bookmark_id(existing: Sequence[Bookmark]) -> int:
    """Millisecond timestamp, bumped past the highest id already in use."""
    now_ms = time.time_ns() // 1_000_000
    highest = max((b.id for b in existing), default=0)
    return max(now_ms, highest + 1)


class BookmarkStore:
    """CRUD over bookmarks and categories with referential integrity."""

    def __init__(
        self,
        documents: DocumentStore,
        uncategorized_color: str = DEFAULT_UNCATEGORIZED_COLOR,
    ) -> None:
        self._documents = documents
        self._uncategorized_color = uncategorized_color
        self._categories_lock = asyncio.Lock()
        self._bookmarks_lock = asyncio.Lock()

    @asynccontextmanager
    async def _both_locks(self) -> AsyncGenerator[None]:
        async with self._categories_lock, self._bookmarks_lock:
            yield

    # -------------------------------------------------------------------------
    # Document access (callers hold the relevant lock for writes)
    # -------------------------------------------------------------------------

    async def _load_bookmarks(self) -> list[Bookmark]:
        records = await self._documents.load(BOOKMARKS)
        try:
            return [Bookmark.model_validate(r) for r in records]
        except ValidationError as e:
            raise StorageUnavailableError(BOOKMARKS, f"malformed record: {e}") from e

    async def _load_categories(self) -> list[Category]:
        records = await self._documents.load(CATEGORIES)
        try:
            return [Category.model_validate(r) for r in records]
        except ValidationError as e:
            raise StorageUnavailableError(CATEGORIES, f"malformed record: {e}") from e

    async def _save_bookmarks(self, bookmarks: list[Bookmark]) -> None:
        await self._documents.save(BOOKMARKS, [b.model_dump() for b in bookmarks])

    async def _save_categories(self, categories: list[Category]) -> None:
        await self._documents.save(CATEGORIES, [c.model_dump() for c in categories])

    # -------------------------------------------------------------------------
    # Startup and repair
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Prepare storage before any request is served.

        Creates missing documents as empty collections, guarantees exactly one
        "Uncategorized" category pinned to the last position, then repairs any
        bookmark pointing at a category that no longer exists.
        """
        async with self._both_locks():
            for collection in COLLECTIONS:
                if not await self._documents.exists(collection):
                    await self._documents.save(collection, [])
                    logger.info("Created empty %s document", collection)

            categories = await self._load_categories()
            sentinels = [c for c in categories if c.is_uncategorized]
            changed = False

            if not sentinels:
                categories.append(
                    Category(
                        name=UNCATEGORIZED,
                        color=self._uncategorized_color,
                        order=UNCATEGORIZED_ORDER,
                    ),
                )
                logger.info("Created %s category", UNCATEGORIZED)
                changed = True
            elif len(sentinels) > 1:
                first = sentinels[0]
                categories = [c for c in categories if not c.is_uncategorized or c is first]
                logger.warning(
                    "Dropped %d duplicate %s categories", len(sentinels) - 1, UNCATEGORIZED,
                )
                changed = True

            for i, category in enumerate(categories):
                if category.is_uncategorized and category.order != UNCATEGORIZED_ORDER:
                    categories[i] = category.model_copy(update={"order": UNCATEGORIZED_ORDER})
                    changed = True

            if changed:
                await self._save_categories(categories)

            await self._repair_dangling(categories)

    async def repair_dangling_references(self) -> int:
        """
        Point every bookmark whose category doesn't exist at "Uncategorized".

        Returns:
            Number of bookmarks rewritten.
        """
        async with self._both_locks():
            categories = await self._load_categories()
            return await self._repair_dangling(categories)

    async def _repair_dangling(self, categories: list[Category]) -> int:
        names = {c.name for c in categories}
        bookmarks = await self._load_bookmarks()
        repaired = 0
        for i, bookmark in enumerate(bookmarks):
            if bookmark.category not in names:
                bookmarks[i] = bookmark.model_copy(update={"category": UNCATEGORIZED})
                repaired += 1
        if repaired:
            await self._save_bookmarks(bookmarks)
            logger.warning(
                "Moved %d bookmarks with missing categories to %s", repaired, UNCATEGORIZED,
            )
        return repaired

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_bookmarks(self) -> list[Bookmark]:
        """All bookmarks, in stored order."""
        return await self._load_bookmarks()

    async def get_bookmark(self, bookmark_id: int) -> Bookmark:
        """
        Get a single bookmark.

        Raises:
            BookmarkNotFoundError: If no bookmark has this id.
        """
        for bookmark in await self._load_bookmarks():
            if bookmark.id == bookmark_id:
                return bookmark
        raise BookmarkNotFoundError(bookmark_id)

    async def list_categories(self) -> list[Category]:
        """All categories, sorted for display with "Uncategorized" last."""
        return sort_categories(await self._load_categories())

    # -------------------------------------------------------------------------
    # Bookmark mutations
    # -------------------------------------------------------------------------

    async def _ensure_category_exists(self, name: str) -> None:
        """Caller must hold the categories lock."""
        if name == UNCATEGORIZED:
            return
        if not any(c.name == name for c in await self._load_categories()):
            raise UnknownCategoryError(name)

    async def add_bookmark(self, title: str, url: str, category: str | None = None) -> Bookmark:
        """
        Create a bookmark with a fresh id.

        Args:
            title: Display title, required.
            url: Link target, required (not otherwise validated).
            category: Existing category name; blank or None means "Uncategorized".

        Raises:
            StoreValidationError: If title or url is missing.
            UnknownCategoryError: If the category doesn't exist.
        """
        title = _require("title", title)
        url = _require("url", url)
        category = _category_or_default(category)

        lock = self._both_locks() if category != UNCATEGORIZED else self._bookmarks_lock
        async with lock:
            await self._ensure_category_exists(category)
            bookmarks = await self._load_bookmarks()
            bookmark = Bookmark(
                id=_new_bookmark_id(bookmarks),
                title=title,
                url=url,
                category=category,
            )
            bookmarks.append(bookmark)
            await self._save_bookmarks(bookmarks)
        return bookmark

    async def delete_bookmark(self, bookmark_id: int) -> bool:
        """
        Delete a bookmark. Deleting an unknown id is a no-op.

        Returns:
            True if a bookmark was removed.
        """
        async with self._bookmarks_lock:
            bookmarks = await self._load_bookmarks()
            remaining = [b for b in bookmarks if b.id != bookmark_id]
            if len(remaining) == len(bookmarks):
                return False
            await self._save_bookmarks(remaining)
        return True

    async def update_bookmark(
        self,
        bookmark_id: int,
        title: str | None = None,
        url: str | None = None,
        category: str | None = None,
    ) -> Bookmark:
        """
        Update the given fields of a bookmark; None leaves a field unchanged.

        The id is immutable. A blank category moves the bookmark to
        "Uncategorized".

        Raises:
            StoreValidationError: If title or url is given but blank.
            UnknownCategoryError: If the category doesn't exist.
            BookmarkNotFoundError: If no bookmark has this id.
        """
        changes: dict[str, str] = {}
        if title is not None:
            changes["title"] = _require("title", title)
        if url is not None:
            changes["url"] = _require("url", url)
        if category is not None:
            changes["category"] = _category_or_default(category)

        check_category = changes.get("category", UNCATEGORIZED) != UNCATEGORIZED
        lock = self._both_locks() if check_category else self._bookmarks_lock
        async with lock:
            bookmarks = await self._load_bookmarks()
            for i, bookmark in enumerate(bookmarks):
                if bookmark.id == bookmark_id:
                    break
            else:
                raise BookmarkNotFoundError(bookmark_id)
            if check_category:
                await self._ensure_category_exists(changes["category"])

            updated = bookmark.model_copy(update=changes)
            if updated != bookmark:
                bookmarks[i] = updated
                await self._save_bookmarks(bookmarks)
        return updated

    async def update_bookmark_category(self, bookmark_id: int, category: str) -> Bookmark:
        """Move a bookmark to another existing category."""
        return await self.update_bookmark(bookmark_id, category=category or UNCATEGORIZED)

    # -------------------------------------------------------------------------
    # Category mutations
    # -------------------------------------------------------------------------

    async def add_category(self, name: str, color: str) -> Category:
        """
        Create a category at the end of the display order.

        Raises:
            StoreValidationError: If name or color is missing.
            CategoryAlreadyExistsError: If the name is taken (case-sensitive).
        """
        name = _require("name", name)
        color = _require("color", color)

        async with self._categories_lock:
            categories = await self._load_categories()
            if any(c.name == name for c in categories):
                raise CategoryAlreadyExistsError(name)
            category = Category(name=name, color=color, order=next_order(categories))
            categories.append(category)
            await self._save_categories(categories)
        logger.info("Created category %r with order %d", name, category.order)
        return category

    async def delete_category(self, name: str) -> int:
        """
        Delete a category and move its bookmarks to "Uncategorized".

        Bookmarks are rewritten before the category is removed, so a failure
        between the two saves leaves the bookmarks moved and the category still
        present rather than bookmarks pointing at nothing. Deleting an unknown
        name is a no-op.

        Returns:
            Number of bookmarks moved.

        Raises:
            ProtectedCategoryError: If name is "Uncategorized".
        """
        if name == UNCATEGORIZED:
            raise ProtectedCategoryError(name)

        async with self._both_locks():
            categories = await self._load_categories()
            remaining = [c for c in categories if c.name != name]
            if len(remaining) == len(categories):
                return 0

            bookmarks = await self._load_bookmarks()
            moved = 0
            for i, bookmark in enumerate(bookmarks):
                if bookmark.category == name:
                    bookmarks[i] = bookmark.model_copy(update={"category": UNCATEGORIZED})
                    moved += 1
            if moved:
                await self._save_bookmarks(bookmarks)

            try:
                await self._save_categories(remaining)
            except StorageUnavailableError:
                logger.exception(
                    "Moved %d bookmarks out of %r but failed to remove the category",
                    moved,
                    name,
                )
                raise
        logger.info("Deleted category %r, moved %d bookmarks to %s", name, moved, UNCATEGORIZED)
        return moved

    async def reorder_categories(self, names: Sequence[str]) -> list[Category]:
        """
        Reorder categories to follow `names`; see category_ordering.reorder.

        Returns:
            The full category collection sorted in its new display order.
        """
        async with self._categories_lock:
            categories = reorder(await self._load_categories(), names)
            await self._save_categories(categories)
        logger.info("Reordered categories: %s", [c.name for c in categories])
        return categories


# Global store state using a container to avoid global statement
class _StoreState:
    """Container for the process-wide store."""

    store: BookmarkStore | None = None


_state = _StoreState()


def get_bookmark_store() -> BookmarkStore | None:
    """Get the global store instance."""
    return _state.store


def set_bookmark_store(store: BookmarkStore | None) -> None:
    """Set the global store instance."""
    _state.store = store
