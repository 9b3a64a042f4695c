"""Shared exceptions for bookmark and category store operations."""


class StoreError(Exception):
    """Base class for every error raised by the bookmark/category store."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class StoreValidationError(StoreError):
    """
    Raised when caller-supplied data fails required-field checks.

    Raised before anything is read from or written to storage, so state is
    never touched.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"'{field}' is required")


class UnknownCategoryError(StoreValidationError):
    """Raised when a bookmark would reference a category that doesn't exist."""

    def __init__(self, category_name: str) -> None:
        self.category_name = category_name
        super().__init__("category", f"Category '{category_name}' does not exist")


class CategoryAlreadyExistsError(StoreError):
    """Raised when creating a category whose name is already taken."""

    def __init__(self, category_name: str) -> None:
        self.category_name = category_name
        super().__init__(f"Category '{category_name}' already exists")


class ProtectedCategoryError(StoreError):
    """Raised when attempting to delete the always-present default category."""

    def __init__(self, category_name: str) -> None:
        self.category_name = category_name
        super().__init__(f"Cannot delete {category_name} category")


class BookmarkNotFoundError(StoreError):
    """Raised when a bookmark id doesn't exist."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark {bookmark_id} not found")


class StorageUnavailableError(StoreError):
    """
    Raised when a document cannot be read or written.

    Never retried by the store. The request that hit it fails and the
    previously stored document is left in place.
    """

    def __init__(self, collection: str, reason: str) -> None:
        self.collection = collection
        self.reason = reason
        super().__init__(f"Storage unavailable for '{collection}': {reason}")
