"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict


class BookmarkCreate(BaseModel):
    """
    Schema for creating a bookmark.

    Fields are optional here so that missing values reach the store's
    required-field checks and come back as 400 rather than 422.
    """

    title: str | None = None
    url: str | None = None
    category: str | None = None


class BookmarkUpdate(BaseModel):
    """
    Schema for updating a bookmark (full or partial).

    Only fields that are provided are changed. An `id` in the body is ignored;
    bookmark ids never change.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    url: str | None = None
    category: str | None = None


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    category: str
