"""Bookmark record as persisted in the bookmarks document."""
from pydantic import BaseModel, ConfigDict


class Bookmark(BaseModel):
    """A titled URL tagged with the name of the category it belongs to."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    url: str
    category: str
