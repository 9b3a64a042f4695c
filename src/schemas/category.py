"""Pydantic schemas for category endpoints."""
from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Schema for creating a category; fields are checked by the store."""

    name: str | None = None
    color: str | None = None


class CategoryReorderRequest(BaseModel):
    """Category names in the order they should be displayed."""

    model_config = ConfigDict(populate_by_name=True)

    ordered_categories: list[str] = Field(default_factory=list, alias="orderedCategories")


class CategoryResponse(BaseModel):
    """Schema for category responses."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    color: str
    order: int
