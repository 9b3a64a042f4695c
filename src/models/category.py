"""Category record as persisted in the categories document."""
from pydantic import BaseModel, ConfigDict

# The default category: always present, always displayed last, never deleted.
UNCATEGORIZED = "Uncategorized"

# Order stored for the default category; larger than any order reorder() assigns.
UNCATEGORIZED_ORDER = 99999


class Category(BaseModel):
    """
    A named, colored group of bookmarks.

    `name` is the primary key (case-sensitive, never renamed). `order` only has
    meaning relative to other categories and need not be contiguous.
    """

    model_config = ConfigDict(extra="ignore")

    name: str
    color: str
    order: int = 0

    @property
    def is_uncategorized(self) -> bool:
        """Whether this is the default category."""
        return self.name == UNCATEGORIZED
