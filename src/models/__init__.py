"""Record types stored by the bookmark/category store."""
from models.bookmark import Bookmark
from models.category import UNCATEGORIZED, UNCATEGORIZED_ORDER, Category

__all__ = ["UNCATEGORIZED", "UNCATEGORIZED_ORDER", "Bookmark", "Category"]
