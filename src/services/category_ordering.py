"""Display ordering of categories, with "Uncategorized" pinned last."""
from collections.abc import Iterable, Sequence

from models.category import UNCATEGORIZED_ORDER, Category


def _sort_key(category: Category) -> tuple[bool, int]:
    # The default category sorts after everything, whatever order it stores.
    return (category.is_uncategorized, category.order)


def sort_categories(categories: Iterable[Category]) -> list[Category]:
    """
    Return categories ascending by order, "Uncategorized" last.

    The sort is stable, so categories sharing an order keep their relative
    position from the input.
    """
    return sorted(categories, key=_sort_key)


def next_order(categories: Iterable[Category]) -> int:
    """
    Order value for a newly created category.

    One more than the highest order among real categories, or 0 when there
    are none, so new categories append to the end of the visible list.
    """
    orders = [c.order for c in categories if not c.is_uncategorized]
    return max(orders) + 1 if orders else 0


def reorder(categories: Sequence[Category], desired_names: Sequence[str]) -> list[Category]:
    """
    Apply a user-chosen name sequence to the category orders.

    Each real category named in `desired_names` gets its 0-based position in
    the sequence as its new order (first occurrence wins for duplicates).
    Categories not named keep their order. Unknown names are ignored; nothing
    is created or removed. "Uncategorized" is always reset to the pinned order.

    Args:
        categories: The full current category collection.
        desired_names: Category names in the order the user wants them shown.

    Returns:
        New Category objects for the whole collection, sorted for display.
    """
    positions: dict[str, int] = {}
    for index, name in enumerate(desired_names):
        positions.setdefault(name, index)

    updated = []
    for category in categories:
        if category.is_uncategorized:
            new_order = UNCATEGORIZED_ORDER
        else:
            new_order = positions.get(category.name, category.order)
        updated.append(category.model_copy(update={"order": new_order}))
    return sort_categories(updated)
