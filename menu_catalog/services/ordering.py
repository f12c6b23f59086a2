"""
Order index arithmetic for an establishment's category list.

All functions are pure: they take the current ordered items and return the
(category id, order index) changes to persist. Items are expected in display
order, i.e. sorted by ``order_index`` ascending.
"""

from dataclasses import replace
from typing import Dict, List, Sequence

from menu_catalog.schemas import Category
from menu_catalog.services.store import OrderChange


def next_order_index(items: Sequence[Category]) -> int:
    """
    Order index for an entry appended at the end.
    """
    return max((item.order_index for item in items), default=-1) + 1


def clamp_position(position: int, length: int) -> int:
    return max(0, min(position, length - 1))


def move(items: Sequence[Category], old_position: int, new_position: int) -> List[Category]:
    """
    Move one entry, keeping every other entry in its relative order.
    """
    moved = list(items)
    moved.insert(new_position, moved.pop(old_position))
    return moved


def dense_changes(items: Sequence[Category]) -> List[OrderChange]:
    """
    Changes that make the order indexes of ``items`` consecutive.

    The sequence starts at the smallest existing index, so a store that does
    not count from zero keeps its base. Only entries whose index differs are
    returned.
    """
    if not items:
        return []

    base = min(item.order_index for item in items)
    return [
        (item.id, base + position)
        for position, item in enumerate(items)
        if item.order_index != base + position
    ]


def removal_changes(items: Sequence[Category], removed: Category) -> List[OrderChange]:
    """
    Changes closing the gap left by ``removed``: every later entry moves up by one.
    """
    return [
        (item.id, item.order_index - 1)
        for item in items
        if item.id != removed.id and item.order_index > removed.order_index
    ]


def apply_changes(items: Sequence[Category], changes: Sequence[OrderChange]) -> List[Category]:
    """
    Apply order index changes and return the entries sorted by order index.
    """
    new_indexes: Dict[str, int] = dict(changes)
    updated = [
        replace(item, order_index=new_indexes[item.id]) if item.id in new_indexes else item
        for item in items
    ]
    return sorted(updated, key=lambda item: item.order_index)
