"""Inventory reconciliation — stack named adds and removes onto an item ledger."""

from __future__ import annotations

from typing import Iterable

from infected.models.state import Item


def find_item(items: list[Item], name: str) -> int | None:
    """Index of the first item whose name matches case-insensitively."""
    wanted = name.strip().lower()
    for idx, item in enumerate(items):
        if item.name.strip().lower() == wanted:
            return idx
    return None


def apply_inventory(
    items: list[Item],
    add: Iterable[str] | None = None,
    remove: Iterable[str] | None = None,
) -> list[Item]:
    """Return a new ledger with ``add`` and then ``remove`` applied.

    Each added name stacks onto an existing item (quantity + 1) or appends a
    new significant item. Each removed name takes one off the stack and drops
    the item when it reaches zero; names not carried are ignored.
    """
    inventory = list(items)

    for name in add or ():
        name = name.strip()
        idx = find_item(inventory, name)
        if idx is None:
            inventory.append(Item(name=name))
        else:
            existing = inventory[idx]
            inventory[idx] = existing.model_copy(update={"quantity": existing.quantity + 1})

    for name in remove or ():
        idx = find_item(inventory, name)
        if idx is None:
            continue
        existing = inventory[idx]
        if existing.quantity <= 1:
            del inventory[idx]
        else:
            inventory[idx] = existing.model_copy(update={"quantity": existing.quantity - 1})

    return inventory


def total_quantity(items: list[Item]) -> int:
    return sum(item.quantity for item in items)
