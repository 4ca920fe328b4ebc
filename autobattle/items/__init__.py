"""
Items module for the combat core.

Equipment definitions: weapons add flat attack damage, armor pieces add flat
armor, and both feed the owner's derived stats when equipped.
"""

from typing import Any

from .armor import Armor
from .base_item import EquipableItem
from .weapon import Weapon


def deserialize_item(data: dict[str, Any]) -> EquipableItem:
    """
    Builds an item from a dictionary.

    Raises:
        ValueError: If the item kind is unknown.

    """
    item_kind = data.get("item_kind")
    if item_kind == "Weapon":
        return Weapon(**data)
    if item_kind == "Armor":
        return Armor(**data)
    raise ValueError(f"Unknown item kind: {item_kind}")


__all__ = [
    "Armor",
    "EquipableItem",
    "Weapon",
    "deserialize_item",
]
