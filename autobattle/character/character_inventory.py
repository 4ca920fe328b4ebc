"""
Character inventory management module.

Handles owning, equipping and unequipping weapons and armor for a player,
including level requirements and one item per slot.
"""

from typing import Any

from autobattle.core.constants import EquipmentSlot
from autobattle.core.logging import log_debug, log_warning
from autobattle.items import Armor, EquipableItem, Weapon


class CharacterInventory:
    """
    Manages the items a player carries and which of them are equipped.

    Equipped items stay in `items`; `equipped` only references them by slot.
    Every change to the equipped set asks the owner to recompute its derived
    stats.

    Attributes:
        items (list[EquipableItem]):
            Everything the player carries.
        equipped (dict[EquipmentSlot, EquipableItem]):
            The item occupying each slot.

    """

    items: list[EquipableItem]
    equipped: dict[EquipmentSlot, EquipableItem]

    def __init__(self, owner: Any) -> None:
        """
        Initialize the CharacterInventory with the owning player.

        Args:
            owner (Any):
                The Player this inventory belongs to.

        """
        self._owner = owner
        self.items = []
        self.equipped = {}

    # ============================================================================
    # QUERIES
    # ============================================================================

    def contains(self, item: EquipableItem) -> bool:
        return any(owned is item for owned in self.items)

    def is_equipped(self, item: EquipableItem) -> bool:
        return any(equipped is item for equipped in self.equipped.values())

    def get_equipped(self, slot: EquipmentSlot) -> EquipableItem | None:
        return self.equipped.get(slot)

    @property
    def weapon(self) -> Weapon | None:
        item = self.equipped.get(EquipmentSlot.WEAPON)
        return item if isinstance(item, Weapon) else None

    @property
    def weapon_bonus(self) -> int:
        """Flat damage of the equipped weapon, 0 when unarmed."""
        return self.weapon.damage if self.weapon else 0

    @property
    def armor_bonus(self) -> int:
        """Sum of the defense of every equipped armor piece."""
        return sum(
            item.defense for item in self.equipped.values() if isinstance(item, Armor)
        )

    # ============================================================================
    # MUTATIONS
    # ============================================================================

    def add(self, item: EquipableItem) -> None:
        self.items.append(item)
        log_debug(f"{self._owner.name} added {item.name} to inventory.")

    def remove(self, item: EquipableItem) -> bool:
        """
        Removes an item, unequipping it first if needed.

        Returns:
            bool: True if the item was carried and has been removed.

        """
        if not self.contains(item):
            return False
        if self.is_equipped(item):
            self.unequip(item)
        self.items = [owned for owned in self.items if owned is not item]
        log_debug(f"{self._owner.name} removed {item.name} from inventory.")
        return True

    def can_equip(self, item: EquipableItem) -> bool:
        """
        Check if the owner can equip a specific item.

        Args:
            item (EquipableItem): The item to check.

        Returns:
            bool: True if the item is carried and the level requirement is met.

        """
        if not self.contains(item):
            log_warning(
                f"{self._owner.name} does not carry {item.name}.",
                {"item": item.name},
            )
            return False
        if self._owner.level < item.level_requirement:
            log_warning(
                f"{self._owner.name} is too low level to equip {item.name}.",
                {"level": self._owner.level, "required": item.level_requirement},
            )
            return False
        return True

    def equip(self, item: EquipableItem) -> bool:
        """
        Equips an item, replacing whatever occupied its slot.

        Returns:
            bool: True if the item is equipped after the call.

        """
        if not self.can_equip(item):
            return False
        current = self.equipped.get(item.slot)
        if current is item:
            return True
        self.equipped[item.slot] = item
        log_debug(
            f"{self._owner.name} equipped {item.name} in {item.slot}.",
            {"replaced": current.name if current else None},
        )
        self._owner.recalculate_derived_stats()
        return True

    def unequip(self, item: EquipableItem) -> bool:
        """
        Unequips an item.

        Returns:
            bool: True if the item was equipped and has been removed from its slot.

        """
        if self.equipped.get(item.slot) is not item:
            log_warning(
                f"{item.name} is not equipped by {self._owner.name}.",
                {"slot": item.slot},
            )
            return False
        del self.equipped[item.slot]
        log_debug(f"{self._owner.name} unequipped {item.name} from {item.slot}.")
        self._owner.recalculate_derived_stats()
        return True
