"""
Player module.

The player-controlled combatant: progression (experience, levels, stat
points), gold, equipment, and the derived-stat recomputation hook the combat
core calls after every stat-affecting event.
"""

from autobattle.core.constants import (
    PLAYER_BASE_ARMOR,
    PLAYER_BASE_WEAPON_DAMAGE,
    PLAYER_DEFAULT_CLASS,
    PLAYER_STARTING_ATTRIBUTE,
    PLAYER_STAT_POINTS_PER_LEVEL,
    Attribute,
)
from autobattle.core.logging import log_debug, log_info, log_warning
from autobattle.items import EquipableItem

from .character_inventory import CharacterInventory
from .character_stats import CoreAttributes, DerivedStats, compute_derived_stats
from .combatant import apply_damage


def experience_to_level_up(level: int) -> int:
    """Experience needed to advance from `level` to the next one."""
    return int(14.0 * level**2 + 600.0 * level - 415.0)


def player_max_hp(constitution: int, level: int) -> int:
    """Maximum HP of a player."""
    return 50 + constitution * 5 + level * 10


class Player:
    """
    Represents the player character.

    Attributes:
        name (str):
            The player's name.
        level (int):
            The current level.
        experience (int):
            Experience gathered towards the next level.
        gold (int):
            The player's gold, never negative.
        unallocated_stat_points (int):
            Points earned on level-up and not yet spent.
        current_class (str):
            The player's class label.
        attributes (CoreAttributes):
            The six core attributes.
        stats (DerivedStats):
            Derived combat stats; recomputed on every change.
        inventory (CharacterInventory):
            Carried and equipped items.

    """

    def __init__(
        self,
        name: str,
        attributes: CoreAttributes | None = None,
        level: int = 1,
    ) -> None:
        if level < 1:
            raise ValueError("Player level must be at least 1.")
        self.name = name
        self.level = level
        self.experience = 0
        self.gold = 0
        self.unallocated_stat_points = 0
        self.current_class = PLAYER_DEFAULT_CLASS
        self.attributes = attributes or CoreAttributes.uniform(PLAYER_STARTING_ATTRIBUTE)
        self.inventory = CharacterInventory(owner=self)
        self.stats = DerivedStats()
        self.max_hp = player_max_hp(self.attributes.constitution, self.level)
        self.current_hp = self.max_hp
        self.recalculate_derived_stats()

    # ============================================================================
    # COMBATANT CONTRACT
    # ============================================================================

    @property
    def experience_to_next_level(self) -> int:
        return experience_to_level_up(self.level)

    def recalculate_derived_stats(self) -> None:
        """Recomputes every derived stat from attributes and equipment."""
        self.stats = compute_derived_stats(
            self.attributes,
            base_weapon_damage=PLAYER_BASE_WEAPON_DAMAGE,
            weapon_bonus=self.inventory.weapon_bonus,
            base_armor=PLAYER_BASE_ARMOR,
            armor_bonus=self.inventory.armor_bonus,
        )

    def take_damage(self, amount: int) -> int:
        lost = apply_damage(self, amount)
        log_debug(
            f"{self.name} took {lost} damage.",
            {"hp": f"{self.current_hp}/{self.max_hp}"},
        )
        return lost

    def is_alive(self) -> bool:
        return self.current_hp > 0

    def heal(self, amount: int) -> int:
        """
        Heals a living player, capped at max HP.

        Returns:
            int: The HP actually restored.

        """
        if not self.is_alive() or amount <= 0:
            return 0
        restored = min(amount, self.max_hp - self.current_hp)
        self.current_hp += restored
        return restored

    def heal_to_full(self) -> None:
        """Restores HP to the maximum, also reviving a defeated player."""
        self.current_hp = self.max_hp

    # ============================================================================
    # PROGRESSION
    # ============================================================================

    def gain_experience(self, amount: int) -> int:
        """
        Adds experience and levels up as many times as it allows.

        Returns:
            int: The number of levels gained.

        """
        if amount <= 0:
            return 0
        self.experience += amount
        levels_gained = 0
        while self.experience >= self.experience_to_next_level:
            self.level_up()
            levels_gained += 1
        log_debug(
            f"{self.name} gained {amount} experience.",
            {"experience": self.experience, "level": self.level},
        )
        return levels_gained

    def level_up(self) -> None:
        """Advances one level, grants stat points and heals to full."""
        self.experience -= self.experience_to_next_level
        self.level += 1
        self.unallocated_stat_points += PLAYER_STAT_POINTS_PER_LEVEL
        self.max_hp = player_max_hp(self.attributes.constitution, self.level)
        self.current_hp = self.max_hp
        self.recalculate_derived_stats()
        log_info(
            f"{self.name} leveled up to {self.level}.",
            {"unallocated_stat_points": self.unallocated_stat_points},
        )

    def add_stat_points(self, attribute: Attribute, amount: int) -> None:
        """
        Raises an attribute directly, e.g. during character creation.

        Non-positive amounts are ignored.

        """
        if amount <= 0:
            return
        self.attributes = self.attributes.add(attribute, amount)
        self.max_hp = player_max_hp(self.attributes.constitution, self.level)
        self.current_hp = min(self.current_hp, self.max_hp)
        self.recalculate_derived_stats()

    def allocate_stat_points(self, attribute: Attribute, amount: int) -> bool:
        """
        Spends unallocated stat points on an attribute.

        Returns:
            bool: False when the amount is not positive or exceeds the points available.

        """
        if amount <= 0 or amount > self.unallocated_stat_points:
            log_warning(
                f"{self.name} cannot allocate {amount} points.",
                {"available": self.unallocated_stat_points},
            )
            return False
        self.unallocated_stat_points -= amount
        self.add_stat_points(attribute, amount)
        return True

    # ============================================================================
    # GOLD AND ITEMS
    # ============================================================================

    def add_gold(self, amount: int) -> None:
        if amount > 0:
            self.gold += amount

    def remove_gold(self, amount: int) -> None:
        if amount > 0:
            self.gold = max(0, self.gold - amount)

    def add_item(self, item: EquipableItem) -> None:
        self.inventory.add(item)

    def remove_item(self, item: EquipableItem) -> bool:
        return self.inventory.remove(item)

    def equip(self, item: EquipableItem) -> bool:
        return self.inventory.equip(item)

    def unequip(self, item: EquipableItem) -> bool:
        return self.inventory.unequip(item)

    def __repr__(self) -> str:
        return f"Player(name='{self.name}', level={self.level}, hp={self.current_hp}/{self.max_hp})"
