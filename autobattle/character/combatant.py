"""
The read/write contract shared by players and enemies.
"""

from typing import Protocol, runtime_checkable

from .character_stats import CoreAttributes, DerivedStats


@runtime_checkable
class Combatant(Protocol):
    """
    Anything that can stand on one side of a battle.

    Attributes:
        name (str): Display name; not unique.
        level (int): Current level.
        current_hp (int): Current hit points, never below 0.
        max_hp (int): Maximum hit points.
        attributes (CoreAttributes): The six core attributes.
        stats (DerivedStats): Derived combat stats for the current attributes.

    """

    name: str
    level: int
    current_hp: int
    max_hp: int
    attributes: CoreAttributes
    stats: DerivedStats

    def take_damage(self, amount: int) -> int:
        """Reduces HP by `amount` (clamped at 0) and returns the HP lost."""
        ...

    def is_alive(self) -> bool: ...

    def recalculate_derived_stats(self) -> None: ...


def apply_damage(combatant: Combatant, amount: int) -> int:
    """
    Shared HP bookkeeping for `take_damage` implementations.

    Returns:
        int: The HP actually lost.

    """
    amount = max(0, amount)
    lost = min(amount, combatant.current_hp)
    combatant.current_hp -= lost
    return lost
