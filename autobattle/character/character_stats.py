"""
Character stats module for the combat core.

Holds the six core attributes and the derived combat stats, and the single
function that recomputes the latter from the former plus equipment.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from autobattle.combat import formulas
from autobattle.core.constants import Attribute


class CoreAttributes(BaseModel):
    """
    The six core attributes of a combatant.

    Instances are immutable: owners replace them with `with_changes` and then
    recompute their derived stats, so derived values can never go stale.
    """

    model_config = ConfigDict(frozen=True)

    strength: int = Field(default=0, ge=0)
    dexterity: int = Field(default=0, ge=0)
    intelligence: int = Field(default=0, ge=0)
    luck: int = Field(default=0, ge=0)
    constitution: int = Field(default=0, ge=0)
    charisma: int = Field(default=0, ge=0)

    @classmethod
    def uniform(cls, value: int) -> "CoreAttributes":
        """Builds attributes with every score set to the same value."""
        return cls(**{attribute.value: value for attribute in Attribute})

    def get(self, attribute: Attribute) -> int:
        """Returns the score of the given attribute."""
        return getattr(self, attribute.value)

    def with_changes(self, **changes: Any) -> "CoreAttributes":
        """Returns a validated copy with the given scores replaced."""
        return CoreAttributes(**{**self.model_dump(), **changes})

    def add(self, attribute: Attribute, amount: int) -> "CoreAttributes":
        """Returns a copy with `amount` added to one attribute."""
        return self.with_changes(**{attribute.value: self.get(attribute) + amount})

    def scaled(self, multiplier: float) -> "CoreAttributes":
        """Returns a copy with every score multiplied and truncated."""
        return CoreAttributes(
            **{name: int(value * multiplier) for name, value in self.model_dump().items()}
        )


class DerivedStats(BaseModel):
    """Combat stats computed from core attributes and equipment."""

    model_config = ConfigDict(frozen=True)

    armor: int = 0
    dodge: float = 0.0
    parry: float = 0.0
    attack_speed: float = 0.0
    attack_damage: int = 0
    crit_chance: float = 0.0
    crit_damage: float = 0.0


def compute_derived_stats(
    attributes: CoreAttributes,
    base_weapon_damage: int,
    weapon_bonus: int = 0,
    base_armor: int = 0,
    armor_bonus: int = 0,
) -> DerivedStats:
    """
    Recomputes every derived stat from scratch.

    Args:
        attributes (CoreAttributes): The current core attributes.
        base_weapon_damage (int): Unarmed or species base attack damage.
        weapon_bonus (int): Flat damage of the equipped weapon, if any.
        base_armor (int): Flat armor before equipment.
        armor_bonus (int): Sum of the equipped armor pieces' defense.

    Returns:
        DerivedStats: The derived stats.

    """
    return DerivedStats(
        armor=base_armor + armor_bonus,
        dodge=formulas.dodge_chance(attributes.dexterity),
        parry=formulas.parry_chance(attributes.constitution),
        attack_speed=formulas.attack_speed(attributes.dexterity),
        attack_damage=formulas.attack_damage(
            base_weapon_damage, attributes.strength, weapon_bonus
        ),
        crit_chance=formulas.crit_chance(attributes.luck),
        crit_damage=formulas.crit_damage_multiplier(attributes.dexterity, attributes.luck),
    )
