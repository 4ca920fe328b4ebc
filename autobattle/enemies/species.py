"""
Species profiles.

A profile holds every number that shapes an enemy of one species: how its
attributes grow with level and rarity, its HP formula, its fixed base values
and its rewards.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from autobattle.core.constants import Attribute, EnemyRarity, EnemySpecies


class AttributeGrowth(BaseModel):
    """Growth of one attribute: `int(base + scaling_level * per_level * mult)`."""

    base: float = Field(ge=0, description="Score at level 0.")
    per_level: float = Field(
        default=1.0,
        ge=0,
        description="Score gained per scaling level, before the rarity multiplier.",
    )


class MultiplierRange(BaseModel):
    """A rarity stat multiplier, drawn uniformly from [low, high]."""

    low: float = Field(gt=0)
    high: float = Field(gt=0)

    @model_validator(mode="after")
    def _check_order(self) -> "MultiplierRange":
        if self.high < self.low:
            raise ValueError(f"Multiplier range [{self.low}, {self.high}] is inverted")
        return self

    @property
    def width(self) -> float:
        return self.high - self.low


class SpeciesProfile(BaseModel):
    """
    All the numbers that define one enemy species.
    """

    species: EnemySpecies = Field(
        description="The species this profile describes.",
    )
    tier_starting_level: int = Field(
        ge=1,
        description="Level an encounter starts from before the level-offset roll.",
    )
    level_divisor: int = Field(
        default=1,
        ge=1,
        description="Attributes scale with `level // level_divisor`.",
    )
    attributes: dict[Attribute, AttributeGrowth] = Field(
        description="Growth rule for each of the six core attributes.",
    )
    hp_base: int = Field(
        ge=0,
        description="Flat part of the max HP formula.",
    )
    hp_per_constitution: int = Field(
        ge=0,
        description="Max HP gained per point of Constitution.",
    )
    hp_per_level: int = Field(
        ge=0,
        description="Max HP gained per level, scaled by the rarity multiplier.",
    )
    base_attack_damage: int = Field(
        ge=0,
        description="Natural weapon damage before Strength.",
    )
    armor: int = Field(
        ge=0,
        description="Flat armor; does not scale with level.",
    )
    experience_per_level: int = Field(
        default=0,
        ge=0,
        description="Base experience reward per enemy level.",
    )
    gold_flat: int = Field(
        default=0,
        ge=0,
        description="Base gold reward independent of level.",
    )
    gold_per_level: int = Field(
        default=0,
        ge=0,
        description="Base gold reward per enemy level.",
    )
    rarity_multipliers: dict[EnemyRarity, MultiplierRange] = Field(
        description="Stat multiplier range for each rarity tier.",
    )

    @model_validator(mode="after")
    def _check_complete(self) -> "SpeciesProfile":
        missing_attributes = [a.value for a in Attribute if a not in self.attributes]
        if missing_attributes:
            raise ValueError(f"{self.species} is missing attributes: {missing_attributes}")
        missing_rarities = [r.value for r in EnemyRarity if r not in self.rarity_multipliers]
        if missing_rarities:
            raise ValueError(f"{self.species} is missing rarities: {missing_rarities}")
        return self

    @property
    def display_name(self) -> str:
        return self.species.display_name

    def attribute_scores(self, level: int, multiplier: float) -> dict[str, int]:
        """Core attribute scores for the given level and rarity multiplier."""
        scaling_level = level // self.level_divisor
        return {
            attribute.value: int(growth.base + scaling_level * growth.per_level * multiplier)
            for attribute, growth in self.attributes.items()
        }

    def max_hp(self, constitution: int, level: int, multiplier: float) -> int:
        return int(
            constitution * self.hp_per_constitution
            + self.hp_base
            + level * self.hp_per_level * multiplier
        )

    def experience_reward(self, level: int) -> int:
        return self.experience_per_level * level

    def gold_reward(self, level: int) -> int:
        return self.gold_flat + self.gold_per_level * level


def deserialize_species(data: dict[str, Any]) -> SpeciesProfile:
    """Builds a species profile from a dictionary."""
    return SpeciesProfile(**data)
