"""
Enemy module.

A procedurally generated opponent. Enemies are built by the enemy factory
for a single encounter and never persisted.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from autobattle.core.constants import EnemyRarity, EnemySpecies
from autobattle.core.logging import log_debug

from .character_stats import CoreAttributes, DerivedStats, compute_derived_stats
from .combatant import apply_damage


class EnemyTemplate(BaseModel):
    """The rolled parameters an enemy was generated from."""

    model_config = ConfigDict(frozen=True)

    species: EnemySpecies = Field(
        description="The species actually generated (after any fallback).",
    )
    rarity: EnemyRarity = Field(
        description="The rolled rarity tier.",
    )
    tier_starting_level: int = Field(
        ge=1,
        description="Level the encounter started from before the offset roll.",
    )
    level: int = Field(
        ge=1,
        description="The rolled level.",
    )
    rarity_multiplier: float = Field(
        gt=0,
        description="The stat multiplier drawn for the rarity tier.",
    )
    stat_multiplier: float = Field(
        default=1.0,
        ge=0,
        description="Runtime difficulty multiplier supplied by the caller.",
    )


def enemy_display_name(species: EnemySpecies, rarity: EnemyRarity, level: int) -> str:
    """Display name such as 'Green Slime, Level 3, UNCOMMON'."""
    return f"{rarity.color_name} {species.display_name}, Level {level}, {rarity}"


class Enemy:
    """
    Represents an enemy combatant.

    Attributes:
        name (str):
            The display name, including color, level and rarity.
        template (EnemyTemplate):
            The parameters the enemy was rolled from.
        attributes (CoreAttributes):
            The six core attributes.
        max_hp (int):
            Maximum hit points.
        current_hp (int):
            Current hit points.
        base_attack_damage (int):
            Natural weapon damage before Strength.
        armor (int):
            Flat armor.
        base_experience_reward (int):
            Experience before the rarity multiplier.
        base_gold_reward (int):
            Gold before the rarity multiplier.
        stats (DerivedStats):
            Derived combat stats.

    """

    def __init__(
        self,
        template: EnemyTemplate,
        attributes: CoreAttributes,
        max_hp: int,
        base_attack_damage: int,
        armor: int,
        base_experience_reward: int = 0,
        base_gold_reward: int = 0,
    ) -> None:
        self.template = template
        self.name = enemy_display_name(template.species, template.rarity, template.level)
        self.attributes = attributes
        self.max_hp = max_hp
        self.current_hp = max_hp
        self.base_attack_damage = base_attack_damage
        self.armor = armor
        self.base_experience_reward = base_experience_reward
        self.base_gold_reward = base_gold_reward
        self.stats = DerivedStats()
        self.recalculate_derived_stats()

    @property
    def species(self) -> EnemySpecies:
        return self.template.species

    @property
    def rarity(self) -> EnemyRarity:
        return self.template.rarity

    @property
    def level(self) -> int:
        return self.template.level

    @property
    def experience_reward(self) -> int:
        """Experience granted on defeat, scaled by rarity."""
        return int(self.base_experience_reward * self.rarity.reward_multiplier)

    @property
    def gold_reward(self) -> int:
        """Gold granted on defeat, scaled by rarity."""
        return int(self.base_gold_reward * self.rarity.reward_multiplier)

    def recalculate_derived_stats(self) -> None:
        self.stats = compute_derived_stats(
            self.attributes,
            base_weapon_damage=self.base_attack_damage,
            base_armor=self.armor,
        )

    def boost_core_stats(self, multiplier: float) -> None:
        """
        Scales attributes, max HP and armor, then heals to the new maximum.

        Every scaled value is truncated to an integer.

        Args:
            multiplier (float): The scaling factor, e.g. 1.05 for a 5% boost.

        """
        if multiplier < 0:
            raise ValueError(f"Stat multiplier must not be negative, got {multiplier}.")
        self.attributes = self.attributes.scaled(multiplier)
        self.max_hp = int(self.max_hp * multiplier)
        self.armor = int(self.armor * multiplier)
        self.current_hp = self.max_hp
        self.recalculate_derived_stats()
        log_debug(
            f"Boosted {self.name}.",
            {"multiplier": multiplier, "max_hp": self.max_hp, "armor": self.armor},
        )

    def take_damage(self, amount: int) -> int:
        return apply_damage(self, amount)

    def is_alive(self) -> bool:
        return self.current_hp > 0

    def to_dict(self) -> dict[str, Any]:
        """Summary of the enemy, e.g. for battle reports."""
        return {
            "name": self.name,
            "template": self.template.model_dump(mode="json"),
            "attributes": self.attributes.model_dump(),
            "max_hp": self.max_hp,
            "current_hp": self.current_hp,
            "armor": self.armor,
            "experience_reward": self.experience_reward,
            "gold_reward": self.gold_reward,
        }

    def __repr__(self) -> str:
        return f"Enemy(name='{self.name}', hp={self.current_hp}/{self.max_hp})"
