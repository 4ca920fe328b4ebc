"""
Enemy factory.

Procedurally creates enemies: rolls a rarity tier and a level offset, draws a
rarity multiplier from the species profile, builds the attributes, HP and
rewards, and finally applies the caller's runtime stat multiplier.
"""

from autobattle.character.character_stats import CoreAttributes
from autobattle.character.enemy import Enemy, EnemyTemplate
from autobattle.core.constants import (
    DEFAULT_SPECIES,
    LEVEL_OFFSET_TABLE,
    RARITY_TABLE,
    EnemyRarity,
    EnemySpecies,
)
from autobattle.core.content import ContentRepository
from autobattle.core.error_handling import ContentError
from autobattle.core.logging import log_debug, log_warning
from autobattle.core.utils import RandomSource, roll_on_table

from .species import SpeciesProfile


class EnemyFactory:
    """
    Creates fresh enemies for encounters.

    Every draw comes from the injected random source, in a fixed order:
    rarity, level offset, then the rarity multiplier jitter (only when the
    rarity's multiplier range has a width).
    """

    def __init__(
        self,
        rng: RandomSource,
        repository: ContentRepository | None = None,
        default_species: EnemySpecies = DEFAULT_SPECIES,
    ) -> None:
        self.rng = rng
        self.repository = repository or ContentRepository()
        self.default_species = default_species

    def roll_rarity(self) -> EnemyRarity:
        """Rolls a rarity tier on the cumulative rarity table."""
        return roll_on_table(self.rng.random(), RARITY_TABLE)

    def roll_level_offset(self) -> int:
        """Rolls a level offset between 0 and 4."""
        return roll_on_table(self.rng.random(), LEVEL_OFFSET_TABLE)

    def roll_rarity_multiplier(self, profile: SpeciesProfile, rarity: EnemyRarity) -> float:
        """Draws the stat multiplier for a rarity from the profile's range."""
        multiplier_range = profile.rarity_multipliers[rarity]
        if multiplier_range.width <= 0:
            return multiplier_range.low
        return multiplier_range.low + self.rng.random() * multiplier_range.width

    def resolve_profile(self, species: EnemySpecies) -> SpeciesProfile:
        """
        Returns the profile for a species, falling back to the default species.

        Raises:
            ContentError: If the default species has no profile either.

        """
        profile = self.repository.get_species(species)
        if profile is not None:
            return profile
        log_warning(
            f"Species {species} is not implemented, falling back to {self.default_species}.",
            {"requested": species, "fallback": self.default_species},
        )
        fallback = self.repository.get_species(self.default_species)
        if fallback is None:
            raise ContentError(f"Default species {self.default_species} has no profile.")
        return fallback

    def create_enemy(
        self,
        species: EnemySpecies,
        tier_starting_level: int | None = None,
        stat_multiplier: float = 1.0,
    ) -> Enemy:
        """
        Creates a new enemy.

        Args:
            species (EnemySpecies):
                The requested species; unsupported ones fall back.
            tier_starting_level (int | None):
                Level before the offset roll. Defaults to the species' own.
            stat_multiplier (float):
                Runtime multiplier for attributes, max HP and armor.

        Returns:
            Enemy: A freshly generated, fully healed enemy.

        """
        profile = self.resolve_profile(species)
        if tier_starting_level is None:
            tier_starting_level = profile.tier_starting_level
        rarity = self.roll_rarity()
        level = max(1, tier_starting_level + self.roll_level_offset())
        rarity_multiplier = self.roll_rarity_multiplier(profile, rarity)

        attributes = CoreAttributes(**profile.attribute_scores(level, rarity_multiplier))
        enemy = Enemy(
            template=EnemyTemplate(
                species=profile.species,
                rarity=rarity,
                tier_starting_level=max(1, tier_starting_level),
                level=level,
                rarity_multiplier=rarity_multiplier,
                stat_multiplier=stat_multiplier,
            ),
            attributes=attributes,
            max_hp=profile.max_hp(attributes.constitution, level, rarity_multiplier),
            base_attack_damage=profile.base_attack_damage,
            armor=profile.armor,
            base_experience_reward=profile.experience_reward(level),
            base_gold_reward=profile.gold_reward(level),
        )
        if stat_multiplier != 1.0:
            enemy.boost_core_stats(stat_multiplier)
        log_debug(
            f"Created {enemy.name}.",
            {
                "max_hp": enemy.max_hp,
                "rarity_multiplier": round(rarity_multiplier, 3),
                "stat_multiplier": stat_multiplier,
            },
        )
        return enemy
