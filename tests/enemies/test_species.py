"""
Tests for species profiles.
"""

import pytest

from autobattle.core.constants import EnemyRarity, EnemySpecies
from autobattle.enemies.species import MultiplierRange


def test_profiles_loaded_for_slime_and_wolf(repository):
    assert repository.supported_species() == [EnemySpecies.SLIME, EnemySpecies.WOLF]
    assert repository.get_species(EnemySpecies.GOBLIN) is None


def test_slime_attributes_grow_every_other_level(repository):
    slime = repository.get_species(EnemySpecies.SLIME)
    assert slime.attribute_scores(1, 1.0) == slime.attribute_scores(0, 1.0)
    assert slime.attribute_scores(2, 1.0)["strength"] == 7
    assert slime.attribute_scores(4, 2.5)["strength"] == 11


def test_wolf_rewards(repository):
    wolf = repository.get_species(EnemySpecies.WOLF)
    assert wolf.tier_starting_level == 6
    assert wolf.experience_reward(7) == 175
    assert wolf.gold_reward(7) == 21


def test_rarity_ranges(repository):
    wolf = repository.get_species(EnemySpecies.WOLF)
    assert wolf.rarity_multipliers[EnemyRarity.COMMON].width == 0
    assert wolf.rarity_multipliers[EnemyRarity.RARE].low == 3.0
    assert wolf.rarity_multipliers[EnemyRarity.RARE].width == pytest.approx(0.5)


def test_inverted_multiplier_range_rejected():
    with pytest.raises(ValueError):
        MultiplierRange(low=2.0, high=1.0)
