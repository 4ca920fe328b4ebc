"""
Tests for enemies built directly from a template.
"""

import pytest

from autobattle.character.character_stats import CoreAttributes
from autobattle.character.enemy import Enemy, EnemyTemplate
from autobattle.core.constants import EnemyRarity, EnemySpecies


def make_enemy(rarity=EnemyRarity.COMMON, level=1):
    return Enemy(
        template=EnemyTemplate(
            species=EnemySpecies.SLIME,
            rarity=rarity,
            tier_starting_level=1,
            level=level,
            rarity_multiplier=1.0,
        ),
        attributes=CoreAttributes(
            strength=6, dexterity=4, intelligence=3, constitution=5, luck=3, charisma=1
        ),
        max_hp=73,
        base_attack_damage=6,
        armor=1,
        base_experience_reward=10,
        base_gold_reward=2,
    )


def test_display_name():
    assert make_enemy().name == "Blue Slime, Level 1, COMMON"
    assert make_enemy(EnemyRarity.LEGENDARY, 4).name == "Yellow Slime, Level 4, LEGENDARY"


@pytest.mark.parametrize(
    "rarity, experience, gold",
    [
        (EnemyRarity.COMMON, 10, 2),
        (EnemyRarity.UNCOMMON, 50, 10),
        (EnemyRarity.RARE, 300, 60),
        (EnemyRarity.LEGENDARY, 10_000, 2_000),
    ],
)
def test_rewards_scale_with_rarity(rarity, experience, gold):
    enemy = make_enemy(rarity)
    assert enemy.experience_reward == experience
    assert enemy.gold_reward == gold


def test_derived_stats_use_species_base_damage():
    enemy = make_enemy()
    assert enemy.stats.attack_damage == 8
    assert enemy.stats.armor == 1


def test_boost_core_stats_truncates_and_heals():
    """
    Test that boosting scales attributes, max HP and armor and heals to the new max.
    """
    enemy = make_enemy()
    enemy.take_damage(30)
    enemy.boost_core_stats(1.5)
    assert enemy.attributes.strength == 9
    assert enemy.attributes.dexterity == 6
    assert enemy.attributes.constitution == 7
    assert enemy.max_hp == 109
    assert enemy.current_hp == 109
    assert enemy.armor == 1
    assert enemy.stats.attack_damage == 9


def test_boost_rejects_negative_multiplier():
    with pytest.raises(ValueError):
        make_enemy().boost_core_stats(-1.0)


def test_to_dict_contains_scaled_rewards():
    data = make_enemy(EnemyRarity.RARE).to_dict()
    assert data["gold_reward"] == 60
    assert data["template"]["rarity"] == "RARE"
