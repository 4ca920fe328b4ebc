"""
Tests for the player: progression, gold, stat points and equipment.
"""

import pytest

from autobattle.character.player import Player, experience_to_level_up
from autobattle.core.constants import Attribute, EquipmentSlot
from autobattle.items import Armor, Weapon


@pytest.fixture
def shortsword():
    return Weapon(name="Bronze Shortsword", damage=3, level_requirement=3, value=250)


@pytest.fixture
def shield():
    return Armor(
        name="Wooden Shield", defense=4, slot=EquipmentSlot.OFF_HAND, level_requirement=5
    )


def test_new_player_defaults(player):
    assert player.level == 1
    assert player.current_class == "Adventurer"
    assert player.attributes.strength == 5
    assert player.max_hp == 85
    assert player.current_hp == 85
    assert player.stats.attack_damage == 10
    assert player.stats.armor == 2
    assert player.experience_to_next_level == 199


def test_player_rejects_level_zero():
    with pytest.raises(ValueError):
        Player("Nobody", level=0)


def test_experience_curve():
    assert experience_to_level_up(1) == 199
    assert experience_to_level_up(2) == 841
    assert experience_to_level_up(10) == 6_985


def test_gain_experience_levels_up(player):
    """
    Test that reaching the requirement levels up, grants points and heals.
    """
    player.take_damage(40)
    gained = player.gain_experience(199)
    assert gained == 1
    assert player.level == 2
    assert player.experience == 0
    assert player.unallocated_stat_points == 10
    assert player.max_hp == 95
    assert player.current_hp == 95


def test_gain_experience_multiple_levels(player):
    gained = player.gain_experience(199 + 841 + 5)
    assert gained == 2
    assert player.level == 3
    assert player.experience == 5
    assert player.unallocated_stat_points == 20


def test_gain_non_positive_experience_is_ignored(player):
    assert player.gain_experience(0) == 0
    assert player.gain_experience(-50) == 0
    assert player.experience == 0


def test_take_damage_clamps_at_zero(player):
    assert player.take_damage(1_000) == 85
    assert player.current_hp == 0
    assert not player.is_alive()


def test_heal_only_while_alive_and_capped(player):
    player.take_damage(20)
    assert player.heal(50) == 20
    assert player.current_hp == player.max_hp
    player.take_damage(1_000)
    assert player.heal(10) == 0
    player.heal_to_full()
    assert player.current_hp == player.max_hp


def test_allocate_stat_points_recomputes(player):
    player.gain_experience(199)
    assert player.allocate_stat_points(Attribute.STRENGTH, 5)
    assert player.attributes.strength == 10
    assert player.unallocated_stat_points == 5
    assert player.stats.attack_damage == 12


def test_allocate_rejects_overspend(player):
    player.gain_experience(199)
    assert not player.allocate_stat_points(Attribute.LUCK, 11)
    assert not player.allocate_stat_points(Attribute.LUCK, 0)
    assert player.unallocated_stat_points == 10
    assert player.attributes.luck == 5


def test_add_constitution_raises_max_hp_without_healing(player):
    player.add_stat_points(Attribute.CONSTITUTION, 2)
    assert player.max_hp == 95
    assert player.current_hp == 85
    assert player.stats.parry == pytest.approx(0.01 + 7 * 0.0004)


def test_add_stat_points_ignores_non_positive(player):
    player.add_stat_points(Attribute.DEXTERITY, -3)
    assert player.attributes.dexterity == 5


def test_gold(player):
    player.add_gold(100)
    player.add_gold(-40)
    assert player.gold == 100
    player.remove_gold(30)
    assert player.gold == 70
    player.remove_gold(500)
    assert player.gold == 0


def test_equip_requires_level(player, shortsword):
    player.add_item(shortsword)
    assert not player.equip(shortsword)
    assert player.stats.attack_damage == 10


def test_equip_weapon_recomputes_attack(shortsword):
    player = Player("Hero", level=3)
    player.add_item(shortsword)
    assert player.equip(shortsword)
    assert player.stats.attack_damage == 13
    assert player.unequip(shortsword)
    assert player.stats.attack_damage == 10


def test_equip_armor_recomputes_armor(shield):
    player = Player("Hero", level=5)
    player.add_item(shield)
    assert player.equip(shield)
    assert player.stats.armor == 6
    assert player.inventory.get_equipped(EquipmentSlot.OFF_HAND) is shield


def test_equip_requires_ownership(shortsword):
    player = Player("Hero", level=5)
    assert not player.equip(shortsword)


def test_equip_replaces_slot_occupant(shortsword):
    player = Player("Hero", level=5)
    better = Weapon(name="Bronze Shortsword", damage=6, level_requirement=1)
    player.add_item(shortsword)
    player.add_item(better)
    player.equip(shortsword)
    player.equip(better)
    assert player.inventory.weapon is better
    assert not player.inventory.is_equipped(shortsword)
    assert player.stats.attack_damage == 16


def test_remove_item_unequips_first(shortsword):
    player = Player("Hero", level=3)
    player.add_item(shortsword)
    player.equip(shortsword)
    assert player.remove_item(shortsword)
    assert player.inventory.weapon is None
    assert player.stats.attack_damage == 10
    assert not player.remove_item(shortsword)


def test_unequip_item_not_equipped(player, shortsword):
    player.add_item(shortsword)
    assert not player.unequip(shortsword)
