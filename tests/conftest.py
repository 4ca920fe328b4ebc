"""
Shared fixtures for the combat core tests.
"""

import random

import pytest

from autobattle.character.character_stats import CoreAttributes, DerivedStats
from autobattle.character.combatant import apply_damage
from autobattle.character.player import Player
from autobattle.combat.resolver import CombatResolver
from autobattle.core.content import ContentRepository
from autobattle.core.error_handling import ERROR_HANDLER
from autobattle.enemies.enemy_factory import EnemyFactory


class SequenceRandom:
    """A random source that replays a fixed list of draws, then fails."""

    def __init__(self, values):
        self.values = list(values)
        self.draws = 0

    def random(self) -> float:
        if self.draws >= len(self.values):
            raise AssertionError(f"Unexpected draw #{self.draws + 1}")
        value = self.values[self.draws]
        self.draws += 1
        return value


class ConstantRandom:
    """A random source that always returns the same draw."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


class DummyCombatant:
    """A combatant whose derived stats are set directly."""

    def __init__(self, name="Dummy", hp=100, dexterity=5, **stats):
        self.name = name
        self.level = 1
        self.max_hp = hp
        self.current_hp = hp
        self.attributes = CoreAttributes.uniform(5).with_changes(dexterity=dexterity)
        defaults = {
            "armor": 0,
            "dodge": 0.011,
            "parry": 0.012,
            "attack_speed": 1.0,
            "attack_damage": 10,
            "crit_chance": 0.05,
            "crit_damage": 2.0,
        }
        defaults.update(stats)
        self.stats = DerivedStats(**defaults)

    def take_damage(self, amount):
        return apply_damage(self, amount)

    def is_alive(self):
        return self.current_hp > 0

    def recalculate_derived_stats(self):
        pass


@pytest.fixture(autouse=True)
def clean_globals():
    """Start every test with a fresh content repository and error history."""
    ContentRepository.reset()
    ERROR_HANDLER.clear()
    yield
    ContentRepository.reset()
    ERROR_HANDLER.clear()


@pytest.fixture
def scripted_rng():
    """Factory for random sources replaying the given draws."""
    return SequenceRandom


@pytest.fixture
def constant_rng():
    """Factory for random sources that always return one draw."""
    return ConstantRandom


@pytest.fixture
def make_combatant():
    """Factory for combatants with hand-picked derived stats."""
    return DummyCombatant


@pytest.fixture
def repository():
    return ContentRepository()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def factory(rng, repository):
    return EnemyFactory(rng, repository)


@pytest.fixture
def resolver(rng):
    return CombatResolver(rng)


@pytest.fixture
def player():
    return Player("Hero")


@pytest.fixture
def champion():
    """A player strong enough to beat any low-level slime."""
    return Player("Champion", attributes=CoreAttributes.uniform(200), level=10)
