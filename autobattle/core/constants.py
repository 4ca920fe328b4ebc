"""
Constants and enumerations for the combat core.

Defines the combat formula constants, the probability tables used by enemy
generation, and the enumerations for attributes, rarities, species, equipment
slots, attack outcomes and loop phases.
"""

from enum import Enum

# ---- Stat model constants ----

BASE_HIT_CHANCE = 0.75
HIT_CHANCE_PER_DEXTERITY = 0.01
BASE_DODGE_CHANCE = 0.01
DODGE_CHANCE_PER_DEXTERITY = 0.0002
BASE_PARRY_CHANCE = 0.01
PARRY_CHANCE_PER_CONSTITUTION = 0.0004
BASE_CRIT_CHANCE = 0.05
CRIT_CHANCE_PER_LUCK = 0.0005
BASE_CRIT_DAMAGE = 2.0
CRIT_DAMAGE_PER_DEXTERITY = 0.001
CRIT_DAMAGE_PER_LUCK = 0.0005
BASE_ATTACK_SPEED = 0.5
ATTACK_SPEED_PER_DEXTERITY = 0.005
DAMAGE_PER_STRENGTH = 0.4

# Damage is reduced to 40% on parry.
PARRY_DAMAGE_MULTIPLIER = 0.4

# Armor mitigation approaches, but never reaches, this fraction.
MAX_ARMOR_MITIGATION = 0.60
ARMOR_MITIGATION_CONSTANT = 50.0

# Seconds between attacks for a combatant with an attack speed of 1.0.
BASE_ATTACK_COOLDOWN_SECONDS = 1.0

# ---- Player constants ----

PLAYER_STARTING_ATTRIBUTE = 5
PLAYER_BASE_WEAPON_DAMAGE = 8
PLAYER_BASE_ARMOR = 2
PLAYER_STAT_POINTS_PER_LEVEL = 10
PLAYER_DEFAULT_CLASS = "Adventurer"

# ---- Battle and loop constants ----

DEFAULT_TICK_INTERVAL_SECONDS = 0.1
MIN_LOOP_BATTLES = 1
MAX_LOOP_BATTLES = 100
NO_LOOP_STATUS = "No Battle Loop Active"


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class Attribute(NiceEnum):
    """The six core attributes every combatant carries."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    LUCK = "luck"
    CONSTITUTION = "constitution"
    CHARISMA = "charisma"


class EnemyRarity(NiceEnum):
    """Rarity tiers for enemies, affecting stat scale and rewards."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    LEGENDARY = "LEGENDARY"

    @property
    def reward_multiplier(self) -> float:
        """Returns the gold and experience multiplier for this rarity."""
        return {
            EnemyRarity.COMMON: 1.0,
            EnemyRarity.UNCOMMON: 5.0,
            EnemyRarity.RARE: 30.0,
            EnemyRarity.LEGENDARY: 1000.0,
        }[self]

    @property
    def color_name(self) -> str:
        """Returns the color word used in enemy display names."""
        return {
            EnemyRarity.COMMON: "Blue",
            EnemyRarity.UNCOMMON: "Green",
            EnemyRarity.RARE: "Red",
            EnemyRarity.LEGENDARY: "Yellow",
        }[self]

    @property
    def color(self) -> str:
        """Returns the rich color string associated with this rarity."""
        return {
            EnemyRarity.COMMON: "bold blue",
            EnemyRarity.UNCOMMON: "bold green",
            EnemyRarity.RARE: "bold red",
            EnemyRarity.LEGENDARY: "bold yellow",
        }[self]

    def colorize(self, message: str) -> str:
        """Applies rarity color formatting to a message."""
        return f"[{self.color}]{message}[/]"


# Cumulative rarity thresholds, checked in order against one uniform draw.
RARITY_TABLE: tuple[tuple[float, EnemyRarity], ...] = (
    (0.00005, EnemyRarity.LEGENDARY),
    (0.005, EnemyRarity.RARE),
    (0.075, EnemyRarity.UNCOMMON),
    (1.0, EnemyRarity.COMMON),
)

# Cumulative level-offset thresholds (40%, 30%, 20%, 8%, 2%).
LEVEL_OFFSET_TABLE: tuple[tuple[float, int], ...] = (
    (0.40, 0),
    (0.70, 1),
    (0.90, 2),
    (0.98, 3),
    (1.0, 4),
)


class EnemySpecies(NiceEnum):
    """Every species an enemy request may name."""

    SLIME = "SLIME"
    WOLF = "WOLF"
    SNAKE = "SNAKE"
    GOBLIN = "GOBLIN"
    ORC = "ORC"


DEFAULT_SPECIES = EnemySpecies.SLIME


class ItemRarity(NiceEnum):
    """Rarity tiers for items."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"


class EquipmentSlot(NiceEnum):
    """Slots an equipable item can occupy."""

    WEAPON = "WEAPON"
    OFF_HAND = "OFF_HAND"
    CAPE = "CAPE"
    SHOULDER_ARMOR = "SHOULDER_ARMOR"
    HEAD = "HEAD"
    CHEST = "CHEST"
    LEGS = "LEGS"
    GLOVES = "GLOVES"
    CHAUSSES = "CHAUSSES"
    BOOTS = "BOOTS"
    RING1 = "RING1"
    RING2 = "RING2"
    AMULET = "AMULET"


class AttackOutcome(NiceEnum):
    """How a single resolved attack ended."""

    MISS = "MISS"
    DODGE = "DODGE"
    PARRY = "PARRY"
    CRITICAL = "CRITICAL"
    HIT = "HIT"

    @property
    def color(self) -> str:
        return {
            AttackOutcome.MISS: "dim white",
            AttackOutcome.DODGE: "cyan",
            AttackOutcome.PARRY: "bold cyan",
            AttackOutcome.CRITICAL: "bold red",
            AttackOutcome.HIT: "red",
        }[self]

    def colorize(self, message: str) -> str:
        """Applies outcome color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class LoopPhase(NiceEnum):
    """Phases of the battle-loop state machine."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"


class LoopOutcome(NiceEnum):
    """What a reported battle result did to the loop."""

    CONTINUE = "CONTINUE"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"
