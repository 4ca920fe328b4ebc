"""
Combat formulas.

Pure, deterministic functions mapping core attributes to combat chances,
multipliers and speeds. Nothing here holds state or touches randomness.
"""

import math

from autobattle.core.constants import (
    ARMOR_MITIGATION_CONSTANT,
    ATTACK_SPEED_PER_DEXTERITY,
    BASE_ATTACK_COOLDOWN_SECONDS,
    BASE_ATTACK_SPEED,
    BASE_CRIT_CHANCE,
    BASE_CRIT_DAMAGE,
    BASE_DODGE_CHANCE,
    BASE_HIT_CHANCE,
    BASE_PARRY_CHANCE,
    CRIT_CHANCE_PER_LUCK,
    CRIT_DAMAGE_PER_DEXTERITY,
    CRIT_DAMAGE_PER_LUCK,
    DAMAGE_PER_STRENGTH,
    DODGE_CHANCE_PER_DEXTERITY,
    HIT_CHANCE_PER_DEXTERITY,
    MAX_ARMOR_MITIGATION,
    PARRY_CHANCE_PER_CONSTITUTION,
)


def dodge_chance(dexterity: int) -> float:
    """
    Chance for a defender to dodge an incoming attack.

    Args:
        dexterity (int): The defender's Dexterity.

    Returns:
        float: The dodge chance.

    """
    return BASE_DODGE_CHANCE + dexterity * DODGE_CHANCE_PER_DEXTERITY


def hit_chance(attacker_dexterity: int, defender_dexterity: int) -> float:
    """
    Chance for an attack to connect, before dodge and parry are rolled.

    Args:
        attacker_dexterity (int): The attacker's Dexterity.
        defender_dexterity (int): The defender's Dexterity.

    Returns:
        float: The hit chance.

    """
    return (
        BASE_HIT_CHANCE
        + attacker_dexterity * HIT_CHANCE_PER_DEXTERITY
        - dodge_chance(defender_dexterity)
    )


def parry_chance(constitution: int) -> float:
    """Chance for a defender to parry, driven by Constitution."""
    return BASE_PARRY_CHANCE + constitution * PARRY_CHANCE_PER_CONSTITUTION


def crit_chance(luck: int) -> float:
    """Chance for an attack to be a critical hit, driven by Luck."""
    return BASE_CRIT_CHANCE + luck * CRIT_CHANCE_PER_LUCK


def crit_damage_multiplier(dexterity: int, luck: int) -> float:
    """Damage multiplier applied on a critical hit."""
    return (
        BASE_CRIT_DAMAGE
        + dexterity * CRIT_DAMAGE_PER_DEXTERITY
        + luck * CRIT_DAMAGE_PER_LUCK
    )


def attack_speed(dexterity: int) -> float:
    """Attacks per second."""
    return BASE_ATTACK_SPEED + dexterity * ATTACK_SPEED_PER_DEXTERITY


def attack_damage(base_weapon_damage: int, strength: int, weapon_bonus: int = 0) -> int:
    """
    Attack damage before any combat roll.

    The strength-scaled part is truncated before the equipped weapon's flat
    bonus is added.

    Args:
        base_weapon_damage (int): The unarmed or natural base damage.
        strength (int): The attacker's Strength.
        weapon_bonus (int): Flat damage from an equipped weapon.

    Returns:
        int: The attack damage.

    """
    return int(base_weapon_damage + strength * DAMAGE_PER_STRENGTH) + weapon_bonus


def armor_mitigation(armor: int) -> float:
    """
    Fraction of damage absorbed by armor.

    Asymptotic: strictly below MAX_ARMOR_MITIGATION for any finite armor.
    Negative armor mitigates nothing.

    """
    if armor <= 0:
        return 0.0
    return MAX_ARMOR_MITIGATION * (armor / (armor + ARMOR_MITIGATION_CONSTANT))


def cooldown_seconds(speed: float) -> float:
    """
    Minimum seconds between two actions for the given attack speed.

    Returns infinity when the speed is zero or negative.

    """
    if speed <= 0:
        return math.inf
    return BASE_ATTACK_COOLDOWN_SECONDS / speed
