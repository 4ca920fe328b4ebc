"""
Single-attack resolution.

The resolver is the only place where combat damage is applied to a defender.
"""

from dataclasses import dataclass
from typing import Any

from autobattle.core.constants import PARRY_DAMAGE_MULTIPLIER, AttackOutcome
from autobattle.core.logging import log_debug
from autobattle.core.utils import RandomSource

from .formulas import armor_mitigation, hit_chance


@dataclass(frozen=True)
class AttackResult:
    """What a single resolved attack did."""

    attacker: str
    defender: str
    outcome: AttackOutcome
    damage: int
    base_damage: int
    defender_hp: int

    def describe(self) -> str:
        """A one-line, rich-formatted summary for battle logs."""
        if self.outcome == AttackOutcome.MISS:
            return f"{self.attacker} {self.outcome.colorize('misses')} {self.defender}."
        if self.outcome == AttackOutcome.DODGE:
            return f"{self.defender} {self.outcome.colorize('dodges')} {self.attacker}'s attack."
        verb = {
            AttackOutcome.PARRY: "partially parried",
            AttackOutcome.CRITICAL: "critical hit",
            AttackOutcome.HIT: "hit",
        }[self.outcome]
        return (
            f"{self.attacker} deals {self.outcome.colorize(str(self.damage))} damage "
            f"to {self.defender} ({verb}), {self.defender_hp} HP left."
        )


class CombatResolver:
    """
    Resolves attacks with an injected random source.

    Resolution runs these steps in order, taking one uniform draw for each
    step it reaches:

    1. Hit: a draw at or above the hit chance misses.
    2. Dodge: a draw below the defender's dodge chance avoids the attack.
    3. Parry: a draw below the defender's parry chance deals 40% of the base
       damage, ignoring crit and armor.
    4. Crit: a draw below the attacker's crit chance multiplies the damage.
    5. Armor mitigation (no draw).
    """

    def __init__(self, rng: RandomSource) -> None:
        self.rng = rng

    def resolve(self, attacker: Any, defender: Any) -> AttackResult:
        """
        Resolves one attack and applies its damage to the defender.

        Args:
            attacker (Any): The attacking combatant.
            defender (Any): The defending combatant.

        Returns:
            AttackResult: The outcome, including the damage applied.

        """
        base_damage = attacker.stats.attack_damage

        chance = hit_chance(attacker.attributes.dexterity, defender.attributes.dexterity)
        if self.rng.random() >= chance:
            return self._finish(attacker, defender, AttackOutcome.MISS, 0, base_damage)

        if self.rng.random() < defender.stats.dodge:
            return self._finish(attacker, defender, AttackOutcome.DODGE, 0, base_damage)

        if self.rng.random() < defender.stats.parry:
            damage = int(base_damage * PARRY_DAMAGE_MULTIPLIER)
            return self._finish(attacker, defender, AttackOutcome.PARRY, damage, base_damage)

        outcome = AttackOutcome.HIT
        damage: float = base_damage
        if self.rng.random() < attacker.stats.crit_chance:
            outcome = AttackOutcome.CRITICAL
            damage *= attacker.stats.crit_damage

        damage *= 1.0 - armor_mitigation(defender.stats.armor)
        return self._finish(attacker, defender, outcome, int(damage), base_damage)

    def resolve_attack(self, attacker: Any, defender: Any) -> int:
        """
        Resolves one attack and returns the damage applied to the defender.
        """
        return self.resolve(attacker, defender).damage

    @staticmethod
    def _finish(
        attacker: Any,
        defender: Any,
        outcome: AttackOutcome,
        damage: int,
        base_damage: int,
    ) -> AttackResult:
        damage = max(0, damage)
        if damage > 0:
            # HP is clamped at 0 by the defender; the full damage is reported.
            defender.take_damage(damage)
        result = AttackResult(
            attacker=attacker.name,
            defender=defender.name,
            outcome=outcome,
            damage=damage,
            base_damage=base_damage,
            defender_hp=defender.current_hp,
        )
        log_debug(
            f"{attacker.name} -> {defender.name}: {outcome}",
            {"base": base_damage, "damage": damage, "defender_hp": defender.current_hp},
        )
        return result
