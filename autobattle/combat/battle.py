"""
Battle module.

Runs one player-versus-enemy battle on the cooperative tick model and
settles standalone battles fought outside a battle loop.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from autobattle.core.constants import DEFAULT_TICK_INTERVAL_SECONDS
from autobattle.core.error_handling import (
    ERROR_HANDLER,
    BattleConfigurationError,
    ErrorSeverity,
)
from autobattle.core.logging import log_debug, log_info

from .cooldown import CombatantArena, CooldownScheduler
from .resolver import AttackResult, CombatResolver

SaveHook = Callable[[Any], None]


@dataclass
class BattleResult:
    """The outcome of a finished battle."""

    player_won: bool
    ticks: int
    elapsed: float
    attacks: list[AttackResult] = field(default_factory=list)

    def damage_dealt_by(self, name: str) -> int:
        """Total damage dealt by the combatant with the given name."""
        return sum(attack.damage for attack in self.attacks if attack.attacker == name)


class Battle:
    """
    A single battle between a player and an enemy.

    Each tick runs the optional transient-state hook, then lets the player
    and then the enemy act if both are still alive and their cooldowns
    allow, then checks whether either side is defeated.

    Attributes:
        player (Any):
            The player-side combatant.
        enemy (Any):
            The enemy-side combatant.
        resolver (CombatResolver):
            Resolves and applies every attack.
        tick_interval (float):
            Seconds of battle time per tick in headless runs.
        attacks (list[AttackResult]):
            Every attack resolved so far, in order.

    """

    def __init__(
        self,
        player: Any,
        enemy: Any,
        resolver: CombatResolver,
        tick_interval: float = DEFAULT_TICK_INTERVAL_SECONDS,
        on_tick: Optional[Callable[["Battle", float], None]] = None,
        on_attack: Optional[Callable[[AttackResult], None]] = None,
    ) -> None:
        """
        Prepares a battle and resets both combatants' cooldowns.

        Raises:
            BattleConfigurationError: If the tick interval is not positive, or
                if neither combatant can ever act.

        """
        if tick_interval <= 0:
            raise BattleConfigurationError(
                f"Tick interval must be positive, got {tick_interval}."
            )
        if player.stats.attack_speed <= 0 and enemy.stats.attack_speed <= 0:
            raise BattleConfigurationError(
                f"Neither {player.name} nor {enemy.name} can act; the battle would never end."
            )
        self.player = player
        self.enemy = enemy
        self.resolver = resolver
        self.tick_interval = tick_interval
        self.on_tick = on_tick
        self.on_attack = on_attack
        self.attacks: list[AttackResult] = []
        self.ticks = 0
        self.elapsed = 0.0
        self._result: Optional[BattleResult] = None

        self.arena = CombatantArena()
        self.scheduler = CooldownScheduler(self.arena)
        self.player_handle = self.arena.register(player)
        self.enemy_handle = self.arena.register(enemy)
        self.scheduler.reset_cooldown(self.player_handle)
        self.scheduler.reset_cooldown(self.enemy_handle)
        log_info(f"Battle started: {player.name} vs {enemy.name}.")

    @property
    def is_over(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[BattleResult]:
        """The battle result, or None while the battle is still running."""
        return self._result

    def cooldown_remaining(self, combatant: Any, now: float) -> float:
        """Seconds until the given combatant may act again."""
        handle = self.player_handle if combatant is self.player else self.enemy_handle
        if handle not in self.arena:
            return 0.0
        return self.scheduler.cooldown_remaining(handle, now)

    def tick(self, now: float) -> Optional[BattleResult]:
        """
        Advances the battle to time `now`.

        Args:
            now (float): Battle time in seconds; must not decrease between calls.

        Returns:
            BattleResult | None: The result once the battle has ended.

        """
        if self._result is not None:
            return self._result
        self.ticks += 1
        self.elapsed = now
        if self.on_tick:
            self.on_tick(self, now)
        for actor_handle, target_handle in (
            (self.player_handle, self.enemy_handle),
            (self.enemy_handle, self.player_handle),
        ):
            actor = self.arena.get(actor_handle)
            target = self.arena.get(target_handle)
            if not (actor.is_alive() and target.is_alive()):
                break
            if not self.scheduler.can_act(actor_handle, now):
                continue
            attack = self.resolver.resolve(actor, target)
            self.scheduler.record_action(actor_handle, now)
            self.attacks.append(attack)
            if self.on_attack:
                self.on_attack(attack)
        if not (self.player.is_alive() and self.enemy.is_alive()):
            self._finish()
        return self._result

    def run(self) -> BattleResult:
        """
        Runs the battle to its end on simulated time.

        The n-th tick happens at `n * tick_interval` seconds, so runs with the
        same random source are fully reproducible.

        """
        tick_index = 0
        while self._result is None:
            self.tick(tick_index * self.tick_interval)
            tick_index += 1
        return self._result

    def _finish(self) -> None:
        player_won = self.player.is_alive()
        self._result = BattleResult(
            player_won=player_won,
            ticks=self.ticks,
            elapsed=self.elapsed,
            attacks=list(self.attacks),
        )
        self.scheduler.remove(self.player_handle)
        self.scheduler.remove(self.enemy_handle)
        log_info(
            f"Battle over: {self.player.name if player_won else self.enemy.name} wins.",
            {"ticks": self.ticks, "elapsed": round(self.elapsed, 2)},
        )


def request_save(player: Any, save_hook: Optional[SaveHook]) -> list[str]:
    """
    Invokes the persistence hook, turning any failure into a warning.

    Returns:
        list[str]: The warnings raised while saving, empty on success.

    """
    if save_hook is None:
        return []
    _, error = ERROR_HANDLER.safe_execute(
        lambda: save_hook(player),
        None,
        "Saving the player failed",
        ErrorSeverity.MEDIUM,
        {"player": player.name},
    )
    return [error.message] if error else []


@dataclass
class Settlement:
    """What settling a standalone battle granted."""

    player_won: bool
    experience: int = 0
    gold: int = 0
    levels_gained: int = 0
    warnings: list[str] = field(default_factory=list)


def settle_standalone_battle(
    player: Any,
    enemy: Any,
    result: BattleResult,
    save_hook: Optional[SaveHook] = None,
) -> Settlement:
    """
    Settles a battle fought outside a battle loop.

    A win grants the enemy's rarity-scaled rewards at once. Either way the
    player is healed to full and a save is requested.

    Args:
        player (Any): The player who fought.
        enemy (Any): The enemy fought.
        result (BattleResult): The battle result.
        save_hook (SaveHook | None): Persistence callback.

    Returns:
        Settlement: The rewards granted and any save warnings.

    """
    settlement = Settlement(player_won=result.player_won)
    if result.player_won:
        settlement.experience = enemy.experience_reward
        settlement.gold = enemy.gold_reward
        settlement.levels_gained = player.gain_experience(settlement.experience)
        player.add_gold(settlement.gold)
    player.heal_to_full()
    settlement.warnings = request_save(player, save_hook)
    log_debug(
        "Standalone battle settled.",
        {"won": result.player_won, "experience": settlement.experience, "gold": settlement.gold},
    )
    return settlement
