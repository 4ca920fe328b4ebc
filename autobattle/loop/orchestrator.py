"""
Battle loop orchestration.

A battle loop chains N battles against freshly generated enemies of one
species. Rewards are banked after every win and granted only when the whole
loop has been won; losing any battle forfeits everything banked.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from autobattle.combat.battle import Battle, BattleResult, SaveHook, request_save
from autobattle.combat.resolver import CombatResolver
from autobattle.core.constants import (
    NO_LOOP_STATUS,
    EnemySpecies,
    LoopOutcome,
    LoopPhase,
)
from autobattle.core.error_handling import LoopStateError
from autobattle.core.logging import log_info, log_warning
from autobattle.core.settings import CombatSettings
from autobattle.core.validation import ValidationResult, loop_request_validator
from autobattle.enemies.enemy_factory import EnemyFactory

from .difficulty import loop_stat_multiplier
from .state import BattleLoopState

StatusListener = Callable[[str], None]


@dataclass
class LoopTransition:
    """What a reported battle result did to the loop."""

    outcome: LoopOutcome
    status: str
    battles_won: int
    total_battles: int
    experience_granted: int = 0
    gold_granted: int = 0
    levels_gained: int = 0
    warnings: list[str] = field(default_factory=list)


@dataclass
class LoopReport:
    """Summary of a loop driven headlessly by `run_loop`."""

    validation: ValidationResult
    outcome: Optional[LoopOutcome] = None
    battles_won: int = 0
    total_battles: int = 0
    experience_granted: int = 0
    gold_granted: int = 0
    battles: list[BattleResult] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.validation.is_valid


class BattleLoopOrchestrator:
    """
    Drives battle loops for one player.

    The loop is a small state machine: IDLE until `start_loop` accepts a
    request, RUNNING while battles remain, and back to IDLE when the loop is
    completed or failed. Every status change is pushed to the optional
    status listener.

    Attributes:
        player (Any):
            The player fighting the loop.
        factory (EnemyFactory):
            Generates one fresh enemy per battle.
        resolver (CombatResolver):
            Resolves the attacks of every battle.
        save_hook (SaveHook | None):
            Called with the player after a completed loop's rewards are granted.
        settings (CombatSettings):
            Tick interval and loop bounds.
        phase (LoopPhase):
            The current phase.
        state (BattleLoopState | None):
            Progress of the running loop; None while idle.
        current_enemy (Any):
            The enemy of the battle in progress.
        current_battle (Battle | None):
            The battle in progress.

    """

    def __init__(
        self,
        player: Any,
        factory: EnemyFactory,
        resolver: CombatResolver,
        save_hook: Optional[SaveHook] = None,
        settings: Optional[CombatSettings] = None,
        status_listener: Optional[StatusListener] = None,
    ) -> None:
        self.player = player
        self.factory = factory
        self.resolver = resolver
        self.save_hook = save_hook
        self.settings = settings or CombatSettings()
        self.status_listener = status_listener
        self.phase = LoopPhase.IDLE
        self.state: Optional[BattleLoopState] = None
        self.current_enemy: Any = None
        self.current_battle: Optional[Battle] = None
        self.completed_battles: list[BattleResult] = []
        self._status = NO_LOOP_STATUS

    # ============================================================================
    # STATUS
    # ============================================================================

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_running(self) -> bool:
        return self.phase == LoopPhase.RUNNING

    def _set_status(self, status: str) -> None:
        self._status = status
        if self.status_listener:
            self.status_listener(status)

    def _reset(self) -> None:
        self.phase = LoopPhase.IDLE
        self.state = None
        self.current_enemy = None
        self.current_battle = None
        self._set_status(NO_LOOP_STATUS)

    # ============================================================================
    # STARTING
    # ============================================================================

    def validate_request(
        self,
        num_battles: int,
        species: EnemySpecies,
        tier_starting_level: int,
        stat_multiplier: float,
    ) -> ValidationResult:
        """Checks a loop request without touching any loop state."""
        result = loop_request_validator(
            self.settings.min_loop_battles, self.settings.max_loop_battles
        ).validate(
            {
                "num_battles": num_battles,
                "species": species,
                "tier_starting_level": tier_starting_level,
                "stat_multiplier": stat_multiplier,
            }
        )
        if self.player is None:
            result.add_error("No player is loaded")
        elif not self.player.is_alive():
            result.add_error(f"{self.player.name} is defeated")
        return result

    def start_loop(
        self,
        num_battles: int,
        species: EnemySpecies,
        tier_starting_level: int,
        stat_multiplier: float,
    ) -> ValidationResult:
        """
        Starts a new battle loop and its first battle.

        A rejected request leaves the current loop state untouched. An
        accepted one abandons any loop already running.

        Returns:
            ValidationResult: Whether the request was accepted, with the reasons if not.

        """
        result = self.validate_request(num_battles, species, tier_starting_level, stat_multiplier)
        if not result:
            log_warning("Battle loop request rejected.", {"errors": result.errors})
            return result
        if self.is_running:
            log_warning("Abandoning the running battle loop.", {"status": self.status})
        self._reset()
        self.completed_battles = []
        self.state = BattleLoopState(
            total_battles=num_battles,
            species=species,
            tier_starting_level=tier_starting_level,
            stat_multiplier=stat_multiplier,
        )
        self.phase = LoopPhase.RUNNING
        log_info(
            f"Starting battle loop: {num_battles} battles against {species}.",
            {"stat_boost": f"{(stat_multiplier - 1.0) * 100:.0f}%"},
        )
        self._set_status(self.state.status())
        self._start_next_battle()
        return result

    def start_dungeon_loop(self, num_battles: int, species: EnemySpecies) -> ValidationResult:
        """
        Starts a loop with the species' own tier level and the difficulty table's multiplier.
        """
        profile = self.factory.resolve_profile(species)
        try:
            stat_multiplier = loop_stat_multiplier(num_battles)
        except (TypeError, ValueError) as e:
            result = ValidationResult()
            result.add_error(str(e))
            log_warning("Dungeon loop request rejected.", {"errors": result.errors})
            return result
        return self.start_loop(num_battles, species, profile.tier_starting_level, stat_multiplier)

    def _start_next_battle(self) -> None:
        state = self._require_state()
        try:
            self.current_enemy = self.factory.create_enemy(
                state.species, state.tier_starting_level, state.stat_multiplier
            )
            self.current_battle = Battle(
                self.player,
                self.current_enemy,
                self.resolver,
                tick_interval=self.settings.tick_interval,
            )
        except Exception:
            self._reset()
            raise
        log_info(
            f"Beginning battle {state.current_battle_number} of {state.total_battles}.",
            {"enemy": self.current_enemy.name},
        )
        self._set_status(state.status(in_progress=True))

    # ============================================================================
    # REPORTING RESULTS
    # ============================================================================

    def on_battle_result(self, player_won: bool) -> LoopTransition:
        """
        Applies the result of the battle in progress.

        Raises:
            LoopStateError: If no loop is running.

        Returns:
            LoopTransition: CONTINUE, COMPLETE or FAILED, with the status line.

        """
        state = self._require_state()
        self.current_battle = None
        if not player_won:
            return self._fail(state)

        state.record_win(self.current_enemy)
        status = state.status()
        self._set_status(status)
        log_info(
            f"Battle {state.battles_won} won.",
            {"pending_experience": state.pending_experience, "pending_gold": state.pending_gold},
        )
        if not state.is_complete:
            self.player.heal_to_full()
            self._start_next_battle()
            return LoopTransition(
                outcome=LoopOutcome.CONTINUE,
                status=status,
                battles_won=state.battles_won,
                total_battles=state.total_battles,
            )
        return self._complete(state, status)

    def _complete(self, state: BattleLoopState, status: str) -> LoopTransition:
        levels_gained = self.player.gain_experience(state.pending_experience)
        self.player.add_gold(state.pending_gold)
        self.player.heal_to_full()
        warnings = request_save(self.player, self.save_hook)
        log_info(
            "Battle loop completed.",
            {"experience": state.pending_experience, "gold": state.pending_gold},
        )
        self._reset()
        return LoopTransition(
            outcome=LoopOutcome.COMPLETE,
            status=status,
            battles_won=state.battles_won,
            total_battles=state.total_battles,
            experience_granted=state.pending_experience,
            gold_granted=state.pending_gold,
            levels_gained=levels_gained,
            warnings=warnings,
        )

    def _fail(self, state: BattleLoopState) -> LoopTransition:
        status = state.status()
        self.player.heal_to_full()
        log_info(
            f"Battle loop failed on battle {state.current_battle_number} of {state.total_battles}.",
            {"forfeited_experience": state.pending_experience, "forfeited_gold": state.pending_gold},
        )
        self._reset()
        return LoopTransition(
            outcome=LoopOutcome.FAILED,
            status=status,
            battles_won=state.battles_won,
            total_battles=state.total_battles,
        )

    def _require_state(self) -> BattleLoopState:
        if self.phase != LoopPhase.RUNNING or self.state is None:
            raise LoopStateError("No battle loop is running.")
        return self.state

    # ============================================================================
    # HEADLESS DRIVING
    # ============================================================================

    def run_current_battle(self) -> LoopTransition:
        """
        Runs the battle in progress to its end and reports its result.

        Raises:
            LoopStateError: If no loop is running.

        """
        self._require_state()
        if self.current_battle is None:
            raise LoopStateError("The running loop has no battle in progress.")
        result = self.current_battle.run()
        self.completed_battles.append(result)
        return self.on_battle_result(result.player_won)

    def run_loop(
        self,
        num_battles: int,
        species: EnemySpecies,
        tier_starting_level: Optional[int] = None,
        stat_multiplier: Optional[float] = None,
    ) -> LoopReport:
        """
        Runs a whole battle loop headlessly.

        Missing parameters are taken from the species profile and the loop
        difficulty table, as for a dungeon loop.

        Returns:
            LoopReport: The outcome; `accepted` is False if the request was rejected.

        """
        if tier_starting_level is None and stat_multiplier is None:
            validation = self.start_dungeon_loop(num_battles, species)
        else:
            if tier_starting_level is None:
                tier_starting_level = self.factory.resolve_profile(species).tier_starting_level
            if stat_multiplier is None:
                stat_multiplier = 1.0
            validation = self.start_loop(num_battles, species, tier_starting_level, stat_multiplier)
        report = LoopReport(validation=validation, total_battles=num_battles)
        if not validation:
            return report

        transition = self.run_current_battle()
        while transition.outcome == LoopOutcome.CONTINUE:
            transition = self.run_current_battle()

        report.outcome = transition.outcome
        report.battles_won = transition.battles_won
        report.experience_granted = transition.experience_granted
        report.gold_granted = transition.gold_granted
        report.battles = list(self.completed_battles)
        report.warnings = transition.warnings
        return report
