"""
Tests for the battle loop orchestrator.
"""

import random

import pytest

from autobattle.combat.resolver import CombatResolver
from autobattle.core.constants import NO_LOOP_STATUS, EnemySpecies, LoopOutcome, LoopPhase
from autobattle.core.error_handling import ERROR_HANDLER, LoopStateError
from autobattle.enemies.enemy_factory import EnemyFactory
from autobattle.loop.orchestrator import BattleLoopOrchestrator


@pytest.fixture
def save_hook(mocker):
    return mocker.Mock()


@pytest.fixture
def orchestrator(player, factory, resolver, save_hook):
    return BattleLoopOrchestrator(player, factory, resolver, save_hook=save_hook)


def test_starts_idle(orchestrator):
    assert orchestrator.phase == LoopPhase.IDLE
    assert orchestrator.state is None
    assert orchestrator.status == NO_LOOP_STATUS


def test_start_loop_begins_first_battle(orchestrator):
    result = orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)
    assert result.is_valid
    assert orchestrator.phase == LoopPhase.RUNNING
    assert orchestrator.current_enemy is not None
    assert orchestrator.current_battle is not None
    assert orchestrator.status == "Battle Loop: 0/3 (Battle 1 in progress)"


@pytest.mark.parametrize("num_battles", [0, -1, 101])
def test_start_loop_rejects_bad_battle_count(orchestrator, num_battles):
    result = orchestrator.start_loop(num_battles, EnemySpecies.SLIME, 1, 1.0)
    assert not result.is_valid
    assert result.errors
    assert orchestrator.phase == LoopPhase.IDLE
    assert orchestrator.state is None


@pytest.mark.parametrize("stat_multiplier", [float("inf"), float("nan"), -float("inf")])
def test_start_loop_rejects_non_finite_multiplier(orchestrator, stat_multiplier):
    """A non-finite stat boost is rejected before any enemy is built."""
    result = orchestrator.start_loop(3, EnemySpecies.SLIME, 1, stat_multiplier)
    assert not result.is_valid
    assert any("finite" in error for error in result.errors)
    assert orchestrator.phase == LoopPhase.IDLE
    assert orchestrator.state is None
    assert orchestrator.current_enemy is None


def test_start_loop_rejects_defeated_player(orchestrator, player):
    player.take_damage(player.max_hp)
    result = orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)
    assert not result.is_valid
    assert orchestrator.state is None


def test_start_loop_rejects_missing_player(factory, resolver):
    orchestrator = BattleLoopOrchestrator(None, factory, resolver)
    assert not orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)


def test_rejected_request_leaves_running_loop_untouched(orchestrator):
    orchestrator.start_loop(5, EnemySpecies.SLIME, 1, 1.0)
    orchestrator.on_battle_result(True)
    state = orchestrator.state
    enemy = orchestrator.current_enemy
    status = orchestrator.status

    assert not orchestrator.start_loop(500, EnemySpecies.SLIME, 1, 1.0)
    assert orchestrator.state is state
    assert orchestrator.state.battles_won == 1
    assert orchestrator.current_enemy is enemy
    assert orchestrator.status == status


def test_on_battle_result_while_idle_raises(orchestrator):
    with pytest.raises(LoopStateError):
        orchestrator.on_battle_result(True)


def test_run_current_battle_while_idle_raises(orchestrator):
    with pytest.raises(LoopStateError):
        orchestrator.run_current_battle()


def test_winning_every_battle_grants_the_sum(orchestrator, player, save_hook):
    """
    Test that winning all battles grants the sum of every battle's reward, once.
    """
    orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)
    expected_experience = 0
    expected_gold = 0
    transitions = []
    for _ in range(3):
        expected_experience += orchestrator.current_enemy.experience_reward
        expected_gold += orchestrator.current_enemy.gold_reward
        transitions.append(orchestrator.on_battle_result(True))

    assert [t.outcome for t in transitions] == [
        LoopOutcome.CONTINUE,
        LoopOutcome.CONTINUE,
        LoopOutcome.COMPLETE,
    ]
    assert transitions[-1].experience_granted == expected_experience
    assert transitions[-1].gold_granted == expected_gold
    assert player.gold == expected_gold
    assert player.level > 1 or player.experience == expected_experience
    save_hook.assert_called_once_with(player)
    assert orchestrator.phase == LoopPhase.IDLE
    assert orchestrator.status == NO_LOOP_STATUS


def test_no_reward_before_completion(orchestrator, player):
    orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)
    orchestrator.on_battle_result(True)
    orchestrator.on_battle_result(True)
    assert player.gold == 0
    assert player.experience == 0
    assert orchestrator.state.pending_gold > 0


def test_losing_last_battle_grants_nothing(orchestrator, player, save_hook):
    """
    Test that winning 1..n-1 and losing n forfeits every banked reward.
    """
    orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)
    orchestrator.on_battle_result(True)
    orchestrator.on_battle_result(True)
    player.take_damage(player.max_hp)
    transition = orchestrator.on_battle_result(False)

    assert transition.outcome == LoopOutcome.FAILED
    assert transition.battles_won == 2
    assert transition.experience_granted == 0
    assert transition.gold_granted == 0
    assert player.gold == 0
    assert player.experience == 0
    assert player.level == 1
    assert player.current_hp == player.max_hp
    save_hook.assert_not_called()
    assert orchestrator.phase == LoopPhase.IDLE
    assert orchestrator.state is None


def test_player_healed_between_battles(orchestrator, player):
    orchestrator.start_loop(2, EnemySpecies.SLIME, 1, 1.0)
    player.take_damage(30)
    orchestrator.on_battle_result(True)
    assert player.current_hp == player.max_hp


def test_each_battle_gets_a_fresh_enemy(orchestrator):
    orchestrator.start_loop(3, EnemySpecies.SLIME, 1, 1.0)
    first = orchestrator.current_enemy
    orchestrator.on_battle_result(True)
    assert orchestrator.current_enemy is not first


def test_status_listener_receives_every_status(player, factory, resolver):
    statuses = []
    orchestrator = BattleLoopOrchestrator(
        player, factory, resolver, status_listener=statuses.append
    )
    orchestrator.start_loop(2, EnemySpecies.SLIME, 1, 1.0)
    orchestrator.on_battle_result(True)
    orchestrator.on_battle_result(True)
    assert statuses == [
        NO_LOOP_STATUS,
        "Battle Loop: 0/2",
        "Battle Loop: 0/2 (Battle 1 in progress)",
        "Battle Loop: 1/2",
        "Battle Loop: 1/2 (Battle 2 in progress)",
        "Battle Loop: 2/2",
        NO_LOOP_STATUS,
    ]


def test_save_failure_becomes_warning_without_rollback(player, factory, resolver):
    def failing_save(_):
        raise OSError("read-only save directory")

    orchestrator = BattleLoopOrchestrator(player, factory, resolver, save_hook=failing_save)
    orchestrator.start_loop(1, EnemySpecies.SLIME, 1, 1.0)
    gold = orchestrator.current_enemy.gold_reward
    transition = orchestrator.on_battle_result(True)

    assert transition.outcome == LoopOutcome.COMPLETE
    assert len(transition.warnings) == 1
    assert "read-only save directory" in transition.warnings[0]
    assert player.gold == gold
    assert len(ERROR_HANDLER.error_history) == 1


def test_single_battle_dungeon_loop_uses_no_boost(orchestrator, factory, mocker):
    """
    Test that a single-battle loop uses a stat multiplier of exactly 1.0.
    """
    spy = mocker.spy(factory, "create_enemy")
    assert orchestrator.start_dungeon_loop(1, EnemySpecies.SLIME)
    assert orchestrator.state.stat_multiplier == 1.0
    spy.assert_called_once_with(EnemySpecies.SLIME, 1, 1.0)


def test_dungeon_loop_uses_species_tier_and_difficulty(orchestrator, factory, mocker):
    spy = mocker.spy(factory, "create_enemy")
    assert orchestrator.start_dungeon_loop(25, EnemySpecies.WOLF)
    assert orchestrator.state.tier_starting_level == 6
    assert orchestrator.state.stat_multiplier == 1.15
    spy.assert_called_once_with(EnemySpecies.WOLF, 6, 1.15)


def test_dungeon_loop_rejects_bad_count(orchestrator):
    result = orchestrator.start_dungeon_loop(0, EnemySpecies.SLIME)
    assert not result
    assert orchestrator.phase == LoopPhase.IDLE


def test_run_loop_headless(champion, repository):
    """
    Test a whole loop driven without any UI.
    """
    rng = random.Random(99)
    orchestrator = BattleLoopOrchestrator(
        champion, EnemyFactory(rng, repository), CombatResolver(rng)
    )
    report = orchestrator.run_loop(5, EnemySpecies.SLIME)
    assert report.accepted
    assert report.outcome == LoopOutcome.COMPLETE
    assert report.battles_won == 5
    assert len(report.battles) == 5
    assert all(battle.player_won for battle in report.battles)
    assert champion.gold == report.gold_granted
    assert orchestrator.phase == LoopPhase.IDLE


def test_run_loop_rejected(orchestrator):
    report = orchestrator.run_loop(0, EnemySpecies.SLIME)
    assert not report.accepted
    assert report.outcome is None
    assert report.battles == []
