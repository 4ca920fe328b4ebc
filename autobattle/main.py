"""
Main entry point for the autobattle combat core.

Creates a player, optionally equips the starter items, and either fights a
single standalone battle or runs a whole battle loop headlessly, printing
sheets and reports along the way.
"""

import argparse
import random
from pathlib import Path
from typing import Optional

from autobattle.character.player import Player
from autobattle.combat.battle import Battle, settle_standalone_battle
from autobattle.combat.resolver import CombatResolver
from autobattle.core.constants import EnemySpecies
from autobattle.core.content import ContentRepository
from autobattle.core.error_handling import ERROR_HANDLER, GameException
from autobattle.core.logging import setup_logging
from autobattle.core.settings import load_settings
from autobattle.core.sheets import (
    print_battle_summary,
    print_enemy_sheet,
    print_loop_report,
    print_player_sheet,
)
from autobattle.core.utils import cprint, crule
from autobattle.enemies.enemy_factory import EnemyFactory
from autobattle.loop.orchestrator import BattleLoopOrchestrator


def _parse_species(value: str) -> EnemySpecies:
    try:
        return EnemySpecies[value.upper()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"unknown species '{value}'") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autobattle",
        description="Run automatic battles and battle loops from the command line.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autobattle                          # One battle against a slime
  autobattle --species WOLF --level 8 # One battle against a wolf, as a level 8 player
  autobattle --loop 10 --seed 42      # A reproducible ten-battle slime loop
        """,
    )
    parser.add_argument("--name", default="Hero", help="Name of the player")
    parser.add_argument("--level", type=int, default=1, help="Starting player level")
    parser.add_argument(
        "--species",
        type=_parse_species,
        default=EnemySpecies.SLIME,
        help=f"Enemy species, one of: {', '.join(s.name for s in EnemySpecies)}",
    )
    parser.add_argument(
        "--loop",
        type=int,
        default=0,
        metavar="N",
        help="Run a battle loop of N battles instead of a single battle",
    )
    parser.add_argument("--seed", type=int, help="Seed for the random source")
    parser.add_argument(
        "--equip",
        action="store_true",
        help="Give the player the starter items and equip what the level allows",
    )
    parser.add_argument("--settings", type=Path, help="Path to a JSON settings file")
    parser.add_argument("--data-dir", type=Path, help="Directory with content JSON files")
    return parser


def _equip_starter_items(player: Player, repository: ContentRepository) -> None:
    for item_name in repository.items:
        item = repository.get_item(item_name)
        if item is None:
            continue
        player.add_item(item)
        if player.inventory.can_equip(item):
            player.equip(item)


def _save_to_console(player: Player) -> None:
    cprint(f"[dim]Saved {player.name} (level {player.level}, {player.gold} gold).[/]")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.settings)
        setup_logging(settings.logging_level)
        repository = ContentRepository(args.data_dir)
    except GameException as e:
        cprint(f"[bold red]{e}[/]")
        return 1

    rng = random.Random(args.seed)
    resolver = CombatResolver(rng)
    factory = EnemyFactory(rng, repository, settings.default_species)
    player = Player(args.name, level=args.level)
    if args.equip:
        _equip_starter_items(player, repository)

    crule("Player", style="bold green")
    print_player_sheet(player)

    if args.loop:
        orchestrator = BattleLoopOrchestrator(
            player,
            factory,
            resolver,
            save_hook=_save_to_console,
            settings=settings,
            status_listener=lambda status: cprint(f"[cyan]{status}[/]"),
        )
        report = orchestrator.run_loop(args.loop, args.species)
        print_loop_report(report)
        code = 0 if report.accepted else 2
    else:
        enemy = factory.create_enemy(args.species)
        crule("Enemy", style="bold red")
        print_enemy_sheet(enemy)
        crule("Battle", style="bold yellow")
        result = Battle(player, enemy, resolver, tick_interval=settings.tick_interval).run()
        print_battle_summary(result)
        settlement = settle_standalone_battle(player, enemy, result, _save_to_console)
        if settlement.player_won:
            cprint(
                f"Gained [green]{settlement.experience}[/] XP and "
                f"[yellow]{settlement.gold}[/] gold."
            )
        code = 0

    crule("Player", style="bold green")
    print_player_sheet(player)
    if ERROR_HANDLER.error_history:
        cprint(f"[yellow]{len(ERROR_HANDLER.error_history)} error(s) recorded.[/]")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
