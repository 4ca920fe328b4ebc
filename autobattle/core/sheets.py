"""
Module for printing combatant sheets and battle summaries in a formatted way.
"""

from typing import Any

from rich.padding import Padding

from autobattle.character.enemy import Enemy
from autobattle.character.player import Player
from autobattle.combat.battle import BattleResult
from autobattle.items import Armor, EquipableItem, Weapon
from autobattle.loop.orchestrator import LoopReport

from .constants import Attribute, LoopOutcome
from .utils import cprint, crule, make_bar


def status_line(combatant: Any, show_bars: bool = True) -> str:
    """
    Builds a one-line status for a combatant: name, HP and armor.

    Args:
        combatant (Any): The combatant to describe.
        show_bars (bool): Whether to add an HP bar. Defaults to True.

    Returns:
        str: The rich-formatted status line.

    """
    name_width = min(max(len(combatant.name), 8), 40)
    status = f"[bold]{combatant.name:<{name_width}}[/] "
    status += f"| [green]HP:{combatant.current_hp:>4}/{combatant.max_hp}[/] "
    if show_bars:
        status += make_bar(combatant.current_hp, combatant.max_hp, length=10, color="green")
        status += " "
    status += f"| [yellow]Armor:{combatant.stats.armor:>3}[/]"
    return status


def print_item_sheet(item: EquipableItem, padding: int = 2) -> None:
    """Prints the details of an item in a formatted way."""
    sheet = f"[blue]{item.name}[/] ({item.slot.display_name}), "
    if isinstance(item, Weapon):
        sheet += f"damage: [red]+{item.damage}[/], "
    elif isinstance(item, Armor):
        sheet += f"defense: [yellow]+{item.defense}[/], "
    sheet += f"level {item.level_requirement}, {item.value} gold"
    if item.description:
        sheet += f', [italic]"{item.description}"[/]'
    cprint(Padding(sheet, (0, padding)))


def _print_combat_stats(combatant: Any) -> None:
    stats = combatant.stats
    cprint(
        f"  HP: [green]{combatant.current_hp}/{combatant.max_hp}[/], "
        f"Armor: [yellow]{stats.armor}[/], "
        f"Damage: [red]{stats.attack_damage}[/], "
        f"Speed: [cyan]{stats.attack_speed:.3f}/s[/]"
    )
    cprint(
        f"  Dodge: {stats.dodge:.2%}, Parry: {stats.parry:.2%}, "
        f"Crit: {stats.crit_chance:.2%} (x{stats.crit_damage:.3f})"
    )
    scores = ", ".join(
        f"{attribute.display_name}: {combatant.attributes.get(attribute)}"
        for attribute in Attribute
    )
    cprint(f"  {scores}")


def print_player_sheet(player: Player) -> None:
    """
    Prints the details of a player in a formatted way.

    Args:
        player (Player): The player to display.

    """
    cprint(
        f"[bold green]{player.name}[/], [blue]{player.current_class}[/] level {player.level}"
    )
    cprint(
        f"  Experience: {player.experience}/{player.experience_to_next_level}, "
        f"Gold: [yellow]{player.gold}[/], "
        f"Unallocated points: {player.unallocated_stat_points}"
    )
    _print_combat_stats(player)
    if player.inventory.equipped:
        cprint("  [blue]Equipped[/]:")
        for item in player.inventory.equipped.values():
            print_item_sheet(item, 4)


def print_enemy_sheet(enemy: Enemy) -> None:
    """Prints the details of an enemy in a formatted way."""
    cprint(enemy.rarity.colorize(enemy.name))
    _print_combat_stats(enemy)
    cprint(
        f"  Rewards: {enemy.experience_reward} XP, {enemy.gold_reward} gold "
        f"(x{enemy.rarity.reward_multiplier:g})"
    )


def print_battle_summary(result: BattleResult, padding: int = 2) -> None:
    """Prints the attacks of a finished battle and its winner."""
    for attack in result.attacks:
        cprint(Padding(attack.describe(), (0, padding)))
    verdict = "[bold green]Victory[/]" if result.player_won else "[bold red]Defeat[/]"
    cprint(
        Padding(
            f"{verdict} after {result.elapsed:.1f}s ({len(result.attacks)} attacks)",
            (0, padding),
        )
    )


def print_loop_report(report: LoopReport) -> None:
    """Prints the summary of a headless battle loop."""
    crule("Battle Loop Report", style="bold blue")
    if not report.accepted:
        cprint("[bold red]Loop rejected:[/]")
        for error in report.validation.errors:
            cprint(f"  - {error}")
        return
    color = "green" if report.outcome == LoopOutcome.COMPLETE else "red"
    cprint(
        f"[{color}]{report.outcome}[/]: won {report.battles_won}/{report.total_battles} battles"
    )
    cprint(f"  Granted {report.experience_granted} XP and {report.gold_granted} gold")
    for warning in report.warnings:
        cprint(f"  [yellow]Warning:[/] {warning}")
