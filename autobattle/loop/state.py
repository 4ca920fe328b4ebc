"""
State of an active battle loop.
"""

from dataclasses import dataclass
from typing import Any

from autobattle.core.constants import EnemySpecies


@dataclass
class BattleLoopState:
    """
    Progress and pending rewards of the running battle loop.

    Created when a loop starts and discarded when it completes or fails.
    Pending rewards are only granted when every battle has been won.
    """

    total_battles: int
    species: EnemySpecies
    tier_starting_level: int
    stat_multiplier: float
    battles_won: int = 0
    pending_experience: int = 0
    pending_gold: int = 0

    @property
    def is_complete(self) -> bool:
        return self.battles_won >= self.total_battles

    @property
    def current_battle_number(self) -> int:
        """1-based number of the battle being fought."""
        return self.battles_won + 1

    def record_win(self, enemy: Any) -> None:
        """Counts a won battle and banks the enemy's rarity-scaled rewards."""
        self.battles_won += 1
        self.pending_experience += enemy.experience_reward
        self.pending_gold += enemy.gold_reward

    def status(self, in_progress: bool = False) -> str:
        """Status line such as 'Battle Loop: 2/5 (Battle 3 in progress)'."""
        status = f"Battle Loop: {self.battles_won}/{self.total_battles}"
        if in_progress:
            status += f" (Battle {self.current_battle_number} in progress)"
        return status
