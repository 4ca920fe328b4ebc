"""
Loop difficulty table.

Longer battle loops pit the player against stronger enemies: every started
block of ten battles adds 5% to the enemies' stats, up to +50% at 100 battles.
A single battle is never boosted.
"""

import math

from autobattle.core.constants import MAX_LOOP_BATTLES, MIN_LOOP_BATTLES

STAT_BOOST_PER_BLOCK = 0.05
BATTLES_PER_BLOCK = 10


def loop_stat_multiplier(num_battles: int) -> float:
    """
    Returns the enemy stat multiplier for a loop of `num_battles` battles.

    Raises:
        ValueError: If the battle count is outside the accepted range.

    """
    if not MIN_LOOP_BATTLES <= num_battles <= MAX_LOOP_BATTLES:
        raise ValueError(
            f"Battle count must be within [{MIN_LOOP_BATTLES}, {MAX_LOOP_BATTLES}], got {num_battles}."
        )
    if num_battles == 1:
        return 1.0
    blocks = math.ceil(num_battles / BATTLES_PER_BLOCK)
    return round(1.0 + STAT_BOOST_PER_BLOCK * blocks, 2)
