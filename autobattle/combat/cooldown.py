"""
Attack cooldown scheduling.

Combatants are identified by per-battle handles issued from a
`CombatantArena`, never by name: two enemies called "Blue Slime, Level 1,
COMMON" must not share a cooldown.
"""

import itertools
import math
from dataclasses import dataclass
from typing import Any

from autobattle.core.logging import log_debug

from .formulas import cooldown_seconds


@dataclass(frozen=True)
class CombatantHandle:
    """Opaque per-battle identity of a combatant."""

    index: int
    name: str

    def __str__(self) -> str:
        return f"{self.name}#{self.index}"


class CombatantArena:
    """
    Issues handles and maps them back to the combatants of one battle.
    """

    def __init__(self) -> None:
        self._counter = itertools.count()
        self._combatants: dict[CombatantHandle, Any] = {}

    def register(self, combatant: Any) -> CombatantHandle:
        """Admits a combatant and returns its new handle."""
        handle = CombatantHandle(next(self._counter), combatant.name)
        self._combatants[handle] = combatant
        return handle

    def get(self, handle: CombatantHandle) -> Any:
        """
        Returns the combatant behind a handle.

        Raises:
            KeyError: If the handle was never issued or has been released.

        """
        return self._combatants[handle]

    def release(self, handle: CombatantHandle) -> None:
        self._combatants.pop(handle, None)

    def __contains__(self, handle: CombatantHandle) -> bool:
        return handle in self._combatants

    def __len__(self) -> int:
        return len(self._combatants)


class CooldownScheduler:
    """
    Gates how often each combatant may act.

    A combatant may act when at least `1 / attack_speed` seconds have passed
    since its last recorded action. A combatant with no record may act at
    once; one with an attack speed of zero or less never may.
    """

    def __init__(self, arena: CombatantArena) -> None:
        self.arena = arena
        self._last_action: dict[CombatantHandle, float] = {}

    def cooldown(self, handle: CombatantHandle) -> float:
        """Seconds between two actions of the combatant."""
        return cooldown_seconds(self.arena.get(handle).stats.attack_speed)

    def can_act(self, handle: CombatantHandle, now: float) -> bool:
        cooldown = self.cooldown(handle)
        if math.isinf(cooldown):
            return False
        last = self._last_action.get(handle)
        if last is None:
            return True
        return now - last >= cooldown

    def cooldown_remaining(self, handle: CombatantHandle, now: float) -> float:
        """
        Seconds until the combatant may act again.

        Returns 0.0 when it may act now, infinity when it never will.

        """
        cooldown = self.cooldown(handle)
        if math.isinf(cooldown):
            return math.inf
        last = self._last_action.get(handle)
        if last is None:
            return 0.0
        return max(0.0, cooldown - (now - last))

    def record_action(self, handle: CombatantHandle, now: float) -> None:
        self._last_action[handle] = now

    def reset_cooldown(self, handle: CombatantHandle) -> None:
        """Forgets the last action, making the combatant eligible at once."""
        self._last_action.pop(handle, None)
        log_debug(f"Cooldown reset for {handle}.")

    def remove(self, handle: CombatantHandle) -> None:
        """Drops every record of a combatant leaving combat."""
        self._last_action.pop(handle, None)
        self.arena.release(handle)

    def has_record(self, handle: CombatantHandle) -> bool:
        return handle in self._last_action
