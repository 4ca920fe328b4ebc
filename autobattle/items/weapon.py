"""
Weapon module.

Defines weapons, whose damage adds to the wielder's attack damage.
"""

from typing import Any, Literal

from pydantic import Field

from autobattle.core.constants import EquipmentSlot

from .base_item import EquipableItem


class Weapon(EquipableItem):
    """
    A main-hand weapon.

    The weapon's damage is a flat bonus added on top of the wielder's
    strength-scaled attack damage.
    """

    item_kind: Literal["Weapon"] = "Weapon"
    slot: EquipmentSlot = Field(
        default=EquipmentSlot.WEAPON,
        description="Weapons always occupy the weapon slot.",
    )
    damage: int = Field(
        default=0,
        ge=0,
        description="Flat attack-damage bonus granted while equipped.",
    )

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.slot != EquipmentSlot.WEAPON:
            raise ValueError("Weapons must occupy the WEAPON slot.")
