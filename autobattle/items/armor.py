"""
Armor module.

Defines armor pieces, whose defense adds to the wearer's flat armor.
"""

from typing import Any, Literal

from pydantic import Field

from autobattle.core.constants import EquipmentSlot

from .base_item import EquipableItem


class Armor(EquipableItem):
    """
    A piece of armor; shields count as armor in the off-hand slot.
    """

    item_kind: Literal["Armor"] = "Armor"
    defense: int = Field(
        default=0,
        ge=0,
        description="Armor added to the wearer while equipped.",
    )

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        if self.slot == EquipmentSlot.WEAPON:
            raise ValueError("Armor cannot occupy the WEAPON slot.")
