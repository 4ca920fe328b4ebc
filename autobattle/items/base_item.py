"""
Base item module.

Defines the fields shared by every piece of equipment.
"""

from typing import Any

from pydantic import BaseModel, Field

from autobattle.core.constants import EquipmentSlot, ItemRarity


class EquipableItem(BaseModel):
    """
    An item a player can equip into one of the equipment slots.

    Equality is identity-based: two swords with identical stats are still two
    different items in an inventory.
    """

    name: str = Field(
        description="The name of the item.",
    )
    description: str = Field(
        default="",
        description="A brief description of the item.",
    )
    item_type: str = Field(
        default="",
        description="The kind of item (e.g. 'Shortsword', 'Shield').",
    )
    value: int = Field(
        default=0,
        ge=0,
        description="The gold value of the item.",
    )
    rarity: ItemRarity = Field(
        default=ItemRarity.COMMON,
        description="The rarity of the item.",
    )
    slot: EquipmentSlot = Field(
        description="The slot the item occupies when equipped.",
    )
    level_requirement: int = Field(
        default=1,
        ge=1,
        description="The minimum player level needed to equip the item.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.name.strip():
            raise ValueError("Item name must not be empty.")

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)
