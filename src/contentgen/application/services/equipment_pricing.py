from __future__ import annotations

import math

from contentgen.application.services.stat_scaler import scale
from contentgen.domain.models.equipment import EquipmentKind, EquipmentRecord, GradedEquipment
from contentgen.domain.models.stats import GradeTable, round_half_up


WEAPON_DAMAGE_SPREAD = (0.8, 1.2)
WEAPON_PRICE_PER_DAMAGE = 10
MIN_BASE_PRICE = 10

_GRADE_PREFIX = {
    "common": "",
    "uncommon": "Fine ",
    "rare": "Rare ",
    "epic": "Heroic ",
    "legendary": "Legendary ",
}


def damage_range(base_damage: float, multiplier: float) -> tuple[int, int]:
    low, high = WEAPON_DAMAGE_SPREAD
    factor = float(base_damage) * float(multiplier)
    return round_half_up(factor * low), round_half_up(factor * high)


def equipment_price(max_damage: float, base_price: int, multiplier: float) -> int:
    """Weapons are priced from their top damage; everything else from its base price.

    Prices truncate to whole coins.
    """

    if float(max_damage) > 0:
        return int(math.floor(float(max_damage) * WEAPON_PRICE_PER_DAMAGE * float(multiplier)))
    return int(math.floor(max(int(base_price), MIN_BASE_PRICE) * float(multiplier)))


def price_equipment(item: GradedEquipment, price_table: GradeTable, stat_table: GradeTable) -> EquipmentRecord:
    definition = item.definition
    stat_multiplier = stat_table.multiplier(item.grade)
    min_damage, max_damage = 0, 0
    if definition.kind == EquipmentKind.WEAPON:
        min_damage, max_damage = damage_range(definition.base_damage, stat_multiplier)
    return EquipmentRecord(
        item_id=item.id,
        base_id=definition.id,
        name=f"{_GRADE_PREFIX.get(item.grade.value, '')}{definition.name}",
        kind=definition.kind,
        slot=definition.slot,
        grade=item.grade,
        price=equipment_price(max_damage, definition.base_price, price_table.multiplier(item.grade)),
        min_damage=min_damage,
        max_damage=max_damage,
        stat_bonuses=scale(definition.stat_bonuses, stat_multiplier),
        description=definition.description,
    )
