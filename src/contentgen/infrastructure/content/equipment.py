from __future__ import annotations

from contentgen.domain.models.equipment import EquipmentDefinition, EquipmentKind, EquipmentSlot
from contentgen.domain.models.stats import StatBlock


WEAPON = EquipmentKind.WEAPON
ARMOR = EquipmentKind.ARMOR

EQUIPMENT = (
    EquipmentDefinition(
        id="Longsword",
        name="Longsword",
        kind=WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        base_price=150,
        base_damage=15,
        stat_bonuses=StatBlock(strength=1),
        description="A well balanced one-handed blade.",
    ),
    EquipmentDefinition(
        id="Rapier",
        name="Rapier",
        kind=WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        base_price=140,
        base_damage=13,
        stat_bonuses=StatBlock(agility=2),
        description="A thin sword made for quick thrusts.",
    ),
    EquipmentDefinition(
        id="Broadsword",
        name="Broadsword",
        kind=WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        base_price=160,
        base_damage=16,
        stat_bonuses=StatBlock(strength=2),
        description="A heavy sword with a wide blade.",
    ),
    EquipmentDefinition(
        id="Gladius",
        name="Gladius",
        kind=WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        base_price=130,
        base_damage=13,
        stat_bonuses=StatBlock(strength=2, defense=1),
        description="A short legionary sword.",
    ),
    EquipmentDefinition(
        id="Helmet",
        name="Helmet",
        kind=ARMOR,
        slot=EquipmentSlot.HEAD,
        base_price=50,
        stat_bonuses=StatBlock(defense=5, magic_defense=3),
        description="A plain protective helm.",
    ),
    EquipmentDefinition(
        id="ChestArmor",
        name="Chest Armor",
        kind=ARMOR,
        slot=EquipmentSlot.CHEST,
        base_price=80,
        stat_bonuses=StatBlock(vitality=2, defense=8),
        description="Battle-worn plate for the torso.",
    ),
    EquipmentDefinition(
        id="Greaves",
        name="Greaves",
        kind=ARMOR,
        slot=EquipmentSlot.LEGS,
        base_price=60,
        stat_bonuses=StatBlock(agility=1, defense=6),
        description="Leg guards.",
    ),
    EquipmentDefinition(
        id="Boots",
        name="Boots",
        kind=ARMOR,
        slot=EquipmentSlot.FEET,
        base_price=40,
        stat_bonuses=StatBlock(agility=2, defense=4),
        description="Sturdy marching boots.",
    ),
)
