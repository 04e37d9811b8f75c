from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from contentgen.domain.models.stats import Grade, StatBlock


class EquipmentKind(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"


class EquipmentSlot(str, Enum):
    MAIN_HAND = "main_hand"
    HEAD = "head"
    CHEST = "chest"
    LEGS = "legs"
    FEET = "feet"


@dataclass(frozen=True)
class EquipmentDefinition:
    """Gear authored at Common grade. Every other grade is derived from these numbers."""

    id: str
    name: str
    kind: EquipmentKind
    slot: EquipmentSlot
    base_price: int = 0
    base_damage: float = 0.0
    stat_bonuses: StatBlock = field(default_factory=StatBlock)
    description: str = ""

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not str(self.id or "").strip():
            errors.append("id is required")
        if int(self.base_price) < 0:
            errors.append("base_price cannot be negative")
        if float(self.base_damage) < 0:
            errors.append("base_damage cannot be negative")
        if self.kind == EquipmentKind.WEAPON and float(self.base_damage) <= 0:
            errors.append("weapons need a positive base_damage")
        return errors


@dataclass(frozen=True)
class GradedEquipment:
    definition: EquipmentDefinition
    grade: Grade

    @property
    def id(self) -> str:
        return f"{self.definition.kind.value}_{self.definition.id.strip().lower()}_{self.grade.value}"

    def validate(self) -> list[str]:
        return self.definition.validate()


def graded(definitions: Iterable[EquipmentDefinition], grades: Iterable[Grade] = tuple(Grade)) -> tuple[GradedEquipment, ...]:
    tiers = tuple(grades)
    return tuple(GradedEquipment(definition, grade) for definition in definitions for grade in tiers)


@dataclass(frozen=True)
class EquipmentRecord:
    item_id: str
    base_id: str
    name: str
    kind: EquipmentKind
    slot: EquipmentSlot
    grade: Grade
    price: int
    min_damage: int = 0
    max_damage: int = 0
    stat_bonuses: StatBlock = field(default_factory=StatBlock)
    description: str = ""
