from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


STAT_FIELDS: tuple[str, ...] = (
    "strength",
    "agility",
    "vitality",
    "intelligence",
    "defense",
    "magic_defense",
    "luck",
    "stability",
)

@dataclass(frozen=True)
class StatBlock:
    strength: float = 0.0
    agility: float = 0.0
    vitality: float = 0.0
    intelligence: float = 0.0
    defense: float = 0.0
    magic_defense: float = 0.0
    luck: float = 0.0
    stability: float = 0.0

    @classmethod
    def of(cls, *values: float) -> "StatBlock":
        """Build a block from positional values in STAT_FIELDS order; missing trailing fields are zero."""

        if len(values) > len(STAT_FIELDS):
            raise ValueError(f"StatBlock takes at most {len(STAT_FIELDS)} values, got {len(values)}")
        return cls(**{name: float(value) for name, value in zip(STAT_FIELDS, values)})

    def get(self, name: str) -> float:
        return float(getattr(self, name))

    def as_dict(self) -> dict[str, float]:
        return {name: self.get(name) for name in STAT_FIELDS}

    def merge(self, other: "StatBlock") -> "StatBlock":
        return StatBlock(**{name: self.get(name) + other.get(name) for name in STAT_FIELDS})

    def __add__(self, other: object) -> "StatBlock":
        if not isinstance(other, StatBlock):
            return NotImplemented
        return self.merge(other)

    def map(self, func) -> "StatBlock":
        return StatBlock(**{name: float(func(name, self.get(name))) for name in STAT_FIELDS})

    def rounded(self) -> "StatBlock":
        return self.map(lambda _name, value: round_half_up(value))

    @property
    def total(self) -> float:
        return sum(self.get(name) for name in STAT_FIELDS)


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from zero."""

    number = float(value)
    if number >= 0:
        return int(number + 0.5)
    return -int(-number + 0.5)


@dataclass(frozen=True)
class VarianceRange:
    minimum: float = 0.0
    maximum: float = 0.0

    def __post_init__(self) -> None:
        if float(self.minimum) > float(self.maximum):
            raise ValueError(f"Variance minimum {self.minimum} exceeds maximum {self.maximum}")

    @property
    def is_empty(self) -> bool:
        return self.minimum == 0 and self.maximum == 0

    def contains(self, value: float) -> bool:
        return float(self.minimum) <= float(value) <= float(self.maximum)


class Grade(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


@dataclass(frozen=True)
class GradeTable:
    """Rarity tier to multiplier mapping. Tiers missing from the table fall back to 1.0."""

    multipliers: Mapping[Grade, float]
    name: str = "grade_table"

    def multiplier(self, grade: Grade | str) -> float:
        return float(self.multipliers.get(Grade(grade), 1.0))

    def ordered(self) -> list[tuple[Grade, float]]:
        return [(grade, float(self.multipliers[grade])) for grade in Grade if grade in self.multipliers]
