from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from contentgen.domain.models.stats import STAT_FIELDS, StatBlock, VarianceRange


class AIDisposition(str, Enum):
    AGGRESSIVE = "aggressive"
    DEFENSIVE = "defensive"
    TERRITORIAL = "territorial"
    PASSIVE = "passive"


@dataclass(frozen=True)
class ElementalAffinity:
    fire_attack: float = 0.0
    fire_resist: float = 0.0
    ice_attack: float = 0.0
    ice_resist: float = 0.0
    lightning_attack: float = 0.0
    lightning_resist: float = 0.0
    poison_attack: float = 0.0
    poison_resist: float = 0.0
    dark_attack: float = 0.0
    dark_resist: float = 0.0
    holy_attack: float = 0.0
    holy_resist: float = 0.0


@dataclass(frozen=True)
class RaceDefinition:
    id: str
    race_type: str
    name: str
    base_stats: StatBlock
    growth: StatBlock
    base_experience: int = 0
    base_gold: int = 0
    drop_rate: float = 0.0
    description: str = ""
    elemental: ElementalAffinity = field(default_factory=ElementalAffinity)

    @property
    def tag(self) -> str:
        return normalize_race_tag(self.race_type)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not str(self.id or "").strip():
            errors.append("id is required")
        if not self.tag:
            errors.append("race_type is required")
        if int(self.base_experience) < 0:
            errors.append("base_experience cannot be negative")
        if int(self.base_gold) < 0:
            errors.append("base_gold cannot be negative")
        if not 0.0 <= float(self.drop_rate) <= 1.0:
            errors.append("drop_rate must be within [0, 1]")
        return errors


@dataclass(frozen=True)
class VariantDefinition:
    """A monster variant. ``race_type`` is a lookup tag, never a live race object."""

    id: str
    name: str
    race_type: str
    stat_min_variance: StatBlock = field(default_factory=StatBlock)
    stat_max_variance: StatBlock = field(default_factory=StatBlock)
    spawn_weight: float = 1.0
    min_floor: int = 1
    max_floor: int = 10
    ai_disposition: AIDisposition = AIDisposition.AGGRESSIVE
    aggression_multiplier: float = 1.0
    tier_index: int = 0
    description: str = ""

    @property
    def race_tag(self) -> str:
        return normalize_race_tag(self.race_type)

    def variance(self, stat_name: str) -> VarianceRange:
        return VarianceRange(self.stat_min_variance.get(stat_name), self.stat_max_variance.get(stat_name))

    def can_spawn_on_floor(self, floor: int) -> bool:
        return int(self.min_floor) <= int(floor) <= int(self.max_floor)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not str(self.id or "").strip():
            errors.append("id is required")
        if not self.race_tag:
            errors.append("race_type is required")
        for name in STAT_FIELDS:
            low = self.stat_min_variance.get(name)
            high = self.stat_max_variance.get(name)
            if low > high:
                errors.append(f"variance.{name} minimum {low:g} exceeds maximum {high:g}")
        if float(self.spawn_weight) < 0:
            errors.append("spawn_weight cannot be negative")
        if int(self.min_floor) > int(self.max_floor):
            errors.append(f"floor range {self.min_floor}-{self.max_floor} is inverted")
        if int(self.tier_index) < 0:
            errors.append("tier_index cannot be negative")
        return errors


@dataclass(frozen=True)
class MonsterRecord:
    """Materialized variant: race numbers folded into concrete stat bands."""

    variant_id: str
    race_id: str
    race_type: str
    name: str
    min_stats: StatBlock
    max_stats: StatBlock
    spawn_weight: float
    min_floor: int
    max_floor: int
    ai_disposition: AIDisposition
    aggression_multiplier: float
    base_experience: int
    base_gold: int
    drop_rate: float
    elemental: ElementalAffinity = field(default_factory=ElementalAffinity)


@dataclass(frozen=True)
class MonsterInstance:
    """One rolled monster: a grade in [80, 120] and the stats and rewards it implies."""

    variant_id: str
    grade: float
    stats: StatBlock
    experience: int
    gold: int
    drop_rate: float
    aggression_multiplier: float = 1.0


def normalize_race_tag(value: str | None) -> str:
    return str(value or "").strip().lower()
