from __future__ import annotations

import math
import random

from contentgen.application.services.balance_tables import (
    MONSTER_GRADE_MAX,
    MONSTER_GRADE_MEAN,
    MONSTER_GRADE_MIN,
    MONSTER_GRADE_STDDEV,
)
from contentgen.domain.models.monster import MonsterInstance, RaceDefinition, VariantDefinition
from contentgen.domain.models.stats import STAT_FIELDS, StatBlock, VarianceRange, round_half_up


def scale(base: StatBlock, multiplier: float) -> StatBlock:
    """Multiply every field by ``multiplier`` and round to whole units.

    Negative multipliers are accepted and produce penalties.
    """

    factor = float(multiplier)
    return base.map(lambda _name, value: round_half_up(value * factor))


def scale_rate(rate: float, multiplier: float) -> float:
    return float(rate) * float(multiplier)


def roll(minimum: StatBlock, maximum: StatBlock, rng: random.Random) -> StatBlock:
    """Draw every field independently and uniformly from its own [min, max] band."""

    values: dict[str, float] = {}
    for name in STAT_FIELDS:
        band = VarianceRange(minimum.get(name), maximum.get(name))
        values[name] = roll_value(band, rng)
    return StatBlock(**values)


def roll_value(band: VarianceRange, rng: random.Random) -> float:
    if band.minimum == band.maximum:
        return float(band.minimum)
    value = rng.uniform(float(band.minimum), float(band.maximum))
    return min(max(value, float(band.minimum)), float(band.maximum))


def growth_scale(base: StatBlock, growth: StatBlock, index: int) -> StatBlock:
    step = int(index)
    return base.map(lambda name, value: value + growth.get(name) * step)


def roll_grade(rng: random.Random) -> float:
    grade = rng.gauss(MONSTER_GRADE_MEAN, MONSTER_GRADE_STDDEV)
    return min(max(grade, MONSTER_GRADE_MIN), MONSTER_GRADE_MAX)


def grade_multiplier(grade: float) -> float:
    return float(grade) / 100.0


def experience_for_grade(base_experience: int, grade: float) -> int:
    return int(math.floor(int(base_experience) * grade_multiplier(grade)))


def gold_for_grade(base_gold: int, grade: float) -> int:
    return int(math.floor(int(base_gold) * grade_multiplier(grade)))


def drop_rate_for_grade(base_rate: float, grade: float) -> float:
    return min(scale_rate(base_rate, grade_multiplier(grade)), 1.0)


def variant_stat_bands(race: RaceDefinition, variant: VariantDefinition) -> tuple[StatBlock, StatBlock]:
    """Stat floor and ceiling a variant can roll at grade 100."""

    grown = growth_scale(race.base_stats, race.growth, variant.tier_index)
    low = (grown + variant.stat_min_variance).rounded()
    high = (grown + variant.stat_max_variance).rounded()
    return low, high


def monster_stats(
    race: RaceDefinition,
    variant: VariantDefinition,
    rng: random.Random,
    *,
    grade: float | None = None,
) -> MonsterInstance:
    rolled_grade = roll_grade(rng) if grade is None else float(grade)
    multiplier = grade_multiplier(rolled_grade)
    graded = race.base_stats.map(lambda _name, value: value * multiplier)
    grown = growth_scale(graded, race.growth, variant.tier_index)
    variance = roll(variant.stat_min_variance, variant.stat_max_variance, rng)
    return MonsterInstance(
        variant_id=variant.id,
        grade=rolled_grade,
        stats=(grown + variance).rounded(),
        experience=experience_for_grade(race.base_experience, rolled_grade),
        gold=gold_for_grade(race.base_gold, rolled_grade),
        drop_rate=drop_rate_for_grade(race.drop_rate, rolled_grade),
        aggression_multiplier=float(variant.aggression_multiplier),
    )
