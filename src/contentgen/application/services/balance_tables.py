from __future__ import annotations

import math

from contentgen.domain.errors import DefinitionError
from contentgen.domain.models.stats import Grade, GradeTable


EXP_CURVE_BASE = 100
EXP_CURVE_EXPONENT = 1.5
LEVEL_CAP = 99

MONSTER_GRADE_MEAN = 100.0
MONSTER_GRADE_STDDEV = 7.0
MONSTER_GRADE_MIN = 80.0
MONSTER_GRADE_MAX = 120.0

ITEM_PRICE_GRADE_TABLE = GradeTable(
    name="item_price",
    multipliers={
        Grade.COMMON: 1.0,
        Grade.UNCOMMON: 1.5,
        Grade.RARE: 3.0,
        Grade.EPIC: 7.0,
        Grade.LEGENDARY: 20.0,
    },
)

# Also scales weapon damage.
ITEM_STAT_GRADE_TABLE = GradeTable(
    name="item_stat",
    multipliers={
        Grade.COMMON: 1.0,
        Grade.UNCOMMON: 1.3,
        Grade.RARE: 1.7,
        Grade.EPIC: 2.2,
        Grade.LEGENDARY: 3.0,
    },
)

GRADE_TABLES = (ITEM_PRICE_GRADE_TABLE, ITEM_STAT_GRADE_TABLE)

# Variant tier index fed to race growth curves.
VARIANT_TIER_INDEX = {
    "normal": 0,
    "shaman": 1,
    "berserker": 1,
    "elite": 2,
    "leader": 3,
    "boss": 4,
}


def exp_required_for_level(level: int) -> int:
    safe_level = max(1, min(int(level), LEVEL_CAP))
    return int(math.floor(EXP_CURVE_BASE * safe_level ** EXP_CURVE_EXPONENT))


def kills_to_level(experience_per_kill: int, level: int) -> int:
    """Kills of one monster needed to fill the experience bar of ``level``."""

    per_kill = int(experience_per_kill)
    if per_kill <= 0:
        return 0
    return int(math.ceil(exp_required_for_level(level) / per_kill))


def validate_grade_table(table: GradeTable) -> list[str]:
    errors: list[str] = []
    previous: tuple[Grade, float] | None = None
    for grade, multiplier in table.ordered():
        if previous is not None and multiplier < previous[1]:
            errors.append(
                f"{grade.value} multiplier {multiplier:g} is below {previous[0].value} multiplier {previous[1]:g}"
            )
        previous = (grade, multiplier)
    return errors


def require_monotonic(table: GradeTable) -> GradeTable:
    problems = validate_grade_table(table)
    if problems:
        raise DefinitionError(table.name, "grade table is not monotonic", problems=problems)
    return table
