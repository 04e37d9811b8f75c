import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.application.services.balance_tables import (
    GRADE_TABLES,
    ITEM_PRICE_GRADE_TABLE,
    ITEM_STAT_GRADE_TABLE,
    LEVEL_CAP,
    VARIANT_TIER_INDEX,
    exp_required_for_level,
    kills_to_level,
    require_monotonic,
    validate_grade_table,
)
from contentgen.domain.errors import DefinitionError
from contentgen.domain.models.stats import Grade, GradeTable


class BalanceTablesTests(unittest.TestCase):
    def test_exp_curve_follows_power_law(self) -> None:
        self.assertEqual(100, exp_required_for_level(1))
        self.assertEqual(282, exp_required_for_level(2))
        self.assertEqual(3162, exp_required_for_level(10))

    def test_exp_curve_clamps_level(self) -> None:
        self.assertEqual(exp_required_for_level(1), exp_required_for_level(0))
        self.assertEqual(exp_required_for_level(LEVEL_CAP), exp_required_for_level(LEVEL_CAP + 50))

    def test_kills_to_level_rounds_up(self) -> None:
        self.assertEqual(6, kills_to_level(50, 2))
        self.assertEqual(2, kills_to_level(50, 1))
        self.assertEqual(0, kills_to_level(0, 5))

    def test_item_grade_tables_are_monotonic(self) -> None:
        for table in GRADE_TABLES:
            self.assertEqual([], validate_grade_table(table), table.name)

    def test_item_price_multipliers(self) -> None:
        self.assertEqual(
            [1.0, 1.5, 3.0, 7.0, 20.0],
            [ITEM_PRICE_GRADE_TABLE.multiplier(grade) for grade in Grade],
        )
        self.assertEqual(20.0, ITEM_PRICE_GRADE_TABLE.multiplier("legendary"))
        self.assertEqual(1.7, ITEM_STAT_GRADE_TABLE.multiplier(Grade.RARE))

    def test_missing_tier_defaults_to_one(self) -> None:
        table = GradeTable({Grade.EPIC: 1.6})
        self.assertEqual(1.0, table.multiplier(Grade.COMMON))

    def test_inverted_table_is_rejected(self) -> None:
        table = GradeTable({Grade.COMMON: 1.0, Grade.UNCOMMON: 1.2, Grade.RARE: 1.1}, name="bent")
        errors = validate_grade_table(table)
        self.assertEqual(1, len(errors))
        self.assertIn("rare", errors[0])
        with self.assertRaises(DefinitionError):
            require_monotonic(table)

    def test_variant_tiers_grow_toward_boss(self) -> None:
        self.assertEqual(0, VARIANT_TIER_INDEX["normal"])
        self.assertLess(VARIANT_TIER_INDEX["elite"], VARIANT_TIER_INDEX["boss"])


if __name__ == "__main__":
    unittest.main()
