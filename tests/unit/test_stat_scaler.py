import random
import sys
from collections import Counter
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.application.services.stat_scaler import (
    drop_rate_for_grade,
    experience_for_grade,
    gold_for_grade,
    grade_multiplier,
    growth_scale,
    monster_stats,
    roll,
    roll_grade,
    scale,
    variant_stat_bands,
)
from contentgen.domain.models.monster import RaceDefinition, VariantDefinition
from contentgen.domain.models.stats import STAT_FIELDS, StatBlock, VarianceRange, round_half_up


def _race(strength: float = 8.0, growth: float = 1.0, **kwargs) -> RaceDefinition:
    return RaceDefinition(
        id="race_test",
        race_type="Test",
        name="Test",
        base_stats=StatBlock(strength=strength),
        growth=StatBlock(strength=growth),
        **kwargs,
    )


def _variant(tier_index: int = 0) -> VariantDefinition:
    return VariantDefinition(
        id="Test_Normal",
        name="Test Normal",
        race_type="test",
        stat_min_variance=StatBlock(strength=-2),
        stat_max_variance=StatBlock(strength=2),
        tier_index=tier_index,
    )


class StatBlockTests(unittest.TestCase):
    def test_fields_default_to_zero_and_merge_adds_fieldwise(self) -> None:
        self.assertEqual(0.0, StatBlock().total)
        merged = StatBlock(strength=3, luck=1) + StatBlock(strength=2, defense=4)
        self.assertEqual(StatBlock(strength=5, luck=1, defense=4), merged)

    def test_round_half_up_rounds_halves_away_from_zero(self) -> None:
        self.assertEqual(3, round_half_up(2.5))
        self.assertEqual(-3, round_half_up(-2.5))
        self.assertEqual(2, round_half_up(2.49))

    def test_variance_range_rejects_inverted_bounds(self) -> None:
        with self.assertRaises(ValueError):
            VarianceRange(2, -2)
        self.assertTrue(VarianceRange().is_empty)


class ScaleTests(unittest.TestCase):
    def test_scale_rounds_every_field_to_whole_units(self) -> None:
        scaled = scale(StatBlock(strength=10, agility=7, luck=3), 1.15)
        self.assertEqual(12.0, scaled.strength)
        self.assertEqual(8.0, scaled.agility)
        self.assertEqual(3.0, scaled.luck)

    def test_scale_is_monotonic_in_multiplier(self) -> None:
        rng = random.Random(4)
        for _ in range(200):
            block = StatBlock(**{name: rng.uniform(0, 50) for name in STAT_FIELDS})
            low_m = rng.uniform(0, 3)
            high_m = low_m + rng.uniform(0, 2)
            low = scale(block, low_m)
            high = scale(block, high_m)
            for name in STAT_FIELDS:
                self.assertLessEqual(low.get(name), high.get(name))

    def test_negative_multiplier_encodes_penalty(self) -> None:
        self.assertEqual(-5.0, scale(StatBlock(strength=10), -0.5).strength)

    def test_growth_scale_is_linear_in_index(self) -> None:
        base = StatBlock(strength=10, vitality=5)
        growth = StatBlock(strength=2.5, vitality=1)
        self.assertEqual(StatBlock(strength=17.5, vitality=8), growth_scale(base, growth, 3))
        self.assertEqual(base, growth_scale(base, growth, 0))


class RollTests(unittest.TestCase):
    def test_roll_stays_within_each_band(self) -> None:
        minimum = StatBlock(strength=-2, agility=0, luck=5)
        maximum = StatBlock(strength=2, agility=0, luck=9)
        for seed in range(300):
            rolled = roll(minimum, maximum, random.Random(seed))
            for name in STAT_FIELDS:
                self.assertTrue(VarianceRange(minimum.get(name), maximum.get(name)).contains(rolled.get(name)))

    def test_same_seed_reproduces_roll(self) -> None:
        minimum = StatBlock.of(-2, -2, -2, -2, -2, -2, -2, -2)
        maximum = StatBlock.of(2, 2, 2, 2, 2, 2, 2, 2)
        self.assertEqual(roll(minimum, maximum, random.Random(99)), roll(minimum, maximum, random.Random(99)))

    def test_fields_are_drawn_independently(self) -> None:
        minimum = StatBlock.of(0, 0)
        maximum = StatBlock.of(10, 10)
        rolled = [roll(minimum, maximum, random.Random(seed)) for seed in range(50)]
        self.assertTrue(any(row.strength != row.agility for row in rolled))

    def test_roll_rejects_inverted_band(self) -> None:
        with self.assertRaises(ValueError):
            roll(StatBlock(strength=3), StatBlock(strength=1), random.Random(1))

    def test_variant_strength_stays_in_band_across_rolls(self) -> None:
        rng = random.Random(2024)
        race = _race(strength=8, growth=1.0)
        variant = _variant(tier_index=0)
        seen: Counter[int] = Counter()
        for _ in range(1000):
            instance = monster_stats(race, variant, rng, grade=100)
            self.assertGreaterEqual(instance.stats.strength, 6)
            self.assertLessEqual(instance.stats.strength, 10)
            seen[int(instance.stats.strength)] += 1
        self.assertEqual({6, 7, 8, 9, 10}, set(seen))
        # Interior values collect a full unit of probability mass; the endpoints only half.
        for value in (7, 8, 9):
            self.assertGreater(seen[value], 150)
            self.assertLess(seen[value], 350)


class GradeTests(unittest.TestCase):
    def test_roll_grade_is_clamped(self) -> None:
        rng = random.Random(5)
        grades = [roll_grade(rng) for _ in range(2000)]
        self.assertTrue(all(80.0 <= grade <= 120.0 for grade in grades))
        self.assertAlmostEqual(100.0, sum(grades) / len(grades), delta=1.0)

    def test_rewards_scale_with_grade(self) -> None:
        self.assertEqual(1.1, grade_multiplier(110))
        self.assertEqual(88, experience_for_grade(80, 110))
        self.assertEqual(12, gold_for_grade(15, 85))
        self.assertAlmostEqual(0.00132, drop_rate_for_grade(0.0012, 110))
        self.assertEqual(1.0, drop_rate_for_grade(0.95, 120))

    def test_monster_stats_applies_grade_before_growth(self) -> None:
        race = _race(strength=10, growth=2.0, base_experience=100, base_gold=20, drop_rate=0.5)
        variant = VariantDefinition(id="Test_Elite", name="Test Elite", race_type="Test", tier_index=2)
        instance = monster_stats(race, variant, random.Random(1), grade=120)
        self.assertEqual(16.0, instance.stats.strength)
        self.assertEqual(120, instance.experience)
        self.assertEqual(24, instance.gold)
        self.assertAlmostEqual(0.6, instance.drop_rate)

    def test_variant_stat_bands_fold_growth_and_variance(self) -> None:
        low, high = variant_stat_bands(_race(strength=8, growth=1.0), _variant(tier_index=2))
        self.assertEqual(8.0, low.strength)
        self.assertEqual(12.0, high.strength)


if __name__ == "__main__":
    unittest.main()
