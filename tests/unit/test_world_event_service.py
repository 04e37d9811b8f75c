import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.application.services.content_builder import build_race_index, build_variant_index
from contentgen.application.services.world_event_service import (
    active_world_events,
    roll_rewards,
    spawn_monsters,
    unknown_variants,
)
from contentgen.domain.errors import DefinitionError
from contentgen.domain.models.stats import Grade
from contentgen.domain.models.world_event import (
    RewardKind,
    Weather,
    WorldEventDefinition,
    WorldEventMonster,
    WorldEventReward,
    WorldEventType,
)
from contentgen.infrastructure.content import WORLD_EVENTS, race_definitions, variant_definitions


def _world_event(event_id: str) -> WorldEventDefinition:
    return next(event for event in WORLD_EVENTS if event.id == event_id)


class _StubRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class WorldEventServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.races = build_race_index(race_definitions())
        self.variants = build_variant_index(variant_definitions())

    def test_shipped_events_reference_known_variants(self) -> None:
        for event in WORLD_EVENTS:
            with self.subTest(event=event.id):
                self.assertEqual([], event.validate())
                self.assertEqual([], unknown_variants(event, self.variants))

    def test_variant_lookup_ignores_case(self) -> None:
        event = WorldEventDefinition(
            id="we_mixed_case",
            name="Mixed",
            description="",
            event_type=WorldEventType.MONSTER_RAID,
            rarity=Grade.COMMON,
            spawn_chance=0.1,
            cooldown_minutes=10,
            monsters=(WorldEventMonster("GOBLIN_Normal", 1), WorldEventMonster("kobold_normal", 1)),
        )
        self.assertEqual(["kobold_normal"], unknown_variants(event, self.variants))

    def test_spawned_monsters_stay_in_grade_band(self) -> None:
        event = _world_event("we_golden_goblin")
        rng = random.Random(11)
        for _ in range(50):
            for spawned in spawn_monsters(event, self.variants, self.races, rng):
                self.assertGreaterEqual(spawned.instance.grade, 110)
                self.assertLessEqual(spawned.instance.grade, 120)
                self.assertEqual("Goblin_Elite", spawned.instance.variant_id)

    def test_spawn_count_matches_definition(self) -> None:
        event = _world_event("we_goblin_raid")
        spawned = spawn_monsters(event, self.variants, self.races, random.Random(3))
        self.assertEqual(sum(monster.count for monster in event.monsters), len(spawned))

    def test_unknown_variant_cannot_spawn(self) -> None:
        event = WorldEventDefinition(
            id="we_missing",
            name="Missing",
            description="",
            event_type=WorldEventType.MINI_BOSS,
            rarity=Grade.RARE,
            spawn_chance=0.1,
            cooldown_minutes=10,
            monsters=(WorldEventMonster("kobold_boss", 1, 110, 120, True),),
        )
        with self.assertRaises(DefinitionError):
            spawn_monsters(event, self.variants, self.races, random.Random(1))

    def test_rewards_drop_independently(self) -> None:
        event = _world_event("we_golden_goblin")
        lucky = roll_rewards(event, _StubRandom(0.1))
        unlucky = roll_rewards(event, _StubRandom(0.9))
        self.assertEqual(3, len(lucky))
        self.assertEqual([RewardKind.GOLD, RewardKind.EXPERIENCE], [reward.kind for reward in unlucky])

    def test_night_and_weather_gates(self) -> None:
        storm = _world_event("we_elemental_storm")
        self.assertFalse(storm.applies_to(level=storm.min_level, is_night=False, weather=Weather.CLEAR))
        self.assertTrue(storm.applies_to(level=storm.min_level, is_night=False, weather="storm"))
        star = _world_event("we_fallen_star")
        self.assertFalse(star.applies_to(level=star.min_level, is_night=False, weather=Weather.CLEAR))
        self.assertTrue(star.applies_to(level=star.min_level, is_night=True, weather=Weather.CLEAR))

    def test_active_events_roll_spawn_chance(self) -> None:
        rows = active_world_events(WORLD_EVENTS, level=50, is_night=True, weather=Weather.CLEAR, rng=_StubRandom(0.0))
        ids = {event.id for event in rows}
        self.assertIn("we_fallen_star", ids)
        self.assertNotIn("we_elemental_storm", ids)
        none = active_world_events(WORLD_EVENTS, level=50, is_night=True, weather=Weather.CLEAR, rng=_StubRandom(0.99))
        self.assertEqual([], none)

    def test_grade_band_outside_limits_is_invalid(self) -> None:
        event = WorldEventDefinition(
            id="we_overgraded",
            name="Overgraded",
            description="",
            event_type=WorldEventType.MINI_BOSS,
            rarity=Grade.EPIC,
            spawn_chance=0.1,
            cooldown_minutes=10,
            monsters=(WorldEventMonster("orc_leader", 1, 110, 130),),
            rewards=(WorldEventReward(RewardKind.ITEM, 1, 0.5),),
        )
        errors = event.validate()
        self.assertTrue(any("80-120" in item for item in errors))
        self.assertTrue(any("item_id is required" in item for item in errors))


if __name__ == "__main__":
    unittest.main()
