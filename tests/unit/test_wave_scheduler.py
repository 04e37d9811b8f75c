import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.application.services.event_spawner import eligible_events, roll_spawn, spawn_for_floor
from contentgen.application.services.wave_scheduler import WaveScheduler
from contentgen.domain.errors import DefinitionError
from contentgen.domain.models.event import CombatWave, ShopListing, TriggerKind, WaveSchedule
from contentgen.infrastructure.content import DUNGEON_EVENTS


def _event(event_id: str):
    return next(event for event in DUNGEON_EVENTS if event.id == event_id)


class _StubRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class WaveSchedulerTests(unittest.TestCase):
    def test_timeline_measures_delays_from_event_start(self) -> None:
        survival = _event("arena_survival")
        timeline = WaveScheduler(survival.combat_time_limit).timeline(survival.waves, record_id=survival.id)
        self.assertEqual([0.0, 10.0, 20.0], [row.start_offset for row in timeline])
        self.assertEqual([1, 2, 3], [row.wave.wave_number for row in timeline])

    def test_due_waves_follow_elapsed_time(self) -> None:
        survival = _event("arena_survival")
        scheduler = WaveScheduler(survival.combat_time_limit)
        self.assertEqual([1], [wave.wave_number for wave in scheduler.due(survival.waves, 0)])
        self.assertEqual([1, 2], [wave.wave_number for wave in scheduler.due(survival.waves, 15)])
        self.assertEqual(3, len(scheduler.due(survival.waves, 45)))

    def test_wave_past_time_limit_is_rejected(self) -> None:
        schedule = WaveSchedule((CombatWave(1, "Goblin", "Normal", 3), CombatWave(2, "Goblin", "Elite", 1, 40.0)))
        with self.assertRaises(DefinitionError) as ctx:
            WaveScheduler(30).timeline(schedule, record_id="trial_speed")
        self.assertTrue(any("after the 30s limit" in problem for problem in ctx.exception.problems))

    def test_out_of_order_waves_are_rejected(self) -> None:
        schedule = WaveSchedule((CombatWave(2, "Orc", "Normal", 3, 5.0), CombatWave(1, "Orc", "Normal", 3, 0.0)))
        with self.assertRaises(DefinitionError):
            WaveScheduler().timeline(schedule)

    def test_monster_counts_group_by_variant(self) -> None:
        counts = WaveScheduler.monster_counts(_event("arena_survival").waves)
        self.assertEqual({"Beast_Normal": 12, "Beast_Elite": 3}, counts)
        self.assertEqual(15, _event("arena_survival").waves.total_monsters)


class EventSpawnerTests(unittest.TestCase):
    def test_floor_range_filters_events(self) -> None:
        ids = {event.id for event in eligible_events(DUNGEON_EVENTS, 1)}
        self.assertIn("fountain_health", ids)
        self.assertNotIn("portal_boss", ids)
        self.assertNotIn("rest_campfire", ids)

    def test_once_per_dungeon_events_are_not_repeated(self) -> None:
        ids = {event.id for event in eligible_events(DUNGEON_EVENTS, 6, used_ids={"trial_sacrifice"})}
        self.assertNotIn("trial_sacrifice", ids)
        self.assertIn("portal_boss", ids)

    def test_trigger_filter(self) -> None:
        rows = eligible_events(DUNGEON_EVENTS, 6, trigger=TriggerKind.FLOOR_GUARANTEED)
        self.assertEqual(["rest_campfire"], [event.id for event in rows])

    def test_guaranteed_event_always_spawns(self) -> None:
        self.assertTrue(roll_spawn(_event("rest_campfire"), _StubRandom(0.999)))
        self.assertFalse(roll_spawn(_event("fountain_health"), _StubRandom(0.5)))
        self.assertTrue(roll_spawn(_event("fountain_health"), _StubRandom(0.05)))

    def test_spawn_for_floor_includes_guaranteed_events(self) -> None:
        for seed in range(25):
            rows = spawn_for_floor(DUNGEON_EVENTS, 5, random.Random(seed))
            self.assertIn("rest_campfire", [event.id for event in rows])


class ShopListingTests(unittest.TestCase):
    def test_discount_applies_on_lucky_roll(self) -> None:
        listing = ShopListing("HealthPotion_Large", 80, 3, 0.2, 20)
        self.assertEqual(64, listing.price_for(_StubRandom(0.1)))
        self.assertEqual(80, listing.price_for(_StubRandom(0.5)))

    def test_discounted_price_never_drops_below_one(self) -> None:
        self.assertEqual(1, ShopListing("Pebble", 1, 1, 1.0, 100).discounted_price())


if __name__ == "__main__":
    unittest.main()
