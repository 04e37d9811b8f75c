import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.application.services.outcome_resolver import (
    draw,
    match_interaction,
    prepare_table,
    resolve,
    resolve_event,
)
from contentgen.domain.errors import DefinitionError, ResolutionAmbiguityWarning
from contentgen.domain.models.actor import ActorProfile
from contentgen.domain.models.outcome import EffectKind, ItemInteraction, Outcome, OutcomeTable
from contentgen.infrastructure.content import DUNGEON_EVENTS


class _StubRandom:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class _StubItemQuery:
    def __init__(self, *items: str) -> None:
        self.items = set(items)

    def has(self, item_id: str) -> bool:
        return item_id in self.items


def _event(event_id: str):
    return next(event for event in DUNGEON_EVENTS if event.id == event_id)


def _table(*weights: float) -> OutcomeTable:
    return OutcomeTable.of(
        Outcome(description=f"outcome {index}", weight=weight, effect=EffectKind.GAIN_GOLD, magnitude=index)
        for index, weight in enumerate(weights)
    )


class DrawTests(unittest.TestCase):
    def test_healing_fountain_roll_at_half_heals(self) -> None:
        fountain = _event("fountain_health")
        outcome = resolve(fountain.outcomes, _StubItemQuery(), _StubRandom(0.5))
        self.assertEqual(EffectKind.HEAL_PERCENT, outcome.effect)
        self.assertEqual(50, outcome.magnitude)

    def test_roll_on_boundary_selects_earlier_outcome(self) -> None:
        outcome, roll = draw(_table(0.5, 0.5), _StubRandom(0.5))
        self.assertEqual("outcome 0", outcome.description)
        self.assertEqual(0.5, roll)

    def test_residual_mass_falls_to_last_outcome(self) -> None:
        outcome, _roll = draw(_table(0.2, 0.3), _StubRandom(0.9))
        self.assertEqual("outcome 1", outcome.description)

    def test_zero_weight_outcome_is_never_drawn_mid_table(self) -> None:
        table = _table(0.5, 0.0, 0.5)
        drawn = {draw(table, random.Random(seed))[0].description for seed in range(300)}
        self.assertEqual({"outcome 0", "outcome 2"}, drawn)

    def test_zero_roll_skips_leading_zero_weight_outcome(self) -> None:
        outcome, roll = draw(_table(0.0, 1.0), _StubRandom(0.0))
        self.assertEqual(0.0, roll)
        self.assertEqual("outcome 1", outcome.description)

    def test_empty_table_raises_definition_error(self) -> None:
        with self.assertRaises(DefinitionError):
            draw(OutcomeTable(), random.Random(1))

    def test_same_seed_reproduces_outcome(self) -> None:
        table = _event("curio_dice").outcomes
        first = [draw(table, random.Random(seed))[0] for seed in range(40)]
        second = [draw(table, random.Random(seed))[0] for seed in range(40)]
        self.assertEqual(first, second)

    def test_healing_fountain_frequencies_follow_weights(self) -> None:
        fountain = _event("fountain_health")
        heals = 0
        for seed in range(1000):
            outcome = resolve(fountain.outcomes, None, random.Random(seed))
            if outcome.effect == EffectKind.HEAL_PERCENT:
                heals += 1
        self.assertGreater(heals, 740)
        self.assertLess(heals, 860)


class ItemInteractionTests(unittest.TestCase):
    def test_antidote_guarantees_full_restore(self) -> None:
        fountain = _event("fountain_health")
        for seed in range(1000):
            outcome = resolve(
                fountain.outcomes,
                _StubItemQuery("PoisonAntidote"),
                random.Random(seed),
                fountain.item_interactions,
            )
            self.assertEqual(EffectKind.FULL_RESTORE, outcome.effect)

    def test_first_declared_interaction_wins(self) -> None:
        coffin = _event("curio_coffin")
        match = match_interaction(coffin.item_interactions, _StubItemQuery("HolyWater", "IdentifyScroll"))
        self.assertEqual("IdentifyScroll", match.required_item_id)

    def test_no_inventory_means_no_interaction(self) -> None:
        coffin = _event("curio_coffin")
        self.assertIsNone(match_interaction(coffin.item_interactions, None))

    def test_resolve_event_reports_item_source(self) -> None:
        actor = ActorProfile(items=frozenset({"PoisonAntidote"}))
        resolved = resolve_event(_event("fountain_health"), actor, random.Random(3))
        self.assertEqual("item", resolved.source)
        self.assertEqual("PoisonAntidote", resolved.item_id)
        self.assertIsNone(resolved.roll)
        self.assertIn("antidote", resolved.result_text)


class PrepareTableTests(unittest.TestCase):
    def test_balanced_table_passes_through_untouched(self) -> None:
        table = _table(0.25, 0.75)
        self.assertIs(table, prepare_table(table, record_id="balanced"))

    def test_unbalanced_table_warns_and_normalizes(self) -> None:
        with self.assertWarns(ResolutionAmbiguityWarning):
            prepared = prepare_table(_table(2.0, 2.0), record_id="heavy")
        self.assertEqual([0.5, 0.5], [outcome.weight for outcome in prepared])

    def test_unbalanced_table_kept_when_normalization_disabled(self) -> None:
        table = _table(0.2, 0.2)
        with self.assertWarns(ResolutionAmbiguityWarning):
            prepared = prepare_table(table, record_id="light", normalize=False)
        self.assertIs(table, prepared)

    def test_negative_weight_is_a_definition_error(self) -> None:
        with self.assertRaises(DefinitionError) as ctx:
            prepare_table(_table(1.5, -0.5), record_id="broken")
        self.assertEqual("broken", ctx.exception.record_id)
        self.assertTrue(any("cannot be negative" in problem for problem in ctx.exception.problems))

    def test_dice_sixths_are_within_tolerance(self) -> None:
        table = _event("curio_dice").outcomes
        self.assertIs(table, prepare_table(table, record_id="curio_dice"))


class ResolveEventTests(unittest.TestCase):
    def test_plain_event_resolves_from_table(self) -> None:
        resolved = resolve_event(_event("fountain_health"), ActorProfile(), _StubRandom(0.95))
        self.assertEqual("table", resolved.source)
        self.assertEqual(EffectKind.DAMAGE_HP, resolved.outcome.effect)
        self.assertTrue(resolved.outcome.is_negative)

    def test_choice_event_requires_index(self) -> None:
        with self.assertRaises(ValueError):
            resolve_event(_event("curio_crossroads"), ActorProfile(), random.Random(1))

    def test_out_of_range_choice_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            resolve_event(_event("curio_crossroads"), ActorProfile(), random.Random(1), choice_index=7)

    def test_conditioned_choice_needs_condition(self) -> None:
        crossroads = _event("curio_crossroads")
        with self.assertRaises(ValueError):
            resolve_event(crossroads, ActorProfile(is_night=False), random.Random(1), choice_index=2)
        resolved = resolve_event(crossroads, ActorProfile(is_night=True), random.Random(1), choice_index=2)
        self.assertEqual("choice", resolved.source)
        self.assertEqual(EffectKind.INCREASE_SPEED, resolved.outcome.effect)

    def test_gold_choice_unlocks_at_threshold(self) -> None:
        sacrifice = _event("trial_sacrifice")
        with self.assertRaises(ValueError):
            resolve_event(sacrifice, ActorProfile(gold=999), random.Random(1), choice_index=2)
        resolved = resolve_event(sacrifice, ActorProfile(gold=1000), random.Random(1), choice_index=2)
        self.assertEqual(EffectKind.LOSE_GOLD, resolved.outcome.effect)

    def test_actor_profile_serves_as_inventory(self) -> None:
        interaction = ItemInteraction(
            "Key",
            "The key fits.",
            Outcome(description="Unlocked", weight=1.0, effect=EffectKind.GAIN_ITEM, magnitude=1),
        )
        self.assertEqual(interaction, match_interaction([interaction], ActorProfile(items=frozenset({"Key"}))))


if __name__ == "__main__":
    unittest.main()
