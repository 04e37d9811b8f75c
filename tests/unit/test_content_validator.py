import io
import sys
from dataclasses import replace
from contextlib import redirect_stdout
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from contentgen.domain.models.dialogue import DialogueGraph, DialogueNode
from contentgen.domain.models.equipment import EquipmentDefinition, EquipmentKind, EquipmentSlot
from contentgen.domain.models.event import CombatWave, EventDefinition, EventType, TriggerKind, WaveSchedule
from contentgen.domain.models.outcome import EffectKind, Outcome, OutcomeTable
from contentgen.domain.models.stats import Grade
from contentgen.infrastructure.content import race_definitions, variant_definitions
from contentgen.infrastructure.content_validator import main, validate_definitions, validate_shipped_content


def _arena(*waves: CombatWave, weight: float = 1.0) -> EventDefinition:
    return EventDefinition(
        id="arena_test",
        name="Test Arena",
        description="",
        event_type=EventType.ARENA,
        rarity=Grade.COMMON,
        trigger=TriggerKind.CHANCE_BASED,
        spawn_chance=0.1,
        min_floor=1,
        max_floor=10,
        outcomes=OutcomeTable.of((Outcome(description="Won", weight=weight, effect=EffectKind.GAIN_GOLD, magnitude=100),)),
        waves=WaveSchedule(tuple(waves)),
    )


class ContentValidatorTests(unittest.TestCase):
    def test_shipped_content_has_no_errors(self) -> None:
        errors, _notes = validate_shipped_content()
        self.assertEqual([], errors)

    def test_unknown_wave_variant_is_reported(self) -> None:
        errors, _notes = validate_definitions(
            races=race_definitions(),
            variants=variant_definitions(),
            events=[_arena(CombatWave(1, "Kobold", "Normal", 3))],
        )
        self.assertEqual(["event.arena_test: wave 1 references unknown variant Kobold_Normal"], errors)

    def test_weight_sum_is_a_warning_not_an_error(self) -> None:
        errors, notes = validate_definitions(
            races=race_definitions(),
            variants=variant_definitions(),
            events=[_arena(CombatWave(1, "Goblin", "Normal", 3), weight=0.5)],
        )
        self.assertEqual([], errors)
        self.assertEqual(1, len(notes))
        self.assertIn("sum to 0.5", notes[0])

    def test_dialogue_problems_are_prefixed_with_record(self) -> None:
        graph = DialogueGraph(
            id="elder_greeting",
            npc_name="Elder Aldor",
            nodes=(DialogueNode(id="n1", speaker="Elder Aldor", text="Hello.", next_id="n2"),),
        )
        errors, _notes = validate_definitions(dialogues=[graph])
        self.assertEqual(["dialogue.elder_greeting: node n1 continues to missing node n2"], errors)

    def test_kind_filter_limits_report(self) -> None:
        graph = DialogueGraph(id="broken_graph", npc_name="Broken", nodes=())
        errors, _notes = validate_definitions(
            races=race_definitions(),
            variants=variant_definitions(),
            events=[_arena(CombatWave(1, "Kobold", "Normal", 3))],
            dialogues=[graph],
            only="dialogue",
        )
        self.assertEqual(["dialogue.broken_graph: dialogue has no nodes"], errors)

    def test_every_duplicate_is_reported_and_checking_continues(self) -> None:
        races = race_definitions() + (
            replace(race_definitions()[0], id="race_goblin_dup"),
            replace(race_definitions()[1], id="race_orc_dup"),
        )
        variants = variant_definitions() + (replace(variant_definitions()[0], name="Impostor"),)
        errors, _notes = validate_definitions(
            races=races,
            variants=variants,
            events=[_arena(CombatWave(1, "Kobold", "Normal", 3))],
        )
        self.assertEqual(
            [
                "race.race_goblin_dup: race type Goblin is already defined by race_goblin",
                "race.race_orc_dup: race type Orc is already defined by race_orc",
                "variant.Goblin_Normal: variant id is already declared as Goblin_Normal",
                "event.arena_test: wave 1 references unknown variant Kobold_Normal",
            ],
            errors,
        )

    def test_weapon_without_damage_is_reported_for_every_grade(self) -> None:
        club = EquipmentDefinition(id="Club", name="Club", kind=EquipmentKind.WEAPON, slot=EquipmentSlot.MAIN_HAND)
        errors, _notes = validate_definitions(equipment=[club], only="equipment")
        self.assertEqual(5, len(errors))
        self.assertEqual("equipment.weapon_club_common: weapons need a positive base_damage", errors[0])

    def test_main_returns_zero_for_shipped_content(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main([])
        self.assertEqual(0, code)
        self.assertIn("Content valid.", buf.getvalue())

    def test_main_accepts_kind_filter(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["--kind", "variant"])
        self.assertEqual(0, code)
        self.assertIn("Content valid.", buf.getvalue())


if __name__ == "__main__":
    unittest.main()
