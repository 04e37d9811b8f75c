"""Validate every shipped content definition without writing anything.

Usage examples:
    python -m contentgen.infrastructure.content_validator
    python -m contentgen.infrastructure.content_validator --kind dialogue
"""

from __future__ import annotations

import argparse
import warnings
from typing import Iterable, Sequence

from contentgen.application.services.balance_tables import GRADE_TABLES, validate_grade_table
from contentgen.application.services.content_builder import (
    KIND_DIALOGUE,
    KIND_EQUIPMENT,
    KIND_EVENT,
    KIND_RACE,
    KIND_VARIANT,
    KIND_WORLD_EVENT,
    ContentBuilder,
    index_races,
    index_variants,
    kind_of,
    record_id_of,
)
from contentgen.domain.errors import DefinitionError, ResolutionAmbiguityWarning
from contentgen.domain.models.dialogue import DialogueGraph
from contentgen.domain.models.equipment import EquipmentDefinition, graded
from contentgen.domain.models.event import EventDefinition
from contentgen.domain.models.monster import RaceDefinition, VariantDefinition
from contentgen.domain.models.world_event import WorldEventDefinition
from contentgen.infrastructure.content import (
    DIALOGUES,
    DUNGEON_EVENTS,
    EQUIPMENT,
    WORLD_EVENTS,
    race_definitions,
    variant_definitions,
)
from contentgen.infrastructure.inmemory.inmemory_catalog_repo import InMemoryCatalogRepository

KINDS = (KIND_RACE, KIND_VARIANT, KIND_EVENT, KIND_WORLD_EVENT, KIND_DIALOGUE, KIND_EQUIPMENT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate shipped content definitions")
    parser.add_argument("--kind", choices=KINDS, default=None, help="Only validate one kind of record")
    return parser


def validate_definitions(
    *,
    races: Iterable[RaceDefinition] = (),
    variants: Iterable[VariantDefinition] = (),
    events: Iterable[EventDefinition] = (),
    world_events: Iterable[WorldEventDefinition] = (),
    dialogues: Iterable[DialogueGraph] = (),
    equipment: Iterable[EquipmentDefinition] = (),
    only: str | None = None,
) -> tuple[list[str], list[str]]:
    """Return ``(errors, warnings)``. Races and variants always feed the lookups; ``only`` limits what is reported."""

    builder = ContentBuilder(InMemoryCatalogRepository())
    errors: list[str] = []
    notes: list[str] = []
    race_rows = list(races)
    variant_rows = list(variants)

    race_index, race_duplicates = index_races(race for race in race_rows if not race.validate())
    variant_index, variant_duplicates = index_variants(variant_rows)
    for kind, duplicates in ((KIND_RACE, race_duplicates), (KIND_VARIANT, variant_duplicates)):
        if only in (None, kind):
            errors.extend(f"{kind}.{error.record_id}: {error.message}" for error in duplicates)

    def _check(definition, **indexes) -> None:
        if only is not None and kind_of(definition) != only:
            return
        label = f"{kind_of(definition)}.{record_id_of(definition) or '<no id>'}"
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ResolutionAmbiguityWarning)
            try:
                builder.materialize(definition, **indexes)
            except DefinitionError as exc:
                if exc.problems:
                    errors.extend(f"{label}: {problem}" for problem in exc.problems)
                else:
                    errors.append(f"{label}: {exc.message}")
        notes.extend(f"{label}: {item.message}" for item in caught if issubclass(item.category, ResolutionAmbiguityWarning))

    for race in race_rows:
        _check(race)
    for variant in variant_rows:
        _check(variant, races=race_index)
    for event in events:
        _check(event, variants=variant_index)
    for world_event in world_events:
        _check(world_event, variants=variant_index)
    for graph in dialogues:
        _check(graph)
    for item in graded(equipment):
        _check(item)
    return errors, notes


def validate_shipped_content(kind: str | None = None) -> tuple[list[str], list[str]]:
    errors, notes = validate_definitions(
        races=race_definitions(),
        variants=variant_definitions(),
        events=DUNGEON_EVENTS,
        world_events=WORLD_EVENTS,
        dialogues=DIALOGUES,
        equipment=EQUIPMENT,
        only=kind,
    )
    if kind is None:
        for table in GRADE_TABLES:
            errors.extend(f"grade_table.{table.name}: {problem}" for problem in validate_grade_table(table))
    return errors, notes


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    errors, notes = validate_shipped_content(args.kind)
    for message in notes:
        print(f"warning: {message}")
    if errors:
        print(f"Content invalid ({len(errors)} errors):")
        for message in errors:
            print(f"- {message}")
        return 1

    print("Content valid.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
