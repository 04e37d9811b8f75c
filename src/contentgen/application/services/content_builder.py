from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional

from contentgen.application.services.balance_tables import (
    GRADE_TABLES,
    ITEM_PRICE_GRADE_TABLE,
    ITEM_STAT_GRADE_TABLE,
    require_monotonic,
)
from contentgen.application.services.dialogue_service import require_well_formed
from contentgen.application.services.equipment_pricing import price_equipment
from contentgen.application.services.event_bus import EventBus
from contentgen.application.services.outcome_resolver import prepare_table
from contentgen.application.services.stat_scaler import variant_stat_bands
from contentgen.application.services.wave_scheduler import WaveScheduler
from contentgen.application.services.world_event_service import unknown_variants, variant_key
from contentgen.domain.errors import DefinitionError, PersistenceError
from contentgen.domain.events import RecordMaterialized
from contentgen.domain.models.dialogue import DialogueGraph
from contentgen.domain.models.equipment import EquipmentDefinition, EquipmentRecord, GradedEquipment, graded
from contentgen.domain.models.event import EventDefinition
from contentgen.domain.models.monster import MonsterRecord, RaceDefinition, VariantDefinition, normalize_race_tag
from contentgen.domain.models.stats import GradeTable
from contentgen.domain.models.world_event import WorldEventDefinition
from contentgen.domain.repositories import CatalogRepository
from contentgen.application.serialization import record_to_payload


logger = logging.getLogger(__name__)

KIND_RACE = "race"
KIND_VARIANT = "variant"
KIND_EVENT = "event"
KIND_WORLD_EVENT = "world_event"
KIND_DIALOGUE = "dialogue"
KIND_GRADE_TABLE = "grade_table"
KIND_EQUIPMENT = "equipment"

_KINDS: tuple[tuple[type, str], ...] = (
    (RaceDefinition, KIND_RACE),
    (VariantDefinition, KIND_VARIANT),
    (EventDefinition, KIND_EVENT),
    (WorldEventDefinition, KIND_WORLD_EVENT),
    (DialogueGraph, KIND_DIALOGUE),
    (GradeTable, KIND_GRADE_TABLE),
    (GradedEquipment, KIND_EQUIPMENT),
)


def kind_of(definition: object) -> str:
    for definition_type, kind in _KINDS:
        if isinstance(definition, definition_type):
            return kind
    raise TypeError(f"Unsupported definition type: {type(definition).__name__}")


def record_id_of(definition: object) -> str:
    if isinstance(definition, GradeTable):
        return definition.name
    return str(getattr(definition, "id", "") or "").strip()


def identity_for(kind: str, record_id: str) -> str:
    """Stable catalog key. Depends only on the kind and the authored id."""

    key = str(record_id or "").strip()
    if not key:
        raise DefinitionError("", f"{kind} definition has no id")
    return f"{kind}/{key}"


def index_races(races: Iterable[RaceDefinition]) -> tuple[dict[str, RaceDefinition], list[DefinitionError]]:
    """Index races by type tag. The first declaration of a tag wins; later ones come back as errors."""

    index: dict[str, RaceDefinition] = {}
    duplicates: list[DefinitionError] = []
    for race in races:
        tag = race.tag
        if tag in index:
            duplicates.append(DefinitionError(race.id, f"race type {race.race_type} is already defined by {index[tag].id}"))
            continue
        index[tag] = race
    return index, duplicates


def index_variants(variants: Iterable[VariantDefinition]) -> tuple[dict[str, VariantDefinition], list[DefinitionError]]:
    index: dict[str, VariantDefinition] = {}
    duplicates: list[DefinitionError] = []
    for variant in variants:
        key = variant_key(variant.id)
        if key in index:
            duplicates.append(DefinitionError(variant.id, f"variant id is already declared as {index[key].id}"))
            continue
        index[key] = variant
    return index, duplicates


def build_race_index(races: Iterable[RaceDefinition]) -> dict[str, RaceDefinition]:
    return index_races(races)[0]


def build_variant_index(variants: Iterable[VariantDefinition]) -> dict[str, VariantDefinition]:
    return index_variants(variants)[0]


@dataclass(frozen=True)
class BuildFailure:
    identity: str
    record_id: str
    kind: str
    message: str
    problems: tuple[str, ...] = ()


@dataclass
class BuildReport:
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[BuildFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def merge(self, other: "BuildReport") -> "BuildReport":
        self.created.extend(other.created)
        self.skipped.extend(other.skipped)
        self.failed.extend(other.failed)
        return self

    def summary(self) -> str:
        return f"created={len(self.created)} skipped={len(self.skipped)} failed={len(self.failed)}"


class ContentBuilder:
    """Materializes definitions into the catalog; identities already present are skipped untouched."""

    def __init__(
        self,
        catalog: CatalogRepository,
        *,
        normalize_weights: bool = True,
        bus: EventBus | None = None,
        price_table: GradeTable = ITEM_PRICE_GRADE_TABLE,
        stat_table: GradeTable = ITEM_STAT_GRADE_TABLE,
    ) -> None:
        self._catalog = catalog
        self._normalize_weights = bool(normalize_weights)
        self._bus = bus
        self._price_table = price_table
        self._stat_table = stat_table

    def build(
        self,
        definition: Any,
        identity: str | None = None,
        *,
        races: Mapping[str, RaceDefinition] | None = None,
        variants: Mapping[str, VariantDefinition] | None = None,
    ) -> Optional[Any]:
        kind = kind_of(definition)
        record_id = record_id_of(definition)
        key = identity or identity_for(kind, record_id)
        if self._catalog.exists(key):
            logger.debug("Skipping existing record", extra={"identity": key, "kind": kind})
            return None
        record = self.materialize(definition, races=races, variants=variants)
        if not self._catalog.write_if_absent(key, kind, record_to_payload(record)):
            logger.debug("Record appeared concurrently; skipping", extra={"identity": key, "kind": kind})
            return None
        if self._bus is not None:
            self._bus.publish(RecordMaterialized(identity=key, kind=kind, record_id=record_id))
        return record

    def materialize(
        self,
        definition: Any,
        *,
        races: Mapping[str, RaceDefinition] | None = None,
        variants: Mapping[str, VariantDefinition] | None = None,
    ) -> Any:
        if isinstance(definition, RaceDefinition):
            return self._race(definition)
        if isinstance(definition, VariantDefinition):
            return self._variant(definition, races or {})
        if isinstance(definition, EventDefinition):
            return self._event(definition, variants)
        if isinstance(definition, WorldEventDefinition):
            return self._world_event(definition, variants)
        if isinstance(definition, DialogueGraph):
            return require_well_formed(definition)
        if isinstance(definition, GradeTable):
            return require_monotonic(definition)
        if isinstance(definition, GradedEquipment):
            return self._equipment(definition)
        raise TypeError(f"Unsupported definition type: {type(definition).__name__}")

    def run(
        self,
        *,
        races: Iterable[RaceDefinition] = (),
        variants: Iterable[VariantDefinition] = (),
        events: Iterable[EventDefinition] = (),
        world_events: Iterable[WorldEventDefinition] = (),
        dialogues: Iterable[DialogueGraph] = (),
        equipment: Iterable[EquipmentDefinition] = (),
        grade_tables: Iterable[GradeTable] = GRADE_TABLES,
    ) -> BuildReport:
        """One full generation pass.

        Races and variants are indexed first and handed to the builds that
        reference them. A race type or variant id declared twice keeps its
        first declaration; the later ones are reported as failures.
        """

        race_rows = list(races)
        variant_rows = list(variants)
        report = BuildReport()
        race_index, race_duplicates = index_races(race for race in race_rows if not race.validate())
        variant_index, variant_duplicates = index_variants(variant_rows)
        for error in race_duplicates:
            self._fail(report, KIND_RACE, error.record_id, error)
        for error in variant_duplicates:
            self._fail(report, KIND_VARIANT, error.record_id, error)

        for table in grade_tables:
            self._build_into(report, table)
        for race in race_rows:
            if not race.validate() and race_index.get(race.tag) is not race:
                continue
            self._build_into(report, race)
        for variant in variant_rows:
            if variant_index.get(variant_key(variant.id)) is not variant:
                continue
            self._build_into(report, variant, races=race_index)
        for event in events:
            self._build_into(report, event, variants=variant_index)
        for world_event in world_events:
            self._build_into(report, world_event, variants=variant_index)
        for graph in dialogues:
            self._build_into(report, graph)
        for item in graded(equipment):
            self._build_into(report, item)

        logger.info(
            "Content build finished: %s",
            report.summary(),
            extra={
                "created_count": len(report.created),
                "skipped_count": len(report.skipped),
                "failed_count": len(report.failed),
            },
        )
        return report

    def _build_into(self, report: BuildReport, definition: Any, **indexes: Any) -> None:
        kind = kind_of(definition)
        record_id = record_id_of(definition)
        identity = ""
        try:
            identity = identity_for(kind, record_id)
            record = self.build(definition, identity, **indexes)
        except DefinitionError as exc:
            self._fail(report, kind, record_id, exc, identity)
            return
        except PersistenceError as exc:
            logger.exception("Failed to persist %s", identity, extra={"identity": identity, "kind": kind})
            report.failed.append(BuildFailure(identity, record_id, kind, str(exc)))
            return
        if record is None:
            report.skipped.append(identity)
        else:
            report.created.append(identity)

    @staticmethod
    def _fail(report: BuildReport, kind: str, record_id: str, error: DefinitionError, identity: str | None = None) -> None:
        if identity is None:
            identity = f"{kind}/{record_id}" if record_id else ""
        logger.warning(
            "Skipping malformed %s %s: %s",
            kind,
            record_id or "<no id>",
            "; ".join(error.problems) or error.message,
            extra={"record_id": record_id, "kind": kind},
        )
        report.failed.append(BuildFailure(identity, record_id, kind, str(error), tuple(error.problems)))

    @staticmethod
    def _race(race: RaceDefinition) -> RaceDefinition:
        problems = race.validate()
        if problems:
            raise DefinitionError(race.id, "invalid race", problems=problems)
        return race

    @staticmethod
    def _variant(variant: VariantDefinition, races: Mapping[str, RaceDefinition]) -> MonsterRecord:
        problems = variant.validate()
        if problems:
            raise DefinitionError(variant.id, "invalid variant", problems=problems)
        race = races.get(normalize_race_tag(variant.race_type))
        if race is None:
            raise DefinitionError(variant.id, f"no race defined for race type {variant.race_type}")
        low, high = variant_stat_bands(race, variant)
        return MonsterRecord(
            variant_id=variant.id,
            race_id=race.id,
            race_type=race.race_type,
            name=variant.name,
            min_stats=low,
            max_stats=high,
            spawn_weight=float(variant.spawn_weight),
            min_floor=int(variant.min_floor),
            max_floor=int(variant.max_floor),
            ai_disposition=variant.ai_disposition,
            aggression_multiplier=float(variant.aggression_multiplier),
            base_experience=int(race.base_experience),
            base_gold=int(race.base_gold),
            drop_rate=float(race.drop_rate),
            elemental=race.elemental,
        )

    def _event(self, event: EventDefinition, variants: Mapping[str, VariantDefinition] | None = None) -> EventDefinition:
        problems = event.validate()
        if variants is not None:
            problems.extend(
                f"wave {wave.wave_number} references unknown variant {wave.variant_id}"
                for wave in event.waves or ()
                if variant_key(wave.variant_id) not in variants
            )
        if problems:
            raise DefinitionError(event.id, "invalid event", problems=problems)
        outcomes = event.outcomes
        if outcomes.outcomes:
            outcomes = prepare_table(outcomes, record_id=event.id, normalize=self._normalize_weights)
        choices = tuple(
            replace(
                choice,
                outcomes=prepare_table(
                    choice.outcomes,
                    record_id=f"{event.id}.choices[{index}]",
                    normalize=self._normalize_weights,
                ),
            )
            for index, choice in enumerate(event.choices)
        )
        if event.waves is not None:
            WaveScheduler(event.combat_time_limit).timeline(event.waves, record_id=event.id)
        return replace(event, outcomes=outcomes, choices=choices)

    @staticmethod
    def _world_event(
        event: WorldEventDefinition,
        variants: Mapping[str, VariantDefinition] | None,
    ) -> WorldEventDefinition:
        problems = event.validate()
        if variants is not None:
            problems.extend(f"monster variant {variant_id} does not exist" for variant_id in unknown_variants(event, variants))
        if problems:
            raise DefinitionError(event.id, "invalid world event", problems=problems)
        return event

    def _equipment(self, item: GradedEquipment) -> EquipmentRecord:
        problems = item.validate()
        if problems:
            raise DefinitionError(item.id, "invalid equipment", problems=problems)
        return price_equipment(item, self._price_table, self._stat_table)
