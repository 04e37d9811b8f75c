from __future__ import annotations

import random
from typing import Iterable, Optional

from contentgen.domain.models.event import EventDefinition, TriggerKind


def eligible_events(
    events: Iterable[EventDefinition],
    floor: int,
    trigger: TriggerKind | str | None = None,
    used_ids: Optional[Iterable[str]] = None,
) -> list[EventDefinition]:
    used = set(used_ids or ())
    wanted = TriggerKind(trigger) if trigger is not None else None
    rows: list[EventDefinition] = []
    for event in events:
        if wanted is not None and event.trigger != wanted:
            continue
        if not event.applies_to_floor(floor):
            continue
        if event.once_per_dungeon and event.id in used:
            continue
        rows.append(event)
    return rows


def roll_spawn(event: EventDefinition, rng: random.Random) -> bool:
    if event.trigger == TriggerKind.FLOOR_GUARANTEED:
        return True
    chance = float(event.spawn_chance)
    if chance <= 0:
        return False
    return rng.random() < chance


def spawn_for_floor(
    events: Iterable[EventDefinition],
    floor: int,
    rng: random.Random,
    used_ids: Optional[Iterable[str]] = None,
) -> list[EventDefinition]:
    """Events that appear on ``floor``: every guaranteed one plus each chance roll that succeeds."""

    return [event for event in eligible_events(events, floor, used_ids=used_ids) if roll_spawn(event, rng)]
