from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Mapping

from contentgen.application.services.stat_scaler import monster_stats
from contentgen.domain.errors import DefinitionError
from contentgen.domain.models.monster import MonsterInstance, RaceDefinition, VariantDefinition
from contentgen.domain.models.world_event import Weather, WorldEventDefinition, WorldEventReward


@dataclass(frozen=True)
class SpawnedMonster:
    spawn_delay: float
    is_boss: bool
    instance: MonsterInstance


def variant_key(variant_id: str) -> str:
    return str(variant_id or "").strip().lower()


def unknown_variants(event: WorldEventDefinition, variants: Mapping[str, VariantDefinition]) -> list[str]:
    return [monster.variant_id for monster in event.monsters if variant_key(monster.variant_id) not in variants]


def roll_rewards(event: WorldEventDefinition, rng: random.Random) -> list[WorldEventReward]:
    """Each reward drops independently with its own chance."""

    granted: list[WorldEventReward] = []
    for reward in event.rewards:
        chance = float(reward.drop_chance)
        if chance >= 1.0 or (chance > 0 and rng.random() < chance):
            granted.append(reward)
    return granted


def active_world_events(
    events: Iterable[WorldEventDefinition],
    *,
    level: int,
    is_night: bool,
    weather: Weather | str,
    rng: random.Random,
) -> list[WorldEventDefinition]:
    rows: list[WorldEventDefinition] = []
    for event in events:
        if not event.applies_to(level=level, is_night=is_night, weather=weather):
            continue
        if rng.random() < float(event.spawn_chance):
            rows.append(event)
    return rows


def spawn_monsters(
    event: WorldEventDefinition,
    variants: Mapping[str, VariantDefinition],
    races: Mapping[str, RaceDefinition],
    rng: random.Random,
) -> list[SpawnedMonster]:
    """Roll every monster of the event; grades are drawn uniformly inside each monster's band."""

    spawned: list[SpawnedMonster] = []
    for monster in event.monsters:
        variant = variants.get(variant_key(monster.variant_id))
        if variant is None:
            raise DefinitionError(event.id, f"unknown variant {monster.variant_id}")
        race = races.get(variant.race_tag)
        if race is None:
            raise DefinitionError(event.id, f"variant {variant.id} references unknown race {variant.race_type}")
        for _ in range(int(monster.count)):
            grade = rng.uniform(float(monster.grade_min), float(monster.grade_max))
            spawned.append(
                SpawnedMonster(
                    spawn_delay=float(monster.spawn_delay),
                    is_boss=bool(monster.is_boss),
                    instance=monster_stats(race, variant, rng, grade=grade),
                )
            )
    return spawned
