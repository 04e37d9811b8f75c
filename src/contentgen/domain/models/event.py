from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from contentgen.domain.models.actor import ActorProfile
from contentgen.domain.models.outcome import ItemInteraction, OutcomeTable
from contentgen.domain.models.stats import Grade, round_half_up


class EventType(str, Enum):
    SHRINE = "shrine"
    FOUNTAIN = "fountain"
    CURIO = "curio"
    TREASURE_ROOM = "treasure_room"
    AMBUSH_TRAP = "ambush_trap"
    ARENA = "arena"
    TRIAL = "trial"
    SHOP = "shop"
    PORTAL = "portal"
    REST_SITE = "rest_site"
    ALTAR = "altar"
    GAMBLE = "gamble"
    BLESSING = "blessing"
    CURSE = "curse"
    MYSTERY_BOX = "mystery_box"


class TriggerKind(str, Enum):
    ROOM_BASED = "room_based"
    CHANCE_BASED = "chance_based"
    FLOOR_GUARANTEED = "floor_guaranteed"
    CONDITION_BASED = "condition_based"
    TIME_BASED = "time_based"


class EventConditionKind(str, Enum):
    NONE = "none"
    LOW_HP = "low_hp"
    HIGH_GOLD = "high_gold"
    HAS_ITEM = "has_item"
    NIGHT_TIME = "night_time"
    PARTY_SIZE = "party_size"


LOW_HP_RATIO = 0.3
HIGH_GOLD_THRESHOLD = 1000


@dataclass(frozen=True)
class EventCondition:
    kind: EventConditionKind = EventConditionKind.NONE
    value: float = 0.0
    item_id: str = ""

    def is_met(self, actor: ActorProfile) -> bool:
        if self.kind == EventConditionKind.NONE:
            return True
        if self.kind == EventConditionKind.LOW_HP:
            threshold = float(self.value) if self.value else LOW_HP_RATIO
            return float(actor.hp_ratio) <= threshold
        if self.kind == EventConditionKind.HIGH_GOLD:
            threshold = int(self.value) if self.value else HIGH_GOLD_THRESHOLD
            return int(actor.gold) >= threshold
        if self.kind == EventConditionKind.HAS_ITEM:
            return actor.has(self.item_id)
        if self.kind == EventConditionKind.NIGHT_TIME:
            return bool(actor.is_night)
        if self.kind == EventConditionKind.PARTY_SIZE:
            return int(actor.party_size) >= int(self.value)
        return False


@dataclass(frozen=True)
class EventChoice:
    text: str
    result_text: str
    outcomes: OutcomeTable
    condition: EventCondition | None = None

    def is_available(self, actor: ActorProfile) -> bool:
        return self.condition is None or self.condition.is_met(actor)


@dataclass(frozen=True)
class CombatWave:
    wave_number: int
    race_type: str
    variant_tag: str
    count: int
    delay_seconds: float = 0.0
    is_elite: bool = False

    @property
    def variant_id(self) -> str:
        return f"{self.race_type}_{self.variant_tag}"


@dataclass(frozen=True)
class WaveSchedule:
    """Waves fire in ascending wave number; each delay is measured from event start."""

    waves: tuple[CombatWave, ...] = ()

    def __len__(self) -> int:
        return len(self.waves)

    def __iter__(self):
        return iter(self.waves)

    @property
    def total_monsters(self) -> int:
        return sum(int(wave.count) for wave in self.waves)

    def validate(self) -> list[str]:
        errors: list[str] = []
        previous_number = 0
        previous_delay = 0.0
        for index, wave in enumerate(self.waves):
            prefix = f"waves[{index}]"
            if int(wave.wave_number) <= previous_number:
                errors.append(f"{prefix}.wave_number {wave.wave_number} is not ascending")
            if float(wave.delay_seconds) < previous_delay:
                errors.append(f"{prefix}.delay_seconds {wave.delay_seconds:g} is earlier than the previous wave")
            if int(wave.count) < 1:
                errors.append(f"{prefix}.count must be at least 1")
            if not str(wave.race_type or "").strip() or not str(wave.variant_tag or "").strip():
                errors.append(f"{prefix} must name a race and a variant")
            previous_number = int(wave.wave_number)
            previous_delay = max(previous_delay, float(wave.delay_seconds))
        return errors


@dataclass(frozen=True)
class ShopListing:
    item_id: str
    price: int
    stock: int = 1
    discount_chance: float = 0.0
    discount_percent: float = 0.0

    def discounted_price(self) -> int:
        value = round_half_up(int(self.price) * (1.0 - float(self.discount_percent) / 100.0))
        return max(1, value)

    def price_for(self, rng: random.Random) -> int:
        if float(self.discount_chance) > 0 and rng.random() < float(self.discount_chance):
            return self.discounted_price()
        return int(self.price)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not str(self.item_id or "").strip():
            errors.append("item_id is required")
        if int(self.price) < 1:
            errors.append(f"{self.item_id}.price must be positive")
        if int(self.stock) < 0:
            errors.append(f"{self.item_id}.stock cannot be negative")
        if not 0.0 <= float(self.discount_chance) <= 1.0:
            errors.append(f"{self.item_id}.discount_chance must be within [0, 1]")
        if not 0.0 <= float(self.discount_percent) <= 100.0:
            errors.append(f"{self.item_id}.discount_percent must be within [0, 100]")
        return errors


@dataclass(frozen=True)
class EventDefinition:
    id: str
    name: str
    description: str
    event_type: EventType
    rarity: Grade
    trigger: TriggerKind
    spawn_chance: float
    min_floor: int
    max_floor: int
    interaction_text: str = ""
    outcomes: OutcomeTable = field(default_factory=OutcomeTable)
    item_interactions: tuple[ItemInteraction, ...] = ()
    choices: tuple[EventChoice, ...] = ()
    waves: WaveSchedule | None = None
    shop: tuple[ShopListing, ...] = ()
    combat_time_limit: float | None = None
    once_per_dungeon: bool = False

    @property
    def requires_choice(self) -> bool:
        return bool(self.choices)

    @property
    def is_combat(self) -> bool:
        return self.waves is not None and len(self.waves) > 0

    def applies_to_floor(self, floor: int) -> bool:
        return int(self.min_floor) <= int(floor) <= int(self.max_floor)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not str(self.id or "").strip():
            errors.append("id is required")
        if not 0.0 <= float(self.spawn_chance) <= 1.0:
            errors.append("spawn_chance must be within [0, 1]")
        if int(self.min_floor) > int(self.max_floor):
            errors.append(f"floor range {self.min_floor}-{self.max_floor} is inverted")
        if not self.outcomes.outcomes and not self.choices and not self.is_combat and not self.shop:
            errors.append("event has no outcomes, choices, waves, or shop listings")
        if self.outcomes.outcomes:
            errors.extend(f"outcomes: {problem}" for problem in self.outcomes.validate())
        for index, interaction in enumerate(self.item_interactions):
            if not str(interaction.required_item_id or "").strip():
                errors.append(f"item_interactions[{index}].required_item_id is required")
        for index, choice in enumerate(self.choices):
            errors.extend(f"choices[{index}]: {problem}" for problem in choice.outcomes.validate())
        if self.waves is not None:
            errors.extend(self.waves.validate())
        for listing in self.shop:
            errors.extend(f"shop: {problem}" for problem in listing.validate())
        if self.combat_time_limit is not None and float(self.combat_time_limit) < 0:
            errors.append("combat_time_limit cannot be negative")
        return errors
