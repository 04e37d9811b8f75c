from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from contentgen.domain.models.stats import Grade


class WorldEventType(str, Enum):
    TREASURE_GOBLIN = "treasure_goblin"
    WANDERING_MERCHANT = "wandering_merchant"
    MINI_BOSS = "mini_boss"
    MONSTER_RAID = "monster_raid"
    TREASURE_DISCOVERY = "treasure_discovery"
    WEATHER_ANOMALY = "weather_anomaly"
    NIGHT_HAUNT = "night_haunt"
    MYSTERIOUS_NPC = "mysterious_npc"
    ELEMENTAL_RIFT = "elemental_rift"
    BOUNTY_TARGET = "bounty_target"
    FALLEN_STAR = "fallen_star"
    ANCIENT_ALTAR = "ancient_altar"
    MERCHANT_CARAVAN = "merchant_caravan"
    GHOST_ENCOUNTER = "ghost_encounter"
    DRAGON_SIGHTING = "dragon_sighting"


class Weather(str, Enum):
    ANY = "any"
    CLEAR = "clear"
    RAIN = "rain"
    STORM = "storm"
    SNOW = "snow"


class RewardKind(str, Enum):
    GOLD = "gold"
    EXPERIENCE = "experience"
    ITEM = "item"
    BUFF = "buff"
    SKILL_POINT = "skill_point"


MIN_MONSTER_GRADE = 80.0
MAX_MONSTER_GRADE = 120.0


@dataclass(frozen=True)
class WorldEventMonster:
    variant_id: str
    count: int
    grade_min: float = 100.0
    grade_max: float = 100.0
    is_boss: bool = False
    spawn_delay: float = 0.0


@dataclass(frozen=True)
class WorldEventReward:
    kind: RewardKind
    amount: int
    drop_chance: float = 1.0
    item_id: str = ""


@dataclass(frozen=True)
class WorldEventDefinition:
    id: str
    name: str
    description: str
    event_type: WorldEventType
    rarity: Grade
    spawn_chance: float
    cooldown_minutes: float
    min_level: int = 1
    max_level: int = 99
    night_only: bool = False
    day_only: bool = False
    weather: Weather = Weather.ANY
    duration_seconds: float = 0.0
    monsters: tuple[WorldEventMonster, ...] = ()
    rewards: tuple[WorldEventReward, ...] = ()
    announce_message: str = ""

    def applies_to(self, *, level: int, is_night: bool, weather: Weather | str) -> bool:
        if not int(self.min_level) <= int(level) <= int(self.max_level):
            return False
        if self.night_only and not is_night:
            return False
        if self.day_only and is_night:
            return False
        return self.weather == Weather.ANY or self.weather == Weather(weather)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not str(self.id or "").strip():
            errors.append("id is required")
        if not 0.0 <= float(self.spawn_chance) <= 1.0:
            errors.append("spawn_chance must be within [0, 1]")
        if int(self.min_level) > int(self.max_level):
            errors.append(f"level range {self.min_level}-{self.max_level} is inverted")
        if self.night_only and self.day_only:
            errors.append("night_only and day_only are mutually exclusive")
        for index, monster in enumerate(self.monsters):
            prefix = f"monsters[{index}]"
            if int(monster.count) < 1:
                errors.append(f"{prefix}.count must be at least 1")
            if float(monster.grade_min) > float(monster.grade_max):
                errors.append(f"{prefix} grade band {monster.grade_min:g}-{monster.grade_max:g} is inverted")
            if float(monster.grade_min) < MIN_MONSTER_GRADE or float(monster.grade_max) > MAX_MONSTER_GRADE:
                errors.append(f"{prefix} grade band must stay within {MIN_MONSTER_GRADE:g}-{MAX_MONSTER_GRADE:g}")
        for index, reward in enumerate(self.rewards):
            prefix = f"rewards[{index}]"
            if not 0.0 <= float(reward.drop_chance) <= 1.0:
                errors.append(f"{prefix}.drop_chance must be within [0, 1]")
            if reward.kind == RewardKind.ITEM and not str(reward.item_id or "").strip():
                errors.append(f"{prefix}.item_id is required for item rewards")
        return errors
