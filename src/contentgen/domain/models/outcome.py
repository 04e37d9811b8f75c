from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable


class EffectKind(str, Enum):
    HEAL_HP = "heal_hp"
    HEAL_MP = "heal_mp"
    HEAL_PERCENT = "heal_percent"
    DAMAGE_HP = "damage_hp"
    GAIN_GOLD = "gain_gold"
    LOSE_GOLD = "lose_gold"
    GAIN_EXP = "gain_exp"
    BUFF_STAT = "buff_stat"
    DEBUFF_STAT = "debuff_stat"
    GAIN_ITEM = "gain_item"
    APPLY_STATUS = "apply_status"
    REMOVE_STATUS = "remove_status"
    REVEAL_MAP = "reveal_map"
    TELEPORT = "teleport"
    SPAWN_MONSTER = "spawn_monster"
    INCREASE_DAMAGE = "increase_damage"
    REDUCE_DAMAGE = "reduce_damage"
    INCREASE_SPEED = "increase_speed"
    COOLDOWN_RESET = "cooldown_reset"
    INVINCIBILITY = "invincibility"
    FULL_RESTORE = "full_restore"
    RANDOM_BUFF = "random_buff"
    CURSE_AND_REWARD = "curse_and_reward"


@dataclass(frozen=True)
class Outcome:
    description: str
    weight: float
    effect: EffectKind
    magnitude: float = 0.0
    duration: float = 0.0
    is_negative: bool = False
    status: str | None = None

    def with_weight(self, weight: float) -> "Outcome":
        return replace(self, weight=float(weight))


@dataclass(frozen=True)
class OutcomeTable:
    """Ordered weighted alternatives. Declaration order is significant."""

    outcomes: tuple[Outcome, ...] = ()

    @classmethod
    def of(cls, outcomes: Iterable[Outcome] | None) -> "OutcomeTable":
        return cls(tuple(outcomes or ()))

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    @property
    def total_weight(self) -> float:
        return sum(float(outcome.weight) for outcome in self.outcomes)

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.outcomes:
            errors.append("outcome table is empty")
            return errors
        for index, outcome in enumerate(self.outcomes):
            if float(outcome.weight) < 0:
                errors.append(f"outcomes[{index}].weight cannot be negative")
            if not str(outcome.description or "").strip():
                errors.append(f"outcomes[{index}].description is required")
        if self.total_weight <= 0:
            errors.append("outcome weights sum to zero")
        return errors

    def normalized(self) -> "OutcomeTable":
        total = self.total_weight
        if total <= 0:
            return self
        return OutcomeTable(tuple(outcome.with_weight(float(outcome.weight) / total) for outcome in self.outcomes))


@dataclass(frozen=True)
class ItemInteraction:
    """Holding ``required_item_id`` replaces the weighted draw with ``guaranteed``."""

    required_item_id: str
    result_text: str
    guaranteed: Outcome


@dataclass(frozen=True)
class ResolvedOutcome:
    outcome: Outcome
    source: str
    roll: float | None = None
    item_id: str | None = None
    result_text: str = ""
