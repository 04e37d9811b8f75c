from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from contentgen.domain.models.actor import ActorProfile


class DialogueConditionKind(str, Enum):
    NONE = "none"
    MIN_LEVEL = "min_level"
    MAX_LEVEL = "max_level"
    GOLD_MIN = "gold_min"
    RACE_IS = "race_is"
    JOB_IS = "job_is"
    HAS_ITEM = "has_item"
    HAS_QUEST = "has_quest"
    QUEST_COMPLETE = "quest_complete"


class DialogueEffectKind(str, Enum):
    GIVE_GOLD = "give_gold"
    GIVE_EXP = "give_exp"
    GIVE_ITEM = "give_item"
    ACCEPT_QUEST = "accept_quest"
    COMPLETE_QUEST = "complete_quest"
    OPEN_SHOP = "open_shop"
    OPEN_CRAFTING = "open_crafting"
    TELEPORT_TO_DUNGEON = "teleport_to_dungeon"
    HEAL_PLAYER = "heal_player"
    SET_FLAG = "set_flag"


@dataclass(frozen=True)
class DialogueCondition:
    kind: DialogueConditionKind = DialogueConditionKind.NONE
    value: int = 0
    text: str = ""

    @classmethod
    def min_level(cls, level: int) -> "DialogueCondition":
        return cls(kind=DialogueConditionKind.MIN_LEVEL, value=int(level))

    @classmethod
    def race_is(cls, race: str) -> "DialogueCondition":
        return cls(kind=DialogueConditionKind.RACE_IS, text=str(race))

    def is_met(self, actor: ActorProfile) -> bool:
        kind = self.kind
        if kind == DialogueConditionKind.NONE:
            return True
        if kind == DialogueConditionKind.MIN_LEVEL:
            return int(actor.level) >= int(self.value)
        if kind == DialogueConditionKind.MAX_LEVEL:
            return int(actor.level) <= int(self.value)
        if kind == DialogueConditionKind.GOLD_MIN:
            return int(actor.gold) >= int(self.value)
        if kind == DialogueConditionKind.RACE_IS:
            return _token(actor.race) == _token(self.text)
        if kind == DialogueConditionKind.JOB_IS:
            return _token(actor.job) == _token(self.text)
        if kind == DialogueConditionKind.HAS_ITEM:
            return actor.has(self.text)
        if kind == DialogueConditionKind.HAS_QUEST:
            return self.text in actor.active_quests or self.text in actor.completed_quests
        if kind == DialogueConditionKind.QUEST_COMPLETE:
            return self.text in actor.completed_quests
        return False


@dataclass(frozen=True)
class DialogueEffect:
    kind: DialogueEffectKind
    amount: int = 0
    value: str = ""


@dataclass(frozen=True)
class DialogueChoice:
    text: str
    next_id: str = ""
    effect: Optional[DialogueEffect] = None
    condition: Optional[DialogueCondition] = None


@dataclass(frozen=True)
class DialogueNode:
    id: str
    speaker: str
    text: str
    next_id: str = ""
    choices: tuple[DialogueChoice, ...] = ()
    effect: Optional[DialogueEffect] = None

    @property
    def is_terminal(self) -> bool:
        return not self.next_id and not self.choices


@dataclass(frozen=True)
class DialogueGraph:
    """Authored conversation. Nodes reference each other by id only."""

    id: str
    npc_name: str
    nodes: tuple[DialogueNode, ...]
    priority: int = 0
    condition: Optional[DialogueCondition] = None
    entry_id: str = ""
    _index: Dict[str, DialogueNode] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, DialogueNode] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        object.__setattr__(self, "_index", index)

    @property
    def npc_key(self) -> str:
        return str(self.id or "").split("_", 1)[0]

    @property
    def entry_node_id(self) -> str:
        if self.entry_id:
            return self.entry_id
        return self.nodes[0].id if self.nodes else ""

    def node(self, node_id: str) -> Optional[DialogueNode]:
        return self._index.get(str(node_id or ""))

    def has_node(self, node_id: str) -> bool:
        return str(node_id or "") in self._index

    def is_offered_to(self, actor: ActorProfile) -> bool:
        return self.condition is None or self.condition.is_met(actor)


def _token(value: str | None) -> str:
    return str(value or "").strip().lower()
