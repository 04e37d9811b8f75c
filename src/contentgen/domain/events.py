from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OutcomeEffectEmitted:
    source_id: str
    effect_kind: str
    magnitude: float
    duration: float
    is_negative: bool
    description: str
    status: Optional[str] = None


@dataclass
class DialogueEffectTriggered:
    graph_id: str
    node_id: str
    effect_kind: str
    amount: int = 0
    value: str = ""
    choice_index: Optional[int] = None


@dataclass
class RecordMaterialized:
    identity: str
    kind: str
    record_id: str
    details: dict = field(default_factory=dict)
