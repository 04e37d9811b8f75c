from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ActorProfile:
    """Read-only snapshot of the acting player used for condition checks and item overrides."""

    level: int = 1
    race: str = ""
    job: str = ""
    gold: int = 0
    hp_ratio: float = 1.0
    party_size: int = 1
    is_night: bool = False
    items: frozenset[str] = field(default_factory=frozenset)
    active_quests: frozenset[str] = field(default_factory=frozenset)
    completed_quests: frozenset[str] = field(default_factory=frozenset)
    flags: frozenset[str] = field(default_factory=frozenset)

    def has(self, item_id: str) -> bool:
        return str(item_id or "").strip() in self.items
