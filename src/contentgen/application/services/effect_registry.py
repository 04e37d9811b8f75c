from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from contentgen.application.services.event_bus import EventBus
from contentgen.domain.events import DialogueEffectTriggered, OutcomeEffectEmitted
from contentgen.domain.models.dialogue import DialogueEffect, DialogueEffectKind
from contentgen.domain.models.outcome import EffectKind, Outcome


@dataclass(frozen=True)
class EffectContext:
    source_id: str
    node_id: str = ""
    choice_index: Optional[int] = None


OutcomeEffectHandler = Callable[[Outcome, EffectContext], OutcomeEffectEmitted]
DialogueEffectHandler = Callable[[DialogueEffect, EffectContext], DialogueEffectTriggered]


class EffectRegistry:
    """Translates resolved effects into typed events; every effect kind must be registered."""

    def __init__(self, bus: EventBus | None = None) -> None:
        self._bus = bus
        self._outcome_handlers: Dict[EffectKind, OutcomeEffectHandler] = {}
        self._dialogue_handlers: Dict[DialogueEffectKind, DialogueEffectHandler] = {}

    def register_outcome(self, kind: EffectKind | str, handler: OutcomeEffectHandler) -> None:
        self._outcome_handlers[EffectKind(kind)] = handler

    def register_dialogue(self, kind: DialogueEffectKind | str, handler: DialogueEffectHandler) -> None:
        self._dialogue_handlers[DialogueEffectKind(kind)] = handler

    def missing_kinds(self) -> list[str]:
        missing = [kind.value for kind in EffectKind if kind not in self._outcome_handlers]
        missing.extend(kind.value for kind in DialogueEffectKind if kind not in self._dialogue_handlers)
        return missing

    def emit_outcome(self, outcome: Outcome, context: EffectContext) -> OutcomeEffectEmitted:
        handler = self._outcome_handlers.get(outcome.effect)
        if handler is None:
            raise KeyError(f"No handler registered for effect kind {outcome.effect.value}")
        event = handler(outcome, context)
        self._publish(event)
        return event

    def emit_dialogue(self, effect: DialogueEffect, context: EffectContext) -> DialogueEffectTriggered:
        handler = self._dialogue_handlers.get(effect.kind)
        if handler is None:
            raise KeyError(f"No handler registered for dialogue effect {effect.kind.value}")
        event = handler(effect, context)
        self._publish(event)
        return event

    def _publish(self, event: object) -> None:
        if self._bus is not None:
            self._bus.publish(event)


def _outcome_event(outcome: Outcome, context: EffectContext) -> OutcomeEffectEmitted:
    return OutcomeEffectEmitted(
        source_id=context.source_id,
        effect_kind=outcome.effect.value,
        magnitude=float(outcome.magnitude),
        duration=float(outcome.duration),
        is_negative=bool(outcome.is_negative),
        description=outcome.description,
        status=outcome.status,
    )


def _signed_outcome_event(outcome: Outcome, context: EffectContext) -> OutcomeEffectEmitted:
    event = _outcome_event(outcome, context)
    event.magnitude = -abs(event.magnitude)
    return event


def _status_outcome_event(outcome: Outcome, context: EffectContext) -> OutcomeEffectEmitted:
    event = _outcome_event(outcome, context)
    if not event.status:
        event.status = outcome.description.strip().lower().replace(" ", "_") or None
    return event


def _dialogue_event(effect: DialogueEffect, context: EffectContext) -> DialogueEffectTriggered:
    return DialogueEffectTriggered(
        graph_id=context.source_id,
        node_id=context.node_id,
        effect_kind=effect.kind.value,
        amount=int(effect.amount),
        value=str(effect.value or ""),
        choice_index=context.choice_index,
    )


_NEGATED_KINDS = {EffectKind.DAMAGE_HP, EffectKind.LOSE_GOLD, EffectKind.DEBUFF_STAT}
_STATUS_KINDS = {EffectKind.APPLY_STATUS, EffectKind.REMOVE_STATUS}


def default_effect_registry(bus: EventBus | None = None) -> EffectRegistry:
    registry = EffectRegistry(bus)
    for kind in EffectKind:
        if kind in _NEGATED_KINDS:
            registry.register_outcome(kind, _signed_outcome_event)
        elif kind in _STATUS_KINDS:
            registry.register_outcome(kind, _status_outcome_event)
        else:
            registry.register_outcome(kind, _outcome_event)
    for kind in DialogueEffectKind:
        registry.register_dialogue(kind, _dialogue_event)
    return registry
