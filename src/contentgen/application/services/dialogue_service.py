from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from contentgen.application.services.effect_registry import EffectContext, EffectRegistry, default_effect_registry
from contentgen.domain.errors import DefinitionError, DialogueTraversalError
from contentgen.domain.events import DialogueEffectTriggered
from contentgen.domain.models.actor import ActorProfile
from contentgen.domain.models.dialogue import DialogueChoice, DialogueEffect, DialogueGraph, DialogueNode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeView:
    graph_id: str
    node_id: str
    speaker: str
    text: str
    choices: tuple[tuple[int, str], ...] = ()
    has_next: bool = False
    emitted: tuple[DialogueEffectTriggered, ...] = ()

    @property
    def is_terminal(self) -> bool:
        return not self.has_next and not self.choices


@dataclass(frozen=True)
class Terminal:
    graph_id: str
    last_node_id: str
    emitted: tuple[DialogueEffectTriggered, ...] = ()


StepResult = Union[NodeView, Terminal]


def validate_graph(graph: DialogueGraph) -> list[str]:
    """Structural problems of one graph; an empty list means the graph is well-formed."""

    errors: list[str] = []
    if not str(graph.id or "").strip():
        errors.append("dialogue id is required")
    if not graph.nodes:
        errors.append("dialogue has no nodes")
        return errors
    counts = Counter(node.id for node in graph.nodes)
    for node_id, count in counts.items():
        if not str(node_id or "").strip():
            errors.append("node id cannot be empty")
        elif count > 1:
            errors.append(f"node {node_id} is declared {count} times")
    if not graph.has_node(graph.entry_node_id):
        errors.append(f"entry node {graph.entry_node_id} does not exist")
    for node in graph.nodes:
        if node.next_id and node.choices:
            errors.append(f"node {node.id} has both a next id and choices")
        if node.next_id and not graph.has_node(node.next_id):
            errors.append(f"node {node.id} continues to missing node {node.next_id}")
        for index, choice in enumerate(node.choices):
            if not str(choice.text or "").strip():
                errors.append(f"node {node.id} choice {index} has no text")
            if choice.next_id and not graph.has_node(choice.next_id):
                errors.append(f"node {node.id} choice {index} points to missing node {choice.next_id}")
    return errors


def require_well_formed(graph: DialogueGraph) -> DialogueGraph:
    problems = validate_graph(graph)
    if problems:
        raise DefinitionError(graph.id, "dialogue graph is ill-formed", problems=problems)
    return graph


def available_choices(node: DialogueNode, actor: Optional[ActorProfile]) -> list[tuple[int, DialogueChoice]]:
    rows: list[tuple[int, DialogueChoice]] = []
    for index, choice in enumerate(node.choices):
        if actor is not None and choice.condition is not None and not choice.condition.is_met(actor):
            continue
        rows.append((index, choice))
    return rows


class DialogueService:
    """Read-only traversal over authored graphs. Effects leave as typed events."""

    def __init__(self, graphs: Iterable[DialogueGraph] = (), effects: EffectRegistry | None = None) -> None:
        self._graphs: list[DialogueGraph] = list(graphs)
        self._effects = effects or default_effect_registry()

    @property
    def graphs(self) -> list[DialogueGraph]:
        return list(self._graphs)

    def candidates(self, npc_key: str, actor: ActorProfile) -> list[DialogueGraph]:
        key = str(npc_key or "").strip()
        rows = [graph for graph in self._graphs if graph.npc_key == key and graph.is_offered_to(actor)]
        # sorted() is stable, so equal priorities keep declaration order.
        return sorted(rows, key=lambda graph: -int(graph.priority))

    def select_graph(self, npc_key: str, actor: ActorProfile) -> Optional[DialogueGraph]:
        rows = self.candidates(npc_key, actor)
        if not rows:
            logger.debug("No dialogue offered", extra={"npc_key": npc_key, "level": actor.level})
            return None
        return rows[0]

    def start(self, graph: DialogueGraph, actor: Optional[ActorProfile] = None) -> NodeView:
        if actor is not None and not graph.is_offered_to(actor):
            raise DialogueTraversalError(f"Dialogue {graph.id} is not offered to this actor")
        node = graph.node(graph.entry_node_id)
        if node is None:
            raise DialogueTraversalError(f"Dialogue {graph.id} has no entry node {graph.entry_node_id}")
        return self._view(graph, node, actor, ())

    def step(
        self,
        graph: DialogueGraph,
        current_node_id: str,
        chosen_index: Optional[int] = None,
        actor: Optional[ActorProfile] = None,
    ) -> StepResult:
        node = graph.node(current_node_id)
        if node is None:
            raise DialogueTraversalError(f"Dialogue {graph.id} has no node {current_node_id}")

        if node.choices:
            if chosen_index is None:
                raise DialogueTraversalError(f"Node {node.id} of {graph.id} requires a choice")
            offered = dict(available_choices(node, actor))
            if int(chosen_index) not in offered:
                raise DialogueTraversalError(f"Choice {chosen_index} is not available at node {node.id} of {graph.id}")
            choice = offered[int(chosen_index)]
            emitted = self._fire(graph, node, choice.effect, int(chosen_index))
            target_id = choice.next_id
        else:
            if chosen_index is not None:
                raise DialogueTraversalError(f"Node {node.id} of {graph.id} has no choices")
            emitted = self._fire(graph, node, node.effect, None)
            target_id = node.next_id

        if not target_id:
            return Terminal(graph_id=graph.id, last_node_id=node.id, emitted=emitted)
        target = graph.node(target_id)
        if target is None:
            raise DialogueTraversalError(f"Node {node.id} of {graph.id} points to missing node {target_id}")
        return self._view(graph, target, actor, emitted)

    def _fire(
        self,
        graph: DialogueGraph,
        node: DialogueNode,
        effect: Optional[DialogueEffect],
        choice_index: Optional[int],
    ) -> tuple[DialogueEffectTriggered, ...]:
        if effect is None:
            return ()
        context = EffectContext(source_id=graph.id, node_id=node.id, choice_index=choice_index)
        return (self._effects.emit_dialogue(effect, context),)

    @staticmethod
    def _view(
        graph: DialogueGraph,
        node: DialogueNode,
        actor: Optional[ActorProfile],
        emitted: tuple[DialogueEffectTriggered, ...],
    ) -> NodeView:
        return NodeView(
            graph_id=graph.id,
            node_id=node.id,
            speaker=node.speaker,
            text=node.text,
            choices=tuple((index, choice.text) for index, choice in available_choices(node, actor)),
            has_next=bool(node.next_id),
            emitted=emitted,
        )
