from __future__ import annotations

import logging
import math
import random
import warnings
from typing import Iterable, Optional

from contentgen.domain.errors import DefinitionError, ResolutionAmbiguityWarning
from contentgen.domain.models.actor import ActorProfile
from contentgen.domain.models.event import EventDefinition
from contentgen.domain.models.outcome import ItemInteraction, Outcome, OutcomeTable, ResolvedOutcome
from contentgen.domain.repositories import ItemQuery


logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 1e-6


def prepare_table(table: OutcomeTable, *, record_id: str = "", normalize: bool = True) -> OutcomeTable:
    """Validate an authored table and optionally rescale its weights to sum to 1.0."""

    problems = table.validate()
    if problems:
        raise DefinitionError(record_id, "invalid outcome table", problems=problems)
    total = table.total_weight
    if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
        message = f"outcome weights of {record_id or 'table'} sum to {total:g}, not 1.0"
        logger.warning("Resolution ambiguity: %s", message, extra={"record_id": record_id, "weight_sum": total})
        warnings.warn(message, ResolutionAmbiguityWarning, stacklevel=2)
        if normalize:
            return table.normalized()
    return table


def match_interaction(
    interactions: Iterable[ItemInteraction],
    inventory: Optional[ItemQuery],
) -> Optional[ItemInteraction]:
    if inventory is None:
        return None
    for interaction in interactions:
        if inventory.has(interaction.required_item_id):
            return interaction
    return None


def draw(table: OutcomeTable, rng: random.Random) -> tuple[Outcome, float]:
    """Weighted draw in declaration order. Residual mass above the weight sum goes to the last outcome."""

    if not table.outcomes:
        raise DefinitionError("", "cannot resolve an empty outcome table")
    roll = rng.random()
    cumulative = 0.0
    for outcome in table.outcomes:
        weight = float(outcome.weight)
        if weight <= 0:
            continue
        cumulative += weight
        if cumulative >= roll:
            return outcome, roll
    logger.debug("Roll %.6f fell in residual mass %.6f; using last outcome", roll, 1.0 - cumulative)
    return table.outcomes[-1], roll


def resolve(
    table: OutcomeTable,
    inventory: Optional[ItemQuery],
    rng: random.Random,
    interactions: Iterable[ItemInteraction] = (),
) -> Outcome:
    interaction = match_interaction(interactions, inventory)
    if interaction is not None:
        return interaction.guaranteed
    outcome, _roll = draw(table, rng)
    return outcome


def resolve_event(
    event: EventDefinition,
    actor: ActorProfile,
    rng: random.Random,
    choice_index: Optional[int] = None,
) -> ResolvedOutcome:
    interaction = match_interaction(event.item_interactions, actor)
    if interaction is not None:
        return ResolvedOutcome(
            outcome=interaction.guaranteed,
            source="item",
            item_id=interaction.required_item_id,
            result_text=interaction.result_text,
        )
    if event.requires_choice:
        if choice_index is None:
            raise ValueError(f"Event {event.id} requires a choice")
        if not 0 <= int(choice_index) < len(event.choices):
            raise ValueError(f"Choice {choice_index} is out of range for event {event.id}")
        choice = event.choices[int(choice_index)]
        if not choice.is_available(actor):
            raise ValueError(f"Choice {choice_index} of event {event.id} is not available to this actor")
        if not choice.outcomes.outcomes:
            raise DefinitionError(event.id, f"choice {choice_index} has no outcomes")
        outcome, roll = draw(choice.outcomes, rng)
        return ResolvedOutcome(outcome=outcome, source="choice", roll=roll, result_text=choice.result_text)
    if not event.outcomes.outcomes:
        raise DefinitionError(event.id, "event has no outcome table to resolve")
    outcome, roll = draw(event.outcomes, rng)
    return ResolvedOutcome(outcome=outcome, source="table", roll=roll, result_text=outcome.description)
