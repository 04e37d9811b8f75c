from __future__ import annotations

from contentgen.application.services.balance_tables import VARIANT_TIER_INDEX
from contentgen.domain.models.monster import AIDisposition, VariantDefinition
from contentgen.domain.models.stats import StatBlock


VARIANT_RACES = ("Goblin", "Orc", "Undead", "Beast", "Elemental", "Demon", "Dragon", "Construct")

# (suffix, min variance, max variance, spawn weight, min floor, max floor, disposition, aggression, description)
VARIANT_TEMPLATES = (
    ("Normal", (-2,) * 8, (2,) * 8, 50, 1, 10, AIDisposition.AGGRESSIVE, 1.0, "An ordinary specimen."),
    ("Elite", (0,) * 8, (4, 3, 4, 3, 3, 3, 2, 3), 15, 3, 10, AIDisposition.AGGRESSIVE, 1.3, "Hardened by many battles."),
    ("Shaman", (-1, -1, -1, 2, -1, 1, 0, 0), (1, 1, 1, 5, 1, 3, 1, 1), 12, 2, 8, AIDisposition.DEFENSIVE, 0.8, "Channels the magic of its kin."),
    ("Berserker", (2, 0, 0, -2, -1, -2, 0, -1), (5, 2, 3, 0, 1, 0, 1, 1), 12, 2, 9, AIDisposition.AGGRESSIVE, 1.5, "Trades caution for raw fury."),
    ("Leader", (1,) * 8, (3,) * 8, 6, 5, 10, AIDisposition.TERRITORIAL, 1.2, "Commands the pack around it."),
    ("Boss", (3, 2, 3, 2, 2, 2, 2, 2), (6, 5, 6, 5, 5, 5, 4, 5), 3, 8, 10, AIDisposition.TERRITORIAL, 1.5, "The undisputed ruler of its floor."),
)


def variant_definitions() -> tuple[VariantDefinition, ...]:
    rows: list[VariantDefinition] = []
    for race_type in VARIANT_RACES:
        for suffix, low, high, weight, min_floor, max_floor, disposition, aggression, description in VARIANT_TEMPLATES:
            rows.append(
                VariantDefinition(
                    id=f"{race_type}_{suffix}",
                    name=f"{race_type} {suffix}",
                    race_type=race_type,
                    stat_min_variance=StatBlock.of(*low),
                    stat_max_variance=StatBlock.of(*high),
                    spawn_weight=float(weight),
                    min_floor=min_floor,
                    max_floor=max_floor,
                    ai_disposition=disposition,
                    aggression_multiplier=aggression,
                    tier_index=VARIANT_TIER_INDEX[suffix.lower()],
                    description=description,
                )
            )
    return tuple(rows)
