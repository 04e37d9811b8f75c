from __future__ import annotations

from contentgen.domain.models.monster import ElementalAffinity, RaceDefinition
from contentgen.domain.models.stats import StatBlock


# (race_type, display name, base stats, growth per tier, base exp, base gold, drop rate, description)
# Stat order: strength, agility, vitality, intelligence, defense, magic_defense, luck, stability.
RACE_ROWS = (
    (
        "Goblin", "Goblin",
        (8, 10, 8, 5, 5, 4, 8, 5), (1.0, 1.2, 1.0, 0.6, 0.6, 0.5, 1.0, 0.6),
        50, 10, 0.001,
        "Small, cunning raiders that strike in numbers.",
    ),
    (
        "Orc", "Orc",
        (15, 6, 14, 4, 8, 3, 5, 5), (2.5, 0.8, 2.0, 0.5, 1.2, 0.4, 0.6, 0.7),
        80, 15, 0.0012,
        "Brutal warriors with overwhelming strength and stamina.",
    ),
    (
        "Undead", "Undead",
        (6, 7, 8, 14, 4, 10, 3, 6), (0.8, 1.0, 1.0, 2.5, 0.5, 1.5, 0.4, 0.8),
        100, 20, 0.0015,
        "Restless dead bound to dark magic.",
    ),
    (
        "Beast", "Beast",
        (12, 10, 15, 5, 6, 4, 6, 4), (2.0, 1.5, 2.2, 0.6, 0.8, 0.5, 0.8, 0.5),
        70, 12, 0.001,
        "Wild predators that hunt on instinct.",
    ),
    (
        "Elemental", "Elemental",
        (4, 8, 7, 16, 3, 12, 7, 8), (0.5, 1.2, 0.8, 3.0, 0.4, 2.0, 1.0, 1.2),
        120, 25, 0.002,
        "Living storms of raw elemental power.",
    ),
    (
        "Demon", "Demon",
        (11, 9, 11, 11, 7, 7, 10, 7), (1.8, 1.5, 1.5, 1.8, 1.0, 1.0, 1.5, 1.0),
        150, 30, 0.0025,
        "Fiends from beyond the veil, balanced and dangerous.",
    ),
    (
        "Dragon", "Dragon",
        (18, 8, 20, 14, 12, 11, 12, 10), (3.0, 1.2, 3.5, 2.5, 2.0, 1.8, 1.5, 1.5),
        300, 100, 0.005,
        "Ancient wyrms, the apex of every dungeon.",
    ),
    (
        "Construct", "Construct",
        (10, 5, 16, 6, 14, 8, 4, 12), (1.5, 0.6, 2.5, 0.8, 2.5, 1.2, 0.5, 2.0),
        90, 18, 0.0008,
        "Animated stone and iron guardians.",
    ),
)

RACE_ELEMENTS = {
    "Undead": ElementalAffinity(dark_attack=0.2, dark_resist=0.3, holy_resist=-0.3, poison_resist=0.5),
    "Elemental": ElementalAffinity(fire_attack=0.2, ice_attack=0.2, lightning_attack=0.2, poison_resist=0.5),
    "Demon": ElementalAffinity(fire_attack=0.2, fire_resist=0.3, dark_resist=0.2, holy_resist=-0.3),
    "Dragon": ElementalAffinity(fire_attack=0.3, fire_resist=0.4),
    "Construct": ElementalAffinity(lightning_resist=-0.2, poison_resist=1.0),
}


def race_definitions() -> tuple[RaceDefinition, ...]:
    return tuple(
        RaceDefinition(
            id=f"race_{race_type.lower()}",
            race_type=race_type,
            name=name,
            base_stats=StatBlock.of(*base),
            growth=StatBlock.of(*growth),
            base_experience=experience,
            base_gold=gold,
            drop_rate=drop_rate,
            description=description,
            elemental=RACE_ELEMENTS.get(race_type, ElementalAffinity()),
        )
        for race_type, name, base, growth, experience, gold, drop_rate, description in RACE_ROWS
    )
