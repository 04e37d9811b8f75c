from __future__ import annotations

from contentgen.domain.models.stats import Grade
from contentgen.domain.models.world_event import (
    RewardKind,
    Weather,
    WorldEventDefinition,
    WorldEventMonster,
    WorldEventReward,
    WorldEventType,
)


def _m(variant_id: str, count: int, grade_min: float, grade_max: float, boss: bool = False, delay: float = 0) -> WorldEventMonster:
    return WorldEventMonster(
        variant_id=variant_id,
        count=count,
        grade_min=grade_min,
        grade_max=grade_max,
        is_boss=boss,
        spawn_delay=delay,
    )


def _r(kind: RewardKind, amount: int, chance: float = 1.0, item_id: str = "") -> WorldEventReward:
    return WorldEventReward(kind=kind, amount=amount, drop_chance=chance, item_id=item_id)


WORLD_EVENTS = (
    WorldEventDefinition(
        id="we_treasure_goblin",
        name="Treasure Goblin",
        description="A goblin is fleeing with a sack of coins! Catch it for a fortune in gold.",
        event_type=WorldEventType.TREASURE_GOBLIN,
        rarity=Grade.COMMON,
        spawn_chance=0.15,
        cooldown_minutes=30,
        min_level=1,
        max_level=99,
        duration_seconds=45,
        monsters=(_m("goblin_normal", 1, 100, 110),),
        rewards=(_r(RewardKind.GOLD, 500), _r(RewardKind.EXPERIENCE, 200)),
    ),
    WorldEventDefinition(
        id="we_golden_goblin",
        name="Golden Goblin",
        description="A goblin gleaming head to toe in gold, carrying untold treasure.",
        event_type=WorldEventType.TREASURE_GOBLIN,
        rarity=Grade.RARE,
        spawn_chance=0.05,
        cooldown_minutes=60,
        min_level=3,
        duration_seconds=30,
        monsters=(_m("goblin_elite", 1, 110, 120),),
        rewards=(
            _r(RewardKind.GOLD, 2000),
            _r(RewardKind.EXPERIENCE, 500),
            _r(RewardKind.ITEM, 1, 0.3, "Longsword_Rare"),
        ),
        announce_message="A golden goblin has appeared!",
    ),
    WorldEventDefinition(
        id="we_goblin_raid",
        name="Goblin Raid",
        description="A goblin horde is charging in! Drive them off and take their spoils.",
        event_type=WorldEventType.MONSTER_RAID,
        rarity=Grade.COMMON,
        spawn_chance=0.12,
        cooldown_minutes=30,
        duration_seconds=90,
        monsters=(
            _m("goblin_normal", 5, 100, 105),
            _m("goblin_berserker", 2, 100, 108, delay=3),
            _m("goblin_leader", 1, 105, 112, delay=6),
        ),
        rewards=(_r(RewardKind.GOLD, 300), _r(RewardKind.EXPERIENCE, 250)),
    ),
    WorldEventDefinition(
        id="we_orc_warband",
        name="Orc Warband",
        description="An orc warband approaches. Beware their champions.",
        event_type=WorldEventType.MONSTER_RAID,
        rarity=Grade.UNCOMMON,
        spawn_chance=0.08,
        cooldown_minutes=45,
        min_level=3,
        duration_seconds=120,
        monsters=(
            _m("orc_normal", 4, 102, 108),
            _m("orc_berserker", 2, 105, 112, delay=4),
            _m("orc_leader", 1, 108, 115, delay=8),
        ),
        rewards=(_r(RewardKind.GOLD, 600), _r(RewardKind.EXPERIENCE, 400)),
    ),
    WorldEventDefinition(
        id="we_undead_night_raid",
        name="Night of the Dead",
        description="The dead rise in the darkness. Put them down before dawn.",
        event_type=WorldEventType.NIGHT_HAUNT,
        rarity=Grade.COMMON,
        spawn_chance=0.18,
        cooldown_minutes=30,
        min_level=2,
        night_only=True,
        duration_seconds=120,
        monsters=(
            _m("undead_normal", 6, 100, 106),
            _m("undead_shaman", 2, 103, 110, delay=5),
            _m("undead_elite", 1, 108, 114, delay=10),
        ),
        rewards=(_r(RewardKind.GOLD, 400), _r(RewardKind.EXPERIENCE, 350)),
    ),
    WorldEventDefinition(
        id="we_elemental_storm",
        name="Elemental Storm",
        description="A storm has called elementals into being. Mind the lightning.",
        event_type=WorldEventType.ELEMENTAL_RIFT,
        rarity=Grade.RARE,
        spawn_chance=0.06,
        cooldown_minutes=60,
        min_level=5,
        weather=Weather.STORM,
        duration_seconds=150,
        monsters=(
            _m("elemental_normal", 4, 105, 112),
            _m("elemental_elite", 2, 108, 115, delay=5),
            _m("elemental_boss", 1, 112, 118, boss=True, delay=10),
        ),
        rewards=(
            _r(RewardKind.GOLD, 800),
            _r(RewardKind.EXPERIENCE, 600),
            _r(RewardKind.ITEM, 1, 0.2, "CrystalStaff_Rare"),
        ),
    ),
    WorldEventDefinition(
        id="we_demon_portal",
        name="Demon Gate",
        description="A dark gate has opened and demons pour through!",
        event_type=WorldEventType.ELEMENTAL_RIFT,
        rarity=Grade.EPIC,
        spawn_chance=0.03,
        cooldown_minutes=90,
        min_level=8,
        duration_seconds=180,
        monsters=(
            _m("demon_normal", 5, 106, 112),
            _m("demon_shaman", 2, 108, 114, delay=4),
            _m("demon_berserker", 2, 110, 116, delay=8),
            _m("demon_boss", 1, 114, 120, boss=True, delay=12),
        ),
        rewards=(
            _r(RewardKind.GOLD, 1500),
            _r(RewardKind.EXPERIENCE, 1000),
            _r(RewardKind.SKILL_POINT, 1, 0.5),
        ),
        announce_message="A demon gate has torn open!",
    ),
    WorldEventDefinition(
        id="we_fallen_star",
        name="Fallen Star",
        description="A star has fallen nearby. Its shard hums with power.",
        event_type=WorldEventType.FALLEN_STAR,
        rarity=Grade.RARE,
        spawn_chance=0.04,
        cooldown_minutes=120,
        night_only=True,
        weather=Weather.CLEAR,
        duration_seconds=60,
        rewards=(_r(RewardKind.BUFF, 1), _r(RewardKind.ITEM, 1, 0.5, "StarShard")),
    ),
)
