from __future__ import annotations

from contentgen.domain.models.event import (
    CombatWave,
    EventChoice,
    EventCondition,
    EventConditionKind,
    EventDefinition,
    EventType,
    ShopListing,
    TriggerKind,
    WaveSchedule,
)
from contentgen.domain.models.outcome import EffectKind as E
from contentgen.domain.models.outcome import ItemInteraction, Outcome, OutcomeTable
from contentgen.domain.models.stats import Grade


def _o(description: str, weight: float, effect: E, magnitude: float = 0, duration: float = 0, negative: bool = False, status: str | None = None) -> Outcome:
    return Outcome(
        description=description,
        weight=weight,
        effect=effect,
        magnitude=magnitude,
        duration=duration,
        is_negative=negative,
        status=status,
    )


def _wave(number: int, race: str, variant: str, count: int, delay: float = 0, elite: bool = False) -> CombatWave:
    return CombatWave(wave_number=number, race_type=race, variant_tag=variant, count=count, delay_seconds=delay, is_elite=elite)


def _event(
    event_id: str,
    name: str,
    description: str,
    event_type: EventType,
    rarity: Grade,
    trigger: TriggerKind,
    spawn_chance: float,
    min_floor: int,
    max_floor: int,
    interaction_text: str = "",
    outcomes=(),
    interactions=(),
    choices=(),
    waves=None,
    shop=(),
    time_limit: float | None = None,
    once: bool = False,
) -> EventDefinition:
    return EventDefinition(
        id=event_id,
        name=name,
        description=description,
        event_type=event_type,
        rarity=rarity,
        trigger=trigger,
        spawn_chance=spawn_chance,
        min_floor=min_floor,
        max_floor=max_floor,
        interaction_text=interaction_text,
        outcomes=OutcomeTable.of(outcomes),
        item_interactions=tuple(interactions),
        choices=tuple(choices),
        waves=WaveSchedule(tuple(waves)) if waves else None,
        shop=tuple(shop),
        combat_time_limit=time_limit,
        once_per_dungeon=once,
    )


CHANCE = TriggerKind.CHANCE_BASED

DUNGEON_EVENTS = (
    _event(
        "shrine_protection", "Shrine of Protection", "An altar wrapped in holy light. Prayer softens incoming blows.",
        EventType.SHRINE, Grade.COMMON, CHANCE, 0.08, 1, 10, "Pray",
        outcomes=(_o("You are blessed with protection!", 1.0, E.REDUCE_DAMAGE, 25, 120),),
    ),
    _event(
        "shrine_power", "Shrine of Power", "A battle altar crowned with flame.",
        EventType.SHRINE, Grade.COMMON, CHANCE, 0.08, 1, 10, "Lay a hand on it",
        outcomes=(_o("You are blessed for battle!", 1.0, E.INCREASE_DAMAGE, 50, 120),),
    ),
    _event(
        "shrine_invincibility", "Shrine of Invincibility", "A sacred altar ringed by a wall of light.",
        EventType.SHRINE, Grade.EPIC, CHANCE, 0.02, 5, 10, "Kneel",
        outcomes=(_o("Nothing can touch you!", 1.0, E.INVINCIBILITY, 0, 10),),
        once=True,
    ),
    _event(
        "fountain_health", "Fountain of Healing", "A clear spring bubbling with restorative water.",
        EventType.FOUNTAIN, Grade.COMMON, CHANCE, 0.10, 1, 10, "Drink the water",
        outcomes=(
            _o("Your wounds close!", 0.8, E.HEAL_PERCENT, 50),
            _o("The water was tainted...", 0.2, E.DAMAGE_HP, 30, negative=True),
        ),
        interactions=(
            ItemInteraction(
                "PoisonAntidote",
                "You purify the water with the antidote and drink safely.",
                _o("Fully restored!", 1.0, E.FULL_RESTORE),
            ),
        ),
    ),
    _event(
        "fountain_mana", "Fountain of Mana", "A spring glowing a faint blue.",
        EventType.FOUNTAIN, Grade.COMMON, CHANCE, 0.08, 1, 10, "Absorb the mana",
        outcomes=(
            _o("Your mana surges back!", 0.85, E.HEAL_MP, 100),
            _o("Mana overload! You feel dizzy...", 0.15, E.DAMAGE_HP, 20, negative=True),
        ),
    ),
    _event(
        "fountain_blessed", "Blessed Fountain", "Holy water that washes away afflictions.",
        EventType.FOUNTAIN, Grade.UNCOMMON, CHANCE, 0.06, 2, 10, "Bathe",
        outcomes=(_o("Every curse is lifted!", 1.0, E.REMOVE_STATUS, status="all"),),
    ),
    _event(
        "fountain_cursed", "Cursed Fountain", "Black water pools here. Dangerous, but the rewards are great.",
        EventType.FOUNTAIN, Grade.UNCOMMON, CHANCE, 0.05, 3, 10, "Drink",
        outcomes=(
            _o("The curse makes you stronger!", 0.5, E.CURSE_AND_REWARD, 30, 180, negative=True),
            _o("You resist the curse and learn from it.", 0.3, E.GAIN_EXP, 200),
            _o("The curse is too strong...", 0.2, E.DAMAGE_HP, 80, negative=True),
        ),
    ),
    _event(
        "curio_altar", "Ancient Offering Table", "A dusty altar. Something could be offered here.",
        EventType.CURIO, Grade.COMMON, CHANCE, 0.07, 1, 10, "Investigate",
        outcomes=(
            _o("You find gold on the altar!", 0.4, E.GAIN_GOLD, 150),
            _o("A trap! Poison gas bursts out!", 0.3, E.APPLY_STATUS, 0, 10, negative=True, status="poison"),
            _o("There was nothing there.", 0.3, E.GAIN_EXP, 10),
        ),
        interactions=(
            ItemInteraction(
                "ResurrectionScroll",
                "You offer the resurrection scroll and are richly rewarded!",
                _o("A divine blessing of gold!", 1.0, E.GAIN_GOLD, 500),
            ),
        ),
    ),
    _event(
        "curio_coffin", "Sealed Coffin", "A heavy stone coffin. Do you dare open it?",
        EventType.CURIO, Grade.UNCOMMON, CHANCE, 0.06, 2, 10, "Open the coffin",
        outcomes=(
            _o("Treasure lies within!", 0.35, E.GAIN_GOLD, 300),
            _o("The dead awaken!", 0.35, E.SPAWN_MONSTER, 2, negative=True),
            _o("Empty. Only dust.", 0.3, E.GAIN_EXP, 20),
        ),
        interactions=(
            ItemInteraction(
                "IdentifyScroll",
                "The identify spell reveals what sleeps inside.",
                _o("You take the treasure safely!", 1.0, E.GAIN_GOLD, 400),
            ),
            ItemInteraction(
                "HolyWater",
                "Holy water seals the dead before you lift the lid.",
                _o("The remains crumble, leaving their riches.", 1.0, E.GAIN_GOLD, 250),
            ),
        ),
    ),
    _event(
        "curio_dice", "Dice of Fate", "A six-sided die floats and glows. Luck decides.",
        EventType.GAMBLE, Grade.UNCOMMON, CHANCE, 0.05, 1, 10, "Roll the die",
        outcomes=(
            _o("Six! A random blessing.", 1 / 6, E.RANDOM_BUFF, 0, 120),
            _o("Five! A purse of gold.", 1 / 6, E.GAIN_GOLD, 250),
            _o("Four! Insight.", 1 / 6, E.GAIN_EXP, 120),
            _o("Three! Nothing happens.", 1 / 6, E.GAIN_EXP, 5),
            _o("Two! Your coin purse feels lighter.", 1 / 6, E.LOSE_GOLD, 50, negative=True),
            _o("One! The die bites back.", 1 / 6, E.DAMAGE_HP, 25, negative=True),
        ),
    ),
    _event(
        "curio_crossroads", "Whispering Crossroads", "Two passages, and a voice urging you down each.",
        EventType.CURIO, Grade.UNCOMMON, CHANCE, 0.04, 2, 10, "Listen",
        choices=(
            EventChoice(
                text="Follow the golden whisper",
                result_text="The left passage glitters.",
                outcomes=OutcomeTable.of(
                    (
                        _o("A hidden cache of gold!", 0.6, E.GAIN_GOLD, 300),
                        _o("A pit trap!", 0.4, E.DAMAGE_HP, 40, negative=True),
                    )
                ),
            ),
            EventChoice(
                text="Follow the quiet whisper",
                result_text="The right passage is calm.",
                outcomes=OutcomeTable.of((_o("You reach a shortcut.", 1.0, E.REVEAL_MAP),)),
            ),
            EventChoice(
                text="Answer the voice by moonlight",
                result_text="The voice only speaks at night.",
                outcomes=OutcomeTable.of((_o("The voice grants you swiftness.", 1.0, E.INCREASE_SPEED, 20, 90),)),
                condition=EventCondition(kind=EventConditionKind.NIGHT_TIME),
            ),
        ),
    ),
    _event(
        "ambush_goblin", "Goblin Ambush", "Goblins were lying in wait!",
        EventType.AMBUSH_TRAP, Grade.COMMON, CHANCE, 0.08, 1, 5,
        outcomes=(_o("Goblin ambush! Watch out!", 1.0, E.SPAWN_MONSTER, 3, negative=True),),
        waves=(_wave(1, "Goblin", "Normal", 3),),
    ),
    _event(
        "ambush_undead", "Undead Uprising", "Skeletons claw their way out of the ground!",
        EventType.AMBUSH_TRAP, Grade.COMMON, CHANCE, 0.07, 3, 8,
        outcomes=(_o("The dead rise!", 1.0, E.SPAWN_MONSTER, 4, negative=True),),
        waves=(_wave(1, "Undead", "Normal", 4), _wave(2, "Undead", "Elite", 1, 3, True)),
    ),
    _event(
        "trap_spike", "Spike Trap", "Spikes burst from the floor!",
        EventType.AMBUSH_TRAP, Grade.COMMON, CHANCE, 0.08, 1, 10,
        outcomes=(_o("You are impaled!", 1.0, E.DAMAGE_HP, 40, negative=True),),
    ),
    _event(
        "trap_teleport", "Teleport Trap", "A rune flares beneath your feet!",
        EventType.AMBUSH_TRAP, Grade.UNCOMMON, CHANCE, 0.05, 2, 10,
        outcomes=(_o("You are whisked away!", 1.0, E.TELEPORT, negative=True),),
    ),
    _event(
        "arena_basic", "Chamber of Trials", "The doors lock and monsters appear. Defeat them all.",
        EventType.ARENA, Grade.COMMON, CHANCE, 0.06, 1, 10,
        outcomes=(_o("Trial overcome! Reward gained!", 1.0, E.GAIN_GOLD, 200),),
        waves=(_wave(1, "Goblin", "Normal", 5), _wave(2, "Goblin", "Elite", 2, 3, True)),
    ),
    _event(
        "arena_survival", "Chamber of Survival", "Hold out against the rising tide for 45 seconds!",
        EventType.ARENA, Grade.UNCOMMON, CHANCE, 0.04, 2, 10,
        outcomes=(_o("You survived! Reward gained!", 1.0, E.GAIN_GOLD, 350),),
        waves=(
            _wave(1, "Beast", "Normal", 6),
            _wave(2, "Beast", "Normal", 6, 10),
            _wave(3, "Beast", "Elite", 3, 20, True),
        ),
        time_limit=45,
    ),
    _event(
        "arena_gauntlet", "Endless Battlefield", "Wave after wave. Hold as long as you can!",
        EventType.ARENA, Grade.RARE, CHANCE, 0.03, 4, 10,
        outcomes=(_o("Rewards grow with every wave!", 1.0, E.GAIN_GOLD, 100),),
        waves=(
            _wave(1, "Goblin", "Normal", 5),
            _wave(2, "Orc", "Normal", 4, 5),
            _wave(3, "Undead", "Elite", 3, 10, True),
            _wave(4, "Demon", "Berserker", 2, 15),
            _wave(5, "Dragon", "Normal", 1, 20, True),
        ),
    ),
    _event(
        "trial_speed", "Trial of Speed", "Defeat every enemy within 30 seconds!",
        EventType.TRIAL, Grade.UNCOMMON, CHANCE, 0.04, 2, 10, "Accept the challenge",
        outcomes=(_o("Finished in time! Reward gained!", 1.0, E.GAIN_EXP, 500),),
        waves=(_wave(1, "Goblin", "Normal", 8),),
        time_limit=30,
    ),
    _event(
        "trial_endurance", "Trial of Endurance", "Break through five waves. No healing!",
        EventType.TRIAL, Grade.RARE, CHANCE, 0.03, 5, 10, "Accept the challenge",
        outcomes=(_o("Endurance prevails! A great reward!", 1.0, E.GAIN_GOLD, 1200),),
        waves=(
            _wave(1, "Orc", "Normal", 3),
            _wave(2, "Undead", "Normal", 4, 5),
            _wave(3, "Beast", "Elite", 2, 10, True),
            _wave(4, "Elemental", "Berserker", 2, 15),
            _wave(5, "Demon", "Leader", 1, 20, True),
        ),
    ),
    _event(
        "trial_sacrifice", "Trial of Sacrifice", "Offer half your life for a tremendous reward.",
        EventType.TRIAL, Grade.EPIC, CHANCE, 0.02, 5, 10, "Consider the offer",
        choices=(
            EventChoice(
                text="Offer your blood",
                result_text="You bleed upon the altar.",
                outcomes=OutcomeTable.of(
                    (
                        _o("The sacrifice is accepted! A divine reward!", 0.7, E.GAIN_GOLD, 2000),
                        _o("The sacrifice is refused...", 0.3, E.DAMAGE_HP, 50, negative=True),
                    )
                ),
            ),
            EventChoice(
                text="Walk away",
                result_text="Some prices are too steep.",
                outcomes=OutcomeTable.of((_o("You leave with a lesson learned.", 1.0, E.GAIN_EXP, 10),)),
            ),
            EventChoice(
                text="Pay in gold instead",
                result_text="The altar accepts a heavy purse.",
                outcomes=OutcomeTable.of((_o("Gold flows in place of blood.", 1.0, E.LOSE_GOLD, 1000, negative=True),)),
                condition=EventCondition(kind=EventConditionKind.HIGH_GOLD),
            ),
        ),
        once=True,
    ),
    _event(
        "shop_wandering", "Wandering Merchant", "A travelling merchant selling rare goods.",
        EventType.SHOP, Grade.UNCOMMON, CHANCE, 0.05, 2, 10, "Browse wares",
        shop=(
            ShopListing("HealthPotion_Large", 80, 3, 0.2, 20),
            ShopListing("ManaPotion_Large", 80, 3, 0.2, 20),
            ShopListing("StrengthScroll", 40, 2, 0.1, 10),
            ShopListing("SpeedScroll", 40, 2, 0.1, 10),
            ShopListing("ProtectionScroll", 40, 2, 0.1, 10),
        ),
    ),
    _event(
        "shop_rare", "Secret Merchant", "A merchant emerges from the dark with precious goods.",
        EventType.SHOP, Grade.RARE, CHANCE, 0.03, 4, 10, "Browse wares",
        shop=(
            ShopListing("ResurrectionScroll", 400, 1, 0.05, 10),
            ShopListing("HealthPotion_Max", 250, 2, 0.1, 15),
            ShopListing("ManaPotion_Max", 250, 2, 0.1, 15),
            ShopListing("TownPortal", 150, 1, 0, 0),
        ),
    ),
    _event(
        "shop_gamble", "Gambler", "A shady gambler offers a mystery item for 100 gold.",
        EventType.GAMBLE, Grade.UNCOMMON, CHANCE, 0.04, 2, 10, "Gamble",
        outcomes=(
            _o("Jackpot! A fine item!", 0.1, E.GAIN_GOLD, 500),
            _o("Quite a good find!", 0.25, E.GAIN_GOLD, 200),
            _o("Nothing special...", 0.35, E.GAIN_GOLD, 50),
            _o("You drew junk...", 0.3, E.LOSE_GOLD, 100, negative=True),
        ),
    ),
    _event(
        "portal_chaos", "Gate of Chaos", "An unstable portal. Who knows where it leads.",
        EventType.PORTAL, Grade.UNCOMMON, CHANCE, 0.04, 2, 10, "Step through",
        outcomes=(
            _o("You warp to the next floor!", 0.3, E.TELEPORT, 1),
            _o("A random blessing!", 0.3, E.RANDOM_BUFF, 0, 120),
            _o("The portal lashes you!", 0.2, E.DAMAGE_HP, 40, negative=True),
            _o("You land elsewhere on this floor.", 0.2, E.TELEPORT, 0),
        ),
    ),
    _event(
        "portal_boss", "Portal of Challenge", "A rift where a mighty boss waits.",
        EventType.PORTAL, Grade.EPIC, CHANCE, 0.01, 6, 10, "Step through",
        outcomes=(_o("You challenge the rift boss!", 1.0, E.SPAWN_MONSTER, 1, negative=True),),
        waves=(_wave(1, "Dragon", "Boss", 1, 0, True),),
    ),
    _event(
        "portal_escape", "Return Portal", "A portal home. It vanishes after one use.",
        EventType.PORTAL, Grade.RARE, TriggerKind.CONDITION_BASED, 0.05, 5, 10, "Step through",
        outcomes=(_o("You return safely to town!", 1.0, E.TELEPORT),),
        once=True,
    ),
    _event(
        "rest_campfire", "Campfire", "A warm campfire. Rest a while.",
        EventType.REST_SITE, Grade.COMMON, TriggerKind.FLOOR_GUARANTEED, 1.0, 5, 10, "Rest",
        outcomes=(_o("Warmth returns. 30% HP restored.", 1.0, E.HEAL_PERCENT, 30),),
    ),
    _event(
        "rest_sanctuary", "Sanctuary", "A safe chapel. Complete recovery is possible.",
        EventType.REST_SITE, Grade.UNCOMMON, CHANCE, 0.03, 5, 10, "Pray",
        outcomes=(_o("The sanctuary restores you completely!", 1.0, E.FULL_RESTORE),),
    ),
    _event(
        "rest_meditation", "Meditation Chamber", "A quiet room where focus comes easily.",
        EventType.REST_SITE, Grade.UNCOMMON, CHANCE, 0.04, 3, 10, "Meditate",
        outcomes=(_o("Your mind clears. Skills are ready again.", 1.0, E.COOLDOWN_RESET),),
    ),
    _event(
        "treasure_gold", "Golden Chest", "A dazzling golden chest!",
        EventType.TREASURE_ROOM, Grade.RARE, CHANCE, 0.03, 3, 10, "Open",
        outcomes=(
            _o("A shining piece of equipment!", 0.5, E.GAIN_ITEM, 1),
            _o("A pile of gold!", 0.5, E.GAIN_GOLD, 600),
        ),
    ),
    _event(
        "blessing_strength", "Warrior's Blessing", "An ancient champion's spirit lingers here.",
        EventType.BLESSING, Grade.UNCOMMON, CHANCE, 0.05, 1, 10, "Accept the blessing",
        outcomes=(_o("Your strength swells!", 1.0, E.BUFF_STAT, 5, 300, status="strength"),),
    ),
    _event(
        "curse_weakness", "Mark of Weakness", "A sigil that saps the will.",
        EventType.CURSE, Grade.UNCOMMON, CHANCE, 0.04, 2, 10,
        outcomes=(_o("Your limbs grow heavy.", 1.0, E.DEBUFF_STAT, 3, 60, negative=True, status="strength"),),
    ),
    _event(
        "mystery_box", "Mystery Box", "A humming box of unknown origin.",
        EventType.MYSTERY_BOX, Grade.RARE, CHANCE, 0.03, 2, 10, "Open it",
        outcomes=(
            _o("A hidden map of the floor!", 0.4, E.REVEAL_MAP),
            _o("A strange blessing!", 0.4, E.RANDOM_BUFF, 0, 60),
            _o("Healing mist!", 0.2, E.HEAL_HP, 150),
        ),
    ),
)
