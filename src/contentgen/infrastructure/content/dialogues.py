from __future__ import annotations

from contentgen.domain.models.dialogue import (
    DialogueChoice,
    DialogueCondition,
    DialogueConditionKind,
    DialogueEffect,
    DialogueEffectKind,
    DialogueGraph,
    DialogueNode,
)


def _n(node_id: str, speaker: str, text: str, next_id: str = "", effect: DialogueEffect | None = None) -> DialogueNode:
    return DialogueNode(id=node_id, speaker=speaker, text=text, next_id=next_id, effect=effect)


def _nc(node_id: str, speaker: str, text: str, *choices: DialogueChoice) -> DialogueNode:
    return DialogueNode(id=node_id, speaker=speaker, text=text, choices=tuple(choices))


def _c(
    text: str,
    next_id: str,
    effect: DialogueEffectKind | None = None,
    amount: int = 0,
    value: str = "",
    condition: DialogueCondition | None = None,
) -> DialogueChoice:
    return DialogueChoice(
        text=text,
        next_id=next_id,
        effect=DialogueEffect(effect, amount, value) if effect is not None else None,
        condition=condition,
    )


def _fx(kind: DialogueEffectKind, amount: int = 0, value: str = "") -> DialogueEffect:
    return DialogueEffect(kind=kind, amount=amount, value=value)


ELDER = "Elder Aldor"
HAGRID = "Hagrid"
MIRANDA = "Miranda"
VULCAN = "Vulcan"
FIONA = "Fiona"
CAPTAIN = "Captain Brenna"

DIALOGUES = (
    DialogueGraph(
        id="elder_greeting",
        npc_name=ELDER,
        nodes=(
            _n("n1", ELDER, "Welcome, adventurer. You are among friends in this village.", "n2"),
            _n("n2", ELDER, "The dungeons are full of danger, but the brave are rewarded.", "n3"),
            _n("n3", ELDER, "Speak with the merchants, gear up, and try the dungeon!", effect=_fx(DialogueEffectKind.GIVE_GOLD, 100)),
        ),
    ),
    DialogueGraph(
        id="elder_midlevel",
        npc_name=ELDER,
        priority=5,
        condition=DialogueCondition.min_level(5),
        nodes=(
            _n("n1", ELDER, "Look how far you have come! Remarkable.", "n2"),
            _nc(
                "n2", ELDER, "If you want a greater challenge, try the Dark Forest. The rewards are far better.",
                _c("I'll take it on!", "n3"),
                _c("I'm not ready yet.", "n4"),
            ),
            _n("n3", ELDER, "A fine choice! Come back safely."),
            _n("n4", ELDER, "No need to hurry. Prepare well before you go."),
        ),
    ),
    DialogueGraph(
        id="elder_veteran",
        npc_name=ELDER,
        priority=10,
        condition=DialogueCondition.min_level(10),
        nodes=(
            _n("n1", ELDER, "The Demon King's domain awaits those of your strength.", "n2"),
            _nc(
                "n2", ELDER, "Shall I open the sealed path for you?",
                _c("Open it.", "n3", DialogueEffectKind.TELEPORT_TO_DUNGEON, value="demon_domain"),
                _c("Not today.", "n4"),
            ),
            _n("n3", ELDER, "May the light guide you."),
            _n("n4", ELDER, "The seal will wait for you."),
        ),
    ),
    DialogueGraph(
        id="weapon_merchant",
        npc_name=HAGRID,
        nodes=(
            _n("n1", HAGRID, "Welcome! Looking for the finest weapons? You've come to the right place!", "n2"),
            _nc(
                "n2", HAGRID, "What are you after?",
                _c("Show me your stock", "n3", DialogueEffectKind.OPEN_SHOP, value="weapon"),
                _c("Just browsing", "n4"),
            ),
            _n("n3", HAGRID, "Pick something good!"),
            _n("n4", HAGRID, "Take your time. Tell me if anything catches your eye!"),
        ),
    ),
    DialogueGraph(
        id="armor_merchant",
        npc_name="Helga",
        nodes=(
            _n("n1", "Helga", "Enter the dungeon without solid armor and you're dead.", "n2"),
            _n("n2", "Helga", "My goods are top quality. Care to look?", effect=_fx(DialogueEffectKind.OPEN_SHOP, value="armor")),
        ),
    ),
    DialogueGraph(
        id="potion_merchant",
        npc_name=MIRANDA,
        nodes=(
            _n("n1", MIRANDA, "Oh, a customer! Health potions? Mana potions? I have them all.", "n2"),
            _nc(
                "n2", MIRANDA, "What would you like?",
                _c("Show me your potions", "n3", DialogueEffectKind.OPEN_SHOP, value="potion"),
                _c("Please heal me", "n4", DialogueEffectKind.HEAL_PLAYER),
                _c("Just visiting", "n5"),
            ),
            _n("n3", MIRANDA, "Good choice! Going in without potions is madness!"),
            _n("n4", MIRANDA, "There, all patched up! Stay healthy."),
            _n("n5", MIRANDA, "Always carry plenty of potions!"),
        ),
    ),
    DialogueGraph(
        id="blacksmith_greeting",
        npc_name=VULCAN,
        nodes=(
            _n("n1", VULCAN, "Clang! Clang! ...Ah, a customer. What do you want reinforced?", "n2"),
            _nc(
                "n2", VULCAN, "I upgrade equipment. Bring enough gold and it's done.",
                _c("Upgrade my gear", "n3", DialogueEffectKind.OPEN_CRAFTING, value="enhance"),
                _c("Forge something from ore", "n3", DialogueEffectKind.OPEN_CRAFTING, value="forge",
                   condition=DialogueCondition(kind=DialogueConditionKind.HAS_ITEM, text="IronOre")),
                _c("I'll come back later", "n4"),
            ),
            _n("n3", VULCAN, "Right, let's see... pick what you want worked on."),
            _n("n4", VULCAN, "Come back when you have something worth the effort."),
        ),
    ),
    DialogueGraph(
        id="blacksmith_dwarf",
        npc_name=VULCAN,
        priority=3,
        condition=DialogueCondition.race_is("Dwarf"),
        nodes=(
            _n("n1", VULCAN, "A kinsman! The forge is yours, friend.", "n2"),
            _n("n2", VULCAN, "Take this whetstone, from one smith to another.", effect=_fx(DialogueEffectKind.GIVE_ITEM, 1, "Whetstone")),
        ),
    ),
    DialogueGraph(
        id="dungeon_guide",
        npc_name=FIONA,
        nodes=(
            _n("n1", FIONA, "Want to know about the dungeons? I'll show you around!", "n2"),
            _nc(
                "n2", FIONA, "What would you like to know?",
                _c("Where should a beginner go?", "n3"),
                _c("What is the hardest dungeon?", "n4"),
                _c("What are world bosses?", "n5"),
                _c("Never mind", "n6"),
            ),
            _n("n3", FIONA, "The Goblin Cave! Perfect for levels 1 to 5. Ten floors, with bosses on 5 and 10."),
            _n("n4", FIONA, "The Demon King's domain is for level 10 and up. There is no revival there."),
            _n("n5", FIONA, "World bosses appear every 30 minutes. Everyone can fight, and rewards follow contribution!"),
            _n("n6", FIONA, "Ask me anytime!"),
        ),
    ),
    DialogueGraph(
        id="guard_quest",
        npc_name=CAPTAIN,
        nodes=(
            _n("n1", CAPTAIN, "Goblins have been raiding the roads. We need hands.", "n2"),
            _nc(
                "n2", CAPTAIN, "Will you clear them out?",
                _c("I'll do it.", "n3", DialogueEffectKind.ACCEPT_QUEST, value="goblin_roads"),
                _c("Not now.", "n4"),
            ),
            _n("n3", CAPTAIN, "Good. Report back when it's done."),
            _n("n4", CAPTAIN, "The offer stands."),
        ),
    ),
    DialogueGraph(
        id="guard_report",
        npc_name=CAPTAIN,
        priority=5,
        condition=DialogueCondition(kind=DialogueConditionKind.HAS_QUEST, text="goblin_roads"),
        nodes=(
            _n("n1", CAPTAIN, "Any news from the roads?", "n2"),
            _nc(
                "n2", CAPTAIN, "Well?",
                _c("The goblins are gone.", "n3", DialogueEffectKind.COMPLETE_QUEST, value="goblin_roads",
                   condition=DialogueCondition(kind=DialogueConditionKind.HAS_ITEM, text="GoblinEar")),
                _c("Still working on it.", "n4"),
            ),
            _n("n3", CAPTAIN, "Fine work. Here is your pay.", effect=_fx(DialogueEffectKind.GIVE_EXP, 250)),
            _n("n4", CAPTAIN, "Don't take too long."),
        ),
    ),
    DialogueGraph(
        id="guard_thanks",
        npc_name=CAPTAIN,
        priority=8,
        condition=DialogueCondition(kind=DialogueConditionKind.QUEST_COMPLETE, text="goblin_roads"),
        nodes=(
            _n("n1", CAPTAIN, "The roads are quiet thanks to you.", effect=_fx(DialogueEffectKind.SET_FLAG, value="roads_cleared")),
        ),
    ),
)
