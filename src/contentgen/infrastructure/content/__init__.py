from contentgen.infrastructure.content.dialogues import DIALOGUES
from contentgen.infrastructure.content.dungeon_events import DUNGEON_EVENTS
from contentgen.infrastructure.content.equipment import EQUIPMENT
from contentgen.infrastructure.content.races import race_definitions
from contentgen.infrastructure.content.variants import variant_definitions
from contentgen.infrastructure.content.world_events import WORLD_EVENTS

__all__ = ["DIALOGUES", "DUNGEON_EVENTS", "EQUIPMENT", "WORLD_EVENTS", "race_definitions", "variant_definitions"]
