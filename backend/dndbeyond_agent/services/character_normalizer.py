# Copyright 2025 Antimortine
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import List, Optional, Union
from dndbeyond_agent.models.character import (
    RawCharacterDocument, RawStat, NormalizedCharacter, CharacterClass, AbilityScores, HitPoints
)

# Defaults substituted for missing (or zero) upstream fields
DEFAULT_LEVEL = 1
DEFAULT_CLASS_LEVEL = 0
DEFAULT_ABILITY_SCORE = 10
DEFAULT_BASE_HIT_POINTS = 0
DEFAULT_BONUS_HIT_POINTS = 0
DEFAULT_ARMOR_CLASS = 10
DEFAULT_WALK_SPEED = 30
DEFAULT_NAME = ""
DEFAULT_CHARACTER_ID = 0

# Upstream stats array order
ABILITY_ORDER = ("strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma")


def _stat_value(stats: Optional[List[Union[RawStat, int, None]]], index: int) -> int:
    if not stats or index >= len(stats):
        return DEFAULT_ABILITY_SCORE
    entry = stats[index]
    value = entry.value if isinstance(entry, RawStat) else entry
    return value or DEFAULT_ABILITY_SCORE


def normalize_character(raw: RawCharacterDocument, fallback_id: Optional[int] = None) -> NormalizedCharacter:
    """
    Projects a raw character service document onto the public character shape.

    Pure and total: every missing field gets its DEFAULT_* value, and the same
    input always yields the same output. Zero values are treated like missing
    ones. removedHitPoints is ignored, so hitPoints.current always equals
    hitPoints.max.
    """
    classes = [
        CharacterClass(
            name=cls.definition.name if cls.definition else None,
            level=cls.level or DEFAULT_CLASS_LEVEL,
        )
        for cls in (raw.classes or [])
    ]
    level = sum(cls.level for cls in classes) or DEFAULT_LEVEL

    race = None
    if raw.race:
        race = raw.race.full_name or raw.race.base_name

    stats = AbilityScores(**{
        ability: _stat_value(raw.stats, index) for index, ability in enumerate(ABILITY_ORDER)
    })

    total_hit_points = (
        (raw.base_hit_points or DEFAULT_BASE_HIT_POINTS)
        + (raw.bonus_hit_points or DEFAULT_BONUS_HIT_POINTS)
    )

    character_id = raw.id if raw.id is not None else fallback_id

    return NormalizedCharacter(
        id=character_id if character_id is not None else DEFAULT_CHARACTER_ID,
        name=raw.name or DEFAULT_NAME,
        level=level,
        race=race,
        classes=classes,
        stats=stats,
        hit_points=HitPoints(current=total_hit_points, max=total_hit_points),
        armor_class=raw.armor_class or DEFAULT_ARMOR_CLASS,
        speed=(raw.speed.walk if raw.speed else None) or DEFAULT_WALK_SPEED,
        avatar_url=raw.avatar_url,
    )
