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

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union

# --- Raw upstream document ---
# Shape is not guaranteed by the character service, so every field is optional
# and unknown fields are ignored.

class RawModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

class RawRace(RawModel):
    full_name: Optional[str] = Field(None, alias="fullName")
    base_name: Optional[str] = Field(None, alias="baseName")

class RawClassDefinition(RawModel):
    name: Optional[str] = None

class RawClass(RawModel):
    level: Optional[int] = None
    definition: Optional[RawClassDefinition] = None

class RawStat(RawModel):
    id: Optional[int] = None
    value: Optional[int] = None

class RawSpeed(RawModel):
    walk: Optional[int] = None

class RawCharacterDocument(RawModel):
    id: Optional[int] = None
    name: Optional[str] = None
    race: Optional[RawRace] = None
    classes: Optional[List[RawClass]] = None
    # Ordered STR, DEX, CON, INT, WIS, CHA. Entries are {"id", "value"} objects,
    # bare integers are accepted as well.
    stats: Optional[List[Union[RawStat, int, None]]] = None
    base_hit_points: Optional[int] = Field(None, alias="baseHitPoints")
    bonus_hit_points: Optional[int] = Field(None, alias="bonusHitPoints")
    removed_hit_points: Optional[int] = Field(None, alias="removedHitPoints")
    armor_class: Optional[int] = Field(None, alias="armorClass")
    speed: Optional[RawSpeed] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")


# --- Normalized (public) character ---

class CharacterClass(BaseModel):
    name: Optional[str] = Field(None, description="Class name, e.g. 'Wizard'")
    level: int = Field(..., description="Levels taken in this class")

class AbilityScores(BaseModel):
    strength: int
    dexterity: int
    constitution: int
    intelligence: int
    wisdom: int
    charisma: int

class HitPoints(BaseModel):
    current: int
    max: int

class NormalizedCharacter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="D&D Beyond character ID")
    name: str = Field(..., description="Character name")
    level: int = Field(..., description="Total character level (sum of class levels)")
    race: Optional[str] = Field(None, description="Full race name, falling back to the base race")
    classes: List[CharacterClass] = Field(default_factory=list)
    stats: AbilityScores
    hit_points: HitPoints = Field(..., alias="hitPoints")
    armor_class: int = Field(..., alias="armorClass")
    speed: int = Field(..., description="Walking speed in feet")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

# Wrapper for a successful lookup
class CharacterLookupResponse(BaseModel):
    success: bool = True
    character: NormalizedCharacter
