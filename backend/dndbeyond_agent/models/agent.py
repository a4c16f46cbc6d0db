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
from typing import List

# --- Agent card (/.well-known/agent.json) ---

class AgentEndpoint(BaseModel):
    path: str
    method: str = "GET"
    description: str

class AgentAuthentication(BaseModel):
    type: str = Field(..., description="'bearer' when an API key is required, 'none' otherwise")

class AgentApi(BaseModel):
    url: str
    authentication: AgentAuthentication
    endpoints: List[AgentEndpoint]

class AgentCard(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field("AgentCard", alias="@type")
    name: str
    description: str
    version: str
    icon: str
    example_prompts: List[str] = []
    capabilities: List[str] = []
    api: AgentApi

# --- Embeddable UI chunk (/ui-chunk) ---

class UIChunk(BaseModel):
    success: bool = True
    title: str
    html: str
    scripts: str
