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

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from dndbeyond_agent.core.config import Settings
from dndbeyond_agent.models.agent import AgentCard, UIChunk
from dndbeyond_agent.services.agent_service import build_agent_card
from dndbeyond_agent.services.ui_service import ui_service
from dndbeyond_agent.api.dependencies import get_app_settings

router = APIRouter()


@router.get(
    "/.well-known/agent.json",
    response_model=AgentCard,
    summary="Agent Card",
    description="Capability descriptor for automated callers.",
)
async def get_agent_card(settings: Settings = Depends(get_app_settings)):
    return build_agent_card(settings)


@router.get("/", response_class=HTMLResponse, summary="Lookup UI")
@router.get("/ui", response_class=HTMLResponse, summary="Lookup UI")
async def get_lookup_ui():
    """Standalone character lookup page."""
    return HTMLResponse(content=ui_service.get_index_html())


@router.get("/ui-chunk", response_model=UIChunk, summary="Embeddable Lookup UI")
async def get_ui_chunk():
    """Widget markup and script for embedding in a host agent's page."""
    return ui_service.get_ui_chunk()
