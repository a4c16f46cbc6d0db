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

from dndbeyond_agent.core.config import Settings
from dndbeyond_agent.models.agent import AgentCard, AgentApi, AgentAuthentication, AgentEndpoint

AGENT_VERSION = "1.0.0"
AGENT_DESCRIPTION = "Fetches character sheets, campaign information, and party details from D&D Beyond."

# /campaign and /party are advertised for agent discovery but are not routed;
# requests to them get the usage text.
ADVERTISED_ENDPOINTS = [
    AgentEndpoint(path="/character/{id}", description="Get character by ID"),
    AgentEndpoint(path="/campaign/{characterId}", description="Get campaign info"),
    AgentEndpoint(path="/party/{characterId}", description="Get party overview"),
]


def build_agent_card(settings: Settings) -> AgentCard:
    """Capability descriptor served at /.well-known/agent.json."""
    return AgentCard(
        name=settings.PROJECT_NAME,
        description=AGENT_DESCRIPTION,
        version=AGENT_VERSION,
        icon="🐉",
        example_prompts=[
            "Look up my D&D character",
            "Show me character stats",
            "Get my campaign information",
            "Find my party details",
            "Check my character sheet",
        ],
        capabilities=["character-lookup", "campaign-data", "party-management"],
        api=AgentApi(
            url=settings.AGENT_PUBLIC_URL,
            authentication=AgentAuthentication(type="bearer" if settings.AUTH_ENABLED else "none"),
            endpoints=ADVERTISED_ENDPOINTS,
        ),
    )


def build_usage_text(settings: Settings) -> str:
    """Plaintext help returned for any unmatched route."""
    access = "requires Authorization: Bearer <API_KEY>" if settings.AUTH_ENABLED else "public access"
    return (
        f"{settings.PROJECT_NAME}\n"
        "\n"
        "Available endpoints:\n"
        "- GET /.well-known/agent.json - Agent capabilities\n"
        f"- GET /character/{{id}} - Get character by ID ({access})\n"
        "- GET /ui - Character lookup interface\n"
        "- GET /ui-chunk - Embeddable lookup widget\n"
        "\n"
        "This is an API-only agent. Use the /ui endpoint for the web interface."
    )
