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

import logging
import re
from typing import Optional

import httpx
from fastapi import Request
from pydantic import ValidationError

from dndbeyond_agent.core.config import Settings
from dndbeyond_agent.core.errors import (
    UpstreamServiceError, CharacterNotFoundError, UpstreamRateLimitedError
)
from dndbeyond_agent.models.character import RawCharacterDocument, NormalizedCharacter
from dndbeyond_agent.services.character_normalizer import normalize_character

logger = logging.getLogger(__name__)

# Digits only; 20 digits covers every 64-bit ID and keeps int() conversion bounded
MAX_CHARACTER_ID_DIGITS = 20
CHARACTER_ID_PATTERN = re.compile(r"[0-9]{1,%d}" % MAX_CHARACTER_ID_DIGITS)


class DndBeyondClient:
    """Fetches public character sheets from the D&D Beyond character service."""

    def __init__(
        self,
        url_template: str,
        user_agent: str,
        referer: str,
        timeout_seconds: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url_template = url_template
        self.timeout_seconds = timeout_seconds
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
            "Referer": referer,
        }
        # Tests swap in httpx.MockTransport here
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "DndBeyondClient":
        return cls(
            url_template=settings.DNDBEYOND_CHARACTER_URL,
            user_agent=settings.UPSTREAM_USER_AGENT,
            referer=settings.UPSTREAM_REFERER,
            timeout_seconds=settings.UPSTREAM_TIMEOUT_SECONDS,
            transport=transport,
        )

    def build_url(self, character_id: str) -> str:
        """Interpolates a digits-only ID into the URL template."""
        if not CHARACTER_ID_PATTERN.fullmatch(str(character_id)):
            raise ValueError(f"Character ID must be digits only, got {character_id!r}")
        return self.url_template.format(character_id=character_id)

    async def fetch_raw(self, character_id: str) -> dict:
        """
        Performs the single outbound GET and returns the decoded character document.

        Raises CharacterNotFoundError (404), UpstreamRateLimitedError (429) or
        UpstreamServiceError for any other status, transport failure or
        undecodable body. Nothing is retried.
        """
        url = self.build_url(character_id)
        logger.info(f"Fetching character {character_id} from D&D Beyond")
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"Request to D&D Beyond failed for character {character_id}: {e!r}")
            raise UpstreamServiceError(f"D&D Beyond request failed: {type(e).__name__}") from e

        if response.status_code == 404:
            logger.info(f"Character {character_id} not found or not public")
            raise CharacterNotFoundError()
        if response.status_code == 429:
            logger.warning(f"Rate limited by D&D Beyond while fetching character {character_id}")
            raise UpstreamRateLimitedError()
        if not response.is_success:
            logger.error(f"D&D Beyond returned status {response.status_code} for character {character_id}")
            raise UpstreamServiceError(f"D&D Beyond API error: {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"D&D Beyond returned invalid JSON for character {character_id}: {e}")
            raise UpstreamServiceError("D&D Beyond returned invalid JSON") from e

        if not isinstance(data, dict):
            raise UpstreamServiceError("D&D Beyond returned an unexpected payload")

        # The v5 service wraps the sheet as {"id", "success", "message", "data": {...}}.
        # A wrapper reporting failure, or carrying no sheet, is an upstream error.
        if "success" in data:
            if not data.get("success") or not isinstance(data.get("data"), dict):
                logger.error(f"D&D Beyond reported an unsuccessful response for character {character_id}: {data.get('message')!r}")
                raise UpstreamServiceError(str(data.get("message") or "D&D Beyond returned an unsuccessful response"))
            data = data["data"]
        return data

    async def fetch_character(self, character_id: str) -> NormalizedCharacter:
        """Fetches a character and projects it onto the public character shape."""
        data = await self.fetch_raw(character_id)
        try:
            raw = RawCharacterDocument.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected character document shape for {character_id}: {e.error_count()} errors")
            raise UpstreamServiceError("D&D Beyond returned an unexpected payload") from e

        character = normalize_character(raw, fallback_id=int(character_id))
        logger.debug(f"Normalized character {character.id} ('{character.name}', level {character.level})")
        return character


def get_dndbeyond_client(request: Request) -> DndBeyondClient:
    """FastAPI dependency building the client from the application's settings."""
    return DndBeyondClient.from_settings(request.app.state.settings)
