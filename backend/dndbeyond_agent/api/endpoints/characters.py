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
from fastapi import APIRouter, Depends

from dndbeyond_agent.core.config import Settings
from dndbeyond_agent.core.errors import UpstreamError, CharacterFetchError
from dndbeyond_agent.models.character import CharacterLookupResponse
from dndbeyond_agent.models.common import ErrorResponse
from dndbeyond_agent.services.dndbeyond_client import DndBeyondClient, get_dndbeyond_client
from dndbeyond_agent.api.dependencies import get_character_id_dependency, require_api_key, get_app_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    # ":path" so that "/character/" and "/character/1/2" reach the ID check
    "/character/{character_id:path}",
    response_model=CharacterLookupResponse,
    response_model_exclude_none=True,
    summary="Get Character",
    description="Fetches a public D&D Beyond character sheet and returns it in normalized form.",
    responses={
        400: {"model": ErrorResponse, "description": "Character ID is not digits only"},
        401: {"model": ErrorResponse, "description": "Missing or malformed bearer token"},
        403: {"model": ErrorResponse, "description": "Bearer token does not match the API key"},
        500: {"model": ErrorResponse, "description": "The character service call failed"},
    },
)
async def get_character(
    # Order matters: the ID is validated before credentials are checked
    character_id: str = Depends(get_character_id_dependency),
    _authorized: None = Depends(require_api_key),
    client: DndBeyondClient = Depends(get_dndbeyond_client),
    settings: Settings = Depends(get_app_settings),
):
    """
    Gets a normalized character sheet.

    - **character_id**: The numeric D&D Beyond character ID (in path).
    """
    try:
        character = await client.fetch_character(character_id)
    except UpstreamError as e:
        logger.warning(f"Failed to fetch character {character_id}: {e.message} (upstream status: {e.status_code})")
        raise CharacterFetchError(e, preserve_status=settings.PRESERVE_UPSTREAM_STATUS) from e

    logger.info(f"Returning character {character_id}")
    return CharacterLookupResponse(character=character)
