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

import hmac
import logging
from typing import Optional
from fastapi import Depends, Path, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from dndbeyond_agent.core.config import Settings
from dndbeyond_agent.core.errors import InvalidCharacterIdError, AuthenticationRequiredError, InvalidApiKeyError
from dndbeyond_agent.services.dndbeyond_client import CHARACTER_ID_PATTERN

logger = logging.getLogger(__name__)

# auto_error=False so a missing or non-Bearer header reaches require_api_key
# and gets our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings injected into the application by create_app()."""
    return request.app.state.settings


def _is_literal_path_segment(request: Request, character_id: str) -> bool:
    """True when the undecoded request path ends with the segment as given, i.e. it was not percent-encoded."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return True
    raw_path = raw_path.split(b"?", 1)[0]
    return raw_path.endswith(f"/character/{character_id}".encode("utf-8"))


async def get_character_id_dependency(request: Request, character_id: str = Path(...)) -> str:
    """
    Dependency that checks the path segment is digits only, as sent on the wire
    (so "%31%32" is rejected), and returns it.
    Raises InvalidCharacterIdError (400) otherwise, before any auth check.
    """
    if not CHARACTER_ID_PATTERN.fullmatch(character_id) or not _is_literal_path_segment(request, character_id):
        logger.info(f"Rejected invalid character ID {character_id!r}")
        raise InvalidCharacterIdError()
    return character_id


async def require_api_key(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Enforces "Authorization: Bearer <API_KEY>".

    Missing or malformed header -> 401, wrong token -> 403. With no API_KEY
    configured every token is wrong.
    """
    if not settings.AUTH_ENABLED:
        return
    if credentials is None:
        raise AuthenticationRequiredError()
    expected = settings.API_KEY
    if not expected:
        logger.error("Rejecting authenticated request: API_KEY is not configured")
        raise InvalidApiKeyError()
    if not hmac.compare_digest(credentials.credentials.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Rejecting request with invalid API key")
        raise InvalidApiKeyError()
