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

from typing import Optional
from fastapi import status

# --- Upstream failures (raised by the D&D Beyond client) ---

class UpstreamError(Exception):
    """Base class for any failed fetch from the character service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CharacterNotFoundError(UpstreamError):
    def __init__(self):
        super().__init__("Character not found or not public", status_code=404)


class UpstreamRateLimitedError(UpstreamError):
    def __init__(self):
        super().__init__("Rate limited by D&D Beyond", status_code=429)


class UpstreamServiceError(UpstreamError):
    """Any other upstream failure. status_code is None for transport or parse errors."""
    pass


# --- Errors surfaced to API clients ---

class AgentError(Exception):
    """
    Base for errors rendered as {"error": ..., "message": ...}.
    The registered exception handler turns these into JSON responses.
    """
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(message or self.error)
        self.message = message
        self.headers = headers

    def to_response(self) -> dict:
        content = {"error": self.error}
        if self.message:
            content["message"] = self.message
        return content


class InvalidCharacterIdError(AgentError):
    http_status = status.HTTP_400_BAD_REQUEST
    error = "Invalid character ID"


class AuthenticationRequiredError(AgentError):
    http_status = status.HTTP_401_UNAUTHORIZED
    error = "Authentication required"

    def __init__(self):
        super().__init__(headers={"WWW-Authenticate": "Bearer"})


class InvalidApiKeyError(AgentError):
    http_status = status.HTTP_403_FORBIDDEN
    error = "Invalid API key"


class CharacterFetchError(AgentError):
    """Wraps an UpstreamError for the client; the upstream message is kept verbatim."""
    error = "Failed to fetch character"

    def __init__(self, cause: UpstreamError, preserve_status: bool = False):
        super().__init__(cause.message)
        self.cause = cause
        if preserve_status and isinstance(cause, (CharacterNotFoundError, UpstreamRateLimitedError)):
            self.http_status = cause.status_code
