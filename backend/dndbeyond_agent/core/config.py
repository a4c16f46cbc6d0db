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

from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from functools import lru_cache
from typing import Optional

load_dotenv() # Loads variables from .env file

# Browser-like identity; the character service rejects requests without it
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

class Settings(BaseSettings):
    PROJECT_NAME: str = "D&D Beyond Character & Campaign Agent"

    # --- Authentication ---
    # Shared secret expected in "Authorization: Bearer <API_KEY>".
    # Left unset, every authenticated request is rejected.
    API_KEY: Optional[str] = None
    AUTH_ENABLED: bool = True

    # --- Upstream (D&D Beyond character service) ---
    DNDBEYOND_CHARACTER_URL: str = "https://character-service.dndbeyond.com/character/v5/character/{character_id}"
    UPSTREAM_USER_AGENT: str = DEFAULT_USER_AGENT
    UPSTREAM_REFERER: str = "https://www.dndbeyond.com/"
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0
    # Report upstream 404/429 as 404/429 instead of folding them into 500
    PRESERVE_UPSTREAM_STATUS: bool = False

    # --- Agent card ---
    AGENT_PUBLIC_URL: str = "https://dndbeyond-agent.example.workers.dev"

    LOG_LEVEL: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Settings read from the environment once per process."""
    return Settings()
