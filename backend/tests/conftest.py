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

import pytest
from pathlib import Path
import sys
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

# Add the backend root to the Python path to allow imports like `from dndbeyond_agent.services...`
project_root = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(project_root))

from dndbeyond_agent.core.config import Settings
from dndbeyond_agent.main import create_app
from dndbeyond_agent.services.dndbeyond_client import DndBeyondClient, get_dndbeyond_client

TEST_API_KEY = "test-secret-key"


def make_settings(**overrides) -> Settings:
    """Settings with explicit values so the developer's environment cannot leak in."""
    values = dict(
        API_KEY=TEST_API_KEY,
        AUTH_ENABLED=True,
        PRESERVE_UPSTREAM_STATUS=False,
        AGENT_PUBLIC_URL="https://agent.test",
        LOG_LEVEL="DEBUG",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def raw_character() -> dict:
    """A trimmed character service document (v5 'data' payload)."""
    return {
        "id": 12345678,
        "name": "Thistle Underbough",
        "race": {"fullName": "Lightfoot Halfling", "baseName": "Halfling"},
        "classes": [
            {"level": 3, "definition": {"name": "Rogue"}},
            {"level": 2, "definition": {"name": "Bard"}},
        ],
        "stats": [
            {"id": 1, "value": 8},
            {"id": 2, "value": 17},
            {"id": 3, "value": 14},
            {"id": 4, "value": 12},
            {"id": 5, "value": 10},
            {"id": 6, "value": 15},
        ],
        "baseHitPoints": 33,
        "bonusHitPoints": 5,
        "removedHitPoints": 7,
        "armorClass": 15,
        "speed": {"walk": 25},
        "avatarUrl": "https://www.dndbeyond.com/avatars/thistle.png",
        "campaign": {"id": 99, "name": "Ignored"},
    }


@pytest.fixture
def mock_dndbeyond_client() -> AsyncMock:
    return AsyncMock(spec=DndBeyondClient)


@pytest.fixture
def app_factory(mock_dndbeyond_client):
    """Builds apps with the upstream client replaced by mock_dndbeyond_client."""
    def _factory(**overrides):
        app = create_app(make_settings(**overrides))
        app.dependency_overrides[get_dndbeyond_client] = lambda: mock_dndbeyond_client
        return app
    return _factory


@pytest.fixture
def client(app_factory) -> TestClient:
    return TestClient(app_factory())


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {TEST_API_KEY}"}


@pytest.fixture
def settings_factory():
    return make_settings
