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
from fastapi import status
from fastapi.testclient import TestClient

# --- Agent card ---

def test_agent_card(client: TestClient):
    response = client.get("/.well-known/agent.json")

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("application/json")
    assert response.headers["access-control-allow-origin"] == "*"
    card = response.json()
    assert card["@type"] == "AgentCard"
    assert card["name"] == "D&D Beyond Character & Campaign Agent"
    assert card["api"]["authentication"]["type"] == "bearer"
    assert {"path": "/character/{id}", "method": "GET", "description": "Get character by ID"} in card["api"]["endpoints"]

def test_agent_card_needs_no_auth(client: TestClient, mock_dndbeyond_client):
    assert client.get("/.well-known/agent.json").status_code == status.HTTP_200_OK
    mock_dndbeyond_client.fetch_character.assert_not_called()

# --- UI ---

@pytest.mark.parametrize("path", ["/", "/ui"])
def test_lookup_ui(client: TestClient, path):
    response = client.get(path)

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["access-control-allow-origin"] == "*"
    assert "D&amp;D Beyond Character Lookup" in response.text
    assert "lookupDndCharacter" in response.text

def test_ui_chunk(client: TestClient):
    response = client.get("/ui-chunk")

    assert response.status_code == status.HTTP_200_OK
    chunk = response.json()
    assert chunk["success"] is True
    assert 'id="dndCharacterId"' in chunk["html"]
    assert "async function lookupDndCharacter()" in chunk["scripts"]

# --- CORS preflight ---

@pytest.mark.parametrize("path", ["/", "/character/123", "/character/abc", "/.well-known/agent.json", "/anything/else"])
def test_options_preflight(client: TestClient, mock_dndbeyond_client, path):
    response = client.options(path)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    allowed_methods = [m.strip() for m in response.headers["access-control-allow-methods"].split(",")]
    assert {"GET", "POST", "OPTIONS"} <= set(allowed_methods)
    assert "Authorization" in response.headers["access-control-allow-headers"]
    mock_dndbeyond_client.fetch_character.assert_not_called()

def test_options_preflight_with_browser_headers(client: TestClient):
    response = client.options(
        "/character/123",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "authorization",
        },
    )
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.headers["access-control-allow-origin"] == "*"

# --- Fallback usage text ---

@pytest.mark.parametrize("method, path", [
    ("GET", "/campaign/123"),
    ("GET", "/party/123"),
    ("GET", "/character"),
    ("GET", "/docs"),
    ("GET", "/some/unknown/path"),
    ("POST", "/"),
    ("DELETE", "/.well-known/agent.json"),
])
def test_unmatched_routes_return_usage_text(client: TestClient, mock_dndbeyond_client, method, path):
    response = client.request(method, path)

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["access-control-allow-origin"] == "*"
    assert "Available endpoints:" in response.text
    assert "GET /character/{id}" in response.text
    mock_dndbeyond_client.fetch_character.assert_not_called()
