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
from functools import lru_cache
from pathlib import Path
from dndbeyond_agent.models.agent import UIChunk

logger = logging.getLogger(__name__)

STATIC_DIR: Path = Path(__file__).resolve().parent.parent / "static"
SCRIPTS_PLACEHOLDER = "/*AGENT_SCRIPTS*/"
UI_CHUNK_TITLE = "🐉 D&D Beyond Character Lookup"


@lru_cache(maxsize=None)
def load_asset(static_dir: Path, name: str) -> str:
    """Reads a static file once per (directory, name) pair."""
    path = static_dir / name
    logger.debug(f"Loading static asset {path}")
    return path.read_text(encoding="utf-8")


class UIService:
    """Serves the static lookup widget. Files are read once and cached by load_asset()."""

    def __init__(self, static_dir: Path = STATIC_DIR):
        self.static_dir = static_dir

    def _read_asset(self, name: str) -> str:
        return load_asset(self.static_dir, name)

    def get_scripts(self) -> str:
        return self._read_asset("agent.js")

    def get_index_html(self) -> str:
        """Standalone lookup page with the widget script inlined."""
        return self._read_asset("index.html").replace(SCRIPTS_PLACEHOLDER, self.get_scripts())

    def get_ui_chunk(self) -> UIChunk:
        """Markup and script for embedding the widget in a host page."""
        return UIChunk(
            title=UI_CHUNK_TITLE,
            html=self._read_asset("ui_chunk.html"),
            scripts=self.get_scripts(),
        )


# Create a single instance
ui_service = UIService()
