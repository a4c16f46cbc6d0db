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

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from dndbeyond_agent.core.config import Settings, get_settings
from dndbeyond_agent.api.api import api_router
from dndbeyond_agent.api.error_handlers import register_error_handlers
from dndbeyond_agent.services.agent_service import build_usage_text

logger = logging.getLogger(__name__)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


# --- Lifespan Event Handler ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(f"Lifespan: Starting up {settings.PROJECT_NAME}...")
    if settings.AUTH_ENABLED and not settings.API_KEY:
        logger.critical("Lifespan: API_KEY is not set; every character lookup will be rejected with 403.")
    elif not settings.AUTH_ENABLED:
        logger.warning("Lifespan: AUTH_ENABLED is false; character lookups are public.")
    logger.info(f"Lifespan: Upstream URL template: {settings.DNDBEYOND_CHARACTER_URL}")

    yield # The application runs while yielded

    logger.info(f"Lifespan: Shutting down {settings.PROJECT_NAME}...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application around an explicit Settings instance.
    Tests create several apps with different API keys in one process.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    # Interactive docs are off: every path outside the routed ones returns the usage text
    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings

    register_error_handlers(app)

    # --- CORS Middleware ---
    # Answers every preflight and stamps the allow-origin header on every response
    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=PREFLIGHT_HEADERS)
        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    # --- Request Logging Middleware ---
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        logger.info(f"MIDDLEWARE: Incoming request: {request.method} {request.url.path}")
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            logger.info(f"MIDDLEWARE: Finished request: {request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.4f}s")
            return response
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(f"MIDDLEWARE: Exception during request: {request.method} {request.url.path} - Error: {e} - Time: {process_time:.4f}s", exc_info=True)
            raise e

    # --- Include API Routers ---
    app.include_router(api_router)

    # --- Fallback: usage text for everything else ---
    # Registered last so the routes above take precedence
    @app.api_route("/{full_path:path}", methods=FALLBACK_METHODS, include_in_schema=False)
    async def usage_text(full_path: str):
        logger.debug(f"Unmatched route /{full_path}, returning usage text")
        return PlainTextResponse(build_usage_text(settings))

    return app


# --- FastAPI App Initialization ---
app = create_app()
