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
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dndbeyond_agent.core.errors import AgentError

logger = logging.getLogger(__name__)

# Responses from the catch-all handler bypass the http middlewares,
# so the CORS header is set here directly
CORS_ORIGIN_HEADER = {"Access-Control-Allow-Origin": "*"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(AgentError)
    async def agent_error_handler(request: Request, exc: AgentError):
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.http_status} {exc.error}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_response(), headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"HTTPException on {request.method} {request.url.path}: {exc.status_code} {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"GLOBAL HANDLER: Unhandled exception for {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
            headers=CORS_ORIGIN_HEADER,
        )
