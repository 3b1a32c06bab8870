"""FastAPI application wiring for the warband builder."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from warbands.api import routes
from warbands.api.runtime import ApiState, build_state
from warbands.config import get_settings
from warbands.domain.errors import InvalidEditError, WarbandNotFoundError, WeirdoNotFoundError

logger = logging.getLogger(__name__)


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _invalid_edit(request: Request, exc: Exception) -> JSONResponse:
    logger.info("rejected edit %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the warband API.

    Missing warbands or weirdos become 404 responses and malformed edits
    become 400; rule violations are never errors and come back in the
    validation report of a normal response.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        try:
            yield
        finally:
            await state.shutdown()

    settings = get_settings()
    app = FastAPI(title="Warband Builder API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(WarbandNotFoundError, _not_found)
    app.add_exception_handler(WeirdoNotFoundError, _not_found)
    app.add_exception_handler(InvalidEditError, _invalid_edit)
    app.include_router(routes.router)
    return app


app = create_app()
