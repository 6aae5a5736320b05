"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from meal_planner.api.auth import router as auth_router
from meal_planner.api.meal_plans import router as meal_plans_router
from meal_planner.api.pantry import router as pantry_router
from meal_planner.api.preferences import router as preferences_router
from meal_planner.api.responses import error_response
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Ungültige Eingabe"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "Rejected invalid request body",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return error_response(
            None, INVALID_INPUT_MESSAGE, status.HTTP_422_UNPROCESSABLE_ENTITY
        )

    app.include_router(auth_router)
    app.include_router(preferences_router)
    app.include_router(meal_plans_router)
    app.include_router(pantry_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
