"""Status message responses shared by the API routers."""

from fastapi import status
from fastapi.responses import JSONResponse

from meal_planner.config import Settings
from meal_planner.domain.errors import (
    ActionInProgressError,
    AuthError,
    GenerationError,
    MealPlannerError,
    StoreError,
    ValidationError,
)
from meal_planner.services.generation import RATE_LIMIT_MESSAGE
from meal_planner.services.sessions import FAILURE_PREFIX, SessionContext

_STATUS_CODES: tuple[tuple[type[MealPlannerError], int], ...] = (
    (ActionInProgressError, status.HTTP_409_CONFLICT),
    (AuthError, status.HTTP_502_BAD_GATEWAY),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (GenerationError, status.HTTP_502_BAD_GATEWAY),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def failure_response(
    settings: Settings, session: SessionContext | None, exc: MealPlannerError
) -> JSONResponse:
    """Report a failed action through the status message channel."""
    return error_response(session, _user_message(settings, exc), _status_code(exc))


def error_response(
    session: SessionContext | None, text: str, status_code: int
) -> JSONResponse:
    """Return an error message, recording it on the session when there is one."""
    message = session.fail(text) if session else f"{FAILURE_PREFIX} {text}"
    return JSONResponse(status_code=status_code, content={"message": message})


def _status_code(exc: MealPlannerError) -> int:
    if isinstance(exc, GenerationError) and exc.message == RATE_LIMIT_MESSAGE:
        return status.HTTP_429_TOO_MANY_REQUESTS
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _user_message(settings: Settings, exc: MealPlannerError) -> str:
    """Return the user-facing message with local debug info."""
    cause = exc.__cause__
    if settings.environment == "local" and cause is not None:
        return f"{exc.message} (debug: {type(cause).__name__}: {cause})"
    return exc.message
