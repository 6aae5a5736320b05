"""Preference endpoints."""

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from meal_planner.api.auth import current_session
from meal_planner.api.responses import failure_response
from meal_planner.domain.errors import StoreError
from meal_planner.domain.preferences import UserPreferences
from meal_planner.services.sessions import SessionContext

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("")
async def get_preferences(
    session: SessionContext = Depends(current_session),
) -> dict[str, object]:
    """Return the in-memory preferences of the session."""
    return {"preferences": session.preferences.to_document()}


@router.put("", response_model=None)
async def update_preferences(
    preferences: UserPreferences,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Persist preferences, then replace the session mirror."""
    container: AppContainer = request.app.state.container
    try:
        container.preferences_service.update(session.user.uid, preferences)
    except StoreError as exc:
        logger.exception(
            "Failed to update preferences", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    session.preferences = preferences
    return {
        "message": session.succeed("Einstellungen gespeichert"),
        "preferences": preferences.to_document(),
    }
