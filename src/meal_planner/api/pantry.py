"""Pantry, recipe suggestion and reminder endpoints."""

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from meal_planner.api.auth import current_session
from meal_planner.api.responses import failure_response
from meal_planner.api.schemas import PantryUpdateRequest, ReminderRequest
from meal_planner.domain.errors import MealPlannerError, StoreError
from meal_planner.domain.pantry import PantryItem
from meal_planner.domain.reminders import MealReminder
from meal_planner.services.sessions import SessionContext

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pantry"])


@router.get("/pantry")
async def get_pantry(
    session: SessionContext = Depends(current_session),
) -> dict[str, object]:
    """Return the pantry loaded for the session."""
    return {"ingredients": _serialize_pantry(session.pantry)}


@router.put("/pantry", response_model=None)
async def update_pantry(
    payload: PantryUpdateRequest,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Replace the pantry; malformed entries are dropped."""
    container: AppContainer = request.app.state.container
    try:
        items = container.pantry_service.update(session.user.uid, payload.ingredients)
    except StoreError as exc:
        logger.exception(
            "Failed to save pantry", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    session.pantry = items
    return {
        "message": session.succeed("Vorratskammer gespeichert"),
        "ingredients": _serialize_pantry(items),
    }


@router.post("/pantry/suggestions", response_model=None)
async def suggest_recipes(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object] | JSONResponse:
    """Ask for recipes that use what is in the pantry."""
    container: AppContainer = request.app.state.container
    try:
        with session.guard("suggest"):
            suggestions = await container.suggestion_service.suggest(session.pantry)
    except MealPlannerError as exc:
        logger.exception(
            "Recipe suggestions failed", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    return {
        "suggestions": [
            suggestion.model_dump(mode="json", by_alias=True)
            for suggestion in suggestions
        ]
    }


@router.get("/reminders", response_model=None)
async def list_reminders(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object] | JSONResponse:
    """Reload and return the user's reminders."""
    container: AppContainer = request.app.state.container
    try:
        session.reminders = container.reminder_service.list_reminders(
            session.user.uid
        )
    except StoreError as exc:
        logger.exception(
            "Failed to load reminders", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    return {"reminders": [_serialize_reminder(item) for item in session.reminders]}


@router.post("/reminders", response_model=None)
async def create_reminder(
    payload: ReminderRequest,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Schedule a reminder for a meal."""
    container: AppContainer = request.app.state.container
    try:
        reminder = container.reminder_service.create(
            session.user.uid,
            payload.meal_id,
            payload.reminder_time,
            payload.notification_type,
        )
    except StoreError as exc:
        logger.exception(
            "Failed to create reminder", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    session.reminders = sorted(
        [*session.reminders, reminder], key=lambda item: item.reminder_time
    )
    return {
        "message": session.succeed("Erinnerung gespeichert"),
        "reminder": _serialize_reminder(reminder),
    }


@router.delete("/reminders/{reminder_id}", response_model=None)
async def delete_reminder(
    reminder_id: UUID,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Remove a reminder."""
    container: AppContainer = request.app.state.container
    try:
        container.reminder_service.delete(session.user.uid, reminder_id)
    except StoreError as exc:
        logger.exception(
            "Failed to delete reminder", extra={"reminder_id": str(reminder_id)}
        )
        return failure_response(container.settings, session, exc)
    session.reminders = [
        item for item in session.reminders if item.id != reminder_id
    ]
    return {"message": session.succeed("Erinnerung gelöscht")}


def _serialize_pantry(items: list[PantryItem]) -> list[dict[str, object]]:
    return [item.model_dump(mode="json", by_alias=True) for item in items]


def _serialize_reminder(reminder: MealReminder) -> dict[str, object]:
    return {
        "id": str(reminder.id),
        "mealId": reminder.meal_id,
        "reminderTime": reminder.reminder_time.isoformat(),
        "notificationType": reminder.notification_type,
    }
