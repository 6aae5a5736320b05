"""Meal plan endpoints: generation, derived views, sharing and saved plans."""

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from meal_planner.api.auth import current_session
from meal_planner.api.responses import error_response, failure_response
from meal_planner.api.schemas import GenerateRequest
from meal_planner.domain.errors import MealPlannerError, StoreError, ValidationError
from meal_planner.domain.meal_plans import (
    NutritionSummary,
    SavedMealPlan,
    ShoppingListCategory,
    dump_meal_plan,
)
from meal_planner.services.export import render_shopping_list_pdf
from meal_planner.services.generation import PLANNING_PERIODS
from meal_planner.services.nutrition import summarize_nutrition
from meal_planner.services.sessions import SessionContext
from meal_planner.services.sharing import decode_shared_plan, share_url
from meal_planner.services.shopping import build_shopping_list

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["meal-plans"])


@router.post("/meal-plan/generate", response_model=None)
async def generate_meal_plan(
    payload: GenerateRequest,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Generate a new dinner plan from the session preferences."""
    container: AppContainer = request.app.state.container
    try:
        with session.guard("generate"):
            plan = await container.generation_service.generate(
                session.preferences, PLANNING_PERIODS[payload.period]
            )
    except MealPlannerError as exc:
        logger.exception(
            "Meal plan generation failed", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    container.session_service.set_active_plan(session, plan)
    container.meal_plan_service.record_history(
        session.user.uid, plan, session.preferences
    )
    return {
        "message": session.succeed("Dein Essensplan ist fertig!"),
        "mealPlan": dump_meal_plan(plan),
    }


@router.get("/meal-plan")
async def active_meal_plan(
    session: SessionContext = Depends(current_session),
) -> dict[str, object]:
    """Return the active plan."""
    return {"mealPlan": dump_meal_plan(session.meal_plan)}


@router.get("/meal-plan/shopping-list")
async def shopping_list(
    session: SessionContext = Depends(current_session),
) -> dict[str, object]:
    """Return the categorized shopping list of the active plan."""
    return {
        "shoppingList": _serialize_shopping_list(
            build_shopping_list(session.meal_plan)
        )
    }


@router.get("/meal-plan/shopping-list.pdf", response_model=None)
async def shopping_list_pdf(
    session: SessionContext = Depends(current_session),
) -> Response:
    """Download the shopping list of the active plan as a PDF."""
    try:
        content = render_shopping_list_pdf(build_shopping_list(session.meal_plan))
    except Exception:
        logger.exception(
            "PDF export failed", extra={"user_id": str(session.user.uid)}
        )
        return error_response(
            session,
            "Fehler beim Erstellen der PDF",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    session.succeed("PDF wurde erfolgreich erstellt!")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="einkaufsliste.pdf"'},
    )


@router.get("/meal-plan/nutrition")
async def nutrition_summary(
    session: SessionContext = Depends(current_session),
) -> dict[str, object]:
    """Return the daily average macros of the active plan."""
    return {"nutrition": _serialize_nutrition(summarize_nutrition(session.meal_plan))}


@router.post("/meal-plan/share", response_model=None)
async def share_meal_plan(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object] | JSONResponse:
    """Return a link that carries the whole active plan."""
    container: AppContainer = request.app.state.container
    if not session.meal_plan:
        return error_response(
            session,
            "Kein Essensplan zum Teilen vorhanden",
            status.HTTP_400_BAD_REQUEST,
        )
    url = share_url(container.settings.public_base_url, session.meal_plan)
    return {"message": session.succeed("Link wurde erstellt!"), "url": url}


@router.get("/shared-plan/{token}", response_model=None)
async def shared_meal_plan(
    token: str, request: Request
) -> dict[str, object] | JSONResponse:
    """Decode a shared plan; no sign-in required."""
    container: AppContainer = request.app.state.container
    try:
        plan = decode_shared_plan(token)
    except ValidationError as exc:
        logger.warning("Rejected shared plan token", exc_info=exc)
        return failure_response(container.settings, None, exc)
    return {"mealPlan": dump_meal_plan(plan)}


@router.get("/meal-plans", response_model=None)
async def list_saved_plans(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object] | JSONResponse:
    """Reload and return the saved plans, newest first."""
    container: AppContainer = request.app.state.container
    try:
        container.session_service.refresh_saved_plans(session)
    except StoreError as exc:
        logger.exception(
            "Failed to list meal plans", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    return {"mealPlans": [_serialize_saved_plan(plan) for plan in session.saved_plans]}


@router.post("/meal-plans", response_model=None)
async def save_meal_plan(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object] | JSONResponse:
    """Save the active plan with the current preferences."""
    container: AppContainer = request.app.state.container
    if not session.meal_plan:
        return error_response(
            session,
            "Kein Essensplan zum Speichern vorhanden",
            status.HTTP_400_BAD_REQUEST,
        )
    try:
        with session.guard("save"):
            plan_id = container.meal_plan_service.save(
                session.user.uid, session.meal_plan, session.preferences
            )
            container.session_service.refresh_saved_plans(session)
    except MealPlannerError as exc:
        logger.exception(
            "Failed to save meal plan", extra={"user_id": str(session.user.uid)}
        )
        return failure_response(container.settings, session, exc)
    return {
        "message": session.succeed("Essensplan erfolgreich gespeichert!"),
        "id": str(plan_id),
        "mealPlans": [_serialize_saved_plan(plan) for plan in session.saved_plans],
    }


@router.delete("/meal-plans/{plan_id}", response_model=None)
async def delete_meal_plan(
    plan_id: UUID,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Delete a saved plan."""
    container: AppContainer = request.app.state.container
    try:
        container.meal_plan_service.delete(session.user.uid, plan_id)
        container.session_service.refresh_saved_plans(session)
    except StoreError as exc:
        logger.exception(
            "Failed to delete meal plan", extra={"plan_id": str(plan_id)}
        )
        return failure_response(container.settings, session, exc)
    return {
        "message": session.succeed("Essensplan gelöscht"),
        "mealPlans": [_serialize_saved_plan(plan) for plan in session.saved_plans],
    }


@router.post("/meal-plans/{plan_id}/load", response_model=None)
async def load_meal_plan(
    plan_id: UUID,
    request: Request,
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Make a saved plan and its preferences active."""
    container: AppContainer = request.app.state.container
    try:
        saved = container.meal_plan_service.get(session.user.uid, plan_id)
    except StoreError as exc:
        logger.exception("Failed to load meal plan", extra={"plan_id": str(plan_id)})
        return failure_response(container.settings, session, exc)
    if saved is None:
        return error_response(
            session, "Essensplan nicht gefunden", status.HTTP_404_NOT_FOUND
        )
    plan, preferences = container.meal_plan_service.load(saved)
    container.session_service.set_active_plan(session, plan)
    session.preferences = preferences
    return {
        "message": session.succeed(f"{saved.name} geladen"),
        "mealPlan": dump_meal_plan(plan),
        "preferences": preferences.to_document(),
    }


def _serialize_shopping_list(
    categories: list[ShoppingListCategory],
) -> list[dict[str, object]]:
    return [
        {
            "category": category.category,
            "items": [item.model_dump(mode="json") for item in category.items],
        }
        for category in categories
    ]


def _serialize_nutrition(summary: NutritionSummary) -> dict[str, int]:
    return {
        "totalCalories": summary.total_calories,
        "totalProtein": summary.total_protein,
        "totalCarbs": summary.total_carbs,
        "totalFat": summary.total_fat,
    }


def _serialize_saved_plan(plan: SavedMealPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "name": plan.name,
        "createdAt": plan.created_at.isoformat() if plan.created_at else None,
        "mealPlan": dump_meal_plan(plan.meal_plan),
        "preferences": plan.preferences,
    }
