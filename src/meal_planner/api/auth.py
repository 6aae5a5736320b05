"""Sign-in, sign-out and the per-request session dependency."""

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.responses import failure_response
from meal_planner.domain.errors import AuthError
from meal_planner.domain.models import AuthUser
from meal_planner.services.sessions import SessionContext

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the bearer token issued by the browser sign-in flow."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return authorization.removeprefix("Bearer ").strip()


async def current_user(
    request: Request, access_token: str = Depends(bearer_token)
) -> AuthUser:
    """Verify the access token with the auth provider."""
    container: AppContainer = request.app.state.container
    try:
        return container.auth_service.authenticate(access_token)
    except AuthError as exc:
        logger.warning("Rejected access token", exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message
        ) from exc


async def current_session(
    request: Request, user: AuthUser = Depends(current_user)
) -> SessionContext:
    """Return the user's session context, restoring it after a restart."""
    container: AppContainer = request.app.state.container
    return container.session_service.current(user)


@router.post("/auth/session")
async def sign_in(
    request: Request, user: AuthUser = Depends(current_user)
) -> dict[str, object]:
    """Open a session for a freshly signed-in user."""
    container: AppContainer = request.app.state.container
    session = container.session_service.open_session(user)
    label = user.display_name or user.email or str(user.uid)
    session.succeed(f"Angemeldet als {label}")
    return _session_payload(container, session)


@router.get("/auth/session")
async def session_state(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object]:
    """Return the signed-in user and the current status message."""
    container: AppContainer = request.app.state.container
    return _session_payload(container, session)


@router.delete("/auth/session", response_model=None)
async def sign_out(
    request: Request,
    access_token: str = Depends(bearer_token),
    session: SessionContext = Depends(current_session),
) -> dict[str, object] | JSONResponse:
    """Sign out at the provider and tear down the session."""
    container: AppContainer = request.app.state.container
    try:
        container.auth_service.sign_out(access_token)
    except AuthError as exc:
        logger.exception("Sign-out failed", extra={"user_id": str(session.user.uid)})
        return failure_response(container.settings, session, exc)
    container.session_service.close_session(session.user.uid)
    return {"message": "✅ Abgemeldet"}


@router.post("/onboarding/complete")
async def complete_onboarding(
    request: Request, session: SessionContext = Depends(current_session)
) -> dict[str, object]:
    """Remember that the user finished the first-visit tour."""
    container: AppContainer = request.app.state.container
    container.session_service.session_cache.mark_visited(session.user.uid)
    return {"isFirstVisit": False}


def _session_payload(
    container: "AppContainer", session: SessionContext
) -> dict[str, object]:
    user = session.user
    return {
        "user": {
            "uid": str(user.uid),
            "email": user.email,
            "displayName": user.display_name,
        },
        "message": session.status_message,
        "isFirstVisit": not container.session_service.session_cache.has_visited(
            user.uid
        ),
        "inFlight": sorted(session.in_flight),
        "preferences": session.preferences.to_document(),
        "hasMealPlan": bool(session.meal_plan),
    }
