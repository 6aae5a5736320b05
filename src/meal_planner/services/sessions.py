"""Per-user session context and its lifecycle."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import UUID

from meal_planner.domain.errors import ActionInProgressError, StoreError
from meal_planner.domain.meal_plans import Day, SavedMealPlan
from meal_planner.domain.models import AuthUser
from meal_planner.domain.pantry import PantryItem
from meal_planner.domain.preferences import UserPreferences, default_preferences
from meal_planner.domain.reminders import MealReminder
from meal_planner.services.cache import SessionCache
from meal_planner.services.meal_plans import MealPlanService
from meal_planner.services.pantry import PantryService
from meal_planner.services.preferences import PreferencesService
from meal_planner.services.reminders import ReminderService

logger = logging.getLogger(__name__)

SUCCESS_PREFIX = "✅"
FAILURE_PREFIX = "❌"


@dataclass
class SessionContext:
    """State of one signed-in user, written only by that user's actions."""

    user: AuthUser
    preferences: UserPreferences = field(default_factory=default_preferences)
    meal_plan: list[Day] = field(default_factory=list)
    saved_plans: list[SavedMealPlan] = field(default_factory=list)
    pantry: list[PantryItem] = field(default_factory=list)
    reminders: list[MealReminder] = field(default_factory=list)
    status_message: str | None = None
    in_flight: set[str] = field(default_factory=set)

    @contextmanager
    def guard(self, action: str) -> Iterator[None]:
        """Admit one running operation per action; release even on failure."""
        if action in self.in_flight:
            raise ActionInProgressError(
                "Diese Aktion läuft bereits. Bitte warte einen Moment."
            )
        self.in_flight.add(action)
        try:
            yield
        finally:
            self.in_flight.discard(action)

    def succeed(self, text: str) -> str:
        """Set and return a success status message."""
        self.status_message = f"{SUCCESS_PREFIX} {text}"
        return self.status_message

    def fail(self, text: str) -> str:
        """Set and return an error status message."""
        self.status_message = f"{FAILURE_PREFIX} {text}"
        return self.status_message


@dataclass
class SessionService:
    """Opens, restores and tears down session contexts."""

    preferences_service: PreferencesService
    meal_plan_service: MealPlanService
    pantry_service: PantryService
    reminder_service: ReminderService
    session_cache: SessionCache
    sessions: dict[UUID, SessionContext] = field(default_factory=dict)

    def open_session(self, user: AuthUser) -> SessionContext:
        """Load the user's data into their context, creating it when none is open.

        An open context is refreshed in place so actions already in flight
        stay guarded.
        """
        session = self.sessions.get(user.uid)
        if session is None:
            session = SessionContext(user=user)
            self.sessions[user.uid] = session
        self._restore(session)
        logger.info("Opened session", extra={"user_id": str(user.uid)})
        return session

    def current(self, user: AuthUser) -> SessionContext:
        """Return the user's context, restoring it when none is open."""
        session = self.sessions.get(user.uid)
        if session is None:
            return self.open_session(user)
        return session

    def close_session(self, user_id: UUID) -> None:
        """Drop the user's context."""
        self.sessions.pop(user_id, None)

    def set_active_plan(self, session: SessionContext, plan: list[Day]) -> None:
        """Replace the active plan and mirror it into the side cache."""
        session.meal_plan = plan
        self.session_cache.set_active_plan(session.user.uid, plan)

    def refresh_saved_plans(self, session: SessionContext) -> None:
        """Reload saved plans; the list only changes when the reload succeeds."""
        session.saved_plans = self.meal_plan_service.list_plans(session.user.uid)

    def _restore(self, session: SessionContext) -> None:
        user_id = session.user.uid
        extra = {"user_id": str(user_id)}
        try:
            session.preferences = self.preferences_service.load(user_id)
        except StoreError:
            logger.exception("Failed to load preferences", extra=extra)
        try:
            self.refresh_saved_plans(session)
        except StoreError:
            logger.exception("Failed to load saved meal plans", extra=extra)
        try:
            session.pantry = self.pantry_service.load(user_id)
        except StoreError:
            logger.exception("Failed to load pantry", extra=extra)
        try:
            session.reminders = self.reminder_service.list_reminders(user_id)
        except StoreError:
            logger.exception("Failed to load reminders", extra=extra)
        cached_plan = self.session_cache.get_active_plan(user_id)
        if cached_plan:
            session.meal_plan = cached_plan
