"""Tests for session contexts."""

import pytest

from meal_planner.domain.errors import ActionInProgressError, GenerationError
from meal_planner.domain.preferences import default_preferences
from meal_planner.services.sessions import SessionContext
from tests.conftest import make_day


def test_guard_rejects_duplicate_action(user) -> None:
    session = SessionContext(user=user)

    with session.guard("generate"):
        assert session.in_flight == {"generate"}
        with pytest.raises(ActionInProgressError):
            with session.guard("generate"):
                pass
        with session.guard("save"):
            assert session.in_flight == {"generate", "save"}

    assert session.in_flight == set()


def test_guard_releases_on_failure(user) -> None:
    session = SessionContext(user=user)

    with pytest.raises(GenerationError):
        with session.guard("generate"):
            raise GenerationError("kaputt")

    assert session.in_flight == set()


def test_status_messages(user) -> None:
    session = SessionContext(user=user)

    assert session.succeed("Gespeichert") == "✅ Gespeichert"
    assert session.fail("Fehler") == "❌ Fehler"
    assert session.status_message == "❌ Fehler"


def test_open_session_restores_user_data(
    user, session_service, session_cache, preferences_repository, pantry_repository
) -> None:
    preferences_repository.documents[user.uid] = {"cuisine": ["Griechisch"]}
    pantry_repository.pantries[user.uid] = [
        {"name": "Feta", "amount": 200, "unit": "g"}
    ]
    session_cache.set_active_plan(user.uid, [make_day("2024-03-04")])

    session = session_service.open_session(user)

    assert session.preferences.cuisine == ["Griechisch"]
    assert [item.name for item in session.pantry] == ["Feta"]
    assert len(session.meal_plan) == 1
    assert session_service.current(user) is session


def test_reopening_session_keeps_in_flight_actions(
    user, session_service, pantry_repository
) -> None:
    first = session_service.open_session(user)
    plan = [make_day("2024-03-04", name="Paella")]
    session_service.set_active_plan(first, plan)
    pantry_repository.pantries[user.uid] = [
        {"name": "Reis", "amount": 1, "unit": "kg"}
    ]

    with first.guard("generate"):
        second = session_service.open_session(user)

        assert second is first
        assert [item.name for item in second.pantry] == ["Reis"]
        with pytest.raises(ActionInProgressError):
            with second.guard("generate"):
                pass

    assert second.in_flight == set()
    assert second.meal_plan == plan


def test_open_session_survives_store_failures(
    user, session_service, preferences_repository, meal_plan_repository
) -> None:
    preferences_repository.fail = True
    meal_plan_repository.fail = True

    session = session_service.open_session(user)

    assert session.preferences == default_preferences()
    assert session.saved_plans == []


def test_current_restores_missing_session(user, session_service) -> None:
    session = session_service.current(user)

    assert session_service.sessions[user.uid] is session
    session_service.close_session(user.uid)
    assert user.uid not in session_service.sessions


def test_set_active_plan_mirrors_into_cache(
    user, session_service, session_cache
) -> None:
    session = session_service.open_session(user)
    plan = [make_day("2024-03-04", name="Paella")]

    session_service.set_active_plan(session, plan)

    assert session.meal_plan == plan
    assert session_cache.get_active_plan(user.uid) == plan
