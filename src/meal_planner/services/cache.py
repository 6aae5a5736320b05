"""Best-effort per-user side cache for transient client state."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

import pydantic

from meal_planner.domain.meal_plans import MEAL_PLAN_ADAPTER, Day

logger = logging.getLogger(__name__)


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def delete(self, key: str) -> None:
        """Drop a cached value."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache with expiry."""

    _entries: dict[str, _CacheEntry]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)

    def delete(self, key: str) -> None:
        """Drop a cached value if present."""
        self._entries.pop(key, None)


@dataclass
class SessionCache:
    """Active plan and first-visit flag per user.

    Never a source of truth: missing or corrupt values fall back to an empty
    plan and an unvisited user.
    """

    cache: Cache
    ttl_seconds: int

    def get_active_plan(self, user_id: UUID) -> list[Day]:
        """Return the cached active plan, discarding corrupt entries."""
        key = _active_plan_key(user_id)
        raw = self.cache.get(key)
        if raw is None:
            return []
        try:
            return MEAL_PLAN_ADAPTER.validate_json(raw)  # type: ignore[arg-type]
        except (pydantic.ValidationError, TypeError):
            logger.warning(
                "Discarding corrupt cached meal plan", extra={"user_id": str(user_id)}
            )
            self.cache.delete(key)
            return []

    def set_active_plan(self, user_id: UUID, plan: list[Day]) -> None:
        """Cache the active plan; an empty plan leaves the cache untouched."""
        if not plan:
            return
        serialized = MEAL_PLAN_ADAPTER.dump_json(plan, by_alias=True).decode("utf-8")
        self.cache.set(_active_plan_key(user_id), serialized, self.ttl_seconds)

    def has_visited(self, user_id: UUID) -> bool:
        """Return True once onboarding was completed."""
        return self.cache.get(_visited_key(user_id)) is True

    def mark_visited(self, user_id: UUID) -> None:
        """Remember that the user completed onboarding."""
        self.cache.set(_visited_key(user_id), True, self.ttl_seconds)


def _active_plan_key(user_id: UUID) -> str:
    return f"active-plan:{user_id}"


def _visited_key(user_id: UUID) -> str:
    return f"visited:{user_id}"
