"""Helpers shared by the persistence-backed services."""

from collections.abc import Iterator
from contextlib import contextmanager

from meal_planner.domain.errors import StoreError


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Re-raise any repository failure as a StoreError with a user message."""
    try:
        yield
    except StoreError:
        raise
    except Exception as exc:
        raise StoreError(message) from exc
