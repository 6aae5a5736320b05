"""Domain models for authenticated users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """Represents a user verified by the auth provider."""

    uid: UUID
    email: str | None
    display_name: str | None
