"""Authentication against the external auth provider."""

from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.errors import AuthError
from meal_planner.domain.models import AuthUser


class AuthClient(Protocol):
    """Interface for verifying and revoking access tokens."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning the token, or None when it is invalid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the token's session at the provider."""


@dataclass
class AuthService:
    """Service translating provider failures into AuthError."""

    client: AuthClient

    def authenticate(self, access_token: str) -> AuthUser:
        """Return the verified user for an access token."""
        try:
            user = self.client.get_user(access_token)
        except Exception as exc:
            raise AuthError("Anmeldefehler. Bitte versuche es erneut.") from exc
        if user is None:
            raise AuthError("Bitte melde dich an.")
        return user

    def sign_out(self, access_token: str) -> None:
        """Sign the user out at the provider."""
        try:
            self.client.sign_out(access_token)
        except Exception as exc:
            raise AuthError("Abmelden fehlgeschlagen. Bitte versuche es erneut.") from exc
