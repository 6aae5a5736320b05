"""Supabase Auth adapter."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_planner.domain.models import AuthUser
from meal_planner.services.auth import AuthClient


@dataclass
class SupabaseAuthClient(AuthClient):
    """Verifies browser-issued access tokens with Supabase Auth."""

    client: Client

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning the access token."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        user = response.user
        metadata = user.user_metadata or {}
        return AuthUser(
            uid=UUID(user.id),
            email=user.email,
            display_name=metadata.get("full_name") or metadata.get("name"),
        )

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind the access token."""
        self.client.auth.admin.sign_out(access_token)
