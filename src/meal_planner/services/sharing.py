"""Stateless share links: the whole plan travels inside the URL."""

import base64
import json

from meal_planner.domain.errors import ValidationError
from meal_planner.domain.meal_plans import MEAL_PLAN_ADAPTER, Day

SHARED_DINNER_FIELDS = {
    "name",
    "description",
    "ingredients",
    "instructions",
    "preparation_time",
    "cuisine",
}


def encode_shared_plan(plan: list[Day]) -> str:
    """Encode the date and dinner of each day as an unpadded base64url token."""
    shareable = [
        {
            "date": day.date,
            "dinner": (
                day.dinner.model_dump(
                    mode="json", by_alias=True, include=SHARED_DINNER_FIELDS
                )
                if day.dinner
                else None
            ),
        }
        for day in plan
    ]
    payload = json.dumps(shareable, separators=(",", ":"), ensure_ascii=False)
    encoded = base64.urlsafe_b64encode(payload.encode("utf-8"))
    return encoded.decode("ascii").rstrip("=")


def decode_shared_plan(token: str) -> list[Day]:
    """Decode a share token back into a meal plan."""
    padded = token + "=" * (-len(token) % 4)
    try:
        payload = base64.urlsafe_b64decode(padded.encode("ascii"))
        return MEAL_PLAN_ADAPTER.validate_json(payload)
    except ValueError as exc:
        raise ValidationError("Der geteilte Essensplan ist ungültig.") from exc


def share_url(base_url: str, plan: list[Day]) -> str:
    """Return the public link for a plan."""
    return f"{base_url.rstrip('/')}/shared-plan/{encode_shared_plan(plan)}"
