"""Error taxonomy surfaced to users."""


class MealPlannerError(Exception):
    """Base error carrying a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthError(MealPlannerError):
    """Sign-in, token verification or sign-out failed."""


class StoreError(MealPlannerError):
    """A persistence read or write failed."""


class GenerationError(MealPlannerError):
    """The text generation service failed or was rate limited."""


class ParseError(GenerationError):
    """The generation service returned malformed output."""


class ValidationError(MealPlannerError):
    """Client-held data (shared links, cached plans) could not be decoded."""


class ActionInProgressError(MealPlannerError):
    """The same action is already running for this session."""
