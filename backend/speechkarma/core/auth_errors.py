"""Auth Error Mapping - provider error strings to user-facing messages.

Invariants:
    - Matching is case-insensitive substring search
    - Rules are evaluated in order; the first match wins
    - Unmatched non-empty input is returned unchanged; empty input gets a generic message

Design Decisions:
    - Explicit ordered list of (predicate, message) pairs: the provider's
      error strings are not a contract, so this is best-effort UX only
"""

from typing import Callable

GENERIC_AUTH_ERROR = "An unexpected error occurred. Please try again."


def _contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(needle in text for needle in needles)


def _weak_password(text: str) -> bool:
    return "password" in text and any(
        needle in text for needle in ("weak", "short", "at least")
    )


AUTH_ERROR_RULES: list[tuple[Callable[[str], bool], str]] = [
    (
        _contains_any("invalid login credentials", "invalid email or password"),
        "Invalid email or password. Please try again.",
    ),
    (
        _contains_any(
            "user already registered",
            "email already exists",
            "already been registered",
        ),
        "An account with this email already exists. Please sign in instead.",
    ),
    (_weak_password, "Password must be at least 6 characters long."),
    (_contains_any("invalid email"), "Please enter a valid email address."),
    (
        _contains_any("rate limit", "too many requests"),
        "Too many attempts. Please wait a moment and try again.",
    ),
    (
        _contains_any("email not confirmed", "confirm your email"),
        "Please check your email and confirm your account before signing in.",
    ),
    (
        _contains_any("network", "fetch", "connection"),
        "Unable to connect. Please check your internet connection and try again.",
    ),
]


def map_auth_error(raw_message: str | None) -> str:
    """Translate a raw auth provider error into a message fit for end users."""
    lowered = (raw_message or "").lower()
    for matches, message in AUTH_ERROR_RULES:
        if matches(lowered):
            return message
    if raw_message:
        return raw_message
    return GENERIC_AUTH_ERROR
