"""Profile Schemas - the only user-editable profile field is display_name."""

from pydantic import BaseModel, ConfigDict, field_validator

from speechkarma.core.domain_types import DISPLAY_NAME_MAX_LENGTH


def check_display_name(v: str) -> str:
    trimmed = v.strip()
    if not trimmed:
        raise ValueError("Display name cannot be empty")
    if len(trimmed) > DISPLAY_NAME_MAX_LENGTH:
        raise ValueError(
            f"Display name cannot exceed {DISPLAY_NAME_MAX_LENGTH} characters",
        )
    return trimmed


class ProfileUpdate(BaseModel):
    """PATCH /api/profiles/me body."""
    model_config = ConfigDict(extra="forbid")

    display_name: str | None = None

    @field_validator("display_name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return check_display_name(v) if v is not None else v
