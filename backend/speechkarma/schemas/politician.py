"""Politician Schemas - politician creation payload."""

from pydantic import BaseModel, field_validator

from speechkarma.core.domain_types import BIOGRAPHY_MAX_LENGTH, NAME_MAX_LENGTH
from speechkarma.core.validation import is_valid_string, is_valid_uuid


class PoliticianCreate(BaseModel):
    """POST /api/politicians body."""
    first_name: str
    last_name: str
    party_id: str
    biography: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def check_name(cls, v: str, info) -> str:
        label = info.field_name.replace("_", " ").capitalize()
        if not is_valid_string(v):
            raise ValueError(f"{label} is required")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"{label} cannot exceed {NAME_MAX_LENGTH} characters")
        return v.strip()

    @field_validator("party_id")
    @classmethod
    def check_party_id(cls, v: str) -> str:
        if not is_valid_uuid(v):
            raise ValueError("Valid party ID is required")
        return v

    @field_validator("biography")
    @classmethod
    def check_biography(cls, v: str | None) -> str | None:
        if not v:
            return None
        if len(v) > BIOGRAPHY_MAX_LENGTH:
            raise ValueError(
                f"Biography cannot exceed {BIOGRAPHY_MAX_LENGTH} characters",
            )
        return v
