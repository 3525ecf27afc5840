"""Party Schemas - party creation payload.

Invariants:
    - name: non-blank, at most 100 characters, stored trimmed
    - color_hex: #RRGGBB or null
    - blank optional strings are stored as null
"""

from pydantic import BaseModel, Field, field_validator

from speechkarma.core.domain_types import NAME_MAX_LENGTH
from speechkarma.core.validation import is_valid_string


class PartyCreate(BaseModel):
    """POST /api/parties body."""
    name: str
    abbreviation: str | None = Field(None, max_length=20)
    description: str | None = Field(None, max_length=2000)
    color_hex: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not is_valid_string(v, NAME_MAX_LENGTH):
            raise ValueError(
                f"Party name is required and cannot exceed {NAME_MAX_LENGTH} characters",
            )
        return v.strip()

    @field_validator("abbreviation", "description", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
