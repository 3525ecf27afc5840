"""Auth Schemas - sign-up and sign-in payloads forwarded to the hosted provider.

Invariants:
    - email is trimmed, then checked and normalised by EmailStr (email-validator)
    - password rules beyond non-empty are the provider's; its errors are mapped
      by core/auth_errors.py
"""

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from speechkarma.schemas.profile import check_display_name


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class SignUpRequest(SignInRequest):
    display_name: str | None = None

    @field_validator("display_name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return check_display_name(v) if v is not None else v
