"""Statement Schemas - create/update payloads with text and timestamp rules.

Invariants:
    - statement_text: at least 10 characters after trimming, at most 5000 raw
    - statement_timestamp: parsed to aware UTC, never in the future
    - StatementUpdate rejects unknown fields, so politician_id cannot be changed,
      and explicit nulls, so a field can be omitted but never cleared
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    AfterValidator, BaseModel, ConfigDict, ValidationInfo, field_validator,
)

from speechkarma.core.domain_types import (
    STATEMENT_TEXT_MAX_LENGTH,
    STATEMENT_TEXT_MIN_LENGTH,
)
from speechkarma.core.timestamps import as_utc, utc_now
from speechkarma.core.validation import is_valid_uuid


def check_statement_text(v: str) -> str:
    if len(v.strip()) < STATEMENT_TEXT_MIN_LENGTH:
        raise ValueError(
            f"Statement text must be at least {STATEMENT_TEXT_MIN_LENGTH} characters",
        )
    if len(v) > STATEMENT_TEXT_MAX_LENGTH:
        raise ValueError(
            f"Statement text cannot exceed {STATEMENT_TEXT_MAX_LENGTH} characters",
        )
    return v


def check_statement_timestamp(v: datetime) -> datetime:
    v = as_utc(v)
    if v > utc_now():
        raise ValueError("Statement timestamp cannot be in the future")
    return v


UPDATE_NULL_MESSAGES = {
    "statement_text": "Statement text must be a string",
    "statement_timestamp": "Statement timestamp must be a valid ISO 8601 date",
}

StatementText = Annotated[str, AfterValidator(check_statement_text)]
StatementTimestamp = Annotated[datetime, AfterValidator(check_statement_timestamp)]


class StatementCreate(BaseModel):
    """POST /api/statements body."""
    politician_id: str
    statement_text: StatementText
    statement_timestamp: StatementTimestamp

    @field_validator("politician_id")
    @classmethod
    def check_politician_id(cls, v: str) -> str:
        if not is_valid_uuid(v):
            raise ValueError("Politician ID is required and must be a valid UUID")
        return v


class StatementUpdate(BaseModel):
    """PATCH /api/statements/{id} body. Omitted fields are left untouched;
    an explicit null is rejected.
    """
    model_config = ConfigDict(extra="forbid")

    statement_text: StatementText | None = None
    statement_timestamp: StatementTimestamp | None = None

    @field_validator("statement_text", "statement_timestamp", mode="before")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError(UPDATE_NULL_MESSAGES[info.field_name])
        return v
