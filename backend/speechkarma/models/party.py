"""Party ORM - political parties referenced by politicians.

Invariants:
    - name is unique
    - name is not blank
    - color_hex, when present, matches #RRGGBB (check constraint, PostgreSQL only:
      SQLite has no regex operator)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from speechkarma.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Party(Base):
    __tablename__ = "parties"
    __table_args__ = (
        CheckConstraint(
            "color_hex IS NULL OR color_hex ~ '^#[0-9A-Fa-f]{6}$'",
            name="ck_parties_color_hex_format",
        ).ddl_if(dialect="postgresql"),
        CheckConstraint("length(trim(name)) > 0", name="ck_parties_name_not_blank"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True, index=True)
    abbreviation: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color_hex: Mapped[str | None] = mapped_column(String(7), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
