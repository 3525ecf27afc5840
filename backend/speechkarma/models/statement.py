"""Statement ORM - a politician's statement as submitted by a user.

Invariants:
    - statement_timestamp <= created_at (check constraint)
    - deleted_at IS NULL for live rows; reads always filter on it
    - politician_id never changes after insert
    - politician (with party) and created_by are eagerly loaded for response shaping

Design Decisions:
    - Soft delete via deleted_at: the row stays for audit, queries hide it
    - Indexes mirror the three read paths: recent feed, politician timeline by
      created_at, politician timeline by statement_timestamp
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from speechkarma.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Statement(Base):
    __tablename__ = "statements"
    __table_args__ = (
        CheckConstraint(
            "statement_timestamp <= created_at",
            name="ck_statements_timestamp_not_after_created",
        ),
        CheckConstraint(
            "length(trim(statement_text)) >= 10 AND length(statement_text) <= 5000",
            name="ck_statements_text_length",
        ),
        Index("idx_statements_recent_feed", "created_at"),
        Index("idx_statements_politician_timeline", "politician_id", "created_at"),
        Index(
            "idx_statements_politician_statement_time",
            "politician_id", "statement_timestamp",
        ),
        Index("idx_statements_created_by_user", "created_by_user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    politician_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("politicians.id", ondelete="RESTRICT"),
        nullable=False,
    )
    statement_text: Mapped[str] = mapped_column(Text, nullable=False)
    statement_timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    created_by_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("profiles.id", ondelete="RESTRICT"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    politician: Mapped["Politician"] = relationship("Politician", lazy="selectin")
    created_by: Mapped["Profile"] = relationship("Profile", lazy="selectin")
