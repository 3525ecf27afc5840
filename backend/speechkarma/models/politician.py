"""Politician ORM - one current party affiliation per politician.

Invariants:
    - (first_name, last_name, party_id) is unique
    - Deleting a party that still has politicians is refused (ON DELETE RESTRICT)
    - party is always eagerly loaded (lazy="selectin"): responses embed it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from speechkarma.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Politician(Base):
    __tablename__ = "politicians"
    __table_args__ = (
        UniqueConstraint(
            "first_name", "last_name", "party_id",
            name="uq_politicians_name_party",
        ),
        Index("idx_politicians_last_name_first_name", "last_name", "first_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    party_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("parties.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    party: Mapped["Party"] = relationship("Party", lazy="selectin")
