"""Initial schema: parties, politicians, profiles, statements.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "parties",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("abbreviation", sa.Text, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("color_hex", sa.String(7), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "color_hex IS NULL OR color_hex ~ '^#[0-9A-Fa-f]{6}$'",
            name="ck_parties_color_hex_format",
        ),
        sa.CheckConstraint("length(trim(name)) > 0", name="ck_parties_name_not_blank"),
    )
    op.create_index("ix_parties_name", "parties", ["name"], unique=True)

    op.create_table(
        "politicians",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("first_name", sa.Text, nullable=False),
        sa.Column("last_name", sa.Text, nullable=False),
        sa.Column(
            "party_id", UUID(as_uuid=True),
            sa.ForeignKey("parties.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("biography", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("first_name", "last_name", "party_id", name="uq_politicians_name_party"),
    )
    op.create_index("ix_politicians_party_id", "politicians", ["party_id"])
    op.create_index(
        "idx_politicians_last_name_first_name", "politicians", ["last_name", "first_name"],
    )

    op.create_table(
        "profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("display_name", sa.Text, nullable=False),
        sa.Column("is_admin", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "length(trim(display_name)) BETWEEN 1 AND 100",
            name="ck_profiles_display_name_length",
        ),
    )
    op.create_index("ix_profiles_display_name", "profiles", ["display_name"])

    op.create_table(
        "statements",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column(
            "politician_id", UUID(as_uuid=True),
            sa.ForeignKey("politicians.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("statement_text", sa.Text, nullable=False),
        sa.Column("statement_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_by_user_id", UUID(as_uuid=True),
            sa.ForeignKey("profiles.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "statement_timestamp <= created_at",
            name="ck_statements_timestamp_not_after_created",
        ),
        sa.CheckConstraint(
            "length(trim(statement_text)) >= 10 AND length(statement_text) <= 5000",
            name="ck_statements_text_length",
        ),
    )
    op.create_index("idx_statements_recent_feed", "statements", ["created_at"])
    op.create_index(
        "idx_statements_politician_timeline", "statements", ["politician_id", "created_at"],
    )
    op.create_index(
        "idx_statements_politician_statement_time", "statements",
        ["politician_id", "statement_timestamp"],
    )
    op.create_index(
        "idx_statements_created_by_user", "statements", ["created_by_user_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_table("statements")
    op.drop_table("profiles")
    op.drop_table("politicians")
    op.drop_table("parties")
