"""Statement Service - feed, politician timeline, and grace-period mutations.

Invariants:
    - Every read filters deleted_at IS NULL
    - Mutations re-check ownership and the grace period server-side; the
      permission flags shown to clients are advisory only
    - A deleted statement refuses PATCH/DELETE with PERMISSION_DENIED (DELETED)
    - statement_timestamp never moves after created_at
    - A PATCH with no fields is a no-op: nothing is written, updated_at is kept

Design Decisions:
    - Soft delete only: deleted_at is set, the row is kept
    - Reads after commit use populate_existing so eager relationships and
      onupdate columns reflect the committed row
"""

import logging
import uuid

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.core.domain_types import (
    DEFAULT_GRACE_PERIOD_MINUTES,
    STATEMENT_SORT_FIELDS,
)
from speechkarma.core.errors import (
    PermissionDeniedError,
    RequestValidationFailed,
    ResourceNotFoundError,
)
from speechkarma.core.grace_period import denial_reason
from speechkarma.core.timestamps import as_utc, time_range_start, utc_now
from speechkarma.core.validation import (
    validate_pagination_params,
    validate_sort_field,
    validate_sort_order,
    validate_time_range,
)
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.models.statement import Statement
from speechkarma.schemas.statement import StatementCreate, StatementUpdate
from speechkarma.services.pagination import Page, paginate
from speechkarma.services.politician_service import PoliticianService
from speechkarma.services.profile_service import ProfileService
from speechkarma.services.summarize_statement import StatementSummarizer

logger = logging.getLogger(__name__)


def _ordered(query: Select, sort_by: str | None, order: str | None) -> Select:
    column = getattr(
        Statement,
        validate_sort_field(sort_by, STATEMENT_SORT_FIELDS, "created_at"),
    )
    direction = validate_sort_order(order)
    return query.order_by(
        column.asc() if direction == "asc" else column.desc(), Statement.id,
    )


class StatementService:
    def __init__(
        self,
        db: AsyncSession,
        grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES,
        summarizer: StatementSummarizer | None = None,
    ):
        self.db = db
        self.grace_period_minutes = grace_period_minutes
        self.summarizer = summarizer
        self.politicians = PoliticianService(db)

    # ─── Reads ───────────────────────────────────────────────────

    async def list_statements(
        self,
        page: int | None = None,
        limit: int | None = None,
        politician_id: uuid.UUID | None = None,
        sort_by: str | None = "created_at",
        order: str | None = "desc",
    ) -> Page[Statement]:
        params = validate_pagination_params(page, limit)
        query = select(Statement).where(Statement.deleted_at.is_(None))
        if politician_id:
            query = query.where(Statement.politician_id == politician_id)
        return await paginate(self.db, _ordered(query, sort_by, order), params)

    async def list_politician_statements(
        self,
        politician_id: uuid.UUID,
        page: int | None = None,
        limit: int | None = None,
        time_range: str | None = "all",
        sort_by: str | None = "created_at",
        order: str | None = "desc",
    ) -> Page[Statement]:
        if not await self.politicians.politician_exists(politician_id):
            raise ResourceNotFoundError("Politician", politician_id)

        params = validate_pagination_params(page, limit)
        query = select(Statement).where(
            Statement.politician_id == politician_id,
            Statement.deleted_at.is_(None),
        )
        start = time_range_start(validate_time_range(time_range))
        if start is not None:
            query = query.where(Statement.created_at >= start)
        return await paginate(self.db, _ordered(query, sort_by, order), params)

    async def get_statement(self, statement_id: uuid.UUID) -> Statement:
        statement = await self._fetch(statement_id)
        if statement is None or statement.deleted_at is not None:
            raise ResourceNotFoundError("Statement", statement_id)
        return statement

    async def _fetch(self, statement_id: uuid.UUID) -> Statement | None:
        result = await self.db.execute(
            select(Statement)
            .where(Statement.id == statement_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    # ─── Mutations ───────────────────────────────────────────────

    async def create_statement(
        self, body: StatementCreate, user: AuthenticatedUser,
    ) -> Statement:
        politician_id = uuid.UUID(body.politician_id)
        if not await self.politicians.politician_exists(politician_id):
            raise ResourceNotFoundError("Politician", politician_id)

        await ProfileService(self.db).ensure_profile(user)

        text = body.statement_text
        if self.summarizer is not None:
            text = await self.summarizer.enrich(text)

        statement = Statement(
            politician_id=politician_id,
            statement_text=text,
            statement_timestamp=body.statement_timestamp,
            created_by_user_id=user.id,
            created_at=utc_now(),
        )
        self.db.add(statement)
        await self.db.commit()
        logger.info(
            "Statement created",
            extra={
                "statement_id": statement.id,
                "user_id": user.id,
                "politician_id": politician_id,
            },
        )
        return await self.get_statement(statement.id)

    async def update_statement(
        self,
        statement_id: uuid.UUID,
        body: StatementUpdate,
        user: AuthenticatedUser,
    ) -> Statement:
        statement = await self._authorize_mutation(statement_id, user)
        if not body.model_fields_set:
            return statement

        if body.statement_timestamp is not None:
            if body.statement_timestamp > as_utc(statement.created_at):
                raise RequestValidationFailed(
                    "Statement timestamp cannot be after the statement was created",
                    field="statement_timestamp",
                )
            statement.statement_timestamp = body.statement_timestamp
        if body.statement_text is not None:
            statement.statement_text = body.statement_text
        statement.updated_at = utc_now()

        await self.db.commit()
        logger.info(
            "Statement updated",
            extra={"statement_id": statement_id, "user_id": user.id},
        )
        return await self.get_statement(statement_id)

    async def delete_statement(
        self, statement_id: uuid.UUID, user: AuthenticatedUser,
    ) -> Statement:
        """Soft-delete; returns the row with deleted_at set."""
        statement = await self._authorize_mutation(statement_id, user)
        statement.deleted_at = utc_now()
        await self.db.commit()
        await self.db.refresh(statement)
        logger.info(
            "Statement deleted",
            extra={"statement_id": statement_id, "user_id": user.id},
        )
        return statement

    async def _authorize_mutation(
        self, statement_id: uuid.UUID, user: AuthenticatedUser,
    ) -> Statement:
        statement = await self._fetch(statement_id)
        if statement is None:
            raise ResourceNotFoundError("Statement", statement_id)
        reason = denial_reason(
            owner_id=statement.created_by_user_id,
            acting_user_id=user.id,
            created_at=statement.created_at,
            deleted=statement.deleted_at is not None,
            grace_period_minutes=self.grace_period_minutes,
        )
        if reason is not None:
            logger.info(
                f"Statement mutation refused: {reason.value}",
                extra={"statement_id": statement_id, "user_id": user.id},
            )
            raise PermissionDeniedError(reason, self.grace_period_minutes)
        return statement
