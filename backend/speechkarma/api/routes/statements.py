"""Statement Routes - public feed and detail, authenticated create/edit/delete.

Invariants:
    - Responses are never cached (Cache-Control: no-cache, no-store, must-revalidate)
    - PATCH and DELETE are re-authorized server-side: owner only, within the
      grace period, never on a deleted statement (403 PERMISSION_DENIED)
    - DELETE is a soft delete and returns {"id", "deleted_at"}
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.api.dependencies import (
    get_grace_period_minutes,
    get_optional_user,
    get_summarizer,
    parse_resource_id,
    require_user,
)
from speechkarma.api.presenters import present_deleted_statement, present_statement
from speechkarma.core.domain_types import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SortOrder,
    StatementSortField,
)
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.infrastructure.database import get_db
from speechkarma.schemas.statement import StatementCreate, StatementUpdate
from speechkarma.services.statement_service import StatementService
from speechkarma.services.summarize_statement import StatementSummarizer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/statements", tags=["statements"])

NO_CACHE = "no-cache, no-store, must-revalidate"


@router.get("")
async def list_statements(
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    politician_id: str | None = Query(None),
    sort_by: StatementSortField = Query("created_at"),
    order: SortOrder = Query("desc"),
    db: AsyncSession = Depends(get_db),
):
    politician_uuid = (
        parse_resource_id(politician_id, "politician") if politician_id else None
    )
    result = await StatementService(db).list_statements(
        page, limit, politician_uuid, sort_by, order,
    )
    response.headers["Cache-Control"] = NO_CACHE
    return {
        "data": [present_statement(s) for s in result.items],
        "pagination": result.pagination(),
    }


@router.get("/{statement_id}")
async def get_statement(
    statement_id: str,
    response: Response,
    user: AuthenticatedUser | None = Depends(get_optional_user),
    grace_period_minutes: int = Depends(get_grace_period_minutes),
    db: AsyncSession = Depends(get_db),
):
    statement = await StatementService(db, grace_period_minutes).get_statement(
        parse_resource_id(statement_id, "statement"),
    )
    response.headers["Cache-Control"] = NO_CACHE
    return {"data": present_statement(statement, user, grace_period_minutes)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_statement(
    body: StatementCreate,
    user: AuthenticatedUser = Depends(require_user),
    grace_period_minutes: int = Depends(get_grace_period_minutes),
    summarizer: StatementSummarizer = Depends(get_summarizer),
    db: AsyncSession = Depends(get_db),
):
    service = StatementService(db, grace_period_minutes, summarizer)
    statement = await service.create_statement(body, user)
    return {"data": present_statement(statement, user, grace_period_minutes)}


@router.patch("/{statement_id}")
async def update_statement(
    statement_id: str,
    body: StatementUpdate,
    user: AuthenticatedUser = Depends(require_user),
    grace_period_minutes: int = Depends(get_grace_period_minutes),
    db: AsyncSession = Depends(get_db),
):
    statement = await StatementService(db, grace_period_minutes).update_statement(
        parse_resource_id(statement_id, "statement"), body, user,
    )
    return {"data": present_statement(statement, user, grace_period_minutes)}


@router.delete("/{statement_id}")
async def delete_statement(
    statement_id: str,
    user: AuthenticatedUser = Depends(require_user),
    grace_period_minutes: int = Depends(get_grace_period_minutes),
    db: AsyncSession = Depends(get_db),
):
    statement = await StatementService(db, grace_period_minutes).delete_statement(
        parse_resource_id(statement_id, "statement"), user,
    )
    return {"data": present_deleted_statement(statement)}
