"""Politician Routes - directory, detail, creation and statement timeline.

Invariants:
    - Directory is paginated: {"data": [...], "pagination": {...}}, cacheable 60s
    - Detail embeds the full party and the count of live statements
    - Timeline items carry can_edit/can_delete for the (optional) caller
    - 404 for an unknown politician, including on the timeline
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.api.dependencies import (
    get_grace_period_minutes,
    get_optional_user,
    parse_resource_id,
    require_user,
)
from speechkarma.api.presenters import (
    present_politician,
    present_politician_detail,
    present_statement,
)
from speechkarma.core.domain_types import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PoliticianSortField,
    SortOrder,
    StatementSortField,
    TimeRange,
)
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.infrastructure.database import get_db
from speechkarma.schemas.politician import PoliticianCreate
from speechkarma.services.politician_service import PoliticianService
from speechkarma.services.statement_service import StatementService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/politicians", tags=["politicians"])

POLITICIANS_CACHE_CONTROL = "public, max-age=60"


@router.get("")
async def list_politicians(
    response: Response,
    search: str | None = Query(None),
    party_id: str | None = Query(None),
    sort: PoliticianSortField = Query("last_name"),
    order: SortOrder = Query("asc"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
):
    party_uuid = parse_resource_id(party_id, "party") if party_id else None
    result = await PoliticianService(db).list_politicians(
        page, limit, search, party_uuid, sort, order,
    )
    response.headers["Cache-Control"] = POLITICIANS_CACHE_CONTROL
    return {
        "data": [present_politician(p) for p in result.items],
        "pagination": result.pagination(),
    }


@router.get("/{politician_id}")
async def get_politician(
    politician_id: str, response: Response, db: AsyncSession = Depends(get_db),
):
    service = PoliticianService(db)
    politician = await service.get_politician(
        parse_resource_id(politician_id, "politician"),
    )
    count = await service.count_statements(politician.id)
    response.headers["Cache-Control"] = POLITICIANS_CACHE_CONTROL
    return {"data": present_politician_detail(politician, count)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_politician(
    body: PoliticianCreate,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    politician = await PoliticianService(db).create_politician(body)
    logger.info(
        "Politician created via API",
        extra={"politician_id": politician.id, "user_id": user.id},
    )
    return {"data": present_politician(politician)}


@router.get("/{politician_id}/statements")
async def list_politician_statements(
    response: Response,
    politician_id: str,
    time_range: TimeRange = Query("all"),
    sort_by: StatementSortField = Query("created_at"),
    order: SortOrder = Query("desc"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: AuthenticatedUser | None = Depends(get_optional_user),
    grace_period_minutes: int = Depends(get_grace_period_minutes),
    db: AsyncSession = Depends(get_db),
):
    service = StatementService(db, grace_period_minutes)
    result = await service.list_politician_statements(
        parse_resource_id(politician_id, "politician"),
        page, limit, time_range, sort_by, order,
    )
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    return {
        "data": [
            present_statement(s, user, grace_period_minutes)
            for s in result.items
        ],
        "pagination": result.pagination(),
    }
