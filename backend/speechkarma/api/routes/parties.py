"""Party Routes - public listing and detail, authenticated creation.

Invariants:
    - GET /api/parties returns {"data": [...], "count": n}, cacheable for 5 minutes
    - Unknown sort/order values are rejected with 400 before reaching the service
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.api.dependencies import parse_resource_id, require_user
from speechkarma.api.presenters import present_party
from speechkarma.core.domain_types import PartySortField, SortOrder
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.infrastructure.database import get_db
from speechkarma.schemas.party import PartyCreate
from speechkarma.services.party_service import PartyService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/parties", tags=["parties"])

PARTIES_CACHE_CONTROL = "public, max-age=300"


@router.get("")
async def list_parties(
    response: Response,
    sort: PartySortField = Query("name"),
    order: SortOrder = Query("asc"),
    db: AsyncSession = Depends(get_db),
):
    parties = await PartyService(db).list_parties(sort, order)
    response.headers["Cache-Control"] = PARTIES_CACHE_CONTROL
    return {"data": [present_party(p) for p in parties], "count": len(parties)}


@router.get("/{party_id}")
async def get_party(
    party_id: str, response: Response, db: AsyncSession = Depends(get_db),
):
    party = await PartyService(db).get_party(parse_resource_id(party_id, "party"))
    response.headers["Cache-Control"] = PARTIES_CACHE_CONTROL
    return {"data": present_party(party)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_party(
    body: PartyCreate,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    party = await PartyService(db).create_party(body)
    logger.info(f"Party {party.id} created", extra={"user_id": user.id})
    return {"data": present_party(party)}
