"""Profile Routes - the caller's own profile and public profiles.

Invariants:
    - /me routes require authentication; the profile is provisioned on first use
    - Public profiles expose only id, display_name and created_at
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.api.dependencies import parse_resource_id, require_user
from speechkarma.api.presenters import present_profile, present_public_profile
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.infrastructure.database import get_db
from speechkarma.schemas.profile import ProfileUpdate
from speechkarma.services.profile_service import ProfileService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/me")
async def get_my_profile(
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await ProfileService(db).ensure_profile(user)
    return {"data": present_profile(profile, user.email)}


@router.patch("/me")
async def update_my_profile(
    body: ProfileUpdate,
    user: AuthenticatedUser = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    service = ProfileService(db)
    await service.ensure_profile(user)
    profile = await service.update_profile(user.id, body)
    return {"data": present_profile(profile, user.email)}


@router.get("/{profile_id}")
async def get_public_profile(
    profile_id: str, response: Response, db: AsyncSession = Depends(get_db),
):
    profile = await ProfileService(db).get_profile(
        parse_resource_id(profile_id, "profile"),
    )
    response.headers["Cache-Control"] = "public, max-age=300"
    return {"data": present_public_profile(profile)}
