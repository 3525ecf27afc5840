"""Profile Service - own profile, public profile, and provisioning at sign-up.

Invariants:
    - A profile's id is the auth provider user id
    - ensure_profile is idempotent: an existing profile is returned unchanged
    - Provisioned display_name: explicit value, else provider metadata, else the
      email local part, else "user"
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.core.domain_types import DISPLAY_NAME_MAX_LENGTH
from speechkarma.core.errors import ResourceNotFoundError
from speechkarma.infrastructure.auth_provider import AuthenticatedUser
from speechkarma.models.profile import Profile
from speechkarma.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)


def default_display_name(
    user: AuthenticatedUser, display_name: str | None = None,
) -> str:
    candidates = (
        display_name,
        user.metadata.get("display_name"),
        (user.email or "").split("@")[0],
    )
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()[:DISPLAY_NAME_MAX_LENGTH]
    return "user"


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, user_id: uuid.UUID) -> Profile:
        profile = await self.db.get(Profile, user_id)
        if profile is None:
            raise ResourceNotFoundError("Profile", user_id)
        return profile

    async def update_profile(
        self, user_id: uuid.UUID, body: ProfileUpdate,
    ) -> Profile:
        profile = await self.get_profile(user_id)
        if body.display_name is None:
            return profile
        profile.display_name = body.display_name
        await self.db.commit()
        await self.db.refresh(profile)
        logger.info("Profile updated", extra={"user_id": user_id})
        return profile

    async def ensure_profile(
        self, user: AuthenticatedUser, display_name: str | None = None,
    ) -> Profile:
        profile = await self.db.get(Profile, user.id)
        if profile is not None:
            return profile
        profile = Profile(
            id=user.id, display_name=default_display_name(user, display_name),
        )
        self.db.add(profile)
        await self.db.commit()
        await self.db.refresh(profile)
        logger.info("Profile provisioned", extra={"user_id": user.id})
        return profile
