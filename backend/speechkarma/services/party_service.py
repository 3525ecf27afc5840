"""Party Service - list, fetch and create parties."""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.core.domain_types import PARTY_SORT_FIELDS
from speechkarma.core.errors import RequestValidationFailed, ResourceNotFoundError
from speechkarma.core.validation import validate_sort_field, validate_sort_order
from speechkarma.models.party import Party
from speechkarma.schemas.party import PartyCreate

logger = logging.getLogger(__name__)


class PartyService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_parties(
        self, sort: str | None = "name", order: str | None = "asc",
    ) -> list[Party]:
        column = getattr(Party, validate_sort_field(sort, PARTY_SORT_FIELDS, "name"))
        direction = validate_sort_order(order)
        query = select(Party).order_by(
            column.asc() if direction == "asc" else column.desc(), Party.id,
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_party(self, party_id: uuid.UUID) -> Party:
        party = await self.db.get(Party, party_id)
        if party is None:
            raise ResourceNotFoundError("Party", party_id)
        return party

    async def create_party(self, body: PartyCreate) -> Party:
        existing = await self.db.execute(
            select(Party.id).where(func.lower(Party.name) == body.name.lower()),
        )
        if existing.first() is not None:
            raise RequestValidationFailed(
                "A party with this name already exists", field="name",
            )
        party = Party(
            name=body.name,
            abbreviation=body.abbreviation,
            description=body.description,
            color_hex=body.color_hex.upper() if body.color_hex else None,
        )
        self.db.add(party)
        await self.db.commit()
        await self.db.refresh(party)
        logger.info(f"Party created: {party.name}")
        return party
