"""Politician Service - directory search, detail with statement count, creation.

Invariants:
    - search is a case-insensitive substring match on first OR last name
    - statements_count counts live (non-deleted) statements only
    - creation requires an existing party (404 otherwise) and a unique
      (first_name, last_name, party_id)
"""

import logging
import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.core.domain_types import POLITICIAN_SORT_FIELDS
from speechkarma.core.errors import RequestValidationFailed, ResourceNotFoundError
from speechkarma.core.validation import (
    validate_pagination_params,
    validate_sort_field,
    validate_sort_order,
)
from speechkarma.models.party import Party
from speechkarma.models.politician import Politician
from speechkarma.models.statement import Statement
from speechkarma.schemas.politician import PoliticianCreate
from speechkarma.services.pagination import Page, paginate

logger = logging.getLogger(__name__)


class PoliticianService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_politicians(
        self,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
        party_id: uuid.UUID | None = None,
        sort: str | None = "last_name",
        order: str | None = "asc",
    ) -> Page[Politician]:
        params = validate_pagination_params(page, limit)
        column = getattr(
            Politician,
            validate_sort_field(sort, POLITICIAN_SORT_FIELDS, "last_name"),
        )
        direction = validate_sort_order(order)

        query = select(Politician)
        if search and search.strip():
            term = search.strip()
            query = query.where(or_(
                Politician.first_name.icontains(term, autoescape=True),
                Politician.last_name.icontains(term, autoescape=True),
            ))
        if party_id:
            query = query.where(Politician.party_id == party_id)
        query = query.order_by(
            column.asc() if direction == "asc" else column.desc(),
            Politician.first_name.asc(),
            Politician.id,
        )
        return await paginate(self.db, query, params)

    async def get_politician(self, politician_id: uuid.UUID) -> Politician:
        result = await self.db.execute(
            select(Politician)
            .where(Politician.id == politician_id)
            .execution_options(populate_existing=True),
        )
        politician = result.scalar_one_or_none()
        if politician is None:
            raise ResourceNotFoundError("Politician", politician_id)
        return politician

    async def count_statements(self, politician_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count(Statement.id)).where(
                Statement.politician_id == politician_id,
                Statement.deleted_at.is_(None),
            ),
        )
        return result.scalar_one()

    async def politician_exists(self, politician_id: uuid.UUID) -> bool:
        result = await self.db.execute(
            select(Politician.id).where(Politician.id == politician_id),
        )
        return result.first() is not None

    async def create_politician(self, body: PoliticianCreate) -> Politician:
        party_id = uuid.UUID(body.party_id)
        if await self.db.get(Party, party_id) is None:
            raise ResourceNotFoundError("Party", party_id)

        duplicate = await self.db.execute(
            select(Politician.id).where(
                Politician.first_name == body.first_name,
                Politician.last_name == body.last_name,
                Politician.party_id == party_id,
            ),
        )
        if duplicate.first() is not None:
            raise RequestValidationFailed(
                "This politician already exists in the selected party",
                field="last_name",
            )

        politician = Politician(
            first_name=body.first_name,
            last_name=body.last_name,
            party_id=party_id,
            biography=body.biography,
        )
        self.db.add(politician)
        await self.db.commit()
        logger.info(
            f"Politician created: {politician.first_name} {politician.last_name}",
            extra={"politician_id": politician.id},
        )
        return await self.get_politician(politician.id)
