"""Offset Pagination - count + page query for any filtered SELECT.

Invariants:
    - total counts the filtered rows ignoring ORDER BY / LIMIT
    - total_pages = ceil(total / limit); 0 when there are no rows
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from speechkarma.core.validation import PaginationParams

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T]
    params: PaginationParams
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.params.limit)

    def pagination(self) -> dict[str, Any]:
        return {
            "page": self.params.page,
            "limit": self.params.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


async def paginate(
    db: AsyncSession, query: Select, params: PaginationParams,
) -> Page:
    count_query = select(func.count()).select_from(
        query.order_by(None).subquery(),
    )
    total = (await db.execute(count_query)).scalar_one()
    result = await db.execute(query.limit(params.limit).offset(params.offset))
    return Page(items=list(result.scalars().all()), params=params, total=total)
