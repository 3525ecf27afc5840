"""ORM Models - SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Party <- Politician <- Statement -> Profile

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from speechkarma.models.party import Party  # noqa: F401
from speechkarma.models.politician import Politician  # noqa: F401
from speechkarma.models.profile import Profile  # noqa: F401
from speechkarma.models.statement import Statement  # noqa: F401
