"""Route test fixtures - async DB, fake auth provider, FastAPI test client, seed rows.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db overridden to hand out sessions from a DatabaseSessionManager bound
      to the test engine (same rollback and error mapping as production)
    - get_auth_provider overridden with FakeAuthProvider: bearer tokens map to
      fixed users, no network access
    - db_manager patched so the readiness check hits the test engine

Design Decisions:
    - SQLite in-memory: fast and sufficient for route tests; PostgreSQL-only
      constraints (color_hex regex) are covered by schema validation instead
    - Seed helpers write rows directly so tests can backdate created_at
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import speechkarma.infrastructure.database as db_module
from speechkarma.api.dependencies import get_auth_provider
from speechkarma.core.errors import AuthProviderError
from speechkarma.db.base import Base
from speechkarma.infrastructure.auth_provider import (
    AuthenticatedUser,
    AuthSession,
    provider_error,
)
from speechkarma.infrastructure.database import DatabaseSessionManager, get_db
from speechkarma.main import app
from speechkarma.models.party import Party
from speechkarma.models.politician import Politician
from speechkarma.models.profile import Profile
from speechkarma.models.statement import Statement

OWNER = AuthenticatedUser(
    id=UUID("a1111111-1111-4111-8111-11111111111a"), email="owner@example.com",
)
OTHER = AuthenticatedUser(
    id=UUID("b2222222-2222-4222-8222-22222222222b"), email="other@example.com",
)
NEWCOMER = AuthenticatedUser(
    id=UUID("c3333333-3333-4333-8333-33333333333c"), email="newcomer@example.com",
)

OWNER_HEADERS = {"Authorization": "Bearer owner-token"}
OTHER_HEADERS = {"Authorization": "Bearer other-token"}
NEWCOMER_HEADERS = {"Authorization": "Bearer newcomer-token"}


@dataclass
class FakeAuthProvider:
    """In-process stand-in for AuthProviderClient."""
    tokens: dict[str, AuthenticatedUser] = field(default_factory=lambda: {
        "owner-token": OWNER,
        "other-token": OTHER,
        "newcomer-token": NEWCOMER,
    })
    signed_out: list[str] = field(default_factory=list)
    fail_with: AuthProviderError | None = None

    async def get_user(self, access_token: str) -> AuthenticatedUser | None:
        return self.tokens.get(access_token)

    async def sign_up(self, email, password, display_name=None) -> AuthSession:
        if self.fail_with:
            raise self.fail_with
        user = AuthenticatedUser(id=uuid4(), email=email)
        return AuthSession(user=user, session={"access_token": "new-token"})

    async def sign_in(self, email, password) -> AuthSession:
        if self.fail_with:
            raise self.fail_with
        if password != "correct-password":
            raise provider_error(400, "Invalid login credentials", credentials_check=True)
        return AuthSession(user=OWNER, session={"access_token": "owner-token"})

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        if self.fail_with:
            raise self.fail_with


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_auth():
    return FakeAuthProvider()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_auth):
    """FastAPI test client with DB and auth provider dependencies overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    async def override_get_auth_provider():
        yield fake_auth

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_provider] = override_get_auth_provider

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed rows ───────────────────────────────────────────────────

@pytest.fixture
async def seed_party(test_db):
    party = Party(name="Green Party", abbreviation="GP", color_hex="#00AA00")
    test_db.add(party)
    await test_db.commit()
    await test_db.refresh(party)
    return party


@pytest.fixture
async def seed_politician(test_db, seed_party):
    politician = Politician(
        first_name="Jane", last_name="Doe", party_id=seed_party.id,
        biography="Long-serving member.",
    )
    test_db.add(politician)
    await test_db.commit()
    await test_db.refresh(politician)
    return politician


@pytest.fixture
async def seed_profiles(test_db):
    owner = Profile(id=OWNER.id, display_name="Owner")
    other = Profile(id=OTHER.id, display_name="Other")
    test_db.add_all([owner, other])
    await test_db.commit()
    return owner, other


@pytest.fixture
def make_statement(test_db, seed_politician, seed_profiles):
    """Factory: insert a statement by OWNER created `minutes_ago` minutes ago."""
    async def _make(
        minutes_ago: float = 1,
        text: str = "Taxes will not rise this year.",
        deleted: bool = False,
        author: AuthenticatedUser = OWNER,
    ) -> Statement:
        created_at = utcnow() - timedelta(minutes=minutes_ago)
        statement = Statement(
            politician_id=seed_politician.id,
            statement_text=text,
            statement_timestamp=created_at - timedelta(hours=1),
            created_by_user_id=author.id,
            created_at=created_at,
            updated_at=created_at,
            deleted_at=created_at if deleted else None,
        )
        test_db.add(statement)
        await test_db.commit()
        await test_db.refresh(statement)
        return statement
    return _make
