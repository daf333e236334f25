"""Service test fixtures — async DB, store, seeded users/sport and a FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so readiness probes hit the test engine
    - Services get a fixed clock; sessions are dated relative to it

Design Decisions:
    - SQLite in-memory: fast, no external dependency. The conditional UPDATE that
      guards capacity behaves the same on SQLite and PostgreSQL
    - Seed fixtures return plain ids/Callers, never ORM instances: a failed
      transaction rolls back and expires everything in the identity map
"""

from datetime import date, datetime, time

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from sports_scheduler.core.domain_types import Caller, UserRole
from sports_scheduler.db.base import Base
from sports_scheduler.infrastructure.database import get_db, DatabaseSessionManager
from sports_scheduler.infrastructure.sql_store import SqlSchedulerStore
from sports_scheduler.services.session_service import SessionService
from sports_scheduler.services.sport_service import SportService
from sports_scheduler.services.user_service import UserService
import sports_scheduler.infrastructure.database as db_module
from sports_scheduler.main import app

NOW = datetime(2030, 6, 1, 12, 0)
SESSION_DATE = date(2030, 6, 10)
SESSION_TIME = time(18, 0)


def fixed_clock(at: datetime = NOW):
    return lambda: at


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlSchedulerStore(test_db)


@pytest.fixture
async def admin(store) -> Caller:
    user = await UserService(store).register_user(
        "admin@example.com", "Avery Admin", UserRole.ADMIN,
    )
    return Caller(id=user.id, role=UserRole.ADMIN)


@pytest.fixture
async def creator(store) -> Caller:
    user = await UserService(store).register_user("casey@example.com", "Casey Creator")
    return Caller(id=user.id, role=UserRole.PLAYER)


@pytest.fixture
async def player(store) -> Caller:
    user = await UserService(store).register_user("pat@example.com", "Pat Player")
    return Caller(id=user.id, role=UserRole.PLAYER)


@pytest.fixture
async def other_player(store) -> Caller:
    user = await UserService(store).register_user("olly@example.com", "Olly Other")
    return Caller(id=user.id, role=UserRole.PLAYER)


@pytest.fixture
async def sport_id(store, admin) -> int:
    sport = await SportService(store).create_sport(admin, "Football")
    return sport.id


@pytest.fixture
def make_session(store, creator, sport_id):
    """Factory: await make_session(players_needed=2) -> session id."""
    async def _make(
        players_needed: int = 4,
        session_date: date = SESSION_DATE,
        session_time: time = SESSION_TIME,
        by: Caller | None = None,
        sport: int | None = None,
    ) -> int:
        session = await SessionService(store, fixed_clock()).create_session(
            by or creator, sport or sport_id, session_date, session_time,
            "Riverside Park", players_needed,
        )
        return session.id
    return _make


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
