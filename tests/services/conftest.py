"""Service test fixtures — file-backed async SQLite DB + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - Every transaction starts with BEGIN IMMEDIATE, so concurrent writers queue
      on the database lock instead of failing with stale snapshots
    - get_session_factory dependency overridden to use the test engine
    - db_manager patched for the readiness probe, which bypasses dependencies

Design Decisions:
    - File DB over :memory:: concurrent sessions need separate connections to
      the same database (in-memory SQLite is per-connection)
    - ON CONFLICT / RETURNING behave the same in SQLite and PostgreSQL for
      the statements under test
"""

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from walletreg.db.base import Base
from walletreg.infrastructure.database import (
    DatabaseSessionManager, get_session_factory,
)
from walletreg.models.profile import Profile
from walletreg.models.user import User
import walletreg.infrastructure.database as db_module
from walletreg.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'walletreg.db'}", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
def count_rows(test_session_factory):
    """Return an async callable counting committed rows of a model."""
    async def _count(model) -> int:
        async with test_session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(model),
            )
            return result.scalar_one()
    return _count


@pytest.fixture
def fetch_profiles(test_session_factory):
    async def _fetch() -> list[tuple[str, str | None]]:
        async with test_session_factory() as session:
            result = await session.execute(
                select(User.wallet, Profile.referral_code)
                .join(Profile, Profile.user_id == User.id)
                .order_by(User.id),
            )
            return [tuple(row) for row in result.all()]
    return _fetch


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with the session factory dependency overridden."""
    app.dependency_overrides[get_session_factory] = lambda: test_session_factory

    # Patch db_manager for the readiness probe that uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager.session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
