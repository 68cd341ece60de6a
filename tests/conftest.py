"""Test fixtures and configuration."""

import logging
import os
import sys
from datetime import UTC, datetime

# Must be set before agenda.config is imported anywhere.
os.environ["ENVIRONMENT"] = "testing"
os.environ["HASH_ROUNDS"] = "4"
os.environ.pop("REDIS_URL", None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
import structlog  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from agenda.logger import get_logger  # noqa: E402

logger = get_logger(__name__)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
FIXED_NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


class FixedClock:
    """Clock frozen at a given instant."""

    def __init__(self, now: datetime) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=processors[:-1],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with the schema created from the ORM metadata.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    from agenda.database import Base
    from agenda.models import Event, User  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(autouse=True)
async def patch_database_connection(db_engine):
    """Route the app's ``get_db`` dependency to the test engine."""
    from agenda import database

    test_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    previous = database.set_test_session_maker(test_maker)
    yield test_maker
    database.set_test_session_maker(previous)


@pytest_asyncio.fixture
async def db(patch_database_connection):
    async with patch_database_connection() as session:
        yield session


@pytest.fixture(autouse=True)
def reset_login_rate_limiter():
    from agenda.rate_limit import login_rate_limiter

    login_rate_limiter._local_state.clear()
    yield
    login_rate_limiter._local_state.clear()


@pytest.fixture
def app(clock):
    from agenda.core.clock import get_clock
    from agenda.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_clock] = lambda: clock
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_user(db):
    from agenda.models import Role
    from tests.factories import UserFactory

    return await UserFactory.create_async(db, role=Role.ADMIN, email="admin@example.com")


@pytest_asyncio.fixture
async def manager_user(db):
    from agenda.models import Role
    from tests.factories import UserFactory

    return await UserFactory.create_async(db, role=Role.CONTENT_MANAGER, email="manager@example.com")


def _bearer(user) -> dict[str, str]:
    from agenda.security import create_access_token

    token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def public_client(app):
    """Async test client without auth headers."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_client(app, admin_user):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=_bearer(admin_user),
    ) as client:
        yield client


@pytest_asyncio.fixture
async def manager_client(app, manager_user):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=_bearer(manager_user),
    ) as client:
        yield client
