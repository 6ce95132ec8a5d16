"""
Pytest configuration and fixtures for testing.
"""
import os

# Settings are read at import time, so the environment must be ready first.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_SECRET_PASSWORD", "test-admin-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./eventboard_app_test.db")

import pytest
import pytest_asyncio
from typing import AsyncGenerator
from datetime import date, time, timedelta
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from eventboard.main import app
from eventboard.db.session import Base, get_session
from eventboard.core.config import settings
from eventboard.core.security import hash_password, create_session_token
from eventboard.db.models import User, Event, EventStatus
from eventboard.services.event_service import local_today


# Any async SQLAlchemy URL works; point it at PostgreSQL to run against the real dialect.
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///./eventboard_test.db"
)

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,  # Disable connection pooling for tests
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database session for each test.
    Tables are dropped and recreated around every test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def session_factory(db_session: AsyncSession) -> async_sessionmaker:
    """Factory for extra sessions on the test database, independent of db_session."""
    return TestSessionLocal


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client bound to the app, sharing the test session.
    """
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_admin(db_session: AsyncSession) -> User:
    user = User(
        email="admin@example.com",
        password=hash_password("admin123"),
        name="Test Admin",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def second_admin(db_session: AsyncSession) -> User:
    user = User(
        email="chefe@example.com",
        password=hash_password("chefe123"),
        name="Chefe de Tropa",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def session_token(test_admin: User) -> str:
    """A valid session token for test_admin."""
    return create_session_token(test_admin.id)


@pytest.fixture
def auth_client(client: AsyncClient, session_token: str) -> AsyncClient:
    """The test client carrying test_admin's session cookie."""
    client.cookies.set(settings.SESSION_COOKIE_NAME, session_token)
    return client


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    event = Event(
        title="Reunião Semanal",
        description="Reunião semanal do grupo escoteiro",
        event_date=local_today() + timedelta(days=7),
        event_time=time(19, 0),
        status=EventStatus.andamento,
        location="Sede do Grupo",
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_events(db_session: AsyncSession) -> list:
    """Nine future events on consecutive days, one more than a default page."""
    events = []
    base = local_today() + timedelta(days=1)
    for i in range(9):
        event = Event(
            title=f"Evento {i + 1}",
            description=f"Descrição do evento {i + 1}",
            event_date=base + timedelta(days=i),
            event_time=time(9, 0),
            status=EventStatus.cancelado if i % 3 == 0 else EventStatus.andamento,
            location=f"Local {i + 1}",
        )
        db_session.add(event)
        events.append(event)

    await db_session.commit()
    for event in events:
        await db_session.refresh(event)
    return events


@pytest.fixture(autouse=True)
def skip_lazy_init(monkeypatch):
    """
    Tests build their own schema, so the one-time bootstrap is marked done.
    Tests of the bootstrap itself flip the flag back.
    """
    from eventboard.db import init_db
    monkeypatch.setattr(init_db, "_initialized", True)


@pytest.fixture(autouse=True)
def mock_password_hashing(monkeypatch):
    """
    Replace bcrypt with a cheap deterministic fake so tests stay fast.
    """
    class MockPasswordContext:
        def hash(self, password: str) -> str:
            return f"$2b$12$mockedhash{password}"

        def verify(self, plain: str, hashed: str) -> bool:
            return hashed == f"$2b$12$mockedhash{plain}"

    from eventboard.core import security
    monkeypatch.setattr(security, "pwd_context", MockPasswordContext())
