"""Pytest configuration and fixtures."""

import hashlib
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from meetapp.core.deps import get_db, get_dispatcher
from meetapp.core.errors import DispatchError
from meetapp.core.security import issue_token
from meetapp.db import models_registry  # noqa: F401 - Import to register models
from meetapp.db.base import Base
from meetapp.db.types import utc_now
from meetapp.main import app
from meetapp.models.meetup import Meetup
from meetapp.models.user import User
from meetapp.workers.jobs import MailJob

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def plain_hash(password: str) -> str:
    """Test-only password hash that skips bcrypt rounds."""
    return "$plain$" + hashlib.sha256(password.encode()).hexdigest()


def tomorrow_at(hour: int, minute: int = 0) -> datetime:
    """Aware UTC datetime for tomorrow at the given time."""
    return (utc_now() + timedelta(days=1)).replace(
        hour=hour, minute=minute, second=0, microsecond=0
    )


class RecordingDispatcher:
    """Dispatcher double that keeps submitted jobs instead of running them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.jobs: list[MailJob] = []

    def submit(self, job: MailJob) -> None:
        if self.fail:
            raise DispatchError("queue unreachable")
        self.jobs.append(job)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    """Dispatcher that records jobs."""
    return RecordingDispatcher()


@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession, dispatcher: RecordingDispatcher
) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db: AsyncSession, name: str, email: str) -> User:
    user = User(name=name, email=email, hashed_password=plain_hash("secret123"))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def organizer(db_session: AsyncSession) -> User:
    """User who organizes the sample meetups."""
    return await _create_user(db_session, "Olivia Organizer", "olivia@meetapp.com")


@pytest_asyncio.fixture(scope="function")
async def attendee(db_session: AsyncSession) -> User:
    """User who subscribes to meetups."""
    return await _create_user(db_session, "Arthur Attendee", "arthur@meetapp.com")


@pytest.fixture
def make_meetup(
    db_session: AsyncSession, organizer: User
) -> Callable[..., Awaitable[Meetup]]:
    """Factory creating meetups organized by ``organizer`` unless told otherwise."""

    async def _make(
        date: datetime,
        title: str = "Python Meetup",
        user: User | None = None,
    ) -> Meetup:
        meetup = Meetup(
            title=title,
            description="Talks and pizza",
            location="Main Street 42",
            date=date,
            user_id=(user or organizer).id,
        )
        db_session.add(meetup)
        await db_session.commit()
        await db_session.refresh(meetup)
        return meetup

    return _make


@pytest_asyncio.fixture(scope="function")
async def meetup_tomorrow(make_meetup) -> Meetup:
    """Meetup tomorrow at 18:00 UTC."""
    return await make_meetup(tomorrow_at(18), title="Python Meetup")


@pytest.fixture
def auth_headers(attendee: User) -> dict:
    """Authorization headers for the attendee."""
    return {"Authorization": f"Bearer {issue_token(attendee.id)}"}


@pytest.fixture
def organizer_headers(organizer: User) -> dict:
    """Authorization headers for the organizer."""
    return {"Authorization": f"Bearer {issue_token(organizer.id)}"}
