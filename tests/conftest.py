"""
Test configuration and fixtures
In-memory SQLite per test, fakeredis for cache, blacklist and pub/sub
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator, List
from contextlib import contextmanager
from datetime import date, timedelta
from uuid import uuid4
import os

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from fakeredis import aioredis as fake_aioredis
from httpx import AsyncClient, ASGITransport

# Set test environment
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-characters"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-with-at-least-32-chars"
os.environ["PROMETHEUS_ENABLED"] = "false"

# Import all models BEFORE creating fixtures (critical for create_all to work)
from groove.core.database import Base
from groove.models import (
    Artist,
    ArtistStatus,
    Musician,
    User,
    UserRole,
    Venue,
    VenueStatus,
)
from groove.core.security import get_password_hash, issue_tokens

TEST_PASSWORD = "Groove123!"
_password_hash = None


def password_hash() -> str:
    """bcrypt is slow; hash the shared test password once"""
    global _password_hash
    if _password_hash is None:
        _password_hash = get_password_hash(TEST_PASSWORD)
    return _password_hash


def future(days: int) -> date:
    return date.today() + timedelta(days=days)


def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {issue_tokens(user)['access_token']}"}


@contextmanager
def recorded_statements(engine):
    """Collect the SQL sent through an async engine"""
    statements: List[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", record)
    try:
        yield statements
    finally:
        event.remove(engine.sync_engine, "before_cursor_execute", record)


def selects_from(statements: List[str], table: str) -> List[str]:
    return [s for s in statements if s.lstrip().upper().startswith("SELECT") and f"FROM {table}" in s]


SAMPLE_PLANS = [
    {
        "id": 1,
        "name": "Acoustic duo",
        "price": 1500.0,
        "description": "Voice and guitar, two sets",
        "includes": ["2 x 45 min"],
        "costs": []
    },
    {
        "id": 2,
        "name": "Full band",
        "price": 3000.0,
        "description": "Five musicians with own sound system",
        "includes": ["3 x 40 min", "PA system"],
        "costs": []
    },
]


async def create_account(db_session: AsyncSession, role: UserRole, name: str, **profile_fields):
    """
    User plus its profile row (same id). Returns (user, profile); admins have
    no profile.
    """
    user = User(
        email=f"{role.value}_{uuid4().hex[:8]}@example.com",
        password_hash=password_hash(),
        full_name=name,
        role=role,
        is_active=True
    )
    db_session.add(user)
    await db_session.flush()

    profile = None
    if role == UserRole.ARTIST:
        profile = Artist(
            id=user.id,
            name=name,
            email=user.email,
            booked_dates=[],
            **profile_fields
        )
    elif role == UserRole.VENUE:
        profile = Venue(id=user.id, name=name, email=user.email, **profile_fields)
    elif role == UserRole.MUSICIAN:
        profile = Musician(id=user.id, name=name, email=user.email, **profile_fields)
    if profile is not None:
        db_session.add(profile)

    await db_session.commit()
    return user, profile


async def create_artist(db_session: AsyncSession, name: str = "The Night Owls", **overrides):
    """Approved, complete artist with two plans"""
    fields = {
        "city": "Sao Paulo",
        "genre": {"primary": "Rock", "secondary": ["Blues", "Indie"]},
        "bio": "Rock band playing classics and originals in bars across the city since 2015.",
        "image_url": "https://images.groove.test/owls.jpg",
        "youtube_video_id": "dQw4w9WgXcQ",
        "plans": [dict(plan) for plan in SAMPLE_PLANS],
        "status": ArtistStatus.APPROVED,
        "is_profile_complete": True,
        "profile_completeness": {"is_complete": True, "missing_fields": []},
    }
    fields.update(overrides)
    return await create_account(db_session, UserRole.ARTIST, name, **fields)


async def create_venue(db_session: AsyncSession, name: str = "Blue Note Bar", **overrides):
    fields = {
        "city": "Sao Paulo",
        "address": "Rua Augusta 100",
        "status": VenueStatus.ACTIVE,
    }
    fields.update(overrides)
    return await create_account(db_session, UserRole.VENUE, name, **fields)


@pytest_asyncio.fixture(scope="function")
async def test_db():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async_session_maker = async_sessionmaker(
        test_db,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def redis_client():
    """In-process Redis double"""
    client = fake_aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest_asyncio.fixture
async def client(db_session, redis_client):
    """Create test client with dependency override"""
    from groove.main import app
    from groove.core.database import get_session
    from groove.core.redis import get_redis

    def override_get_session():
        yield db_session

    def override_get_redis():
        return redis_client

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_redis] = override_get_redis

    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


# Account fixtures

@pytest_asyncio.fixture
async def artist_account(db_session):
    """(user, artist) for an approved artist with plans 1 and 2"""
    return await create_artist(db_session)


@pytest_asyncio.fixture
async def artist(artist_account):
    return artist_account[1]


@pytest_asyncio.fixture
async def artist_headers(artist_account):
    return auth_headers_for(artist_account[0])


@pytest_asyncio.fixture
async def venue_account(db_session):
    return await create_venue(db_session)


@pytest_asyncio.fixture
async def venue(venue_account):
    return venue_account[1]


@pytest_asyncio.fixture
async def venue_headers(venue_account):
    return auth_headers_for(venue_account[0])


@pytest_asyncio.fixture
async def other_venue_account(db_session):
    return await create_venue(db_session, name="Jazz Cellar")


@pytest_asyncio.fixture
async def admin_user(db_session):
    user, _ = await create_account(db_session, UserRole.ADMIN, "Platform Admin")
    return user


@pytest_asyncio.fixture
async def admin_headers(admin_user):
    return auth_headers_for(admin_user)


@pytest.fixture
def booking_payload(artist):
    """Two future dates on plan 1"""
    return {
        "artist_id": str(artist.id),
        "plan_id": 1,
        "dates": [future(10).isoformat(), future(11).isoformat()],
        "start_time": "21:00",
        "end_time": "23:30"
    }
