"""Shared test fixtures."""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.database import Base
from app.models import Participant, Race, User

from tests.fixtures.factories import create_participant, create_race, create_user


@pytest.fixture
async def db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session with transaction rollback."""
    async_session = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def organiser(db_session: AsyncSession) -> User:
    """The user who organises ``test_race``."""
    user = create_user(id=1001, display_name="Olive Organiser", first_name="Olive",
                       last_name="Organiser", sex="F")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def rider(db_session: AsyncSession) -> User:
    """A second user, not yet in any race."""
    user = create_user(id=2002, display_name="Rory Rider", first_name="Rory",
                       last_name="Rider", sex="M")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def outsider(db_session: AsyncSession) -> User:
    """A third user, never joins anything."""
    user = create_user(id=3003, display_name="Ola Outsider", first_name="Ola",
                       last_name="Outsider", sex=None)
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def test_race(db_session: AsyncSession, organiser: User) -> Race:
    """An ongoing private race over segments 111 and 222, organiser joined."""
    race = create_race(organiser_id=organiser.id)
    db_session.add(race)
    await db_session.flush()

    db_session.add(create_participant(race_id=race.id, user_id=organiser.id))
    await db_session.flush()
    return race


@pytest.fixture
async def rider_participant(
    db_session: AsyncSession, test_race: Race, rider: User
) -> Participant:
    """``rider``'s participation in ``test_race``."""
    participant = create_participant(race_id=test_race.id, user_id=rider.id)
    db_session.add(participant)
    await db_session.flush()
    return participant
