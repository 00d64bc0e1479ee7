"""
Test configuration and fixtures for pytest.

Every test gets its own in-memory SQLite database behind an
AsyncDatabaseManager, so nothing leaks between tests and no server is needed.
"""

from typing import AsyncGenerator, Dict

import bcrypt
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.async_session import AsyncDatabaseManager
from app.db.seed import EXERCISE_CATALOG, seed_exercises
from app.main import create_app
from app.models.exercise import Exercise
from app.models.user import User
from tests.utils_jwt import generate_test_jwt

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "password123"

# Hashed once with minimal rounds; bcrypt is slow otherwise
_TEST_PASSWORD_HASH = bcrypt.hashpw(TEST_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")


@pytest_asyncio.fixture
async def db_manager() -> AsyncGenerator[AsyncDatabaseManager, None]:
    """Fresh in-memory database with all tables created."""
    manager = AsyncDatabaseManager(TEST_DATABASE_URL)
    await manager.create_all()
    yield manager
    await manager.drop_all()
    await manager.close()


@pytest_asyncio.fixture
async def db_session(db_manager) -> AsyncGenerator[AsyncSession, None]:
    """Create an async SQLAlchemy session for tests."""
    async with db_manager.async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def exercises(db_session) -> Dict[str, Exercise]:
    """The seeded catalog, keyed by exercise name."""
    await seed_exercises(db_session, EXERCISE_CATALOG)
    result = await db_session.execute(select(Exercise))
    catalog = list(result.scalars().all())
    # Detached so a rollback in the code under test cannot expire them
    for exercise in catalog:
        db_session.expunge(exercise)
    return {exercise.name: exercise for exercise in catalog}


async def _create_user(session: AsyncSession, username: str, email: str) -> User:
    user = User(username=username, email=email, hashed_password=_TEST_PASSWORD_HASH)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    session.expunge(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session) -> User:
    """Create a test user."""
    return await _create_user(db_session, "testuser", "testuser@example.com")


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    """A second user whose data must stay invisible to test_user."""
    return await _create_user(db_session, "otheruser", "otheruser@example.com")


@pytest_asyncio.fixture
async def auth_header(test_user) -> Dict[str, str]:
    """Return an Authorization header with a valid JWT for the test user."""
    return {"Authorization": f"Bearer {generate_test_jwt(user_id=test_user.id)}"}


@pytest_asyncio.fixture
async def other_auth_header(other_user) -> Dict[str, str]:
    return {"Authorization": f"Bearer {generate_test_jwt(user_id=other_user.id)}"}


@pytest_asyncio.fixture
async def client(db_manager) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app that uses the test database."""
    app = create_app(db_manager=db_manager)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
