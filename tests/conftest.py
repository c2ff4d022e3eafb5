"""
Pytest configuration and fixtures for testing
"""
import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

import database_models  # noqa: F401  (registers User with Base)
from config.settings import Settings, get_settings
from crud.user import UserRepository
from database import Base, get_db

TEST_WEBHOOK_SECRET = "test-revenuecat-secret"


def _make_session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
async def test_db():
    """
    Fixture that provides an isolated, in-memory SQLite database session for each test.

    This fixture:
    - Creates all tables before the test runs
    - Yields a clean AsyncSession for the test
    - Disposes the engine (and with it the database) afterwards
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with _make_session_factory(engine)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    await engine.dispose()


class UserStore:
    """Seeds and reads users for HTTP tests, outside the request cycle."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def create(self, **user_data):
        async def _create():
            async with self.session_factory() as session:
                user = await UserRepository(session).create_user(user_data)
                await session.commit()
                return user.id

        return asyncio.run(_create())

    def get(self, user_id):
        async def _get():
            async with self.session_factory() as session:
                return await UserRepository(session).get_user_by_id(user_id)

        return asyncio.run(_get())


@pytest.fixture
def app_db(tmp_path):
    """
    File-backed SQLite database shared between the TestClient and the test body.
    NullPool keeps connections from leaking across event loops.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async def setup_db():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(setup_db())

    yield _make_session_factory(engine)

    asyncio.run(engine.dispose())


@pytest.fixture
def users(app_db):
    return UserStore(app_db)


@pytest.fixture
def webhook_secret():
    return TEST_WEBHOOK_SECRET


@pytest.fixture
def client(app_db, webhook_secret):
    """FastAPI TestClient fixture with test database and settings overrides"""
    from main import app

    async def override_get_db():
        async with app_db() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    def override_get_settings():
        return Settings(REVENUECAT_WEBHOOK_SECRET=webhook_secret)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = override_get_settings

    yield TestClient(app)

    app.dependency_overrides.clear()
