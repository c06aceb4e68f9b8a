"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- An in-memory SQLite database built from the models
- Seed data: three companies, three jobs, two users and an admin
- An HTTP client bound to the app with the database dependency overridden
"""
import os

# Settings are read at import time, so the environment goes first
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import sqlite3
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import jobly.models  # noqa: F401  (registers the tables)
from jobly.core.database import Base, get_db
from jobly.core.security import create_user_token, hash_password
from jobly.main import app

# sqlite3 has no native decimal; store equity the way it is written
sqlite3.register_adapter(Decimal, str)


SQLALCHEMY_TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Fresh in-memory database per test, foreign keys enforced."""
    engine = create_async_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def job_ids(session_maker):
    """
    Seed the database and return the ids of title-1, title-2, title-3.

    u1 has applied to title-1.
    """
    async with session_maker() as session:
        await session.execute(text(
            """INSERT INTO companies (handle, name, num_employees, description, logo_url)
               VALUES ('c1', 'C1', 1, 'Desc1', 'http://c1.img'),
                      ('c2', 'C2', 2, 'Desc2', 'http://c2.img'),
                      ('c3', 'C3', 3, 'Desc3', 'http://c3.img')"""
        ))
        await session.execute(text(
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ('title-1', 50000, 0, 'c1'),
                      ('title-2', 60000, 0.01, 'c1'),
                      ('title-3', 70000, 0.02, 'c2')"""
        ))
        await session.execute(
            text(
                """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                   VALUES ('u1', :pw1, 'U1F', 'U1L', 'user1@user.com', :no),
                          ('u2', :pw2, 'U2F', 'U2L', 'user2@user.com', :no),
                          ('a1', :pw3, 'A1F', 'A1L', 'admin@user.com', :yes)"""
            ),
            {
                "pw1": hash_password("password1"),
                "pw2": hash_password("password2"),
                "pw3": hash_password("password3"),
                "no": False,
                "yes": True,
            },
        )
        result = await session.execute(text("SELECT id FROM jobs ORDER BY id"))
        ids = [row[0] for row in result.all()]

        await session.execute(
            text("INSERT INTO applications (username, job_id) VALUES ('u1', :job_id)"),
            {"job_id": ids[0]},
        )
        await session.commit()

    return ids


@pytest.fixture
async def db_session(session_maker, job_ids):
    """Session over the seeded database."""
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker, job_ids):
    """
    HTTP client for the app, with get_db bound to the test database.
    """
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def u1_token():
    return create_user_token("u1", False)


@pytest.fixture
def u2_token():
    return create_user_token("u2", False)


@pytest.fixture
def admin_token():
    return create_user_token("a1", True)


@pytest.fixture
def u1_headers(u1_token):
    return {"Authorization": f"Bearer {u1_token}"}


@pytest.fixture
def u2_headers(u2_token):
    return {"Authorization": f"Bearer {u2_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
