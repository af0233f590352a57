"""
Pytest configuration for Jobly.

Provides fixtures for:
- Settings override for tests
- Database schema setup and per-test cleanup for integration tests
- An asyncpg-backed Database bound to the test database
"""

from __future__ import annotations

import os
from typing import AsyncGenerator

import psycopg
import pytest
import pytest_asyncio

from jobly.config import Settings
from jobly.infrastructure.db_factory import Database, apply_schema


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("TEST_DB_NAME", "jobly_test"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return os.getenv("TEST_DATABASE_URL") or (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_schema_initialized(test_dsn: str, db_connection_available: bool) -> str:
    """
    Recreate the schema once per session and return the DSN.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")
    apply_schema(test_dsn)
    return test_dsn


@pytest.fixture(scope="function")
def clean_tables(db_schema_initialized: str):
    """
    Empty both tables before each test function.
    """
    with psycopg.connect(db_schema_initialized) as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE TABLE jobs, companies RESTART IDENTITY CASCADE;")
        conn.commit()
    yield


@pytest_asyncio.fixture
async def db(db_schema_initialized: str, clean_tables) -> AsyncGenerator[Database, None]:
    """
    Connected Database on the test schema; closed after the test.
    """
    async with Database(db_schema_initialized) as database:
        yield database
