"""
Database connection factory utilities for Jobly.

Repositories run on an asyncpg pool: asyncpg speaks PostgreSQL's native
``$n`` placeholders, which is exactly what the SQL fragment builders emit.
Schema setup and bulk seeding use a plain synchronous psycopg connection.

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

import asyncpg
import psycopg
from psycopg import Connection
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from jobly.config import Settings, get_settings
from jobly.utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "db" / "init.sql"


@runtime_checkable
class QueryExecutor(Protocol):
    """
    The slice of the asyncpg API the repositories rely on.

    ``asyncpg.Pool`` and ``asyncpg.Connection`` both satisfy it, as does
    ``Database`` below.
    """

    async def fetch(self, query: str, *args: Any) -> List[Any]:
        ...

    async def fetchrow(self, query: str, *args: Any) -> Optional[Any]:
        ...


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings, preferring DATABASE_URL."""
    settings = settings or get_settings()
    if settings.database_url:
        return settings.database_url
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def _server_settings(settings: Settings) -> Dict[str, str]:
    if settings.db_statement_timeout_ms > 0:
        return {"statement_timeout": str(settings.db_statement_timeout_ms)}
    return {}


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Use this for one-off maintenance work such as schema setup or seeding.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn())


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((OSError, ConnectionError, asyncpg.CannotConnectNowError)),
    reraise=True,
)
async def create_async_pool(
    dsn: Optional[str] = None,
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
) -> asyncpg.Pool:
    """
    Create an asyncpg pool with automatic retry.

    Parameters
    ----------
    dsn : str, optional
        Connection string; defaults to ``build_dsn()``.
    min_size, max_size : int, optional
        Pool bounds; default to the DB_POOL_* settings.
    """
    settings = get_settings()
    return await asyncpg.create_pool(
        dsn=dsn or build_dsn(settings),
        min_size=min_size if min_size is not None else settings.db_pool_min_size,
        max_size=max_size if max_size is not None else settings.db_pool_max_size,
        server_settings=_server_settings(settings),
    )


class Database:
    """
    Owns the asyncpg pool for one application run.

    Each query checks a connection out of the pool for the duration of that
    single statement; multi-statement repository operations are therefore not
    wrapped in one transaction.

    Example
    -------
        async with Database() as db:
            companies = CompanyRepository(db)
            await companies.find_all()
    """

    def __init__(self, dsn: Optional[str] = None) -> None:
        self._dsn = dsn
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> "Database":
        if self._pool is None:
            self._pool = await create_async_pool(self._dsn)
            log.debug("Database pool opened")
        return self

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database is not connected; call connect() first")
        return self._pool

    async def fetch(self, query: str, *args: Any) -> List[asyncpg.Record]:
        return await self.pool.fetch(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> Optional[asyncpg.Record]:
        return await self.pool.fetchrow(query, *args)

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            log.debug("Database pool closed")

    async def __aenter__(self) -> "Database":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def apply_schema(dsn: Optional[str] = None, schema_path: Path = SCHEMA_PATH) -> None:
    """
    Run the schema script against the target database.

    The script drops and recreates the tables, so existing data is lost.
    """
    sql = schema_path.read_text(encoding="utf-8")
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
    log.info("Schema applied", extra={"schema": str(schema_path)})


__all__ = [
    "Database",
    "QueryExecutor",
    "SCHEMA_PATH",
    "apply_schema",
    "build_dsn",
    "create_async_pool",
    "get_sync_connection",
]
