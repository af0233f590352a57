"""
Infrastructure package for Jobly.

Centralizes database connectivity concerns (DSN, async pool, sync connection,
schema setup). Keep this layer focused on I/O and resource management,
decoupled from repository query logic.
"""

from jobly.infrastructure.db_factory import (
    Database,
    QueryExecutor,
    apply_schema,
    build_dsn,
    create_async_pool,
    get_sync_connection,
)

__all__ = [
    "Database",
    "QueryExecutor",
    "apply_schema",
    "build_dsn",
    "create_async_pool",
    "get_sync_connection",
]
