"""
Jobly - companies and jobs over PostgreSQL.

The interesting part lives in ``jobly.sql``: builders that turn sparse
caller data into parameterized ``SET`` and ``WHERE`` fragments. The
repositories in ``jobly.repositories`` splice those fragments into their
query templates and run them on an asyncpg pool.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from jobly.config import Settings, get_settings
from jobly.errors import ConflictError, JoblyError, NotFoundError, ValidationError
from jobly.infrastructure.db_factory import Database
from jobly.repositories import CompanyRepository, JobRepository
from jobly.sql import (
    SqlFragment,
    build_set_fragment,
    company_where_fragment,
    job_where_fragment,
)
from jobly.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "JoblyError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    # Persistence
    "Database",
    "CompanyRepository",
    "JobRepository",
    # SQL fragments
    "SqlFragment",
    "build_set_fragment",
    "company_where_fragment",
    "job_where_fragment",
    # Logging
    "configure_logging",
    "get_logger",
]
