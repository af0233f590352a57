"""
Company repository.

CRUD and filtered listing for the `companies` table. Every statement is
issued on its own; ``create``'s duplicate check and ``get``'s company-then-jobs
fetch are two separate statements, not one transaction.
"""

from __future__ import annotations

from typing import List, Optional

from jobly.domain.models import (
    Company,
    CompanyData,
    CompanyDetail,
    CompanyFilters,
    CompanyUpdate,
    JobSummary,
)
from jobly.errors import ConflictError, NotFoundError
from jobly.infrastructure.db_factory import QueryExecutor
from jobly.sql import build_set_fragment, company_where_fragment, field_mapping
from jobly.utils.logging import get_logger

log = get_logger(__name__)

COMPANY_FIELDS = field_mapping(
    {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }
)

_RETURNING = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


class CompanyRepository:
    """Related functions for companies."""

    def __init__(self, db: QueryExecutor) -> None:
        self._db = db

    async def create(self, data: CompanyData) -> Company:
        """
        Insert a company and return it.

        Raises
        ------
        ConflictError
            If a company with the same handle already exists. The check and the
            insert are separate statements, so two concurrent creates can both
            pass the check; the primary key then rejects the loser.
        """
        handle = data["handle"]
        duplicate = await self._db.fetchrow(
            "SELECT handle FROM companies WHERE handle = $1",
            handle,
        )
        if duplicate is not None:
            raise ConflictError(f"Duplicate company: {handle}")

        row = await self._db.fetchrow(
            f"""INSERT INTO companies
                (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_RETURNING}""",
            handle,
            data["name"],
            data["description"],
            data.get("numEmployees"),
            data.get("logoUrl"),
        )
        log.info("Company created", extra={"handle": handle})
        return Company.model_validate(dict(row))

    async def find_all(self, filters: Optional[CompanyFilters] = None) -> List[Company]:
        """
        List companies ordered by name.

        Filters (all optional): ``minEmployees``, ``maxEmployees``, ``name``
        (case-insensitive substring).

        Raises
        ------
        ValidationError
            If the headcount bounds are negative or inverted.
        """
        where = company_where_fragment(filters)
        query = f"SELECT {_RETURNING} FROM companies {where.fragment} ORDER BY name"
        log.debug(
            "Listing companies",
            extra={"where": where.fragment, "param_count": len(where.parameters)},
        )
        rows = await self._db.fetch(query, *where.parameters)
        return [Company.model_validate(dict(row)) for row in rows]

    async def get(self, handle: str) -> CompanyDetail:
        """
        Return a company with its jobs (ordered by id).

        Raises
        ------
        NotFoundError
            If no company has this handle.
        """
        row = await self._db.fetchrow(
            f"SELECT {_RETURNING} FROM companies WHERE handle = $1",
            handle,
        )
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        jobs = await self._db.fetch(
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            handle,
        )
        return CompanyDetail.model_validate(
            {**dict(row), "jobs": [JobSummary.model_validate(dict(job)) for job in jobs]}
        )

    async def update(self, handle: str, data: CompanyUpdate) -> Company:
        """
        Partially update a company; only the fields in ``data`` change.

        ``data`` must not contain ``handle``.

        Raises
        ------
        ValidationError
            If ``data`` is empty.
        NotFoundError
            If no company has this handle.
        """
        set_clause = build_set_fragment(data, COMPANY_FIELDS)
        query = f"""UPDATE companies
                    SET {set_clause.fragment}
                    WHERE handle = {set_clause.next_placeholder}
                    RETURNING {_RETURNING}"""
        log.debug(
            "Updating company",
            extra={"handle": handle, "set": set_clause.fragment},
        )
        row = await self._db.fetchrow(query, *set_clause.parameters, handle)
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        log.info("Company updated", extra={"handle": handle, "fields": list(data)})
        return Company.model_validate(dict(row))

    async def remove(self, handle: str) -> None:
        """
        Delete a company (its jobs go with it).

        Raises
        ------
        NotFoundError
            If no company has this handle.
        """
        row = await self._db.fetchrow(
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            handle,
        )
        if row is None:
            raise NotFoundError(f"No company: {handle}")
        log.info("Company removed", extra={"handle": handle})


__all__ = ["COMPANY_FIELDS", "CompanyRepository"]
