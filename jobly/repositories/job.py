"""
Job repository.

CRUD and filtered listing for the `jobs` table. Job ids are assigned by the
store, so ``create`` has no duplicate check.
"""

from __future__ import annotations

from typing import List, Optional

from jobly.domain.models import Company, Job, JobData, JobDetail, JobFilters, JobListing, JobUpdate
from jobly.errors import NotFoundError
from jobly.infrastructure.db_factory import QueryExecutor
from jobly.sql import build_set_fragment, field_mapping, job_where_fragment
from jobly.utils.logging import get_logger

log = get_logger(__name__)

# Logical and physical names coincide for every updatable job field.
JOB_FIELDS = field_mapping()

_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


class JobRepository:
    """Related functions for jobs."""

    def __init__(self, db: QueryExecutor) -> None:
        self._db = db

    async def create(self, data: JobData) -> Job:
        row = await self._db.fetchrow(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_RETURNING}""",
            data["title"],
            data.get("salary"),
            data.get("equity"),
            data["companyHandle"],
        )
        job = Job.model_validate(dict(row))
        log.info("Job created", extra={"job_id": job.id, "handle": job.company_handle})
        return job

    async def find_all(self, filters: Optional[JobFilters] = None) -> List[JobListing]:
        """
        List jobs ordered by title, each with its company's name.

        Filters (all optional): ``minSalary``, ``hasEquity`` (only ``True``
        filters, to jobs with non-zero equity), ``title`` (case-insensitive
        substring).
        """
        where = job_where_fragment(filters)
        query = f"""SELECT jobs.id,
                           jobs.title,
                           jobs.salary,
                           jobs.equity,
                           jobs.company_handle AS "companyHandle",
                           c.name AS "companyName"
                    FROM jobs
                      LEFT JOIN companies AS c ON c.handle = jobs.company_handle
                    {where.fragment}
                    ORDER BY title"""
        log.debug(
            "Listing jobs",
            extra={"where": where.fragment, "param_count": len(where.parameters)},
        )
        rows = await self._db.fetch(query, *where.parameters)
        return [JobListing.model_validate(dict(row)) for row in rows]

    async def get(self, job_id: int) -> JobDetail:
        """
        Return a job with its company nested under ``company``.

        Raises
        ------
        NotFoundError
            If no job has this id.
        """
        row = await self._db.fetchrow(f"SELECT {_RETURNING} FROM jobs WHERE id = $1", job_id)
        if row is None:
            raise NotFoundError(f"No job with id: {job_id}")

        job = dict(row)
        company_row = await self._db.fetchrow(
            """SELECT handle,
                      name,
                      description,
                      num_employees AS "numEmployees",
                      logo_url AS "logoUrl"
               FROM companies
               WHERE handle = $1""",
            job.pop("companyHandle"),
        )
        job["company"] = Company.model_validate(dict(company_row)) if company_row else None
        return JobDetail.model_validate(job)

    async def update(self, job_id: int, data: JobUpdate) -> Job:
        """
        Partially update a job; only the fields in ``data`` change.

        ``data`` must not contain ``id`` or ``companyHandle``.

        Raises
        ------
        ValidationError
            If ``data`` is empty.
        NotFoundError
            If no job has this id.
        """
        set_clause = build_set_fragment(data, JOB_FIELDS)
        query = f"""UPDATE jobs
                    SET {set_clause.fragment}
                    WHERE id = {set_clause.next_placeholder}
                    RETURNING {_RETURNING}"""
        log.debug("Updating job", extra={"job_id": job_id, "set": set_clause.fragment})
        row = await self._db.fetchrow(query, *set_clause.parameters, job_id)
        if row is None:
            raise NotFoundError(f"No job with id: {job_id}")

        log.info("Job updated", extra={"job_id": job_id, "fields": list(data)})
        return Job.model_validate(dict(row))

    async def remove(self, job_id: int) -> None:
        """
        Delete a job.

        Raises
        ------
        NotFoundError
            If no job has this id.
        """
        row = await self._db.fetchrow("DELETE FROM jobs WHERE id = $1 RETURNING id", job_id)
        if row is None:
            raise NotFoundError(f"No job with id: {job_id}")
        log.info("Job removed", extra={"job_id": job_id})


__all__ = ["JOB_FIELDS", "JobRepository"]
