"""
Integration tests for the Jobly repositories.

These tests run against a real PostgreSQL instance and cover the full
create / list / get / update / remove cycle for both entities.

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import asyncio
import os
from decimal import Decimal

import pytest

from jobly.errors import ConflictError, NotFoundError, ValidationError
from jobly.infrastructure.db_factory import Database
from jobly.repositories import CompanyRepository, JobRepository

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)

ACME = {
    "handle": "acme",
    "name": "Acme",
    "description": "Anvils and rockets",
    "numEmployees": 10,
    "logoUrl": "/logos/acme.png",
}
GLOBEX = {
    "handle": "globex",
    "name": "Globex",
    "description": "Everything else",
    "numEmployees": 0,
    "logoUrl": None,
}


async def _seed(db: Database) -> list[int]:
    companies = CompanyRepository(db)
    jobs = JobRepository(db)
    await companies.create(ACME)
    await companies.create(GLOBEX)
    created = [
        await jobs.create(
            {"title": "Rocket Engineer", "salary": 150_000, "equity": Decimal("0.01"), "companyHandle": "acme"}
        ),
        await jobs.create(
            {"title": "Anvil Tester", "salary": 50_000, "equity": Decimal("0"), "companyHandle": "acme"}
        ),
        await jobs.create(
            {"title": "Sales Engineer", "salary": 90_000, "equity": None, "companyHandle": "globex"}
        ),
    ]
    return [job.id for job in created]


class TestCompanyLifecycle:
    @pytest.mark.asyncio
    async def test_create_conflict_update_remove(self, db: Database):
        companies = CompanyRepository(db)

        created = await companies.create(ACME)
        assert created.to_dict() == ACME

        with pytest.raises(ConflictError):
            await companies.create(ACME)

        updated = await companies.update("acme", {"numEmployees": 50})
        assert updated.num_employees == 50
        assert updated.to_dict() == {**ACME, "numEmployees": 50}

        await companies.remove("acme")
        with pytest.raises(NotFoundError):
            await companies.remove("acme")

    @pytest.mark.asyncio
    async def test_update_missing_company(self, db: Database):
        with pytest.raises(NotFoundError):
            await CompanyRepository(db).update("nope", {"name": "Nope"})

    @pytest.mark.asyncio
    async def test_find_all_orders_by_name_and_filters(self, db: Database):
        await _seed(db)
        companies = CompanyRepository(db)

        assert [c.handle for c in await companies.find_all({})] == ["acme", "globex"]
        assert [c.handle for c in await companies.find_all({"maxEmployees": 0})] == ["globex"]
        assert [c.handle for c in await companies.find_all({"minEmployees": 0})] == ["acme", "globex"]
        assert [c.handle for c in await companies.find_all({"name": "GLO"})] == ["globex"]

        with pytest.raises(ValidationError):
            await companies.find_all({"minEmployees": 10, "maxEmployees": 5})

    @pytest.mark.asyncio
    async def test_get_includes_jobs_in_id_order(self, db: Database):
        job_ids = await _seed(db)

        company = await CompanyRepository(db).get("acme")

        assert [job.id for job in company.jobs] == job_ids[:2]
        with pytest.raises(NotFoundError):
            await CompanyRepository(db).get("nope")

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_creates_are_not_serialized(self, db: Database):
        # The duplicate check and the insert are separate statements. When two
        # creates race, both may pass the check; the primary key then rejects
        # one of them with a driver error rather than ConflictError. Accepted.
        companies = CompanyRepository(db)

        results = await asyncio.gather(
            companies.create(ACME), companies.create(ACME), return_exceptions=True
        )

        successes = [r for r in results if not isinstance(r, BaseException)]
        assert len(successes) == 1
        assert len(await companies.find_all()) == 1


class TestJobLifecycle:
    @pytest.mark.asyncio
    async def test_find_all_filters_and_joins_company_name(self, db: Database):
        await _seed(db)
        jobs = JobRepository(db)

        listed = await jobs.find_all()
        assert [j.title for j in listed] == ["Anvil Tester", "Rocket Engineer", "Sales Engineer"]
        assert listed[0].company_name == "Acme"

        equity = await jobs.find_all({"hasEquity": True})
        assert [j.title for j in equity] == ["Rocket Engineer"]

        assert len(await jobs.find_all({"hasEquity": False})) == 3

        filtered = await jobs.find_all({"minSalary": 60_000, "title": "engineer"})
        assert [j.title for j in filtered] == ["Rocket Engineer", "Sales Engineer"]

    @pytest.mark.asyncio
    async def test_get_update_remove(self, db: Database):
        job_ids = await _seed(db)
        jobs = JobRepository(db)

        detail = await jobs.get(job_ids[0])
        assert detail.company is not None
        assert detail.company.handle == "acme"

        updated = await jobs.update(job_ids[0], {"salary": 160_000})
        assert updated.salary == 160_000
        assert updated.title == "Rocket Engineer"
        assert updated.company_handle == "acme"

        await jobs.remove(job_ids[0])
        with pytest.raises(NotFoundError):
            await jobs.get(job_ids[0])
        with pytest.raises(NotFoundError):
            await jobs.remove(job_ids[0])

    @pytest.mark.asyncio
    async def test_removing_company_removes_its_jobs(self, db: Database):
        await _seed(db)

        await CompanyRepository(db).remove("acme")

        remaining = await JobRepository(db).find_all()
        assert [j.title for j in remaining] == ["Sales Engineer"]
