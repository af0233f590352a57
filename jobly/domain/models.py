"""
Domain models for Jobly.

Input payloads are plain ``TypedDict`` shapes keyed by logical (camelCase)
field names; they arrive already validated from the outer layer. Output
records are frozen Pydantic models built straight from query rows, whose
column aliases already use the logical names.
"""
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CompanyData(TypedDict):
    handle: str
    name: str
    description: str
    numEmployees: Optional[int]
    logoUrl: Optional[str]


class CompanyUpdate(TypedDict, total=False):
    name: str
    description: str
    numEmployees: Optional[int]
    logoUrl: Optional[str]


class CompanyFilters(TypedDict, total=False):
    minEmployees: int
    maxEmployees: int
    name: str


class JobData(TypedDict):
    title: str
    salary: Optional[int]
    equity: Optional[Decimal]
    companyHandle: str


class JobUpdate(TypedDict, total=False):
    title: str
    salary: Optional[int]
    equity: Optional[Decimal]


class JobFilters(TypedDict, total=False):
    minSalary: int
    hasEquity: bool
    title: str


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict:
        """Dump using logical field names."""
        return self.model_dump(by_alias=True, mode="json")


class Company(_Record):
    """
    Representation of a row in the `companies` table.
    """

    handle: str = Field(..., description="Natural key, lowercase slug.")
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobSummary(_Record):
    """A job as listed under its company."""

    id: int = Field(..., description="Store-assigned surrogate key.")
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class Job(JobSummary):
    """
    Representation of a row in the `jobs` table.
    """

    company_handle: str


class JobListing(Job):
    """A job row with the owning company's name joined in."""

    company_name: Optional[str] = None


class CompanyDetail(Company):
    jobs: List[JobSummary] = Field(default_factory=list)


class JobDetail(JobSummary):
    """A job with its owning company nested in place of the foreign key."""

    company: Optional[Company] = None


__all__ = [
    "Company",
    "CompanyData",
    "CompanyDetail",
    "CompanyFilters",
    "CompanyUpdate",
    "Job",
    "JobData",
    "JobDetail",
    "JobFilters",
    "JobListing",
    "JobSummary",
    "JobUpdate",
]
