"""
Domain package for Jobly.

Exports the payload shapes and record models used by the repositories and the
CLI. Keep this package focused on data definitions.
"""

from jobly.domain.models import (
    Company,
    CompanyData,
    CompanyDetail,
    CompanyFilters,
    CompanyUpdate,
    Job,
    JobData,
    JobDetail,
    JobFilters,
    JobListing,
    JobSummary,
    JobUpdate,
)

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
