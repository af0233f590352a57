"""
Repositories package for Jobly.

Re-exports the entity repositories so callers can import from
`jobly.repositories` directly.
"""

from jobly.repositories.company import COMPANY_FIELDS, CompanyRepository
from jobly.repositories.job import JOB_FIELDS, JobRepository

__all__ = [
    "COMPANY_FIELDS",
    "CompanyRepository",
    "JOB_FIELDS",
    "JobRepository",
]
