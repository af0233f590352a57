"""
SQL fragment builders for Jobly.

Pure functions that turn caller data into parameterized SQL pieces. Nothing
here touches a connection; repositories splice the fragments into their query
templates and hand the parameters to the driver.
"""

from jobly.sql.columns import FieldMapping, field_mapping, quote_identifier, to_column
from jobly.sql.filters import (
    COMPANY_FILTER_RULES,
    JOB_FILTER_RULES,
    FilterRule,
    build_where_fragment,
    company_where_fragment,
    job_where_fragment,
)
from jobly.sql.fragments import PositionalParams, SqlFragment, placeholder
from jobly.sql.partial_update import build_set_fragment

__all__ = [
    # Column names
    "FieldMapping",
    "field_mapping",
    "quote_identifier",
    "to_column",
    # Parameters
    "PositionalParams",
    "SqlFragment",
    "placeholder",
    # Builders
    "build_set_fragment",
    "build_where_fragment",
    "company_where_fragment",
    "job_where_fragment",
    "COMPANY_FILTER_RULES",
    "JOB_FILTER_RULES",
    "FilterRule",
]
