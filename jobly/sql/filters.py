"""
WHERE-clause builders for filtered listings.

Each entity declares its recognized criteria as an ordered tuple of
``FilterRule``s. Rules are evaluated strictly in that order, so the
placeholder numbering for a given set of criteria never changes. A rule whose
``bind`` is ``None`` contributes a condition without consuming a parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

from jobly.errors import ValidationError
from jobly.sql.fragments import PositionalParams, SqlFragment

Criteria = Mapping[str, Any]


def is_present(value: Any) -> bool:
    """Missing keys and ``None`` are absent; ``0`` and ``False`` are not."""
    return value is not None


def is_non_empty(value: Any) -> bool:
    return value is not None and value != ""


def is_true(value: Any) -> bool:
    return value is True


def contains_pattern(value: Any) -> str:
    """Wrap ``value`` for a substring match with ILIKE."""
    return f"%{value}%"


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class FilterRule:
    """
    One optional criterion and the condition it produces.

    Attributes
    ----------
    key : str
        Logical criterion name looked up in the caller's criteria.
    condition : str
        Condition template; ``{}`` is replaced by the placeholder when the rule
        binds a parameter.
    applies : callable
        Decides whether the criterion value switches the condition on.
    bind : callable or None
        Converts the criterion value into the bound parameter. ``None`` means
        the condition is emitted verbatim and binds nothing.
    """

    key: str
    condition: str
    applies: Callable[[Any], bool] = is_present
    bind: Optional[Callable[[Any], Any]] = _identity


def build_where_fragment(
    criteria: Optional[Criteria],
    rules: Sequence[FilterRule],
    params: Optional[PositionalParams] = None,
) -> SqlFragment:
    """
    Build ``WHERE <cond> AND <cond> ...`` from the rules that apply.

    Parameters
    ----------
    criteria : mapping or None
        Caller-supplied criteria. Unrecognized keys are ignored.
    rules : sequence of FilterRule
        Recognized criteria in evaluation order.
    params : PositionalParams, optional
        Existing parameter list to continue numbering from.

    Returns
    -------
    SqlFragment
        Empty fragment and no parameters when no rule applies.
    """
    criteria = criteria or {}
    params = params if params is not None else PositionalParams()
    conditions = []

    for rule in rules:
        value = criteria.get(rule.key)
        if not rule.applies(value):
            continue
        if rule.bind is None:
            conditions.append(rule.condition)
        else:
            conditions.append(rule.condition.format(params.add(rule.bind(value))))

    if not conditions:
        return SqlFragment(fragment="", parameters=params.as_tuple())
    return SqlFragment(
        fragment="WHERE " + " AND ".join(conditions),
        parameters=params.as_tuple(),
    )


COMPANY_FILTER_RULES = (
    FilterRule("minEmployees", "num_employees >= {}"),
    FilterRule("maxEmployees", "num_employees <= {}"),
    FilterRule("name", "name ILIKE {}", applies=is_non_empty, bind=contains_pattern),
)

JOB_FILTER_RULES = (
    FilterRule("minSalary", "salary >= {}"),
    FilterRule("hasEquity", "equity > 0", applies=is_true, bind=None),
    FilterRule("title", "title ILIKE {}", bind=contains_pattern),
)


def validate_company_criteria(criteria: Criteria) -> None:
    """Reject contradictory or negative headcount bounds."""
    min_employees = criteria.get("minEmployees")
    max_employees = criteria.get("maxEmployees")

    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise ValidationError("minEmployees cannot be greater than maxEmployees")
    for bound in (min_employees, max_employees):
        if bound is not None and bound < 0:
            raise ValidationError("minEmployees and maxEmployees must be >= 0")


def company_where_fragment(criteria: Optional[Criteria] = None) -> SqlFragment:
    """WHERE fragment for company listings (headcount range, name substring)."""
    criteria = criteria or {}
    validate_company_criteria(criteria)
    return build_where_fragment(criteria, COMPANY_FILTER_RULES)


def job_where_fragment(criteria: Optional[Criteria] = None) -> SqlFragment:
    """WHERE fragment for job listings (minimum salary, equity, title substring)."""
    return build_where_fragment(criteria, JOB_FILTER_RULES)


__all__ = [
    "COMPANY_FILTER_RULES",
    "JOB_FILTER_RULES",
    "Criteria",
    "FilterRule",
    "build_where_fragment",
    "company_where_fragment",
    "contains_pattern",
    "is_non_empty",
    "is_present",
    "is_true",
    "job_where_fragment",
    "validate_company_criteria",
]
