"""
SET-clause builder for partial UPDATE statements.

Turns a sparse ``{logical_field: new_value}`` payload into a fragment such as
``"first_name"=$1, "age"=$2`` and the matching parameter tuple:

    >>> build_set_fragment({"firstName": "Aliya", "age": 32},
    ...                    field_mapping({"firstName": "first_name"}))
    SqlFragment(fragment='"first_name"=$1, "age"=$2', parameters=('Aliya', 32))

The caller appends its own trailing parameters (typically the row key) using
``SqlFragment.next_placeholder``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Tuple, Union

from jobly.errors import ValidationError
from jobly.sql.columns import FieldMapping, quote_identifier, to_column
from jobly.sql.fragments import PositionalParams, SqlFragment

UpdatePayload = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def _ordered_items(payload: UpdatePayload) -> Tuple[Tuple[str, Any], ...]:
    if isinstance(payload, Mapping):
        return tuple(payload.items())
    items = tuple(payload)
    seen = set()
    for name, _value in items:
        if name in seen:
            raise ValidationError(f"Field supplied more than once: {name!r}")
        seen.add(name)
    return items


def build_set_fragment(payload: UpdatePayload, mapping: FieldMapping = ()) -> SqlFragment:
    """
    Build the SET clause for the fields present in ``payload``.

    Parameters
    ----------
    payload : mapping or iterable of pairs
        Fields to change, in the order they should be bound. Must not be empty.
    mapping : FieldMapping
        Logical to physical column names; unmapped fields pass through.

    Returns
    -------
    SqlFragment
        One ``"<column>"=$<i>`` piece per field, joined with ``", "``.

    Raises
    ------
    ValidationError
        If ``payload`` has no fields or repeats a field.
    """
    items = _ordered_items(payload)
    if not items:
        raise ValidationError("No data supplied for update")

    params = PositionalParams()
    pieces = [
        f"{quote_identifier(to_column(name, mapping))}={params.add(value)}"
        for name, value in items
    ]
    return SqlFragment(fragment=", ".join(pieces), parameters=params.as_tuple())


__all__ = ["UpdatePayload", "build_set_fragment"]
