"""
Logical-to-physical column name translation.

Callers speak in logical field names (``numEmployees``); tables use physical
column names (``num_employees``). A field mapping lists the pairs that differ;
anything not listed is used as-is.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Tuple, Union

FieldMapping = Tuple[Tuple[str, str], ...]

MappingLike = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def field_mapping(pairs: MappingLike = ()) -> FieldMapping:
    """
    Normalize ``pairs`` into an ordered, immutable field mapping.

    Accepts a dict (insertion order kept) or any iterable of
    ``(logical, physical)`` pairs. Duplicate logical names are rejected.
    """
    items = tuple(pairs.items()) if isinstance(pairs, Mapping) else tuple(pairs)
    seen = set()
    for logical, _physical in items:
        if logical in seen:
            raise ValueError(f"Duplicate logical field in mapping: {logical!r}")
        seen.add(logical)
    return items


def to_column(name: str, mapping: FieldMapping) -> str:
    """Return the physical column for ``name``, or ``name`` itself when unmapped."""
    for logical, physical in mapping:
        if logical == name:
            return physical
    return name


def quote_identifier(name: str) -> str:
    """
    Quote a PostgreSQL identifier, doubling any embedded double quotes.

    Examples:
        >>> quote_identifier("num_employees")
        '"num_employees"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


__all__ = ["FieldMapping", "field_mapping", "quote_identifier", "to_column"]
