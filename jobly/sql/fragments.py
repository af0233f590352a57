"""
Positional-parameter bookkeeping shared by the SQL fragment builders.

Placeholders follow the PostgreSQL wire convention (``$1``, ``$2``, ...), which
asyncpg accepts natively. The Nth placeholder in a fragment always refers to
the Nth element of its parameter tuple.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple


def placeholder(index: int) -> str:
    """Render the 1-based positional placeholder for ``index``."""
    if index < 1:
        raise ValueError(f"Placeholder index must be >= 1, got {index}")
    return f"${index}"


@dataclass(frozen=True)
class SqlFragment:
    """
    A partial query string plus the values bound to its placeholders.

    Attributes
    ----------
    fragment : str
        Text meant for substitution into a larger query template. May be empty.
    parameters : tuple
        Values in placeholder order.
    """

    fragment: str
    parameters: Tuple[Any, ...] = ()

    @property
    def next_placeholder(self) -> str:
        """Placeholder for the first parameter appended after this fragment."""
        return placeholder(len(self.parameters) + 1)

    def __bool__(self) -> bool:
        return bool(self.fragment)


class PositionalParams:
    """
    Ordered parameter list that hands out contiguous placeholders.

    Example
    -------
        params = PositionalParams()
        params.add(10)        # "$1"
        params.add("%acme%")  # "$2"
        params.as_tuple()     # (10, "%acme%")
    """

    def __init__(self) -> None:
        self._values: List[Any] = []

    def add(self, value: Any) -> str:
        self._values.append(value)
        return placeholder(len(self._values))

    def as_tuple(self) -> Tuple[Any, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return len(self._values)


__all__ = ["PositionalParams", "SqlFragment", "placeholder"]
