"""Clause-level SQL builders.

Each class handles exactly one SQL clause and is independent of the others.

Classes
-------
WhereClauseBuilder  — ``WHERE <cond> AND <cond> …``
OrderClauseBuilder  — ``<column> ASC|DESC`` fragments for ``ORDER BY``
LimitClauseBuilder  — ``N`` or ``offset,count`` for ``LIMIT``
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from prepql.errors import InvalidLimitError, InvalidOrderDirectionError
from prepql.schema.params import ParameterSet

#: Sort directions accepted in order maps.
ORDER_DIRECTIONS: frozenset[str] = frozenset({"ASC", "DESC"})


class WhereClauseBuilder:
    """Builds the ``WHERE …`` clause from a parameter set."""

    def build(self, params: ParameterSet) -> str:
        """Return ``WHERE`` + conditions joined by ``AND``, or ``""`` if empty."""
        if params.is_empty():
            return ""
        return "WHERE " + " AND ".join(params.conditions)


def generate_where(params: ParameterSet) -> str:
    return WhereClauseBuilder().build(params)


class OrderClauseBuilder:
    """Builds ``ORDER BY`` fragments from a column → direction map."""

    def build(self, order_map: Mapping[str, Any] | None) -> list[str]:
        """Return ``"<column> <DIRECTION>"`` fragments in insertion order.

        Raises:
            InvalidOrderDirectionError: If a direction is not ASC or DESC.
        """
        if not order_map:
            return []
        clauses: list[str] = []
        for column, direction in order_map.items():
            if not isinstance(direction, str):
                raise InvalidOrderDirectionError(column, direction)
            normalized = direction.strip().upper()
            if normalized not in ORDER_DIRECTIONS:
                raise InvalidOrderDirectionError(column, direction)
            clauses.append(f"{column} {normalized}")
        return clauses


class LimitClauseBuilder:
    """Builds the argument of a ``LIMIT`` clause.

    A single count renders as ``"10"``; an ``(offset, count)`` pair renders
    in the MySQL combined form ``"10,20"``.
    """

    def build(self, limit: Any) -> str:
        """Return the ``LIMIT`` argument for ``limit``.

        Raises:
            InvalidLimitError: If ``limit`` is neither a non-negative int nor
                a 2-element list/tuple of non-negative ints.
        """
        if _is_count(limit):
            return str(limit)
        if isinstance(limit, (list, tuple)) and len(limit) == 2 and all(
            _is_count(part) for part in limit
        ):
            offset, count = limit
            return f"{offset},{count}"
        raise InvalidLimitError(limit)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
