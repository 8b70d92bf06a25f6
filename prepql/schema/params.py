"""Parameter set: the three parallel structures bound to a statement.

A ``ParameterSet`` keeps condition fragments, type tags and bound values in
lock-step.  ``add_clause`` is the only mutator and always appends to all
three, so ``conditions[i]`` owns the i-th placeholder, ``types[i]`` and
``values[i]``.

Usage::

    params = ParameterSet()
    params.add_clause("age > ? ", TypeTag.INTEGER, 11)
    params.type_list      # "i"
    params.bound_values   # [BoundValue(tag=TypeTag.INTEGER, value=11)]
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TypeTag(str, Enum):
    """Single-character binding type of a placeholder value."""

    INTEGER = "i"
    FLOAT = "d"
    STRING = "s"


@dataclass(frozen=True)
class BoundValue:
    """A value paired with its binding type.

    Attributes:
        tag: Binding type of ``value``.
        value: The normalized value handed to the driver.
    """

    tag: TypeTag
    value: Any


@dataclass
class ParameterSet:
    """Ordered (condition, type tag, value) triples for one statement part."""

    _conditions: list[str] = field(default_factory=list)
    _types: list[TypeTag] = field(default_factory=list)
    _values: list[Any] = field(default_factory=list)

    def add_clause(self, condition: str, tag: TypeTag, value: Any) -> ParameterSet:
        """Append one clause to all three sequences.

        Args:
            condition: Fragment in the form ``<field> <operator> ? ``.
            tag: Binding type of ``value``.
            value: The normalized value.

        Returns:
            ``self`` for further building.
        """
        self._conditions.append(condition)
        self._types.append(tag)
        self._values.append(value)
        return self

    @property
    def conditions(self) -> list[str]:
        return list(self._conditions)

    @property
    def types(self) -> list[TypeTag]:
        return list(self._types)

    @property
    def values(self) -> list[Any]:
        return list(self._values)

    @property
    def type_list(self) -> str:
        """The type tags concatenated, e.g. ``"isd"``."""
        return "".join(tag.value for tag in self._types)

    @property
    def bound_values(self) -> list[BoundValue]:
        """Tagged values in placeholder order."""
        return [BoundValue(tag, value) for tag, value in zip(self._types, self._values)]

    def is_empty(self) -> bool:
        return not self._conditions

    def concat(self, other: ParameterSet) -> ParameterSet:
        """Return a new set with this set's clauses followed by ``other``'s."""
        return ParameterSet(
            self._conditions + other._conditions,
            self._types + other._types,
            self._values + other._values,
        )

    def __len__(self) -> int:
        return len(self._conditions)
