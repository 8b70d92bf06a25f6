"""Compiler abstractions: CompiledStatement and the SQLCompiler ABC.

Statements are always bound positionally; the only dialect-specific step is
the placeholder text, which follows the DB-API ``paramstyle`` of the handle:

- ``QmarkCompiler`` renders ``?`` (``sqlite3``, MySQLi-style prepared
  statements).
- ``FormatCompiler`` renders ``%s`` (``PyMySQL``, ``mysqlclient``,
  ``psycopg``).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from prepql.schema.params import BoundValue, ParameterSet


@dataclass
class CompiledStatement:
    """The output of a successful build.

    Attributes:
        sql: The statement text with positional placeholders.
        params: Clauses to bind, in placeholder order.
    """

    sql: str
    params: ParameterSet = field(default_factory=ParameterSet)

    @property
    def type_list(self) -> str:
        return self.params.type_list

    @property
    def values(self) -> list[Any]:
        return self.params.values

    @property
    def bound_values(self) -> list[BoundValue]:
        return self.params.bound_values


class SQLCompiler(ABC):
    """Abstract base for paramstyle-specific placeholder rendering."""

    @abstractmethod
    def param_placeholder(self) -> str:
        """Return the positional placeholder string (e.g. ``'?'``)."""

    @property
    @abstractmethod
    def paramstyle(self) -> str:
        """Return the DB-API paramstyle this compiler targets."""


class QmarkCompiler(SQLCompiler):
    """Question-mark placeholders: ``WHERE age > ?``."""

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def param_placeholder(self) -> str:
        return "?"


class FormatCompiler(SQLCompiler):
    """ANSI C format placeholders: ``WHERE age > %s``."""

    @property
    def paramstyle(self) -> str:
        return "format"

    def param_placeholder(self) -> str:
        return "%s"
