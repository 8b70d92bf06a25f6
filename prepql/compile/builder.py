"""Core statement assembly.

``QueryBuilder`` is the top-level orchestrator.  It turns column lists,
filter maps, order maps and limit specs into a
:class:`~prepql.compile.base.CompiledStatement`: SQL text with positional
placeholders plus the :class:`~prepql.schema.params.ParameterSet` to bind.

Placeholder order always matches bind order: every clause emits exactly one
placeholder and clauses are appended in the order they are rendered.  For
``UPDATE`` the SET clauses are rendered (and bound) before the WHERE clauses.

Sub-builder wiring
------------------
QueryBuilder
  ├── ParameterSetBuilder  (params.py)
  ├── WhereClauseBuilder   (clause_builders.py)
  ├── OrderClauseBuilder   (clause_builders.py)
  └── LimitClauseBuilder   (clause_builders.py)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from prepql.compile.base import CompiledStatement, QmarkCompiler, SQLCompiler
from prepql.compile.clause_builders import (
    LimitClauseBuilder,
    OrderClauseBuilder,
    WhereClauseBuilder,
)
from prepql.compile.params import ParameterSetBuilder, split_filter_key
from prepql.compile.types import TypeInferencer
from prepql.errors import (
    AlwaysTrueWhereClauseError,
    DisallowedOperatorError,
    EmptyUpdateDataError,
    EmptyWhereClauseError,
    WildcardSelectError,
)
from prepql.schema.config import BuilderConfig
from prepql.schema.params import ParameterSet

logger = logging.getLogger("prepql")

#: Filter keys that would turn a row-scoped WHERE into a table-wide one.
ALWAYS_TRUE_KEYS: frozenset[str] = frozenset({"*", "true", "1"})


class QueryBuilder:
    """Compiles structured input to positional-parameter SQL.

    Args:
        compiler: Placeholder renderer; defaults to ``?`` placeholders.
        config: Builder configuration; defaults to ``BuilderConfig()``.
        inferencer: Type inferencer; override to bind additional types.
    """

    def __init__(
        self,
        compiler: SQLCompiler | None = None,
        config: BuilderConfig | None = None,
        inferencer: TypeInferencer | None = None,
    ) -> None:
        self._compiler = compiler or QmarkCompiler()
        self._config = config or BuilderConfig()
        self._params = ParameterSetBuilder(self._config, self._compiler, inferencer)
        self._where = WhereClauseBuilder()
        self._order = OrderClauseBuilder()
        self._limit = LimitClauseBuilder()

    # ------------------------------------------------------------------
    # SELECT
    # ------------------------------------------------------------------

    def build_select(
        self,
        columns: Sequence[str],
        table: str,
        where: Mapping[str, Any] | None = None,
        order: Mapping[str, Any] | None = None,
        limit: Any = None,
    ) -> CompiledStatement:
        """Compile ``SELECT <columns> FROM <table> [WHERE] [ORDER BY] [LIMIT]``.

        Args:
            columns: Columns to retrieve; ``*`` is rejected.
            table: Table to read from.
            where: Optional filter map.
            order: Optional column → ``ASC``/``DESC`` map.
            limit: Optional row count or ``(offset, count)`` pair.

        Returns:
            The compiled statement and its parameters.

        Raises:
            WildcardSelectError: If the column list selects every column.
            ValidationError: (or subclass) for invalid where/order/limit input.
        """
        column_sql = ", ".join(columns)
        if not column_sql.strip() or "*" in column_sql:
            raise WildcardSelectError(list(columns))

        params = self._params.build(where)
        order_clauses = self._order.build(order)

        parts = [f"SELECT {column_sql}", f"FROM {table}"]
        where_sql = self._where.build(params)
        if where_sql:
            parts.append(where_sql)
        if order_clauses:
            parts.append(f"ORDER BY {', '.join(order_clauses)}")
        if limit is not None:
            parts.append(f"LIMIT {self._limit.build(limit)}")

        return self._compiled(" ".join(parts), params)

    # ------------------------------------------------------------------
    # UPDATE / INSERT
    # ------------------------------------------------------------------

    def build_update(
        self,
        table: str,
        data: Mapping[str, Any],
        where: Mapping[str, Any],
    ) -> CompiledStatement:
        """Compile ``UPDATE <table> SET … WHERE …``.

        SET values are bound before WHERE values.

        Raises:
            EmptyWhereClauseError: If ``where`` is empty.
            AlwaysTrueWhereClauseError: If ``where`` targets every row.
            EmptyUpdateDataError: If ``data`` is empty.
            DisallowedOperatorError: If a ``data`` key carries a
                non-``=`` operator.
        """
        if not where:
            raise EmptyWhereClauseError()
        if any(str(key).strip().lower() in ALWAYS_TRUE_KEYS for key in where):
            raise AlwaysTrueWhereClauseError()
        if not data:
            raise EmptyUpdateDataError()
        for key in data:
            self._check_assignment(str(key).strip())

        set_params = self._params.build(data)
        where_params = self._params.build(where)

        sql = (
            f"UPDATE {table} SET {', '.join(set_params.conditions)} "
            f"{self._where.build(where_params)}"
        )
        return self._compiled(sql, set_params.concat(where_params))

    def build_insert(self, table: str, data: Mapping[str, Any]) -> CompiledStatement:
        """Compile ``INSERT INTO <table> (<columns>) VALUES (<placeholders>)``.

        Raises:
            EmptyUpdateDataError: If ``data`` is empty.
            DisallowedOperatorError: If a key is not a bare column name.
        """
        if not data:
            raise EmptyUpdateDataError()

        placeholder = self._compiler.param_placeholder()
        inferencer = self._params.inferencer
        params = ParameterSet()
        for raw_key, raw_value in data.items():
            column = str(raw_key).strip()
            if split_filter_key(column)[1] is not None:
                raise DisallowedOperatorError(column, [])
            self._params.check_key(column)
            tag = inferencer.infer_type(raw_value)
            params.add_clause(column, tag, inferencer.normalize(raw_value, tag))

        placeholders = ", ".join(placeholder for _ in range(len(params)))
        sql = (
            f"INSERT INTO {table} ({', '.join(params.conditions)}) "
            f"VALUES ({placeholders})"
        )
        return self._compiled(sql, params)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_assignment(self, key: str) -> None:
        operator = split_filter_key(key)[1]
        if operator is not None and operator != "=":
            raise DisallowedOperatorError(key, ["="])

    def _compiled(self, sql: str, params: ParameterSet) -> CompiledStatement:
        logger.debug("Compiled statement: %s [types=%s]", sql, params.type_list)
        return CompiledStatement(sql=sql, params=params)
