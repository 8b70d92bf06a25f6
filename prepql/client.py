"""``Database``: the caller-facing select / update / insert API.

The handle is created by the application and injected::

    conn = sqlite3.connect("app.db")
    db = Database(SQLiteHandle(conn))

    # SELECT firstname, lastname FROM people WHERE age > ? ORDER BY lastname ASC LIMIT 10,20
    people = db.select(
        ["firstname", "lastname"],
        "people",
        where={"age >": 11},
        order={"lastname": "asc"},
        limit=(10, 20),
    )

    person = db.select_row(["id", "firstname"], "people", {"id": 7}, result_type=Person)

``SELECT *`` is rejected; enumerate the columns to fetch.  There is no
``delete``: flag rows as deleted with ``update`` instead.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from prepql.compile.builder import QueryBuilder
from prepql.compile.registry import CompilerFactory
from prepql.compile.types import TypeInferencer
from prepql.errors import (
    AlwaysTrueWhereClauseError,
    EmptyWhereClauseError,
    InvalidWhereClauseError,
)
from prepql.execute.executor import StatementExecutor
from prepql.execute.handle import DatabaseHandle
from prepql.schema.config import BuilderConfig
from prepql.schema.rows import GenericRow

T = TypeVar("T")


class Database:
    """Builds and runs safe, parameterized statements on one handle.

    Args:
        handle: Caller-owned database handle.
        config: Builder configuration; defaults to ``BuilderConfig()``.
        inferencer: Type inferencer; override to bind additional types.
    """

    def __init__(
        self,
        handle: DatabaseHandle,
        config: BuilderConfig | None = None,
        inferencer: TypeInferencer | None = None,
    ) -> None:
        self._handle = handle
        self._builder = QueryBuilder(
            CompilerFactory.create(handle.paramstyle), config, inferencer
        )
        self._executor = StatementExecutor(handle)

    @property
    def builder(self) -> QueryBuilder:
        """The query builder, for compiling SQL without executing it."""
        return self._builder

    def select(
        self,
        columns: Sequence[str],
        table: str,
        where: Mapping[str, Any] | None = None,
        order: Mapping[str, Any] | None = None,
        limit: Any = None,
        result_type: type[T] = GenericRow,  # type: ignore[assignment]
    ) -> list[T]:
        """Select rows, always returning a list.

        Args:
            columns: Columns to retrieve; ``*`` is not allowed.
            table: Table to read from.
            where: Optional filter map.  Keys are column names for implicit
                equality (``{"firstname": "fred"}``) or a column name and an
                operator (``{"age >": 11}``).
            order: Optional column → ``"ASC"``/``"DESC"`` map
                (case-insensitive).
            limit: Optional row cap (``10``) or ``(offset, count)`` pair.
            result_type: Class instantiated per row; ``GenericRow`` by default.

        Returns:
            One ``result_type`` instance per row, in result-set order.

        Raises:
            ValidationError: (or subclass) for invalid input.
            QueryPreparationError: If the backend cannot prepare the query.
            QueryExecutionError: If execution or fetching fails.
        """
        compiled = self._builder.build_select(columns, table, where, order, limit)
        return self._executor.run(compiled.sql, compiled.params, result_type)

    def select_row(
        self,
        columns: Sequence[str],
        table: str,
        where: Mapping[str, Any] | Sequence[Any] | None,
        result_type: type[T] = GenericRow,  # type: ignore[assignment]
    ) -> T | None:
        """Select a single row: ``SELECT … WHERE … LIMIT 1``.

        Must be called with a where clause that identifies rows.

        Returns:
            The first matching row, or ``None`` when nothing matched.

        Raises:
            EmptyWhereClauseError: If ``where`` is empty.
            AlwaysTrueWhereClauseError: If the first element of ``where``
                is ``true`` or ``1``.
            InvalidWhereClauseError: If ``where`` is not a filter map.
        """
        if not where:
            raise EmptyWhereClauseError()
        first = next(iter(where))
        if isinstance(first, (str, int)) and not isinstance(first, bool):
            literal = str(first).strip()
            if literal.lower() == "true" or literal == "1":
                raise AlwaysTrueWhereClauseError()
        if not isinstance(where, Mapping):
            raise InvalidWhereClauseError("Where clause must be a mapping of column to value.")

        rows = self.select(columns, table, where, None, 1, result_type)
        return rows[0] if rows else None

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        where: Mapping[str, Any],
    ) -> int:
        """Update the rows matching ``where`` with ``data``.

        Returns:
            The number of affected rows.

        Raises:
            EmptyWhereClauseError: If ``where`` is empty.
            AlwaysTrueWhereClauseError: If ``where`` uses ``*``, ``true`` or ``1``.
            EmptyUpdateDataError: If ``data`` is empty.
        """
        compiled = self._builder.build_update(table, data, where)
        return self._executor.execute_write(compiled.sql, compiled.params)

    def insert(self, table: str, data: Mapping[str, Any]) -> int:
        """Insert one row and return its id (see :meth:`last_insert_id`)."""
        compiled = self._builder.build_insert(table, data)
        self._executor.execute_write(compiled.sql, compiled.params)
        return self.last_insert_id()

    def last_insert_id(self) -> int:
        return self._handle.last_insert_id
