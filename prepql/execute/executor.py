"""Statement execution and result materialization.

``StatementExecutor`` drives a :class:`~prepql.execute.handle.DatabaseHandle`
through prepare → bind → execute → fetch.  Every :class:`BackendError` is
re-raised as a :class:`~prepql.errors.QueryError` subclass carrying the
driver's message and the query text.  Statements are closed on every path
once they exist.
"""
from __future__ import annotations

import logging
from contextlib import closing
from typing import TypeVar

from prepql.errors import QueryExecutionError, QueryPreparationError
from prepql.execute.handle import BackendError, DatabaseHandle, Statement
from prepql.schema.params import ParameterSet

logger = logging.getLogger("prepql")

T = TypeVar("T")


class StatementExecutor:
    """Runs compiled statements against a handle.

    Args:
        handle: The caller-owned database handle.
    """

    def __init__(self, handle: DatabaseHandle) -> None:
        self._handle = handle

    def prepare(self, sql: str, params: ParameterSet) -> Statement:
        """Prepare ``sql`` and bind ``params`` when there are any.

        Raises:
            QueryPreparationError: If the backend cannot prepare ``sql``.
        """
        try:
            statement = self._handle.prepare(sql)
        except BackendError as exc:
            logger.debug("Prepare failed: %s", exc.native_error)
            raise QueryPreparationError("Could not prepare query", sql, exc.native_error) from exc
        if not params.is_empty():
            try:
                statement.bind(params.bound_values)
            except BackendError as exc:
                statement.close()
                raise QueryPreparationError("Could not bind parameters", sql, exc.native_error) from exc
        return statement

    def execute(self, statement: Statement, query: str, result_type: type[T]) -> list[T]:
        """Execute a bound statement and return its rows as ``result_type``.

        The statement is closed before returning or raising.

        Raises:
            QueryExecutionError: If execution or result fetching fails.
            ResultMappingError: If a row does not fit ``result_type``.
        """
        with closing(statement):
            try:
                statement.execute()
            except BackendError as exc:
                raise QueryExecutionError("Error executing query", query, exc.native_error) from exc
            try:
                result = statement.fetch_result_set()
            except BackendError as exc:
                raise QueryExecutionError("Error getting results", query, exc.native_error) from exc

            rows: list[T] = []
            try:
                row = result.next_row_as(result_type)
                while row is not None:
                    rows.append(row)
                    row = result.next_row_as(result_type)
            except BackendError as exc:
                raise QueryExecutionError("Error getting results", query, exc.native_error) from exc

        logger.debug("Fetched %d row(s)", len(rows))
        return rows

    def run(self, sql: str, params: ParameterSet, result_type: type[T]) -> list[T]:
        """Prepare, bind and execute ``sql``, returning its rows."""
        return self.execute(self.prepare(sql, params), sql, result_type)

    def execute_write(self, sql: str, params: ParameterSet) -> int:
        """Prepare, bind and execute a statement without a result set.

        Returns:
            The number of affected rows.

        Raises:
            QueryPreparationError: If the backend cannot prepare ``sql``.
            QueryExecutionError: If execution fails.
        """
        with closing(self.prepare(sql, params)) as statement:
            try:
                statement.execute()
            except BackendError as exc:
                raise QueryExecutionError("Error executing query", sql, exc.native_error) from exc
            affected = statement.affected_rows

        logger.debug("Affected %d row(s)", affected)
        return affected
