"""SQLite handle adapter built on the standard-library ``sqlite3`` module.

``sqlite3`` has no explicit prepare step, so :meth:`SQLiteHandle.prepare`
compiles the statement with ``EXPLAIN`` (binding NULL to every placeholder)
without running it.  Syntax errors and unknown tables or columns therefore
surface at prepare time, as they would with a server-side prepare.
"""
from __future__ import annotations

import re
import sqlite3
from collections.abc import Sequence

from prepql.execute.handle import BackendError, CursorResultSet
from prepql.schema.params import BoundValue

# String literals, quoted identifiers and comments, none of which hold placeholders.
_NON_PARAM_TEXT = re.compile(
    r"'(?:[^']|'')*'"
    r'|"(?:[^"]|"")*"'
    r"|`(?:[^`]|``)*`"
    r"|\[[^\]]*\]"
    r"|--[^\n]*"
    r"|/\*.*?\*/",
    re.DOTALL,
)


def count_placeholders(sql: str) -> int:
    """Count ``?`` placeholders in ``sql``, ignoring quoted text and comments."""
    return _NON_PARAM_TEXT.sub(" ", sql).count("?")


class SQLiteStatement:
    """A prepared statement on a :class:`SQLiteHandle`."""

    def __init__(self, handle: SQLiteHandle, sql: str) -> None:
        self._handle = handle
        self._sql = sql
        self._params: tuple = ()
        self._cursor: sqlite3.Cursor | None = None

    def bind(self, values: Sequence[BoundValue]) -> None:
        self._params = tuple(bound.value for bound in values)

    def execute(self) -> None:
        try:
            self._cursor = self._handle.connection.execute(self._sql, self._params)
        except sqlite3.Error as exc:
            raise self._handle.record_error(exc) from exc
        if self._sql.lstrip().upper().startswith("INSERT") and self._cursor.lastrowid:
            self._handle.record_insert_id(self._cursor.lastrowid)

    def fetch_result_set(self) -> CursorResultSet:
        cursor = self._cursor
        if cursor is None or cursor.description is None:
            raise BackendError("statement did not produce a result set")
        columns = [description[0] for description in cursor.description]
        return CursorResultSet(columns, self._fetchone)

    def _fetchone(self) -> tuple | None:
        # sqlite steps the next row here, so runtime errors can surface mid-fetch
        try:
            return self._cursor.fetchone()
        except sqlite3.Error as exc:
            raise self._handle.record_error(exc) from exc

    @property
    def affected_rows(self) -> int:
        return self._cursor.rowcount if self._cursor is not None else -1

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


class SQLiteHandle:
    """Database handle over a caller-owned ``sqlite3.Connection``.

    Transactions are left to the caller: commit on ``connection`` as needed.

    Args:
        connection: An open SQLite connection.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self._last_error = ""
        self._last_insert_id = 0

    @property
    def paramstyle(self) -> str:
        return sqlite3.paramstyle

    @property
    def last_error(self) -> str:
        return self._last_error

    @property
    def last_insert_id(self) -> int:
        return self._last_insert_id

    def prepare(self, sql: str) -> SQLiteStatement:
        try:
            self.connection.execute(f"EXPLAIN {sql}", [None] * count_placeholders(sql)).close()
        except sqlite3.Error as exc:
            raise self.record_error(exc) from exc
        return SQLiteStatement(self, sql)

    def record_error(self, exc: Exception) -> BackendError:
        self._last_error = str(exc)
        return BackendError(self._last_error)

    def record_insert_id(self, row_id: int) -> None:
        self._last_insert_id = row_id
