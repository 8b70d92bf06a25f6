"""Test fixtures: sample DDL, seed rows and a recording database handle."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from prepql.execute.handle import BackendError, CursorResultSet
from prepql.schema.params import BoundValue

_FIXTURES_DIR = Path(__file__).parent

PEOPLE_COLUMNS = ["id", "firstname", "lastname", "age", "height", "created_at"]

PEOPLE_ROWS = [
    (1, "Alice", "Smith", 34, 1.68, "2020-03-15 09:30:00"),
    (2, "Bob", "Jones", 11, 1.42, "2021-07-01 00:00:00"),
    (3, "Charlie", "Brown", 9, 1.30, "2022-01-10 12:00:00"),
    (4, "Diana", "Prince", 41, 1.75, "2018-06-01 08:00:00"),
    (5, "Eve", "Foster", 27, None, "2023-09-01 17:45:00"),
]


def load_ddl() -> str:
    """Return the sample SQLite DDL for the ``people`` table."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()


INSERT_PERSON = (
    "INSERT INTO people (id, firstname, lastname, age, height, created_at) "
    "VALUES (?, ?, ?, ?, ?, ?)"
)


class RecordingStatement:
    """Statement double that records calls and replays canned rows."""

    def __init__(self, handle: RecordingHandle, sql: str) -> None:
        self.handle = handle
        self.sql = sql
        self.bound: list[BoundValue] | None = None
        self.executed = False
        self.closed = False

    def bind(self, values: Sequence[BoundValue]) -> None:
        self.bound = list(values)

    def execute(self) -> None:
        if self.handle.fail_on == "execute":
            raise BackendError(self.handle.native_error)
        self.executed = True

    def fetch_result_set(self) -> CursorResultSet:
        if self.handle.fail_on == "fetch":
            raise BackendError(self.handle.native_error)
        rows = iter(self.handle.rows)

        def fetchone() -> tuple[Any, ...] | None:
            row = next(rows, None)
            if row is None and self.handle.fail_on == "row":
                raise BackendError(self.handle.native_error)
            return row

        return CursorResultSet(self.handle.columns, fetchone)

    @property
    def affected_rows(self) -> int:
        return self.handle.affected

    def close(self) -> None:
        self.closed = True


class RecordingHandle:
    """In-memory handle that records prepared statements.

    Args:
        columns: Column names returned by every result set.
        rows: Row tuples returned by every result set.
        paramstyle: Reported DB-API paramstyle.
        fail_on: ``"prepare"``, ``"execute"`` or ``"fetch"`` to simulate a
            backend failure at that step; ``"row"`` fails when stepping
            past the last canned row.
    """

    def __init__(
        self,
        columns: Sequence[str] = (),
        rows: Sequence[tuple[Any, ...]] = (),
        paramstyle: str = "qmark",
        fail_on: str | None = None,
        affected: int = 0,
    ) -> None:
        self.columns = list(columns)
        self.rows = list(rows)
        self._paramstyle = paramstyle
        self.fail_on = fail_on
        self.affected = affected
        self.native_error = "You have an error in your SQL syntax"
        self.statements: list[RecordingStatement] = []

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    @property
    def last_error(self) -> str:
        return self.native_error if self.fail_on else ""

    @property
    def last_insert_id(self) -> int:
        return 42

    def prepare(self, sql: str) -> RecordingStatement:
        if self.fail_on == "prepare":
            raise BackendError(self.native_error)
        statement = RecordingStatement(self, sql)
        self.statements.append(statement)
        return statement

    @property
    def last_statement(self) -> RecordingStatement:
        return self.statements[-1]
