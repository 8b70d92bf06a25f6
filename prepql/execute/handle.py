"""The database handle protocol consumed by the executor.

prepql never opens connections itself.  The caller constructs a handle that
satisfies :class:`DatabaseHandle` (see :mod:`prepql.execute.sqlite` and
:mod:`prepql.execute.alchemy`) and passes it in.  Adapters translate
driver exceptions into :class:`BackendError`, carrying the driver's own
message, which the executor wraps together with the query text.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from prepql.errors import PrepQLError
from prepql.schema.params import BoundValue
from prepql.schema.rows import materialize_row

T = TypeVar("T")


class BackendError(PrepQLError):
    """Raised by handle adapters when the driver rejects an operation.

    Args:
        native_error: The driver's diagnostic text.
    """

    def __init__(self, native_error: str) -> None:
        super().__init__(native_error)
        self.native_error = native_error


@runtime_checkable
class ResultSet(Protocol):
    def next_row_as(self, result_type: type[T]) -> T | None:
        """Return the next row as ``result_type``, or ``None`` when exhausted."""


@runtime_checkable
class Statement(Protocol):
    def bind(self, values: Sequence[BoundValue]) -> None: ...

    def execute(self) -> None: ...

    def fetch_result_set(self) -> ResultSet: ...

    @property
    def affected_rows(self) -> int: ...

    def close(self) -> None: ...


@runtime_checkable
class DatabaseHandle(Protocol):
    @property
    def paramstyle(self) -> str: ...

    @property
    def last_error(self) -> str: ...

    @property
    def last_insert_id(self) -> int: ...

    def prepare(self, sql: str) -> Statement: ...


class CursorResultSet:
    """Result set over any DB-API style cursor.

    Args:
        columns: Column names in result order.
        fetchone: Returns the next row tuple, or ``None`` when exhausted.
    """

    def __init__(self, columns: Sequence[str], fetchone: Callable[[], Sequence[Any] | None]) -> None:
        self._columns = list(columns)
        self._fetchone = fetchone

    def next_row_as(self, result_type: type[T]) -> T | None:
        row = self._fetchone()
        if row is None:
            return None
        return materialize_row(result_type, self._columns, tuple(row))
