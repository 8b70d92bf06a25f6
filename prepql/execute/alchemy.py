"""SQLAlchemy handle adapter.

Runs statements through ``Connection.exec_driver_sql`` so the positional
SQL compiled by prepql reaches the DB-API driver unchanged.  The handle's
``paramstyle`` is the engine dialect's, which selects the placeholder
compiler (``?`` for SQLite, ``%s`` for PyMySQL / mysqlclient / psycopg).

Usage::

    engine = create_engine("mysql+pymysql://user:pw@localhost/app")
    with engine.connect() as conn:
        db = Database(SQLAlchemyHandle(conn))
        people = db.select(["firstname"], "people", {"age >": 11})
"""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from prepql.execute.handle import BackendError, CursorResultSet
from prepql.schema.params import BoundValue


class SQLAlchemyStatement:
    """A statement bound to a :class:`SQLAlchemyHandle`.

    The driver prepares the statement when it is executed.
    """

    def __init__(self, handle: SQLAlchemyHandle, sql: str) -> None:
        self._handle = handle
        self._sql = sql
        self._params: tuple = ()
        self._result: CursorResult | None = None

    def bind(self, values: Sequence[BoundValue]) -> None:
        self._params = tuple(bound.value for bound in values)

    def execute(self) -> None:
        try:
            self._result = self._handle.connection.exec_driver_sql(self._sql, self._params)
        except SQLAlchemyError as exc:
            raise self._handle.record_error(exc) from exc
        if self._sql.lstrip().upper().startswith("INSERT") and self._result.lastrowid:
            self._handle.record_insert_id(self._result.lastrowid)

    def fetch_result_set(self) -> CursorResultSet:
        result = self._result
        if result is None or not result.returns_rows:
            raise BackendError("statement did not produce a result set")
        return CursorResultSet(list(result.keys()), self._fetchone)

    def _fetchone(self) -> Sequence | None:
        try:
            return self._result.fetchone()
        except SQLAlchemyError as exc:
            raise self._handle.record_error(exc) from exc

    @property
    def affected_rows(self) -> int:
        return self._result.rowcount if self._result is not None else -1

    def close(self) -> None:
        if self._result is not None:
            self._result.close()
            self._result = None


class SQLAlchemyHandle:
    """Database handle over a caller-owned SQLAlchemy ``Connection``.

    Args:
        connection: An open connection; transactions are the caller's.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self._last_error = ""
        self._last_insert_id = 0

    @property
    def paramstyle(self) -> str:
        return self.connection.dialect.paramstyle

    @property
    def last_error(self) -> str:
        return self._last_error

    @property
    def last_insert_id(self) -> int:
        return self._last_insert_id

    def prepare(self, sql: str) -> SQLAlchemyStatement:
        return SQLAlchemyStatement(self, sql)

    def record_error(self, exc: SQLAlchemyError) -> BackendError:
        native = exc.orig if isinstance(exc, DBAPIError) else exc
        self._last_error = str(native)
        return BackendError(self._last_error)

    def record_insert_id(self, row_id: int) -> None:
        self._last_insert_id = row_id
