"""prepql execution layer: handle protocol, adapters and the executor.

The SQLAlchemy adapter lives in :mod:`prepql.execute.alchemy` and is not
imported here.
"""
from prepql.execute.executor import StatementExecutor
from prepql.execute.handle import (
    BackendError,
    CursorResultSet,
    DatabaseHandle,
    ResultSet,
    Statement,
)
from prepql.execute.sqlite import SQLiteHandle

__all__ = [
    "BackendError",
    "CursorResultSet",
    "DatabaseHandle",
    "ResultSet",
    "Statement",
    "SQLiteHandle",
    "StatementExecutor",
]
