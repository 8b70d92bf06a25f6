"""prepql – safe, type-tagged prepared statements from structured input.

Public API
----------
``Database``
    ``select``, ``select_row``, ``update``, ``insert`` and ``last_insert_id``
    over an injected database handle.

``QueryBuilder``
    Compile the same statements to SQL text plus a ``ParameterSet`` without
    executing them.

Re-exported types
-----------------
``ParameterSet``, ``BoundValue``, ``TypeTag``, ``GenericRow``,
``BuilderConfig``, ``TypeInferencer``, ``SQLiteHandle`` and all error
classes.  The SQLAlchemy adapter is available as
``prepql.execute.alchemy.SQLAlchemyHandle`` (``pip install "prepql[sqlalchemy]"``).

Extensibility
-------------
Placeholder styles for further DB-API paramstyles can be registered via::

    from prepql.compile.registry import CompilerFactory

    @CompilerFactory.register("numeric")
    class NumericCompiler(SQLCompiler):
        ...

Additional value types are bound by subclassing ``TypeInferencer`` and
passing an instance to ``Database(handle, inferencer=...)``.
"""

from __future__ import annotations

from prepql.client import Database
from prepql.compile.base import CompiledStatement, FormatCompiler, QmarkCompiler, SQLCompiler
from prepql.compile.builder import QueryBuilder
from prepql.compile.params import ParameterSetBuilder
from prepql.compile.registry import CompilerFactory
from prepql.compile.types import TypeInferencer
from prepql.errors import (
    AlwaysTrueWhereClauseError,
    CompilationError,
    DisallowedOperatorError,
    EmptyUpdateDataError,
    EmptyWhereClauseError,
    InvalidLimitError,
    InvalidOrderDirectionError,
    InvalidWhereClauseError,
    PrepQLError,
    QueryError,
    QueryExecutionError,
    QueryPreparationError,
    ResultMappingError,
    UnsupportedTypeError,
    ValidationError,
    WildcardSelectError,
)
from prepql.execute.executor import StatementExecutor
from prepql.execute.handle import BackendError, DatabaseHandle
from prepql.execute.sqlite import SQLiteHandle
from prepql.schema.config import BuilderConfig
from prepql.schema.params import BoundValue, ParameterSet, TypeTag
from prepql.schema.rows import GenericRow

# ---------------------------------------------------------------------------
# Register built-in placeholder compilers with CompilerFactory
# ---------------------------------------------------------------------------

CompilerFactory.register_class("qmark", QmarkCompiler)
CompilerFactory.register_class("format", FormatCompiler)
CompilerFactory.register_class("pyformat", FormatCompiler)

__all__ = [
    # Core API
    "Database",
    "QueryBuilder",
    "ParameterSetBuilder",
    "TypeInferencer",
    "StatementExecutor",
    # Data types
    "ParameterSet",
    "BoundValue",
    "TypeTag",
    "GenericRow",
    "BuilderConfig",
    # Compilation
    "CompiledStatement",
    "CompilerFactory",
    "SQLCompiler",
    "QmarkCompiler",
    "FormatCompiler",
    # Handles
    "DatabaseHandle",
    "SQLiteHandle",
    # Errors
    "PrepQLError",
    "ValidationError",
    "UnsupportedTypeError",
    "WildcardSelectError",
    "InvalidOrderDirectionError",
    "InvalidLimitError",
    "DisallowedOperatorError",
    "InvalidWhereClauseError",
    "EmptyWhereClauseError",
    "AlwaysTrueWhereClauseError",
    "EmptyUpdateDataError",
    "ResultMappingError",
    "QueryError",
    "QueryPreparationError",
    "QueryExecutionError",
    "CompilationError",
    "BackendError",
]
