"""Custom exception hierarchy for prepql.

All public errors inherit from PrepQLError so callers can catch the base
class for any prepql-specific failure.
"""
from __future__ import annotations

from typing import Any


class PrepQLError(Exception):
    """Base exception for all prepql errors."""


class ValidationError(PrepQLError):
    """Raised when caller input cannot be turned into a safe statement.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. WILDCARD_SELECT).
        details: Extra context describing the offending input.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for API layers."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class UnsupportedTypeError(ValidationError):
    """Raised when a value has no known binding-type mapping."""

    def __init__(self, type_name: str) -> None:
        super().__init__(
            f"Unsupported type: {type_name}",
            code="UNSUPPORTED_TYPE",
            details={"type": type_name},
        )


class WildcardSelectError(ValidationError):
    """Raised when a SELECT would fetch every column."""

    def __init__(self, columns: list[str]) -> None:
        super().__init__(
            "Select * is not allowed; enumerate the columns to retrieve.",
            code="WILDCARD_SELECT",
            details={"columns": columns},
        )


class InvalidOrderDirectionError(ValidationError):
    """Raised when an ORDER BY direction is neither ASC nor DESC."""

    def __init__(self, column: str, direction: Any) -> None:
        super().__init__(
            f"Order must either be ASC or DESC. Order column: {column}",
            code="INVALID_ORDER_DIRECTION",
            details={"column": column, "direction": direction},
        )


class InvalidLimitError(ValidationError):
    """Raised when a LIMIT spec is neither an int nor an (offset, count) pair."""

    def __init__(self, limit: Any) -> None:
        super().__init__(
            "Limit must either be a single non-negative integer, "
            "or a 2-element sequence of non-negative integers",
            code="INVALID_LIMIT",
            details={"limit": repr(limit)},
        )


class DisallowedOperatorError(ValidationError):
    """Raised when a filter key uses an operator outside the allowlist."""

    def __init__(self, key: str, allowed_operators: list[str]) -> None:
        if allowed_operators:
            message = (
                f"Filter key '{key}' must be a column name, optionally followed "
                f"by one of {allowed_operators}."
            )
        else:
            message = f"Key '{key}' must be a bare column name."
        super().__init__(
            message,
            code="DISALLOWED_OPERATOR",
            details={"key": key, "allowed_operators": allowed_operators},
        )


class InvalidWhereClauseError(ValidationError):
    """Raised when a WHERE clause cannot scope a statement to specific rows."""

    def __init__(self, message: str, code: str = "INVALID_WHERE") -> None:
        super().__init__(message, code=code)


class EmptyWhereClauseError(InvalidWhereClauseError):
    """Raised when a row-scoped operation is given no WHERE clause."""

    def __init__(self) -> None:
        super().__init__(
            "Where clause cannot be empty.",
            code="EMPTY_WHERE",
        )


class AlwaysTrueWhereClauseError(InvalidWhereClauseError):
    """Raised when a row-scoped WHERE clause degenerates to ``true`` or ``1``."""

    def __init__(self) -> None:
        super().__init__(
            "Where clause must not be true or 1; specify the rows to target.",
            code="ALWAYS_TRUE_WHERE",
        )


class EmptyUpdateDataError(ValidationError):
    """Raised when an UPDATE or INSERT has no column data."""

    def __init__(self) -> None:
        super().__init__(
            "Data to write must not be empty.",
            code="EMPTY_UPDATE_DATA",
        )


class ResultMappingError(ValidationError):
    """Raised when a fetched row cannot populate the requested result type."""

    def __init__(self, result_type: type, columns: list[str], reason: str) -> None:
        super().__init__(
            f"Cannot map columns {columns} onto {result_type.__name__}: {reason}",
            code="RESULT_MAPPING",
            details={"result_type": result_type.__name__, "columns": columns},
        )


class QueryError(PrepQLError):
    """Raised when the backend rejects a statement.

    Args:
        message: Human-readable description of the failed step.
        query: The SQL text that was (or would have been) executed.
        native_error: The backend's own diagnostic text.
    """

    def __init__(self, message: str, query: str, native_error: str) -> None:
        super().__init__(f"{message}, error: {native_error} for query: {query}")
        self.query = query
        self.native_error = native_error


class QueryPreparationError(QueryError):
    """Raised when the backend cannot prepare a statement."""


class QueryExecutionError(QueryError):
    """Raised when the backend fails to execute a statement or fetch its rows."""


class CompilationError(PrepQLError):
    """Raised when a statement cannot be compiled for the target handle.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause
