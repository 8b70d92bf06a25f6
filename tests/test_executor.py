"""Unit tests for StatementExecutor against a recording handle."""

from __future__ import annotations

import pytest

from prepql.errors import QueryExecutionError, QueryPreparationError, ResultMappingError
from prepql.execute.executor import StatementExecutor
from prepql.schema.params import BoundValue, ParameterSet, TypeTag
from prepql.schema.rows import GenericRow
from tests.fixtures import RecordingHandle

SQL = "SELECT id, firstname FROM people WHERE age > ? "


def _params() -> ParameterSet:
    return ParameterSet().add_clause("age > ? ", TypeTag.INTEGER, 11)


def test_rows_materialized_in_order():
    handle = RecordingHandle(["id", "firstname"], [(1, "Alice"), (4, "Diana")])
    rows = StatementExecutor(handle).run(SQL, _params(), GenericRow)
    assert [(r.id, r.firstname) for r in rows] == [(1, "Alice"), (4, "Diana")]
    statement = handle.last_statement
    assert statement.sql == SQL
    assert statement.bound == [BoundValue(TypeTag.INTEGER, 11)]
    assert statement.executed
    assert statement.closed


def test_no_rows():
    handle = RecordingHandle(["id"], [])
    assert StatementExecutor(handle).run(SQL, _params(), GenericRow) == []
    assert handle.last_statement.closed


def test_empty_params_are_not_bound():
    handle = RecordingHandle(["id"], [(1,)])
    StatementExecutor(handle).run("SELECT id FROM people", ParameterSet(), GenericRow)
    assert handle.last_statement.bound is None


def test_prepare_failure_carries_native_error_and_query():
    handle = RecordingHandle(fail_on="prepare")
    with pytest.raises(QueryPreparationError) as exc_info:
        StatementExecutor(handle).run(SQL, _params(), GenericRow)
    err = exc_info.value
    assert err.query == SQL
    assert err.native_error == handle.native_error
    assert str(err) == f"Could not prepare query, error: {handle.native_error} for query: {SQL}"
    assert handle.statements == []


def test_execute_failure_closes_statement():
    handle = RecordingHandle(fail_on="execute")
    with pytest.raises(QueryExecutionError) as exc_info:
        StatementExecutor(handle).run(SQL, _params(), GenericRow)
    assert str(exc_info.value).startswith("Error executing query")
    assert exc_info.value.query == SQL
    assert handle.last_statement.closed


def test_fetch_failure_closes_statement():
    handle = RecordingHandle(fail_on="fetch")
    with pytest.raises(QueryExecutionError) as exc_info:
        StatementExecutor(handle).run(SQL, _params(), GenericRow)
    assert str(exc_info.value).startswith("Error getting results")
    assert handle.last_statement.closed


def test_mapping_failure_closes_statement():
    class Narrow:
        def __init__(self, id):
            self.id = id

    handle = RecordingHandle(["id", "firstname"], [(1, "Alice")])
    with pytest.raises(ResultMappingError):
        StatementExecutor(handle).run(SQL, _params(), Narrow)
    assert handle.last_statement.closed


def test_execute_write_returns_affected_rows():
    handle = RecordingHandle(affected=3)
    params = ParameterSet().add_clause("is_deleted = ? ", TypeTag.INTEGER, 1)
    affected = StatementExecutor(handle).execute_write("UPDATE people SET is_deleted = ? ", params)
    assert affected == 3
    assert handle.last_statement.closed
    assert handle.last_statement.bound == [BoundValue(TypeTag.INTEGER, 1)]


def test_execute_write_failure():
    handle = RecordingHandle(fail_on="execute")
    with pytest.raises(QueryExecutionError):
        StatementExecutor(handle).execute_write("UPDATE people SET age = 1", ParameterSet())
    assert handle.last_statement.closed


def test_row_step_failure_is_wrapped():
    handle = RecordingHandle(["id", "firstname"], [(1, "Alice")], fail_on="row")
    with pytest.raises(QueryExecutionError) as exc_info:
        StatementExecutor(handle).run(SQL, _params(), GenericRow)
    err = exc_info.value
    assert str(err).startswith("Error getting results")
    assert err.native_error == handle.native_error
    assert err.query == SQL
    assert handle.last_statement.closed
