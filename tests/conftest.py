"""Shared pytest fixtures for prepql unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from prepql import Database, QueryBuilder, SQLiteHandle
from tests.fixtures import INSERT_PERSON, PEOPLE_ROWS, load_ddl


@pytest.fixture()
def builder() -> QueryBuilder:
    """Default builder: ``?`` placeholders, operator allowlist enforced."""
    return QueryBuilder()


@pytest.fixture()
def conn() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database seeded with the ``people`` table."""
    connection = sqlite3.connect(":memory:")
    connection.executescript(load_ddl())
    connection.executemany(INSERT_PERSON, PEOPLE_ROWS)
    connection.commit()
    yield connection
    connection.close()


@pytest.fixture()
def handle(conn: sqlite3.Connection) -> SQLiteHandle:
    return SQLiteHandle(conn)


@pytest.fixture()
def db(handle: SQLiteHandle) -> Database:
    return Database(handle)
