"""Pytest fixtures for recordkit tests."""

import sqlite3

import pytest

from recordkit.core import config, database


SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    age INTEGER,
    email TEXT UNIQUE
);
CREATE TABLE articles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    view_count INTEGER DEFAULT 0
);
"""


@pytest.fixture(autouse=True)
def reset_record_config():
    """Each test starts with the default table prefix and driver."""
    config.set_table_prefix("")
    yield
    config.set_table_prefix("")
    database.set_connection_factory(None)


@pytest.fixture
def sqlite_db(tmp_path):
    """SQLite database file with the test schema, installed as the connection factory.

    A fresh connection is opened for every call, mirroring the per-call
    connection lifecycle of the library.
    """
    db_path = tmp_path / "recordkit.db"
    conn = sqlite3.connect(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()

    database.set_connection_factory(lambda: sqlite3.connect(db_path))
    return db_path


class FakeCursor:
    """DB-API cursor double that records executed statements."""

    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self.rowcount = -1
        self.lastrowid = connection.lastrowid
        self.closed = False

    def execute(self, sql, params=()):
        self.connection.executed.append((sql, tuple(params)))
        if self.connection.error is not None:
            raise self.connection.error
        if sql in self.connection.statement_errors:
            raise self.connection.statement_errors[sql]
        self.description = [(column, None, None, None, None, None, None) for column in self.connection.columns]
        self.rowcount = self.connection.rowcount

    def fetchall(self):
        return list(self.connection.rows)

    def fetchone(self):
        return self.connection.rows[0] if self.connection.rows else None

    def close(self):
        self.closed = True


class FakeConnection:
    """DB-API connection double: canned results, records commits/rollbacks/closes."""

    def __init__(self):
        self.executed = []
        self.columns = []
        self.rows = []
        self.rowcount = 0
        self.lastrowid = None
        self.error = None
        self.statement_errors = {}
        self.cursor_error = None
        self.commits = 0
        self.rollbacks = 0
        self.opened = 0
        self.closed = 0
        self.cursors = []

    def cursor(self):
        if self.cursor_error is not None:
            raise self.cursor_error
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed += 1

    @property
    def last_statement(self):
        return self.executed[-1]


@pytest.fixture
def fake_db():
    """Recording fake connection installed as the connection factory."""
    connection = FakeConnection()

    def connect():
        connection.opened += 1
        return connection

    database.set_connection_factory(connect)
    return connection
