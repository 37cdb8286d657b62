"""Shared fixtures for unit tests.

No database is contacted: a fake DB-API driver is patched over each
backend's ``connect`` so tests can script query results and check that
every opened handle is closed exactly once.
"""

from __future__ import annotations

import pytest

from compareflow.connectors import ConnectorRegistry, register_builtin_connectors


class FakeCursor:
    def __init__(self, connection: "FakeConnection") -> None:
        self._connection = connection
        self.description = None
        self._rows: list = []
        self.closed = False

    def execute(self, query, params=None):
        self._connection.executed.append((query, params))
        if self._connection.execute_error is not None:
            raise self._connection.execute_error
        if self._connection.results:
            columns, rows = self._connection.results.pop(0)
        else:
            columns, rows = ["?column?"], [(1,)]
        self.description = None if columns is None else [(c, None) for c in columns]
        self._rows = list(rows)

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    def close(self):
        self.closed = True


class FakeConnection:
    """Scripted DB-API connection.

    ``results`` is a queue of ``(columns, rows)`` pairs, one per executed
    statement; ``columns=None`` mimics a statement without a result set.
    Once the queue is empty every statement returns a single row.
    """

    def __init__(self, results=None, execute_error=None, closed=False, close_error=None):
        self.results = list(results or [])
        self.execute_error = execute_error
        self.close_error = close_error
        self.closed = closed
        self.close_calls = 0
        self.executed: list = []
        self.cursors: list[FakeCursor] = []

    @property
    def open(self) -> bool:
        return not self.closed

    def cursor(self):
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error
        self.closed = True


class FakeDriver:
    """Stands in for a driver module's ``connect`` function."""

    def __init__(self) -> None:
        self.calls: list = []
        self.connections: list[FakeConnection] = []
        self.connect_error: Exception | None = None
        self.results: list = []
        self.execute_error: Exception | None = None
        self.start_closed = False

    def connect(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.connect_error is not None:
            raise self.connect_error
        connection = FakeConnection(
            results=self.results,
            execute_error=self.execute_error,
            closed=self.start_closed,
        )
        self.connections.append(connection)
        return connection

    @property
    def last_connection(self) -> FakeConnection:
        return self.connections[-1]


@pytest.fixture(autouse=True, scope="session")
def builtin_connectors():
    register_builtin_connectors()


@pytest.fixture
def fake_driver():
    return FakeDriver()


@pytest.fixture
def pg_driver(monkeypatch, fake_driver):
    import psycopg2

    monkeypatch.setattr(psycopg2, "connect", fake_driver.connect)
    return fake_driver


@pytest.fixture
def mssql_driver(monkeypatch, fake_driver):
    import pymssql

    monkeypatch.setattr(pymssql, "connect", fake_driver.connect)
    return fake_driver


@pytest.fixture
def databricks_driver(monkeypatch, fake_driver):
    from compareflow.connectors.databricks import connector as databricks_connector

    monkeypatch.setattr(databricks_connector.databricks_sql, "connect", fake_driver.connect)
    return fake_driver


@pytest.fixture
def registry():
    """A private registry holding the bundled connectors."""
    target = ConnectorRegistry()
    register_builtin_connectors(target)
    return target


@pytest.fixture
def pg_config():
    return {
        "host": "db.internal",
        "database": "analytics",
        "username": "reader",
        "password": "s3cret",
    }


@pytest.fixture
def make_connection():
    """Build a standalone FakeConnection."""
    return FakeConnection
