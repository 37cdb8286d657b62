"""Unit tests for compareflow.connectors.registry."""

import threading

import pytest

from compareflow.connectors import (
    BUILTIN_CONNECTORS,
    ConnectorRegistry,
    DatabricksConnector,
    ErrorKind,
    PostgreSQLConnector,
    SQLServerConnector,
    UnsupportedBackendError,
    default_registry,
    list_types,
    register_builtin_connectors,
)


class TestConnectorRegistry:
    def test_register_then_get_returns_fresh_instances(self):
        reg = ConnectorRegistry()
        reg.register("postgresql", PostgreSQLConnector)
        first = reg.get("postgresql")
        second = reg.get("postgresql")
        assert isinstance(first, PostgreSQLConnector)
        assert first is not second

    def test_unknown_type_raises(self):
        reg = ConnectorRegistry()
        with pytest.raises(UnsupportedBackendError) as exc_info:
            reg.get("oracle")
        assert exc_info.value.kind == ErrorKind.UNSUPPORTED_BACKEND
        assert exc_info.value.message == "unsupported connector type: oracle"

    def test_empty_name_is_unknown(self):
        with pytest.raises(UnsupportedBackendError):
            ConnectorRegistry().get("")

    def test_register_replaces_existing_factory(self):
        reg = ConnectorRegistry()
        reg.register("db", PostgreSQLConnector)
        reg.register("db", SQLServerConnector)
        assert isinstance(reg.get("db"), SQLServerConnector)
        assert reg.list() == {"db"}

    def test_list_is_a_snapshot(self):
        reg = ConnectorRegistry()
        reg.register("postgresql", PostgreSQLConnector)
        names = reg.list()
        names.add("bogus")
        assert reg.list() == {"postgresql"}

    def test_contains(self):
        reg = ConnectorRegistry()
        reg.register("postgresql", PostgreSQLConnector)
        assert "postgresql" in reg
        assert "sqlserver" not in reg

    def test_factory_may_be_any_callable(self):
        reg = ConnectorRegistry()
        reg.register("pg-fast", lambda: PostgreSQLConnector(connect_timeout=1))
        assert reg.get("pg-fast").connect_timeout == 1

    def test_concurrent_register_and_get(self):
        reg = ConnectorRegistry()
        reg.register("postgresql", PostgreSQLConnector)
        errors: list[Exception] = []

        def writer(i: int) -> None:
            try:
                for j in range(50):
                    reg.register(f"db-{i}-{j}", DatabricksConnector)
            except Exception as exc:
                errors.append(exc)

        def reader() -> None:
            try:
                for _ in range(200):
                    assert isinstance(reg.get("postgresql"), PostgreSQLConnector)
                    reg.list()
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(reg.list()) == 1 + 4 * 50


class TestBuiltinConnectors:
    def test_builtin_types(self):
        reg = ConnectorRegistry()
        register_builtin_connectors(reg)
        assert reg.list() == {"postgresql", "sqlserver", "databricks"}

    def test_registration_is_idempotent(self):
        reg = ConnectorRegistry()
        register_builtin_connectors(reg)
        register_builtin_connectors(reg)
        assert len(reg.list()) == len(BUILTIN_CONNECTORS)

    def test_default_registry_holds_builtins(self):
        assert {"postgresql", "sqlserver", "databricks"} <= list_types()
        assert isinstance(default_registry.get("sqlserver"), SQLServerConnector)

    def test_list_types_tracks_default_registry(self, monkeypatch):
        monkeypatch.setattr(default_registry, "_factories", dict(default_registry._factories))
        default_registry.register("x", PostgreSQLConnector)
        assert "x" in list_types()
        assert isinstance(default_registry.get("x"), PostgreSQLConnector)
