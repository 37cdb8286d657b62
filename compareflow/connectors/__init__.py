"""Database connectors.

Public surface area — import from here rather than from sub-modules directly.
"""

from compareflow.connectors.base import BaseConnector, ColumnInfo, ConnectorConfig
from compareflow.connectors.databricks.connector import DatabricksConnector
from compareflow.connectors.errors import (
    ConfigError,
    ConnectError,
    ConnectorError,
    ErrorKind,
    ProbeError,
    QueryError,
    UnsupportedBackendError,
)
from compareflow.connectors.postgresql.connector import PostgreSQLConnector
from compareflow.connectors.registry import ConnectorRegistry, default_registry, list_types
from compareflow.connectors.sqlserver.connector import SQLServerConnector

BUILTIN_CONNECTORS: tuple[type[BaseConnector], ...] = (
    PostgreSQLConnector,
    SQLServerConnector,
    DatabricksConnector,
)


def register_builtin_connectors(target: ConnectorRegistry | None = None) -> None:
    """Register every bundled backend.  Safe to call more than once."""
    target = default_registry if target is None else target
    for connector_class in BUILTIN_CONNECTORS:
        target.register(connector_class.type, connector_class)


__all__ = [
    "BaseConnector",
    "ColumnInfo",
    "ConnectorConfig",
    "ConnectorRegistry",
    "default_registry",
    "list_types",
    "register_builtin_connectors",
    "BUILTIN_CONNECTORS",
    # Backends
    "PostgreSQLConnector",
    "SQLServerConnector",
    "DatabricksConnector",
    # Errors
    "ErrorKind",
    "ConnectorError",
    "UnsupportedBackendError",
    "ConfigError",
    "ConnectError",
    "ProbeError",
    "QueryError",
]
