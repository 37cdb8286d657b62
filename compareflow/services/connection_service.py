"""Connection operations: resolve a connector, parse the stored config,
open a handle, run one operation, and release the handle.

The service is stateless; the only shared state is the connector registry.
Handles are never reused across calls.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generator, Mapping, Optional

from compareflow.connectors.base import BaseConnector, ColumnInfo, ConnectorConfig
from compareflow.connectors.errors import ConfigError
from compareflow.connectors.registry import ConnectorRegistry, default_registry
from compareflow.core.errors import UnprocessableError
from compareflow.models.schema import Connection

logger = logging.getLogger(__name__)


class ConnectionService:
    """Orchestrates connector operations for stored connections."""

    def __init__(self, connector_registry: Optional[ConnectorRegistry] = None) -> None:
        self._registry = default_registry if connector_registry is None else connector_registry

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, connection: Connection) -> tuple[BaseConnector, ConnectorConfig]:
        connector = self._registry.get(connection.type)
        try:
            config = connector.parse_config(connection.config)
        except ConfigError as exc:
            raise ConfigError(f"failed to parse config: {exc.message}") from exc
        return connector, config

    @contextmanager
    def _session(
        self, connector: BaseConnector, config: ConnectorConfig
    ) -> Generator[Any, None, None]:
        handle = connector.connect(config)
        try:
            yield handle
        finally:
            connector.close(handle)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def test_connection(self, connection: Connection) -> None:
        connector, config = self._resolve(connection)
        try:
            connector.test_connection(config)
        except Exception:
            logger.info("Connection test failed for connection %s (%s)", connection.id, connection.type)
            raise

    def get_tables(self, connection: Connection) -> list[str]:
        connector, config = self._resolve(connection)
        with self._session(connector, config) as handle:
            return connector.get_tables(handle)

    def get_columns(self, connection: Connection, table_name: str) -> list[ColumnInfo]:
        if not table_name:
            raise UnprocessableError("Table name is required")
        connector, config = self._resolve(connection)
        with self._session(connector, config) as handle:
            return connector.get_columns(handle, table_name)

    def execute_query(self, connection: Connection, query: str) -> list[dict[str, Any]]:
        """Run *query* verbatim; the caller is trusted and already authorized."""
        connector, config = self._resolve(connection)
        with self._session(connector, config) as handle:
            return connector.execute_query(handle, query)

    def validate_connection_config(self, connector_type: str, raw: Mapping[str, Any]) -> None:
        """Dry-run the connector's config parsing, discarding the result."""
        connector = self._registry.get(connector_type)
        connector.parse_config(raw)

    def get_supported_connectors(self) -> set[str]:
        return self._registry.list()
