"""Databricks SQL warehouse connector (databricks-sql-connector).

Config keys (all required, no defaults):
  workspace     — workspace URL, with or without the http(s):// scheme
  http_path     — warehouse HTTP path, e.g. /sql/1.0/warehouses/abc123
  access_token  — personal access token
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from databricks import sql as databricks_sql

from compareflow.connectors.base import BaseConnector, ConnectorConfig

DATABRICKS_PORT = 443

_TABLES_QUERY = """
    SELECT
        table_schema || '.' || table_name AS full_table_name
    FROM information_schema.tables
    WHERE table_type = 'TABLE'
      AND table_schema NOT IN ('information_schema', 'system')
    ORDER BY table_schema, table_name
"""

_COLUMNS_QUERY = """
    SELECT
        column_name,
        data_type,
        is_nullable
    FROM information_schema.columns
    WHERE table_schema = :schema AND table_name = :table
    ORDER BY ordinal_position
"""


def strip_scheme(workspace: str) -> str:
    host = workspace.removeprefix("https://")
    return host.removeprefix("http://")


class DatabricksConfig(ConnectorConfig):
    REQUIRED_FIELDS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("workspace", "workspace URL"),
        ("http_path", "HTTP path"),
        ("access_token", "access token"),
    )

    workspace: Optional[str] = None
    http_path: Optional[str] = None
    access_token: Optional[str] = None


class DatabricksConnector(BaseConnector):
    type = "databricks"
    display_name = "Databricks"
    config_class = DatabricksConfig
    default_schema = "default"
    tables_query = _TABLES_QUERY
    columns_query = _COLUMNS_QUERY

    def build_connection_string(self, config: DatabricksConfig) -> str:
        host = strip_scheme(config.workspace)
        return f"databricks://token:{config.access_token}@{host}:{DATABRICKS_PORT}{config.http_path}"

    def _open(self, config: DatabricksConfig) -> Any:
        return databricks_sql.connect(
            server_hostname=strip_scheme(config.workspace),
            http_path=config.http_path,
            access_token=config.access_token,
            _socket_timeout=self.query_timeout,
        )

    def _ping(self, handle: Any) -> None:
        if not getattr(handle, "open", True):
            raise ConnectionError("connection is closed")

    def _column_params(self, schema: str, table: str) -> Any:
        return {"schema": schema, "table": table}
