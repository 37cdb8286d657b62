"""SQL Server connector (pymssql).

Config keys:
  server, database, username, password  — required
  port                      — default 1433
  encrypt                   — bool, default False
  trust_server_certificate  — bool, default True
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

import pymssql

from compareflow.connectors.base import BaseConnector, ConnectorConfig

DEFAULT_PORT = 1433

_TABLES_QUERY = """
    SELECT TABLE_SCHEMA + '.' + TABLE_NAME
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_SCHEMA, TABLE_NAME
"""

_COLUMNS_QUERY = """
    SELECT
        COLUMN_NAME,
        DATA_TYPE,
        IS_NULLABLE
    FROM INFORMATION_SCHEMA.COLUMNS
    WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s
    ORDER BY ORDINAL_POSITION
"""


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


class SQLServerConfig(ConnectorConfig):
    REQUIRED_FIELDS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("server", "server"),
        ("database", "database"),
        ("username", "username"),
        ("password", "password"),
    )

    server: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    encrypt: bool = False
    trust_server_certificate: bool = True

    def apply_defaults(self) -> None:
        if not self.port:
            self.port = DEFAULT_PORT


class SQLServerConnector(BaseConnector):
    type = "sqlserver"
    display_name = "SQL Server"
    config_class = SQLServerConfig
    default_schema = "dbo"
    tables_query = _TABLES_QUERY
    columns_query = _COLUMNS_QUERY

    def build_connection_string(self, config: SQLServerConfig) -> str:
        return (
            f"server={config.server};port={config.port};database={config.database};"
            f"user id={config.username};password={config.password};"
            f"encrypt={_bool_str(config.encrypt)};"
            f"TrustServerCertificate={_bool_str(config.trust_server_certificate)}"
        )

    def _open(self, config: SQLServerConfig) -> Any:
        return pymssql.connect(
            server=config.server,
            port=str(config.port),
            database=config.database,
            user=config.username,
            password=config.password,
            login_timeout=max(1, int(self.connect_timeout)),
            timeout=int(self.query_timeout),
            # FreeTDS has no notion of trusting the server certificate;
            # without encrypt the login packet is still encrypted when offered.
            encryption="require" if config.encrypt else "request",
        )

    def _ping(self, handle: Any) -> None:
        # pymssql exposes no liveness flag; the eager connect plus SELECT 1 cover it.
        pass
