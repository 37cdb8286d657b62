"""PostgreSQL connector (psycopg2).

Config keys:
  host, database, username, password  — required
  port      — default 5432
  ssl_mode  — default "prefer"
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

import psycopg2

from compareflow.connectors.base import BaseConnector, ConnectorConfig

DEFAULT_PORT = 5432
DEFAULT_SSL_MODE = "prefer"

_TABLES_QUERY = """
    SELECT schemaname || '.' || tablename
    FROM pg_tables
    WHERE schemaname NOT IN ('pg_catalog', 'information_schema')
    ORDER BY schemaname, tablename
"""

_COLUMNS_QUERY = """
    SELECT
        column_name,
        data_type,
        is_nullable
    FROM information_schema.columns
    WHERE table_schema = %s AND table_name = %s
    ORDER BY ordinal_position
"""


class PostgreSQLConfig(ConnectorConfig):
    REQUIRED_FIELDS: ClassVar[tuple[tuple[str, str], ...]] = (
        ("host", "host"),
        ("database", "database"),
        ("username", "username"),
        ("password", "password"),
    )

    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    ssl_mode: Optional[str] = None

    def apply_defaults(self) -> None:
        if not self.port:
            self.port = DEFAULT_PORT
        if not self.ssl_mode:
            self.ssl_mode = DEFAULT_SSL_MODE


class PostgreSQLConnector(BaseConnector):
    type = "postgresql"
    display_name = "PostgreSQL"
    config_class = PostgreSQLConfig
    default_schema = "public"
    tables_query = _TABLES_QUERY
    columns_query = _COLUMNS_QUERY

    def build_connection_string(self, config: PostgreSQLConfig) -> str:
        return (
            f"host={config.host} port={config.port} user={config.username} "
            f"password={config.password} dbname={config.database} sslmode={config.ssl_mode}"
        )

    def _open(self, config: PostgreSQLConfig) -> Any:
        # Keyword arguments are quoted by psycopg2, so spaces and quotes survive.
        return psycopg2.connect(
            host=config.host,
            port=config.port,
            dbname=config.database,
            user=config.username,
            password=config.password,
            sslmode=config.ssl_mode,
            connect_timeout=max(1, int(self.connect_timeout)),
            options=f"-c statement_timeout={int(self.query_timeout * 1000)}",
        )
