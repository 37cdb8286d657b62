"""Connector contract shared by every database backend.

A connector turns an untyped configuration mapping into a typed config,
opens a DB-API connection (the *handle*) and introspects tables and
columns with dialect-specific SQL.  ``build_connection_string`` renders
the canonical connection string, but drivers receive each config value
as its own argument so credentials are never re-parsed.  Connectors
hold no per-call state: a fresh instance is produced by the registry
for every lookup.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import closing
from typing import Any, ClassVar, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from compareflow.connectors.errors import ConfigError, ConnectError, ProbeError, QueryError
from compareflow.core.config import settings

logger = logging.getLogger(__name__)

TEST_QUERY = "SELECT 1"


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class ColumnInfo(BaseModel):
    """A column as reported by a backend's catalog."""

    name: str
    data_type: str
    nullable: bool


class ConnectorConfig(BaseModel):
    """Typed configuration for one backend.

    Deserialization is strict (a string is never coerced into a port
    number) and unknown keys are ignored.  Subclasses declare their
    required fields in ``REQUIRED_FIELDS`` as ``(attribute, label)``
    pairs and fill optional values in ``apply_defaults``.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    REQUIRED_FIELDS: ClassVar[tuple[tuple[str, str], ...]] = ()

    def validate_required(self) -> None:
        for attr, label in self.REQUIRED_FIELDS:
            if not getattr(self, attr):
                raise ConfigError(f"{label} is required")

    def apply_defaults(self) -> None:
        """Fill optional fields the caller left empty."""


def split_table_name(table_name: str, default_schema: str) -> tuple[str, str]:
    """Split ``schema.table`` on the first dot; bare names get *default_schema*."""
    schema, sep, table = table_name.partition(".")
    if not sep:
        return default_schema, table_name
    return schema, table


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def _to_transport(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


# ---------------------------------------------------------------------------
# Connector
# ---------------------------------------------------------------------------


class BaseConnector(ABC):
    """Abstract base class for all database connectors.

    Subclasses provide the class attributes below plus
    ``build_connection_string`` and ``_open``; everything else is shared.
    """

    type: ClassVar[str]
    display_name: ClassVar[str]
    config_class: ClassVar[type[ConnectorConfig]]
    default_schema: ClassVar[str]
    tables_query: ClassVar[str]
    columns_query: ClassVar[str]

    def __init__(
        self,
        connect_timeout: Optional[float] = None,
        query_timeout: Optional[float] = None,
    ) -> None:
        self.connect_timeout = (
            settings.CONNECTOR_CONNECT_TIMEOUT_S if connect_timeout is None else connect_timeout
        )
        self.query_timeout = (
            settings.CONNECTOR_QUERY_TIMEOUT_S if query_timeout is None else query_timeout
        )

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def build_connection_string(self, config: Any) -> str:
        """Return the connection string for a parsed config (pure)."""

    @abstractmethod
    def _open(self, config: Any) -> Any:
        """Open a DB-API connection, passing the driver each config value as its own argument."""

    def _ping(self, handle: Any) -> None:
        if getattr(handle, "closed", False):
            raise ConnectionError("connection is closed")

    def _column_params(self, schema: str, table: str) -> Any:
        return (schema, table)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def parse_config(self, raw: Mapping[str, Any]) -> ConnectorConfig:
        """Deserialize, validate, then default a raw configuration mapping."""
        if not isinstance(raw, Mapping):
            raise ConfigError(
                f"failed to parse {self.display_name} config: "
                f"expected an object, got {type(raw).__name__}"
            )
        try:
            config = self.config_class.model_validate(dict(raw))
        except ValidationError as exc:
            raise ConfigError(
                f"failed to parse {self.display_name} config: {_describe_validation_error(exc)}"
            ) from exc
        config.validate_required()
        config.apply_defaults()
        return config

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self, config: ConnectorConfig) -> Any:
        if not isinstance(config, self.config_class):
            raise ConnectError(
                f"invalid config type: expected {self.config_class.__name__}, "
                f"got {type(config).__name__}"
            )
        try:
            handle = self._open(config)
        except Exception as exc:
            raise ConnectError(f"failed to connect: {exc}") from exc
        logger.debug("Opened %s connection", self.type)
        return handle

    def close(self, handle: Any) -> None:
        try:
            handle.close()
        except Exception as exc:
            logger.warning("Failed to close %s connection: %s", self.type, exc)
        else:
            logger.debug("Closed %s connection", self.type)

    def test_connection(self, config: ConnectorConfig) -> None:
        """Connect, ping, run ``SELECT 1`` and close, failing on the first error."""
        handle = self.connect(config)
        try:
            try:
                self._ping(handle)
            except Exception as exc:
                raise ProbeError(f"failed to ping database: {exc}") from exc
            try:
                with closing(handle.cursor()) as cursor:
                    cursor.execute(TEST_QUERY)
                    if cursor.fetchone() is None:
                        raise LookupError("test query returned no rows")
            except Exception as exc:
                raise ProbeError(f"failed to execute test query: {exc}") from exc
        finally:
            self.close(handle)

    # ------------------------------------------------------------------
    # Introspection and queries
    # ------------------------------------------------------------------

    def _execute(
        self, handle: Any, query: str, params: Any = None
    ) -> tuple[list[str], list[Any]]:
        """Run *query* and return (column names, rows)."""
        with closing(handle.cursor()) as cursor:
            if params is None:
                cursor.execute(query)
            else:
                cursor.execute(query, params)
            if cursor.description is None:
                return [], []
            columns = [d[0] for d in cursor.description]
            return columns, list(cursor.fetchall())

    def get_tables(self, handle: Any) -> list[str]:
        """Return user tables as ``schema.table``, ordered by schema then name."""
        try:
            _, rows = self._execute(handle, self.tables_query)
        except Exception as exc:
            raise QueryError(f"failed to query tables: {exc}") from exc
        return [row[0] for row in rows]

    def get_columns(self, handle: Any, table_name: str) -> list[ColumnInfo]:
        schema, table = split_table_name(table_name, self.default_schema)
        try:
            _, rows = self._execute(handle, self.columns_query, self._column_params(schema, table))
        except Exception as exc:
            raise QueryError(f"failed to query columns: {exc}") from exc
        try:
            return [
                ColumnInfo(name=row[0], data_type=row[1], nullable=row[2] == "YES")
                for row in rows
            ]
        except (IndexError, ValidationError) as exc:
            raise QueryError(f"failed to read column row: {exc}") from exc

    def execute_query(self, handle: Any, query: str) -> list[dict[str, Any]]:
        """Run caller-supplied SQL verbatim and return each row as a mapping."""
        try:
            columns, rows = self._execute(handle, query)
        except Exception as exc:
            raise QueryError(f"failed to execute query: {exc}") from exc
        return [
            {column: _to_transport(value) for column, value in zip(columns, row)}
            for row in rows
        ]
