"""Error kinds raised by the connector layer.

Every error carries an explicit ``kind`` so callers can branch on the
category instead of matching message text.  Messages are built by
prefixing one sentence of context (the phase that failed) to the cause.
"""

from enum import Enum


class ErrorKind(str, Enum):
    UNSUPPORTED_BACKEND = "unsupported_backend"
    CONFIG = "config"
    CONNECT = "connect"
    PROBE = "probe"
    QUERY = "query"


class ConnectorError(Exception):
    """Base class for all connector failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnsupportedBackendError(ConnectorError):
    """Raised when a connector type is not present in the registry."""

    kind = ErrorKind.UNSUPPORTED_BACKEND

    def __init__(self, connector_type: str) -> None:
        self.connector_type = connector_type
        super().__init__(f"unsupported connector type: {connector_type}")


class ConfigError(ConnectorError):
    """Raw configuration could not be deserialized or failed a required check."""

    kind = ErrorKind.CONFIG


class ConnectError(ConnectorError):
    """Opening a handle to the backend failed."""

    kind = ErrorKind.CONNECT


class ProbeError(ConnectorError):
    """A handle was opened but the ping or the test query failed."""

    kind = ErrorKind.PROBE


class QueryError(ConnectorError):
    """An introspection or ad-hoc query failed to execute or to read a row."""

    kind = ErrorKind.QUERY
