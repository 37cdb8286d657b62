"""API request/response models for Connection and connector operations."""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from compareflow.connectors.base import ColumnInfo
from compareflow.models.schema import Connection


class ConnectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, description="Registered connector type, e.g. 'postgresql'")
    config: dict[str, Any] = Field(
        ...,
        description="Connector-specific settings; validated only when the connection is used.",
    )

    model_config = {"json_schema_extra": {"example": {
        "name": "warehouse",
        "type": "postgresql",
        "config": {
            "host": "db.example.com",
            "database": "analytics",
            "username": "reader",
            "password": "secret",
        },
    }}}

    def to_domain(self, user_id: UUID) -> Connection:
        return Connection(user_id=user_id, **self.model_dump())


class ConnectionUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[str] = Field(default=None, min_length=1)
    config: Optional[dict[str, Any]] = None

    def apply_to(self, connection: Connection) -> Connection:
        """Return a new Connection with non-None update fields applied."""
        updated = connection.model_copy(
            update={k: v for k, v in self.model_dump().items() if v is not None}
        )
        updated.touch()
        return updated


# The full domain entity is the response
ConnectionResponse = Connection


class ConnectionListResponse(BaseModel):
    items: list[Connection]
    count: int


class ConnectionTestResponse(BaseModel):
    success: bool
    message: str


class TableListResponse(BaseModel):
    tables: list[str] = Field(default_factory=list)


class ColumnListResponse(BaseModel):
    columns: list[ColumnInfo] = Field(default_factory=list)


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, description="SQL executed verbatim on the connection")


class QueryResponse(BaseModel):
    rows: list[dict[str, Any]] = Field(default_factory=list)
    row_count: int = 0


# ---------------------------------------------------------------------------
# Connector catalogue
# ---------------------------------------------------------------------------


class ConnectorListResponse(BaseModel):
    connectors: list[str]


class ConfigValidateRequest(BaseModel):
    config: dict[str, Any] = Field(default_factory=dict)


class ConfigValidateResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
