"""Domain entities persisted by CompareFlow.

Core entity types:
  Connection  — credentials for one database, interpreted by a connector
  Validation  — a comparison job between a source and a target Connection

Each entity carries created_at / updated_at audit timestamps (UTC).
A Connection's ``config`` is the raw, unvalidated mapping handed to the
connector; it is stored as JSON text.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ConnectionType(str, Enum):
    """Bundled connector types.

    The set of accepted types is whatever the connector registry holds;
    this enum only names the built-in ones.
    """

    POSTGRESQL = "postgresql"
    SQLSERVER = "sqlserver"
    DATABRICKS = "databricks"


class ValidationStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Base model
# ---------------------------------------------------------------------------


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditedModel(BaseModel):
    """Shared audit fields present on every entity."""

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    model_config = {"from_attributes": True}

    def touch(self) -> None:
        self.updated_at = _utc_now()


# ---------------------------------------------------------------------------
# Core entities
# ---------------------------------------------------------------------------


class Connection(AuditedModel):
    """Stored credentials for one database."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1)
    config: dict[str, Any] = Field(default_factory=dict)
    user_id: UUID

    @field_validator("config", mode="before")
    @classmethod
    def null_config_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class Validation(AuditedModel):
    """A comparison job between two connections owned by the same user."""

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=255)
    source_connection_id: UUID
    target_connection_id: UUID
    config: dict[str, Any] = Field(default_factory=dict)
    status: ValidationStatus = ValidationStatus.PENDING
    results: dict[str, Any] = Field(default_factory=dict)
    user_id: UUID

    @field_validator("config", "results", mode="before")
    @classmethod
    def null_mapping_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v
