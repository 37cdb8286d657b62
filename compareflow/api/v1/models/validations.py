"""API request/response models for Validation."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from compareflow.models.schema import Connection, Validation, ValidationStatus


class ValidationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    source_connection_id: UUID
    target_connection_id: UUID
    config: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self, user_id: UUID) -> Validation:
        return Validation(user_id=user_id, **self.model_dump())


class ValidationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    source_connection_id: Optional[UUID] = None
    target_connection_id: Optional[UUID] = None
    config: Optional[dict[str, Any]] = None

    def apply_to(self, validation: Validation) -> Validation:
        """Return a new Validation with non-None update fields applied."""
        updated = validation.model_copy(
            update={k: v for k, v in self.model_dump().items() if v is not None}
        )
        updated.touch()
        return updated


class ValidationResponse(Validation):
    """A validation with its source and target connections embedded.

    Either side is ``None`` when the connection no longer exists.
    """

    source_connection: Optional[Connection] = None
    target_connection: Optional[Connection] = None

    @classmethod
    def embed(
        cls,
        validation: Validation,
        source: Optional[Connection],
        target: Optional[Connection],
    ) -> "ValidationResponse":
        return cls(
            **validation.model_dump(),
            source_connection=source,
            target_connection=target,
        )


class ValidationListResponse(BaseModel):
    items: list[ValidationResponse]
    count: int


class ValidationStatusResponse(BaseModel):
    id: UUID
    name: str
    status: ValidationStatus
    updated_at: datetime
