"""Data models package.

Public surface area — import from here rather than from sub-modules directly.
"""

from compareflow.models.schema import (
    AuditedModel,
    Connection,
    ConnectionType,
    Validation,
    ValidationStatus,
)

__all__ = [
    # Base
    "AuditedModel",
    # Enums
    "ConnectionType",
    "ValidationStatus",
    # Entities
    "Connection",
    "Validation",
]
