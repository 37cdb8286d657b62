"""Abstract base repository.

Entity repositories share one Neo4j session and one property codec:
Neo4j nodes hold only flat primitive properties, so UUIDs, datetimes and
enums are written as strings and mappings as JSON text.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

from neo4j import Session


class BaseRepository(ABC):
    """Common persistence operations over a Neo4j session."""

    # Properties stored as JSON text and decoded on read.
    JSON_FIELDS: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @abstractmethod
    def create(self, entity: Any) -> Any:
        """Persist a new entity and return it."""

    @abstractmethod
    def get_by_id(self, entity_id: UUID) -> Any | None:
        """Fetch a single entity by its UUID, or None if not found."""

    @abstractmethod
    def update(self, entity: Any) -> Any:
        """Overwrite an existing entity's properties and return it."""

    @abstractmethod
    def delete(self, entity_id: UUID) -> bool:
        """Delete an entity by UUID. Return True if it existed."""

    # ------------------------------------------------------------------
    # Property codec
    # ------------------------------------------------------------------

    @classmethod
    def _to_neo4j(cls, entity: Any) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in entity.model_dump().items():
            if isinstance(value, UUID):
                result[key] = str(value)
            elif isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, Enum):
                result[key] = value.value
            elif isinstance(value, (dict, list)):
                result[key] = json.dumps(value, default=str)
            else:
                result[key] = value
        return result

    @classmethod
    def _from_record(cls, record: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in record.items():
            if key in cls.JSON_FIELDS and isinstance(value, str):
                result[key] = json.loads(value) if value else {}
            else:
                result[key] = value
        return result
