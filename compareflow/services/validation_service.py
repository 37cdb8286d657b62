"""Validation runs.

A run marks the validation ``running``, probes the source and target
connections, and finishes ``completed`` when both are reachable or
``failed`` otherwise.  No rows are compared.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from compareflow.connectors.errors import ConnectorError
from compareflow.db.repositories.validation import ValidationRepository
from compareflow.models.schema import Connection, Validation, ValidationStatus
from compareflow.services.connection_service import ConnectionService

logger = logging.getLogger(__name__)


class ValidationService:

    def __init__(
        self,
        repository: ValidationRepository,
        connection_service: Optional[ConnectionService] = None,
    ) -> None:
        self._repo = repository
        self._connections = connection_service or ConnectionService()

    def _probe(self, connection: Connection) -> dict[str, Any]:
        outcome: dict[str, Any] = {
            "connection_id": str(connection.id),
            "type": connection.type,
            "reachable": False,
        }
        try:
            self._connections.test_connection(connection)
        except ConnectorError as exc:
            outcome["error"] = exc.message
            outcome["error_kind"] = exc.kind.value
        else:
            outcome["reachable"] = True
        return outcome

    def run(self, validation: Validation, source: Connection, target: Connection) -> Validation:
        validation.status = ValidationStatus.RUNNING
        validation.touch()
        self._repo.update(validation)

        try:
            results = {"source": self._probe(source), "target": self._probe(target)}
        except Exception as exc:
            validation.results = {"error": str(exc)}
            validation.status = ValidationStatus.FAILED
            validation.touch()
            self._repo.update(validation)
            logger.exception("Validation %s aborted", validation.id)
            raise
        reachable = results["source"]["reachable"] and results["target"]["reachable"]

        validation.results = results
        validation.status = ValidationStatus.COMPLETED if reachable else ValidationStatus.FAILED
        validation.touch()
        self._repo.update(validation)
        logger.info("Validation %s finished with status %s", validation.id, validation.status.value)
        return validation
