"""Process-wide registry mapping connector type names to factories."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from compareflow.connectors.base import BaseConnector
from compareflow.connectors.errors import UnsupportedBackendError

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[], BaseConnector]


class ConnectorRegistry:
    """Thread-safe name -> factory map.

    ``get`` calls the factory on every lookup, so callers never share a
    connector instance.  Registering an existing name replaces it.
    """

    def __init__(self) -> None:
        self._factories: dict[str, ConnectorFactory] = {}
        self._lock = threading.Lock()

    def register(self, name: str, factory: ConnectorFactory) -> None:
        with self._lock:
            replaced = name in self._factories
            self._factories[name] = factory
        if replaced:
            logger.debug("Replaced connector factory for %r", name)

    def get(self, name: str) -> BaseConnector:
        with self._lock:
            factory = self._factories.get(name)
        if factory is None:
            raise UnsupportedBackendError(name)
        return factory()

    def list(self) -> set[str]:
        with self._lock:
            return set(self._factories)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._factories


# Default registry used by the application.
default_registry = ConnectorRegistry()


def list_types() -> set[str]:
    return default_registry.list()
