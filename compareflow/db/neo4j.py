"""Neo4j driver for the application store.

Users, connections and validations live in Neo4j.  The module keeps one
lazily created driver per process; ``close_driver()`` runs from the
FastAPI lifespan in compareflow/main.py.  Pool limits come from the
NEO4J_* settings.
"""

import logging
from contextlib import contextmanager
from typing import Any, Generator

from neo4j import Driver, GraphDatabase, Session

from compareflow.core.config import settings

logger = logging.getLogger(__name__)

_driver: Driver | None = None


def get_driver() -> Driver:
    global _driver
    if _driver is None:
        logger.info("Opening Neo4j driver for %s", settings.NEO4J_URI)
        _driver = GraphDatabase.driver(
            settings.NEO4J_URI,
            auth=(settings.NEO4J_USER, settings.NEO4J_PASSWORD),
            max_connection_pool_size=settings.NEO4J_MAX_CONNECTION_POOL_SIZE,
            max_connection_lifetime=settings.NEO4J_MAX_CONNECTION_LIFETIME_S,
            connection_acquisition_timeout=settings.NEO4J_CONNECTION_ACQUISITION_TIMEOUT_S,
            connection_timeout=settings.NEO4J_CONNECTION_TIMEOUT_S,
        )
    return _driver


def close_driver() -> None:
    """Release every pooled connection. Call at shutdown."""
    global _driver
    if _driver is not None:
        _driver.close()
        _driver = None


@contextmanager
def get_session() -> Generator[Session, None, None]:
    session = get_driver().session()
    try:
        yield session
    finally:
        session.close()


def store_status() -> dict[str, Any]:
    """Status block for the health endpoint: connected, uri, error."""
    status: dict[str, Any] = {"connected": False, "uri": settings.NEO4J_URI, "error": None}
    try:
        get_driver().verify_connectivity()
        status["connected"] = True
    except Exception as exc:
        status["error"] = str(exc)
    return status


def verify_connectivity() -> bool:
    return bool(store_status()["connected"])
