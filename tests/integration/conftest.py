"""Shared fixtures and setup for all integration tests.

Neo4j-backed tests seed the bootstrap admin before they run, even when
the test client's ASGI lifespan hasn't fired yet.  Connector tests talk
to the PostgreSQL seeded by scripts/seed_test_db.py; its address can be
overridden with the COMPAREFLOW_TEST_PG_* environment variables.
"""

import os

import psycopg2
import pytest

from compareflow.connectors import register_builtin_connectors
from compareflow.core.config import settings
from compareflow.core.security import hash_password
from compareflow.db.constraints import apply_constraints_and_indexes
from compareflow.db.neo4j import get_session, verify_connectivity
from compareflow.db.repositories.user import User, UserRepository, UserRole

PG_CONFIG = {
    "host": os.environ.get("COMPAREFLOW_TEST_PG_HOST", "localhost"),
    "port": int(os.environ.get("COMPAREFLOW_TEST_PG_PORT", "5433")),
    "database": os.environ.get("COMPAREFLOW_TEST_PG_DATABASE", "compareflow_sample"),
    "username": os.environ.get("COMPAREFLOW_TEST_PG_USER", "compareflow"),
    "password": os.environ.get("COMPAREFLOW_TEST_PG_PASSWORD", "compareflow"),
    "ssl_mode": "disable",
}


def pg_available() -> bool:
    try:
        conn = psycopg2.connect(
            host=PG_CONFIG["host"],
            port=PG_CONFIG["port"],
            dbname=PG_CONFIG["database"],
            user=PG_CONFIG["username"],
            password=PG_CONFIG["password"],
            connect_timeout=5,
        )
        conn.close()
        return True
    except psycopg2.Error:
        return False


@pytest.fixture(scope="session", autouse=True)
def builtin_connectors():
    register_builtin_connectors()


@pytest.fixture(scope="session")
def pg_config():
    if not pg_available():
        pytest.skip(f"PostgreSQL is not reachable on {PG_CONFIG['host']}:{PG_CONFIG['port']}")
    return dict(PG_CONFIG)


@pytest.fixture(scope="session", autouse=True)
def ensure_admin_user():
    """Create constraints and seed the bootstrap admin once per test session."""
    if not verify_connectivity():
        return  # Neo4j-backed tests will be skipped anyway

    with get_session() as session:
        apply_constraints_and_indexes(session)
        repo = UserRepository(session)
        existing = repo.get_by_email(settings.FIRST_ADMIN_EMAIL.lower())
        if existing is None:
            admin = User(
                email=settings.FIRST_ADMIN_EMAIL.lower(),
                hashed_password=hash_password(settings.FIRST_ADMIN_PASSWORD),
                role=UserRole.ADMIN,
                full_name="Bootstrap Admin",
            )
            repo.create(admin)
