"""Integration tests for the Neo4j persistence layer.

These tests require a running Neo4j instance (docker compose up -d).
They are skipped automatically when Neo4j is unreachable.

Every node a test creates carries the test prefix in its name or email
and is removed in the fixture teardown.
"""

from uuid import uuid4

import pytest

from compareflow.db.constraints import apply_constraints_and_indexes
from compareflow.db.neo4j import get_session, verify_connectivity
from compareflow.db.repositories.connection import ConnectionRepository
from compareflow.db.repositories.user import User, UserRepository
from compareflow.db.repositories.validation import ValidationRepository
from compareflow.models.schema import Connection, Validation, ValidationStatus

# ---------------------------------------------------------------------------
# Skip entire module when Neo4j is not available
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.skipif(
    not verify_connectivity(),
    reason="Neo4j is not reachable — start docker compose up -d",
)


# ---------------------------------------------------------------------------
# Session fixture — cleans up test data after each test
# ---------------------------------------------------------------------------

_TEST_PREFIX = "test_repo_"


@pytest.fixture()
def session():
    """Yield a live Neo4j session; delete all test nodes after the test."""
    with get_session() as s:
        apply_constraints_and_indexes(s)
        yield s
        s.run(
            "MATCH (n) WHERE n.name STARTS WITH $prefix OR n.email STARTS WITH $prefix "
            "DETACH DELETE n",
            prefix=_TEST_PREFIX,
        )


@pytest.fixture()
def owner(session) -> User:
    user = User(email=f"{_TEST_PREFIX}{uuid4().hex[:8]}@example.com", hashed_password="x")
    return UserRepository(session).create(user)


def _connection(owner: User, suffix: str, **config) -> Connection:
    return Connection(
        name=f"{_TEST_PREFIX}{suffix}",
        type="postgresql",
        config=config or {"host": "localhost", "port": 5432},
        user_id=owner.id,
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class TestUserRepository:
    def test_create_and_get_by_email(self, session, owner):
        repo = UserRepository(session)
        fetched = repo.get_by_email(owner.email)
        assert fetched is not None
        assert fetched.id == owner.id
        assert repo.get_by_id(owner.id).email == owner.email

    def test_count_includes_new_user(self, session, owner):
        assert UserRepository(session).count() >= 1

    def test_delete(self, session, owner):
        repo = UserRepository(session)
        assert repo.delete(owner.id) is True
        assert repo.get_by_id(owner.id) is None


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------


class TestConnectionRepository:
    def test_config_round_trips_as_mapping(self, session, owner):
        repo = ConnectionRepository(session)
        conn = repo.create(_connection(owner, "rt", host="db", port=5432, encrypt=True))
        fetched = repo.get_by_id(conn.id)
        assert fetched.config == {"host": "db", "port": 5432, "encrypt": True}
        assert fetched.user_id == owner.id

    def test_scoped_reads(self, session, owner):
        repo = ConnectionRepository(session)
        conn = repo.create(_connection(owner, "scoped"))
        assert repo.get_for_user(conn.id, owner.id) is not None
        assert repo.get_for_user(conn.id, uuid4()) is None

    def test_list_by_user_sorted_by_name(self, session, owner):
        repo = ConnectionRepository(session)
        repo.create(_connection(owner, "b"))
        repo.create(_connection(owner, "a"))
        names = [c.name for c in repo.list_by_user(owner.id)]
        assert names == [f"{_TEST_PREFIX}a", f"{_TEST_PREFIX}b"]

    def test_update(self, session, owner):
        repo = ConnectionRepository(session)
        conn = repo.create(_connection(owner, "upd"))
        conn.config = {"host": "elsewhere"}
        repo.update(conn)
        assert repo.get_by_id(conn.id).config == {"host": "elsewhere"}

    def test_delete_for_user_requires_owner(self, session, owner):
        repo = ConnectionRepository(session)
        conn = repo.create(_connection(owner, "del"))
        assert repo.delete_for_user(conn.id, uuid4()) is False
        assert repo.delete_for_user(conn.id, owner.id) is True
        assert repo.get_by_id(conn.id) is None


# ---------------------------------------------------------------------------
# Validations
# ---------------------------------------------------------------------------


class TestValidationRepository:
    def _validation(self, session, owner) -> Validation:
        connections = ConnectionRepository(session)
        src = connections.create(_connection(owner, "src"))
        tgt = connections.create(_connection(owner, "tgt"))
        return Validation(
            name=f"{_TEST_PREFIX}val",
            source_connection_id=src.id,
            target_connection_id=tgt.id,
            user_id=owner.id,
        )

    def test_create_links_connections(self, session, owner):
        repo = ValidationRepository(session)
        v = repo.create(self._validation(session, owner))
        record = session.run(
            "MATCH (v:Validation {id: $id})-[:COMPARES_FROM]->(s:Connection), "
            "(v)-[:COMPARES_TO]->(t:Connection) RETURN s.id AS s, t.id AS t",
            id=str(v.id),
        ).single()
        assert record["s"] == str(v.source_connection_id)
        assert record["t"] == str(v.target_connection_id)

    def test_status_and_results_persist(self, session, owner):
        repo = ValidationRepository(session)
        v = repo.create(self._validation(session, owner))
        v.status = ValidationStatus.COMPLETED
        v.results = {"source": {"reachable": True}}
        repo.update(v)
        fetched = repo.get_for_user(v.id, owner.id)
        assert fetched.status == ValidationStatus.COMPLETED
        assert fetched.results == {"source": {"reachable": True}}

    def test_relinking_on_update_keeps_one_edge_per_side(self, session, owner):
        repo = ValidationRepository(session)
        v = repo.create(self._validation(session, owner))
        other = ConnectionRepository(session).create(_connection(owner, "other"))
        v.target_connection_id = other.id
        repo.update(v)
        record = session.run(
            "MATCH (v:Validation {id: $id})-[r:COMPARES_TO]->(t) "
            "RETURN count(r) AS n, collect(t.id) AS ids",
            id=str(v.id),
        ).single()
        assert record["n"] == 1
        assert record["ids"] == [str(other.id)]

    def test_delete_for_user(self, session, owner):
        repo = ValidationRepository(session)
        v = repo.create(self._validation(session, owner))
        assert repo.delete_for_user(v.id, owner.id) is True
        assert repo.get_by_id(v.id) is None
