"""Neo4j schema for the application store: constraints and indexes.

Node labels: User | Connection | Validation.  A Validation points at its
two connections through COMPARES_FROM / COMPARES_TO relationships.
"""

from neo4j import Session

_CONSTRAINTS = [
    "CREATE CONSTRAINT user_id_unique IF NOT EXISTS "
    "FOR (n:User) REQUIRE n.id IS UNIQUE",
    "CREATE CONSTRAINT user_email_unique IF NOT EXISTS "
    "FOR (n:User) REQUIRE n.email IS UNIQUE",
    "CREATE CONSTRAINT connection_id_unique IF NOT EXISTS "
    "FOR (n:Connection) REQUIRE n.id IS UNIQUE",
    "CREATE CONSTRAINT validation_id_unique IF NOT EXISTS "
    "FOR (n:Validation) REQUIRE n.id IS UNIQUE",
]

_INDEXES = [
    "CREATE INDEX connection_user_id IF NOT EXISTS "
    "FOR (n:Connection) ON (n.user_id)",
    "CREATE INDEX connection_type IF NOT EXISTS "
    "FOR (n:Connection) ON (n.type)",
    "CREATE INDEX validation_user_id IF NOT EXISTS "
    "FOR (n:Validation) ON (n.user_id)",
    "CREATE INDEX validation_status IF NOT EXISTS "
    "FOR (n:Validation) ON (n.status)",
]


def apply_constraints_and_indexes(session: Session) -> None:
    """Create all constraints and indexes (idempotent)."""
    for statement in _CONSTRAINTS + _INDEXES:
        session.run(statement)
