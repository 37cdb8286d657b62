"""Database package.

Public surface area — import from here rather than sub-modules.
"""

from compareflow.db.neo4j import close_driver, get_driver, get_session, verify_connectivity
from compareflow.db.repositories.connection import ConnectionRepository
from compareflow.db.repositories.user import User, UserRepository, UserRole
from compareflow.db.repositories.validation import ValidationRepository

__all__ = [
    "get_driver",
    "get_session",
    "close_driver",
    "verify_connectivity",
    "User",
    "UserRole",
    "UserRepository",
    "ConnectionRepository",
    "ValidationRepository",
]
