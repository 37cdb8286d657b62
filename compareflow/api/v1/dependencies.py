"""FastAPI dependencies shared across all v1 routers."""

from typing import Annotated, Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Query, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from neo4j import Session

from compareflow.core.security import decode_token
from compareflow.db.neo4j import get_session
from compareflow.db.repositories.connection import ConnectionRepository
from compareflow.db.repositories.user import User, UserRepository
from compareflow.db.repositories.validation import ValidationRepository
from compareflow.services.connection_service import ConnectionService

# ---------------------------------------------------------------------------
# Database session and repositories
# ---------------------------------------------------------------------------


def db_session() -> Generator[Session, None, None]:
    """Yield a Neo4j session for the duration of a request."""
    with get_session() as session:
        yield session


DbSession = Annotated[Session, Depends(db_session)]


def user_repository(session: DbSession) -> UserRepository:
    return UserRepository(session)


def connection_repository(session: DbSession) -> ConnectionRepository:
    return ConnectionRepository(session)


def validation_repository(session: DbSession) -> ValidationRepository:
    return ValidationRepository(session)


UserRepo = Annotated[UserRepository, Depends(user_repository)]
ConnectionRepo = Annotated[ConnectionRepository, Depends(connection_repository)]
ValidationRepo = Annotated[ValidationRepository, Depends(validation_repository)]


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


def connection_service() -> ConnectionService:
    return ConnectionService()


ConnectionSvc = Annotated[ConnectionService, Depends(connection_service)]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


class Pagination:
    def __init__(
        self,
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(100, ge=1, le=1000, description="Maximum records to return"),
    ) -> None:
        self.skip = skip
        self.limit = limit


PaginationDep = Annotated[Pagination, Depends(Pagination)]


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

_bearer = HTTPBearer(auto_error=False)


def get_current_user(
    users: UserRepo,
    bearer_creds: Annotated[
        Optional[HTTPAuthorizationCredentials], Security(_bearer)
    ] = None,
) -> User:
    """Resolve the caller from a JWT bearer access token.

    Raises 401 when no valid credential is supplied.
    """
    if bearer_creds is not None:
        try:
            payload = decode_token(bearer_creds.credentials)
            if payload.get("type") != "access":
                raise JWTError("not an access token")
            user_id = payload.get("sub")
            if user_id is None:
                raise JWTError("missing sub")
            user = users.get_by_id(UUID(user_id))
            if user and user.is_active:
                return user
        except (JWTError, ValueError):
            pass

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


CurrentUser = Annotated[User, Depends(get_current_user)]
