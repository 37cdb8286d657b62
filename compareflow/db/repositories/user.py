"""Repository for User nodes."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from compareflow.db.base_repository import BaseRepository


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserRole:
    ADMIN = "admin"
    USER = "user"

    ALL = {ADMIN, USER}


class User(BaseModel):
    """Domain model for an authenticated user."""

    id: UUID = Field(default_factory=uuid4)
    email: str
    full_name: Optional[str] = None
    hashed_password: str
    role: str = UserRole.USER
    is_active: bool = True
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    model_config = {"from_attributes": True}


class UserRepository(BaseRepository):

    def create(self, entity: User) -> User:
        props = self._to_neo4j(entity)
        self._session.run(
            "CREATE (n:User {id: $id}) SET n += $props",
            id=props["id"],
            props=props,
        )
        return entity

    def get_by_id(self, entity_id: UUID) -> User | None:
        record = self._session.run(
            "MATCH (n:User {id: $id}) RETURN properties(n) AS props",
            id=str(entity_id),
        ).single()
        if record is None:
            return None
        return User.model_validate(self._from_record(dict(record["props"])))

    def get_by_email(self, email: str) -> User | None:
        record = self._session.run(
            "MATCH (n:User {email: $email}) RETURN properties(n) AS props",
            email=email.lower(),
        ).single()
        if record is None:
            return None
        return User.model_validate(self._from_record(dict(record["props"])))

    def update(self, entity: User) -> User:
        props = self._to_neo4j(entity)
        self._session.run(
            "MATCH (n:User {id: $id}) SET n += $props",
            id=props["id"],
            props=props,
        )
        return entity

    def delete(self, entity_id: UUID) -> bool:
        record = self._session.run(
            "MATCH (n:User {id: $id}) DETACH DELETE n RETURN count(n) AS deleted",
            id=str(entity_id),
        ).single()
        return bool(record and record["deleted"] > 0)

    def count(self) -> int:
        record = self._session.run("MATCH (n:User) RETURN count(n) AS cnt").single()
        return int(record["cnt"]) if record else 0
