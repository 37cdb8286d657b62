"""Repository for Connection nodes.

Every read is scoped to the owning user; a connection that belongs to
someone else is reported as missing.
"""

from uuid import UUID

from compareflow.db.base_repository import BaseRepository
from compareflow.models.schema import Connection


class ConnectionRepository(BaseRepository):

    JSON_FIELDS = frozenset({"config"})

    def create(self, entity: Connection) -> Connection:
        props = self._to_neo4j(entity)
        self._session.run(
            "MERGE (n:Connection {id: $id}) SET n += $props",
            id=props["id"],
            props=props,
        )
        return entity

    def get_by_id(self, entity_id: UUID) -> Connection | None:
        record = self._session.run(
            "MATCH (n:Connection {id: $id}) RETURN properties(n) AS props",
            id=str(entity_id),
        ).single()
        if record is None:
            return None
        return Connection.model_validate(self._from_record(dict(record["props"])))

    def get_for_user(self, entity_id: UUID, user_id: UUID) -> Connection | None:
        record = self._session.run(
            "MATCH (n:Connection {id: $id, user_id: $user_id}) RETURN properties(n) AS props",
            id=str(entity_id),
            user_id=str(user_id),
        ).single()
        if record is None:
            return None
        return Connection.model_validate(self._from_record(dict(record["props"])))

    def list_by_user(self, user_id: UUID) -> list[Connection]:
        result = self._session.run(
            "MATCH (n:Connection {user_id: $user_id}) "
            "RETURN properties(n) AS props ORDER BY n.name",
            user_id=str(user_id),
        )
        return [
            Connection.model_validate(self._from_record(dict(r["props"]))) for r in result
        ]

    def update(self, entity: Connection) -> Connection:
        props = self._to_neo4j(entity)
        self._session.run(
            "MATCH (n:Connection {id: $id}) SET n += $props",
            id=props["id"],
            props=props,
        )
        return entity

    def delete(self, entity_id: UUID) -> bool:
        record = self._session.run(
            "MATCH (n:Connection {id: $id}) "
            "DETACH DELETE n "
            "RETURN count(n) AS deleted",
            id=str(entity_id),
        ).single()
        return bool(record and record["deleted"] > 0)

    def delete_for_user(self, entity_id: UUID, user_id: UUID) -> bool:
        record = self._session.run(
            "MATCH (n:Connection {id: $id, user_id: $user_id}) "
            "DETACH DELETE n "
            "RETURN count(n) AS deleted",
            id=str(entity_id),
            user_id=str(user_id),
        ).single()
        return bool(record and record["deleted"] > 0)
