"""Repository for Validation nodes.

A validation node references its connections by id; the source/target
relationships are also materialised as COMPARES_FROM / COMPARES_TO edges
so a connection's dependants can be found from the graph.
"""

from uuid import UUID

from compareflow.db.base_repository import BaseRepository
from compareflow.models.schema import Validation


class ValidationRepository(BaseRepository):

    JSON_FIELDS = frozenset({"config", "results"})

    def _link(self, props: dict) -> None:
        self._session.run(
            "MATCH (v:Validation {id: $id}) "
            "OPTIONAL MATCH (v)-[old:COMPARES_FROM|COMPARES_TO]->() DELETE old "
            "WITH DISTINCT v "
            "MATCH (s:Connection {id: $source_id}), (t:Connection {id: $target_id}) "
            "MERGE (v)-[:COMPARES_FROM]->(s) "
            "MERGE (v)-[:COMPARES_TO]->(t)",
            id=props["id"],
            source_id=props["source_connection_id"],
            target_id=props["target_connection_id"],
        )

    def create(self, entity: Validation) -> Validation:
        props = self._to_neo4j(entity)
        self._session.run(
            "MERGE (n:Validation {id: $id}) SET n += $props",
            id=props["id"],
            props=props,
        )
        self._link(props)
        return entity

    def get_by_id(self, entity_id: UUID) -> Validation | None:
        record = self._session.run(
            "MATCH (n:Validation {id: $id}) RETURN properties(n) AS props",
            id=str(entity_id),
        ).single()
        if record is None:
            return None
        return Validation.model_validate(self._from_record(dict(record["props"])))

    def get_for_user(self, entity_id: UUID, user_id: UUID) -> Validation | None:
        record = self._session.run(
            "MATCH (n:Validation {id: $id, user_id: $user_id}) RETURN properties(n) AS props",
            id=str(entity_id),
            user_id=str(user_id),
        ).single()
        if record is None:
            return None
        return Validation.model_validate(self._from_record(dict(record["props"])))

    def list_by_user(self, user_id: UUID) -> list[Validation]:
        result = self._session.run(
            "MATCH (n:Validation {user_id: $user_id}) "
            "RETURN properties(n) AS props ORDER BY n.created_at DESC",
            user_id=str(user_id),
        )
        return [
            Validation.model_validate(self._from_record(dict(r["props"]))) for r in result
        ]

    def update(self, entity: Validation) -> Validation:
        props = self._to_neo4j(entity)
        self._session.run(
            "MATCH (n:Validation {id: $id}) SET n += $props",
            id=props["id"],
            props=props,
        )
        self._link(props)
        return entity

    def delete(self, entity_id: UUID) -> bool:
        record = self._session.run(
            "MATCH (n:Validation {id: $id}) "
            "DETACH DELETE n "
            "RETURN count(n) AS deleted",
            id=str(entity_id),
        ).single()
        return bool(record and record["deleted"] > 0)

    def delete_for_user(self, entity_id: UUID, user_id: UUID) -> bool:
        record = self._session.run(
            "MATCH (n:Validation {id: $id, user_id: $user_id}) "
            "DETACH DELETE n "
            "RETURN count(n) AS deleted",
            id=str(entity_id),
            user_id=str(user_id),
        ).single()
        return bool(record and record["deleted"] > 0)
