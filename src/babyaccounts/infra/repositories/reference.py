"""Reference entity repository backed by the REST API."""

from __future__ import annotations

from ...models.reference import EntityKind, ReferenceEntity
from ..api import BackendAPI


class ApiReferenceRepository:
    """REST implementation of ReferenceRepository for a single entity kind."""

    def __init__(self, api: BackendAPI, kind: EntityKind) -> None:
        self.api = api
        self.kind = kind

    def list_all(self) -> list[ReferenceEntity]:
        records = self.api.list_records(self.kind.collection)
        entities = (ReferenceEntity.from_api(record) for record in records)
        return [entity for entity in entities if entity.id > 0]

    def get_by_id(self, entity_id: int) -> ReferenceEntity:
        return ReferenceEntity.from_api(self.api.get(self.kind.collection, entity_id))

    def create(self, name: str) -> ReferenceEntity:
        record = self.api.create(self.kind.collection, {"name": name})
        return ReferenceEntity(id=int(record.get("id") or 0), name=str(record.get("name", name)))

    def update(self, entity_id: int, name: str) -> ReferenceEntity:
        record = self.api.update(self.kind.collection, entity_id, {"name": name})
        return ReferenceEntity(id=entity_id, name=str(record.get("name", name)))

    def delete(self, entity_id: int) -> None:
        self.api.delete(self.kind.collection, entity_id)
