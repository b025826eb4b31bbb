"""Reference entity repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.reference import EntityKind, ReferenceEntity


class ReferenceRepository(Protocol):
    """Repository for one kind of named reference entity."""

    kind: EntityKind

    def list_all(self) -> list[ReferenceEntity]:
        """List every record of this kind."""
        ...

    def get_by_id(self, entity_id: int) -> ReferenceEntity:
        """Retrieve a record by ID."""
        ...

    def create(self, name: str) -> ReferenceEntity:
        """Create a new record."""
        ...

    def update(self, entity_id: int, name: str) -> ReferenceEntity:
        """Rename an existing record."""
        ...

    def delete(self, entity_id: int) -> None:
        """Delete a record by ID."""
        ...
