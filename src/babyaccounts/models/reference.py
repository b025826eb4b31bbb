"""Reference entities that transactions are tagged with."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class EntityKind:
    """Describes one reference entity collection exposed by the backend."""

    key: str
    collection: str
    label: str
    plural_label: str


BUSINESS = EntityKind("business", "businesses", "Business", "Businesses")
LEDGER = EntityKind("ledger", "ledgers", "Ledger", "Ledgers")
HEAD = EntityKind("head", "heads", "Head", "Heads")
MODE = EntityKind("mode", "modes", "Mode", "Modes")
TYPE = EntityKind("type", "types", "Type", "Types")

ENTITY_KINDS: tuple[EntityKind, ...] = (BUSINESS, LEDGER, HEAD, MODE, TYPE)
ENTITY_KINDS_BY_KEY: dict[str, EntityKind] = {kind.key: kind for kind in ENTITY_KINDS}


def record_id(value: Any) -> int:
    """Coerce a backend id to an int; missing or malformed ids become 0."""

    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True, slots=True)
class ReferenceEntity:
    """A named record (business, ledger, head, mode or type)."""

    id: int
    name: str

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> ReferenceEntity:
        return cls(id=record_id(data.get("id")), name=str(data.get("name") or ""))

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name}
