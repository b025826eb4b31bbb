"""Reference entity form validation helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

NAME_MAX_LENGTH = 100


@dataclass(slots=True)
class NameForm:
    """Represents the single ``name`` input shared by every reference entity."""

    name: str = ""
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NameForm:
        raw = data.get("name")
        return cls(name="" if raw is None else str(raw))

    def validate(self) -> bool:
        """Validate the name, trimming surrounding whitespace."""

        self.errors.clear()
        self.name = self.name.strip()
        if not self.name:
            self._add_error("name", "Name is required.")
        elif len(self.name) > NAME_MAX_LENGTH:
            self._add_error("name", f"Name must be {NAME_MAX_LENGTH} characters or fewer.")
        return not self.errors

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)
