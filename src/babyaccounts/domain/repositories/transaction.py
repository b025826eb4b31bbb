"""Transaction repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Repository for transactions held by the backend."""

    def fetch_payload(self) -> Any:
        """Return the raw list response (paginated envelope or bare array)."""
        ...

    def list_all(self) -> list[Transaction]:
        """List all transactions the backend returns."""
        ...

    def get_record(self, transaction_id: int) -> dict[str, Any]:
        """Retrieve the raw backend record for a transaction."""
        ...

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Create a new transaction."""
        ...

    def update(self, transaction_id: int, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Replace an existing transaction."""
        ...

    def delete(self, transaction_id: int) -> None:
        """Delete a transaction by ID."""
        ...
