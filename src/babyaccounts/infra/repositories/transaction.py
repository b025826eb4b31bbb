"""Transaction repository backed by the REST API."""

from __future__ import annotations

from typing import Any, Mapping

from ...models.transaction import Transaction
from ..api import BackendAPI, normalize_collection

COLLECTION = "transactions"


class ApiTransactionRepository:
    """REST implementation of TransactionRepository."""

    def __init__(self, api: BackendAPI) -> None:
        self.api = api

    def fetch_payload(self) -> Any:
        return self.api.fetch(COLLECTION)

    def list_all(self) -> list[Transaction]:
        return [
            Transaction.from_api(record)
            for record in normalize_collection(self.fetch_payload())
        ]

    def get_record(self, transaction_id: int) -> dict[str, Any]:
        return self.api.get(COLLECTION, transaction_id)

    def create(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self.api.create(COLLECTION, payload)

    def update(self, transaction_id: int, payload: Mapping[str, Any]) -> dict[str, Any]:
        return self.api.update(COLLECTION, transaction_id, payload)

    def delete(self, transaction_id: int) -> None:
        self.api.delete(COLLECTION, transaction_id)
