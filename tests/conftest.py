"""Pytest configuration and shared fixtures for the Baby Accounts console tests.

The backend REST service is replaced by :class:`FakeBackend`, an in-memory
object exposing the same methods as ``BackendAPI``. It is installed through
``create_app(api=...)`` so routes exercise the real repositories.
"""

from __future__ import annotations

import itertools
from typing import Any, Mapping

import pytest

from babyaccounts import create_app
from babyaccounts.infra.api import (
    BackendError,
    BackendResponseError,
    RecordNotFound,
    normalize_collection,
)
from babyaccounts.models import Transaction


class FakeBackend:
    """In-memory stand-in for the backend REST API."""

    base_url = "http://backend.test/api"

    def __init__(self) -> None:
        self.records: dict[str, dict[int, dict[str, Any]]] = {}
        self.failures: dict[tuple[str, str], BackendError] = {}
        self.raw_payloads: dict[str, Any] = {}
        self.calls: list[tuple[str, str, Any]] = []
        self.closed = False

    # -- seeding helpers -------------------------------------------------
    def seed(self, collection: str, **fields: Any) -> dict[str, Any]:
        table = self._table(collection)
        record_id = fields.pop("id", None) or max(table, default=0) + 1
        record = {"id": record_id, **fields}
        table[record_id] = record
        return record

    def fail(self, method: str, collection: str, error: BackendError) -> None:
        self.failures[(method, collection)] = error

    def _check(self, method: str, collection: str, detail: Any = None) -> None:
        self.calls.append((method, collection, detail))
        error = self.failures.get((method, collection))
        if error is not None:
            raise error

    def _table(self, collection: str) -> dict[int, dict[str, Any]]:
        return self.records.setdefault(collection, {})

    # -- BackendAPI surface ---------------------------------------------
    def fetch(self, collection: str) -> Any:
        self._check("GET", collection)
        if collection in self.raw_payloads:
            return self.raw_payloads[collection]
        results = [dict(record) for record in self._table(collection).values()]
        return {"count": len(results), "next": None, "previous": None, "results": results}

    def list_records(self, collection: str) -> list[dict[str, Any]]:
        return normalize_collection(self.fetch(collection))

    def get(self, collection: str, record_id: int) -> dict[str, Any]:
        self._check("GET", collection, record_id)
        record = self._table(collection).get(record_id)
        if record is None:
            raise RecordNotFound(404, f"{collection}/{record_id} was not found")
        return dict(record)

    def create(self, collection: str, data: Mapping[str, Any]) -> dict[str, Any]:
        self._check("POST", collection, dict(data))
        return dict(self.seed(collection, **dict(data)))

    def update(self, collection: str, record_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        self._check("PUT", collection, (record_id, dict(data)))
        table = self._table(collection)
        if record_id not in table:
            raise RecordNotFound(404, f"{collection}/{record_id} was not found")
        table[record_id] = {"id": record_id, **dict(data)}
        return dict(table[record_id])

    def delete(self, collection: str, record_id: int) -> None:
        self._check("DELETE", collection, record_id)
        if self._table(collection).pop(record_id, None) is None:
            raise RecordNotFound(404, f"{collection}/{record_id} was not found")

    def ping(self) -> bool:
        try:
            self.fetch("transactions")
        except BackendError:
            return False
        return True

    def close(self) -> None:
        self.closed = True


# =============================================================================
# Application fixtures
# =============================================================================


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def app(tmp_path, monkeypatch: pytest.MonkeyPatch, backend: FakeBackend):
    monkeypatch.setenv("BABYACCOUNTS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("BABYACCOUNTS_DEV_MODE", "true")
    monkeypatch.delenv("BABYACCOUNTS_API_BASE_URL", raising=False)
    app = create_app("testing", api=backend)
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def seeded_backend(backend: FakeBackend) -> FakeBackend:
    """A backend holding one record per reference kind and three transactions."""

    backend.seed("businesses", id=1, name="Bakery")
    backend.seed("businesses", id=2, name="Catering")
    backend.seed("types", id=1, name="Sale")
    backend.seed("types", id=2, name="Purchase")
    backend.seed("ledgers", id=1, name="Cash Book")
    backend.seed("heads", id=1, name="Flour")
    backend.seed("heads", id=2, name="Cakes")
    backend.seed("modes", id=1, name="UPI")
    backend.seed("modes", id=2, name="Cash")

    backend.seed(
        "transactions",
        id=101,
        transaction_date="2024-04-01",
        business="Bakery",
        type="Purchase",
        ledger="Cash Book",
        head="Flour",
        mode="Cash",
        amount="100.00",
        dr_or_cr="Dr",
        discount_amount="0.00",
        gst="With GST",
        description="Flour sacks",
    )
    backend.seed(
        "transactions",
        id=102,
        transaction_date="2024-04-02",
        business="Bakery",
        type="Sale",
        ledger="Cash Book",
        head="Cakes",
        mode="UPI",
        amount="250.50",
        dr_or_cr="Cr",
        discount_amount="10.00",
        gst="Without GST",
        description=None,
    )
    backend.seed(
        "transactions",
        id=103,
        transaction_date="2024-04-03",
        business="Catering",
        type="Sale",
        ledger="Cash Book",
        head="Cakes",
        mode="Cash",
        amount="40.00",
        dr_or_cr="Cr",
        discount_amount="0.00",
        gst="With GST",
        description="Party order",
    )
    return backend


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def transaction_factory():
    """Factory for building Transaction records with sensible defaults."""

    counter = itertools.count(1)

    def _create_transaction(**overrides: Any) -> Transaction:
        defaults: dict[str, Any] = {
            "id": next(counter),
            "transaction_date": "2024-01-01",
            "business": "Bakery",
            "type": "Sale",
            "ledger": "Cash Book",
            "head": "Cakes",
            "mode": "Cash",
            "amount": "0.00",
            "dr_or_cr": "Cr",
            "discount_amount": "0.00",
            "gst": "With GST",
            "description": None,
        }
        defaults.update(overrides)
        return Transaction(**defaults)

    return _create_transaction


def validation_error(**fields: list[str]) -> BackendResponseError:
    """Build the error the backend raises for a rejected payload."""

    return BackendResponseError(400, "POST returned HTTP 400", dict(fields))
