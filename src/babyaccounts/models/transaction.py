"""Transaction records as served by the backend API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from .reference import record_id

DEBIT = "Dr"
CREDIT = "Cr"
DR_OR_CR_CHOICES: dict[str, str] = {DEBIT: "Debit", CREDIT: "Credit"}

WITH_GST = "With GST"
WITHOUT_GST = "Without GST"
GST_CHOICES: tuple[str, ...] = (WITH_GST, WITHOUT_GST)

FILTER_FIELDS: tuple[str, ...] = ("business", "type", "ledger", "head", "mode")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single transaction with reference names denormalized for display.

    Monetary values stay as the strings the backend sent; they are parsed only
    where arithmetic is needed.
    """

    REFERENCE_FIELDS: ClassVar[tuple[str, ...]] = FILTER_FIELDS

    id: int
    transaction_date: str
    business: str
    type: str
    ledger: str
    head: str
    mode: str
    amount: str
    dr_or_cr: str
    discount_amount: str = "0.00"
    gst: str = WITH_GST
    description: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> Transaction:
        """Build a transaction from a backend record, tolerating missing fields."""

        description = data.get("description")
        return cls(
            id=record_id(data.get("id")),
            transaction_date=_text(data.get("transaction_date")),
            business=_text(data.get("business")),
            type=_text(data.get("type")),
            ledger=_text(data.get("ledger")),
            head=_text(data.get("head")),
            mode=_text(data.get("mode")),
            amount=_text(data.get("amount")),
            dr_or_cr=_text(data.get("dr_or_cr")),
            discount_amount=_text(data.get("discount_amount")) or "0.00",
            gst=_text(data.get("gst")),
            description=None if description is None else str(description),
        )

    def field_value(self, field: str) -> str:
        """Return the display value for one of the filterable fields."""

        if field not in FILTER_FIELDS:
            raise KeyError(field)
        return getattr(self, field)

    @property
    def is_debit(self) -> bool:
        return self.dr_or_cr == DEBIT

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "transaction_date": self.transaction_date,
            "business": self.business,
            "type": self.type,
            "ledger": self.ledger,
            "head": self.head,
            "mode": self.mode,
            "amount": self.amount,
            "dr_or_cr": self.dr_or_cr,
            "discount_amount": self.discount_amount,
            "gst": self.gst,
            "description": self.description,
        }
