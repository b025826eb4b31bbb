"""Transaction form validation helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ...models.reference import ReferenceEntity
from ...models.transaction import (
    DEBIT,
    DR_OR_CR_CHOICES,
    FILTER_FIELDS,
    GST_CHOICES,
    WITH_GST,
)

DESCRIPTION_MAX_LENGTH = 500
REFERENCE_FIELDS = FILTER_FIELDS
TEXT_FIELDS = (
    "transaction_date",
    "amount",
    "dr_or_cr",
    "discount_amount",
    "gst",
    "description",
)


@dataclass(slots=True)
class TransactionForm:
    """Represents transaction input prior to validation.

    Reference fields hold backend ids (as submitted by the select controls),
    never display names.
    """

    transaction_date: Optional[date] = None
    business: Optional[int] = None
    type: Optional[int] = None
    ledger: Optional[int] = None
    head: Optional[int] = None
    mode: Optional[int] = None
    amount: Optional[Decimal] = None
    dr_or_cr: str = DEBIT
    discount_amount: Optional[Decimal] = Decimal("0.00")
    gst: str = WITH_GST
    description: str = ""
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, str] = field(default_factory=dict, init=False)
    notices: list[str] = field(default_factory=list, init=False)

    @classmethod
    def blank(cls, *, today: Optional[date] = None) -> TransactionForm:
        """Return a form with the defaults used for new transactions."""

        form = cls(transaction_date=today or date.today())
        form.raw_data = form.display_values()
        return form

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransactionForm:
        """Create a form populated from request data."""

        form = cls()
        form.load(data)
        return form

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        options: Mapping[str, Sequence[ReferenceEntity]],
    ) -> TransactionForm:
        """Populate a form from a backend record for editing.

        Reference ids are taken from the record when it carries them;
        otherwise a display name is accepted only when exactly one option
        has that name. Anything else is left unselected with a notice.
        """

        data: dict[str, Any] = {name: record.get(name) for name in TEXT_FIELDS}
        if data["transaction_date"]:
            data["transaction_date"] = str(data["transaction_date"])[:10]
        notices: list[str] = []
        for name in REFERENCE_FIELDS:
            resolved = resolve_reference_id(record, name, options.get(name, ()))
            data[name] = "" if resolved is None else str(resolved)
            if resolved is None and record.get(name) not in (None, ""):
                notices.append(
                    f"Could not match {name} \"{record.get(name)}\" to a single option; "
                    "please choose it again."
                )
        form = cls.from_mapping(data)
        form.notices = notices
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        self.raw_data = {}
        for key in (*REFERENCE_FIELDS, *TEXT_FIELDS):
            value = data.get(key)  # type: ignore[arg-type]
            self.raw_data[key] = "" if value is None else str(value)

        self.dr_or_cr = self.raw_data["dr_or_cr"].strip() or DEBIT
        self.gst = self.raw_data["gst"].strip() or WITH_GST
        self.description = self.raw_data["description"].strip()

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        date_raw = self.raw_data.get("transaction_date", "").strip()
        self.transaction_date = None
        if not date_raw:
            self._add_error("transaction_date", "Date is required.")
        else:
            try:
                parsed = date.fromisoformat(date_raw)
            except ValueError:
                parsed = None
            # fromisoformat also accepts the compact YYYYMMDD form on newer Pythons
            if parsed is None or parsed.isoformat() != date_raw:
                self._add_error("transaction_date", "Enter a valid date (YYYY-MM-DD).")
            else:
                self.transaction_date = parsed

        for name in REFERENCE_FIELDS:
            setattr(self, name, self._parse_reference(name))

        self.amount = self._parse_decimal("amount", required=True)
        self.discount_amount = self._parse_decimal("discount_amount", required=False)
        if self.discount_amount is None and "discount_amount" not in self.errors:
            self.discount_amount = Decimal("0.00")

        if self.dr_or_cr not in DR_OR_CR_CHOICES:
            self._add_error("dr_or_cr", "Choose Debit or Credit.")
        if self.gst not in GST_CHOICES:
            self._add_error("gst", "Choose With GST or Without GST.")
        if len(self.description) > DESCRIPTION_MAX_LENGTH:
            self._add_error(
                "description",
                f"Description must be {DESCRIPTION_MAX_LENGTH} characters or fewer.",
            )

        return not self.errors

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body sent to the backend after a successful validate()."""

        return {
            "transaction_date": self.transaction_date.isoformat() if self.transaction_date else None,
            "business": self.business,
            "type": self.type,
            "ledger": self.ledger,
            "head": self.head,
            "mode": self.mode,
            "amount": _decimal_text(self.amount),
            "dr_or_cr": self.dr_or_cr,
            "discount_amount": _decimal_text(self.discount_amount),
            "gst": self.gst,
            "description": self.description,
        }

    def display_values(self) -> dict[str, str]:
        """Convert typed attributes into HTML-friendly string values."""

        values = {
            "transaction_date": self.transaction_date.isoformat() if self.transaction_date else "",
            "amount": _decimal_text(self.amount) or "",
            "dr_or_cr": self.dr_or_cr,
            "discount_amount": _decimal_text(self.discount_amount) or "",
            "gst": self.gst,
            "description": self.description,
        }
        for name in REFERENCE_FIELDS:
            value = getattr(self, name)
            values[name] = "" if value is None else str(value)
        return values

    def _parse_reference(self, name: str) -> Optional[int]:
        raw = self.raw_data.get(name, "").strip()
        if not raw:
            self._add_error(name, f"Select a {name}.")
            return None
        try:
            parsed = int(raw)
        except ValueError:
            self._add_error(name, f"Select a valid {name}.")
            return None
        if parsed <= 0:
            self._add_error(name, f"Select a valid {name}.")
            return None
        return parsed

    def _parse_decimal(self, name: str, *, required: bool) -> Optional[Decimal]:
        label = name.replace("_", " ").capitalize()
        raw = self.raw_data.get(name, "").strip()
        if not raw:
            if required:
                self._add_error(name, f"{label} is required.")
            return None
        try:
            value = Decimal(raw)
            if not value.is_finite():
                raise InvalidOperation(raw)
            value = value.quantize(Decimal("0.01"))
        except InvalidOperation:
            self._add_error(name, f"Enter a valid number for the {label.lower()}.")
            return None
        if value < 0:
            self._add_error(name, f"{label} cannot be negative.")
            return None
        return value

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)


def _decimal_text(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return f"{value:.2f}"


def resolve_reference_id(
    record: Mapping[str, Any],
    name: str,
    options: Sequence[ReferenceEntity],
) -> Optional[int]:
    """Find the id for reference ``name`` on a backend transaction record.

    Order of preference: an explicit ``<name>_id`` key, an integer value in
    ``<name>`` itself, then a display name matching exactly one option.
    Duplicate or unknown names resolve to ``None``.
    """

    explicit = record.get(f"{name}_id")
    if explicit not in (None, ""):
        try:
            return int(explicit)
        except (TypeError, ValueError):
            return None

    value = record.get(name)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str) or not value:
        return None

    matches = [option.id for option in options if option.name == value]
    if len(matches) == 1:
        return matches[0]
    return None
