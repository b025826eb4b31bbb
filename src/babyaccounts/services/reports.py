"""Transaction report view model.

The report screen works in two stages. :func:`load_report_snapshot` performs
the only I/O: it fetches the transaction collection once and freezes it into
a :class:`ReportSnapshot`. Everything after that is pure and cheap to rerun
on every filter change:

* :func:`derive_filter_options` lists the distinct values per filterable
  field, in order of first appearance;
* :func:`apply_filters` keeps the transactions matching every non-empty
  selection (exact, case-sensitive equality) without reordering;
* :func:`compute_totals` sums credit and debit amounts and reports the net.

None of the pure functions raise: malformed amounts count as zero and a
missing upstream list counts as empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..domain.repositories.transaction import TransactionRepository
from ..infra.api import normalize_collection
from ..models.transaction import DEBIT, FILTER_FIELDS, Transaction

ZERO = Decimal("0")

NET_CREDIT = "Credit"
NET_DEBIT = "Debit"

FilterOptions = dict[str, list[str]]
FilterSelection = Mapping[str, Optional[str]]


@dataclass(frozen=True, slots=True)
class ReportTotals:
    """Credit/debit aggregates over a set of transactions."""

    total_credit: Decimal = ZERO
    total_debit: Decimal = ZERO
    net_amount: Decimal = ZERO
    net_direction: str = NET_CREDIT

    def to_dict(self) -> dict[str, str]:
        return {
            "total_credit": str(self.total_credit),
            "total_debit": str(self.total_debit),
            "net_amount": str(self.net_amount),
            "net_direction": self.net_direction,
        }


@dataclass(frozen=True, slots=True)
class ReportSnapshot:
    """Immutable transaction list plus the filter options derived from it."""

    transactions: tuple[Transaction, ...] = ()
    options: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: {name: () for name in FILTER_FIELDS}
    )

    @classmethod
    def from_transactions(cls, transactions: Iterable[Transaction]) -> ReportSnapshot:
        frozen = tuple(transactions)
        options = derive_filter_options(frozen)
        return cls(
            transactions=frozen,
            options={name: tuple(values) for name, values in options.items()},
        )


@dataclass(frozen=True, slots=True)
class ReportView:
    """Everything the report page renders for one filter selection."""

    selection: dict[str, str]
    options: Mapping[str, tuple[str, ...]]
    transactions: list[Transaction]
    totals: ReportTotals

    def to_dict(self) -> dict[str, Any]:
        return {
            "filters": dict(self.selection),
            "options": {name: list(values) for name, values in self.options.items()},
            "totals": self.totals.to_dict(),
            "count": len(self.transactions),
            "transactions": [txn.to_dict() for txn in self.transactions],
        }


def normalize_transactions(payload: Any) -> list[Transaction]:
    """Turn a list response (envelope, bare array or ``None``) into transactions."""

    return [Transaction.from_api(record) for record in normalize_collection(payload)]


def derive_filter_options(transactions: Optional[Iterable[Transaction]]) -> FilterOptions:
    """Return the distinct values of each filterable field, first occurrence first."""

    options: FilterOptions = {name: [] for name in FILTER_FIELDS}
    seen: dict[str, set[str]] = {name: set() for name in FILTER_FIELDS}
    for txn in transactions or ():
        for name in FILTER_FIELDS:
            value = txn.field_value(name)
            if value not in seen[name]:
                seen[name].add(value)
                options[name].append(value)
    return options


def clean_selection(selection: Optional[FilterSelection]) -> dict[str, str]:
    """Drop unknown fields and "show all" (empty) values from a selection."""

    if not selection:
        return {}
    return {
        name: value
        for name, value in selection.items()
        if name in FILTER_FIELDS and value
    }


def apply_filters(
    transactions: Optional[Iterable[Transaction]],
    selection: Optional[FilterSelection] = None,
) -> list[Transaction]:
    """Keep transactions whose fields equal every non-empty selected value."""

    active = clean_selection(selection)
    return [
        txn
        for txn in transactions or ()
        if all(txn.field_value(name) == value for name, value in active.items())
    ]


def parse_amount(raw: Any) -> Decimal:
    """Parse a decimal amount, treating anything unparseable or non-finite as zero."""

    if raw is None:
        return ZERO
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not value.is_finite():
        return ZERO
    return value


def compute_totals(transactions: Optional[Iterable[Transaction]]) -> ReportTotals:
    """Sum credits and debits.

    Only an exact ``"Dr"`` counts as debit; any other tag (including an
    unrecognized one) lands in the credit bucket. Ties report ``"Credit"``.
    """

    total_credit = ZERO
    total_debit = ZERO
    for txn in transactions or ():
        amount = parse_amount(txn.amount)
        if txn.dr_or_cr == DEBIT:
            total_debit += amount
        else:
            total_credit += amount

    return ReportTotals(
        total_credit=total_credit,
        total_debit=total_debit,
        net_amount=abs(total_credit - total_debit),
        net_direction=NET_CREDIT if total_credit >= total_debit else NET_DEBIT,
    )


def build_report(
    snapshot: ReportSnapshot, selection: Optional[FilterSelection] = None
) -> ReportView:
    """Filter a loaded snapshot and total the rows that remain."""

    active = clean_selection(selection)
    rows = apply_filters(snapshot.transactions, active)
    return ReportView(
        selection=active,
        options=snapshot.options,
        transactions=rows,
        totals=compute_totals(rows),
    )


def load_report_snapshot(repository: TransactionRepository) -> ReportSnapshot:
    """Fetch the transaction list once and freeze it for the report.

    Backend failures propagate to the caller, which decides how to surface
    them; the returned snapshot never contains partially loaded data.
    """

    return ReportSnapshot.from_transactions(
        normalize_transactions(repository.fetch_payload())
    )


def running_balance(transactions: Sequence[Transaction]) -> list[tuple[Transaction, Decimal]]:
    """Pair each transaction with the cumulative balance (Dr adds, Cr subtracts)."""

    balance = ZERO
    rows: list[tuple[Transaction, Decimal]] = []
    for txn in transactions:
        amount = parse_amount(txn.amount)
        balance = balance + amount if txn.is_debit else balance - amount
        rows.append((txn, balance))
    return rows
