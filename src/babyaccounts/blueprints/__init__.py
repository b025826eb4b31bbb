"""Blueprint exports."""

from . import home, reference, reports, transactions

__all__ = [
    "home",
    "reference",
    "reports",
    "transactions",
]
