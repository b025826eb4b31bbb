"""Domain records exchanged with the Baby Accounts backend."""

from .reference import (
    ENTITY_KINDS,
    ENTITY_KINDS_BY_KEY,
    EntityKind,
    ReferenceEntity,
)
from .transaction import (
    CREDIT,
    DEBIT,
    DR_OR_CR_CHOICES,
    FILTER_FIELDS,
    GST_CHOICES,
    Transaction,
)

__all__ = [
    "CREDIT",
    "DEBIT",
    "DR_OR_CR_CHOICES",
    "ENTITY_KINDS",
    "ENTITY_KINDS_BY_KEY",
    "EntityKind",
    "FILTER_FIELDS",
    "GST_CHOICES",
    "ReferenceEntity",
    "Transaction",
]
