"""Repository protocols for the console's data access."""

from .reference import ReferenceRepository
from .transaction import TransactionRepository

__all__ = ["ReferenceRepository", "TransactionRepository"]
