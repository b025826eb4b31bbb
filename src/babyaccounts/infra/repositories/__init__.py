"""REST-backed repository implementations."""

from .reference import ApiReferenceRepository
from .transaction import ApiTransactionRepository

__all__ = ["ApiReferenceRepository", "ApiTransactionRepository"]
