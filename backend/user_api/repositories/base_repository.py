"""
Base repository interface for user records.

Exactly four capabilities: point lookup, full scan, upsert, delete by key.
Both the DynamoDB repository and the in-memory one implement it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..domain.users import User


class UserRepository(ABC):
    """Store of `User` records keyed by email."""

    @abstractmethod
    def get(self, email: str) -> User | None:
        """Get a record by email, or None when absent."""

    @abstractmethod
    def scan(self) -> list[User]:
        """Every record in the store, unpaginated."""

    @abstractmethod
    def put(self, user: User) -> None:
        """Insert or fully overwrite a record."""

    @abstractmethod
    def delete(self, email: str) -> dict[str, Any]:
        """Delete by email and return the store's raw result.

        Deleting an absent key is not an error.
        """
