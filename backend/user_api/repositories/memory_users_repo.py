from __future__ import annotations

import threading
from typing import Any

from ..domain.users import User, from_attribute_values, to_attribute_values
from .base_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """
    Process-local users store for tests and local development.

    Records are held in attribute-value form so every read and write goes
    through the same codec as the DynamoDB repository.
    """

    def __init__(self, users: list[User] | None = None):
        self._items: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        for u in users or []:
            self.put(u)

    def get(self, email: str) -> User | None:
        with self._lock:
            item = self._items.get(email)
        return from_attribute_values(item) if item else None

    def scan(self) -> list[User]:
        with self._lock:
            items = list(self._items.values())
        return [from_attribute_values(it) for it in items]

    def put(self, user: User) -> None:
        item = to_attribute_values(user)
        with self._lock:
            self._items[user.email] = item

    def delete(self, email: str) -> dict[str, Any]:
        with self._lock:
            self._items.pop(email, None)
        return {}
