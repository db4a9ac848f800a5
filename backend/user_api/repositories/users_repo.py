from __future__ import annotations

from typing import Any

from ..db.dynamodb.client import dynamodb_client
from ..db.dynamodb.errors import ddb_call
from ..domain.users import User, from_attribute_values, to_attribute_values, user_key
from ..errors import (
    ERROR_COULD_NOT_DELETE_ITEM,
    ERROR_COULD_NOT_PUT_ITEM,
    ERROR_FAILED_TO_FETCH_RECORD,
)
from ..settings import Settings
from .base_repository import UserRepository
from .memory_users_repo import InMemoryUserRepository


class DynamoUserRepository(UserRepository):
    """
    Users table accessed through the low-level DynamoDB client.

    Items go over the wire as attribute values (`{"S": "..."}`), converted
    explicitly by the codec in `domain.users`.
    """

    def __init__(self, *, table_name: str, client: Any | None = None):
        self.table_name = str(table_name)
        self._client = client if client is not None else dynamodb_client()

    def get(self, email: str) -> User | None:
        key = user_key(email)

        def _op():
            return self._client.get_item(TableName=self.table_name, Key=key)

        resp = ddb_call(
            "GetItem",
            _op,
            message=ERROR_FAILED_TO_FETCH_RECORD,
            table_name=self.table_name,
            key={"email": email},
        )
        item = resp.get("Item")
        if not item:
            return None
        return from_attribute_values(item)

    def scan(self) -> list[User]:
        users: list[User] = []
        start_key: dict[str, Any] | None = None
        while True:
            kwargs: dict[str, Any] = {"TableName": self.table_name}
            # Only pass ExclusiveStartKey when continuing.
            if start_key:
                kwargs["ExclusiveStartKey"] = start_key

            def _op():
                return self._client.scan(**kwargs)

            resp = ddb_call(
                "Scan",
                _op,
                message=ERROR_FAILED_TO_FETCH_RECORD,
                table_name=self.table_name,
            )
            users.extend(from_attribute_values(it) for it in resp.get("Items") or [])
            start_key = resp.get("LastEvaluatedKey")
            if not start_key:
                return users

    def put(self, user: User) -> None:
        item = to_attribute_values(user)

        def _op():
            return self._client.put_item(TableName=self.table_name, Item=item)

        ddb_call(
            "PutItem",
            _op,
            message=ERROR_COULD_NOT_PUT_ITEM,
            table_name=self.table_name,
            key={"email": user.email},
        )

    def delete(self, email: str) -> dict[str, Any]:
        key = user_key(email)

        def _op():
            return self._client.delete_item(TableName=self.table_name, Key=key)

        resp = ddb_call(
            "DeleteItem",
            _op,
            message=ERROR_COULD_NOT_DELETE_ITEM,
            table_name=self.table_name,
            key={"email": email},
        )
        # Transport metadata is not part of the result.
        return {k: v for k, v in (resp or {}).items() if k != "ResponseMetadata"}


def build_user_repository(settings: Settings) -> UserRepository:
    backend = settings.normalized_store_backend
    if backend == "memory":
        return InMemoryUserRepository()
    if backend == "dynamodb":
        return DynamoUserRepository(table_name=settings.users_table_name)
    raise RuntimeError(f"Unknown USER_STORE_BACKEND: {settings.user_store_backend!r}")
