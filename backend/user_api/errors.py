from __future__ import annotations

from dataclasses import dataclass

# Static, client-facing messages. Store and codec details are logged, never returned.
ERROR_INVALID_USER_DATA = "invalid user data"
ERROR_INVALID_EMAIL = "invalid email"
ERROR_FAILED_TO_FETCH_RECORD = "failed to fetch record"
ERROR_FAILED_TO_UNMARSHAL_RECORD = "failed to unmarshal record"
ERROR_COULD_NOT_MARSHAL_ITEM = "could not marshal item"
ERROR_COULD_NOT_PUT_ITEM = "could not put item"
ERROR_COULD_NOT_DELETE_ITEM = "could not delete item"
ERROR_USER_ALREADY_EXISTS = "user already exists"
ERROR_USER_DOES_NOT_EXIST = "user does not exist"
ERROR_METHOD_NOT_ALLOWED = "Method Not Allowed"
ERROR_ROUTE_NOT_FOUND = "Route not found"
ERROR_INTERNAL = "Internal server error"


@dataclass(slots=True, eq=False)
class UserServiceError(Exception):
    """Base error for user operations.

    Caught by the FastAPI exception handler in `main.py` and rendered as
    `{"error": message}` with `status_code`.
    """

    message: str
    status_code: int = 400
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True, eq=False)
class ValidationError(UserServiceError):
    """Malformed body or an email that fails the syntactic check."""


@dataclass(slots=True, eq=False)
class NotFound(UserServiceError):
    pass


@dataclass(slots=True, eq=False)
class AlreadyExists(UserServiceError):
    pass


@dataclass(slots=True, eq=False)
class StoreFailure(UserServiceError):
    """A remote store call (or the attribute codec around it) failed."""

    operation: str | None = None
    table_name: str | None = None
    error_code: str | None = None
