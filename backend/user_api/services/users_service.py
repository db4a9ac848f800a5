"""
User operations behind the `/users` endpoint.

Each function takes the repository explicitly and either returns its result
or raises one of the `UserServiceError` kinds. Nothing here knows about HTTP
beyond the status code carried on the error.
"""

from __future__ import annotations

from typing import Any

from ..domain.users import User, is_email_valid, parse_user
from ..errors import (
    ERROR_FAILED_TO_FETCH_RECORD,
    ERROR_INVALID_EMAIL,
    ERROR_INVALID_USER_DATA,
    ERROR_USER_ALREADY_EXISTS,
    ERROR_USER_DOES_NOT_EXIST,
    AlreadyExists,
    NotFound,
    ValidationError,
)
from ..observability.logging import get_logger
from ..repositories.base_repository import UserRepository

log = get_logger("users")


def _find_existing(repo: UserRepository, email: str) -> User | None:
    """
    Existence check used before create/update.

    A blank email can never be stored, so it is reported as absent without a
    store call. Store failures propagate as `StoreFailure`.
    """
    if not email:
        return None
    current = repo.get(email)
    if current is None or not current.email:
        return None
    return current


def fetch_user(repo: UserRepository, email: str) -> User:
    user = repo.get(email)
    if user is None:
        # Not found is reported like any other lookup failure.
        raise NotFound(message=ERROR_FAILED_TO_FETCH_RECORD)
    return user


def list_users(repo: UserRepository) -> list[User]:
    users = repo.scan()
    log.info("users_listed", count=len(users))
    return users


def create_user(repo: UserRepository, body: bytes | str | None) -> User:
    user = parse_user(body, message=ERROR_INVALID_USER_DATA)
    if not is_email_valid(user.email):
        raise ValidationError(message=ERROR_INVALID_EMAIL)

    # Read-then-write: two concurrent creates for one email can both pass.
    if _find_existing(repo, user.email) is not None:
        raise AlreadyExists(message=ERROR_USER_ALREADY_EXISTS)

    repo.put(user)
    log.info("user_created", email=user.email)
    return user


def update_user(repo: UserRepository, body: bytes | str | None) -> User:
    user = parse_user(body, message=ERROR_INVALID_EMAIL)

    if _find_existing(repo, user.email) is None:
        raise NotFound(message=ERROR_USER_DOES_NOT_EXIST)

    # Full overwrite; fields absent from the body are stored as "".
    repo.put(user)
    log.info("user_updated", email=user.email)
    return user


def delete_user(repo: UserRepository, email: str) -> dict[str, Any]:
    result = repo.delete(email)
    log.info("user_deleted", email=email)
    return result
