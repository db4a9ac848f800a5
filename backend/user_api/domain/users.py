"""
The user record and its two wire shapes.

A record travels as JSON over HTTP (`parse_user` / `User.model_dump`) and as
DynamoDB attribute values in the store (`to_attribute_values` /
`from_attribute_values`). The two shapes never mix.
"""

from __future__ import annotations

import re
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from ..errors import (
    ERROR_COULD_NOT_MARSHAL_ITEM,
    ERROR_FAILED_TO_UNMARSHAL_RECORD,
    ERROR_INVALID_USER_DATA,
    StoreFailure,
    ValidationError,
)

EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 254

_EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]{1,64}"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


class User(BaseModel):
    email: str = ""
    firstName: str = ""
    lastName: str = ""

    @field_validator("email", "firstName", "lastName", mode="before")
    @classmethod
    def _null_is_empty(cls, v: Any) -> Any:
        # JSON null decodes to the zero value, same as a missing field.
        return "" if v is None else v


def is_email_valid(email: str) -> bool:
    if not isinstance(email, str):
        return False
    if len(email) < EMAIL_MIN_LEN or len(email) > EMAIL_MAX_LEN:
        return False
    # fullmatch so a trailing newline is never accepted by `$`.
    return _EMAIL_RE.fullmatch(email) is not None


def parse_user(body: bytes | str | None, *, message: str = ERROR_INVALID_USER_DATA) -> User:
    """
    Decode a JSON request body into a `User`.

    A literal JSON `null` decodes to an empty record, like a missing field.
    Raises `ValidationError` (HTTP 422) with `message` when the body is not a
    JSON object of string fields.
    """
    raw = body or b""
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    if raw.strip() == b"null":
        return User()
    try:
        return User.model_validate_json(raw)
    except PydanticValidationError as e:
        raise ValidationError(message=message, status_code=422, cause=e) from e


def user_key(email: str) -> dict[str, Any]:
    return {"email": _serializer.serialize(email)}


def to_attribute_values(user: User) -> dict[str, Any]:
    try:
        return {k: _serializer.serialize(v) for k, v in user.model_dump().items()}
    except (TypeError, ValueError) as e:
        raise StoreFailure(message=ERROR_COULD_NOT_MARSHAL_ITEM, operation="Marshal", cause=e) from e


def from_attribute_values(item: dict[str, Any]) -> User:
    try:
        plain = {k: _deserializer.deserialize(v) for k, v in (item or {}).items()}
        return User.model_validate(plain)
    except (TypeError, ValueError, PydanticValidationError) as e:
        raise StoreFailure(message=ERROR_FAILED_TO_UNMARSHAL_RECORD, operation="Unmarshal", cause=e) from e
