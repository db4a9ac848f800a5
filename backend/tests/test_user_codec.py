from __future__ import annotations

import pytest

from user_api.domain.users import (
    User,
    from_attribute_values,
    parse_user,
    to_attribute_values,
    user_key,
)
from user_api.errors import StoreFailure, ValidationError


def test_record_round_trips_through_attribute_values():
    user = User(email="a@b.com", firstName="Ada", lastName="Lovelace")

    item = to_attribute_values(user)
    assert item == {
        "email": {"S": "a@b.com"},
        "firstName": {"S": "Ada"},
        "lastName": {"S": "Lovelace"},
    }
    assert from_attribute_values(item) == user


def test_empty_names_survive_the_round_trip():
    user = User(email="a@b.com")
    assert from_attribute_values(to_attribute_values(user)) == user


def test_user_key_is_email_string_attribute():
    assert user_key("a@b.com") == {"email": {"S": "a@b.com"}}


def test_parse_user_reads_camel_case_fields():
    u = parse_user(b'{"email": "a@b.com", "firstName": "Ada", "lastName": "Lovelace"}')
    assert u == User(email="a@b.com", firstName="Ada", lastName="Lovelace")


def test_parse_user_defaults_missing_and_null_fields_to_empty():
    u = parse_user('{"email": "a@b.com", "lastName": null}')
    assert u.firstName == ""
    assert u.lastName == ""


def test_parse_user_ignores_unknown_fields():
    u = parse_user(b'{"email": "a@b.com", "age": 37}')
    assert u.model_dump() == {"email": "a@b.com", "firstName": "", "lastName": ""}


@pytest.mark.parametrize(
    "body",
    [
        None,
        b"",
        b"not json",
        b"[]",
        b'"a@b.com"',
        b'{"email": 42}',
        b'{"email": "a@b.com", "firstName": ["Ada"]}',
    ],
)
def test_parse_user_rejects_malformed_bodies(body):
    with pytest.raises(ValidationError) as ei:
        parse_user(body)
    assert ei.value.status_code == 422
    assert ei.value.message == "invalid user data"


def test_parse_user_uses_the_given_message():
    with pytest.raises(ValidationError) as ei:
        parse_user(b"{", message="invalid email")
    assert str(ei.value) == "invalid email"


def test_from_attribute_values_fills_missing_attributes():
    assert from_attribute_values({"email": {"S": "a@b.com"}}) == User(email="a@b.com")


def test_from_attribute_values_rejects_non_string_attributes():
    with pytest.raises(StoreFailure) as ei:
        from_attribute_values({"email": {"S": "a@b.com"}, "firstName": {"N": "7"}})
    assert ei.value.message == "failed to unmarshal record"
    assert ei.value.operation == "Unmarshal"


@pytest.mark.parametrize("body", [b"null", "null", b" null\n"])
def test_parse_user_null_body_is_an_empty_record(body):
    assert parse_user(body) == User()
