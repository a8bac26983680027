from __future__ import annotations

import logging

import pytest

from cruddemo.entities import Employee, Student
from cruddemo.errors import ForbiddenFieldError, UnknownFieldError, ValidationError
from cruddemo.patch import apply_patch


@pytest.fixture
def daffy() -> Employee:
    return Employee(id=1, first_name="Daffy", last_name="Duck", email="daffy@luv2code.com")


def test_patch_replaces_only_named_fields(daffy: Employee) -> None:
    patched = apply_patch(daffy, {"firstName": "Scooby"})

    assert patched == Employee(id=1, first_name="Scooby", last_name="Duck", email="daffy@luv2code.com")


def test_patch_accepts_attribute_names(daffy: Employee) -> None:
    patched = apply_patch(daffy, {"last_name": "Doo", "email": "scooby@luv2code.com"})

    assert patched.first_name == "Daffy"
    assert patched.last_name == "Doo"
    assert patched.email == "scooby@luv2code.com"


def test_empty_patch_returns_equal_entity(daffy: Employee) -> None:
    patched = apply_patch(daffy, {})

    assert patched == daffy
    assert patched is not daffy


def test_patch_does_not_mutate_existing(daffy: Employee) -> None:
    apply_patch(daffy, {"firstName": "Scooby"})

    assert daffy.first_name == "Daffy"


def test_patch_keeps_entity_type() -> None:
    student = Student(id=3, first_name="Paul", last_name="Doe")

    patched = apply_patch(student, {"email": "paul@luv2code.com"})

    assert isinstance(patched, Student)
    assert patched.email == "paul@luv2code.com"


@pytest.mark.parametrize(
    "patch",
    [
        {"id": 2},
        {"id": 1},
        {"id": 5, "firstName": "Scooby"},
    ],
)
def test_patch_with_id_is_forbidden(daffy: Employee, patch: dict) -> None:
    with pytest.raises(ForbiddenFieldError):
        apply_patch(daffy, patch)


def test_patch_with_uncoercible_value_raises_validation_error(daffy: Employee) -> None:
    with pytest.raises(ValidationError) as excinfo:
        apply_patch(daffy, {"firstName": None})

    assert excinfo.value.errors
    assert excinfo.value.errors[0]["field"] == "firstName"


def test_unknown_keys_are_dropped_by_default(daffy: Employee, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="cruddemo.patch"):
        patched = apply_patch(daffy, {"nickname": "Daff", "lastName": "Drake"})

    assert patched.last_name == "Drake"
    assert not hasattr(patched, "nickname")
    assert "nickname" in caplog.text


def test_unknown_keys_are_rejected_when_strict(daffy: Employee) -> None:
    with pytest.raises(UnknownFieldError) as excinfo:
        apply_patch(daffy, {"nickname": "Daff"}, reject_unknown=True)

    assert "nickname" in str(excinfo.value)
    # UnknownFieldError is reported to clients like any other validation failure
    assert isinstance(excinfo.value, ValidationError)


def test_field_named_under_both_spellings_is_rejected(daffy: Employee) -> None:
    with pytest.raises(ValidationError) as excinfo:
        apply_patch(daffy, {"firstName": "A", "first_name": "B"})

    assert excinfo.value.errors == [{"field": "firstName", "message": "named more than once"}]
    assert daffy.first_name == "Daffy"
