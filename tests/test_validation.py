from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from clientdesk.core.fallback import ReferenceFallbackResolver
from clientdesk.core.schema import Branch, ClientEdit, ClientRecord
from clientdesk.core.validation import (
    BRANCH_NOT_FOUND,
    SubmissionAccepted,
    SubmissionRejected,
    SubmissionValidator,
)


def test_fallback_is_fixed_and_fresh():
    resolver = ReferenceFallbackResolver()

    first = resolver.resolve()
    second = resolver.resolve()

    assert [(b.id, b.name) for b in first] == [
        ("1", "Main Branch"),
        ("2", "East Branch"),
        ("3", "West Branch"),
    ]
    assert first == second
    assert first is not second


def test_validator_accepts_known_branch():
    branches = [Branch(id="1", name="Main"), Branch(id="2", name="East")]
    edit = ClientEdit(name="Ada", date_of_birth="1990-05-01", branch_id="2")

    assert SubmissionValidator().validate(edit, branches) == SubmissionAccepted()


def test_validator_rejects_unknown_branch():
    branches = [Branch(id="1", name="Main")]
    edit = ClientEdit(name="Ada", date_of_birth="1990-05-01", branch_id="9")

    verdict = SubmissionValidator().validate(edit, branches)

    assert isinstance(verdict, SubmissionRejected)
    assert verdict.reason == BRANCH_NOT_FOUND


def test_validator_rejects_against_empty_set():
    edit = ClientEdit(name="Ada", date_of_birth="1990-05-01", branch_id="1")

    assert isinstance(SubmissionValidator().validate(edit, []), SubmissionRejected)


def test_edit_normalises_native_dates_to_iso_strings():
    edit = ClientEdit(name="Ada", date_of_birth=date(1990, 5, 1), branch_id=3)

    assert edit.date_of_birth == "1990-05-01"
    assert edit.branch_id == "3"


def test_edit_accepts_camel_case_payload_and_rejects_unknown_fields():
    edit = ClientEdit.model_validate({"name": "Ada", "dateOfBirth": "1990-05-01", "branchId": "1"})
    assert edit.branch_id == "1"

    with pytest.raises(ValidationError):
        ClientEdit.model_validate(
            {"name": "Ada", "dateOfBirth": "1990-05-01", "branchId": "1", "id": "other"}
        )


def test_edit_rejects_malformed_date():
    with pytest.raises(ValidationError):
        ClientEdit(name="Ada", date_of_birth="01/05/1990", branch_id="1")


def test_apply_edit_overwrites_only_editable_fields():
    record = ClientRecord.model_validate(
        {
            "id": 42,
            "name": "Old",
            "date_of_birth": "1980-01-01",
            "branch_id": 9,
            "email": "old@example.com",
        }
    )
    edit = ClientEdit(name="New", date_of_birth="1991-02-03", branch_id="1")

    merged = record.apply_edit(edit)

    assert merged.id == "42"
    assert merged.name == "New"
    assert merged.date_of_birth == "1991-02-03"
    assert merged.branch_id == "1"
    assert merged.to_row()["email"] == "old@example.com"
    assert record.name == "Old"
