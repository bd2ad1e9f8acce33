from __future__ import annotations

import sqlite3

import pytest

from regcheck.audit import CheckEvent
from regcheck.checker import (
    MESSAGE_AVAILABLE,
    MESSAGE_ERROR,
    MESSAGE_EXISTS,
    AvailabilityChecker,
    AvailabilityReason,
    AvailabilityResult,
    check_availability,
)
from regcheck.exceptions import StoreUnavailableError


class _FailingRepo:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def exists_normalized(self, key: str) -> bool:
        raise self.exc


class _MalformedRepo:
    def exists_normalized(self, key: str):
        return "yes"


@pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
def test_blank_input_is_unavailable_without_store_query(raw, counting_repo, auditor):
    result = AvailabilityChecker(counting_repo, auditor).check_availability(raw)

    assert result.available is False
    assert result.reason is not AvailabilityReason.EMAIL_EXISTS
    assert result.reason is AvailabilityReason.ERROR
    assert result.original_email == raw
    assert result.normalized_email == ""
    assert counting_repo.queries == []
    assert auditor.events[0]["event"] is CheckEvent.EMPTY_INPUT


def test_existing_legacy_email_is_reported(memory_repo, auditor):
    memory_repo.add_user(" John@Example.com ")

    result = AvailabilityChecker(memory_repo, auditor).check_availability("john@example.com")

    assert result.available is False
    assert result.reason is AvailabilityReason.EMAIL_EXISTS
    assert result.message == MESSAGE_EXISTS
    assert result.normalized_email == "john@example.com"
    assert auditor.events[-1]["event"] is CheckEvent.EMAIL_EXISTS


def test_unknown_email_is_available(memory_repo, auditor):
    result = AvailabilityChecker(memory_repo, auditor).check_availability("new.user@example.com")

    assert result.available is True
    assert result.reason is AvailabilityReason.AVAILABLE
    assert result.message == MESSAGE_AVAILABLE
    assert result.original_email == "new.user@example.com"
    assert result.normalized_email == "new.user@example.com"
    assert auditor.events[-1]["event"] is CheckEvent.CHECK_COMPLETED


def test_store_receives_normalized_key(counting_repo):
    AvailabilityChecker(counting_repo).check_availability("  Mixed@Case.COM ")
    assert counting_repo.queries == ["mixed@case.com"]


@pytest.mark.parametrize(
    "variant",
    ["taken@example.com", "TAKEN@example.com", "  Taken@Example.Com\t", "taken@EXAMPLE.COM "],
)
def test_equivalent_inputs_get_identical_verdicts(memory_repo, variant):
    memory_repo.add_user("taken@example.com")
    checker = AvailabilityChecker(memory_repo)

    result = checker.check_availability(variant)
    baseline = checker.check_availability("taken@example.com")

    assert (result.available, result.reason) == (baseline.available, baseline.reason)
    assert result.original_email == variant


@pytest.mark.parametrize(
    "exc",
    [
        StoreUnavailableError("down"),
        sqlite3.OperationalError("no such table: users"),
        ConnectionError("refused"),
        RuntimeError("boom"),
    ],
)
def test_store_failure_becomes_error_verdict(exc, auditor):
    result = AvailabilityChecker(_FailingRepo(exc), auditor).check_availability("x@y.com")

    assert result.available is False
    assert result.reason is AvailabilityReason.ERROR
    assert result.message == MESSAGE_ERROR
    assert result.original_email == "x@y.com"
    assert result.normalized_email == "x@y.com"

    failure = auditor.events[-1]
    assert failure["event"] is CheckEvent.CHECK_FAILED
    assert failure["success"] is False
    assert failure["exc"] is exc


def test_malformed_store_response_becomes_error_verdict(auditor):
    result = AvailabilityChecker(_MalformedRepo(), auditor).check_availability("x@y.com")

    assert result.reason is AvailabilityReason.ERROR
    assert result.available is False
    assert auditor.events[-1]["details"] == {"error": "MalformedStoreResponseError"}


def test_invalid_format_can_still_be_available(memory_repo):
    # Format and availability are independent questions.
    result = AvailabilityChecker(memory_repo).check_availability("not-an-email")
    assert result.available is True
    assert result.reason is AvailabilityReason.AVAILABLE


def test_checker_is_stateless_between_calls(memory_repo):
    checker = AvailabilityChecker(memory_repo)
    assert checker.check_availability("late@example.com").available is True

    memory_repo.add_user("late@example.com")
    assert checker.check_availability("late@example.com").available is False


def test_to_dict_wire_shape():
    result = AvailabilityResult(
        available=False,
        reason=AvailabilityReason.EMAIL_EXISTS,
        original_email=" A@B.com",
        normalized_email="a@b.com",
        message=MESSAGE_EXISTS,
    )
    assert result.to_dict() == {
        "available": False,
        "email": " A@B.com",
        "normalizedEmail": "a@b.com",
        "message": MESSAGE_EXISTS,
        "reason": "EMAIL_EXISTS",
    }


def test_module_level_helper(memory_repo):
    result = check_availability("Someone@Example.com", memory_repo)
    assert result.reason is AvailabilityReason.AVAILABLE
    assert result.normalized_email == "someone@example.com"


def test_default_auditor_logs_failures(caplog):
    with caplog.at_level("ERROR", logger="regcheck.audit"):
        AvailabilityChecker(_FailingRepo(RuntimeError("boom"))).check_availability("x@y.com")

    assert "event=check_failed" in caplog.text
    assert "success=false" in caplog.text
