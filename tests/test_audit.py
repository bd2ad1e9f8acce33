from __future__ import annotations

import logging

from regcheck.audit import CheckEvent, LoggingAuditor


def test_completed_check_logs_info_with_structured_data(caplog):
    with caplog.at_level(logging.DEBUG, logger="regcheck.audit"):
        LoggingAuditor().record(
            CheckEvent.CHECK_COMPLETED,
            normalized_email="user@example.com",
            details={"available": True},
        )

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.getMessage() == "event=check_completed email=user@example.com available=True"
    assert record.audit_data["event"] == "check_completed"
    assert record.audit_data["normalized_email"] == "user@example.com"
    assert record.audit_data["success"] is True


def test_existing_email_logs_warning(caplog):
    with caplog.at_level(logging.DEBUG, logger="regcheck.audit"):
        LoggingAuditor().record(CheckEvent.EMAIL_EXISTS, normalized_email="taken@example.com")

    assert caplog.records[-1].levelno == logging.WARNING


def test_empty_input_logs_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="regcheck.audit"):
        LoggingAuditor().record(CheckEvent.EMPTY_INPUT, normalized_email="")

    record = caplog.records[-1]
    assert record.levelno == logging.DEBUG
    assert "email=" not in record.getMessage()


def test_failure_logs_error_with_traceback(caplog):
    try:
        raise ConnectionError("refused")
    except ConnectionError as exc:
        error = exc

    with caplog.at_level(logging.DEBUG, logger="regcheck.audit"):
        LoggingAuditor().record(
            CheckEvent.CHECK_FAILED,
            normalized_email="x@y.com",
            success=False,
            exc=error,
        )

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.exc_info[1] is error
    assert "success=false" in record.getMessage()


def test_email_can_be_excluded(caplog):
    with caplog.at_level(logging.DEBUG, logger="regcheck.audit"):
        LoggingAuditor(include_email=False).record(
            CheckEvent.CHECK_COMPLETED,
            normalized_email="private@example.com",
        )

    record = caplog.records[-1]
    assert "private@example.com" not in record.getMessage()
    assert "normalized_email" not in record.audit_data
