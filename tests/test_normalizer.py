from __future__ import annotations

import pytest

from regcheck.normalizer import is_blank, normalize


def test_normalize_trims_and_lowercases():
    assert normalize("  John.Doe@Example.COM \t") == "john.doe@example.com"


def test_normalize_none_returns_empty_string():
    assert normalize(None) == ""


def test_normalize_empty_and_whitespace():
    assert normalize("") == ""
    assert normalize("   \n") == ""


@pytest.mark.parametrize(
    "raw",
    ["User@Example.com", "  MiXeD@CaSe.Org  ", "ÉMILE@Exemple.FR", "already@lower.com", "  "],
)
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once
    assert normalize(raw) == normalize(raw.strip().lower())


def test_normalize_keeps_inner_whitespace():
    # Only surrounding whitespace is insignificant.
    assert normalize(" a b@example.com ") == "a b@example.com"


def test_is_blank():
    assert is_blank(None)
    assert is_blank(" \t ")
    assert not is_blank(" x@y.com ")
