"""Tests for the interactive console helpers."""

import pytest

from credibility_engine.main import select_claim


@pytest.fixture
def claims(make_claim):
    """Provide a three-claim list."""
    return [make_claim("a"), make_claim("b"), make_claim("c")]


def test_select_claim_by_number(claims):
    """Numbers are 1-based positions in the list."""
    assert select_claim(claims, "1").id == "a"
    assert select_claim(claims, "3").id == "c"


@pytest.mark.parametrize("argument", ["0", "-1", "4", "two", ""])
def test_select_claim_rejects_bad_numbers(claims, argument):
    """Zero, negative, out-of-range and non-numeric input select nothing."""
    assert select_claim(claims, argument) is None
