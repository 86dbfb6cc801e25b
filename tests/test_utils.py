"""Tests for shared helpers in dialectic.utils."""

import pytest

from dialectic.utils import display_width, is_number, round_number


@pytest.mark.parametrize("value", [1, 0, -3, 2.5, 10**400, -(10**400)])
def test_is_number_accepts(value):
    assert is_number(value) is True


@pytest.mark.parametrize("value", [True, False, None, "1", float("nan"), float("inf"), float("-inf"), [1]])
def test_is_number_rejects(value):
    assert is_number(value) is False


@pytest.mark.parametrize(
    "number, expected",
    [(1, 1), (2, 1), (3, 2), (0, 0), (2.5, 2), (3.0, 2), (10**400 + 1, 5 * 10**399 + 1)],
)
def test_round_number(number, expected):
    assert round_number(number) == expected


def test_display_width_counts_wide_chars():
    assert display_width("abc") == 3
    assert display_width("🎭 Actor") == 8
    assert display_width("│─") == 2
