# tests/test_engine.py
"""
Tests for factorials.engine (factorial, long_factorial, combinations).

Run: pytest -v
"""

from __future__ import annotations

import logging

import pytest
from gmpy2 import mpz
from sympy import binomial
from sympy import factorial as sympy_factorial

from factorials import APPLY, InvalidArgumentError
from factorials.engine import (
    LONG_FACTORIALS,
    combinations,
    factorial,
    long_factorial,
    max_bigint_factorial_digit,
    max_long_factorial_digit,
    multiply_range,
)

FACTORIAL_100 = int(
    "93326215443944152681699238856266700490715968264381621468592963895217599993229915608941463976156518286253697920827"
    "223758251185210916864000000000000000000000000"
)

# n values on both sides of the 64-bit table
RECURRENCE_NS = [1, 2, 5, 19, 20, 21, 22, 25, 33, 64, 100, 257, 1000]


# ---------- factorial ---------------------------------------------------------


def test_factorial_zero():
    assert factorial(0) == 1


@pytest.mark.parametrize("n", RECURRENCE_NS)
def test_factorial_recurrence(n):
    assert factorial(n) == n * factorial(n - 1)


@pytest.mark.parametrize("n", [0, 7, 20, 21, 50, 500, 2048])
def test_factorial_matches_sympy(n):
    assert factorial(n) == int(sympy_factorial(n))


def test_factorial_21():
    assert factorial(21) == 51090942171709440000


def test_factorial_100():
    got = factorial(100)
    assert got == FACTORIAL_100
    assert len(str(got)) == 158


def test_factorial_returns_plain_int():
    assert type(factorial(30)) is int
    assert type(factorial(3)) is int


def test_factorial_accepts_mpz():
    assert factorial(mpz(25)) == int(sympy_factorial(25))


@pytest.mark.parametrize("n", [-1, -2, -21, -10**20])
def test_factorial_negative_input(n):
    with pytest.raises(InvalidArgumentError, match="negative"):
        factorial(n)


def test_factorial_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        factorial(-1)


def test_factorial_non_integer():
    with pytest.raises(TypeError):
        factorial(3.2)


def test_factorial_none():
    with pytest.raises(InvalidArgumentError):
        factorial(None)


def test_direct_accumulation_gives_same_result():
    fast = [factorial(n) for n in (21, 99, 640)]
    APPLY({"FACTORIAL": {"NATIVE_ACCUMULATOR": False}})
    slow = [factorial(n) for n in (21, 99, 640)]
    assert fast == slow


# ---------- long_factorial ----------------------------------------------------


@pytest.mark.parametrize("n", range(0, 21))
def test_long_factorial_present_up_to_20(n):
    value = long_factorial(n)
    assert value is not None
    assert value == factorial(n)
    assert value < 2**63


@pytest.mark.parametrize("n", [21, 22, 100])
def test_long_factorial_absent_beyond_20(n):
    assert long_factorial(n) is None


@pytest.mark.parametrize("n", [-1, -100])
def test_long_factorial_negative_input(n):
    with pytest.raises(InvalidArgumentError):
        long_factorial(n)


def test_max_long_factorial_digit():
    assert max_long_factorial_digit() == 20
    assert len(LONG_FACTORIALS) == 21


def test_table_is_immutable():
    with pytest.raises(TypeError):
        LONG_FACTORIALS[0] = 2  # type: ignore[index]


# ---------- multiply_range ----------------------------------------------------


@pytest.mark.parametrize(
    "start,end,expected",
    [
        (1, 1, 1),             # empty
        (5, 3, 1),             # empty (reversed)
        (1, 6, 120),
        (21, 22, 21),
        (-3, 2, 0),            # straddles zero
        (0, 1, 0),
        (-4, -1, -24),         # -4 · -3 · -2
    ],
    ids=["empty", "reversed", "1..5", "single", "straddle", "zero-only", "negatives"],
)
def test_multiply_range(start, end, expected):
    assert multiply_range(start, end) == expected


def test_multiply_range_flushes_large_factors():
    # factors near 2**40 force a flush on almost every step
    start = 2**40
    expected = 1
    for i in range(start, start + 12):
        expected *= i
    assert multiply_range(start, start + 12) == expected


# ---------- combinations ------------------------------------------------------

COMBINATION_CASES = [
    (0, 0, 1),
    (1, 0, 1),
    (1, 1, 1),
    (5, 2, 10),
    (15, 4, 1365),
    (30, 15, 155117520),
    (100, 50, 100891344545564193334812497256),
]


@pytest.mark.parametrize("n,k,expected", COMBINATION_CASES, ids=[f"C({n},{k})" for n, k, _ in COMBINATION_CASES])
def test_combinations_known_values(n, k, expected):
    assert combinations(n, k) == expected


@pytest.mark.parametrize("n,k", [(10, 3), (52, 5), (200, 7), (333, 160), (1000, 999)])
def test_combinations_match_sympy(n, k):
    assert combinations(n, k) == int(binomial(n, k))


@pytest.mark.parametrize("n", [0, 1, 2, 7, 20, 21, 64, 150])
def test_combinations_symmetry_and_edges(n):
    assert combinations(n, 0) == 1
    assert combinations(n, n) == 1
    for k in range(0, n + 1, max(1, n // 7)):
        assert combinations(n, k) == combinations(n, n - k)


def test_combinations_row_sum():
    assert sum(combinations(40, k) for k in range(41)) == 2**40


@pytest.mark.parametrize(
    "n,k,match",
    [
        (5, 6, "more than"),
        (0, 1, "more than"),
        (5, -1, "negative"),
        (-1, -3, "negative"),
        (-5, -1, "more than"),
    ],
)
def test_combinations_invalid(n, k, match):
    with pytest.raises(InvalidArgumentError, match=match):
        combinations(n, k)


def test_combinations_direct_accumulation():
    APPLY({"FACTORIAL": {"NATIVE_ACCUMULATOR": False}})
    assert combinations(100, 50) == 100891344545564193334812497256


# ---------- max_bigint_factorial_digit ---------------------------------------


@pytest.mark.parametrize("bits", [1, 2, 3, 8, 63, 64, 100, 257, 1000, 4096])
def test_max_bigint_factorial_digit_fits(bits):
    n = max_bigint_factorial_digit(bits)
    assert factorial(n).bit_length() <= bits
    assert factorial(n + 1).bit_length() > bits


def test_max_bigint_factorial_digit_64_bit():
    assert max_bigint_factorial_digit(63) == 20


def test_max_bigint_factorial_digit_default():
    n = max_bigint_factorial_digit()
    assert n == 86_181_405


def test_max_bigint_factorial_digit_from_profile():
    APPLY({"FACTORIAL": {"BIT_LIMIT": 63}})
    assert max_bigint_factorial_digit() == 20


def test_max_bigint_factorial_digit_invalid():
    with pytest.raises(InvalidArgumentError):
        max_bigint_factorial_digit(0)


# ---------- logging -----------------------------------------------------------


def test_slow_path_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="factorials.engine")
    factorial(30)
    assert any("factorial.slow_path" in r.getMessage() for r in caplog.records)


def test_direct_accumulation_is_logged_at_debug(caplog):
    APPLY({"FACTORIAL": {"NATIVE_ACCUMULATOR": False}})
    caplog.set_level(logging.DEBUG, logger="factorials.engine")
    multiply_range(3, 9)
    messages = [r.getMessage() for r in caplog.records]
    assert any("range.multiplied" in m and "\"flushes\": 6" in m for m in messages)


def test_max_bigint_factorial_digit_power_of_two_boundary():
    # 2! = 2 needs two bits, so one bit only holds 0! and 1!
    assert max_bigint_factorial_digit(1) == 1


def test_nothing_logged_by_default(caplog):
    caplog.set_level(logging.WARNING)
    factorial(30)
    combinations(40, 20)
    assert not caplog.records
