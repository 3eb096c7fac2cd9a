# -----------------------------------------------------------------------------
#  engine.py
#  Exact factorials and binomial coefficients.
# -----------------------------------------------------------------------------
"""
Exact factorials and binomial coefficients.

All functions are pure: the only module state is the read-only table of
0! .. 20!, so everything here is safe to call from several threads.
"""

from __future__ import annotations

from math import lgamma, log

import gmpy2
from gmpy2 import mpz

from factorials.log import get_logger
from factorials.runtime import CFG
from factorials.runtime import current as _rt_current
from factorials.utility import (
    InvalidArgumentError,
    as_int,
    check_on_negative,
    check_range_closed,
)

logger = get_logger(__name__)

# n! for n in 0..20, every value fits a signed 64-bit integer
LONG_FACTORIALS: tuple[int, ...] = (
    1, 1, 2, 6, 24, 120, 720, 5_040, 40_320, 362_880, 3_628_800, 39_916_800, 479_001_600,
    6_227_020_800, 87_178_291_200, 1_307_674_368_000, 20_922_789_888_000, 355_687_428_096_000,
    6_402_373_705_728_000, 121_645_100_408_832_000, 2_432_902_008_176_640_000,
)

# Width of the native accumulator (signed 64-bit, sign bit excluded)
NATIVE_BITS = 63

# Default bit budget for max_bigint_factorial_digit(), a 2**31 - 1 bit magnitude
DEFAULT_BIT_LIMIT = 2**31 - 1

_LN2 = log(2)

# Below this many bits the float estimate is corrected against exact factorials
_EXACT_CHECK_BITS = 1 << 16


def max_long_factorial_digit() -> int:
    """Largest n whose factorial is available from long_factorial()."""
    return len(LONG_FACTORIALS) - 1


def long_factorial(n: int) -> int | None:
    """
    Return n! when it fits a signed 64-bit integer (n <= 20), else None.

    None means "too large for this representation"; the value is never
    truncated or approximated.
    Raises InvalidArgumentError if n is negative.
    """
    n = as_int(n, "n")
    check_on_negative(n, f"digit is negative number! (n = {n})")
    return LONG_FACTORIALS[n] if n < len(LONG_FACTORIALS) else None


def factorial(n: int) -> int:
    """
    Return n! exactly.

    Values up to 20! come straight from the table. Beyond that the table
    value for 20! is multiplied by the product of 21..n (see multiply_range).
    Memory is the only limit; max_bigint_factorial_digit() gives an idea
    of where that starts to bite.

    Raises InvalidArgumentError if n is negative.
    """
    n = as_int(n, "n")
    check_on_negative(n, f"digit is negative number! (n = {n})")

    if n < len(LONG_FACTORIALS):
        return LONG_FACTORIALS[n]

    k = max_long_factorial_digit()
    logger.debug("factorial.slow_path", n=n)
    return int(mpz(LONG_FACTORIALS[k]) * _product(k + 1, n + 1))


def combinations(n: int, k: int) -> int:
    """
    C(n, k): the number of ways to take k things out of n without repetition.

    With s = min(k, n - k) only the numerator (n-s+1)·…·n and s! are built,
    then divided exactly.

    Raises InvalidArgumentError if k > n or k < 0 (checked in that order).
    """
    n = as_int(n, "n")
    k = as_int(k, "k")
    check_range_closed(k, n, f"k = {k} is more than n = {n}!")
    check_on_negative(k, f"k = {k} is negative number!")

    if k == 0:
        return 1

    s = min(k, n - k)
    numerator = _product(n - s + 1, n + 1)
    denominator = mpz(factorial(s))
    logger.debug("combinations.computed", n=n, k=k, s=s)
    return int(gmpy2.divexact(numerator, denominator))


def multiply_range(start: int, end_exclusive: int) -> int:
    """
    Product of all integers in [start, end_exclusive); 1 for an empty range.

    A range that straddles zero (start <= 0 < end_exclusive) yields 0.
    """
    return int(_product(as_int(start, "start"), as_int(end_exclusive, "end_exclusive")))


def _is_native_multiply_exact(acc: int, factor: int) -> bool:
    return acc.bit_length() + (factor + 1).bit_length() <= NATIVE_BITS


def _product(start: int, end_exclusive: int) -> mpz:
    if start <= 0 < end_exclusive:
        return mpz(0)

    result = mpz(1)
    if not _rt_current().native_accumulator:
        # every factor goes straight into the mpz
        for i in range(start, end_exclusive):
            result *= i
        logger.debug("range.multiplied", start=start, end=end_exclusive, flushes=max(0, end_exclusive - start))
        return result

    # Fold factors into a small int and only touch the mpz when the next
    # factor could push it past NATIVE_BITS.
    term = 1
    flushes = 0
    for i in range(start, end_exclusive):
        term *= i
        if not _is_native_multiply_exact(term, i + 1):
            result *= term
            term = 1
            flushes += 1

    if term != 1:
        result *= term
        flushes += 1

    logger.debug("range.multiplied", start=start, end=end_exclusive, flushes=flushes)
    return result


def _log2_factorial(n: int) -> float:
    # log2(n!) = log2(1) + log2(2) + ... + log2(n)
    return lgamma(n + 1) / _LN2


def max_bigint_factorial_digit(bit_limit: int | None = None) -> int:
    """
    Largest n such that n! fits in `bit_limit` bits.

    Informational only: factorial() does not enforce it. The bound is
    optimistic, since building such a value also needs the memory and the
    time to multiply it out. For the default 2**31 - 1 bits this gives
    86_181_405. The 86_181_406 that is sometimes quoted for a 2**31 - 1 bit
    integer is the first n whose factorial no longer fits.

    `bit_limit` defaults to FACTORIAL.BIT_LIMIT from the active profile.
    """
    if bit_limit is None:
        bit_limit = CFG("FACTORIAL.BIT_LIMIT", DEFAULT_BIT_LIMIT)
    bit_limit = as_int(bit_limit, "bit_limit")
    if bit_limit < 1:
        raise InvalidArgumentError(f"bit limit must be positive! (bit_limit = {bit_limit})")

    # log2(1!) = 0 < bit_limit, so lo always fits
    lo, hi = 1, 2
    while _log2_factorial(hi) < bit_limit:
        lo, hi = hi, hi * 2

    while hi - lo > 1:
        mid = (lo + hi) // 2
        if _log2_factorial(mid) < bit_limit:
            lo = mid
        else:
            hi = mid

    # lgamma is off by a few ulps, which matters when n! is close to a power of two
    if bit_limit <= _EXACT_CHECK_BITS:
        while factorial(lo).bit_length() > bit_limit:
            lo -= 1
        while factorial(lo + 1).bit_length() <= bit_limit:
            lo += 1
    return lo
