# -----------------------------------------------------------------------------
#  number_system.py
#  Conversion to and from the factorial number system.
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

from gmpy2 import mpz, t_divmod

from factorials.utility import InvalidArgumentError, as_int


def decimal_to_factorial_digits(value: int) -> list[int]:
    """
    Digits of `value` in the factorial number system, least significant first.

    Element i is the remainder of the division by i+2, i.e. the coefficient
    of (i+1)!. The 0! place is always zero and left out. For example
    10 = 1·3! + 2·2! + 0·1! + 0·0! gives [0, 2, 1], and 0 gives [].

    Negative values are not complemented: every digit simply takes the sign
    of `value`, so -10 gives [0, -2, -1].

    Raises InvalidArgumentError if value is None.
    """
    dividend = mpz(as_int(value, "Value"))

    digits: list[int] = []
    divisor = 2
    while dividend != 0:
        # t_divmod truncates, so the remainder keeps the dividend's sign
        dividend, remainder = t_divmod(dividend, divisor)
        digits.append(int(remainder))
        divisor += 1
    return digits


def factorial_digits_to_decimal(digits: Iterable[int]) -> int:
    """Σ digits[i]·(i+1)!, the inverse of decimal_to_factorial_digits()."""
    if digits is None:
        raise InvalidArgumentError("Digits are null!")

    total = mpz(0)
    weight = mpz(1)
    for i, d in enumerate(digits):
        weight *= i + 1
        total += weight * as_int(d, "digit")
    return int(total)
