# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import operator
from typing import Any


class UserInputError(Exception):
    pass


class InvalidArgumentError(ValueError):
    """Raised when an argument is outside the domain of an operation."""


def as_int(value: Any, name: str = "value") -> int:
    """
    Coerce an integral argument (int, bool, gmpy2.mpz, ...) to a plain int.

    None is a domain error, anything non-integral is a type error.
    """
    if value is None:
        raise InvalidArgumentError(f"{name} is null!")
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}") from None


def check_on_negative(n: int, message: str) -> None:
    if n < 0:
        raise InvalidArgumentError(message)


def check_range_closed(start: int, end: int, message: str) -> None:
    if end < start:
        raise InvalidArgumentError(message)
