from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("factorials")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, list_profiles, load_settings
from .engine import (
    combinations,
    factorial,
    long_factorial,
    max_bigint_factorial_digit,
    max_long_factorial_digit,
    multiply_range,
)
from .log import configure_logging
from .number_system import decimal_to_factorial_digits, factorial_digits_to_decimal
from .runtime import APPLY, CFG
from .utility import InvalidArgumentError, UserInputError
from .workspace import ensure_workspace, workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "InvalidArgumentError",
    "UserInputError",
    "__version__",
    "combinations",
    "configure_logging",
    "decimal_to_factorial_digits",
    "ensure_workspace",
    "factorial",
    "factorial_digits_to_decimal",
    "has_profile",
    "list_profiles",
    "load_settings",
    "long_factorial",
    "max_bigint_factorial_digit",
    "max_long_factorial_digit",
    "multiply_range",
    "workspace_dir",
]
