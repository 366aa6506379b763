"""Parsers for datarules types.

Every parser is a total function: it takes a raw value and returns either the
canonical typed value or the ``INVALID`` marker. Parsers have no side effects
and know nothing about rules or records.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import Any

from dateutil import parser as dateutil_parser

from datarules.config import DEFAULT_AUTH_ROLES, PasswordPolicy
from datarules.types import INVALID

DEFAULT_PASSWORD_POLICY = PasswordPolicy()


# =============================================================================
# Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+-]+@[a-z0-9-]+(\.[a-z0-9-]+)*\.[a-z]{2,}$")

TIME_PATTERN = re.compile(
    r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s?([AP]M)?$",
    re.IGNORECASE,
)

INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")

FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

TRUE_VALUES = frozenset({"true", "t", "yes", "y", "on"})
FALSE_VALUES = frozenset({"false", "f", "no", "n", "off"})


# =============================================================================
# Scalar Parsers
# =============================================================================


def boolean_parser(value: Any) -> Any:
    """Parse a boolean from a bool, a yes/no style string, or integer 1/0."""
    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        lowered = value.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        return INVALID

    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False

    return INVALID


def date_parser(value: Any) -> Any:
    """Parse a date or datetime.

    datetime values pass through; plain dates are promoted to midnight.
    Strings are handed to dateutil.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or value.strip() == "":
        return INVALID

    try:
        return dateutil_parser.parse(value)
    except (ValueError, OverflowError):
        return INVALID


def email_parser(value: Any) -> Any:
    """Normalize (strip, lowercase) and check an email address."""
    if not isinstance(value, str):
        return INVALID

    email = value.strip().lower()
    if EMAIL_PATTERN.match(email):
        return email
    return INVALID


def enum_parser(value: Any, allowed: Iterable[str]) -> Any:
    """Match a value against allowed entries, ignoring case.

    Returns the entry from ``allowed`` with its canonical casing, so
    ``enum_parser("ADMIN", ["Guest", "Admin"])`` gives ``"Admin"``.
    """
    if not isinstance(value, str):
        return INVALID

    normalized = value.strip().lower()
    for entry in allowed:
        if entry.lower() == normalized:
            return entry
    return INVALID


def auth_role_parser(value: Any, roles: Iterable[str] = DEFAULT_AUTH_ROLES) -> Any:
    """Parse an authentication role against the configured role list."""
    return enum_parser(value, roles)


def float_parser(value: Any) -> Any:
    """Parse the leading floating point portion of a value."""
    if isinstance(value, bool):
        return INVALID

    try:
        if isinstance(value, (int, float)):
            result = float(value)
        elif isinstance(value, str):
            match = FLOAT_PREFIX.match(value)
            if not match:
                return INVALID
            result = float(match.group(1))
        else:
            return INVALID
    except (ValueError, OverflowError):
        return INVALID

    if math.isnan(result) or math.isinf(result):
        return INVALID
    return result


def integer_parser(value: Any) -> Any:
    """Parse the leading integer portion of a value.

    Floats are truncated toward zero, as are numeric strings: "3.9" gives 3.
    """
    if isinstance(value, bool):
        return INVALID

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return INVALID
        return int(value)
    if isinstance(value, str):
        match = INTEGER_PREFIX.match(value)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                # Longer than the interpreter's int conversion limit
                return INVALID
    return INVALID


def password_parser(value: Any, policy: PasswordPolicy = DEFAULT_PASSWORD_POLICY) -> Any:
    """Check a password against the policy, returning it unchanged if it passes."""
    if not isinstance(value, str):
        return INVALID

    if len(value) < policy.min_length:
        return INVALID

    upper = lower = digit = symbol = 0
    for char in value:
        if "A" <= char <= "Z":
            upper += 1
        elif "a" <= char <= "z":
            lower += 1
        elif "0" <= char <= "9":
            digit += 1
        elif not char.isalnum():
            symbol += 1

    if (
        upper < policy.min_upper
        or lower < policy.min_lower
        or digit < policy.min_digit
        or symbol < policy.min_symbol
    ):
        return INVALID

    return value


def string_parser(value: Any) -> Any:
    """Accept strings as they are."""
    if isinstance(value, str):
        return value
    return INVALID


def time_parser(value: Any) -> Any:
    """Parse a clock time into 24-hour "HH:MM" or "HH:MM:SS".

    Accepts "H:MM", "H:MM:SS" and either form followed by AM/PM. Seconds are
    emitted only when the input carries them.
    """
    if isinstance(value, time):
        if value.second:
            return value.strftime("%H:%M:%S")
        return value.strftime("%H:%M")
    if not isinstance(value, str):
        return INVALID

    match = TIME_PATTERN.match(value.strip())
    if not match:
        return INVALID

    hours = int(match.group(1))
    minutes = int(match.group(2))
    has_seconds = match.group(3) is not None
    seconds = int(match.group(3)) if has_seconds else 0
    period = match.group(4)

    if period:
        period = period.upper()
        if period == "PM" and hours < 12:
            hours += 12
        elif period == "AM" and hours == 12:
            hours = 0

    if not (0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60):
        return INVALID

    if has_seconds:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{hours:02d}:{minutes:02d}"
