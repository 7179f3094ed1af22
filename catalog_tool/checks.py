"""Reusable check functions.

Each function inspects one candidate value and returns None when it is
acceptable or a ConstraintViolation describing the first rule it breaks.
They never raise and never mutate anything, so entity validators and front
ends can both call them. Entity types compose these into their per-field
check_<field> methods.
"""

from __future__ import annotations

import re
from collections.abc import Container
from datetime import date, datetime
from typing import Any

from catalog_tool.enumerations import Enumeration
from catalog_tool.violations import ConstraintViolation, ViolationKind


def next_year() -> int:
    """The current year plus one."""
    return datetime.now().year + 1


def is_blank(value: Any) -> bool:
    """True for None, empty strings and strings of whitespace."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def is_integer_like(value: Any) -> bool:
    """True for ints (not bools) and strings holding an ASCII base-10 integer."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and re.fullmatch(r"\s*[-+]?[0-9]+\s*", value) is not None


def check_mandatory(value: Any, what: str) -> ConstraintViolation | None:
    """Reject a missing or blank value."""
    if is_blank(value) or (isinstance(value, (list, tuple)) and not value):
        return ConstraintViolation(ViolationKind.MANDATORY_VALUE, f"A value for {what} must be provided!")
    return None


def check_string(
    value: Any,
    what: str,
    max_length: int | None = None,
    required: bool = True,
) -> ConstraintViolation | None:
    """Check a non-empty string, optionally bounded in length after trimming.

    Args:
        value: Candidate value.
        what: Attribute description used in messages.
        max_length: Maximum length of the trimmed string, if bounded.
        required: When False, None and "" are accepted.
    """
    if is_blank(value):
        if not required:
            return None
        return check_mandatory(value, what)
    if not isinstance(value, str):
        return ConstraintViolation(ViolationKind.RANGE, f"The {what} must be a non-empty string!")
    if max_length is not None and len(value.strip()) > max_length:
        return ConstraintViolation(
            ViolationKind.RANGE,
            f"The {what} must not exceed {max_length} characters!",
        )
    return None


def check_pattern(value: str, pattern: str, message: str) -> ConstraintViolation | None:
    """Check that the whole string matches a regular expression."""
    if re.fullmatch(pattern, value) is None:
        return ConstraintViolation(ViolationKind.PATTERN, message)
    return None


def check_integer_interval(
    value: Any,
    what: str,
    lower: int,
    upper: int | None = None,
    required: bool = True,
) -> ConstraintViolation | None:
    """Check an integer (or integer string) within [lower, upper].

    A non-integer is a range violation; an integer outside the bounds is an
    interval violation.
    """
    if is_blank(value):
        return check_mandatory(value, what) if required else None
    if not is_integer_like(value):
        return ConstraintViolation(ViolationKind.RANGE, f"The value of {what} must be an integer!")
    number = int(value)
    if number < lower or (upper is not None and number > upper):
        bounds = f"between {lower} and {upper}" if upper is not None else f"at least {lower}"
        return ConstraintViolation(ViolationKind.INTERVAL, f"The value of {what} must be {bounds}!")
    return None


def check_positive_integer(value: Any, what: str, required: bool = True) -> ConstraintViolation | None:
    """Check a positive integer (or integer string); failures are range violations."""
    if is_blank(value):
        return check_mandatory(value, what) if required else None
    if not is_integer_like(value) or int(value) < 1:
        return ConstraintViolation(ViolationKind.RANGE, f"The value of {what} must be a positive integer!")
    return None


def parse_date(value: Any) -> date | None:
    """Return a date for a date/datetime or an ISO YYYY-MM-DD string, else None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def check_date_not_before(
    value: Any,
    what: str,
    earliest: date,
    required: bool = True,
) -> ConstraintViolation | None:
    """Check a date (or ISO string) on or after earliest."""
    if is_blank(value):
        return check_mandatory(value, what) if required else None
    parsed = parse_date(value)
    if parsed is None:
        return ConstraintViolation(
            ViolationKind.PATTERN,
            f"The {what} must be a date in YYYY-MM-DD format!",
        )
    if parsed < earliest:
        return ConstraintViolation(
            ViolationKind.RANGE,
            f"The {what} must be greater than or equal to {earliest.isoformat()}!",
        )
    return None


def check_enum_code(value: Any, what: str, enumeration: Enumeration[Any]) -> ConstraintViolation | None:
    """Check a single enumeration code given as int or integer string."""
    if is_blank(value):
        return check_mandatory(value, what)
    if not is_integer_like(value) or not enumeration.contains(int(value)):
        return ConstraintViolation(ViolationKind.RANGE, f"Invalid value for {what}: {value}")
    return None


def check_enum_codes(
    values: Any,
    what: str,
    enumeration: Enumeration[Any],
    required: bool = True,
) -> ConstraintViolation | None:
    """Check a multi-valued enumeration attribute element by element.

    Elements must be ints (or enum members); strings are not accepted inside
    a selection.
    """
    if values is None or (isinstance(values, (list, tuple)) and not values):
        return check_mandatory(values, what) if required else None
    if not isinstance(values, (list, tuple)):
        return ConstraintViolation(ViolationKind.RANGE, f"The value of {what} must be a list!")
    for item in values:
        if not enumeration.contains(item):
            return ConstraintViolation(ViolationKind.RANGE, f"Invalid value for {what}: {item!r}")
    return None


def check_unique(key: str, existing: Container[str] | None, message: str) -> ConstraintViolation | None:
    """Check that key is not already used in existing (skipped when None)."""
    if existing is not None and key in existing:
        return ConstraintViolation(ViolationKind.UNIQUENESS, message)
    return None
