"""Constraint violations and result types.

Checks return a ConstraintViolation (or None) instead of raising, and the
entity and registry layers hand violations back inside Result and
UpdateResult values.

Classes:
    ViolationKind: The five kinds of constraint violation.
    ConstraintViolation: A rejected value with its field and message.
    Result: Either a valid entity or the violation that prevented it.
    UpdateResult: Outcome of a registry update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError
from pydantic_core import PydanticCustomError


class ViolationKind(str, Enum):
    """Kind of constraint a candidate value violated.

    The values double as pydantic error types, so a violation raised inside
    a field validator can be recovered from the resulting ValidationError.
    """

    MANDATORY_VALUE = "mandatory_value_violation"
    RANGE = "range_violation"
    PATTERN = "pattern_violation"
    INTERVAL = "interval_violation"
    UNIQUENESS = "uniqueness_violation"


# pydantic's own error types that mean "no value given"
_MANDATORY_ERROR_TYPES = {"missing"}


@dataclass(frozen=True)
class ConstraintViolation:
    """Why a candidate value was rejected.

    Attributes:
        kind: Which constraint was violated.
        message: Human-readable explanation.
        field: Name of the attribute the value was meant for, if known.

    Example:
        >>> ConstraintViolation(ViolationKind.MANDATORY_VALUE, "A title must be provided!")
    """

    kind: ViolationKind
    message: str
    field: str | None = None

    def for_field(self, name: str) -> ConstraintViolation:
        """Return a copy bound to the given field name."""
        return ConstraintViolation(self.kind, self.message, name)

    def to_error(self) -> PydanticCustomError:
        """Wrap as a pydantic error so it can be raised from a validator."""
        return PydanticCustomError(self.kind.value, self.message)

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> ConstraintViolation:
        """Convert the first error of a pydantic ValidationError.

        Errors raised through to_error() keep their kind. A missing field
        becomes a mandatory-value violation; any other pydantic error (wrong
        type, frozen field, ...) is reported as a range violation.
        """
        first = error.errors(include_url=False)[0]
        loc = first.get("loc") or ()
        field_name = str(loc[0]) if loc else None
        error_type = first["type"]
        try:
            kind = ViolationKind(error_type)
        except ValueError:
            kind = (
                ViolationKind.MANDATORY_VALUE
                if error_type in _MANDATORY_ERROR_TYPES
                else ViolationKind.RANGE
            )
        message = first["msg"]
        if kind is ViolationKind.MANDATORY_VALUE and error_type in _MANDATORY_ERROR_TYPES:
            message = f"A value for {field_name} must be provided!"
        return cls(kind, message, field_name)

    def __str__(self) -> str:
        prefix = f"{self.field}: " if self.field else ""
        return f"{prefix}{self.message}"


@dataclass(frozen=True)
class Result[T]:
    """Either a validated value or the violation that rejected it."""

    value: T | None = None
    violation: ConstraintViolation | None = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    def unwrap(self) -> T:
        """Return the value, raising ValueError when there is a violation."""
        if self.violation is not None or self.value is None:
            raise ValueError(str(self.violation))
        return self.value


@dataclass
class UpdateResult:
    """Outcome of a registry update.

    Attributes:
        key: Primary key that was addressed.
        found: False when no entity exists under key.
        updated: Fields whose value actually changed.
        violation: The violation that caused a rollback, if any.
    """

    key: str
    found: bool = True
    updated: list[str] = field(default_factory=list)
    violation: ConstraintViolation | None = None

    @property
    def ok(self) -> bool:
        return self.found and self.violation is None

    @property
    def changed(self) -> bool:
        return self.ok and bool(self.updated)
