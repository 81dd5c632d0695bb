"""Validation results: violations and the per-field error map.

A ``Violation`` is the outcome of one failed field check. Forms only
keep the message: ``ValidationErrors`` maps field names to the message
of their most recent failing validation. Passing fields are absent.

The helpers here never mutate their input; each returns a new map::

    errors = with_field_error(errors, "email", "Already registered")
    errors = without_field_error(errors, "email")
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

type ValidationErrors = dict[str, str]


class ErrorKind(StrEnum):
    """Which check produced a violation."""

    MISSING_REQUIRED = "missing_required"
    OUT_OF_RANGE = "out_of_range"
    LENGTH_VIOLATION = "length_violation"
    PATTERN_MISMATCH = "pattern_mismatch"
    FORMAT_INVALID = "format_invalid"
    CUSTOM_RULE_FAILED = "custom_rule_failed"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single failed check: its kind and the human-readable message."""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


def has_errors(errors: Mapping[str, str | None]) -> bool:
    """True if at least one field has a non-empty message."""
    return any(errors.values())


def get_field_error(errors: Mapping[str, str | None], field: str) -> str | None:
    """Return the message for *field*, or None if it passes."""
    return errors.get(field) or None


def with_field_error(
    errors: Mapping[str, str], field: str, message: str | None
) -> ValidationErrors:
    """Return a copy of *errors* with *field* set to *message*.

    An empty or ``None`` message removes the field instead, so the map
    never holds entries for passing fields.
    """
    if not message:
        return without_field_error(errors, field)
    return {**errors, field: message}


def without_field_error(errors: Mapping[str, str], field: str) -> ValidationErrors:
    """Return a copy of *errors* without *field*."""
    return {name: message for name, message in errors.items() if name != field}


def summarize_errors(errors: Mapping[str, str | None]) -> str | None:
    """Banner text for an error summary, or None when there is nothing to show.

    ::

        summarize_errors({"name": "This field is required"})
        # "There is 1 error with your submission"
    """
    count = sum(1 for message in errors.values() if message)
    if count == 0:
        return None
    if count == 1:
        return "There is 1 error with your submission"
    return f"There are {count} errors with your submission"
