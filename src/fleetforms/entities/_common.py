"""Shared helpers for the entity forms.

Form inputs hold strings; API records hold numbers and ``None``. These
helpers convert in both directions without raising on bad input, the
way a form has to: an unparseable number is simply "no number".
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from fleetforms.validation import CustomCheck, is_missing


@dataclass(frozen=True, slots=True)
class SelectOption:
    """One choice of a select input. ``value=""`` is the placeholder."""

    value: str
    label: str
    disabled: bool = False


def choices(options: tuple[SelectOption, ...]) -> tuple[str, ...]:
    """Selectable values, placeholder excluded."""
    return tuple(option.value for option in options if not option.disabled)


# ---------------------------------------------------------------------------
# Record → form
# ---------------------------------------------------------------------------


def text_of(value: Any, default: str = "") -> str:
    """Render a record value for a text input; missing becomes *default*."""
    if value is None or value == "":
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Form → payload
# ---------------------------------------------------------------------------


def parse_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_int(text: str | None) -> int | None:
    number = parse_float(text)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_decimal(text: str | None) -> Decimal:
    """Money amount; blank or invalid input counts as zero."""
    if not text:
        return Decimal(0)
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def blank_to_none(text: str | None) -> str | None:
    return text or None


# ---------------------------------------------------------------------------
# Cross-field checks
# ---------------------------------------------------------------------------


def _parse_moment(text: Any) -> datetime | None:
    try:
        return datetime.fromisoformat(str(text))
    except ValueError:
        return None


def not_before(
    get_values: Callable[[], Mapping[str, Any]], other_field: str, label: str
) -> CustomCheck:
    """Custom check: a date/datetime field must not precede *other_field*.

    *get_values* is read at validation time, so the check sees the
    other field's current value. Re-run it with ``validate_one`` when
    the other field changes.
    """

    def check(value: Any) -> str | None:
        moment = _parse_moment(value)
        if moment is None:
            return "Invalid date format"
        other = get_values().get(other_field)
        if is_missing(other):
            return None
        other_moment = _parse_moment(other)
        if other_moment is None or (moment.tzinfo is None) != (other_moment.tzinfo is None):
            return None
        if moment < other_moment:
            return f"Must not be before {label}"
        return None

    return check
