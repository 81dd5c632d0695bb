"""Declarative validation rules for fleetforms.

A ``ValidationRule`` describes every constraint on one field. Rules are
data, not code: a form's schema is a plain mapping from field name to
rule, and the engine evaluates the checks in a fixed priority order::

    required → min/max → min_length/max_length → pattern
             → email → phone → url → custom

The first failing check wins; a field never reports more than one
violation per validation. A missing value (``None`` or ``""``) is only
an error when the rule is ``required``; otherwise nothing else runs.

Custom checks are callables with the signature::

    def check(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Exceptions raised by a custom check are programming errors and
propagate unchanged.
"""

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from urllib.parse import urlsplit

from fleetforms.errors import ConfigurationError
from fleetforms.validation.result import ErrorKind, Violation

# Type alias for a custom check
type CustomCheck = Callable[[Any], str | None]

REQUIRED_MESSAGE = "This field is required"
PATTERN_MESSAGE = "Invalid format"
EMAIL_MESSAGE = "Invalid email format"
PHONE_MESSAGE = "Invalid phone number format"
URL_MESSAGE = "Invalid URL format"


@dataclass(frozen=True, slots=True)
class ValidationRule:
    """Constraints for a single form field. Immutable after creation.

    Only the attributes you set take part in validation::

        ValidationRule(required=True, min_length=2, max_length=100)
        ValidationRule(min=0)
        ValidationRule(pattern=r"^[A-Z0-9\\-\\s]+$")

    ``pattern`` accepts a string or a compiled ``re.Pattern``; strings
    are compiled once here. Bounds are inclusive.

    Raises:
        ConfigurationError: If bounds are inverted or negative, the
            pattern does not compile, or ``custom`` is not callable.
    """

    required: bool = False
    min: float | None = None
    max: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | str | None = None
    email: bool = False
    phone: bool = False
    url: bool = False
    custom: CustomCheck | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            msg = f"min ({self.min}) is greater than max ({self.max})"
            raise ConfigurationError(msg)
        for name in ("min_length", "max_length"):
            bound = getattr(self, name)
            if bound is not None and bound < 0:
                msg = f"{name} must not be negative, got {bound}"
                raise ConfigurationError(msg)
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            msg = f"min_length ({self.min_length}) is greater than max_length ({self.max_length})"
            raise ConfigurationError(msg)
        if isinstance(self.pattern, str):
            try:
                compiled = re.compile(self.pattern)
            except re.error as exc:
                msg = f"Invalid pattern {self.pattern!r}: {exc}"
                raise ConfigurationError(msg) from exc
            object.__setattr__(self, "pattern", compiled)
        if self.custom is not None and not callable(self.custom):
            msg = f"custom must be callable, got {type(self.custom).__name__}"
            raise ConfigurationError(msg)


# Field name → rule. Fields without an entry are never validated.
type ValidationSchema = Mapping[str, ValidationRule]


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def is_missing(value: Any) -> bool:
    """``None`` and the empty string count as "no value"."""
    return value is None or (isinstance(value, str) and value == "")


def _as_number(value: Any) -> float | Decimal | None:
    """Numeric view of *value*, or None when it is not a number.

    Form inputs carry strings, so a string that parses as a number
    counts. Overflowing strings such as ``"1e400"`` become infinities
    and still meet the bounds. Booleans never count.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _is_nan(number: float | Decimal) -> bool:
    if isinstance(number, Decimal):
        return number.is_nan()
    return math.isnan(number)


def _format_number(bound: float) -> str:
    # 1900.0 reads as "1900" in messages
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


# ---------------------------------------------------------------------------
# Checks, in priority order. Each sees only present values.
# ---------------------------------------------------------------------------


def _check_range(value: Any, rule: ValidationRule) -> Violation | None:
    if rule.min is None and rule.max is None:
        return None
    number = _as_number(value)
    if number is None:
        return None
    # NaN sits outside every range
    nan = _is_nan(number)
    if rule.min is not None and (nan or number < rule.min):
        message = f"Value must be at least {_format_number(rule.min)}"
        return Violation(ErrorKind.OUT_OF_RANGE, message)
    if rule.max is not None and (nan or number > rule.max):
        message = f"Value must be at most {_format_number(rule.max)}"
        return Violation(ErrorKind.OUT_OF_RANGE, message)
    return None


def _check_length(value: Any, rule: ValidationRule) -> Violation | None:
    if not isinstance(value, str):
        return None
    if rule.min_length is not None and len(value) < rule.min_length:
        return Violation(
            ErrorKind.LENGTH_VIOLATION, f"Must be at least {rule.min_length} characters"
        )
    if rule.max_length is not None and len(value) > rule.max_length:
        return Violation(
            ErrorKind.LENGTH_VIOLATION, f"Must be at most {rule.max_length} characters"
        )
    return None


def _check_pattern(value: Any, rule: ValidationRule) -> Violation | None:
    if rule.pattern is None:
        return None
    if re.search(rule.pattern, str(value)) is None:
        return Violation(ErrorKind.PATTERN_MISMATCH, PATTERN_MESSAGE)
    return None


# local@domain.tld with no whitespace; checks structure, not deliverability
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _check_email(value: Any, rule: ValidationRule) -> Violation | None:
    if rule.email and _EMAIL_RE.fullmatch(str(value)) is None:
        return Violation(ErrorKind.FORMAT_INVALID, EMAIL_MESSAGE)
    return None


# Separators people type between digit groups
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-()]")
# +<country><number> or a national number with an optional trunk "0"
_PHONE_RE = re.compile(r"\+[1-9]\d{0,15}|0?[1-9]\d{0,15}")


def _check_phone(value: Any, rule: ValidationRule) -> Violation | None:
    if not rule.phone:
        return None
    normalized = _PHONE_SEPARATORS_RE.sub("", str(value))
    if _PHONE_RE.fullmatch(normalized) is None:
        return Violation(ErrorKind.FORMAT_INVALID, PHONE_MESSAGE)
    return None


# Schemes whose URLs must name a host
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "ws", "wss"})


def _is_absolute_url(text: str) -> bool:
    if any(ch.isspace() for ch in text):
        return False
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme:
        return False
    if parts.scheme in _HOST_SCHEMES:
        return bool(parts.hostname)
    return bool(parts.netloc or parts.path)


def _check_url(value: Any, rule: ValidationRule) -> Violation | None:
    if rule.url and not _is_absolute_url(str(value)):
        return Violation(ErrorKind.FORMAT_INVALID, URL_MESSAGE)
    return None


def _check_custom(value: Any, rule: ValidationRule) -> Violation | None:
    if rule.custom is None:
        return None
    message = rule.custom(value)
    if message:
        return Violation(ErrorKind.CUSTOM_RULE_FAILED, message)
    return None


_CHECKS: tuple[Callable[[Any, ValidationRule], Violation | None], ...] = (
    _check_range,
    _check_length,
    _check_pattern,
    _check_email,
    _check_phone,
    _check_url,
    _check_custom,
)


def check_field(value: Any, rule: ValidationRule) -> Violation | None:
    """Evaluate *value* against *rule*; return the first violation or None.

    Pure: the same ``(value, rule)`` always gives the same answer.
    """
    if is_missing(value):
        if rule.required:
            return Violation(ErrorKind.MISSING_REQUIRED, REQUIRED_MESSAGE)
        return None

    for check in _CHECKS:
        violation = check(value, rule)
        if violation is not None:
            return violation
    return None


def validate_field(value: Any, rule: ValidationRule) -> str | None:
    """Return the error message for *value* under *rule*, or None if valid."""
    violation = check_field(value, rule)
    return violation.message if violation is not None else None


# ---------------------------------------------------------------------------
# Custom check factories
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> CustomCheck:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if value not in allowed:
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check
