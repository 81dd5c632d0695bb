"""Form snapshots and submit outcomes.

``FormState`` is what the presentation layer reads on every render.
``SubmitResult`` is what ``FormController.submit()`` hands back, so a
failed handler is an explicit value rather than a silent log line.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


@dataclass(frozen=True, slots=True)
class FormState:
    """Read-only snapshot of one form session.

    Attributes:
        values: Current field values.
        errors: Field → message for fields whose last validation failed.
        touched: Field → True once blurred or explicitly validated.
        is_submitting: True while the submit handler runs.

    Snapshots are copies; mutating one never reaches the controller.
    """

    values: Mapping[str, Any]
    errors: dict[str, str] = field(default_factory=dict)
    touched: dict[str, bool] = field(default_factory=dict)
    is_submitting: bool = False

    @property
    def is_valid(self) -> bool:
        """True if no field currently reports an error."""
        return not any(self.errors.values())

    def visible_error(self, field_name: str) -> str | None:
        """The error to show beside *field_name*: only once it is touched."""
        if not self.touched.get(field_name):
            return None
        return self.errors.get(field_name) or None


class SubmitStatus(StrEnum):
    """How a ``submit()`` call ended."""

    SUBMITTED = "submitted"  # handler ran and returned
    INVALID = "invalid"  # validation failed, handler not called
    BUSY = "busy"  # another submit was in flight, nothing done
    FAILED = "failed"  # handler raised
    VALIDATED = "validated"  # valid, but no handler configured


@dataclass(frozen=True, slots=True)
class SubmitResult:
    """The outcome of ``FormController.submit()``.

    Truthy only when the handler ran to completion::

        result = await form.submit()
        if not result:
            show_banner(result.error or summarize_errors(result.errors))
    """

    status: SubmitStatus
    errors: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is SubmitStatus.SUBMITTED

    def __bool__(self) -> bool:
        return self.ok
