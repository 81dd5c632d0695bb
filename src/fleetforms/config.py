"""Form controller configuration.

FormConfig is a frozen dataclass: immutable after creation and read by
attribute rather than by string key.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from fleetforms.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Behavior flags for one ``FormController``. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(validate_on_change=True)
    """

    # Field events
    validate_on_change: bool = False
    validate_on_blur: bool = True

    # Submission
    guard_reentrant_submit: bool = True  # Reject submit() while one is in flight
    reraise_submit_errors: bool = False  # Raise SubmissionError instead of returning FAILED

    def with_options(self, **options: Any) -> FormConfig:
        """Return a copy with *options* applied.

        Raises:
            ConfigurationError: If an option name is not a config field.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            msg = f"Unknown form option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        return replace(self, **options)
