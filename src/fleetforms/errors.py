"""fleetforms exception hierarchy.

Validation failures are never exceptions: they travel as per-field
strings in the error map. The types here cover programming errors
(malformed rules, unknown fields) and the opt-in submission failure.
"""


class FleetFormsError(Exception):
    """Base for all fleetforms-specific errors."""


class ConfigurationError(FleetFormsError):
    """Raised when a rule, schema, or controller option is invalid.

    Typically raised while constructing a ``ValidationRule`` or a
    ``FormController``, so a broken form fails when it is defined.
    """


class UnknownFieldError(FleetFormsError, KeyError):
    """Raised when an operation names a field the form does not have."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(field)

    def __str__(self) -> str:
        return f"Unknown form field: {self.field!r}"


class SubmissionError(FleetFormsError):
    """The submit handler raised.

    Only raised by ``FormController.submit()`` when
    ``FormConfig.reraise_submit_errors`` is enabled. The handler's
    exception is available as ``__cause__`` and ``original``.
    """

    def __init__(self, original: BaseException) -> None:
        self.original = original
        super().__init__(f"Form submission failed: {original}")
