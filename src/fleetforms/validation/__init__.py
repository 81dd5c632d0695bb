"""Form validation: declarative rules, per-field error maps.

Usage::

    from fleetforms.validation import ValidationRule, validate_form, has_errors

    schema = {
        "name": ValidationRule(required=True, min_length=2, max_length=100),
        "email": ValidationRule(required=True, email=True),
        "creditLimit": ValidationRule(min=0),
    }
    errors = validate_form(values, schema)
    if has_errors(errors):
        # errors == {"email": "Invalid email format"}
        ...
"""

from fleetforms._internal.types import FormValues

from fleetforms.validation.result import (
    ErrorKind,
    ValidationErrors,
    Violation,
    get_field_error,
    has_errors,
    summarize_errors,
    with_field_error,
    without_field_error,
)
from fleetforms.validation.rules import (
    CustomCheck,
    ValidationRule,
    ValidationSchema,
    check_field,
    is_missing,
    one_of,
    validate_field,
)

__all__ = [
    "CustomCheck",
    "ErrorKind",
    "ValidationErrors",
    "ValidationRule",
    "ValidationSchema",
    "Violation",
    "check_field",
    "get_field_error",
    "has_errors",
    "is_missing",
    "one_of",
    "summarize_errors",
    "validate_field",
    "validate_form",
    "with_field_error",
    "without_field_error",
]


def validate_form(values: FormValues, schema: ValidationSchema) -> ValidationErrors:
    """Validate every field named in *schema*.

    Args:
        values: The form's current values. Keys the schema does not
            name are ignored; schema fields missing here read as ``None``.
        schema: Field name → ``ValidationRule``.

    Returns:
        Field → error message, holding only the fields that failed.

    Example::

        errors = validate_form(
            {"name": "", "nickname": ""},
            {"name": ValidationRule(required=True)},
        )
        # errors == {"name": "This field is required"}
    """
    errors: ValidationErrors = {}

    for field_name, rule in schema.items():
        message = validate_field(values.get(field_name), rule)
        if message:
            errors[field_name] = message

    return errors
