"""fleetforms: form state and validation for transportation admin dialogs.

Declarative rules validate field values; a per-dialog controller owns
values, errors, touched flags and a guarded submit.

Basic usage::

    from fleetforms import FormController, ValidationRule

    form = FormController(
        {"name": "", "email": ""},
        {
            "name": ValidationRule(required=True, min_length=2),
            "email": ValidationRule(required=True, email=True),
        },
        on_submit=save_customer,
    )
    form.set_field_value("email", "dispatch@example.com")
    result = await form.submit()

Ready-made forms for customers, vehicles, jobs and transportation
records live in ``fleetforms.entities``.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "FleetFormsError",
    "FormConfig",
    "FormController",
    "FormState",
    "SubmissionError",
    "SubmitResult",
    "SubmitStatus",
    "UnknownFieldError",
    "ValidationRule",
    "Violation",
    "has_errors",
    "validate_field",
    "validate_form",
]

# Public name → defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "fleetforms.errors",
    "ErrorKind": "fleetforms.validation.result",
    "FleetFormsError": "fleetforms.errors",
    "FormConfig": "fleetforms.config",
    "FormController": "fleetforms.form.controller",
    "FormState": "fleetforms.form.state",
    "SubmissionError": "fleetforms.errors",
    "SubmitResult": "fleetforms.form.state",
    "SubmitStatus": "fleetforms.form.state",
    "UnknownFieldError": "fleetforms.errors",
    "ValidationRule": "fleetforms.validation.rules",
    "Violation": "fleetforms.validation.result",
    "has_errors": "fleetforms.validation.result",
    "validate_field": "fleetforms.validation.rules",
    "validate_form": "fleetforms.validation",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fleetforms`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
