"""Form session state: values, errors, touched flags, guarded submit."""

from fleetforms.form.controller import FormController
from fleetforms.form.state import FormState, SubmitResult, SubmitStatus

__all__ = [
    "FormController",
    "FormState",
    "SubmitResult",
    "SubmitStatus",
]
