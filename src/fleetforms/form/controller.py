"""Form state controller: one session object per open form.

The controller owns a form's values, error map, touched flags and the
submitting flag. The presentation layer never mutates any of them; it
calls the operations below and re-renders from ``controller.state``.

Usage::

    form = FormController(
        customer.initial_values(),
        customer.SCHEMA,
        on_submit=save_customer,
    )
    form.set_field_value("email", "not-an-email")
    form.set_field_touched("email")        # blur → validates "email" only
    form.state.errors                      # {"email": "Invalid email format"}

    result = await form.submit()           # validates everything first
    if result:
        close_dialog()
        form.reset()

Field validation triggered by an operation always finishes before the
operation returns. The submit handler is the only suspension point.
"""

import copy
import inspect
import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any, cast

import anyio

from fleetforms._internal.types import FormValues, SubmitEvent, SubmitHandler
from fleetforms.config import FormConfig
from fleetforms.errors import SubmissionError, UnknownFieldError
from fleetforms.form.state import FormState, SubmitResult, SubmitStatus
from fleetforms.validation import (
    ValidationErrors,
    ValidationSchema,
    has_errors,
    validate_field,
    validate_form,
)

logger = logging.getLogger("fleetforms.form")


class FormController[T: FormValues]:
    """Mutable session state for a single form instance.

    Args:
        initial_values: Starting values, either empty defaults or an
            existing entity's fields. Copied; later changes to the
            argument do not leak in.
        schema: Field name → ``ValidationRule``. Never mutated.
        on_submit: Called with the current values after a successful
            ``validate_all()``. May be sync or async.
        config: Behavior flags; defaults to ``FormConfig()``.
        **options: Per-form overrides of ``config`` fields, e.g.
            ``validate_on_change=True``.

    Raises:
        ConfigurationError: If *options* names an unknown config field.
    """

    __slots__ = (
        "_config",
        "_errors",
        "_initial",
        "_in_flight",
        "_on_submit",
        "_schema",
        "_touched",
        "_values",
    )

    def __init__(
        self,
        initial_values: T,
        schema: ValidationSchema | None = None,
        *,
        on_submit: SubmitHandler | None = None,
        config: FormConfig | None = None,
        **options: Any,
    ) -> None:
        base = config if config is not None else FormConfig()
        self._config = base.with_options(**options) if options else base
        self._schema: ValidationSchema = schema if schema is not None else {}
        self._on_submit = on_submit
        self._initial: dict[str, Any] = copy.deepcopy(dict(initial_values))
        self._values: dict[str, Any] = copy.deepcopy(self._initial)
        self._errors: ValidationErrors = {}
        self._touched: dict[str, bool] = {}
        self._in_flight: set[object] = set()

    # -- Snapshot --

    @property
    def config(self) -> FormConfig:
        return self._config

    @property
    def schema(self) -> ValidationSchema:
        return self._schema

    @property
    def values(self) -> T:
        """Copy of the current values."""
        return cast(T, copy.deepcopy(self._values))

    @property
    def errors(self) -> ValidationErrors:
        return dict(self._errors)

    @property
    def touched(self) -> dict[str, bool]:
        return dict(self._touched)

    @property
    def is_submitting(self) -> bool:
        return bool(self._in_flight)

    @property
    def is_valid(self) -> bool:
        """True if no field currently reports an error.

        Reflects the last validations run, not a fresh check; use
        ``validate_all()`` for that.
        """
        return not has_errors(self._errors)

    @property
    def state(self) -> FormState:
        """Detached snapshot ``{values, errors, touched, is_submitting}``."""
        return FormState(
            values=copy.deepcopy(self._values),
            errors=dict(self._errors),
            touched=dict(self._touched),
            is_submitting=bool(self._in_flight),
        )

    # -- Field operations --

    def set_field_value(self, field: str, value: Any) -> None:
        """Replace one field's value.

        With ``validate_on_change`` the field is re-validated on its own;
        other fields' errors are left as they are.
        """
        self._require_field(field)
        self._values[field] = value
        if self._config.validate_on_change:
            self._revalidate(field)

    def set_field_touched(self, field: str) -> None:
        """Mark *field* touched (blur). Validates it with ``validate_on_blur``."""
        self._require_field(field)
        self._touched[field] = True
        if self._config.validate_on_blur:
            self._revalidate(field)

    def set_field_error(self, field: str, message: str | None) -> None:
        """Set or clear one error directly, bypassing the rules.

        Used to show server-side errors next to the offending field.
        """
        self._require_field(field)
        if message:
            self._errors[field] = message
        else:
            self._errors.pop(field, None)

    def validate_one(self, field: str) -> str | None:
        """Re-validate *field* now and mark it touched.

        Handy for cross-field rules: when ``startDate`` changes, call
        ``validate_one("endDate")``. Returns the field's error, if any.
        """
        self._require_field(field)
        self._touched[field] = True
        self._revalidate(field)
        return self._errors.get(field)

    def validate_all(self) -> bool:
        """Validate every schema field and replace the whole error map.

        Every schema field becomes touched so its error is shown.
        Returns True if the form is error-free.
        """
        self._errors = validate_form(self._values, self._schema)
        for field in self._schema:
            self._touched[field] = True
        return not has_errors(self._errors)

    # -- Bulk operations --

    def set_values(self, values: T) -> None:
        """Replace all values at once. No validation runs."""
        self._values = copy.deepcopy(dict(values))

    def set_errors(self, errors: Mapping[str, str | None]) -> None:
        """Replace the whole error map; empty messages are dropped."""
        self._errors = {field: message for field, message in errors.items() if message}

    def reset(self) -> None:
        """Return to the construction-time state."""
        self._values = copy.deepcopy(self._initial)
        self._errors = {}
        self._touched = {}
        self._in_flight = set()

    # -- Field arrays --

    def append_item(self, field: str, item: Any) -> None:
        """Add *item* to the end of a list-valued field."""
        items = self._list_value(field)
        items.append(item)
        self.set_field_value(field, items)

    def remove_item(self, field: str, index: int) -> None:
        """Remove the item at *index* from a list-valued field.

        Raises:
            IndexError: If *index* is out of range.
        """
        items = self._list_value(field)
        del items[index]
        self.set_field_value(field, items)

    def move_item(self, field: str, source: int, target: int) -> None:
        """Move the item at *source* to position *target* (reordering stops)."""
        items = self._list_value(field)
        items.insert(target, items.pop(source))
        self.set_field_value(field, items)

    # -- UI bindings --

    def handle_change(self, field: str) -> Callable[[Any], None]:
        """Return an ``on_change(value)`` callback bound to *field*."""
        self._require_field(field)
        return partial(self.set_field_value, field)

    def handle_blur(self, field: str) -> Callable[[], None]:
        """Return an ``on_blur()`` callback bound to *field*."""
        self._require_field(field)
        return partial(self.set_field_touched, field)

    # -- Submission --

    async def submit(self, event: SubmitEvent | None = None) -> SubmitResult:
        """Validate the whole form and, if it is clean, call the handler.

        Outcomes:

        - ``BUSY``: a submit is already in flight and
          ``guard_reentrant_submit`` is on. Nothing else happens.
        - ``INVALID``: ``validate_all()`` failed; the handler is not
          called and ``errors`` holds the messages.
        - ``VALIDATED``: valid, but the form has no handler.
        - ``SUBMITTED``: the handler returned.
        - ``FAILED``: the handler raised. The exception is logged and
          returned as ``result.error``; ``errors`` is left untouched.

        ``is_submitting`` is True while any handler call is running.

        Raises:
            SubmissionError: If the handler raised and
                ``reraise_submit_errors`` is on.
        """
        if event is not None:
            event.prevent_default()

        if self._in_flight and self._config.guard_reentrant_submit:
            logger.debug("Submit ignored: a submission is already in flight")
            return SubmitResult(SubmitStatus.BUSY, errors=dict(self._errors))

        if not self.validate_all():
            logger.debug("Submit blocked by invalid fields: %s", ", ".join(sorted(self._errors)))
            return SubmitResult(SubmitStatus.INVALID, errors=dict(self._errors))

        if self._on_submit is None:
            return SubmitResult(SubmitStatus.VALIDATED)

        # One token per running handler; reset() drops them all
        token = object()
        self._in_flight.add(token)
        try:
            outcome = self._on_submit(cast(T, copy.deepcopy(self._values)))
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            logger.exception("Form submission failed")
            if self._config.reraise_submit_errors:
                raise SubmissionError(exc) from exc
            return SubmitResult(SubmitStatus.FAILED, error=exc)
        finally:
            self._in_flight.discard(token)

        return SubmitResult(SubmitStatus.SUBMITTED)

    def submit_blocking(self, event: SubmitEvent | None = None) -> SubmitResult:
        """Run ``submit()`` to completion from synchronous code.

        Starts its own event loop, so it must not be called from inside
        one; async callers ``await submit()`` instead.
        """
        return anyio.run(self.submit, event)

    # -- Internals --

    def _require_field(self, field: str) -> None:
        if field not in self._values and field not in self._schema:
            raise UnknownFieldError(field)

    def _revalidate(self, field: str) -> None:
        rule = self._schema.get(field)
        if rule is None:
            return
        message = validate_field(self._values.get(field), rule)
        if message:
            self._errors[field] = message
        else:
            self._errors.pop(field, None)

    def _list_value(self, field: str) -> list[Any]:
        self._require_field(field)
        current = self._values.get(field)
        if current is None:
            return []
        if not isinstance(current, (list, tuple)):
            msg = f"Field {field!r} does not hold a list (got {type(current).__name__})"
            raise TypeError(msg)
        return list(current)

    def __repr__(self) -> str:
        return (
            f"FormController(fields={sorted(self._values)!r}, "
            f"errors={sorted(self._errors)!r}, submitting={bool(self._in_flight)})"
        )
