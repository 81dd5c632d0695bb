"""Job form: rules, add/edit defaults and the API payload.

``deliveryDate`` may not precede ``pickupDate``. That rule reads the
live form, so each form gets its own schema from ``create_form()``;
``SCHEMA`` holds the per-field rules only.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypedDict

from fleetforms.entities._common import (
    SelectOption,
    blank_to_none,
    choices,
    not_before,
    parse_float,
    parse_int,
    text_of,
)
from fleetforms.form import FormController
from fleetforms.validation import ValidationRule, ValidationSchema, one_of


class JobForm(TypedDict):
    title: str
    description: str
    customerId: str
    pickupAddress: str
    deliveryAddress: str
    pickupDate: str
    deliveryDate: str
    weight: str
    value: str
    priority: str
    status: str
    specialInstructions: str


PRIORITY_OPTIONS = (
    SelectOption("", "Select priority", disabled=True),
    SelectOption("low", "Low Priority"),
    SelectOption("normal", "Normal Priority"),
    SelectOption("high", "High Priority"),
    SelectOption("urgent", "Urgent"),
)

STATUS_OPTIONS = (
    SelectOption("pending", "Pending"),
    SelectOption("assigned", "Assigned"),
    SelectOption("in_progress", "In Progress"),
    SelectOption("completed", "Completed"),
    SelectOption("cancelled", "Cancelled"),
)

SCHEMA: ValidationSchema = MappingProxyType(
    {
        "title": ValidationRule(required=True, min_length=3, max_length=100),
        "description": ValidationRule(max_length=1000),
        "customerId": ValidationRule(required=True),
        "pickupAddress": ValidationRule(required=True, min_length=5, max_length=255),
        "deliveryAddress": ValidationRule(required=True, min_length=5, max_length=255),
        "weight": ValidationRule(min=0.1, max=100000),
        "value": ValidationRule(min=0),
        "priority": ValidationRule(required=True, custom=one_of(*choices(PRIORITY_OPTIONS))),
        "status": ValidationRule(custom=one_of(*choices(STATUS_OPTIONS))),
    }
)


def initial_values(job: Mapping[str, Any] | None = None) -> JobForm:
    job = job or {}
    return JobForm(
        title=text_of(job.get("title")),
        description=text_of(job.get("description")),
        customerId=text_of(job.get("customerId")),
        pickupAddress=text_of(job.get("pickupAddress")),
        deliveryAddress=text_of(job.get("deliveryAddress")),
        pickupDate=text_of(job.get("pickupDate")),
        deliveryDate=text_of(job.get("deliveryDate")),
        weight=text_of(job.get("weight")),
        value=text_of(job.get("value")),
        priority=text_of(job.get("priority")),
        status=text_of(job.get("status"), "pending"),
        specialInstructions=text_of(job.get("specialInstructions")),
    )


def to_payload(values: JobForm, job_id: int | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        **values,
        "customerId": parse_int(values["customerId"]) or 0,
        "weight": parse_float(values["weight"]),
        "value": parse_float(values["value"]),
        "priority": blank_to_none(values["priority"]),
        "pickupDate": blank_to_none(values["pickupDate"]),
        "deliveryDate": blank_to_none(values["deliveryDate"]),
        "specialInstructions": blank_to_none(values["specialInstructions"]),
    }
    if job_id is not None:
        payload["id"] = job_id
    return payload


def create_form(job: Mapping[str, Any] | None = None, **kwargs: Any) -> FormController[JobForm]:
    """A controller for the add/edit job dialog.

    Call ``form.validate_one("deliveryDate")`` after ``pickupDate``
    changes to refresh the ordering check.
    """
    form: FormController[JobForm]
    schema = {
        **SCHEMA,
        "deliveryDate": ValidationRule(
            custom=not_before(lambda: form.values, "pickupDate", "pickup date")
        ),
    }
    form = FormController(initial_values(job), schema, **kwargs)
    return form
