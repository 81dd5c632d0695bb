"""Customer form: rules, add/edit defaults and the API payload."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypedDict

from fleetforms.entities._common import SelectOption, choices, parse_float, text_of
from fleetforms.form import FormController
from fleetforms.validation import ValidationRule, ValidationSchema, one_of


class CustomerForm(TypedDict):
    name: str
    email: str
    phone: str
    address: str
    creditLimit: str
    status: str


STATUS_OPTIONS = (
    SelectOption("active", "Active"),
    SelectOption("inactive", "Inactive"),
)

SCHEMA: ValidationSchema = MappingProxyType(
    {
        "name": ValidationRule(required=True, min_length=2, max_length=100),
        "email": ValidationRule(required=True, email=True),
        "phone": ValidationRule(required=True, phone=True),
        "address": ValidationRule(required=True, min_length=5, max_length=255),
        "creditLimit": ValidationRule(min=0),
        "status": ValidationRule(custom=one_of(*choices(STATUS_OPTIONS))),
    }
)


def initial_values(customer: Mapping[str, Any] | None = None) -> CustomerForm:
    """Empty defaults for "add", or *customer*'s fields for "edit"."""
    customer = customer or {}
    return CustomerForm(
        name=text_of(customer.get("name")),
        email=text_of(customer.get("email")),
        phone=text_of(customer.get("phone")),
        address=text_of(customer.get("address")),
        creditLimit=text_of(customer.get("creditLimit"), "0"),
        status=text_of(customer.get("status"), "active"),
    )


def to_payload(values: CustomerForm, customer_id: int | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        **values,
        "creditLimit": parse_float(values["creditLimit"]) or 0.0,
    }
    if customer_id is not None:
        payload["id"] = customer_id
    return payload


def create_form(
    customer: Mapping[str, Any] | None = None, **kwargs: Any
) -> FormController[CustomerForm]:
    """A controller for the add/edit customer dialog.

    *kwargs* go to ``FormController`` (``on_submit``, ``config``, options).
    """
    return FormController(initial_values(customer), SCHEMA, **kwargs)
