"""Transportation form: rules, add/edit defaults, payload and cost total."""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any, TypedDict

from fleetforms.entities._common import (
    SelectOption,
    blank_to_none,
    choices,
    not_before,
    parse_decimal,
    parse_float,
    parse_int,
    text_of,
)
from fleetforms.form import FormController
from fleetforms.validation import ValidationRule, ValidationSchema, one_of

COST_FIELDS = ("fuelCost", "tollCost", "otherCosts")


class TransportationForm(TypedDict):
    jobId: str
    vehicleId: str
    driverId: str
    startDate: str
    endDate: str
    distance: str
    fuelCost: str
    tollCost: str
    otherCosts: str
    status: str
    notes: str


STATUS_OPTIONS = (
    SelectOption("scheduled", "Scheduled"),
    SelectOption("in_transit", "In Transit"),
    SelectOption("delivered", "Delivered"),
    SelectOption("cancelled", "Cancelled"),
)

SCHEMA: ValidationSchema = MappingProxyType(
    {
        "jobId": ValidationRule(required=True),
        "vehicleId": ValidationRule(required=True),
        "driverId": ValidationRule(required=True),
        "startDate": ValidationRule(required=True),
        "distance": ValidationRule(min=0.1),
        "fuelCost": ValidationRule(min=0),
        "tollCost": ValidationRule(min=0),
        "otherCosts": ValidationRule(min=0),
        "status": ValidationRule(custom=one_of(*choices(STATUS_OPTIONS))),
    }
)


def initial_values(record: Mapping[str, Any] | None = None) -> TransportationForm:
    record = record or {}
    return TransportationForm(
        jobId=text_of(record.get("jobId")),
        vehicleId=text_of(record.get("vehicleId")),
        driverId=text_of(record.get("driverId")),
        startDate=text_of(record.get("startDate")),
        endDate=text_of(record.get("endDate")),
        distance=text_of(record.get("distance")),
        fuelCost=text_of(record.get("fuelCost"), "0"),
        tollCost=text_of(record.get("tollCost"), "0"),
        otherCosts=text_of(record.get("otherCosts"), "0"),
        status=text_of(record.get("status"), "scheduled"),
        notes=text_of(record.get("notes")),
    )


def total_cost(values: Mapping[str, Any]) -> Decimal:
    """Fuel + toll + other costs, to the cent. Blank or invalid counts as 0."""
    total = sum((parse_decimal(values.get(name)) for name in COST_FIELDS), Decimal(0))
    return total.quantize(Decimal("0.01"))


def to_payload(values: TransportationForm, record_id: int | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "jobId": parse_int(values["jobId"]) or 0,
        "vehicleId": parse_int(values["vehicleId"]) or 0,
        "driverId": parse_int(values["driverId"]) or 0,
        "startDate": blank_to_none(values["startDate"]),
        "endDate": blank_to_none(values["endDate"]),
        "distance": parse_float(values["distance"]),
        "fuelCost": parse_float(values["fuelCost"]) or 0.0,
        "tollCost": parse_float(values["tollCost"]) or 0.0,
        "otherCosts": parse_float(values["otherCosts"]) or 0.0,
        "status": values["status"],
        "notes": blank_to_none(values["notes"]),
    }
    if record_id is not None:
        payload["id"] = record_id
    return payload


def create_form(
    record: Mapping[str, Any] | None = None, **kwargs: Any
) -> FormController[TransportationForm]:
    """A controller for the add/edit transportation dialog.

    Call ``form.validate_one("endDate")`` after ``startDate`` changes
    to refresh the ordering check.
    """
    form: FormController[TransportationForm]
    schema = {
        **SCHEMA,
        "endDate": ValidationRule(
            custom=not_before(lambda: form.values, "startDate", "start date")
        ),
    }
    form = FormController(initial_values(record), schema, **kwargs)
    return form
