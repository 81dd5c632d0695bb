"""Vehicle form: rules, add/edit defaults and the API payload.

The model-year bound moves with the calendar, so the schema is built by
``vehicle_schema()`` rather than frozen at import time.
"""

import re
from collections.abc import Mapping
from datetime import date
from types import MappingProxyType
from typing import Any, TypedDict

from fleetforms.entities._common import (
    SelectOption,
    blank_to_none,
    choices,
    parse_float,
    parse_int,
    text_of,
)
from fleetforms.form import FormController
from fleetforms.validation import ValidationRule, ValidationSchema, one_of

LICENSE_PLATE_RE = re.compile(r"^[A-Z0-9\-\s]+$", re.IGNORECASE)
EARLIEST_YEAR = 1900


class VehicleForm(TypedDict):
    licensePlate: str
    type: str
    capacity: str
    fuelType: str
    year: str
    driverId: str
    status: str


TYPE_OPTIONS = (
    SelectOption("", "Select vehicle type", disabled=True),
    SelectOption("truck", "Truck"),
    SelectOption("van", "Van"),
    SelectOption("motorcycle", "Motorcycle"),
    SelectOption("pickup", "Pickup"),
    SelectOption("trailer", "Trailer"),
)

STATUS_OPTIONS = (
    SelectOption("available", "Available"),
    SelectOption("in_use", "In Use"),
    SelectOption("maintenance", "Maintenance"),
    SelectOption("inactive", "Inactive"),
)

FUEL_TYPE_OPTIONS = (
    SelectOption("", "Select fuel type", disabled=True),
    SelectOption("gasoline", "Gasoline"),
    SelectOption("diesel", "Diesel"),
    SelectOption("electric", "Electric"),
    SelectOption("hybrid", "Hybrid"),
    SelectOption("cng", "CNG"),
    SelectOption("lng", "LNG"),
)


def vehicle_schema(today: date | None = None) -> ValidationSchema:
    """Vehicle rules; ``year`` accepts 1900 through next year."""
    current_year = (today or date.today()).year
    return MappingProxyType(
        {
            "licensePlate": ValidationRule(
                required=True, min_length=3, max_length=20, pattern=LICENSE_PLATE_RE
            ),
            "type": ValidationRule(required=True, custom=one_of(*choices(TYPE_OPTIONS))),
            "capacity": ValidationRule(required=True, min=1, max=100000),
            "fuelType": ValidationRule(required=True, custom=one_of(*choices(FUEL_TYPE_OPTIONS))),
            "year": ValidationRule(required=True, min=EARLIEST_YEAR, max=current_year + 1),
            "driverId": ValidationRule(required=True),
            "status": ValidationRule(custom=one_of(*choices(STATUS_OPTIONS))),
        }
    )


def initial_values(vehicle: Mapping[str, Any] | None = None) -> VehicleForm:
    vehicle = vehicle or {}
    return VehicleForm(
        licensePlate=text_of(vehicle.get("licensePlate")),
        type=text_of(vehicle.get("type")),
        capacity=text_of(vehicle.get("capacity")),
        fuelType=text_of(vehicle.get("fuelType")),
        year=text_of(vehicle.get("year")),
        driverId=text_of(vehicle.get("driverId")),
        status=text_of(vehicle.get("status"), "available"),
    )


def to_payload(
    values: VehicleForm, vehicle_id: int | None = None, *, today: date | None = None
) -> dict[str, Any]:
    """API payload; an unreadable year falls back to the current year."""
    year = parse_int(values["year"])
    payload: dict[str, Any] = {
        **values,
        "type": blank_to_none(values["type"]),
        "capacity": parse_float(values["capacity"]) or 0.0,
        "year": year if year is not None else (today or date.today()).year,
        "driverId": parse_int(values["driverId"]),
    }
    if vehicle_id is not None:
        payload["id"] = vehicle_id
    return payload


def create_form(
    vehicle: Mapping[str, Any] | None = None, *, today: date | None = None, **kwargs: Any
) -> FormController[VehicleForm]:
    return FormController(initial_values(vehicle), vehicle_schema(today), **kwargs)
