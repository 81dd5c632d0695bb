"""Tests for fleetforms.entities: per-entity schemas, seeding, and payloads."""

from datetime import date
from decimal import Decimal

import pytest

from fleetforms.entities import customer, job, transportation, vehicle
from fleetforms.form import FormController, SubmitStatus
from fleetforms.validation import validate_form

ACME = {
    "name": "Acme Co",
    "email": "a@b.com",
    "phone": "0812345678",
    "address": "123 Main St",
    "creditLimit": "1000",
}


def _vehicle_values(**overrides: str) -> vehicle.VehicleForm:
    values = vehicle.initial_values(
        {
            "licensePlate": "ABC-1234",
            "type": "truck",
            "capacity": 12000,
            "fuelType": "diesel",
            "year": 2020,
            "driverId": 7,
        }
    )
    values.update(overrides)  # type: ignore[typeddict-item]
    return values


class TestCustomer:
    def test_valid_customer(self) -> None:
        assert validate_form(ACME, customer.SCHEMA) == {}

    @pytest.mark.anyio
    async def test_submit_calls_handler_once(self) -> None:
        calls: list[object] = []
        form = customer.create_form(on_submit=calls.append)
        for field, value in ACME.items():
            form.set_field_value(field, value)

        result = await form.submit()

        assert result.status is SubmitStatus.SUBMITTED
        assert len(calls) == 1
        submitted = calls[0]
        assert isinstance(submitted, dict)
        assert {k: submitted[k] for k in ACME} == ACME

    def test_submit_with_plain_values(self) -> None:
        calls: list[object] = []
        form = FormController(dict(ACME), customer.SCHEMA, on_submit=calls.append)
        assert form.submit_blocking().ok
        assert calls == [ACME]

    def test_empty_form_errors(self) -> None:
        errors = validate_form(customer.initial_values(), customer.SCHEMA)
        assert errors == {
            "name": "This field is required",
            "email": "This field is required",
            "phone": "This field is required",
            "address": "This field is required",
        }

    def test_negative_credit_limit(self) -> None:
        errors = validate_form({**ACME, "creditLimit": "-1"}, customer.SCHEMA)
        assert errors == {"creditLimit": "Value must be at least 0"}

    def test_unknown_status(self) -> None:
        errors = validate_form({**ACME, "status": "archived"}, customer.SCHEMA)
        assert errors == {"status": "Must be one of: active, inactive"}

    def test_initial_values_defaults(self) -> None:
        values = customer.initial_values()
        assert values["creditLimit"] == "0"
        assert values["status"] == "active"
        assert values["name"] == ""

    def test_initial_values_from_record(self) -> None:
        values = customer.initial_values({**ACME, "creditLimit": 2500.0, "status": "inactive"})
        assert values["creditLimit"] == "2500"
        assert values["status"] == "inactive"

    def test_payload(self) -> None:
        payload = customer.to_payload(customer.initial_values(ACME), customer_id=4)
        assert payload["creditLimit"] == 1000.0
        assert payload["id"] == 4

    def test_schema_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            customer.SCHEMA["name"] = None  # type: ignore[index]


class TestVehicle:
    def test_year_change_validates_only_year(self) -> None:
        form = vehicle.create_form(validate_on_change=True, today=date(2024, 6, 1))
        form.set_field_error("licensePlate", "Plate already registered")

        form.set_field_value("year", "1899")

        assert form.errors == {
            "licensePlate": "Plate already registered",
            "year": "Value must be at least 1900",
        }

    def test_year_upper_bound_follows_calendar(self) -> None:
        schema = vehicle.vehicle_schema(date(2024, 6, 1))
        assert validate_form(_vehicle_values(year="2025"), schema) == {}
        assert validate_form(_vehicle_values(year="2026"), schema) == {
            "year": "Value must be at most 2025"
        }

    def test_license_plate_pattern(self) -> None:
        schema = vehicle.vehicle_schema(date(2024, 6, 1))
        assert validate_form(_vehicle_values(licensePlate="abc 123"), schema) == {}
        assert validate_form(_vehicle_values(licensePlate="AB#123"), schema) == {
            "licensePlate": "Invalid format"
        }

    def test_placeholder_type_is_missing(self) -> None:
        schema = vehicle.vehicle_schema(date(2024, 6, 1))
        errors = validate_form(_vehicle_values(type=""), schema)
        assert errors == {"type": "This field is required"}

    def test_capacity_range(self) -> None:
        schema = vehicle.vehicle_schema(date(2024, 6, 1))
        errors = validate_form(_vehicle_values(capacity="0"), schema)
        assert errors == {"capacity": "Value must be at least 1"}

    def test_overflowing_capacity_blocks_submit(self) -> None:
        calls: list[object] = []
        form = vehicle.create_form(
            _vehicle_values(capacity="1e400"), today=date(2024, 6, 1), on_submit=calls.append
        )

        result = form.submit_blocking()

        assert result.status is SubmitStatus.INVALID
        assert form.errors == {"capacity": "Value must be at most 100000"}
        assert calls == []

    def test_payload(self) -> None:
        payload = vehicle.to_payload(_vehicle_values(), vehicle_id=3)
        assert payload["capacity"] == 12000.0
        assert payload["year"] == 2020
        assert payload["driverId"] == 7
        assert payload["id"] == 3

    def test_payload_year_fallback(self) -> None:
        payload = vehicle.to_payload(_vehicle_values(year=""), today=date(2024, 6, 1))
        assert payload["year"] == 2024


class TestJob:
    def _values(self, **overrides: str) -> dict[str, str]:
        values = dict(
            job.initial_values(
                {
                    "title": "Move pallets",
                    "customerId": 12,
                    "pickupAddress": "1 Port Rd",
                    "deliveryAddress": "9 Depot Ln",
                    "priority": "high",
                }
            )
        )
        values.update(overrides)
        return values

    def test_valid(self) -> None:
        assert validate_form(self._values(), job.SCHEMA) == {}

    def test_weight_range(self) -> None:
        errors = validate_form(self._values(weight="0"), job.SCHEMA)
        assert errors == {"weight": "Value must be at least 0.1"}

    def test_delivery_before_pickup(self) -> None:
        form = job.create_form(
            {"pickupDate": "2024-06-10", "deliveryDate": "2024-06-12"}, validate_on_change=True
        )
        form.set_field_value("pickupDate", "2024-06-15")
        assert form.validate_one("deliveryDate") == "Must not be before pickup date"

        form.set_field_value("pickupDate", "2024-06-11")
        assert form.validate_one("deliveryDate") is None

    def test_payload(self) -> None:
        payload = job.to_payload(self._values(weight="2.5"), job_id=9)
        assert payload["customerId"] == 12
        assert payload["weight"] == 2.5
        assert payload["value"] is None
        assert payload["pickupDate"] is None
        assert payload["id"] == 9


class TestTransportation:
    def test_defaults(self) -> None:
        values = transportation.initial_values()
        assert values["fuelCost"] == values["tollCost"] == values["otherCosts"] == "0"
        assert values["status"] == "scheduled"

    def test_total_cost(self) -> None:
        values = transportation.initial_values(
            {"fuelCost": 1200.5, "tollCost": "80", "otherCosts": ""}
        )
        assert transportation.total_cost(values) == Decimal("1280.50")

    def test_total_cost_ignores_garbage(self) -> None:
        assert transportation.total_cost({"fuelCost": "abc", "tollCost": "1.1"}) == Decimal("1.10")

    def test_negative_cost(self) -> None:
        values = {**transportation.initial_values(), "fuelCost": "-3"}
        errors = validate_form(values, transportation.SCHEMA)
        assert errors["fuelCost"] == "Value must be at least 0"

    def test_end_before_start(self) -> None:
        form = transportation.create_form(
            {
                "jobId": 1,
                "vehicleId": 2,
                "driverId": 3,
                "startDate": "2024-06-10T08:00",
                "endDate": "2024-06-10T07:00",
            }
        )
        assert form.validate_all() is False
        assert form.errors == {"endDate": "Must not be before start date"}

        form.set_field_value("endDate", "2024-06-10T18:30")
        assert form.validate_all() is True

    def test_payload(self) -> None:
        values = transportation.initial_values(
            {"jobId": 1, "vehicleId": 2, "driverId": 3, "startDate": "2024-06-10", "distance": 42}
        )
        payload = transportation.to_payload(values, record_id=5)
        assert payload["jobId"] == 1
        assert payload["distance"] == 42.0
        assert payload["fuelCost"] == 0.0
        assert payload["endDate"] is None
        assert payload["notes"] is None
        assert payload["id"] == 5
