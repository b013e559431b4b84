"""Quote request validation - structural and underwriting rules, first failure wins"""

import logging
from datetime import date
from typing import Callable, Optional

from quote_gateway.domain.exceptions import InvalidQuoteRequestError
from quote_gateway.domain.models import Driver, QuoteRequest, Vehicle
from quote_gateway.domain.policy import QuotePolicy
from quote_gateway.utils.date_utils import calculate_age, vehicle_age


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _dollars(amount) -> str:
    return f"${amount:,.0f}"


class QuoteValidator:
    """
    Validates quote requests against a QuotePolicy.

    Checks run in a fixed order and the first violation raises
    InvalidQuoteRequestError; errors are never accumulated.

    Order:
    1. request, vehicle and driver list present
    2. coverage and deductible present, then within policy bounds
    3. vehicle (VIN, year/age, make, model, value)
    4. each driver (names, date of birth, age range, license)
    """

    def __init__(self, policy: QuotePolicy, today: Callable[[], date] = date.today):
        self.policy = policy
        self.today = today

    def validate(self, request: Optional[QuoteRequest]) -> None:
        logging.debug("Starting validation for quote request")

        if request is None:
            raise InvalidQuoteRequestError("Quote request cannot be null")

        if request.vehicle is None:
            raise InvalidQuoteRequestError("Vehicle information is required")

        self._validate_drivers_presence(request)
        self._validate_coverage(request)

        self.validate_vehicle(request.vehicle)
        for driver in request.drivers:
            self.validate_driver(driver)

        logging.debug("Quote request validation completed successfully")

    def validate_vehicle(self, vehicle: Optional[Vehicle]) -> None:
        if vehicle is None:
            raise InvalidQuoteRequestError("Vehicle information is required")

        self._validate_vin(vehicle.vin)
        self._validate_vehicle_age(vehicle.year)

        if _is_blank(vehicle.make):
            raise InvalidQuoteRequestError("Vehicle make is required")
        if _is_blank(vehicle.model):
            raise InvalidQuoteRequestError("Vehicle model is required")

        if vehicle.current_value is None or vehicle.current_value <= 0:
            raise InvalidQuoteRequestError("Valid vehicle current value is required")
        if vehicle.current_value > self.policy.max_vehicle_value:
            raise InvalidQuoteRequestError(
                f"Vehicle value cannot exceed {_dollars(self.policy.max_vehicle_value)}"
            )

        logging.debug("Vehicle validation completed", extra={"vin": vehicle.vin})

    def validate_driver(self, driver: Optional[Driver]) -> None:
        if driver is None:
            raise InvalidQuoteRequestError("Driver information cannot be null")

        if _is_blank(driver.first_name):
            raise InvalidQuoteRequestError("Driver first name is required")
        if _is_blank(driver.last_name):
            raise InvalidQuoteRequestError("Driver last name is required")
        if driver.date_of_birth is None:
            raise InvalidQuoteRequestError("Driver date of birth is required")

        age = calculate_age(driver.date_of_birth, self.today())
        if age < self.policy.min_driver_age:
            raise InvalidQuoteRequestError(
                f"Driver must be at least {self.policy.min_driver_age} years old. "
                f"Current age: {age} years"
            )
        if age > self.policy.max_driver_age:
            raise InvalidQuoteRequestError(
                f"Driver age exceeds maximum limit of {self.policy.max_driver_age} years. "
                f"Current age: {age} years"
            )

        # License state length (2 chars) is a request-shape rule, see api schemas
        if _is_blank(driver.license_number):
            raise InvalidQuoteRequestError("Driver license number is required")
        if _is_blank(driver.license_state):
            raise InvalidQuoteRequestError("Driver license state is required")

    def _validate_drivers_presence(self, request: QuoteRequest) -> None:
        if not request.drivers:
            raise InvalidQuoteRequestError("At least one driver is required")

        max_drivers = self.policy.max_drivers
        if max_drivers is not None and len(request.drivers) > max_drivers:
            raise InvalidQuoteRequestError(
                f"A quote cannot include more than {max_drivers} drivers. "
                f"Drivers provided: {len(request.drivers)}"
            )

    def _validate_coverage(self, request: QuoteRequest) -> None:
        coverage = request.coverage_amount
        deductible = request.deductible

        if coverage is None or coverage <= 0:
            raise InvalidQuoteRequestError("Valid coverage amount is required")
        if deductible is None or deductible < 0:
            raise InvalidQuoteRequestError("Valid deductible amount is required")

        policy = self.policy
        if coverage < policy.min_coverage:
            raise InvalidQuoteRequestError(
                f"Coverage amount must be at least {_dollars(policy.min_coverage)}"
            )
        if coverage > policy.max_coverage:
            raise InvalidQuoteRequestError(
                f"Coverage amount cannot exceed {_dollars(policy.max_coverage)}"
            )
        if deductible < policy.min_deductible:
            raise InvalidQuoteRequestError(
                f"Deductible must be at least {_dollars(policy.min_deductible)}"
            )
        if deductible > policy.max_deductible:
            raise InvalidQuoteRequestError(
                f"Deductible cannot exceed {_dollars(policy.max_deductible)}"
            )
        if deductible > coverage:
            raise InvalidQuoteRequestError("Deductible cannot exceed the coverage amount")

    def _validate_vin(self, vin: Optional[str]) -> None:
        if _is_blank(vin):
            raise InvalidQuoteRequestError("VIN is required")

        if not self.policy.compiled_vin_pattern.fullmatch(vin):
            raise InvalidQuoteRequestError(
                f"Invalid VIN format: {vin}. Expected format: {self.policy.vin_pattern}"
            )

    def _validate_vehicle_age(self, year: Optional[int]) -> None:
        if year is None:
            raise InvalidQuoteRequestError("Vehicle year is required")

        age = vehicle_age(year, self.today())
        if age < 0:
            raise InvalidQuoteRequestError("Vehicle year cannot be in the future")
        if age > self.policy.max_vehicle_age:
            raise InvalidQuoteRequestError(
                f"Vehicle age exceeds maximum limit of {self.policy.max_vehicle_age} years. "
                f"Vehicle age: {age} years"
            )
