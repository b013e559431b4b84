"""Risk calculator - base premium from coverage, deductible, vehicle age and drivers"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable

from quote_gateway.domain.models import Driver, QuoteRequest
from quote_gateway.domain.policy import QuotePolicy
from quote_gateway.utils.date_utils import calculate_age, vehicle_age
from quote_gateway.utils.money import round_half_up

COVERAGE_UNIT = Decimal("100000")
DEDUCTIBLE_REFERENCE = Decimal("1000")
VEHICLE_AGE_LOADING = Decimal("0.02")  # +2% per year of vehicle age

YOUNG_DRIVER_AGE = 25
SENIOR_DRIVER_AGE = 65
YOUNG_DRIVER_FACTOR = Decimal("1.5")
STANDARD_DRIVER_FACTOR = Decimal("1.0")
SENIOR_DRIVER_FACTOR = Decimal("1.2")

EXPERIENCED_DRIVER_YEARS = 5
EXPERIENCE_FACTOR = Decimal("0.95")


class RiskCalculator:
    """Computes the unadjusted (pre-discount) premium for a quote request"""

    def __init__(self, policy: QuotePolicy, today: Callable[[], date] = date.today):
        self.base_premium = policy.base_premium
        self.today = today

    def calculate_base_premium(self, request: QuoteRequest) -> Decimal:
        """
        Multiply a running premium by each risk factor in a fixed order.

        Factors:
        - coverage: coverage / 100,000 (rounded to cents)
        - deductible: 1,000 / deductible (rounded to cents, lower deductible costs more)
        - vehicle age: 1 + age * 0.02
        - per driver, in list order: age band, then experience

        Example:
            coverage 100,000, deductible 1,000, new vehicle, one 30-year-old
            driver with 10 years experience:
            500.00 * 1.00 * 1.00 * 1.00 * 1.0 * 0.95 = 475.00
        """
        logging.debug(
            "Calculating base premium",
            extra={"coverage_amount": str(request.coverage_amount)},
        )
        today = self.today()

        premium = self.base_premium

        coverage_factor = round_half_up(request.coverage_amount / COVERAGE_UNIT)
        premium *= coverage_factor

        deductible_factor = round_half_up(DEDUCTIBLE_REFERENCE / request.deductible)
        premium *= deductible_factor

        age_factor = 1 + vehicle_age(request.vehicle.year, today) * VEHICLE_AGE_LOADING
        premium *= age_factor

        for driver in request.drivers:
            premium = self._apply_driver_factors(premium, driver, today)

        return round_half_up(premium)

    def _apply_driver_factors(self, premium: Decimal, driver: Driver, today: date) -> Decimal:
        age = calculate_age(driver.date_of_birth, today)

        if age < YOUNG_DRIVER_AGE:
            premium *= YOUNG_DRIVER_FACTOR
        elif age < SENIOR_DRIVER_AGE:
            premium *= STANDARD_DRIVER_FACTOR
        else:
            premium *= SENIOR_DRIVER_FACTOR

        experience = driver.years_of_experience
        if experience is not None and experience > EXPERIENCED_DRIVER_YEARS:
            premium *= EXPERIENCE_FACTOR

        return premium
