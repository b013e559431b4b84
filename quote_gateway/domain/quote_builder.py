"""Quote entity construction from a validated request and its premium calculation"""

import uuid
from datetime import date
from typing import Callable, Optional

from quote_gateway.domain.models import PremiumCalculation, Quote, QuoteRequest
from quote_gateway.utils.date_utils import add_days

QUOTE_VALIDITY_DAYS = 30


def _new_quote_id() -> str:
    return str(uuid.uuid4())


def build_quote(
    request: QuoteRequest,
    calculation: PremiumCalculation,
    today: Optional[date] = None,
    validity_days: int = QUOTE_VALIDITY_DAYS,
    id_factory: Callable[[], str] = _new_quote_id,
) -> Quote:
    """
    Map a request and premium calculation to a new Quote.

    Requirements:
    - Fresh unique id per call
    - Valid until issue date + validity_days (default 30)
    - Vehicle and primary driver (first in list) copied verbatim
    - Discount list copied, so later changes to the source do not leak in
    - created_at left unset; the quote store stamps it on first write

    Example:
        issued 2025-06-15 → valid_until 2025-07-15
    """
    if today is None:
        today = date.today()

    vehicle = request.vehicle
    primary_driver = request.primary_driver
    discounts = list(calculation.applied_discounts) if calculation.applied_discounts else []

    return Quote(
        id=id_factory(),
        premium=calculation.final_premium,
        monthly_premium=calculation.monthly_premium,
        coverage_amount=request.coverage_amount,
        deductible=request.deductible,
        valid_until=add_days(today, validity_days),
        vehicle_make=vehicle.make,
        vehicle_model=vehicle.model,
        vehicle_year=vehicle.year,
        vehicle_vin=vehicle.vin,
        vehicle_current_value=vehicle.current_value,
        primary_driver_name=primary_driver.full_name,
        primary_driver_license=primary_driver.license_number,
        discounts_applied=discounts,
        created_at=None,
    )
