"""Discount rules applied on top of the base premium"""

import logging
from decimal import Decimal
from typing import List

from quote_gateway.domain.models import QuoteRequest
from quote_gateway.domain.risk import RiskCalculator
from quote_gateway.utils.money import round_half_up

SAFE_DRIVER_RATE = Decimal("0.15")
MULTI_POLICY_RATE = Decimal("0.10")
MAX_DISCOUNT_RATE = Decimal("0.25")

SAFE_DRIVER_LABEL = "Safe Driver Discount - 15%"
MULTI_POLICY_LABEL = "Multi-Policy Discount - 10%"


class DiscountCalculator:
    """Per-driver percentage discounts, capped at 25% of the base premium"""

    def __init__(self, risk_calculator: RiskCalculator):
        self.risk_calculator = risk_calculator

    def calculate_total_discount(self, request: QuoteRequest) -> Decimal:
        """
        Discount amount for a request.

        Rates accumulate across every driver (15% safe driver, 10% multi-policy)
        and the total is capped at 25%. The base premium is recomputed here
        rather than passed in.
        """
        base_premium = self.risk_calculator.calculate_base_premium(request)

        rate = Decimal("0")
        for driver in request.drivers:
            if driver.safe_driver_discount:
                rate += SAFE_DRIVER_RATE
            if driver.multi_policy_discount:
                rate += MULTI_POLICY_RATE

        rate = min(rate, MAX_DISCOUNT_RATE)
        total_discount = round_half_up(base_premium * rate)

        logging.info(
            "Total discount applied",
            extra={"discount_rate": str(rate), "discount_amount": str(total_discount)},
        )
        return total_discount

    def get_applied_discounts(self, request: QuoteRequest) -> List[str]:
        """One label per triggered flag, in driver order; not limited by the cap"""
        applied = []
        for driver in request.drivers:
            if driver.safe_driver_discount:
                applied.append(SAFE_DRIVER_LABEL)
            if driver.multi_policy_discount:
                applied.append(MULTI_POLICY_LABEL)
        return applied
