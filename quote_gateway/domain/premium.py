"""Premium assembly - base premium, discount, final and monthly premium"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from quote_gateway.domain.discounts import DiscountCalculator
from quote_gateway.domain.models import PremiumCalculation, QuoteRequest
from quote_gateway.domain.risk import RiskCalculator
from quote_gateway.utils.money import round_half_up

MONTHS_PER_YEAR = Decimal("12")


class PremiumAssembler:
    """
    Combines the risk and discount calculators into one PremiumCalculation.

    When a cache and key function are supplied, results are memoised by the
    request fingerprint for the current pricing date. Concurrent misses for
    the same key both compute and the last write wins.
    """

    def __init__(
        self,
        risk_calculator: RiskCalculator,
        discount_calculator: DiscountCalculator,
        cache=None,
        cache_key: Optional[Callable[[QuoteRequest, date], str]] = None,
        today: Callable[[], date] = date.today,
    ):
        self.risk_calculator = risk_calculator
        self.discount_calculator = discount_calculator
        self.cache = cache
        self.cache_key = cache_key
        self.today = today

    def assemble(self, request: QuoteRequest) -> PremiumCalculation:
        if self.cache is None or self.cache_key is None:
            return self._calculate(request)
        key = self.cache_key(request, self.today())
        return self.cache.get_or_compute(key, lambda: self._calculate(request))

    def _calculate(self, request: QuoteRequest) -> PremiumCalculation:
        base_premium = self.risk_calculator.calculate_base_premium(request)
        total_discount = self.discount_calculator.calculate_total_discount(request)
        final_premium = base_premium - total_discount
        monthly_premium = round_half_up(final_premium / MONTHS_PER_YEAR)
        applied_discounts = self.discount_calculator.get_applied_discounts(request)

        return PremiumCalculation(
            base_premium=base_premium,
            total_discount=total_discount,
            final_premium=final_premium,
            monthly_premium=monthly_premium,
            applied_discounts=tuple(applied_discounts),
        )
