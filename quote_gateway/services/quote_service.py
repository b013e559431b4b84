"""Quote service - validation, premium assembly, persistence and retrieval"""

import logging
import time
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from quote_gateway.domain.exceptions import (
    InvalidArgumentError,
    InvalidQuoteRequestError,
    PersistenceError,
    QuoteNotFoundError,
)
from quote_gateway.domain.discounts import DiscountCalculator
from quote_gateway.domain.models import QuoteRequest, QuoteSummary
from quote_gateway.domain.policy import QuotePolicy
from quote_gateway.domain.premium import PremiumAssembler
from quote_gateway.domain.quote_builder import QUOTE_VALIDITY_DAYS, build_quote
from quote_gateway.domain.risk import RiskCalculator
from quote_gateway.domain.validation import QuoteValidator
from quote_gateway.infrastructure.cache import FINGERPRINTS, MemoCache
from quote_gateway.infrastructure.database.repositories import QuoteStore
from quote_gateway.infrastructure.observability.logging import log_quote_generated, log_quote_rejected
from quote_gateway.infrastructure.observability.metrics import (
    premium_estimate_counter,
    record_failure,
    record_quote,
)


def _vin_of(request: Optional[QuoteRequest]) -> Optional[str]:
    vehicle = request.vehicle if request is not None else None
    return vehicle.vin if vehicle is not None else None


class QuoteService:
    """Entry point for quote generation, lookup and premium estimates"""

    def __init__(
        self,
        store: QuoteStore,
        validator: QuoteValidator,
        risk_calculator: RiskCalculator,
        assembler: PremiumAssembler,
        quote_cache: Optional[MemoCache] = None,
        validity_days: int = QUOTE_VALIDITY_DAYS,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.validator = validator
        self.risk_calculator = risk_calculator
        self.assembler = assembler
        self.quote_cache = quote_cache
        self.validity_days = validity_days
        self.today = today

    def generate_quote(self, request: QuoteRequest) -> QuoteSummary:
        """
        Validate, price, build and persist a quote.

        Flow:
        1. Validate request (raises InvalidQuoteRequestError)
        2. Assemble premium (risk, then discounts)
        3. Build quote entity valid for 30 days
        4. Save to the quote store
        5. Return the summary projection

        Failures after validation are logged and re-raised unchanged.
        """
        start_time = time.time()
        logging.info("Starting quote generation process")

        try:
            self.validator.validate(request)
        except InvalidQuoteRequestError as e:
            record_failure("invalid_request")
            log_quote_rejected("invalid_request", str(e), vin=_vin_of(request))
            raise

        vin = request.vehicle.vin
        driver_name = request.primary_driver.full_name
        logging.debug(
            "Quote validation successful",
            extra={"vin": vin, "primary_driver": driver_name},
        )

        try:
            calculation = self.assembler.assemble(request)
            quote = build_quote(
                request,
                calculation,
                today=self.today(),
                validity_days=self.validity_days,
            )
            saved = self.store.save(quote)
        except PersistenceError as e:
            record_failure("persistence")
            logging.error(
                f"Failed to persist quote for VIN {vin}: {e}",
                extra={"vin": vin, "primary_driver": driver_name},
            )
            raise
        except Exception as e:
            logging.error(
                f"Failed to generate quote for VIN {vin}: {e}",
                extra={"vin": vin, "primary_driver": driver_name},
                exc_info=True,
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        record_quote(calculation.final_premium)
        log_quote_generated(saved.id, vin, calculation.final_premium, len(calculation.applied_discounts), duration_ms)

        return QuoteSummary(
            quote_id=saved.id,
            premium=calculation.final_premium,
            monthly_premium=calculation.monthly_premium,
            coverage_amount=saved.coverage_amount,
            deductible=saved.deductible,
            valid_until=saved.valid_until,
            discounts_applied=calculation.applied_discounts,
        )

    def get_quote_by_id(self, quote_id: Optional[str]) -> QuoteSummary:
        """
        Retrieve a stored quote.

        Raises:
            InvalidArgumentError: quote_id is None or blank
            QuoteNotFoundError: no quote stored under quote_id
        """
        logging.debug("Retrieving quote", extra={"quote_id": quote_id})

        if quote_id is None or not quote_id.strip():
            record_failure("invalid_argument")
            raise InvalidArgumentError("Quote ID cannot be null or empty")

        if self.quote_cache is not None:
            cached = self.quote_cache.get(quote_id)
            if cached is not None:
                return cached

        try:
            quote = self.store.find_by_id(quote_id)
        except PersistenceError as e:
            record_failure("persistence")
            logging.error(f"Failed to retrieve quote {quote_id}: {e}", extra={"quote_id": quote_id})
            raise

        if quote is None:
            record_failure("not_found")
            logging.warning("Quote not found", extra={"quote_id": quote_id})
            raise QuoteNotFoundError(f"Quote not found with ID: {quote_id}")

        summary = QuoteSummary.from_quote(quote)
        if self.quote_cache is not None:
            # Quotes are immutable once stored, so entries are never invalidated
            self.quote_cache.put(quote_id, summary)
        return summary

    def calculate_premium(self, request: Optional[QuoteRequest]) -> Decimal:
        """
        Base premium estimate: no discounts, nothing persisted.

        May differ from the final premium of a full quote for the same request.
        """
        logging.info("Starting premium calculation")

        if request is None:
            record_failure("invalid_argument")
            raise InvalidArgumentError("Quote request cannot be null")

        try:
            self.validator.validate(request)
        except InvalidQuoteRequestError as e:
            record_failure("invalid_request")
            log_quote_rejected("invalid_request", str(e), vin=_vin_of(request))
            raise

        premium = self.risk_calculator.calculate_base_premium(request)
        premium_estimate_counter.inc()
        logging.debug(
            "Premium calculation completed",
            extra={"vin": request.vehicle.vin, "premium": str(premium)},
        )
        return premium


def create_quote_service(
    store: QuoteStore,
    policy: QuotePolicy,
    calculation_cache: Optional[MemoCache] = None,
    quote_cache: Optional[MemoCache] = None,
    cache_key: str = "strict",
    today: Callable[[], date] = date.today,
) -> QuoteService:
    """Wire validator, calculators and caches around a quote store"""
    risk_calculator = RiskCalculator(policy, today=today)
    assembler = PremiumAssembler(
        risk_calculator,
        DiscountCalculator(risk_calculator),
        cache=calculation_cache,
        cache_key=FINGERPRINTS[cache_key],
        today=today,
    )
    return QuoteService(
        store=store,
        validator=QuoteValidator(policy, today=today),
        risk_calculator=risk_calculator,
        assembler=assembler,
        quote_cache=quote_cache,
        validity_days=policy.quote_validity_days,
        today=today,
    )
