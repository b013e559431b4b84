"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple


@dataclass
class Vehicle:
    """Insured vehicle"""

    make: str
    model: str
    year: int
    vin: str
    current_value: Decimal


@dataclass
class Driver:
    """Driver listed on a quote request"""

    first_name: str
    last_name: str
    date_of_birth: date
    license_number: str
    license_state: str
    years_of_experience: Optional[int] = None
    safe_driver_discount: bool = False
    multi_policy_discount: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class QuoteRequest:
    """Input to quote generation; the first driver is the primary driver"""

    vehicle: Vehicle
    drivers: List[Driver]
    coverage_amount: Decimal
    deductible: Decimal

    @property
    def primary_driver(self) -> Driver:
        return self.drivers[0]


@dataclass(frozen=True)
class PremiumCalculation:
    """Output of premium assembly, never mutated after creation"""

    base_premium: Decimal
    total_discount: Decimal
    final_premium: Decimal
    monthly_premium: Decimal
    applied_discounts: Tuple[str, ...] = ()


@dataclass
class Quote:
    """Persisted quote record with denormalized vehicle and primary driver fields"""

    id: Optional[str]
    premium: Decimal
    monthly_premium: Decimal
    coverage_amount: Decimal
    deductible: Decimal
    valid_until: date
    vehicle_make: str
    vehicle_model: str
    vehicle_year: int
    vehicle_vin: str
    vehicle_current_value: Decimal
    primary_driver_name: str
    primary_driver_license: str
    discounts_applied: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class QuoteSummary:
    """Projection of a quote returned to callers"""

    quote_id: str
    premium: Decimal
    monthly_premium: Decimal
    coverage_amount: Decimal
    deductible: Decimal
    valid_until: date
    discounts_applied: Tuple[str, ...] = ()

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteSummary":
        return cls(
            quote_id=quote.id,
            premium=quote.premium,
            monthly_premium=quote.monthly_premium,
            coverage_amount=quote.coverage_amount,
            deductible=quote.deductible,
            valid_until=quote.valid_until,
            discounts_applied=tuple(quote.discounts_applied),
        )
