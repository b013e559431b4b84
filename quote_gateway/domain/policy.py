"""Immutable rating and validation policy shared by the domain services"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

DEFAULT_VIN_PATTERN = r"^[A-HJ-NPR-Z0-9]{17}$"


@dataclass(frozen=True)
class QuotePolicy:
    """
    Thresholds consumed by the validator and the risk calculator.

    Built once from Settings and passed into constructors.
    """

    vin_pattern: str = DEFAULT_VIN_PATTERN
    min_driver_age: int = 18
    max_driver_age: int = 85
    max_vehicle_age: int = 20
    max_drivers: Optional[int] = None
    base_premium: Decimal = Decimal("500.00")
    min_coverage: Decimal = Decimal("25000")
    max_coverage: Decimal = Decimal("1000000")
    min_deductible: Decimal = Decimal("250")
    max_deductible: Decimal = Decimal("10000")
    max_vehicle_value: Decimal = Decimal("1000000.00")
    quote_validity_days: int = 30
    compiled_vin_pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # An invalid pattern raises re.error here, not on the first request
        object.__setattr__(self, "compiled_vin_pattern", re.compile(self.vin_pattern))
