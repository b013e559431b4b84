"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from quote_gateway.domain.policy import QuotePolicy, DEFAULT_VIN_PATTERN


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./quote_gateway.db"

    # Service
    service_name: str = "quote-gateway"
    log_level: str = "INFO"

    # Rating
    base_premium: Decimal = Decimal("500.00")
    quote_validity_days: int = 30

    # Validation thresholds
    vin_pattern: str = DEFAULT_VIN_PATTERN
    min_driver_age: int = 18
    max_driver_age: int = 85
    max_vehicle_age: int = 20
    max_drivers: Optional[int] = None  # Documented as 4, unenforced unless set
    min_coverage: Decimal = Decimal("25000")
    max_coverage: Decimal = Decimal("1000000")
    min_deductible: Decimal = Decimal("250")
    max_deductible: Decimal = Decimal("10000")
    max_vehicle_value: Decimal = Decimal("1000000.00")

    # Caching
    calculation_cache_key: Literal["strict", "legacy"] = "strict"
    calculation_cache_max_entries: Optional[int] = 10_000
    quote_cache_max_entries: Optional[int] = 10_000

    def quote_policy(self) -> QuotePolicy:
        """Freeze the rating and validation settings into an immutable policy"""
        return QuotePolicy(
            vin_pattern=self.vin_pattern,
            min_driver_age=self.min_driver_age,
            max_driver_age=self.max_driver_age,
            max_vehicle_age=self.max_vehicle_age,
            max_drivers=self.max_drivers,
            base_premium=self.base_premium,
            min_coverage=self.min_coverage,
            max_coverage=self.max_coverage,
            min_deductible=self.min_deductible,
            max_deductible=self.max_deductible,
            max_vehicle_value=self.max_vehicle_value,
            quote_validity_days=self.quote_validity_days,
        )


settings = Settings()
