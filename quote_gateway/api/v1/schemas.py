"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from quote_gateway.domain.models import Driver, QuoteRequest, QuoteSummary, Vehicle

VIN_REGEX = r"^[A-HJ-NPR-Z0-9]{17}$"


class CamelModel(BaseModel):
    """Accepts and emits camelCase field names; snake_case is accepted too"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VehicleSchema(CamelModel):
    """Vehicle block of a quote request"""

    make: str = Field(..., min_length=1, description="Vehicle make")
    model: str = Field(..., min_length=1, description="Vehicle model")
    year: int = Field(..., ge=1900, description="Model year")
    vin: str = Field(..., pattern=VIN_REGEX, description="17-character VIN, no I/O/Q")
    current_value: Decimal = Field(..., gt=0, le=Decimal("1000000.00"), description="Current market value")

    def to_domain(self) -> Vehicle:
        return Vehicle(
            make=self.make,
            model=self.model,
            year=self.year,
            vin=self.vin,
            current_value=self.current_value,
        )


class DriverSchema(CamelModel):
    """Driver block of a quote request"""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    date_of_birth: date
    license_number: str = Field(..., min_length=1)
    license_state: str = Field(..., min_length=2, max_length=2, description="Two-letter state code")
    years_of_experience: Optional[int] = Field(default=None, ge=0)
    safe_driver_discount: bool = False
    multi_policy_discount: bool = False

    @field_validator("first_name", "last_name", "license_number", "license_state")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("date_of_birth")
    @classmethod
    def in_the_past(cls, value: date) -> date:
        if value >= date.today():
            raise ValueError("Date of birth must be in the past")
        return value

    def to_domain(self) -> Driver:
        return Driver(
            first_name=self.first_name,
            last_name=self.last_name,
            date_of_birth=self.date_of_birth,
            license_number=self.license_number,
            license_state=self.license_state,
            years_of_experience=self.years_of_experience,
            safe_driver_discount=self.safe_driver_discount,
            multi_policy_discount=self.multi_policy_discount,
        )


class QuoteRequestSchema(CamelModel):
    """Request body for POST /v1/quotes and POST /v1/quotes/calculate"""

    vehicle: VehicleSchema
    drivers: List[DriverSchema] = Field(..., min_length=1, description="First driver is the primary driver")
    coverage_amount: Decimal = Field(..., ge=Decimal("25000"), le=Decimal("1000000"))
    deductible: Decimal = Field(..., ge=Decimal("250"), le=Decimal("10000"))

    def to_domain(self) -> QuoteRequest:
        return QuoteRequest(
            vehicle=self.vehicle.to_domain(),
            drivers=[d.to_domain() for d in self.drivers],
            coverage_amount=self.coverage_amount,
            deductible=self.deductible,
        )


class QuoteResponse(CamelModel):
    """Response for POST /v1/quotes and GET /v1/quotes/{quote_id}"""

    quote_id: str
    premium: Decimal
    monthly_premium: Decimal
    coverage_amount: Decimal
    deductible: Decimal
    valid_until: date
    discounts_applied: List[str] = []

    @classmethod
    def from_summary(cls, summary: QuoteSummary) -> "QuoteResponse":
        return cls(
            quote_id=summary.quote_id,
            premium=summary.premium,
            monthly_premium=summary.monthly_premium,
            coverage_amount=summary.coverage_amount,
            deductible=summary.deductible,
            valid_until=summary.valid_until,
            discounts_applied=list(summary.discounts_applied),
        )


class PremiumResponse(BaseModel):
    """Response for POST /v1/quotes/calculate"""

    premium: Decimal


class ErrorResponse(BaseModel):
    """Error body shared by all error handlers"""

    message: str
    error_code: str
    timestamp: int
