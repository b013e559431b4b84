"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from quote_gateway.api import dependencies
from quote_gateway.api.main import create_app
from quote_gateway.domain.models import Driver, QuoteRequest, Vehicle
from quote_gateway.domain.policy import QuotePolicy
from quote_gateway.infrastructure.database.models import Base
from quote_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed calendar day for domain tests
TODAY = date(2025, 6, 15)
VALID_VIN = "1HGCV1F31JA123456"


def birth_date_for_age(age: int, today: date = TODAY) -> date:
    """January 1st birthday, so the driver is exactly `age` on any later day of the year"""
    return date(today.year - age, 1, 1)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and empty caches"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    dependencies.calculation_cache.clear()
    dependencies.quote_cache.clear()
    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def policy() -> QuotePolicy:
    return QuotePolicy()


@pytest.fixture
def today() -> Callable[[], date]:
    return lambda: TODAY


@pytest.fixture
def make_vehicle() -> Callable[..., Vehicle]:
    def _make(**overrides) -> Vehicle:
        fields = dict(
            make="Honda",
            model="Accord",
            year=TODAY.year,
            vin=VALID_VIN,
            current_value=Decimal("30000.00"),
        )
        fields.update(overrides)
        return Vehicle(**fields)

    return _make


@pytest.fixture
def make_driver() -> Callable[..., Driver]:
    def _make(age: int = 30, **overrides) -> Driver:
        fields = dict(
            first_name="Jane",
            last_name="Smith",
            date_of_birth=birth_date_for_age(age),
            license_number="S987654321",
            license_state="NY",
            years_of_experience=10,
            safe_driver_discount=False,
            multi_policy_discount=False,
        )
        fields.update(overrides)
        return Driver(**fields)

    return _make


@pytest.fixture
def make_request(make_vehicle, make_driver) -> Callable[..., QuoteRequest]:
    """
    Baseline request: new vehicle, one 30-year-old driver with 10 years
    experience, coverage 100,000, deductible 1,000 (base premium 475.00).
    """

    def _make(drivers=None, vehicle=None, **overrides) -> QuoteRequest:
        fields = dict(
            vehicle=vehicle or make_vehicle(),
            drivers=drivers if drivers is not None else [make_driver()],
            coverage_amount=Decimal("100000"),
            deductible=Decimal("1000"),
        )
        fields.update(overrides)
        return QuoteRequest(**fields)

    return _make


@pytest.fixture
def quote_payload() -> Callable[..., dict]:
    """JSON body for the HTTP API, dated relative to the real current day"""

    def _make(**driver_overrides) -> dict:
        today = date.today()
        driver = {
            "firstName": "Jane",
            "lastName": "Smith",
            "dateOfBirth": birth_date_for_age(30, today).isoformat(),
            "licenseNumber": "S987654321",
            "licenseState": "NY",
            "yearsOfExperience": 10,
            "safeDriverDiscount": False,
            "multiPolicyDiscount": False,
        }
        driver.update(driver_overrides)
        return {
            "vehicle": {
                "make": "Honda",
                "model": "Accord",
                "year": today.year,
                "vin": VALID_VIN,
                "currentValue": "30000.00",
            },
            "drivers": [driver],
            "coverageAmount": "100000",
            "deductible": "1000",
        }

    return _make
