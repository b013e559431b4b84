"""Data access layer for quotes"""

import copy
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quote_gateway.domain.exceptions import PersistenceError
from quote_gateway.domain.models import Quote
from quote_gateway.infrastructure.database.models import QuoteRecord, QuoteDiscount


class QuoteStore(Protocol):
    """Key-value persistence of quotes keyed by quote id"""

    def save(self, quote: Quote) -> Quote: ...

    def find_by_id(self, quote_id: str) -> Optional[Quote]: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_domain(record: QuoteRecord) -> Quote:
    return Quote(
        id=record.id,
        premium=record.premium,
        monthly_premium=record.monthly_premium,
        coverage_amount=record.coverage_amount,
        deductible=record.deductible,
        valid_until=record.valid_until,
        vehicle_make=record.vehicle_make,
        vehicle_model=record.vehicle_model,
        vehicle_year=record.vehicle_year,
        vehicle_vin=record.vehicle_vin,
        vehicle_current_value=record.vehicle_current_value,
        primary_driver_name=record.primary_driver_name,
        primary_driver_license=record.primary_driver_license,
        discounts_applied=[d.discount_description for d in record.discounts],
        created_at=record.created_at,
    )


class QuoteRepository:
    """Repository for quotes backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, quote: Quote) -> Quote:
        """
        Persist a quote in a single commit.

        Assigns an id when missing and stamps created_at on first write only;
        saving an existing id keeps its original created_at.

        Raises:
            PersistenceError: On any database failure (session is rolled back)
        """
        quote_id = quote.id or str(uuid.uuid4())
        try:
            record = self.db.get(QuoteRecord, quote_id)
            if record is None:
                record = QuoteRecord(id=quote_id, created_at=quote.created_at or _utcnow())
                self.db.add(record)

            record.premium = quote.premium
            record.monthly_premium = quote.monthly_premium
            record.coverage_amount = quote.coverage_amount
            record.deductible = quote.deductible
            record.valid_until = quote.valid_until
            record.vehicle_make = quote.vehicle_make
            record.vehicle_model = quote.vehicle_model
            record.vehicle_year = quote.vehicle_year
            record.vehicle_vin = quote.vehicle_vin
            record.vehicle_current_value = quote.vehicle_current_value
            record.primary_driver_name = quote.primary_driver_name
            record.primary_driver_license = quote.primary_driver_license
            record.discounts = [
                QuoteDiscount(position=i, discount_description=description)
                for i, description in enumerate(quote.discounts_applied)
            ]

            self.db.commit()
            self.db.refresh(record)
            return _to_domain(record)

        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to save quote {quote_id}: {e}") from e

    def find_by_id(self, quote_id: str) -> Optional[Quote]:
        """Fetch quote with its discounts"""
        try:
            record = (
                self.db.query(QuoteRecord)
                .filter(QuoteRecord.id == quote_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load quote {quote_id}: {e}") from e

        return _to_domain(record) if record else None


class InMemoryQuoteRepository:
    """Dictionary-backed quote store for local runs and tests"""

    def __init__(self):
        self._quotes: Dict[str, Quote] = {}

    def save(self, quote: Quote) -> Quote:
        stored = copy.deepcopy(quote)
        if stored.id is None:
            stored.id = str(uuid.uuid4())

        existing = self._quotes.get(stored.id)
        if existing is not None:
            stored.created_at = existing.created_at
        elif stored.created_at is None:
            stored.created_at = _utcnow()

        self._quotes[stored.id] = stored
        return copy.deepcopy(stored)

    def find_by_id(self, quote_id: str) -> Optional[Quote]:
        quote = self._quotes.get(quote_id)
        return copy.deepcopy(quote) if quote else None

    def __len__(self) -> int:
        return len(self._quotes)
