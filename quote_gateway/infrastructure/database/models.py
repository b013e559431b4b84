"""SQLAlchemy ORM models for persisted quotes"""

from sqlalchemy import Column, String, Integer, Numeric, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class QuoteRecord(Base):
    """Issued quote with denormalized vehicle and primary driver details"""

    __tablename__ = "quotes"

    id = Column(String(36), primary_key=True)
    premium = Column(Numeric(12, 2), nullable=False)
    monthly_premium = Column(Numeric(12, 2), nullable=False)
    coverage_amount = Column(Numeric(12, 2), nullable=False)
    deductible = Column(Numeric(12, 2), nullable=False)
    valid_until = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    vehicle_make = Column(Text, nullable=False)
    vehicle_model = Column(Text, nullable=False)
    vehicle_year = Column(Integer, nullable=False)
    vehicle_vin = Column(String(17), nullable=False, index=True)
    vehicle_current_value = Column(Numeric(12, 2), nullable=False)
    primary_driver_name = Column(Text, nullable=False)
    primary_driver_license = Column(Text, nullable=False)

    discounts = relationship(
        "QuoteDiscount",
        back_populates="quote",
        cascade="all, delete-orphan",
        order_by="QuoteDiscount.position",
    )


class QuoteDiscount(Base):
    """Discount description attached to a quote, kept in application order"""

    __tablename__ = "quote_discounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quote_id = Column(String(36), ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    discount_description = Column(Text, nullable=False)

    quote = relationship("QuoteRecord", back_populates="discounts")
