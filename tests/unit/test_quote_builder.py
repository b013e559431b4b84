"""Unit tests for quote entity construction"""

from datetime import date, timedelta
from decimal import Decimal
from quote_gateway.domain.models import PremiumCalculation
from quote_gateway.domain.quote_builder import build_quote


def _calculation(discounts=("Safe Driver Discount - 15%",)) -> PremiumCalculation:
    return PremiumCalculation(
        base_premium=Decimal("475.00"),
        total_discount=Decimal("71.25"),
        final_premium=Decimal("403.75"),
        monthly_premium=Decimal("33.65"),
        applied_discounts=discounts,
    )


def test_build_quote_copies_request_and_calculation(make_request, make_driver, today):
    request = make_request(
        drivers=[
            make_driver(first_name="Jane", last_name="Smith", license_number="S987654321"),
            make_driver(first_name="John", last_name="Doe", license_number="D000000001"),
        ]
    )

    quote = build_quote(request, _calculation(), today=today())

    assert quote.premium == Decimal("403.75")
    assert quote.monthly_premium == Decimal("33.65")
    assert quote.coverage_amount == Decimal("100000")
    assert quote.deductible == Decimal("1000")
    assert quote.vehicle_make == "Honda"
    assert quote.vehicle_model == "Accord"
    assert quote.vehicle_year == today().year
    assert quote.vehicle_vin == "1HGCV1F31JA123456"
    assert quote.vehicle_current_value == Decimal("30000.00")
    assert quote.primary_driver_name == "Jane Smith"
    assert quote.primary_driver_license == "S987654321"
    assert quote.discounts_applied == ["Safe Driver Discount - 15%"]


def test_quote_valid_for_thirty_days(make_request, today):
    quote = build_quote(make_request(), _calculation(), today=date(2025, 6, 15))
    assert quote.valid_until == date(2025, 7, 15)


def test_custom_validity_window(make_request, today):
    quote = build_quote(make_request(), _calculation(), today=today(), validity_days=7)
    assert quote.valid_until == today() + timedelta(days=7)


def test_created_at_left_for_store(make_request, today):
    quote = build_quote(make_request(), _calculation(), today=today())
    assert quote.created_at is None


def test_each_quote_gets_fresh_id(make_request, today):
    first = build_quote(make_request(), _calculation(), today=today())
    second = build_quote(make_request(), _calculation(), today=today())

    assert first.id and second.id
    assert first.id != second.id


def test_id_factory_override(make_request, today):
    quote = build_quote(make_request(), _calculation(), today=today(), id_factory=lambda: "q-fixed")
    assert quote.id == "q-fixed"


def test_missing_discounts_become_empty_list(make_request, today):
    assert build_quote(make_request(), _calculation(discounts=None), today=today()).discounts_applied == []
    assert build_quote(make_request(), _calculation(discounts=()), today=today()).discounts_applied == []


def test_discount_list_is_a_copy(make_request, today):
    first = build_quote(make_request(), _calculation(), today=today())
    first.discounts_applied.append("tampered")

    second = build_quote(make_request(), _calculation(), today=today())
    assert second.discounts_applied == ["Safe Driver Discount - 15%"]
