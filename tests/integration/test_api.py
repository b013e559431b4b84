"""Integration tests for API endpoints"""

from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "quote_generated_total" in response.text


def test_create_quote(client: TestClient, quote_payload):
    """Test POST /v1/quotes with a safe driver"""
    response = client.post("/v1/quotes", json=quote_payload(safeDriverDiscount=True))

    assert response.status_code == 201
    data = response.json()
    assert data["quoteId"]
    assert Decimal(data["premium"]) == Decimal("403.75")
    assert Decimal(data["monthlyPremium"]) == Decimal("33.65")
    assert Decimal(data["coverageAmount"]) == Decimal("100000")
    assert Decimal(data["deductible"]) == Decimal("1000")
    assert data["validUntil"] == (date.today() + timedelta(days=30)).isoformat()
    assert data["discountsApplied"] == ["Safe Driver Discount - 15%"]


def test_create_then_get_quote(client: TestClient, quote_payload):
    """Test GET /v1/quotes/{quote_id} returns the stored quote"""
    created = client.post(
        "/v1/quotes",
        json=quote_payload(safeDriverDiscount=True, multiPolicyDiscount=True),
    ).json()

    response = client.get(f"/v1/quotes/{created['quoteId']}")

    assert response.status_code == 200
    data = response.json()
    assert data["quoteId"] == created["quoteId"]
    assert Decimal(data["premium"]) == Decimal("356.25")
    assert Decimal(data["monthlyPremium"]) == Decimal("29.69")
    assert data["discountsApplied"] == [
        "Safe Driver Discount - 15%",
        "Multi-Policy Discount - 10%",
    ]


def test_get_quote_not_found(client: TestClient):
    """Test GET /v1/quotes/{quote_id} for an unknown id"""
    response = client.get("/v1/quotes/does-not-exist")

    assert response.status_code == 404
    data = response.json()
    assert data["error_code"] == "QUOTE_NOT_FOUND"
    assert data["message"] == "Quote not found with ID: does-not-exist"
    assert isinstance(data["timestamp"], int)


def test_get_quote_blank_id(client: TestClient):
    response = client.get("/v1/quotes/%20")

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_ARGUMENT"


def test_calculate_premium(client: TestClient, quote_payload):
    """Test POST /v1/quotes/calculate ignores discounts and stores nothing"""
    response = client.post("/v1/quotes/calculate", json=quote_payload(safeDriverDiscount=True))

    assert response.status_code == 200
    assert Decimal(response.json()["premium"]) == Decimal("475.00")


def test_young_driver_loading(client: TestClient, quote_payload):
    """Test 22-year-old with 2 years experience: 500 * 1.5 = 750.00"""
    birth = date(date.today().year - 22, 1, 1).isoformat()
    response = client.post(
        "/v1/quotes/calculate",
        json=quote_payload(dateOfBirth=birth, yearsOfExperience=2),
    )

    assert response.status_code == 200
    assert Decimal(response.json()["premium"]) == Decimal("750.00")


def test_schema_violation_returns_validation_error(client: TestClient, quote_payload):
    """Test deductible below 250 is rejected before reaching the service"""
    payload = quote_payload()
    payload["deductible"] = "0"

    response = client.post("/v1/quotes", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "VALIDATION_ERROR"
    assert "deductible" in data["message"]


def test_missing_drivers_returns_validation_error(client: TestClient, quote_payload):
    payload = quote_payload()
    payload["drivers"] = []

    response = client.post("/v1/quotes", json=payload)

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_invalid_vin_returns_validation_error(client: TestClient, quote_payload):
    payload = quote_payload()
    payload["vehicle"]["vin"] = "1HGCV1F31JA12345O"

    response = client.post("/v1/quotes", json=payload)

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_future_vehicle_year_returns_invalid_quote_request(client: TestClient, quote_payload):
    """Test underwriting rule failures map to INVALID_QUOTE_REQUEST"""
    payload = quote_payload()
    payload["vehicle"]["year"] = date.today().year + 1

    response = client.post("/v1/quotes", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "INVALID_QUOTE_REQUEST"
    assert data["message"] == "Vehicle year cannot be in the future"


def test_underage_driver_returns_invalid_quote_request(client: TestClient, quote_payload):
    birth = date(date.today().year - 16, 1, 1).isoformat()

    response = client.post("/v1/quotes/calculate", json=quote_payload(dateOfBirth=birth))

    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "INVALID_QUOTE_REQUEST"
    assert data["message"].startswith("Driver must be at least 18 years old")


def test_request_id_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_unknown_paths_share_one_metrics_label(client: TestClient):
    """Test 404s for arbitrary paths do not add a label set per path"""
    assert client.get("/no-such-route/abc123").status_code == 404

    metrics = client.get("/metrics").text
    assert 'endpoint="unmatched"' in metrics
    assert "/no-such-route/abc123" not in metrics


def test_quote_lookup_labelled_by_route_template(client: TestClient):
    client.get("/v1/quotes/some-quote-id")

    metrics = client.get("/metrics").text
    assert 'endpoint="/v1/quotes/{quote_id}"' in metrics
    assert "some-quote-id" not in metrics


def test_error_body_documented_in_openapi(client: TestClient):
    schema = client.get("/openapi.json").json()

    assert "ErrorResponse" in schema["components"]["schemas"]
    lookup = schema["paths"]["/v1/quotes/{quote_id}"]["get"]["responses"]
    assert lookup["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    create = schema["paths"]["/v1/quotes"]["post"]["responses"]
    assert set(create) >= {"201", "400", "503"}
