from fastapi.testclient import TestClient
from main import app

client = TestClient(app)

def test_openapi_contains_routes():
    openapi = client.get("/openapi.json")
    assert openapi.status_code == 200
    paths = openapi.json().get("paths", {})
    for path in (
        "/api/v1/estimate",
        "/api/v1/quote",
        "/api/v1/estimate/special-dates",
        "/api/v1/estimate/rates",
        "/api/v1/deposit/calculate",
        "/api/v1/travel-fee",
    ):
        assert path in paths


def test_estimate_schema_uses_camel_case():
    openapi = client.get("/openapi.json")
    assert openapi.status_code == 200
    schema = openapi.json()["components"]["schemas"]["EstimateOut"]
    props = schema.get("properties", {})
    assert "totalCost" in props
    assert "specialLabel" in props
