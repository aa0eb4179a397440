import logging

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def test_deposit_from_estimate_dollars():
    res = client.post("/api/v1/deposit/calculate", json={"estimateDollars": 1000})
    assert res.status_code == 200
    data = res.json()
    assert data["deposit"] == 250.0
    assert data["depositCents"] == 25000
    assert data["percentage"] == 25.0
    assert data["pickedBy"] == "calculated_25.0%_of_estimate"
    assert data["isManualOverride"] is False
    assert data["requestedEstimate"] == 1000.0
    assert data["calculation"]["minRange"] == 150.0
    assert data["calculation"]["maxRange"] == 300.0
    assert data["table"] is None


def test_estimate_cents_preferred_over_dollars():
    res = client.post(
        "/api/v1/deposit/calculate",
        json={"estimateCents": 10000, "estimateDollars": 5000},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["deposit"] == 50.0
    assert data["percentage"] == 50.0


def test_manual_deposit_override():
    res = client.post(
        "/api/v1/deposit/calculate",
        json={"estimateDollars": 1000, "depositDollars": 300},
    )
    assert res.status_code == 200
    data = res.json()
    assert data["deposit"] == 300.0
    assert data["pickedBy"] == "manual"
    assert data["isManualOverride"] is True
    assert data["percentage"] == 30.0
    assert data["calculation"]["deposit"] == 250.0


def test_missing_amounts_rejected(caplog):
    caplog.set_level(logging.ERROR, logger="app.utils.errors")
    res = client.post("/api/v1/deposit/calculate", json={})
    assert res.status_code == 422
    detail = res.json()["detail"]
    assert detail["message"] == "No estimate or deposit provided"
    assert detail["field_errors"] == {"estimate": "required", "deposit": "required"}
    assert any("No estimate or deposit provided" in r.getMessage() for r in caplog.records)


def test_query_variant_with_table():
    res = client.get("/api/v1/deposit/calculate", params={"estimate": 0.29, "showTable": "true"})
    assert res.status_code == 200
    data = res.json()
    assert data["requestedEstimate"] == 0.29
    assert data["deposit"] == 50.0
    assert len(data["table"]) == 7
    assert data["table"][0] == {"estimate": 200.0, "deposit": 50.0, "percentage": 25.0, "inBand": True}


def test_query_variant_requires_an_amount():
    res = client.get("/api/v1/deposit/calculate")
    assert res.status_code == 422


def test_huge_estimate_saturates_at_ceiling():
    res = client.post("/api/v1/deposit/calculate", json={"estimateDollars": 1e30})
    assert res.status_code == 200
    data = res.json()
    assert data["deposit"] == 5000.0
    assert data["depositCents"] == 500000
    assert data["requestedEstimate"] == 1e30


def test_non_finite_amounts_rejected():
    assert client.get("/api/v1/deposit/calculate", params={"estimate": "inf"}).status_code == 422
    assert client.get("/api/v1/deposit/calculate", params={"deposit": "nan"}).status_code == 422
    res = client.post(
        "/api/v1/deposit/calculate",
        content='{"estimateDollars": Infinity}',
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 422
