"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


QUICK_BODY = {
    "monthlyIncome": 4000,
    "monthlyHousing": 1500,
    "monthlyExpenses": 1000,
    "totalSavings": 2000,
    "totalDebt": 5000,
    "creditScore": 640,
}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, baseline_payload: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/analysis", json=baseline_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finhealth_analysis_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_analysis_endpoint_baseline(client: TestClient, baseline_payload: dict):
    """Test POST /v1/analysis with the baseline household"""
    response = client.post("/v1/analysis", json=baseline_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["overallHealthScore"] == 59
    assert data["healthLevel"] == "fair"
    assert data["analysisMode"] == "comprehensive"
    assert len(data["healthIndicators"]) == 8
    assert data["keyMetrics"]["monthlyCashFlow"] == 700
    assert data["keyMetrics"]["netWorth"] == 10000
    assert data["keyMetrics"]["dtiBreakdown"]["debtToIncomeRatio"] == 500
    assert data["prioritizedRecommendations"][0]["id"] == "debt-to-income"
    assert data["prioritizedRecommendations"][0]["actionSteps"]
    assert len(data["wealthProjections"]) == 3
    assert data["scenarioAnalysis"][0]["timeToRecover"] == "1.9 months"
    assert data["detailedInsights"]["cashFlowAnalysis"]["surplusPercentage"] == pytest.approx(14.0)
    assert data["detailedInsights"]["opportunities"] == ["Increase investment contributions"]


def test_analysis_endpoint_sets_request_id(client: TestClient, baseline_payload: dict):
    response = client.post("/v1/analysis", json=baseline_payload)
    assert response.headers.get("X-Request-ID")

    response = client.post("/v1/analysis", json=baseline_payload, headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_analysis_endpoint_explicit_quick_mode(client: TestClient, baseline_payload: dict):
    response = client.post("/v1/analysis", json={**baseline_payload, "mode": "quick"})

    assert response.status_code == 200
    data = response.json()
    assert data["analysisMode"] == "quick"
    ids = [rec["id"] for rec in data["prioritizedRecommendations"]]
    assert "investment-diversification" not in ids


def test_analysis_endpoint_zero_salary(client: TestClient, baseline_payload: dict):
    """Domain validation failure maps to 422"""
    baseline_payload["income"]["primarySalary"] = 0

    response = client.post("/v1/analysis", json=baseline_payload)

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid data: Primary salary cannot be zero or negative"


def test_analysis_endpoint_credit_score_out_of_range(client: TestClient, baseline_payload: dict):
    baseline_payload["liabilities"]["creditScore"] = 900

    response = client.post("/v1/analysis", json=baseline_payload)

    assert response.status_code == 422


def test_analysis_endpoint_missing_income(client: TestClient, baseline_payload: dict):
    del baseline_payload["income"]

    response = client.post("/v1/analysis", json=baseline_payload)

    assert response.status_code == 422


def test_quick_analysis_endpoint(client: TestClient):
    """Test POST /v1/analysis/quick"""
    response = client.post("/v1/analysis/quick", json=QUICK_BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["analysisMode"] == "quick"
    assert data["overallHealthScore"] == 46
    assert data["healthLevel"] == "limited"
    assert [rec["id"] for rec in data["prioritizedRecommendations"]][:3] == [
        "emergency-fund",
        "debt-to-income",
        "liquidity-cushion-critical",
    ]


def test_quick_analysis_endpoint_zero_income(client: TestClient):
    response = client.post("/v1/analysis/quick", json={**QUICK_BODY, "monthlyIncome": 0})

    assert response.status_code == 422
    assert "Primary salary" in response.json()["detail"]


def test_field_analysis_defaults(client: TestClient):
    """Empty field set analyzes the default record"""
    response = client.post("/v1/analysis/fields", json={"fields": {}})

    assert response.status_code == 200
    data = response.json()
    assert data["overallHealthScore"] == 59
    assert data["analysisMode"] == "comprehensive"


def test_field_analysis_applies_values(client: TestClient):
    response = client.post(
        "/v1/analysis/fields",
        json={"mode": "comprehensive", "fields": {"creditScore": 640, "billPaymentReliability": "always-on-time"}},
    )

    assert response.status_code == 200
    data = response.json()
    ids = [rec["id"] for rec in data["prioritizedRecommendations"]]
    assert "credit-score" in ids
    bill_payment = data["healthIndicators"][1]
    assert bill_payment["score"] == 100


def test_field_analysis_unknown_field(client: TestClient):
    response = client.post("/v1/analysis/fields", json={"fields": {"bogusField": 1}})

    assert response.status_code == 422
    assert response.json()["detail"] == "Unknown form field(s): bogusField"


def test_field_analysis_credit_score_out_of_range(client: TestClient):
    response = client.post("/v1/analysis/fields", json={"fields": {"creditScore": 900}})

    assert response.status_code == 422
    assert response.json()["detail"].startswith("Invalid field value(s):")
    assert "creditScore" in response.json()["detail"]


def test_field_analysis_applies_range_checks(client: TestClient):
    """Field values get the same range checks as a full record"""
    response = client.post(
        "/v1/analysis/fields",
        json={"fields": {"age": 150, "checking": -100000, "dependents": -3}},
    )

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail.startswith("Invalid field value(s):")
    for key in ("age", "checking", "dependents"):
        assert key in detail


def test_field_analysis_rejects_wrong_types(client: TestClient):
    response = client.post(
        "/v1/analysis/fields",
        json={"fields": {"primarySalary": "plenty", "insuranceConfidence": "unsure"}},
    )

    assert response.status_code == 422


def test_field_analysis_zero_salary(client: TestClient):
    """In-range values still reach domain validation"""
    response = client.post("/v1/analysis/fields", json={"fields": {"primarySalary": 0}})

    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid data: Primary salary cannot be zero or negative"
