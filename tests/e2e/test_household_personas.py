"""
E2E tests for household personas through the full HTTP stack.

Household personas:
- thriving: High income, no debt, full coverage, excellent habits
- baseline: Typical renter with student and auto loans
- overextended: Family spending beyond its income with no insurance
- quick_starter: Quick-form user with thin savings and card debt
"""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.integration
def test_thriving_household(client: TestClient):
    """
    thriving: Every indicator at its best
    Expected: Perfect score, only the diversification check-in remains
    """
    response = client.post(
        "/v1/analysis",
        json={
            "personalInfo": {"age": 35},
            "income": {"primarySalary": 10000},
            "expenses": {"housing": 2000, "food": 500, "transportation": 300, "utilities": 200},
            "assets": {"savings": 30000, "employer401k": 100000},
            "liabilities": {"creditScore": 810, "totalCreditLimit": 20000},
            "insurance": {
                "healthInsurance": True,
                "lifeInsurance": True,
                "longTermDisability": True,
                "insuranceConfidence": "very-confident",
            },
            "goals": {"retirementConfidence": "very-confident"},
            "behaviors": {
                "billPaymentReliability": "always-on-time",
                "budgetingMethod": "detailed-budget",
                "financialPlanningEngagement": "actively-plan",
                "monthlyInvestmentContribution": 1500,
            },
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["overallHealthScore"] == 100, "thriving should score 100"
    assert data["healthLevel"] == "excellent"
    assert all(indicator["status"] == "excellent" for indicator in data["healthIndicators"])
    assert [rec["id"] for rec in data["prioritizedRecommendations"]] == ["investment-diversification"]


@pytest.mark.integration
def test_baseline_household(client: TestClient, baseline_payload: dict):
    """
    baseline: Positive cash flow but debt at 5x monthly income
    Expected: Fair health, debt reduction first
    """
    response = client.post("/v1/analysis", json=baseline_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["healthLevel"] == "fair"
    recommendations = data["prioritizedRecommendations"]
    assert recommendations[0]["id"] == "debt-to-income"
    assert recommendations[0]["priority"] == "high"
    assert data["riskAssessment"]["overallRiskLevel"] == "High"
    assert data["goalAnalysis"]["retirementReadiness"]["onTrack"] is True


@pytest.mark.integration
def test_overextended_household(client: TestClient):
    """
    overextended: Negative cash flow, high utilization, no insurance, two dependents
    Expected: Critical health, recommendation list capped at 10 with all high priorities first
    """
    response = client.post(
        "/v1/analysis",
        json={
            "personalInfo": {"age": 40, "dependents": 2},
            "income": {"primarySalary": 4000},
            "expenses": {
                "housing": 2000,
                "food": 900,
                "transportation": 500,
                "utilities": 300,
                "childcare": 800,
                "creditCardPayments": 400,
            },
            "assets": {"checking": 300, "employer401k": 5000},
            "liabilities": {
                "creditCardDebt": 9000,
                "autoLoans": 15000,
                "creditScore": 600,
                "totalCreditLimit": 10000,
            },
            "insurance": {"insuranceConfidence": "not-confident"},
            "goals": {"retirementConfidence": "not-confident"},
            "behaviors": {
                "billPaymentReliability": "often-late",
                "budgetingMethod": "no-budget",
                "financialPlanningEngagement": "never-plan",
            },
        },
    )

    assert response.status_code == 200
    data = response.json()
    # (25*15 + 30*20 + 40*10 + 20*10 + 50*10) / 105 = 19.8
    assert data["overallHealthScore"] == 20
    assert data["healthLevel"] == "critical"

    recommendations = data["prioritizedRecommendations"]
    assert len(recommendations) == 10
    assert [rec["priority"] for rec in recommendations] == ["high"] * 8 + ["medium"] * 2
    assert {"insurance-health", "insurance-life", "negative-cash-flow"} <= {rec["id"] for rec in recommendations}
    assert data["keyMetrics"]["monthlyCashFlow"] == -900


@pytest.mark.integration
def test_quick_starter_household(client: TestClient):
    """
    quick_starter: Six quick-form figures only
    Expected: Limited health, quick-only liquidity and housing checks present
    """
    response = client.post(
        "/v1/analysis/quick",
        json={
            "monthlyIncome": 4000,
            "monthlyHousing": 1500,
            "monthlyExpenses": 1000,
            "totalSavings": 2000,
            "totalDebt": 5000,
            "creditScore": 640,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["healthLevel"] == "limited"
    ids = [rec["id"] for rec in data["prioritizedRecommendations"]]
    assert "housing-cost-ratio" in ids
    assert "liquidity-cushion-critical" in ids
    assert "insurance-health" not in ids
    assert len(ids) == len(set(ids))
