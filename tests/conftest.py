"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from finhealth.api.main import create_app
from finhealth.domain.forms import default_financial_data
from finhealth.domain.models import FinancialData


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def baseline_data() -> FinancialData:
    """Baseline household: $5,000 income, $4,300 expenses, $25,000 debt"""
    return default_financial_data()


@pytest.fixture
def baseline_payload() -> dict:
    """The baseline household as a camelCase request body"""
    return {
        "personalInfo": {
            "age": 30,
            "maritalStatus": "single",
            "dependents": 0,
            "employmentStatus": "employed",
            "employmentTenure": 3,
            "healthInsurance": True,
        },
        "income": {
            "primarySalary": 5000,
            "incomeGrowthRate": 0.03,
            "effectiveTaxRate": 0.22,
        },
        "expenses": {
            "housing": 1500,
            "utilities": 200,
            "insurance": 150,
            "loanPayments": 400,
            "food": 400,
            "transportation": 300,
            "healthcare": 150,
            "clothing": 100,
            "personalCare": 50,
            "entertainment": 100,
            "diningOut": 150,
            "hobbies": 50,
            "subscriptions": 50,
            "shopping": 100,
            "travel": 200,
            "creditCardPayments": 100,
            "studentLoanPayments": 200,
            "otherDebtPayments": 100,
        },
        "assets": {
            "checking": 2000,
            "savings": 5000,
            "emergencyFund": 3000,
            "employer401k": 25000,
        },
        "liabilities": {
            "autoLoans": 8000,
            "creditCardDebt": 2000,
            "studentLoans": 15000,
            "creditScore": 720,
            "totalCreditLimit": 10000,
        },
        "insurance": {"healthInsurance": True, "insuranceConfidence": "somewhat-confident"},
        "goals": {"retirementAge": 65, "retirementIncomeNeeded": 4000},
        "behaviors": {"monthlyInvestmentContribution": 300},
    }
