"""Unit tests for record assembly from form input"""

from dataclasses import fields

import pytest
from finhealth.domain.exceptions import UnknownFieldError
from finhealth.domain.forms import (
    FIELD_MAP,
    SECTION_TYPES,
    QuickInputs,
    apply_field_values,
    build_quick_record,
    default_financial_data,
)
from finhealth.domain.models import FinancialData


def _quick(**overrides) -> QuickInputs:
    values = dict(
        monthly_income=4000,
        monthly_housing=1500,
        monthly_expenses=1000,
        total_savings=2000,
        total_debt=5000,
        credit_score=640,
    )
    values.update(overrides)
    return QuickInputs(**values)


def test_field_map_covers_every_attribute():
    """Each section attribute is reachable from exactly one UI key"""
    targets = list(FIELD_MAP.values())
    expected = {(section, f.name) for section, section_type in SECTION_TYPES.items() for f in fields(section_type)}

    assert len(targets) == len(set(targets))
    assert set(targets) == expected


def test_apply_field_values_returns_new_record():
    baseline = default_financial_data()
    updated = apply_field_values(
        baseline,
        {"primarySalary": 6000, "creditScore": 780, "employer401k": 30000, "healthInsurance": False},
    )

    assert updated.income.primary_salary == 6000
    assert updated.liabilities.credit_score == 780
    assert updated.assets.employer_401k == 30000
    assert updated.insurance.health_insurance is False
    # Untouched sections and the source record are unchanged
    assert updated.expenses == baseline.expenses
    assert baseline.income.primary_salary == 5000


def test_apply_field_values_rejects_unknown_keys():
    with pytest.raises(UnknownFieldError, match="Unknown form field\\(s\\): bogusField, otherBogus"):
        apply_field_values(FinancialData(), {"otherBogus": 1, "primarySalary": 10, "bogusField": 2})


def test_apply_no_values_is_identity():
    baseline = default_financial_data()
    assert apply_field_values(baseline, {}) == baseline


def test_personal_and_policy_insurance_flags_are_distinct():
    updated = apply_field_values(FinancialData(), {"personalLifeInsurance": True})

    assert updated.personal_info.life_insurance is True
    assert updated.insurance.life_insurance is False


def test_build_quick_record_places_inputs():
    data = build_quick_record(_quick())

    assert data.income.primary_salary == 4000
    assert data.expenses.housing == 1500
    assert data.expenses.food == 1000
    assert data.assets.checking == 2000
    assert data.liabilities.credit_card_debt == 5000
    assert data.liabilities.credit_score == 640
    assert data.liabilities.total_credit_limit == 0


def test_build_quick_record_defaults():
    data = build_quick_record(_quick())

    assert data.personal_info.age == 35
    assert data.goals.retirement_age == 65
    assert data.insurance.health_insurance is True
    assert data.insurance.life_insurance is False
    assert data.goals.debt_payoff_goal is True
    assert data.behaviors.automatic_savings is False
    # 2000 < 3 * (1500 + 1000)
    assert data.behaviors.emergency_fund_priority == "high"


@pytest.mark.parametrize(
    "credit_score,reliability",
    [(800, "always-on-time"), (751, "always-on-time"), (750, "usually-on-time"), (651, "usually-on-time"), (650, "sometimes-late")],
)
def test_quick_bill_reliability_from_credit_score(credit_score, reliability):
    data = build_quick_record(_quick(credit_score=credit_score))
    assert data.behaviors.bill_payment_reliability == reliability


def test_quick_record_with_healthy_savings():
    data = build_quick_record(_quick(total_savings=20000, total_debt=0))

    assert data.behaviors.automatic_savings is True
    assert data.behaviors.emergency_fund_priority == "medium"
    assert data.goals.debt_payoff_goal is False
