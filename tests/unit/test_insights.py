"""Unit tests for the supporting analysis sections"""

from dataclasses import replace

import pytest
from finhealth.domain.insights import (
    DEFAULT_PROJECTION_SCENARIOS,
    analyze_debt,
    analyze_goals,
    analyze_insurance,
    analyze_investments,
    analyze_liquidity,
    analyze_scenarios,
    assess_financial_risk,
    calculate_financial_ratios,
    generate_detailed_insights,
    project_wealth,
    time_to_emergency_goal,
)
from finhealth.domain.metrics import compute_key_metrics


@pytest.fixture
def baseline_metrics(baseline_data):
    return compute_key_metrics(baseline_data)


def test_liquidity_section(baseline_data, baseline_metrics):
    liquid_assets, liquidity_ratio = analyze_liquidity(baseline_data, baseline_metrics)

    assert liquid_assets.value == "$10,000"
    assert liquid_assets.status == "poor"
    assert liquidity_ratio.value == "2.3 months"


def test_debt_section(baseline_data, baseline_metrics):
    total_debt, dti, utilization = analyze_debt(baseline_data, baseline_metrics)

    assert total_debt.value == "$25,000"
    assert dti.status == "poor"
    assert utilization.value == "20.0%"
    assert utilization.status == "good"


def test_investment_section(baseline_data, baseline_metrics):
    total, rate, allocation = analyze_investments(baseline_data, baseline_metrics)

    assert total.numeric_value == 25000
    # 300 / 5000
    assert rate.value == "6.0%"
    assert rate.status == "poor"
    assert allocation.value == "97/100"
    assert allocation.benchmark == "Target stock allocation for age 30: ~80%"


def test_insurance_section_without_dependents(baseline_data):
    score, essential, income_protection = analyze_insurance(baseline_data)

    # health 40 + life 30 (no dependents) + no disability
    assert score.value == "70/100"
    assert score.status == "good"
    assert essential.status == "excellent"
    assert income_protection.status == "poor"


def test_insurance_section_with_uninsured_dependents(baseline_data):
    data = replace(baseline_data, personal_info=replace(baseline_data.personal_info, dependents=2))
    score = analyze_insurance(data)[0]

    assert score.numeric_value == 40


def test_financial_ratios(baseline_data, baseline_metrics):
    ratios = calculate_financial_ratios(baseline_data, baseline_metrics)

    assert ratios.liquidity_ratios.current_ratio == pytest.approx(0.28)
    assert ratios.liquidity_ratios.quick_ratio == pytest.approx(0.08)
    assert ratios.leverage_ratios.debt_to_asset_ratio == pytest.approx(71.43, abs=0.01)
    assert ratios.leverage_ratios.equity_ratio == pytest.approx(28.57, abs=0.01)
    assert ratios.efficiency_ratios.expense_ratio == pytest.approx(86.0)
    assert ratios.efficiency_ratios.investment_rate == pytest.approx(6.0)


def test_risk_assessment(baseline_data, baseline_metrics):
    risk = assess_financial_risk(baseline_data, baseline_metrics)

    assert [factor.category for factor in risk.risk_factors] == ["Income Concentration", "Liquidity Risk"]
    assert risk.overall_risk_level == "High"
    # 100 - 20 (under 3 months) - 15 (DTI over 36)
    assert risk.risk_score == 65


def test_goal_analysis(baseline_data, baseline_metrics):
    goals = analyze_goals(baseline_data, baseline_metrics)

    assert goals.retirement_readiness.years_to_retirement == 35
    assert goals.retirement_readiness.current_savings == 25000
    assert goals.retirement_readiness.on_track is True
    assert goals.emergency_goal.target == 25800
    assert goals.emergency_goal.current == 8000
    # 17800 / 700 = 25.4
    assert goals.emergency_goal.time_to_goal == "26 months at current savings rate"


def test_time_to_emergency_goal():
    assert time_to_emergency_goal(1000, 1500, 100) == "Goal achieved"
    assert time_to_emergency_goal(1000, 0, 0) == "Cannot achieve with current cash flow"


def test_wealth_projection_scenarios(baseline_data):
    projections = project_wealth(baseline_data)

    assert [p.scenario for p in projections] == ["Conservative (6%)", "Moderate (8%)", "Aggressive (10%)"]
    assert all(p.timeframe == "35 years" for p in projections)
    values = [p.projected_value for p in projections]
    assert values == sorted(values)
    assert projections[0].assumptions == "6% annual return, $300 monthly"


def test_wealth_projection_at_zero_return(baseline_data):
    flat = project_wealth(baseline_data, scenarios=(("Flat", 0.0),))[0]

    # 25000 + 300 * 420 months
    assert flat.projected_value == pytest.approx(151000)


def test_wealth_projection_past_retirement_age(baseline_data):
    data = replace(baseline_data, personal_info=replace(baseline_data.personal_info, age=70))
    projection = project_wealth(data)[1]

    assert projection.timeframe == "0 years"
    assert projection.projected_value == pytest.approx(25000)


def test_default_projection_scenarios_shared_with_engine():
    """The engine and project_wealth read one scenario table"""
    from finhealth.domain import scoring

    assert scoring.DEFAULT_PROJECTION_SCENARIOS is DEFAULT_PROJECTION_SCENARIOS
    assert [name for name, _ in DEFAULT_PROJECTION_SCENARIOS] == ["Conservative", "Moderate", "Aggressive"]


def test_stress_scenarios(baseline_data, baseline_metrics):
    job_loss, downturn, medical = analyze_scenarios(baseline_data, baseline_metrics)

    # (emergency fund 3000 + savings 5000) / 4300 monthly expenses
    assert job_loss.scenario == "Job Loss"
    assert job_loss.time_to_recover == "1.9 months"
    assert job_loss.impact == "High"
    assert downturn.scenario == "Market Downturn (-30%)"
    assert downturn.probability == "High (occurs every 5-10 years)"
    assert medical.time_to_recover == "Depends on insurance coverage"
    assert len(medical.recommendations) == 3


def test_job_loss_without_reserves(baseline_data):
    data = replace(baseline_data, assets=replace(baseline_data.assets, savings=0, emergency_fund=0))
    job_loss = analyze_scenarios(data, compute_key_metrics(data))[0]

    assert job_loss.time_to_recover == "0 months"


def test_detailed_insights(baseline_data, baseline_metrics):
    insights = generate_detailed_insights(baseline_data, baseline_metrics)

    cash_flow = insights.cash_flow_analysis
    assert cash_flow.surplus == 700
    assert cash_flow.surplus_percentage == pytest.approx(14.0)
    assert cash_flow.insight == "Positive cash flow provides opportunities for wealth building"

    net_worth = insights.net_worth_analysis
    assert net_worth.current_net_worth == 10000
    assert net_worth.net_worth_per_age == pytest.approx(10000 / 30)
    assert net_worth.projected_growth == 8400
    assert net_worth.insight == "Positive net worth indicates good financial foundation"

    # Contribution 300 is below 10% of the 5000 salary
    assert insights.risk_factors == (
        "Insufficient emergency fund",
        "High debt-to-income ratio",
        "Low retirement savings rate",
    )
    assert insights.opportunities == ("Increase investment contributions",)


def test_detailed_insights_negative_cash_flow(baseline_data):
    data = replace(baseline_data, income=replace(baseline_data.income, primary_salary=3000))
    insights = generate_detailed_insights(data, compute_key_metrics(data))

    # 3000 income against 4300 expenses
    assert insights.cash_flow_analysis.surplus == -1300
    assert insights.cash_flow_analysis.surplus_percentage == pytest.approx(-1300 / 3000 * 100)
    assert insights.cash_flow_analysis.insight.startswith("Negative cash flow")
    assert insights.opportunities == ()
    assert "Low retirement savings rate" not in insights.risk_factors


def test_detailed_insights_cash_opportunities(baseline_data):
    data = replace(
        baseline_data,
        assets=replace(baseline_data.assets, checking=4000),
        liabilities=replace(baseline_data.liabilities, credit_card_debt=500),
        personal_info=replace(baseline_data.personal_info, age=0),
    )
    insights = generate_detailed_insights(data, compute_key_metrics(data))

    assert insights.opportunities == (
        "Increase investment contributions",
        "Consider rewards credit cards",
        "Move excess cash to high-yield savings",
    )
    assert insights.net_worth_analysis.net_worth_per_age == 0
