"""Supporting analysis sections: liquidity, debt, investments, insurance, ratios, risk, goals, projections, scenarios"""

import math
from typing import List, Tuple

from finhealth.domain.metrics import INVESTMENT_FIELDS, RETIREMENT_FIELDS, sum_fields
from finhealth.domain.models import (
    CashFlowAnalysis,
    DetailedInsights,
    EfficiencyRatios,
    EmergencyGoal,
    FinancialData,
    FinancialMetric,
    FinancialRatios,
    GoalAnalysis,
    KeyMetrics,
    LeverageRatios,
    LiquidityRatios,
    NetWorthAnalysis,
    RetirementReadiness,
    RiskAssessment,
    RiskFactor,
    ScenarioAnalysis,
    WealthProjection,
)
from finhealth.utils.format_utils import format_currency, format_percent, safe_divide, to_number

# (name, annual return) pairs used for wealth projections
DEFAULT_PROJECTION_SCENARIOS: Tuple[Tuple[str, float], ...] = (
    ("Conservative", 0.06),
    ("Moderate", 0.08),
    ("Aggressive", 0.10),
)


def analyze_liquidity(data: FinancialData, metrics: KeyMetrics) -> Tuple[FinancialMetric, ...]:
    liquid = metrics.total_liquid_assets
    expenses = metrics.total_monthly_expenses
    months = metrics.emergency_fund_months

    if liquid >= expenses * 6:
        liquid_status = "excellent"
    elif liquid >= expenses * 3:
        liquid_status = "good"
    else:
        liquid_status = "poor"

    return (
        FinancialMetric(
            title="Liquid Assets",
            value=format_currency(liquid),
            numeric_value=liquid,
            description="Cash and cash equivalents available immediately",
            status=liquid_status,
            benchmark="Target: 6+ months of expenses",
        ),
        FinancialMetric(
            title="Liquidity Ratio",
            value=f"{months:.1f} months",
            numeric_value=months,
            description="Months of expenses covered by liquid assets",
            status="excellent" if months >= 6 else "good" if months >= 3 else "poor",
            benchmark="Excellent: 6+ months, Good: 3-6 months",
        ),
    )


def analyze_debt(data: FinancialData, metrics: KeyMetrics) -> Tuple[FinancialMetric, ...]:
    dti = metrics.debt_to_income_ratio
    utilization = metrics.credit_utilization
    dti_status = "excellent" if dti <= 20 else "good" if dti <= 36 else "poor"

    return (
        FinancialMetric(
            title="Total Debt",
            value=format_currency(metrics.total_debt),
            numeric_value=metrics.total_debt,
            description="All outstanding debt obligations",
            status=dti_status,
            benchmark="Target: <20% of income",
        ),
        FinancialMetric(
            title="Debt-to-Income Ratio",
            value=format_percent(dti),
            numeric_value=dti,
            description="Total debt as percentage of monthly income",
            status=dti_status,
            benchmark="Excellent: <20%, Good: 20-36%, Poor: >36%",
        ),
        FinancialMetric(
            title="Credit Utilization",
            value=format_percent(utilization),
            numeric_value=utilization,
            description="Credit card balances vs available credit",
            status="excellent" if utilization <= 10 else "good" if utilization <= 30 else "poor",
            benchmark="Excellent: <10%, Good: 10-30%, Poor: >30%",
        ),
    )


def analyze_investments(data: FinancialData, metrics: KeyMetrics) -> Tuple[FinancialMetric, ...]:
    total_investments = sum_fields(data.assets, INVESTMENT_FIELDS)
    contribution = to_number(data.behaviors.monthly_investment_contribution)
    investment_rate = safe_divide(contribution, metrics.total_monthly_income) * 100
    rate_status = "excellent" if investment_rate >= 15 else "good" if investment_rate >= 10 else "poor"
    allocation = metrics.asset_allocation_score
    age = int(to_number(data.personal_info.age))

    return (
        FinancialMetric(
            title="Total Investments",
            value=format_currency(total_investments),
            numeric_value=total_investments,
            description="All investment accounts and securities",
            status=rate_status,
            benchmark="Target: 15%+ of income invested monthly",
        ),
        FinancialMetric(
            title="Investment Rate",
            value=format_percent(investment_rate),
            numeric_value=investment_rate,
            description="Monthly investment as percentage of income",
            status=rate_status,
            benchmark="Excellent: 15%+, Good: 10-15%, Poor: <10%",
        ),
        FinancialMetric(
            title="Asset Allocation Score",
            value=f"{allocation:.0f}/100",
            numeric_value=allocation,
            description="How well diversified your investments are",
            status="excellent" if allocation >= 80 else "good" if allocation >= 60 else "poor",
            benchmark=f"Target stock allocation for age {age}: ~{110 - age}%",
        ),
    )


def analyze_insurance(data: FinancialData) -> Tuple[FinancialMetric, ...]:
    personal = data.personal_info
    has_health = bool(personal.health_insurance)
    has_disability = bool(personal.short_term_disability or personal.long_term_disability)
    dependents = to_number(personal.dependents)

    # Life cover only counts against households with dependents
    life_points = 30 if dependents == 0 or personal.life_insurance else 0
    coverage_score = (40 if has_health else 0) + life_points + (30 if has_disability else 0)

    return (
        FinancialMetric(
            title="Insurance Coverage Score",
            value=f"{coverage_score}/100",
            numeric_value=float(coverage_score),
            description="Overall adequacy of insurance protection",
            status="excellent" if coverage_score >= 90 else "good" if coverage_score >= 70 else "poor",
            benchmark="Target: 90+ (Health + Life + Disability)",
        ),
        FinancialMetric(
            title="Essential Coverage",
            value="Health covered" if has_health else "Health not covered",
            description="Health insurance status",
            status="excellent" if has_health else "critical",
            benchmark="Required: Health insurance is essential",
        ),
        FinancialMetric(
            title="Income Protection",
            value="Disability covered" if has_disability else "Disability not covered",
            description="Disability insurance status",
            status="good" if has_disability else "poor",
            benchmark="Recommended: Protect 60-70% of income",
        ),
    )


def calculate_financial_ratios(data: FinancialData, metrics: KeyMetrics) -> FinancialRatios:
    assets = data.assets
    liabilities_total = metrics.total_liabilities
    assets_total = metrics.total_assets
    income = metrics.total_monthly_income

    return FinancialRatios(
        liquidity_ratios=LiquidityRatios(
            current_ratio=safe_divide(to_number(assets.checking) + to_number(assets.savings), liabilities_total),
            quick_ratio=safe_divide(to_number(assets.checking), liabilities_total),
            emergency_fund_ratio=metrics.emergency_fund_months,
        ),
        leverage_ratios=LeverageRatios(
            debt_to_asset_ratio=safe_divide(liabilities_total, assets_total) * 100,
            debt_to_income_ratio=metrics.debt_to_income_ratio,
            equity_ratio=safe_divide(assets_total - liabilities_total, assets_total) * 100,
        ),
        efficiency_ratios=EfficiencyRatios(
            savings_rate=metrics.savings_rate,
            expense_ratio=safe_divide(metrics.total_monthly_expenses, income) * 100,
            investment_rate=safe_divide(to_number(data.behaviors.monthly_investment_contribution), income) * 100,
        ),
    )


def calculate_risk_score(data: FinancialData, metrics: KeyMetrics) -> int:
    score = 100
    if metrics.emergency_fund_months < 3:
        score -= 20
    if metrics.debt_to_income_ratio > 36:
        score -= 15
    if metrics.credit_utilization > 30:
        score -= 10
    if to_number(data.behaviors.monthly_investment_contribution) == 0:
        score -= 15
    return max(0, score)


def assess_financial_risk(data: FinancialData, metrics: KeyMetrics) -> RiskAssessment:
    risks: List[RiskFactor] = []

    if to_number(data.income.secondary_income) == 0 and to_number(data.income.business_income) == 0:
        risks.append(
            RiskFactor(
                category="Income Concentration",
                level="High",
                description="Dependent on single income source",
                mitigation="Develop multiple income streams or enhance job security",
            )
        )
    if metrics.emergency_fund_months < 3:
        risks.append(
            RiskFactor(
                category="Liquidity Risk",
                level="High",
                description="Insufficient emergency funds",
                mitigation="Build emergency fund to 6 months of expenses",
            )
        )
    if metrics.credit_utilization > 30:
        risks.append(
            RiskFactor(
                category="Credit Risk",
                level="Medium",
                description="High credit utilization",
                mitigation="Pay down credit card balances or increase credit limits",
            )
        )

    high_risks = sum(1 for risk in risks if risk.level == "High")
    if high_risks >= 2:
        overall = "High"
    elif high_risks == 1:
        overall = "Medium"
    else:
        overall = "Low"

    return RiskAssessment(
        overall_risk_level=overall,
        risk_factors=tuple(risks),
        risk_score=calculate_risk_score(data, metrics),
    )


def project_retirement_savings(data: FinancialData, annual_return: float = 0.07) -> float:
    """Retirement balances grown annually plus yearly contributions as an annuity"""
    years = max(0, int(to_number(data.goals.retirement_age) - to_number(data.personal_info.age)))
    current = sum_fields(data.assets, RETIREMENT_FIELDS)
    annual_contribution = to_number(data.behaviors.monthly_investment_contribution) * 12

    growth = math.pow(1 + annual_return, years)
    if annual_return == 0:
        return current + annual_contribution * years
    return current * growth + annual_contribution * (growth - 1) / annual_return


def time_to_emergency_goal(target: float, current: float, monthly_cash_flow: float) -> str:
    needed = target - current
    if needed <= 0:
        return "Goal achieved"
    if monthly_cash_flow <= 0:
        return "Cannot achieve with current cash flow"
    months = math.ceil(needed / monthly_cash_flow)
    return f"{months} months at current savings rate"


def analyze_goals(data: FinancialData, metrics: KeyMetrics, annual_return: float = 0.07) -> GoalAnalysis:
    years = int(to_number(data.goals.retirement_age) - to_number(data.personal_info.age))
    projected = project_retirement_savings(data, annual_return)
    # 4% withdrawal rule
    target_value = to_number(data.goals.retirement_income_needed) * 25

    emergency_target = metrics.total_monthly_expenses * 6
    emergency_current = to_number(data.assets.emergency_fund) + to_number(data.assets.savings)

    return GoalAnalysis(
        retirement_readiness=RetirementReadiness(
            years_to_retirement=years,
            current_savings=sum_fields(data.assets, RETIREMENT_FIELDS),
            monthly_contribution=to_number(data.behaviors.monthly_investment_contribution),
            projected_value=projected,
            on_track=projected >= target_value,
        ),
        emergency_goal=EmergencyGoal(
            target=emergency_target,
            current=emergency_current,
            progress=metrics.emergency_fund_months / 6 * 100,
            time_to_goal=time_to_emergency_goal(emergency_target, emergency_current, metrics.monthly_cash_flow),
        ),
    )


def project_wealth(
    data: FinancialData,
    scenarios: Tuple[Tuple[str, float], ...] = DEFAULT_PROJECTION_SCENARIOS,
) -> Tuple[WealthProjection, ...]:
    """
    Project invested balances to retirement under fixed annual return scenarios.

    Current balances compound annually; the monthly contribution is treated as
    an ordinary annuity at rate / 12.
    """
    years = max(0, int(to_number(data.goals.retirement_age) - to_number(data.personal_info.age)))
    monthly_contribution = to_number(data.behaviors.monthly_investment_contribution)
    current = sum_fields(data.assets, ("employer_401k", "traditional_ira", "roth_ira", "brokerage_accounts"))
    months = years * 12

    projections = []
    for name, rate in scenarios:
        monthly_rate = rate / 12
        future_current = current * math.pow(1 + rate, years)
        if monthly_rate == 0:
            future_contributions = monthly_contribution * months
        else:
            future_contributions = monthly_contribution * (math.pow(1 + monthly_rate, months) - 1) / monthly_rate

        contribution_text = format_currency(monthly_contribution) if monthly_contribution > 0 else "$0"
        projections.append(
            WealthProjection(
                scenario=f"{name} ({rate * 100:.0f}%)",
                timeframe=f"{years} years",
                projected_value=future_current + future_contributions,
                monthly_contribution=monthly_contribution,
                assumptions=f"{rate * 100:.0f}% annual return, {contribution_text} monthly",
            )
        )
    return tuple(projections)


def analyze_scenarios(data: FinancialData, metrics: KeyMetrics) -> Tuple[ScenarioAnalysis, ...]:
    """Stress scenarios: job loss, a market downturn and a medical emergency"""
    fund = to_number(data.assets.emergency_fund) + to_number(data.assets.savings)
    if fund > 0:
        runway = f"{safe_divide(fund, metrics.total_monthly_expenses):.1f} months"
    else:
        runway = "0 months"

    return (
        ScenarioAnalysis(
            scenario="Job Loss",
            probability="Medium",
            impact="High",
            description="Complete loss of primary income",
            time_to_recover=runway,
            recommendations=(
                "Build emergency fund to 6 months of expenses",
                "Consider disability insurance",
                "Diversify income sources",
            ),
        ),
        ScenarioAnalysis(
            scenario="Market Downturn (-30%)",
            probability="High (occurs every 5-10 years)",
            impact="Medium",
            description="30% decline in investment portfolio",
            time_to_recover="2-3 years historically",
            recommendations=(
                "Maintain diversified portfolio",
                "Continue regular investing (dollar-cost averaging)",
                "Avoid panic selling",
            ),
        ),
        ScenarioAnalysis(
            scenario="Major Medical Emergency",
            probability="Medium",
            impact="High",
            description="Unexpected medical expenses",
            time_to_recover="Depends on insurance coverage",
            recommendations=(
                "Ensure adequate health insurance",
                "Build separate medical emergency fund",
                "Consider HSA contributions",
            ),
        ),
    )


def generate_detailed_insights(data: FinancialData, metrics: KeyMetrics) -> DetailedInsights:
    income = metrics.total_monthly_income
    cash_flow = metrics.monthly_cash_flow
    net_worth = metrics.net_worth
    age = to_number(data.personal_info.age)

    risk_factors: List[str] = []
    if metrics.emergency_fund_months < 3:
        risk_factors.append("Insufficient emergency fund")
    if metrics.debt_to_income_ratio > 36:
        risk_factors.append("High debt-to-income ratio")
    if metrics.credit_utilization > 30:
        risk_factors.append("High credit utilization")
    if to_number(data.behaviors.monthly_investment_contribution) < to_number(data.income.primary_salary) * 0.1:
        risk_factors.append("Low retirement savings rate")

    opportunities: List[str] = []
    if cash_flow > 500:
        opportunities.append("Increase investment contributions")
    if metrics.credit_utilization < 10:
        opportunities.append("Consider rewards credit cards")
    if to_number(data.assets.checking) > to_number(data.expenses.housing) * 2:
        opportunities.append("Move excess cash to high-yield savings")

    if cash_flow > 0:
        cash_flow_insight = "Positive cash flow provides opportunities for wealth building"
    else:
        cash_flow_insight = "Negative cash flow requires immediate attention to avoid debt accumulation"

    if net_worth > 0:
        net_worth_insight = "Positive net worth indicates good financial foundation"
    else:
        net_worth_insight = "Negative net worth requires debt reduction focus"

    return DetailedInsights(
        cash_flow_analysis=CashFlowAnalysis(
            monthly_income=income,
            monthly_expenses=metrics.total_monthly_expenses,
            surplus=cash_flow,
            surplus_percentage=safe_divide(cash_flow, income) * 100,
            insight=cash_flow_insight,
        ),
        net_worth_analysis=NetWorthAnalysis(
            current_net_worth=net_worth,
            net_worth_per_age=safe_divide(net_worth, age),
            projected_growth=cash_flow * 12,
            insight=net_worth_insight,
        ),
        risk_factors=tuple(risk_factors),
        opportunities=tuple(opportunities),
    )
