"""
Health indicator evaluators.

Eight independent evaluators, each (data, metrics) -> HealthIndicator. The
order of HEALTH_INDICATOR_EVALUATORS is the order indicators appear in the
result and the order fallback recommendations are generated in.
"""

from typing import Callable, List, Tuple

from finhealth.domain.metrics import RETIREMENT_FIELDS, sum_fields
from finhealth.domain.models import (
    FinancialData,
    FinancialMetric,
    HealthIndicator,
    HealthStatus,
    Insurance,
    KeyMetrics,
)
from finhealth.utils.format_utils import format_currency, format_percent, round_half_up, title_case, to_number

INDICATOR_WEIGHTS = {
    "spending-vs-income": 15,
    "bill-payment": 15,
    "emergency-fund": 20,
    "debt-to-income": 15,
    "credit-health": 10,
    "insurance": 10,
    "long-term-goals": 10,
    "planning": 10,
}

RELIABILITY_LABELS = {
    "always-on-time": "Always On Time",
    "usually-on-time": "Usually On Time",
    "sometimes-late": "Sometimes Late",
    "often-late": "Often Late",
}

BUDGET_SCORES = {"detailed-budget": 100, "simple-tracking": 75, "mental-budget": 40, "no-budget": 0}
PLANNING_SCORES = {"actively-plan": 100, "occasionally-plan": 70, "rarely-plan": 30, "never-plan": 0}


def credit_score_status(score: float) -> HealthStatus:
    if score >= 800:
        return "excellent"
    if score >= 740:
        return "good"
    if score >= 670:
        return "fair"
    if score >= 580:
        return "poor"
    return "critical"


def credit_utilization_status(utilization: float) -> HealthStatus:
    if utilization <= 10:
        return "excellent"
    if utilization <= 30:
        return "good"
    if utilization <= 50:
        return "fair"
    if utilization <= 80:
        return "poor"
    return "critical"


# --- 1. Spending vs Income ----------------------------------------------------


def spending_recommendations(cash_flow_ratio: float) -> List[str]:
    if cash_flow_ratio < 5:
        return [
            "Immediate action needed: Create a strict budget to reduce expenses",
            "Consider increasing income through side work or skills development",
            "Review all subscriptions and discretionary spending",
        ]
    if cash_flow_ratio < 10:
        return [
            "Look for areas to cut unnecessary expenses",
            "Consider ways to increase your income",
            "Build an emergency fund as a priority",
        ]
    return ["Great job maintaining positive cash flow!"]


def analyze_spending_vs_income(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    income = metrics.total_monthly_income
    cash_flow_ratio = metrics.monthly_cash_flow / income * 100 if income > 0 else 0.0

    if cash_flow_ratio >= 20:
        score, status = 100, "excellent"
    elif cash_flow_ratio >= 10:
        score, status = 80, "good"
    elif cash_flow_ratio >= 5:
        score, status = 60, "fair"
    elif cash_flow_ratio > 0:
        score, status = 40, "poor"
    else:
        score, status = 0, "critical"

    return HealthIndicator(
        name="Spending vs Income",
        key="spending-vs-income",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["spending-vs-income"],
        metrics=(
            FinancialMetric(
                title="Monthly Cash Flow",
                value=format_currency(metrics.monthly_cash_flow),
                numeric_value=metrics.monthly_cash_flow,
                description="Amount left after all expenses",
                status=status,
                benchmark="Target: 20% of income",
                improvement="Consider reducing expenses or increasing income" if cash_flow_ratio < 20 else None,
            ),
            FinancialMetric(
                title="Cash Flow Ratio",
                value=format_percent(cash_flow_ratio),
                numeric_value=cash_flow_ratio,
                description="Percentage of income available after expenses",
                status=status,
                benchmark="Excellent: 20%+, Good: 10-19%",
            ),
        ),
        recommendations=tuple(spending_recommendations(cash_flow_ratio)),
        explanation=(
            f"This indicator measures if you spend less than you earn. Your cash flow ratio is "
            f"{cash_flow_ratio:.1f}%, resulting in a score of {score}/100. "
            f"A healthy ratio is typically above 10-20%."
        ),
    )


# --- 2. Bill Payment Reliability ----------------------------------------------


def analyze_bill_payment_reliability(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    reliability = data.behaviors.bill_payment_reliability

    if reliability == "always-on-time":
        score, status = 100, "excellent"
    elif reliability == "usually-on-time":
        score, status = 75, "good"
    elif reliability == "sometimes-late":
        score, status = 50, "fair"
    elif reliability == "often-late":
        score, status = 25, "poor"
    else:
        score, status = 0, "critical"

    label = RELIABILITY_LABELS.get(reliability, str(reliability))
    credit_score = to_number(data.liabilities.credit_score)

    if reliability in ("often-late", "sometimes-late"):
        recommendations = (
            "Set up automatic bill payments to improve payment history",
            "Create a bill payment calendar with due dates",
            "Consider consolidating due dates to simplify management",
        )
    else:
        recommendations = ("Keep up the excellent payment history!",)

    return HealthIndicator(
        name="Bill Payment Reliability",
        key="bill-payment",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["bill-payment"],
        metrics=(
            FinancialMetric(
                title="Payment History",
                value=label,
                description="Consistency of bill payments",
                status=status,
                benchmark="Target: Always on time",
            ),
            FinancialMetric(
                title="Credit Score Impact",
                value=str(int(credit_score)),
                numeric_value=credit_score,
                description="Current credit score",
                status=credit_score_status(credit_score),
                benchmark="Excellent: 800+, Good: 740-799, Fair: 670-739",
            ),
        ),
        recommendations=recommendations,
        explanation=(
            f"This indicator reflects your consistency in paying bills on time. Your self-reported "
            f"reliability is '{label}', leading to a score of {score}/100. "
            f"On-time payments are crucial for a good credit score."
        ),
    )


# --- 3. Emergency Savings -----------------------------------------------------


def emergency_fund_shortfall(months: float, monthly_expenses: float) -> float:
    """Amount still needed to reach a three-month cushion"""
    return max(0.0, (3 - months) * monthly_expenses)


def emergency_fund_recommendations(months: float, monthly_expenses: float) -> List[str]:
    if months < 1:
        return [
            "Start building emergency fund immediately - even $500 helps",
            f"Save {format_currency(emergency_fund_shortfall(months, monthly_expenses))} more to reach a 3-month cushion",
            "Set up automatic transfers to savings account",
            "Cut discretionary spending to build emergency buffer",
        ]
    if months < 3:
        return [
            "Good start! Continue building to reach 3-month target",
            f"Save {format_currency(emergency_fund_shortfall(months, monthly_expenses))} more to reach a 3-month cushion",
            "Keep emergency funds in high-yield savings account",
        ]
    if months < 6:
        return [
            "Great progress! Work toward 6-month emergency fund",
            "Your emergency fund provides good financial security",
        ]
    return ["Excellent emergency fund! You have strong financial security."]


def analyze_emergency_savings(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    months = metrics.emergency_fund_months

    if months >= 6:
        score, status = 100, "excellent"
    elif months >= 3:
        score, status = 80, "good"
    elif months >= 1:
        score, status = 60, "fair"
    elif months > 0:
        score, status = 30, "poor"
    else:
        score, status = 0, "critical"

    return HealthIndicator(
        name="Emergency Savings",
        key="emergency-fund",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["emergency-fund"],
        metrics=(
            FinancialMetric(
                title="Emergency Fund Coverage",
                value=f"{months:.1f} months",
                numeric_value=months,
                description="How many months of expenses your liquid savings can cover",
                status=status,
                benchmark="Target: 3-6 months",
            ),
            FinancialMetric(
                title="Total Liquid Assets",
                value=format_currency(metrics.total_liquid_assets),
                numeric_value=metrics.total_liquid_assets,
                description="Cash and easily accessible funds",
                status=status,
            ),
        ),
        recommendations=tuple(emergency_fund_recommendations(months, metrics.total_monthly_expenses)),
        explanation=(
            f"This measures your financial cushion for unexpected events. You have {months:.1f} months "
            f"of expenses saved, giving you a score of {score}/100. The standard recommendation is 3-6 months."
        ),
    )


# --- 4. Debt Management -------------------------------------------------------


def debt_management_recommendations(ratio: float) -> List[str]:
    if ratio >= 0.43:
        return [
            "Urgent: Debt ratio is too high - consider debt consolidation",
            "Focus on paying off highest interest rate debts first",
            "Consider credit counseling services",
            "Avoid taking on any new debt",
        ]
    if ratio >= 0.36:
        return [
            "Work on reducing debt load - focus on high-interest debt",
            "Consider debt avalanche or snowball method",
            "Avoid new debt until ratios improve",
        ]
    if ratio >= 0.20:
        return [
            "Debt levels are manageable but could be improved",
            "Continue making regular payments and avoid new debt",
        ]
    return ["Excellent debt management! Keep up the good work."]


def analyze_debt_management(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    total_debt = metrics.total_debt

    if metrics.total_monthly_income <= 0:
        # No income to service debt with
        ratio = 1.0 if total_debt > 0 else 0.0
        score, status = (0, "critical") if total_debt > 0 else (100, "excellent")
    else:
        ratio = metrics.debt_to_income_ratio / 100
        score = max(0, 100 - round_half_up(ratio * 100))
        if ratio < 0.20:
            status = "excellent"
        elif ratio < 0.28:
            status = "good"
        elif ratio < 0.36:
            status = "fair"
        elif ratio < 0.43:
            status = "poor"
        else:
            status = "critical"

    return HealthIndicator(
        name="Debt Management",
        key="debt-to-income",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["debt-to-income"],
        metrics=(
            FinancialMetric(
                title="Debt-to-Income Ratio",
                value=format_percent(metrics.debt_to_income_ratio),
                numeric_value=metrics.debt_to_income_ratio,
                description="Total outstanding debt as a percentage of monthly income",
                status=status,
                benchmark="Target: Below 36%",
            ),
            FinancialMetric(
                title="Total Debt",
                value=format_currency(total_debt),
                numeric_value=total_debt,
                description="Total amount of outstanding debt",
                status=status,
            ),
        ),
        recommendations=tuple(debt_management_recommendations(ratio)),
        explanation=(
            f"This indicator assesses how manageable your debt is. Your debt-to-income ratio is "
            f"{metrics.debt_to_income_ratio:.1f}%, resulting in a score of {score}/100. "
            f"A lower ratio is generally better."
        ),
    )


# --- 5. Credit Health ---------------------------------------------------------


def credit_health_recommendations(credit_score: float, utilization: float) -> List[str]:
    recommendations = []
    if credit_score < 670:
        recommendations.append("Focus on improving credit score through on-time payments")
        recommendations.append("Consider becoming an authorized user on a family member's account")
    if utilization > 30:
        recommendations.append("Reduce credit card balances to improve utilization ratio")
        recommendations.append("Consider paying down cards or requesting credit limit increases")
    if not recommendations:
        recommendations.append("Great credit health! Maintain current habits.")
    return recommendations


def analyze_credit_health(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    credit_score = to_number(data.liabilities.credit_score)
    utilization = metrics.credit_utilization

    if credit_score >= 800 and utilization <= 10:
        score, status = 100, "excellent"
    elif credit_score >= 740 and utilization <= 30:
        score, status = 80, "good"
    elif credit_score >= 670:
        score, status = 60, "fair"
    elif credit_score >= 580:
        score, status = 40, "poor"
    else:
        score, status = 20, "critical"

    return HealthIndicator(
        name="Credit Health",
        key="credit-health",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["credit-health"],
        metrics=(
            FinancialMetric(
                title="Credit Score",
                value=str(int(credit_score)),
                numeric_value=credit_score,
                description="Your current credit score",
                status=credit_score_status(credit_score),
                benchmark="Excellent: 800+, Good: 740-799, Fair: 670-739",
            ),
            FinancialMetric(
                title="Credit Utilization",
                value=format_percent(utilization),
                numeric_value=utilization,
                description="Percentage of available credit you are using",
                status=credit_utilization_status(utilization),
                benchmark="Target: Below 30%",
            ),
        ),
        recommendations=tuple(credit_health_recommendations(credit_score, utilization)),
        explanation=(
            f"This reflects your creditworthiness. With a credit score of {int(credit_score)} and a "
            f"utilization of {utilization:.1f}%, your score is {score}/100. "
            f"Both are key factors in your financial health."
        ),
    )


# --- 6. Insurance Confidence --------------------------------------------------


def insurance_recommendations(insurance: Insurance) -> List[str]:
    recommendations = []
    if not insurance.health_insurance:
        recommendations.append("Get health insurance immediately - essential protection")
    if not insurance.life_insurance:
        recommendations.append("Consider life insurance to protect dependents")
    if not insurance.short_term_disability and not insurance.long_term_disability:
        recommendations.append("Consider disability insurance to protect your income")
    if not recommendations:
        recommendations.append("Good insurance coverage! Review annually to ensure adequacy.")
    return recommendations


def analyze_insurance_confidence(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    insurance = data.insurance
    has_health = bool(insurance.health_insurance)
    has_disability = bool(insurance.short_term_disability or insurance.long_term_disability)
    coverage_count = sum((has_health, bool(insurance.life_insurance), has_disability))
    confidence = insurance.insurance_confidence

    if coverage_count == 3 and confidence == "very-confident":
        score, status = 100, "excellent"
    elif coverage_count >= 2 and confidence != "not-confident":
        score, status = 80, "good"
    elif coverage_count >= 1:
        score, status = 60, "fair"
    # Shadowed by the ">= 1" band: health-only cover scores fair/60
    elif has_health:
        score, status = 40, "poor"
    else:
        score, status = 20, "critical"

    return HealthIndicator(
        name="Insurance Confidence",
        key="insurance",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["insurance"],
        metrics=(
            FinancialMetric(
                title="Self-Reported Confidence",
                value=title_case(str(confidence)),
                description="Your confidence in your insurance coverage",
                status=status,
            ),
            FinancialMetric(
                title="Core Coverages",
                value=f"{coverage_count} of 3",
                numeric_value=float(coverage_count),
                description="Health, life and disability policies in force",
                status=status,
                benchmark="Target: Health + Life + Disability",
            ),
        ),
        recommendations=tuple(insurance_recommendations(insurance)),
        explanation=(
            f"This measures your confidence in being protected from financial shocks. "
            f"Your reported confidence level gives you a score of {score}/100."
        ),
    )


# --- 7. Long-term Goal Confidence ---------------------------------------------


def retirement_recommendations(retirement_confidence: str, monthly_investment: float) -> List[str]:
    recommendations = []
    if monthly_investment == 0:
        recommendations.append("Start investing for retirement immediately, even small amounts help")
        recommendations.append("Take advantage of employer 401(k) match if available")
    elif monthly_investment < 500:
        recommendations.append("Consider increasing retirement contributions")
        recommendations.append("Target 10-15% of income for retirement savings")
    if retirement_confidence != "very-confident":
        recommendations.append("Meet with financial advisor to create retirement plan")
        recommendations.append("Use retirement calculators to estimate needs")
    if not recommendations:
        recommendations.append("Excellent retirement planning! Stay on track.")
    return recommendations


def analyze_long_term_goal_confidence(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    confidence = data.goals.retirement_confidence
    has_retirement_savings = sum_fields(data.assets, RETIREMENT_FIELDS) > 0
    monthly_investment = to_number(data.behaviors.monthly_investment_contribution)

    if confidence == "very-confident" and has_retirement_savings and monthly_investment > 0:
        score, status = 100, "excellent"
    elif confidence == "somewhat-confident" and has_retirement_savings:
        score, status = 75, "good"
    elif has_retirement_savings or monthly_investment > 0:
        score, status = 50, "fair"
    elif confidence != "not-confident":
        score, status = 25, "poor"
    else:
        score, status = 0, "critical"

    if monthly_investment > 500:
        investment_status = "excellent"
    elif monthly_investment > 0:
        investment_status = "good"
    else:
        investment_status = "poor"

    return HealthIndicator(
        name="Long-term Goal Confidence",
        key="long-term-goals",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["long-term-goals"],
        metrics=(
            FinancialMetric(
                title="Retirement Confidence",
                value=title_case(str(confidence)),
                description="Your confidence in your retirement savings plan",
                status=status,
                benchmark="Target: Very confident with active saving",
            ),
            FinancialMetric(
                title="Monthly Investment",
                value=format_currency(monthly_investment),
                numeric_value=monthly_investment,
                description="Monthly investment contribution",
                status=investment_status,
                benchmark="Target: 10-15% of income",
            ),
        ),
        recommendations=tuple(retirement_recommendations(confidence, monthly_investment)),
        explanation=(
            f"This assesses your confidence in reaching long-term financial goals like retirement. "
            f"Your reported confidence results in a score of {score}/100."
        ),
    )


# --- 8. Financial Planning Engagement -----------------------------------------


def planning_recommendations(budgeting: str, planning: str) -> List[str]:
    recommendations = []
    if budgeting == "no-budget":
        recommendations.append("Start with basic expense tracking using apps or spreadsheets")
        recommendations.append("Create a simple budget to understand spending patterns")
    elif budgeting == "mental-budget":
        recommendations.append("Move to written budget for better accuracy")
    if planning in ("never-plan", "rarely-plan"):
        recommendations.append("Set aside time monthly for financial planning")
        recommendations.append("Start with simple goal-setting and progress tracking")
    if not recommendations:
        recommendations.append("Great financial planning habits! Keep it up.")
    return recommendations


def analyze_financial_planning_engagement(data: FinancialData, metrics: KeyMetrics) -> HealthIndicator:
    budgeting = data.behaviors.budgeting_method
    planning = data.behaviors.financial_planning_engagement

    budget_score = BUDGET_SCORES.get(budgeting, 0)
    planning_score = PLANNING_SCORES.get(planning, 0)
    score = round_half_up(budget_score * 0.5 + planning_score * 0.5)

    if score >= 90:
        status = "excellent"
    elif score >= 70:
        status = "good"
    elif score >= 50:
        status = "fair"
    elif score >= 20:
        status = "poor"
    else:
        status = "critical"

    component_status = "good" if score >= 70 else "poor"

    return HealthIndicator(
        name="Financial Planning Engagement",
        key="planning",
        score=score,
        status=status,
        weight=INDICATOR_WEIGHTS["planning"],
        metrics=(
            FinancialMetric(
                title="Budgeting Method",
                value=title_case(str(budgeting)),
                description="How you manage your budget",
                status=component_status,
            ),
            FinancialMetric(
                title="Planning Engagement",
                value=title_case(str(planning)),
                description="How actively you plan your finances",
                status=component_status,
            ),
        ),
        recommendations=tuple(planning_recommendations(budgeting, planning)),
        explanation=(
            f"This measures how actively you are planning and tracking your finances. "
            f"Your approach gives you a score of {score}/100."
        ),
    )


IndicatorEvaluator = Callable[[FinancialData, KeyMetrics], HealthIndicator]

HEALTH_INDICATOR_EVALUATORS: Tuple[IndicatorEvaluator, ...] = (
    analyze_spending_vs_income,
    analyze_bill_payment_reliability,
    analyze_emergency_savings,
    analyze_debt_management,
    analyze_credit_health,
    analyze_insurance_confidence,
    analyze_long_term_goal_confidence,
    analyze_financial_planning_engagement,
)


def calculate_health_indicators(data: FinancialData, metrics: KeyMetrics) -> Tuple[HealthIndicator, ...]:
    """Run all eight evaluators against the same metrics, in fixed order"""
    return tuple(evaluate(data, metrics) for evaluate in HEALTH_INDICATOR_EVALUATORS)
