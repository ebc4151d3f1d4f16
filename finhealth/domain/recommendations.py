"""
Recommendation engine - rule registry and prioritization pipeline.

Rules are small pure functions over a RuleContext returning zero or one
Recommendation. RULE_REGISTRY fixes the evaluation order:

    common -> quick -> comprehensive -> fallback (one per indicator)

Pipeline: run eligible rules in registry order, stable-sort by priority
(high, medium, low), keep the first occurrence of each id, cap the list.
Because the sort is stable, ties keep registry order, so a dedicated rule
always beats a later fallback rule of the same priority with the same id.

Ids name the concern a recommendation addresses. Fallback rules reuse the
indicator key as their id, which is also the id of the dedicated rule for
that concern where one exists (emergency-fund, debt-to-income).
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from finhealth.domain.indicators import HEALTH_INDICATOR_EVALUATORS
from finhealth.domain.metrics import INVESTMENT_FIELDS
from finhealth.domain.models import (
    AnalysisMode,
    FinancialData,
    HealthIndicator,
    KeyMetrics,
    Recommendation,
)
from finhealth.utils.format_utils import format_currency, is_valid_number

PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}

DEFAULT_MAX_RECOMMENDATIONS = 10

# Expense categories that make up the essential monthly outgoings
ESSENTIAL_EXPENSE_FIELDS = ("housing", "food", "transportation", "utilities")


@dataclass(frozen=True)
class RuleContext:
    data: FinancialData
    metrics: KeyMetrics
    indicators: Tuple[HealthIndicator, ...]
    mode: AnalysisMode


RuleFunc = Callable[[RuleContext], Optional[Recommendation]]


@dataclass(frozen=True)
class Rule:
    name: str
    group: str  # common | quick | comprehensive | fallback
    func: RuleFunc


def _numbers(section, names) -> Optional[List[float]]:
    """Read numeric fields, or None if any of them is missing or not a finite number"""
    values = [getattr(section, name, None) for name in names]
    if not all(is_valid_number(value) for value in values):
        return None
    return [float(value) for value in values]


# --- Common rules -------------------------------------------------------------


def emergency_fund_rule(ctx: RuleContext) -> Optional[Recommendation]:
    liquid = _numbers(ctx.data.assets, ("checking", "savings", "emergency_fund"))
    essentials = _numbers(ctx.data.expenses, ESSENTIAL_EXPENSE_FIELDS)
    if liquid is None or essentials is None:
        return None

    total_liquid = sum(liquid)
    monthly_expenses = sum(essentials)
    if monthly_expenses <= 0:
        return None

    months = total_liquid / monthly_expenses
    if months >= 3:
        return None

    needed = max(0.0, (3 - months) * monthly_expenses)
    return Recommendation(
        id="emergency-fund",
        category="savings",
        priority="high",
        title="Build Your Emergency Fund",
        description=(
            f"You have {months:.1f} months of expenses saved. Aim for at least 3 months for a basic "
            f"safety net. You need to save about {format_currency(needed)} more."
        ),
        action_steps=(
            "Set up an automatic transfer to savings each payday.",
            "Pause non-essential spending until you reach your goal.",
        ),
        timeframe="1-3-months",
        impact_level="high",
    )


def debt_to_income_rule(ctx: RuleContext) -> Optional[Recommendation]:
    ratio = ctx.metrics.debt_to_income_ratio
    if not is_valid_number(ratio) or ratio < 36:
        return None
    return Recommendation(
        id="debt-to-income",
        category="debt",
        priority="high",
        title="Reduce Your Debt-to-Income Ratio",
        description=(
            f"Your debt-to-income ratio is {ratio:.1f}%. "
            f"Aim to keep this below 36% for financial stability."
        ),
        action_steps=(
            "Prioritize paying down high-interest debt.",
            "Avoid taking on new debt until your ratio is below 36%.",
        ),
        timeframe="next-3-months",
        impact_level="high",
    )


def savings_rate_rule(ctx: RuleContext) -> Optional[Recommendation]:
    rate = ctx.metrics.savings_rate
    if not is_valid_number(rate) or rate >= 10:
        return None
    return Recommendation(
        id="savings-rate",
        category="savings",
        priority="medium",
        title="Increase Your Savings Rate",
        description=(
            f"Your savings rate is {rate:.1f}%. "
            f"Aim for at least 10% of your income to build long-term security."
        ),
        action_steps=(
            "Increase your savings by 1% each month.",
            "Direct any windfalls or bonuses to savings.",
        ),
        timeframe="ongoing",
        impact_level="medium",
    )


def negative_cash_flow_rule(ctx: RuleContext) -> Optional[Recommendation]:
    cash_flow = ctx.metrics.monthly_cash_flow
    if not is_valid_number(cash_flow) or cash_flow >= 0:
        return None
    return Recommendation(
        id="negative-cash-flow",
        category="spending",
        priority="high",
        title="Address Negative Cash Flow",
        description=(
            "You are spending more than you earn each month. "
            "Immediate action is needed to avoid debt and financial stress."
        ),
        action_steps=(
            "Track all spending for 30 days to identify areas to cut.",
            "Create a strict budget and stick to it.",
        ),
        timeframe="next-30-days",
        impact_level="high",
    )


def credit_score_rule(ctx: RuleContext) -> Optional[Recommendation]:
    credit_score = ctx.data.liabilities.credit_score
    if not is_valid_number(credit_score) or credit_score >= 670:
        return None
    return Recommendation(
        id="credit-score",
        category="credit",
        priority="medium",
        title="Improve Your Credit Score",
        description=(
            f"Your credit score is {int(credit_score)}. Focus on on-time payments and reducing "
            f"credit card balances to improve your score."
        ),
        action_steps=(
            "Pay all bills on time every month.",
            "Pay down credit card balances below 30% of your limit.",
        ),
        timeframe="next-3-months",
        impact_level="medium",
    )


# --- Quick-form rules ---------------------------------------------------------


def housing_cost_ratio_rule(ctx: RuleContext) -> Optional[Recommendation]:
    housing = ctx.data.expenses.housing
    income = ctx.data.income.primary_salary
    if not is_valid_number(housing) or not is_valid_number(income) or income <= 0:
        return None

    ratio = housing / income * 100
    if ratio <= 30:
        return None
    return Recommendation(
        id="housing-cost-ratio",
        category="spending",
        priority="medium",
        title="Reduce Your Housing Cost Ratio",
        description=(
            f"Your housing costs are {ratio:.1f}% of your income. "
            f"Aim to keep this below 30% for long-term affordability."
        ),
        action_steps=(
            "Consider refinancing, downsizing, or negotiating rent.",
            "Look for ways to increase income or reduce other expenses.",
        ),
        timeframe="next-3-months",
        impact_level="medium",
    )


def liquidity_cushion_rule(ctx: RuleContext) -> Optional[Recommendation]:
    """Savings measured against income plus day-to-day outgoings"""
    income = ctx.data.income.primary_salary
    outgoings = _numbers(ctx.data.expenses, ("food", "transportation", "utilities"))
    liquid = _numbers(ctx.data.assets, ("checking", "savings", "emergency_fund"))
    if not is_valid_number(income) or income <= 0 or outgoings is None or liquid is None:
        return None

    expenses = sum(outgoings)
    savings = sum(liquid)
    if expenses < 0 or savings < 0:
        return None

    months = savings / (income + expenses)
    if months >= 6:
        return None
    if months < 1:
        return Recommendation(
            id="liquidity-cushion-critical",
            category="savings",
            priority="high",
            title="Critical: No Financial Cushion",
            description=(
                "You have less than one month of expenses saved. This puts you at high risk for "
                "financial hardship. Build a safety net immediately."
            ),
            action_steps=(
                "Pause all non-essential spending.",
                "Set up an emergency fund as your top priority.",
            ),
            timeframe="immediate",
            impact_level="high",
        )
    return Recommendation(
        id="liquidity-cushion-warning",
        category="savings",
        priority="medium",
        title="Increase Your Financial Cushion",
        description=(
            f"You have {months:.1f} months of expenses saved. "
            f"Aim for at least 3-6 months for greater security."
        ),
        action_steps=(
            "Increase your monthly savings rate.",
            "Automate transfers to your savings account.",
        ),
        timeframe="next-3-months",
        impact_level="medium",
    )


# --- Comprehensive-form rules -------------------------------------------------


def investment_diversification_rule(ctx: RuleContext) -> Optional[Recommendation]:
    age = ctx.data.personal_info.age
    balances = _numbers(ctx.data.assets, INVESTMENT_FIELDS)
    if not is_valid_number(age) or balances is None or sum(balances) <= 0:
        return None

    # 110 - age rule of thumb for the stock share
    target_stock_allocation = 110 - int(age)
    return Recommendation(
        id="investment-diversification",
        category="investment",
        priority="medium",
        title="Diversify Your Investments",
        description=(
            f"Review your asset allocation. A common rule is to keep about {target_stock_allocation}% "
            f"of your portfolio in stocks for your age."
        ),
        action_steps=(
            "Rebalance your portfolio to match your risk tolerance and goals.",
            "Consider low-cost index funds or ETFs for diversification.",
        ),
        timeframe="next-3-months",
        impact_level="medium",
    )


def health_insurance_rule(ctx: RuleContext) -> Optional[Recommendation]:
    if not is_valid_number(ctx.data.personal_info.dependents) or ctx.data.insurance.health_insurance:
        return None
    return Recommendation(
        id="insurance-health",
        category="risk",
        priority="high",
        title="Get Health Insurance Coverage",
        description="Health insurance is essential to protect against catastrophic medical costs.",
        action_steps=("Enroll in a health insurance plan as soon as possible.",),
        timeframe="immediate",
        impact_level="high",
    )


def life_insurance_rule(ctx: RuleContext) -> Optional[Recommendation]:
    dependents = ctx.data.personal_info.dependents
    if not is_valid_number(dependents) or dependents <= 0 or ctx.data.insurance.life_insurance:
        return None
    return Recommendation(
        id="insurance-life",
        category="risk",
        priority="high",
        title="Get Life Insurance for Your Dependents",
        description="Life insurance is critical to protect your family if something happens to you.",
        action_steps=(
            "Get quotes for term life insurance and choose a policy that covers at least 10x your income.",
        ),
        timeframe="next-30-days",
        impact_level="high",
    )


# --- Fallback rules (one per indicator) ---------------------------------------

INDICATOR_CATEGORIES: Dict[str, str] = {
    "spending-vs-income": "spending",
    "bill-payment": "credit",
    "emergency-fund": "savings",
    "debt-to-income": "debt",
    "credit-health": "credit",
    "insurance": "risk",
    "long-term-goals": "investment",
    "planning": "planning",
}


def indicator_fallback(indicator: HealthIndicator) -> Optional[Recommendation]:
    """Generic follow-up for a weak indicator; None when the indicator is good or better"""
    category = INDICATOR_CATEGORIES.get(indicator.key, "planning")
    action_steps = tuple(indicator.recommendations[:3])

    if indicator.status in ("critical", "poor"):
        critical = indicator.status == "critical"
        return Recommendation(
            id=indicator.key,
            category=category,
            priority="high" if critical else "medium",
            title=f"Focus on Improving {indicator.name}",
            description=(
                f"Your {indicator.name} score is {indicator.score}/100, rated {indicator.status}. "
                f"Improving it will raise your overall financial health score."
            ),
            action_steps=action_steps,
            timeframe="immediate" if critical else "next-30-days",
            impact_level="high" if critical else "medium",
        )

    if indicator.status == "fair":
        return Recommendation(
            id=f"optimize-{indicator.key}",
            category=category,
            priority="low",
            title=f"Optimize {indicator.name}",
            description=(
                f"Your {indicator.name} score is {indicator.score}/100. "
                f"A few adjustments could move it into the good range."
            ),
            action_steps=action_steps,
            timeframe="next-3-months",
            impact_level="low",
        )

    return None


def _fallback_rule(position: int) -> RuleFunc:
    def rule(ctx: RuleContext) -> Optional[Recommendation]:
        if position >= len(ctx.indicators):
            return None
        return indicator_fallback(ctx.indicators[position])

    return rule


RULE_REGISTRY: Tuple[Rule, ...] = (
    Rule("emergency_fund", "common", emergency_fund_rule),
    Rule("debt_to_income", "common", debt_to_income_rule),
    Rule("savings_rate", "common", savings_rate_rule),
    Rule("negative_cash_flow", "common", negative_cash_flow_rule),
    Rule("credit_score", "common", credit_score_rule),
    Rule("housing_cost_ratio", "quick", housing_cost_ratio_rule),
    Rule("liquidity_cushion", "quick", liquidity_cushion_rule),
    Rule("investment_diversification", "comprehensive", investment_diversification_rule),
    Rule("health_insurance", "comprehensive", health_insurance_rule),
    Rule("life_insurance", "comprehensive", life_insurance_rule),
) + tuple(
    Rule(f"fallback_{evaluator.__name__.replace('analyze_', '')}", "fallback", _fallback_rule(position))
    for position, evaluator in enumerate(HEALTH_INDICATOR_EVALUATORS)
)


def eligible_rules(mode: AnalysisMode) -> List[Rule]:
    """Rules that run for the given mode, in registry order"""
    enabled_groups = {"common", "fallback", AnalysisMode(mode).value}
    return [rule for rule in RULE_REGISTRY if rule.group in enabled_groups]


def prioritize(recommendations: List[Recommendation], limit: int = DEFAULT_MAX_RECOMMENDATIONS) -> List[Recommendation]:
    """Stable sort by priority, drop repeated ids (first wins), truncate"""
    ordered = sorted(recommendations, key=lambda rec: PRIORITY_RANK[rec.priority])

    unique: List[Recommendation] = []
    seen = set()
    for rec in ordered:
        if rec.id in seen:
            continue
        seen.add(rec.id)
        unique.append(rec)

    return unique[:limit]


def generate_recommendations(
    data: FinancialData,
    metrics: KeyMetrics,
    indicators: Tuple[HealthIndicator, ...],
    mode: AnalysisMode = AnalysisMode.COMPREHENSIVE,
    limit: int = DEFAULT_MAX_RECOMMENDATIONS,
) -> Tuple[Recommendation, ...]:
    """Run the rule registry and return the prioritized, de-duplicated list"""
    ctx = RuleContext(data=data, metrics=metrics, indicators=indicators, mode=AnalysisMode(mode))

    produced = []
    for rule in eligible_rules(ctx.mode):
        rec = rule.func(ctx)
        if rec is not None:
            produced.append(rec)

    return tuple(prioritize(produced, limit))
