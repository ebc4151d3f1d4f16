"""Financial health scoring engine - core business logic for household analysis"""

from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from finhealth.domain.exceptions import InvalidFinancialDataError
from finhealth.domain.indicators import calculate_health_indicators
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
)
from finhealth.domain.metrics import compute_key_metrics
from finhealth.domain.models import (
    AnalysisMode,
    AnalysisResult,
    FinancialData,
    HealthIndicator,
    HealthLevel,
)
from finhealth.domain.recommendations import DEFAULT_MAX_RECOMMENDATIONS, generate_recommendations
from finhealth.utils.format_utils import is_valid_number, round_half_up

# Receives (stage, payload) for each step of an analysis
AnalysisObserver = Callable[[str, Dict[str, Any]], None]

MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850


def validate_financial_data(data: FinancialData) -> None:
    """
    Fail-fast preconditions checked before any metric is computed.

    Requirements:
    - primary salary is a positive number
    - credit score is within [300, 850], both ends inclusive
    """
    salary = data.income.primary_salary
    if not is_valid_number(salary) or salary <= 0:
        raise InvalidFinancialDataError("Invalid data: Primary salary cannot be zero or negative")

    credit_score = data.liabilities.credit_score
    if not is_valid_number(credit_score) or not MIN_CREDIT_SCORE <= credit_score <= MAX_CREDIT_SCORE:
        raise InvalidFinancialDataError(
            f"Invalid data: Credit score must be between {MIN_CREDIT_SCORE} and {MAX_CREDIT_SCORE}"
        )


def calculate_overall_health_score(indicators: Sequence[HealthIndicator]) -> int:
    """
    Weighted mean of indicator scores.

    Normalized by the actual sum of weights (105 for the standard eight),
    not by 100. Returns 0 when the total weight is 0.
    """
    total_weighted_score = 0.0
    total_weight = 0.0
    for indicator in indicators:
        total_weighted_score += indicator.score * indicator.weight
        total_weight += indicator.weight

    if total_weight <= 0:
        return 0
    return round_half_up(total_weighted_score / total_weight)


def get_health_level(score: float) -> HealthLevel:
    """
    Map overall score to a health level.

    Score bands:
    - 80+:   excellent
    - 65-79: good
    - 50-64: fair
    - 35-49: limited
    - <35:   critical
    """
    if score >= 80:
        return "excellent"
    elif score >= 65:
        return "good"
    elif score >= 50:
        return "fair"
    elif score >= 35:
        return "limited"
    else:
        return "critical"


def aggregate(indicators: Sequence[HealthIndicator]) -> Tuple[int, HealthLevel]:
    score = calculate_overall_health_score(indicators)
    return score, get_health_level(score)


def analyze_financial_health(
    data: FinancialData,
    mode: AnalysisMode = AnalysisMode.COMPREHENSIVE,
    observer: Optional[AnalysisObserver] = None,
    max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    projection_scenarios: Tuple[Tuple[str, float], ...] = DEFAULT_PROJECTION_SCENARIOS,
    retirement_return: float = 0.07,
) -> AnalysisResult:
    """
    Main entry point: validate, score and build recommendations for one record.

    Flow:
    1. Validate preconditions (raises InvalidFinancialDataError, nothing computed)
    2. Derive key metrics once
    3. Evaluate the eight health indicators against those metrics
    4. Aggregate into overall score and health level
    5. Build supporting analysis sections
    6. Run the recommendation registry
    """
    mode = AnalysisMode(mode)
    notify = observer or (lambda stage, payload: None)

    validate_financial_data(data)
    notify(
        "validated",
        {
            "primary_salary": data.income.primary_salary,
            "credit_score": data.liabilities.credit_score,
            "mode": mode.value,
        },
    )

    metrics = compute_key_metrics(data)
    notify(
        "metrics",
        {
            "total_monthly_income": metrics.total_monthly_income,
            "total_monthly_expenses": metrics.total_monthly_expenses,
            "monthly_cash_flow": metrics.monthly_cash_flow,
            "emergency_fund_months": metrics.emergency_fund_months,
        },
    )

    indicators = calculate_health_indicators(data, metrics)
    overall_score, health_level = aggregate(indicators)
    notify(
        "scored",
        {
            "overall_health_score": overall_score,
            "health_level": health_level,
            "indicator_scores": {indicator.key: indicator.score for indicator in indicators},
        },
    )

    recommendations = generate_recommendations(data, metrics, indicators, mode, max_recommendations)
    notify("recommended", {"recommendation_ids": [rec.id for rec in recommendations]})

    return AnalysisResult(
        overall_health_score=overall_score,
        health_level=health_level,
        analysis_mode=mode,
        health_indicators=indicators,
        key_metrics=metrics,
        prioritized_recommendations=recommendations,
        liquidity_analysis=analyze_liquidity(data, metrics),
        debt_analysis=analyze_debt(data, metrics),
        investment_analysis=analyze_investments(data, metrics),
        insurance_analysis=analyze_insurance(data),
        financial_ratios=calculate_financial_ratios(data, metrics),
        risk_assessment=assess_financial_risk(data, metrics),
        goal_analysis=analyze_goals(data, metrics, retirement_return),
        wealth_projections=project_wealth(data, projection_scenarios),
        scenario_analysis=analyze_scenarios(data, metrics),
        detailed_insights=generate_detailed_insights(data, metrics),
    )
