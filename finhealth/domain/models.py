"""Domain models - pure Python dataclasses representing household finances and analysis output"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Tuple

HealthStatus = Literal["excellent", "good", "fair", "poor", "critical"]
HealthLevel = Literal["excellent", "good", "fair", "limited", "critical"]
Priority = Literal["high", "medium", "low"]
Confidence = Literal["very-confident", "somewhat-confident", "not-confident"]
RecommendationCategory = Literal["savings", "debt", "spending", "investment", "credit", "risk", "planning"]
Timeframe = Literal[
    "immediate",
    "next-paycheck",
    "next-30-days",
    "1-3-months",
    "3-6-months",
    "next-3-months",
    "next-month",
    "ongoing",
    "long-term",
]


class AnalysisMode(str, Enum):
    """Which form produced the record; gates the quick/comprehensive rule groups"""

    QUICK = "quick"
    COMPREHENSIVE = "comprehensive"


# --- Input record -------------------------------------------------------------


@dataclass(frozen=True)
class PersonalInfo:
    age: int = 30
    marital_status: str = "single"  # single | married | divorced | widowed
    dependents: int = 0
    state: str = ""
    employment_status: str = "employed"  # employed | self-employed | unemployed | retired | student
    employment_tenure: float = 0.0  # years
    health_status: str = "good"  # excellent | good | fair | poor
    health_insurance: bool = False
    life_insurance: bool = False
    short_term_disability: bool = False
    long_term_disability: bool = False


@dataclass(frozen=True)
class Income:
    """Monthly income streams"""

    primary_salary: float = 0.0
    secondary_income: float = 0.0
    business_income: float = 0.0
    investment_income: float = 0.0
    rental_income: float = 0.0
    benefits_income: float = 0.0
    other_income: float = 0.0
    income_growth_rate: float = 0.0
    income_variability: str = "stable"  # stable | somewhat-variable | highly-variable
    effective_tax_rate: float = 0.0


@dataclass(frozen=True)
class Expenses:
    """Monthly expense categories"""

    # Fixed
    housing: float = 0.0
    utilities: float = 0.0
    insurance: float = 0.0
    loan_payments: float = 0.0
    childcare: float = 0.0
    # Variable necessities
    food: float = 0.0
    transportation: float = 0.0
    healthcare: float = 0.0
    clothing: float = 0.0
    personal_care: float = 0.0
    # Discretionary
    entertainment: float = 0.0
    dining_out: float = 0.0
    hobbies: float = 0.0
    subscriptions: float = 0.0
    shopping: float = 0.0
    travel: float = 0.0
    # Debt payments
    credit_card_payments: float = 0.0
    student_loan_payments: float = 0.0
    other_debt_payments: float = 0.0


@dataclass(frozen=True)
class Assets:
    """Balances by account type"""

    # Liquid
    checking: float = 0.0
    savings: float = 0.0
    money_market: float = 0.0
    emergency_fund: float = 0.0
    # Investment accounts
    employer_401k: float = 0.0
    traditional_ira: float = 0.0
    roth_ira: float = 0.0
    brokerage_accounts: float = 0.0
    stocks: float = 0.0
    bonds: float = 0.0
    mutual_funds: float = 0.0
    # Real estate
    primary_residence: float = 0.0
    investment_properties: float = 0.0
    # Alternative
    cryptocurrency: float = 0.0
    precious_metals: float = 0.0
    collectibles: float = 0.0
    business_equity: float = 0.0
    other_assets: float = 0.0


@dataclass(frozen=True)
class Liabilities:
    """Outstanding balances plus credit profile"""

    # Secured
    mortgage_balance: float = 0.0
    home_equity_loan: float = 0.0
    auto_loans: float = 0.0
    secured_credit_lines: float = 0.0
    # Unsecured
    credit_card_debt: float = 0.0
    personal_loans: float = 0.0
    student_loans: float = 0.0
    medical_debt: float = 0.0
    # Business
    business_loans: float = 0.0
    business_credit_lines: float = 0.0
    # Other obligations
    tax_debt: float = 0.0
    legal_judgments: float = 0.0
    other_debt: float = 0.0

    credit_score: int = 700
    total_credit_limit: float = 0.0


@dataclass(frozen=True)
class Insurance:
    health_insurance: bool = False
    health_deductible: float = 0.0
    health_out_of_pocket_max: float = 0.0
    life_insurance: bool = False
    life_coverage_amount: float = 0.0
    short_term_disability: bool = False
    long_term_disability: bool = False
    disability_coverage_percent: float = 0.0
    home_insurance: bool = False
    auto_insurance: bool = False
    umbrella_policy: bool = False
    insurance_confidence: Confidence = "somewhat-confident"


@dataclass(frozen=True)
class Goals:
    emergency_fund_target: float = 0.0
    debt_payoff_goal: bool = False
    major_purchase_amount: float = 0.0
    home_down_payment: float = 0.0
    education_funding: float = 0.0
    career_change_buffer: float = 0.0
    retirement_age: int = 65
    retirement_income_needed: float = 0.0  # monthly
    legacy_goal_amount: float = 0.0
    retirement_confidence: Confidence = "somewhat-confident"
    long_term_goal_confidence: Confidence = "somewhat-confident"
    risk_tolerance: str = "moderate"  # conservative | moderate | aggressive
    investment_experience: str = "intermediate"  # beginner | intermediate | advanced


@dataclass(frozen=True)
class Behaviors:
    bill_payment_reliability: str = "usually-on-time"
    budgeting_method: str = "simple-tracking"
    financial_planning_engagement: str = "occasionally-plan"
    automatic_savings: bool = False
    monthly_investment_contribution: float = 0.0
    emergency_fund_priority: str = "medium"  # high | medium | low
    impulse_spending_frequency: str = "sometimes"  # never | rarely | sometimes | often
    expense_tracking_method: str = "casual"  # detailed | casual | none


@dataclass(frozen=True)
class FinancialData:
    """Complete household snapshot - the single input to an analysis"""

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    income: Income = field(default_factory=Income)
    expenses: Expenses = field(default_factory=Expenses)
    assets: Assets = field(default_factory=Assets)
    liabilities: Liabilities = field(default_factory=Liabilities)
    insurance: Insurance = field(default_factory=Insurance)
    goals: Goals = field(default_factory=Goals)
    behaviors: Behaviors = field(default_factory=Behaviors)


# --- Derived metrics ----------------------------------------------------------


@dataclass(frozen=True)
class DebtToIncomeBreakdown:
    total_debt: float
    total_income: float
    debt_to_income_ratio: float


@dataclass(frozen=True)
class NetWorthBreakdown:
    total_assets: float
    total_liabilities: float
    net_worth: float


@dataclass(frozen=True)
class SavingsRateBreakdown:
    savings: float
    total_income: float
    formula: str
    savings_rate: float


@dataclass(frozen=True)
class KeyMetrics:
    """Calculated financial metrics; breakdowns exist for display only"""

    total_monthly_income: float
    total_monthly_expenses: float
    monthly_cash_flow: float
    total_assets: float
    total_liabilities: float
    total_liquid_assets: float
    total_debt: float
    net_worth: float
    emergency_fund_months: float
    debt_to_income_ratio: float  # percent, balance vs monthly income
    savings_rate: float  # percent
    credit_utilization: float  # percent
    liquidity_ratio: float
    asset_allocation_score: float
    dti_breakdown: DebtToIncomeBreakdown
    net_worth_breakdown: NetWorthBreakdown
    savings_rate_breakdown: SavingsRateBreakdown


# --- Analysis output ----------------------------------------------------------


@dataclass(frozen=True)
class FinancialMetric:
    """Single displayable figure inside an indicator or analysis section"""

    title: str
    value: str
    description: str
    status: HealthStatus
    numeric_value: Optional[float] = None
    benchmark: Optional[str] = None
    improvement: Optional[str] = None


@dataclass(frozen=True)
class HealthIndicator:
    name: str
    key: str
    score: int
    status: HealthStatus
    weight: int
    metrics: Tuple[FinancialMetric, ...]
    recommendations: Tuple[str, ...]
    explanation: str


@dataclass(frozen=True)
class Recommendation:
    id: str
    category: RecommendationCategory
    priority: Priority
    title: str
    description: str
    action_steps: Tuple[str, ...]
    timeframe: Timeframe
    impact_level: Priority


@dataclass(frozen=True)
class RiskFactor:
    category: str
    level: str  # High | Medium | Low
    description: str
    mitigation: str


@dataclass(frozen=True)
class RiskAssessment:
    overall_risk_level: str
    risk_factors: Tuple[RiskFactor, ...]
    risk_score: int


@dataclass(frozen=True)
class RetirementReadiness:
    years_to_retirement: int
    current_savings: float
    monthly_contribution: float
    projected_value: float
    on_track: bool


@dataclass(frozen=True)
class EmergencyGoal:
    target: float
    current: float
    progress: float
    time_to_goal: str


@dataclass(frozen=True)
class GoalAnalysis:
    retirement_readiness: RetirementReadiness
    emergency_goal: EmergencyGoal


@dataclass(frozen=True)
class WealthProjection:
    scenario: str
    timeframe: str
    projected_value: float
    monthly_contribution: float
    assumptions: str


@dataclass(frozen=True)
class LiquidityRatios:
    current_ratio: float
    quick_ratio: float
    emergency_fund_ratio: float


@dataclass(frozen=True)
class LeverageRatios:
    debt_to_asset_ratio: float
    debt_to_income_ratio: float
    equity_ratio: float


@dataclass(frozen=True)
class EfficiencyRatios:
    savings_rate: float
    expense_ratio: float
    investment_rate: float


@dataclass(frozen=True)
class FinancialRatios:
    liquidity_ratios: LiquidityRatios
    leverage_ratios: LeverageRatios
    efficiency_ratios: EfficiencyRatios


@dataclass(frozen=True)
class ScenarioAnalysis:
    """What-if stress scenario with recovery guidance"""

    scenario: str
    probability: str
    impact: str  # High | Medium | Low
    description: str
    time_to_recover: str
    recommendations: Tuple[str, ...]


@dataclass(frozen=True)
class CashFlowAnalysis:
    monthly_income: float
    monthly_expenses: float
    surplus: float
    surplus_percentage: float
    insight: str


@dataclass(frozen=True)
class NetWorthAnalysis:
    current_net_worth: float
    net_worth_per_age: float
    projected_growth: float  # one year of the current cash flow
    insight: str


@dataclass(frozen=True)
class DetailedInsights:
    cash_flow_analysis: CashFlowAnalysis
    net_worth_analysis: NetWorthAnalysis
    risk_factors: Tuple[str, ...]
    opportunities: Tuple[str, ...]


@dataclass(frozen=True)
class AnalysisResult:
    """Output of a financial health analysis"""

    overall_health_score: int
    health_level: HealthLevel
    analysis_mode: AnalysisMode
    health_indicators: Tuple[HealthIndicator, ...]
    key_metrics: KeyMetrics
    prioritized_recommendations: Tuple[Recommendation, ...]
    liquidity_analysis: Tuple[FinancialMetric, ...]
    debt_analysis: Tuple[FinancialMetric, ...]
    investment_analysis: Tuple[FinancialMetric, ...]
    insurance_analysis: Tuple[FinancialMetric, ...]
    financial_ratios: FinancialRatios
    risk_assessment: RiskAssessment
    goal_analysis: GoalAnalysis
    wealth_projections: Tuple[WealthProjection, ...]
    scenario_analysis: Tuple[ScenarioAnalysis, ...]
    detailed_insights: DetailedInsights
