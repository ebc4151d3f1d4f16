"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from finhealth.domain.forms import QuickInputs
from finhealth.domain.models import (
    AnalysisMode,
    Assets,
    Behaviors,
    Expenses,
    FinancialData,
    Goals,
    Income,
    Insurance,
    Liabilities,
    PersonalInfo,
)

ConfidenceField = Literal["very-confident", "somewhat-confident", "not-confident"]
Money = float


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# --- Requests -----------------------------------------------------------------


class PersonalInfoSchema(CamelModel):
    age: int = Field(30, ge=18, le=100)
    marital_status: str = "single"
    dependents: int = Field(0, ge=0, le=20)
    state: str = ""
    employment_status: str = "employed"
    employment_tenure: float = Field(0.0, ge=0)
    health_status: str = "good"
    health_insurance: bool = False
    life_insurance: bool = False
    short_term_disability: bool = False
    long_term_disability: bool = False


class IncomeSchema(CamelModel):
    primary_salary: Money = Field(..., ge=0, description="Monthly primary salary")
    secondary_income: Money = Field(0.0, ge=0)
    business_income: Money = Field(0.0, ge=0)
    investment_income: Money = Field(0.0, ge=0)
    rental_income: Money = Field(0.0, ge=0)
    benefits_income: Money = Field(0.0, ge=0)
    other_income: Money = Field(0.0, ge=0)
    income_growth_rate: float = 0.0
    income_variability: str = "stable"
    effective_tax_rate: float = Field(0.0, ge=0, le=1)


class ExpensesSchema(CamelModel):
    housing: Money = Field(0.0, ge=0)
    utilities: Money = Field(0.0, ge=0)
    insurance: Money = Field(0.0, ge=0)
    loan_payments: Money = Field(0.0, ge=0)
    childcare: Money = Field(0.0, ge=0)
    food: Money = Field(0.0, ge=0)
    transportation: Money = Field(0.0, ge=0)
    healthcare: Money = Field(0.0, ge=0)
    clothing: Money = Field(0.0, ge=0)
    personal_care: Money = Field(0.0, ge=0)
    entertainment: Money = Field(0.0, ge=0)
    dining_out: Money = Field(0.0, ge=0)
    hobbies: Money = Field(0.0, ge=0)
    subscriptions: Money = Field(0.0, ge=0)
    shopping: Money = Field(0.0, ge=0)
    travel: Money = Field(0.0, ge=0)
    credit_card_payments: Money = Field(0.0, ge=0)
    student_loan_payments: Money = Field(0.0, ge=0)
    other_debt_payments: Money = Field(0.0, ge=0)


class AssetsSchema(CamelModel):
    checking: Money = Field(0.0, ge=0)
    savings: Money = Field(0.0, ge=0)
    money_market: Money = Field(0.0, ge=0)
    emergency_fund: Money = Field(0.0, ge=0)
    employer_401k: Money = Field(0.0, ge=0, alias="employer401k")
    traditional_ira: Money = Field(0.0, ge=0, alias="traditionalIRA")
    roth_ira: Money = Field(0.0, ge=0, alias="rothIRA")
    brokerage_accounts: Money = Field(0.0, ge=0)
    stocks: Money = Field(0.0, ge=0)
    bonds: Money = Field(0.0, ge=0)
    mutual_funds: Money = Field(0.0, ge=0)
    primary_residence: Money = Field(0.0, ge=0)
    investment_properties: Money = Field(0.0, ge=0)
    cryptocurrency: Money = Field(0.0, ge=0)
    precious_metals: Money = Field(0.0, ge=0)
    collectibles: Money = Field(0.0, ge=0)
    business_equity: Money = Field(0.0, ge=0)
    other_assets: Money = Field(0.0, ge=0)


class LiabilitiesSchema(CamelModel):
    mortgage_balance: Money = Field(0.0, ge=0)
    home_equity_loan: Money = Field(0.0, ge=0)
    auto_loans: Money = Field(0.0, ge=0)
    secured_credit_lines: Money = Field(0.0, ge=0)
    credit_card_debt: Money = Field(0.0, ge=0)
    personal_loans: Money = Field(0.0, ge=0)
    student_loans: Money = Field(0.0, ge=0)
    medical_debt: Money = Field(0.0, ge=0)
    business_loans: Money = Field(0.0, ge=0)
    business_credit_lines: Money = Field(0.0, ge=0)
    tax_debt: Money = Field(0.0, ge=0)
    legal_judgments: Money = Field(0.0, ge=0)
    other_debt: Money = Field(0.0, ge=0)
    credit_score: int = Field(700, ge=300, le=850)
    total_credit_limit: Money = Field(0.0, ge=0)


class InsuranceSchema(CamelModel):
    health_insurance: bool = False
    health_deductible: Money = Field(0.0, ge=0)
    health_out_of_pocket_max: Money = Field(0.0, ge=0)
    life_insurance: bool = False
    life_coverage_amount: Money = Field(0.0, ge=0)
    short_term_disability: bool = False
    long_term_disability: bool = False
    disability_coverage_percent: float = Field(0.0, ge=0, le=100)
    home_insurance: bool = False
    auto_insurance: bool = False
    umbrella_policy: bool = False
    insurance_confidence: ConfidenceField = "somewhat-confident"


class GoalsSchema(CamelModel):
    emergency_fund_target: Money = Field(0.0, ge=0)
    debt_payoff_goal: bool = False
    major_purchase_amount: Money = Field(0.0, ge=0)
    home_down_payment: Money = Field(0.0, ge=0)
    education_funding: Money = Field(0.0, ge=0)
    career_change_buffer: Money = Field(0.0, ge=0)
    retirement_age: int = Field(65, ge=18, le=100)
    retirement_income_needed: Money = Field(0.0, ge=0)
    legacy_goal_amount: Money = Field(0.0, ge=0)
    retirement_confidence: ConfidenceField = "somewhat-confident"
    long_term_goal_confidence: ConfidenceField = "somewhat-confident"
    risk_tolerance: str = "moderate"
    investment_experience: str = "intermediate"


class BehaviorsSchema(CamelModel):
    bill_payment_reliability: str = "usually-on-time"
    budgeting_method: str = "simple-tracking"
    financial_planning_engagement: str = "occasionally-plan"
    automatic_savings: bool = False
    monthly_investment_contribution: Money = Field(0.0, ge=0)
    emergency_fund_priority: str = "medium"
    impulse_spending_frequency: str = "sometimes"
    expense_tracking_method: str = "casual"


class AnalysisRequest(CamelModel):
    """Request body for POST /v1/analysis"""

    mode: Optional[AnalysisMode] = None
    personal_info: PersonalInfoSchema = Field(default_factory=PersonalInfoSchema)
    income: IncomeSchema
    expenses: ExpensesSchema = Field(default_factory=ExpensesSchema)
    assets: AssetsSchema = Field(default_factory=AssetsSchema)
    liabilities: LiabilitiesSchema = Field(default_factory=LiabilitiesSchema)
    insurance: InsuranceSchema = Field(default_factory=InsuranceSchema)
    goals: GoalsSchema = Field(default_factory=GoalsSchema)
    behaviors: BehaviorsSchema = Field(default_factory=BehaviorsSchema)

    def to_domain(self) -> FinancialData:
        return FinancialData(
            personal_info=PersonalInfo(**self.personal_info.model_dump()),
            income=Income(**self.income.model_dump()),
            expenses=Expenses(**self.expenses.model_dump()),
            assets=Assets(**self.assets.model_dump()),
            liabilities=Liabilities(**self.liabilities.model_dump()),
            insurance=Insurance(**self.insurance.model_dump()),
            goals=Goals(**self.goals.model_dump()),
            behaviors=Behaviors(**self.behaviors.model_dump()),
        )

    @classmethod
    def from_domain(cls, data: FinancialData, mode: Optional[AnalysisMode] = None) -> "AnalysisRequest":
        """Re-check an assembled record against the same constraints as a posted one"""
        return cls.model_validate({"mode": mode, **asdict(data)})


class QuickAnalysisRequest(CamelModel):
    """Request body for POST /v1/analysis/quick"""

    monthly_income: Money = Field(..., ge=0, description="Monthly take-home income")
    monthly_housing: Money = Field(..., ge=0)
    monthly_expenses: Money = Field(..., ge=0, description="All other monthly expenses")
    total_savings: Money = Field(..., ge=0)
    total_debt: Money = Field(..., ge=0)
    credit_score: int = Field(..., ge=300, le=850)

    def to_domain(self) -> QuickInputs:
        return QuickInputs(**self.model_dump())


class FieldAnalysisRequest(CamelModel):
    """Request body for POST /v1/analysis/fields"""

    mode: Optional[AnalysisMode] = None
    field_values: Dict[str, Union[bool, int, float, str]] = Field(default_factory=dict, alias="fields")


# --- Responses ----------------------------------------------------------------


class FinancialMetricSchema(CamelModel):
    title: str
    value: str
    description: str
    status: str
    numeric_value: Optional[float] = None
    benchmark: Optional[str] = None
    improvement: Optional[str] = None


class HealthIndicatorSchema(CamelModel):
    name: str
    key: str
    score: int
    status: str
    weight: int
    metrics: List[FinancialMetricSchema]
    recommendations: List[str]
    explanation: str


class RecommendationSchema(CamelModel):
    id: str
    category: str
    priority: str
    title: str
    description: str
    action_steps: List[str]
    timeframe: str
    impact_level: str


class DebtToIncomeBreakdownSchema(CamelModel):
    total_debt: float
    total_income: float
    debt_to_income_ratio: float


class NetWorthBreakdownSchema(CamelModel):
    total_assets: float
    total_liabilities: float
    net_worth: float


class SavingsRateBreakdownSchema(CamelModel):
    savings: float
    total_income: float
    formula: str
    savings_rate: float


class KeyMetricsSchema(CamelModel):
    total_monthly_income: float
    total_monthly_expenses: float
    monthly_cash_flow: float
    total_assets: float
    total_liabilities: float
    total_liquid_assets: float
    total_debt: float
    net_worth: float
    emergency_fund_months: float
    debt_to_income_ratio: float
    savings_rate: float
    credit_utilization: float
    liquidity_ratio: float
    asset_allocation_score: float
    dti_breakdown: DebtToIncomeBreakdownSchema
    net_worth_breakdown: NetWorthBreakdownSchema
    savings_rate_breakdown: SavingsRateBreakdownSchema


class RiskFactorSchema(CamelModel):
    category: str
    level: str
    description: str
    mitigation: str


class RiskAssessmentSchema(CamelModel):
    overall_risk_level: str
    risk_factors: List[RiskFactorSchema]
    risk_score: int


class RetirementReadinessSchema(CamelModel):
    years_to_retirement: int
    current_savings: float
    monthly_contribution: float
    projected_value: float
    on_track: bool


class EmergencyGoalSchema(CamelModel):
    target: float
    current: float
    progress: float
    time_to_goal: str


class GoalAnalysisSchema(CamelModel):
    retirement_readiness: RetirementReadinessSchema
    emergency_goal: EmergencyGoalSchema


class WealthProjectionSchema(CamelModel):
    scenario: str
    timeframe: str
    projected_value: float
    monthly_contribution: float
    assumptions: str


class LiquidityRatiosSchema(CamelModel):
    current_ratio: float
    quick_ratio: float
    emergency_fund_ratio: float


class LeverageRatiosSchema(CamelModel):
    debt_to_asset_ratio: float
    debt_to_income_ratio: float
    equity_ratio: float


class EfficiencyRatiosSchema(CamelModel):
    savings_rate: float
    expense_ratio: float
    investment_rate: float


class FinancialRatiosSchema(CamelModel):
    liquidity_ratios: LiquidityRatiosSchema
    leverage_ratios: LeverageRatiosSchema
    efficiency_ratios: EfficiencyRatiosSchema


class ScenarioAnalysisSchema(CamelModel):
    scenario: str
    probability: str
    impact: str
    description: str
    time_to_recover: str
    recommendations: List[str]


class CashFlowAnalysisSchema(CamelModel):
    monthly_income: float
    monthly_expenses: float
    surplus: float
    surplus_percentage: float
    insight: str


class NetWorthAnalysisSchema(CamelModel):
    current_net_worth: float
    net_worth_per_age: float
    projected_growth: float
    insight: str


class DetailedInsightsSchema(CamelModel):
    cash_flow_analysis: CashFlowAnalysisSchema
    net_worth_analysis: NetWorthAnalysisSchema
    risk_factors: List[str]
    opportunities: List[str]


class AnalysisResponse(CamelModel):
    """Response for every /v1/analysis endpoint"""

    overall_health_score: int
    health_level: str
    analysis_mode: AnalysisMode
    health_indicators: List[HealthIndicatorSchema]
    key_metrics: KeyMetricsSchema
    prioritized_recommendations: List[RecommendationSchema]
    liquidity_analysis: List[FinancialMetricSchema]
    debt_analysis: List[FinancialMetricSchema]
    investment_analysis: List[FinancialMetricSchema]
    insurance_analysis: List[FinancialMetricSchema]
    financial_ratios: FinancialRatiosSchema
    risk_assessment: RiskAssessmentSchema
    goal_analysis: GoalAnalysisSchema
    wealth_projections: List[WealthProjectionSchema]
    scenario_analysis: List[ScenarioAnalysisSchema]
    detailed_insights: DetailedInsightsSchema
