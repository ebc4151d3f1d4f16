"""
Assembly of complete records from form input.

FIELD_MAP is the static table from UI field keys to (section, attribute) on
FinancialData. It is checked against the dataclass definitions when this
module is imported, so a typo fails at startup instead of at request time.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple

from finhealth.domain.exceptions import UnknownFieldError
from finhealth.domain.models import (
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

SECTION_TYPES = {
    "personal_info": PersonalInfo,
    "income": Income,
    "expenses": Expenses,
    "assets": Assets,
    "liabilities": Liabilities,
    "insurance": Insurance,
    "goals": Goals,
    "behaviors": Behaviors,
}

FIELD_MAP: Dict[str, Tuple[str, str]] = {
    # Personal information
    "age": ("personal_info", "age"),
    "maritalStatus": ("personal_info", "marital_status"),
    "dependents": ("personal_info", "dependents"),
    "state": ("personal_info", "state"),
    "employmentStatus": ("personal_info", "employment_status"),
    "employmentTenure": ("personal_info", "employment_tenure"),
    "healthStatus": ("personal_info", "health_status"),
    "personalHealthInsurance": ("personal_info", "health_insurance"),
    "personalLifeInsurance": ("personal_info", "life_insurance"),
    "personalShortTermDisability": ("personal_info", "short_term_disability"),
    "personalLongTermDisability": ("personal_info", "long_term_disability"),
    # Income
    "primarySalary": ("income", "primary_salary"),
    "secondaryIncome": ("income", "secondary_income"),
    "businessIncome": ("income", "business_income"),
    "investmentIncome": ("income", "investment_income"),
    "rentalIncome": ("income", "rental_income"),
    "benefitsIncome": ("income", "benefits_income"),
    "otherIncome": ("income", "other_income"),
    "incomeGrowthRate": ("income", "income_growth_rate"),
    "incomeVariability": ("income", "income_variability"),
    "effectiveTaxRate": ("income", "effective_tax_rate"),
    # Expenses
    "housing": ("expenses", "housing"),
    "utilities": ("expenses", "utilities"),
    "insurance": ("expenses", "insurance"),
    "loanPayments": ("expenses", "loan_payments"),
    "childcare": ("expenses", "childcare"),
    "food": ("expenses", "food"),
    "transportation": ("expenses", "transportation"),
    "healthcare": ("expenses", "healthcare"),
    "clothing": ("expenses", "clothing"),
    "personalCare": ("expenses", "personal_care"),
    "entertainment": ("expenses", "entertainment"),
    "diningOut": ("expenses", "dining_out"),
    "hobbies": ("expenses", "hobbies"),
    "subscriptions": ("expenses", "subscriptions"),
    "shopping": ("expenses", "shopping"),
    "travel": ("expenses", "travel"),
    "creditCardPayments": ("expenses", "credit_card_payments"),
    "studentLoanPayments": ("expenses", "student_loan_payments"),
    "otherDebtPayments": ("expenses", "other_debt_payments"),
    # Assets
    "checking": ("assets", "checking"),
    "savings": ("assets", "savings"),
    "moneyMarket": ("assets", "money_market"),
    "emergencyFund": ("assets", "emergency_fund"),
    "employer401k": ("assets", "employer_401k"),
    "traditionalIRA": ("assets", "traditional_ira"),
    "rothIRA": ("assets", "roth_ira"),
    "brokerageAccounts": ("assets", "brokerage_accounts"),
    "stocks": ("assets", "stocks"),
    "bonds": ("assets", "bonds"),
    "mutualFunds": ("assets", "mutual_funds"),
    "primaryResidence": ("assets", "primary_residence"),
    "investmentProperties": ("assets", "investment_properties"),
    "cryptocurrency": ("assets", "cryptocurrency"),
    "preciousMetals": ("assets", "precious_metals"),
    "collectibles": ("assets", "collectibles"),
    "businessEquity": ("assets", "business_equity"),
    "otherAssets": ("assets", "other_assets"),
    # Liabilities
    "mortgageBalance": ("liabilities", "mortgage_balance"),
    "homeEquityLoan": ("liabilities", "home_equity_loan"),
    "autoLoans": ("liabilities", "auto_loans"),
    "securedCreditLines": ("liabilities", "secured_credit_lines"),
    "creditCardDebt": ("liabilities", "credit_card_debt"),
    "personalLoans": ("liabilities", "personal_loans"),
    "studentLoans": ("liabilities", "student_loans"),
    "medicalDebt": ("liabilities", "medical_debt"),
    "businessLoans": ("liabilities", "business_loans"),
    "businessCreditLines": ("liabilities", "business_credit_lines"),
    "taxDebt": ("liabilities", "tax_debt"),
    "legalJudgments": ("liabilities", "legal_judgments"),
    "otherDebt": ("liabilities", "other_debt"),
    "creditScore": ("liabilities", "credit_score"),
    "totalCreditLimit": ("liabilities", "total_credit_limit"),
    # Insurance
    "healthInsurance": ("insurance", "health_insurance"),
    "healthDeductible": ("insurance", "health_deductible"),
    "healthOutOfPocketMax": ("insurance", "health_out_of_pocket_max"),
    "lifeInsurance": ("insurance", "life_insurance"),
    "lifeCoverageAmount": ("insurance", "life_coverage_amount"),
    "shortTermDisability": ("insurance", "short_term_disability"),
    "longTermDisability": ("insurance", "long_term_disability"),
    "disabilityCoveragePercent": ("insurance", "disability_coverage_percent"),
    "homeInsurance": ("insurance", "home_insurance"),
    "autoInsurance": ("insurance", "auto_insurance"),
    "umbrellaPolicy": ("insurance", "umbrella_policy"),
    "insuranceConfidence": ("insurance", "insurance_confidence"),
    # Goals
    "emergencyFundTarget": ("goals", "emergency_fund_target"),
    "debtPayoffGoal": ("goals", "debt_payoff_goal"),
    "majorPurchaseAmount": ("goals", "major_purchase_amount"),
    "homeDownPayment": ("goals", "home_down_payment"),
    "educationFunding": ("goals", "education_funding"),
    "careerChangeBuffer": ("goals", "career_change_buffer"),
    "retirementAge": ("goals", "retirement_age"),
    "retirementIncomeNeeded": ("goals", "retirement_income_needed"),
    "legacyGoalAmount": ("goals", "legacy_goal_amount"),
    "retirementConfidence": ("goals", "retirement_confidence"),
    "longTermGoalConfidence": ("goals", "long_term_goal_confidence"),
    "riskTolerance": ("goals", "risk_tolerance"),
    "investmentExperience": ("goals", "investment_experience"),
    # Behaviors
    "billPaymentReliability": ("behaviors", "bill_payment_reliability"),
    "budgetingMethod": ("behaviors", "budgeting_method"),
    "financialPlanningEngagement": ("behaviors", "financial_planning_engagement"),
    "automaticSavings": ("behaviors", "automatic_savings"),
    "monthlyInvestmentContribution": ("behaviors", "monthly_investment_contribution"),
    "emergencyFundPriority": ("behaviors", "emergency_fund_priority"),
    "impulseSpendingFrequency": ("behaviors", "impulse_spending_frequency"),
    "expenseTrackingMethod": ("behaviors", "expense_tracking_method"),
}


def _validate_field_map() -> None:
    for key, (section, attribute) in FIELD_MAP.items():
        section_type = SECTION_TYPES.get(section)
        if section_type is None:
            raise ValueError(f"Field '{key}' targets unknown section '{section}'")
        if attribute not in {f.name for f in fields(section_type)}:
            raise ValueError(f"Field '{key}' targets unknown attribute '{section}.{attribute}'")


_validate_field_map()


def apply_field_values(data: FinancialData, values: Mapping[str, Any]) -> FinancialData:
    """Return a copy of data with each UI field key set to its value"""
    unknown = sorted(key for key in values if key not in FIELD_MAP)
    if unknown:
        raise UnknownFieldError(f"Unknown form field(s): {', '.join(unknown)}")

    updates: Dict[str, Dict[str, Any]] = {}
    for key, value in values.items():
        section, attribute = FIELD_MAP[key]
        updates.setdefault(section, {})[attribute] = value

    sections = {section: replace(getattr(data, section), **changes) for section, changes in updates.items()}
    return replace(data, **sections)


def default_financial_data() -> FinancialData:
    """Baseline record used to pre-fill the comprehensive form"""
    return FinancialData(
        personal_info=PersonalInfo(
            age=30,
            marital_status="single",
            dependents=0,
            employment_status="employed",
            employment_tenure=3,
            health_insurance=True,
        ),
        income=Income(
            primary_salary=5000,
            income_growth_rate=0.03,
            income_variability="stable",
            effective_tax_rate=0.22,
        ),
        expenses=Expenses(
            housing=1500,
            utilities=200,
            insurance=150,
            loan_payments=400,
            food=400,
            transportation=300,
            healthcare=150,
            clothing=100,
            personal_care=50,
            entertainment=100,
            dining_out=150,
            hobbies=50,
            subscriptions=50,
            shopping=100,
            travel=200,
            credit_card_payments=100,
            student_loan_payments=200,
            other_debt_payments=100,
        ),
        assets=Assets(
            checking=2000,
            savings=5000,
            emergency_fund=3000,
            employer_401k=25000,
        ),
        liabilities=Liabilities(
            auto_loans=8000,
            credit_card_debt=2000,
            student_loans=15000,
            credit_score=720,
            total_credit_limit=10000,
        ),
        insurance=Insurance(health_insurance=True, insurance_confidence="somewhat-confident"),
        goals=Goals(retirement_age=65, retirement_income_needed=4000),
        behaviors=Behaviors(monthly_investment_contribution=300),
    )


@dataclass(frozen=True)
class QuickInputs:
    """The six figures collected by the quick analysis form"""

    monthly_income: float
    monthly_housing: float
    monthly_expenses: float
    total_savings: float
    total_debt: float
    credit_score: int


def _quick_bill_reliability(credit_score: float) -> str:
    if credit_score > 750:
        return "always-on-time"
    if credit_score > 650:
        return "usually-on-time"
    return "sometimes-late"


def build_quick_record(inputs: QuickInputs) -> FinancialData:
    """
    Expand quick-form inputs into a complete record.

    Other monthly expenses are booked under food so they count toward the
    essential-expense rules; savings land in checking and debt in credit cards.
    """
    outgoings = inputs.monthly_housing + inputs.monthly_expenses

    return FinancialData(
        personal_info=PersonalInfo(
            age=35,
            marital_status="single",
            dependents=0,
            employment_status="employed",
            employment_tenure=3,
            health_status="good",
            health_insurance=True,
        ),
        income=Income(
            primary_salary=inputs.monthly_income,
            income_growth_rate=0.03,
            income_variability="stable",
            effective_tax_rate=0.22,
        ),
        expenses=Expenses(housing=inputs.monthly_housing, food=inputs.monthly_expenses),
        assets=Assets(checking=inputs.total_savings),
        liabilities=Liabilities(credit_card_debt=inputs.total_debt, credit_score=inputs.credit_score),
        insurance=Insurance(health_insurance=True, insurance_confidence="somewhat-confident"),
        goals=Goals(
            debt_payoff_goal=inputs.total_debt > 0,
            retirement_age=65,
            retirement_confidence="somewhat-confident",
            long_term_goal_confidence="somewhat-confident",
        ),
        behaviors=Behaviors(
            bill_payment_reliability=_quick_bill_reliability(inputs.credit_score),
            budgeting_method="simple-tracking",
            financial_planning_engagement="occasionally-plan",
            automatic_savings=inputs.total_savings > inputs.monthly_income,
            monthly_investment_contribution=0,
            emergency_fund_priority="high" if inputs.total_savings < outgoings * 3 else "medium",
        ),
    )
