"""Metrics calculator - derives ratios, totals and net worth from the raw record"""

from dataclasses import fields
from typing import Any

from finhealth.domain.models import (
    Assets,
    DebtToIncomeBreakdown,
    Expenses,
    FinancialData,
    Income,
    KeyMetrics,
    Liabilities,
    NetWorthBreakdown,
    SavingsRateBreakdown,
)
from finhealth.utils.format_utils import finite_or_zero, safe_divide, to_number

INCOME_FIELDS = (
    "primary_salary",
    "secondary_income",
    "business_income",
    "investment_income",
    "rental_income",
    "benefits_income",
    "other_income",
)

EXPENSE_FIELDS = tuple(f.name for f in fields(Expenses))

ASSET_FIELDS = tuple(f.name for f in fields(Assets))

LIQUID_ASSET_FIELDS = ("checking", "savings", "money_market", "emergency_fund")

# Equity-like holdings used for the allocation score
ALLOCATION_FIELDS = ("employer_401k", "traditional_ira", "roth_ira", "brokerage_accounts", "stocks")

INVESTMENT_FIELDS = ALLOCATION_FIELDS + ("bonds", "mutual_funds")

RETIREMENT_FIELDS = ("employer_401k", "traditional_ira", "roth_ira")

LIABILITY_FIELDS = tuple(
    f.name for f in fields(Liabilities) if f.name not in ("credit_score", "total_credit_limit")
)

SAVINGS_RATE_FORMULA = "(Monthly Cash Flow - Monthly Investment Contribution) / Total Monthly Income x 100"


def sum_fields(section: Any, names: tuple) -> float:
    """Sum named attributes of a record section; missing or invalid values count as 0"""
    return sum(to_number(getattr(section, name, 0)) for name in names)


def total_monthly_income(income: Income) -> float:
    return sum_fields(income, INCOME_FIELDS)


def total_monthly_expenses(expenses: Expenses) -> float:
    return sum_fields(expenses, EXPENSE_FIELDS)


def total_assets(assets: Assets) -> float:
    return sum_fields(assets, ASSET_FIELDS)


def total_liabilities(liabilities: Liabilities) -> float:
    return sum_fields(liabilities, LIABILITY_FIELDS)


def total_liquid_assets(assets: Assets) -> float:
    return sum_fields(assets, LIQUID_ASSET_FIELDS)


def calculate_debt_to_income(total_debt: float, monthly_income: float) -> float:
    """
    Outstanding debt balance as a percentage of *monthly* income.

    Ratios above 100 are normal under this convention. With no income the ratio
    is pinned to 100 when any debt exists, else 0.
    """
    if monthly_income <= 0:
        return 100.0 if total_debt > 0 else 0.0
    return safe_divide(total_debt, monthly_income) * 100


def calculate_liquidity_ratio(liquid_assets: float, liabilities: float) -> float:
    if liabilities > 0:
        return safe_divide(liquid_assets, liabilities)
    return 100.0 if liquid_assets > 0 else 0.0


def calculate_asset_allocation_score(data: FinancialData) -> float:
    """
    Closeness of the equity share of assets to an age-based target.

    target = (100 - age) / 100; every 0.5 of deviation costs the full 100 points.
    """
    assets_total = finite_or_zero(total_assets(data.assets))
    if assets_total <= 0:
        return 0.0

    investment_ratio = finite_or_zero(sum_fields(data.assets, ALLOCATION_FIELDS) / assets_total)
    target_equity_ratio = (100 - to_number(data.personal_info.age)) / 100

    score = 100 - abs(investment_ratio - target_equity_ratio) * 200
    return float(round(min(100.0, max(0.0, score))))


def compute_key_metrics(data: FinancialData) -> KeyMetrics:
    """
    Derive the metrics bag from a validated record.

    Total function: zero or negative denominators resolve to 0, and any total
    that overflows to inf or NaN is reported as 0.
    """
    income = finite_or_zero(total_monthly_income(data.income))
    expenses = finite_or_zero(total_monthly_expenses(data.expenses))
    cash_flow = finite_or_zero(income - expenses)

    assets_total = finite_or_zero(total_assets(data.assets))
    liabilities_total = finite_or_zero(total_liabilities(data.liabilities))
    net_worth = finite_or_zero(assets_total - liabilities_total)
    liquid = finite_or_zero(total_liquid_assets(data.assets))

    # Every liability balance counts as debt
    total_debt = liabilities_total

    investment_contribution = to_number(data.behaviors.monthly_investment_contribution)
    savings = finite_or_zero(cash_flow - investment_contribution)
    savings_rate = finite_or_zero(safe_divide(savings, income) * 100) if income > 0 else 0.0

    credit_utilization = finite_or_zero(
        safe_divide(to_number(data.liabilities.credit_card_debt), to_number(data.liabilities.total_credit_limit))
        * 100
    )

    debt_to_income = finite_or_zero(calculate_debt_to_income(total_debt, income))

    return KeyMetrics(
        total_monthly_income=income,
        total_monthly_expenses=expenses,
        monthly_cash_flow=cash_flow,
        total_assets=assets_total,
        total_liabilities=liabilities_total,
        total_liquid_assets=liquid,
        total_debt=total_debt,
        net_worth=net_worth,
        emergency_fund_months=safe_divide(liquid, expenses),
        debt_to_income_ratio=debt_to_income,
        savings_rate=savings_rate,
        credit_utilization=credit_utilization,
        liquidity_ratio=calculate_liquidity_ratio(liquid, liabilities_total),
        asset_allocation_score=calculate_asset_allocation_score(data),
        dti_breakdown=DebtToIncomeBreakdown(
            total_debt=total_debt,
            total_income=income,
            debt_to_income_ratio=debt_to_income,
        ),
        net_worth_breakdown=NetWorthBreakdown(
            total_assets=assets_total,
            total_liabilities=liabilities_total,
            net_worth=net_worth,
        ),
        savings_rate_breakdown=SavingsRateBreakdown(
            savings=savings,
            total_income=income,
            formula=SAVINGS_RATE_FORMULA,
            savings_rate=savings_rate,
        ),
    )
