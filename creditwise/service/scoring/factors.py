"""
Credit Factor Extraction for the CreditWise Alternative Credit Score.

This module turns a user's raw income/expense transactions into five
bounded factor scores (0-100):
- Bill Payment History (30%)
- Income Consistency (25%)
- Expense Management (20%)
- Financial Growth (15%)
- Transaction Diversity (10%)

Each factor is documented with:
- The calculation algorithm
- Business rationale for why this factor matters
- Edge cases and how they're handled

All functions are pure: no I/O, no clock, no shared state.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence

from .models import CreditFactors, Transaction, round_half_up
from .settings import ScoringSettings, scoring_settings


# Scores used when a factor has too little evidence to be measured.
# Absence of evidence is not evidence of default, so none of these is 0.
INSUFFICIENT_DATA_DEFAULTS: Mapping[str, int] = MappingProxyType({
    "bill_payment_history": 40,
    "income_consistency": 30,
    "expense_management": 40,
    "financial_growth": 50,
    "transaction_diversity": 30,
})

# New users with no history at all get a neutral profile.
EMPTY_HISTORY_FACTORS = CreditFactors(
    bill_payment_history=50,
    income_consistency=50,
    expense_management=50,
    financial_growth=50,
    transaction_diversity=50,
)


def _bounded(value: float) -> int:
    """Clamp to [0, 100] and round half-up to an integer."""
    return int(round_half_up(min(100.0, max(0.0, value))))


def _monthly_income_totals(transactions: Sequence[Transaction]) -> Dict[str, float]:
    totals: Dict[str, float] = defaultdict(float)
    for txn in transactions:
        if txn.is_income:
            totals[txn.month_key] += txn.amount
    return dict(totals)


def is_bill_payment(txn: Transaction, settings: ScoringSettings = scoring_settings) -> bool:
    """True for expenses whose category mentions one of the bill keywords."""
    if not txn.is_expense:
        return False
    category = (txn.category or "").lower()
    return any(keyword in category for keyword in settings.bill_keywords)


def score_bill_payment_history(
    transactions: Sequence[Transaction],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Score how regularly the user pays recurring bills.

    Algorithm:
        1. Keep expenses whose category contains a bill keyword
           (utilities, rent, phone, internet, subscription)
        2. Count distinct calendar months (YYYY-MM) with at least one bill
        3. Score = min(100, months / target_months * 100)

    Business Rationale:
        Paying rent and utilities month after month is the closest thing
        informal workers have to a repayment record. Three consecutive
        months of bills earns the full score.

    Edge Cases:
        - No bill-like expenses: fixed low default (40), not 0

    Args:
        transactions: The user's transactions
        settings: Scoring settings (bill keywords, target months)

    Returns:
        Bill payment score from 0 to 100
    """
    months = {t.month_key for t in transactions if is_bill_payment(t, settings)}

    if not months:
        return INSUFFICIENT_DATA_DEFAULTS["bill_payment_history"]

    return _bounded(len(months) / settings.bill_target_months * 100)


def score_income_consistency(transactions: Sequence[Transaction]) -> int:
    """
    Score how stable the user's monthly income is.

    Algorithm:
        1. Sum income per calendar month
        2. Coefficient of variation: cv = population std_dev / mean
        3. Score = 100 - cv * 50, clamped to [0, 100]

    Business Rationale:
        Irregular income is normal in the informal economy, but the less
        it swings from month to month, the easier it is to budget a
        repayment. A cv of 2 or more (very erratic income) scores 0.

    Edge Cases:
        - Zero or one income month: fixed default (30), variation is unknown
        - Non-positive mean: fixed default (30)

    Args:
        transactions: The user's transactions

    Returns:
        Income consistency score from 0 to 100
    """
    values = list(_monthly_income_totals(transactions).values())

    if len(values) < 2:
        return INSUFFICIENT_DATA_DEFAULTS["income_consistency"]

    mean = sum(values) / len(values)
    if mean <= 0:
        return INSUFFICIENT_DATA_DEFAULTS["income_consistency"]

    variance = sum((v - mean) ** 2 for v in values) / len(values)
    cv = variance ** 0.5 / mean

    return _bounded(100 - cv * 50)


def score_expense_management(transactions: Sequence[Transaction]) -> int:
    """
    Score how much of the user's income is consumed by expenses.

    Algorithm:
        ratio = total_expenses / total_income, then:
        - ratio < 0.7:         100 - ratio * 70          (51-100)
        - 0.7 <= ratio < 0.9:  60 - (ratio - 0.7) * 100  (40-60)
        - ratio >= 0.9:        max(20, 40 - (ratio - 0.9) * 100)

    Business Rationale:
        A user who keeps 30% or more of what they earn has room for a
        loan installment. Spending close to or beyond income leaves none.

    Edge Cases:
        - No income: fixed default (40)

    Args:
        transactions: The user's transactions

    Returns:
        Expense management score from 0 to 100
    """
    total_income = sum(t.amount for t in transactions if t.is_income)
    total_expenses = sum(t.amount for t in transactions if t.is_expense)

    if total_income <= 0:
        return INSUFFICIENT_DATA_DEFAULTS["expense_management"]

    ratio = total_expenses / total_income

    if ratio < 0.7:
        score = 100 - ratio * 70
    elif ratio < 0.9:
        score = 60 - (ratio - 0.7) * 100
    else:
        score = max(20.0, 40 - (ratio - 0.9) * 100)

    return _bounded(score)


def score_financial_growth(transactions: Sequence[Transaction]) -> int:
    """
    Score the trend between the first and the last month of income.

    Algorithm:
        1. Sum income per calendar month
        2. Compare the earliest and latest month (by YYYY-MM key):
           growth = (last - first) / first
        3. growth > 0.1: 60 + growth * 200
           otherwise:    50 + growth * 100 (continuous through decline)

    Business Rationale:
        Growing income means a growing ability to repay. Stable income
        sits around 50; a shrinking business scores below it.

    Edge Cases:
        - Fewer than 2 income months: fixed default (50)
        - First month total of 0: fixed default (50)

    Args:
        transactions: The user's transactions

    Returns:
        Financial growth score from 0 to 100
    """
    monthly = _monthly_income_totals(transactions)

    if len(monthly) < 2:
        return INSUFFICIENT_DATA_DEFAULTS["financial_growth"]

    months = sorted(monthly)
    first = monthly[months[0]]
    last = monthly[months[-1]]

    if first == 0:
        return INSUFFICIENT_DATA_DEFAULTS["financial_growth"]

    growth = (last - first) / first

    if growth > 0.1:
        score = 60 + growth * 200
    else:
        score = 50 + growth * 100

    return _bounded(score)


def score_transaction_diversity(transactions: Sequence[Transaction]) -> int:
    """
    Score how many independent income sources the user has.

    Algorithm:
        Among income transactions count distinct non-empty categories (C)
        and distinct non-empty merchants (M). Score = C * 20 + M * 10.

    Business Rationale:
        Several customers and income streams make a worker less exposed
        to losing any single one of them.

    Edge Cases:
        - No income transactions: fixed default (30)

    Args:
        transactions: The user's transactions

    Returns:
        Transaction diversity score from 0 to 100
    """
    income = [t for t in transactions if t.is_income]

    if not income:
        return INSUFFICIENT_DATA_DEFAULTS["transaction_diversity"]

    categories = {t.category.strip() for t in income if t.category and t.category.strip()}
    merchants = {t.merchant.strip() for t in income if t.merchant and t.merchant.strip()}

    return _bounded(len(categories) * 20 + len(merchants) * 10)


def analyze_factors(
    transactions: List[Transaction],
    settings: ScoringSettings = scoring_settings,
) -> CreditFactors:
    """
    Compute all five credit factors from a transaction history.

    This is the entry point of the feature extractor. An empty history
    yields the neutral profile (50 for every factor) so new users are
    not penalized for having no data.

    Args:
        transactions: The user's transactions, in any order
        settings: Scoring settings

    Returns:
        CreditFactors with every value in [0, 100]
    """
    if not transactions:
        return EMPTY_HISTORY_FACTORS

    return CreditFactors(
        bill_payment_history=score_bill_payment_history(transactions, settings),
        income_consistency=score_income_consistency(transactions),
        expense_management=score_expense_management(transactions),
        financial_growth=score_financial_growth(transactions),
        transaction_diversity=score_transaction_diversity(transactions),
    )
