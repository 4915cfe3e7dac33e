"""
Unit Tests for the CreditWise Feature Extractor.

These tests verify:
1. Each of the five factor calculations
2. The insufficient-data defaults and the neutral empty-history profile
3. Bounds and determinism of the extractor

Test Categories:
- TestBillPaymentHistory: bill keyword matching and month counting
- TestIncomeConsistency: coefficient of variation scoring
- TestExpenseManagement: expense/income ratio bands
- TestFinancialGrowth: first vs last income month
- TestTransactionDiversity: income categories and merchants
- TestAnalyzeFactors: full extractor behaviour
"""

from datetime import date

import pytest

from creditwise.service.scoring.factors import (
    EMPTY_HISTORY_FACTORS,
    INSUFFICIENT_DATA_DEFAULTS,
    analyze_factors,
    score_bill_payment_history,
    score_expense_management,
    score_financial_growth,
    score_income_consistency,
    score_transaction_diversity,
)
from creditwise.service.scoring.models import CreditFactors, Transaction, TransactionType
from creditwise.service.scoring.settings import ScoringSettings


# =============================================================================
# Test Fixtures
# =============================================================================

def income(
    day: date,
    amount: float,
    category: str = "Sales",
    merchant: str = "Walk-in customer",
) -> Transaction:
    return Transaction(
        date=day,
        amount=amount,
        type=TransactionType.INCOME,
        category=category,
        merchant=merchant,
    )


def expense(
    day: date,
    amount: float,
    category: str = "Supplies",
    merchant: str = "Wholesale market",
) -> Transaction:
    return Transaction(
        date=day,
        amount=amount,
        type=TransactionType.EXPENSE,
        category=category,
        merchant=merchant,
    )


def monthly_income(amounts: list, year: int = 2024) -> list:
    """One income transaction on the 5th of each consecutive month."""
    return [income(date(year, i + 1, 5), amount) for i, amount in enumerate(amounts)]


# =============================================================================
# Bill Payment History Tests
# =============================================================================

class TestBillPaymentHistory:
    """Tests for score_bill_payment_history."""

    def test_three_months_of_bills_is_full_score(self):
        transactions = [
            expense(date(2024, 1, 3), 50, category="Utilities"),
            expense(date(2024, 2, 3), 50, category="Rent"),
            expense(date(2024, 3, 3), 50, category="Phone"),
        ]
        assert score_bill_payment_history(transactions) == 100

    def test_one_month_of_bills(self):
        transactions = [expense(date(2024, 1, 3), 50, category="Internet")]
        assert score_bill_payment_history(transactions) == 33

    def test_two_months_rounds_half_up(self):
        transactions = [
            expense(date(2024, 1, 3), 50, category="utilities"),
            expense(date(2024, 2, 3), 50, category="utilities"),
        ]
        assert score_bill_payment_history(transactions) == 67

    def test_several_bills_in_same_month_count_once(self):
        transactions = [
            expense(date(2024, 1, 3), 50, category="Rent"),
            expense(date(2024, 1, 10), 20, category="Phone"),
            expense(date(2024, 1, 20), 30, category="Internet"),
        ]
        assert score_bill_payment_history(transactions) == 33

    def test_more_than_target_months_is_capped(self):
        transactions = [
            expense(date(2024, m, 1), 40, category="Mobile Phone Bill")
            for m in range(1, 7)
        ]
        assert score_bill_payment_history(transactions) == 100

    def test_keyword_match_is_case_insensitive_substring(self):
        transactions = [expense(date(2024, 1, 3), 50, category="ELECTRICITY & UTILITIES")]
        assert score_bill_payment_history(transactions) == 33

    def test_income_with_bill_category_does_not_count(self):
        transactions = [income(date(2024, 1, 3), 500, category="Rent")]
        assert score_bill_payment_history(transactions) == INSUFFICIENT_DATA_DEFAULTS["bill_payment_history"]

    def test_no_bills_returns_default(self):
        transactions = [expense(date(2024, 1, 3), 50, category="Groceries")]
        assert score_bill_payment_history(transactions) == 40

    def test_custom_target_months(self):
        settings = ScoringSettings(bill_target_months=6)
        transactions = [
            expense(date(2024, m, 1), 40, category="Rent") for m in range(1, 4)
        ]
        assert score_bill_payment_history(transactions, settings) == 50


# =============================================================================
# Income Consistency Tests
# =============================================================================

class TestIncomeConsistency:
    """Tests for score_income_consistency."""

    def test_constant_income_is_perfect(self):
        assert score_income_consistency(monthly_income([500, 500, 500, 500])) == 100

    def test_moderate_variation(self):
        # mean 200, population std 100, cv 0.5 -> 100 - 25
        assert score_income_consistency(monthly_income([100, 300])) == 75

    def test_high_variation(self):
        # mean 400, std ~424.26, cv ~1.0607 -> ~46.97
        assert score_income_consistency(monthly_income([100, 100, 1000])) == 47

    def test_income_summed_per_month(self):
        transactions = [
            income(date(2024, 1, 2), 200),
            income(date(2024, 1, 20), 300),
            income(date(2024, 2, 10), 500),
        ]
        assert score_income_consistency(transactions) == 100

    def test_single_month_returns_default(self):
        assert score_income_consistency(monthly_income([800])) == 30

    def test_no_income_returns_default(self):
        transactions = [expense(date(2024, 1, 3), 50)]
        assert score_income_consistency(transactions) == INSUFFICIENT_DATA_DEFAULTS["income_consistency"]

    def test_extreme_variation_floors_at_zero(self):
        assert score_income_consistency(monthly_income([1, 1, 1, 1, 10000])) == 0


# =============================================================================
# Expense Management Tests
# =============================================================================

class TestExpenseManagement:
    """Tests for score_expense_management."""

    def test_half_of_income_spent(self):
        transactions = [income(date(2024, 1, 1), 1000), expense(date(2024, 1, 2), 500)]
        assert score_expense_management(transactions) == 65

    def test_no_expenses_is_perfect(self):
        transactions = [income(date(2024, 1, 1), 1000)]
        assert score_expense_management(transactions) == 100

    def test_middle_band(self):
        # ratio 0.8 -> 60 - 10
        transactions = [income(date(2024, 1, 1), 1000), expense(date(2024, 1, 2), 800)]
        assert score_expense_management(transactions) == 50

    def test_break_even(self):
        # ratio 1.0 -> 40 - 10
        transactions = [income(date(2024, 1, 1), 1000), expense(date(2024, 1, 2), 1000)]
        assert score_expense_management(transactions) == 30

    def test_overspending_floors_at_twenty(self):
        transactions = [income(date(2024, 1, 1), 1000), expense(date(2024, 1, 2), 2000)]
        assert score_expense_management(transactions) == 20

    def test_totals_span_all_dates(self):
        transactions = [
            income(date(2024, 1, 1), 600),
            income(date(2024, 3, 1), 400),
            expense(date(2024, 2, 1), 250),
            expense(date(2024, 4, 1), 250),
        ]
        assert score_expense_management(transactions) == 65

    def test_no_income_returns_default(self):
        transactions = [expense(date(2024, 1, 2), 500)]
        assert score_expense_management(transactions) == 40


# =============================================================================
# Financial Growth Tests
# =============================================================================

class TestFinancialGrowth:
    """Tests for score_financial_growth."""

    def test_flat_income(self):
        assert score_financial_growth(monthly_income([1000, 1000])) == 50

    def test_small_growth_uses_stable_band(self):
        # growth 0.05 -> 50 + 5
        assert score_financial_growth(monthly_income([1000, 1050])) == 55

    def test_growth_at_ten_percent_stays_in_stable_band(self):
        assert score_financial_growth(monthly_income([1000, 1100])) == 60

    def test_strong_growth_is_capped(self):
        # growth 0.5 -> 60 + 100
        assert score_financial_growth(monthly_income([1000, 1200, 1500])) == 100

    def test_moderate_growth(self):
        # growth 0.15 -> 60 + 30
        assert score_financial_growth(monthly_income([1000, 1150])) == 90

    def test_decline(self):
        # growth -0.2 -> 50 - 20
        assert score_financial_growth(monthly_income([1000, 800])) == 30

    def test_collapse_floors_at_zero(self):
        assert score_financial_growth(monthly_income([1000, 400])) == 0

    def test_uses_calendar_order_not_input_order(self):
        transactions = list(reversed(monthly_income([1000, 700, 1050])))
        assert score_financial_growth(transactions) == 55

    def test_single_month_returns_default(self):
        assert score_financial_growth(monthly_income([1000])) == 50

    def test_zero_first_month_returns_default(self):
        assert score_financial_growth(monthly_income([0, 1000])) == INSUFFICIENT_DATA_DEFAULTS["financial_growth"]


# =============================================================================
# Transaction Diversity Tests
# =============================================================================

class TestTransactionDiversity:
    """Tests for score_transaction_diversity."""

    def test_categories_and_merchants(self):
        transactions = [
            income(date(2024, 1, 1), 100, category="Sales", merchant="Shop A"),
            income(date(2024, 1, 2), 100, category="Services", merchant="Shop B"),
            income(date(2024, 1, 3), 100, category="Sales", merchant="Shop C"),
        ]
        # 2 categories * 20 + 3 merchants * 10
        assert score_transaction_diversity(transactions) == 70

    def test_blank_values_ignored(self):
        transactions = [
            income(date(2024, 1, 1), 100, category="", merchant="  "),
            income(date(2024, 1, 2), 100, category="Sales", merchant="Shop A"),
        ]
        assert score_transaction_diversity(transactions) == 30

    def test_expenses_do_not_count(self):
        transactions = [
            income(date(2024, 1, 1), 100, category="Sales", merchant="Shop A"),
            expense(date(2024, 1, 2), 50, category="Rent", merchant="Landlord"),
        ]
        assert score_transaction_diversity(transactions) == 30

    def test_capped_at_hundred(self):
        transactions = [
            income(date(2024, 1, i + 1), 100, category=f"Cat {i}", merchant=f"Client {i}")
            for i in range(6)
        ]
        assert score_transaction_diversity(transactions) == 100

    def test_no_income_returns_default(self):
        transactions = [expense(date(2024, 1, 2), 50)]
        assert score_transaction_diversity(transactions) == 30


# =============================================================================
# Full Extractor Tests
# =============================================================================

class TestAnalyzeFactors:
    """Tests for analyze_factors."""

    def test_empty_history_is_neutral(self):
        factors = analyze_factors([])

        assert factors == CreditFactors(50, 50, 50, 50, 50)
        assert factors == EMPTY_HISTORY_FACTORS

    def test_insufficient_data_uses_default_table(self):
        factors = analyze_factors([expense(date(2024, 1, 2), 50, category="Groceries")])

        assert factors.to_dict() == dict(INSUFFICIENT_DATA_DEFAULTS)

    def test_default_table_is_read_only(self):
        with pytest.raises(TypeError):
            INSUFFICIENT_DATA_DEFAULTS["income_consistency"] = 0

    def test_healthy_worker(self):
        transactions = []
        for month in range(1, 5):
            transactions.append(income(date(2024, month, 1), 30000, "Sales", "Market stall"))
            transactions.append(income(date(2024, month, 15), 10000, "Delivery", "Courier app"))
            transactions.append(expense(date(2024, month, 5), 8000, "Rent", "Landlord"))
            transactions.append(expense(date(2024, month, 7), 2000, "Utilities", "Power company"))
            transactions.append(expense(date(2024, month, 20), 10000, "Stock", "Wholesaler"))

        factors = analyze_factors(transactions)

        assert factors.bill_payment_history == 100
        assert factors.income_consistency == 100
        assert factors.expense_management == 65
        assert factors.financial_growth == 50
        assert factors.transaction_diversity == 60

    def test_all_factors_bounded(self):
        histories = [
            [income(date(2024, 1, 1), 0.01), expense(date(2024, 1, 2), 10 ** 9)],
            monthly_income([1, 10 ** 7, 3, 10 ** 6]),
            [expense(date(2024, m, 1), 99, "Subscription") for m in range(1, 13)],
            [income(date(2024, 1, 1), 10 ** 9)],
        ]
        for transactions in histories:
            for name, value in analyze_factors(transactions).items():
                assert 0 <= value <= 100, name
                assert isinstance(value, int), name

    def test_deterministic(self):
        transactions = monthly_income([1000, 1300, 900]) + [
            expense(date(2024, 2, 4), 700, "Rent"),
        ]

        assert analyze_factors(transactions) == analyze_factors(list(transactions))
        assert analyze_factors(transactions) == analyze_factors(list(reversed(transactions)))
