from datetime import date
from decimal import Decimal

from tools.discretionary import (
    DISCRETIONARY_CATEGORIES,
    CategoryAllowance,
    total_monthly,
    total_semi_monthly,
)
from tools.spending import (
    aggregate_by_category,
    bucket_spending,
    build_breakdown,
    summarize_discretionary,
)
from tests.helpers import make_transaction

START = date(2025, 3, 1)
END = date(2025, 3, 15)


class TestDiscretionaryTable:
    """Tests for the discretionary allowance table."""

    def test_default_period_total(self):
        """The default table allows $1,125 per pay period."""
        assert total_semi_monthly() == Decimal("1125")
        assert total_monthly() == Decimal("2250")

    def test_semi_monthly_is_half_of_monthly(self):
        for allowance in DISCRETIONARY_CATEGORIES.values():
            assert allowance.semi_monthly * 2 == allowance.monthly


class TestBucketSpending:
    """Tests for bucket_spending."""

    def test_sums_positive_amounts_by_category(self):
        transactions = [
            make_transaction(date(2025, 3, 2), "40.00", "Groceries"),
            make_transaction(date(2025, 3, 5), "60.50", "Groceries"),
            make_transaction(date(2025, 3, 6), "25.00", "Delivery"),
        ]

        buckets = bucket_spending(transactions, START, END)

        assert buckets == {"Groceries": Decimal("100.50"), "Delivery": Decimal("25.00")}

    def test_refunds_and_excluded_rows_are_ignored(self):
        """Negative amounts and excluded transactions are not spend."""
        transactions = [
            make_transaction(date(2025, 3, 2), "40.00", "Groceries"),
            make_transaction(date(2025, 3, 3), "-15.00", "Groceries"),
            make_transaction(date(2025, 3, 4), "500.00", "Shops", is_excluded=True),
        ]

        buckets = bucket_spending(transactions, START, END)

        assert buckets == {"Groceries": Decimal("40.00")}

    def test_window_bounds_are_inclusive(self):
        transactions = [
            make_transaction(date(2025, 2, 28), "10.00"),
            make_transaction(START, "1.00"),
            make_transaction(END, "2.00"),
            make_transaction(date(2025, 3, 16), "10.00"),
        ]

        assert bucket_spending(transactions, START, END) == {"Groceries": Decimal("3.00")}

    def test_blank_category_counts_as_other(self):
        transaction = make_transaction(date(2025, 3, 2), "12.00", "Other")
        transaction.category = ""

        assert bucket_spending([transaction], START, END) == {"Other": Decimal("12.00")}

    def test_unknown_category_keeps_own_bucket(self):
        """Categories outside the table are bucketed but never shown in the breakdown."""
        transactions = [make_transaction(date(2025, 3, 2), "80.00", "Rent")]

        assert bucket_spending(transactions, START, END) == {"Rent": Decimal("80.00")}
        rows = aggregate_by_category(transactions, START, END)
        assert all(row.spent == 0 for row in rows)

    def test_aggregation_is_idempotent(self):
        """Running twice over the same rows gives the same totals."""
        transactions = [
            make_transaction(date(2025, 3, 2), "40.00", "Groceries"),
            make_transaction(date(2025, 3, 9), "12.34", "Pets"),
        ]

        first = aggregate_by_category(transactions, START, END)
        second = aggregate_by_category(transactions, START, END)

        assert first == second


class TestBuildBreakdown:
    """Tests for build_breakdown and summarize_discretionary."""

    def test_one_row_per_table_category(self):
        rows = build_breakdown({})

        assert [row.category for row in rows] == list(DISCRETIONARY_CATEGORIES)
        assert all(row.percent_used == 0 and not row.is_over for row in rows)

    def test_percent_used_and_over_flag(self):
        rows = build_breakdown({"Delivery": Decimal("150.00")})
        delivery = next(row for row in rows if row.category == "Delivery")

        assert delivery.budget == Decimal("100")
        assert delivery.remaining == Decimal("-50.00")
        assert delivery.percent_used == 150
        assert delivery.is_over is True

    def test_zero_budget_percent_guard(self):
        """A zero allowance reports 0% instead of dividing by zero."""
        table = {"Gifts": CategoryAllowance(monthly=Decimal("0"), semi_monthly=Decimal("0"))}

        rows = build_breakdown({"Gifts": Decimal("20")}, table)

        assert rows[0].percent_used == 0
        assert rows[0].is_over is True

    def test_summary_totals(self):
        by_category = build_breakdown({"Groceries": Decimal("100"), "Pets": Decimal("25")})

        summary = summarize_discretionary(by_category)

        assert summary.total_budget == Decimal("1125")
        assert summary.total_spent == Decimal("125")
        assert summary.remaining == Decimal("1000")
        assert summary.category("Pets").spent == Decimal("25")
        assert summary.category("Rent") is None
