import io
from datetime import date
from decimal import Decimal

import pytest

from ingestion import NoTransactionsError, ingest, parse_amount, parse_date


class TestParseHelpers:
    """Tests for parse_date and parse_amount."""

    def test_parse_date_formats(self):
        assert parse_date("01/15/2025") == date(2025, 1, 15)
        assert parse_date("2025-01-15") == date(2025, 1, 15)
        assert parse_date("1/5/2025") == date(2025, 1, 5)

    def test_parse_date_rejects_other_formats(self):
        with pytest.raises(ValueError):
            parse_date("15.01.2025")

    def test_parse_amount_strips_symbols(self):
        assert parse_amount("$1,234.56") == Decimal("1234.56")
        assert parse_amount(" -12.50 ") == Decimal("-12.50")

    def test_parenthesized_amount_is_negative(self):
        assert parse_amount("(12.34)") == Decimal("-12.34")
        assert parse_amount("($1,000.00)") == Decimal("-1000.00")

    def test_parse_amount_rejects_text(self):
        with pytest.raises(ValueError):
            parse_amount("n/a")


class TestIngest:
    """Tests for header-driven CSV parsing."""

    def test_basic_file(self):
        csv_content = """Date,Description,Amount,Category
01/15/2025,WHOLE FOODS,84.12,Groceries
2025-01-16,"DOORDASH, INC",23.50,Delivery
"""
        parsed = ingest(io.StringIO(csv_content))

        assert len(parsed.transactions) == 2
        first, second = parsed.transactions
        assert first.date == date(2025, 1, 15)
        assert first.amount == Decimal("84.12")
        assert first.category == "Groceries"
        assert second.description == "DOORDASH, INC"

    def test_header_synonyms_case_insensitive(self):
        csv_content = """POSTED DATE,Merchant,Value
03/01/2025,Costco,(45.00)
"""
        parsed = ingest(io.StringIO(csv_content))

        transaction = parsed.transactions[0]
        assert transaction.description == "Costco"
        assert transaction.amount == Decimal("-45.00")
        # No category column: left for the categorizer
        assert transaction.category is None

    def test_negate_flips_amounts(self):
        csv_content = """Date,Description,Amount
03/01/2025,Costco,-45.00
03/02/2025,Refund,10.00
"""
        parsed = ingest(io.StringIO(csv_content), negate=True)

        assert [t.amount for t in parsed.transactions] == [Decimal("45.00"), Decimal("-10.00")]

    def test_bad_rows_are_dropped(self):
        csv_content = """Date,Description,Amount
not a date,Costco,45.00
03/02/2025,,10.00
03/03/2025,Shell,abc
03/04/2025,Trader Joe's,31.07
"""
        parsed = ingest(io.StringIO(csv_content))

        assert [t.description for t in parsed.transactions] == ["Trader Joe's"]
        assert parsed.skipped_rows == 3

    def test_missing_columns_raises_with_diagnostics(self):
        csv_content = """When,What
03/01/2025,Costco
"""
        with pytest.raises(NoTransactionsError) as exc_info:
            ingest(io.StringIO(csv_content))

        assert exc_info.value.headers == ["When", "What"]
        assert exc_info.value.sample_row == ["03/01/2025", "Costco"]

    def test_zero_valid_rows_raises(self):
        csv_content = """Date,Description,Amount
garbage,Costco,45.00
"""
        with pytest.raises(NoTransactionsError):
            ingest(io.StringIO(csv_content))

    def test_empty_file_raises(self):
        with pytest.raises(NoTransactionsError):
            ingest(io.StringIO(""))
