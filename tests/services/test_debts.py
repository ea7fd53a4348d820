import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from services.debts import parse_promo_end_date


class TestDebtService:
    """Tests for DebtService."""

    def test_create_debt_with_unknown_balance(self, services):
        debt = services.debts.create("Car Loan", "car_loan", Decimal("568"))

        assert debt.id is not None
        assert debt.current_balance is None
        assert debt.interest_rate is None
        assert debt.monthly_payment == Decimal("568.00")
        assert debt.has_promo is False

    def test_create_debt_with_promo(self, services):
        debt = services.debts.create(
            "Venture",
            "credit_card",
            Decimal("500"),
            current_balance=Decimal("6200"),
            promo_end_date="2026-06-30",
            promo_rate=Decimal("0"),
            post_promo_rate=Decimal("27.99"),
        )

        assert debt.promo_end_date == date(2026, 6, 30)
        assert debt.post_promo_rate == Decimal("27.99")
        assert debt.has_promo is True

    def test_create_rejects_invalid_promo_date(self, services):
        with pytest.raises(ValueError):
            services.debts.create(
                "Venture", "credit_card", Decimal("500"), promo_end_date="someday"
            )

    def test_create_rejects_unknown_type(self, services):
        with pytest.raises(sqlite3.IntegrityError):
            services.debts.create("Mortgage", "mortgage", Decimal("2000"))

    def test_update_fields(self, services):
        debt = services.debts.create("IRS", "irs", Decimal("426"))

        assert services.debts.update(
            debt.id, current_balance=Decimal("18137.37"), interest_rate=Decimal("8")
        )

        found = services.debts.find(debt.id)
        assert found.current_balance == Decimal("18137.37")
        assert found.interest_rate == Decimal("8.00")
        assert found.last_updated is not None

    def test_update_unknown_debt(self, services):
        assert services.debts.update(999, current_balance=Decimal("1")) is False

    def test_update_rejects_unknown_field(self, services):
        debt = services.debts.create("IRS", "irs", Decimal("426"))

        with pytest.raises(ValueError):
            services.debts.update(debt.id, name="Renamed")


class TestParsePromoEndDate:
    def test_blank_is_none(self):
        assert parse_promo_end_date("") is None
        assert parse_promo_end_date(None) is None

    def test_accepts_datetime_strings(self):
        assert parse_promo_end_date("2026-06-30T00:00:00") == date(2026, 6, 30)
