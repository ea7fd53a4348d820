from datetime import date
from decimal import Decimal

from models.debt import Debt
from tools.promo import promo_payoff


def _card(balance="6000.00", payment="500.00", promo_end=date(2026, 1, 31)):
    return Debt(
        id=1,
        name="Venture",
        type="credit_card",
        monthly_payment=Decimal(payment),
        current_balance=Decimal(balance) if balance is not None else None,
        promo_end_date=promo_end,
        promo_rate=Decimal("0"),
        post_promo_rate=Decimal("27.99"),
    )


class TestPromoPayoff:
    """Tests for promo_payoff."""

    def test_no_promo_returns_none(self):
        assert promo_payoff(_card(promo_end=None), date(2025, 6, 1)) is None

    def test_months_round_up(self):
        """244 days is 9 months when counted in 30-day months, rounded up."""
        payoff = promo_payoff(_card(), date(2025, 6, 1))

        assert payoff.months_remaining == 9
        assert payoff.monthly_needed == 667
        assert payoff.on_track is False

    def test_on_track_when_payment_covers_need(self):
        payoff = promo_payoff(_card(payment="700.00"), date(2025, 6, 1))

        assert payoff.on_track is True

    def test_expired_promo_needs_whole_balance(self):
        payoff = promo_payoff(_card(balance="1200.40"), date(2026, 3, 1))

        assert payoff.months_remaining == 0
        assert payoff.monthly_needed == 1201

    def test_unknown_balance_needs_nothing(self):
        payoff = promo_payoff(_card(balance=None), date(2025, 6, 1))

        assert payoff.monthly_needed == 0
        assert payoff.on_track is True
