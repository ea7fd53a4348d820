"""Renders a FinancialSnapshot into the advisor's system briefing.

Pure formatting: every figure comes from the snapshot or from the shared
promo payoff math, and the fixed wording lives in prompts/advisor.yaml.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from llm.prompts.loader import PromptManager
from models.account import CASH_ACCOUNT_TYPES
from models.debt import Debt
from tools.promo import promo_payoff
from tools.snapshot import FinancialSnapshot

PROMPT_NAME = "advisor"


def usd(value: Decimal) -> str:
    """Format an amount as 1,234.56 (the caller adds the dollar sign)."""
    return f"{Decimal(value):,.2f}"


def _bullets(lines: Iterable[str], empty: str) -> str:
    lines = list(lines)
    if not lines:
        return empty
    return "\n".join(lines)


def _rate(value: Optional[Decimal]) -> str:
    return f"{Decimal(value).normalize():f}%" if value is not None else "unknown rate"


def describe_debt(debt: Debt, snapshot: FinancialSnapshot) -> str:
    """One line describing a debt, with its promo countdown when it has one."""
    if debt.current_balance is not None:
        line = f"- {debt.name}: ${usd(debt.current_balance)} remaining"
    else:
        line = f"- {debt.name}: balance unknown"

    payoff = promo_payoff(debt, snapshot.as_of)
    if payoff is not None:
        line += (
            f" at {_rate(debt.promo_rate or Decimal('0'))}"
            f" (promo ends {payoff.promo_end_date.strftime('%b %Y')},"
            f" {payoff.months_remaining} months left, then {_rate(debt.post_promo_rate)})"
        )
    elif debt.interest_rate is not None:
        line += f" at {_rate(debt.interest_rate)}"

    line += f", paying ${usd(debt.monthly_payment)}/month"
    if debt.notes:
        line += f". {debt.notes}"
    return line


def describe_promo(debt: Debt, snapshot: FinancialSnapshot) -> Optional[str]:
    """Payoff alert block for a promotional balance, or None."""
    payoff = promo_payoff(debt, snapshot.as_of)
    if payoff is None:
        return None

    balance = debt.current_balance
    balance_text = f"${usd(balance)}" if balance is not None else "an unknown balance"
    verdict = "ON TRACK" if payoff.on_track else "NEEDS HIGHER PAYMENTS"
    return (
        f"{debt.name} has {balance_text} at {_rate(debt.promo_rate or Decimal('0'))}"
        f" that must be paid off by {payoff.promo_end_date.strftime('%B %Y')}"
        f" or it moves to {_rate(debt.post_promo_rate)}.\n"
        f"- {payoff.months_remaining} months remaining\n"
        f"- Needs about ${payoff.monthly_needed:,}/month to clear in time\n"
        f"- Current payment: ${usd(debt.monthly_payment)}/month\n"
        f"- {verdict}"
    )


def briefing_variables(snapshot: FinancialSnapshot) -> Dict[str, Any]:
    """All template values for the advisor prompt."""
    profile = snapshot.profile
    period = snapshot.pay_period
    discretionary = snapshot.discretionary
    month = snapshot.current_month
    budget = snapshot.budget

    if snapshot.can_spend_today:
        spend_line = "You can spend up to the daily limit today."
    else:
        spend_line = "STOP discretionary spending until the next payday."

    category_lines = _bullets(
        (
            f"- {row.category}: ${usd(row.spent)} of ${usd(row.budget)}"
            f" ({row.percent_used}%){' OVER BUDGET' if row.is_over else ''}"
            for row in discretionary.by_category
        ),
        "- No discretionary categories configured",
    )

    if month.spending:
        month_category_line = "- By category: " + ", ".join(
            f"{name}: ${usd(amount)}" for name, amount in sorted(month.spending.items())
        )
    else:
        month_category_line = "- No transactions recorded this month yet"

    promo_blocks = [
        block
        for block in (describe_promo(d, snapshot) for d in snapshot.debts)
        if block is not None
    ]

    return {
        "name": profile.name,
        "status_label": snapshot.spending_status.upper(),
        "daily_limit": snapshot.daily_spending_limit,
        "weekly_limit": snapshot.daily_spending_limit * 7,
        "spend_line": spend_line,
        "today": snapshot.as_of.strftime("%A, %B %d, %Y"),
        "day_in_period": period.day_in_period,
        "period_days": period.total_days,
        "period_start": period.start_date.isoformat(),
        "period_end": period.end_date.isoformat(),
        "period_days_remaining": period.days_remaining,
        "discretionary_budget": usd(discretionary.total_budget),
        "discretionary_spent": usd(discretionary.total_spent),
        "discretionary_remaining": usd(discretionary.remaining),
        "category_lines": category_lines,
        "net_monthly_income": usd(profile.net_monthly_income),
        "paycheck": usd(profile.net_monthly_income / 2),
        "days_until_payday": snapshot.days_until_payday,
        "total_cash": usd(snapshot.total_cash),
        "cash_lines": _bullets(
            (
                f"- {a.name}: ${usd(a.balance)}"
                for a in snapshot.accounts
                if a.type in CASH_ACCOUNT_TYPES
            ),
            "- No cash accounts recorded",
        ),
        "total_investments": usd(snapshot.total_investments),
        "investment_lines": _bullets(
            (
                f"- {a.name}: ${usd(a.balance)}"
                for a in snapshot.accounts
                if a.type == "investment"
            ),
            "- No investment accounts recorded",
        ),
        "total_credit_card_debt": usd(snapshot.total_credit_card_debt),
        "total_budget": usd(budget.total_budget),
        "total_fixed": usd(budget.total_fixed),
        "fixed_lines": ", ".join(f"{line.name} ${usd(line.amount)}" for line in budget.fixed)
        or "none",
        "total_variable": usd(budget.total_variable),
        "variable_lines": ", ".join(
            f"{line.name} ${usd(line.amount)}" for line in budget.variable
        )
        or "none",
        "target_monthly_savings": usd(snapshot.target_monthly_savings),
        "debt_lines": _bullets(
            (describe_debt(d, snapshot) for d in snapshot.debts), "- No debts recorded"
        ),
        "goal_lines": _bullets(
            (
                f"{g.priority}. {g.name}: ${usd(g.current_amount)}/${usd(g.target_amount)}"
                f" ({g.percent_complete}%)"
                for g in snapshot.goals
            ),
            "- No goals recorded",
        ),
        "day_of_month": month.day_of_month,
        "days_in_month": month.days_in_month,
        "month_spent": usd(month.total_spent),
        "month_budget_remaining": usd(month.budget_remaining),
        "month_category_line": month_category_line,
        "rule_lines": _bullets(
            (f"- {r.name}: if {r.condition} then {r.action}" for r in snapshot.rules),
            "- No active rules",
        ),
        "promo_lines": "\n\n".join(promo_blocks) or "No promotional balances.",
    }


class BriefingRenderer:
    """Turns snapshots into the advisor's system prompt."""

    def __init__(self, prompt_manager: Optional[PromptManager] = None):
        self.prompt_manager = prompt_manager or PromptManager()

    def render(self, snapshot: FinancialSnapshot) -> Dict[str, Any]:
        """Render the briefing.

        Returns:
            Dict with system_prompt, parameters and version.
        """
        return self.prompt_manager.render_prompt(PROMPT_NAME, briefing_variables(snapshot))


def render_advisor_briefing(
    snapshot: FinancialSnapshot, prompt_manager: Optional[PromptManager] = None
) -> str:
    """Render just the briefing text for a snapshot."""
    return BriefingRenderer(prompt_manager).render(snapshot)["system_prompt"]


