"""Financial snapshot assembly.

Reads everything the dashboard and the advisor need, runs the spending engine
for the current pay period and the current month, and returns one
FinancialSnapshot. Snapshots are rebuilt on every request and never stored.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional

from logger import get_logger
from models.account import Account, CASH_ACCOUNT_TYPES
from models.budget_category import BudgetCategory
from models.debt import Debt
from models.goal import Goal
from models.rule import Rule
from models.user_profile import UserProfile
from tools.discretionary import DISCRETIONARY_CATEGORIES, CategoryAllowance
from tools.pay_period import PayPeriod, days_until_payday, month_window, resolve_pay_period
from tools.promo import promo_payoff
from tools.spending import (
    DiscretionarySummary,
    aggregate_by_category,
    bucket_spending,
    summarize_discretionary,
)
from tools.status import SpendingStatus, classify

logger = get_logger("snapshot")

ZERO = Decimal("0")


class SnapshotError(Exception):
    """Raised when one of the reads behind a snapshot fails."""


@dataclass(frozen=True)
class BudgetLine:
    name: str
    amount: Decimal


@dataclass(frozen=True)
class BudgetTotals:
    """The persisted monthly budget split into fixed and variable lines."""

    fixed: List[BudgetLine]
    variable: List[BudgetLine]
    total_fixed: Decimal
    total_variable: Decimal

    @property
    def total_budget(self) -> Decimal:
        return self.total_fixed + self.total_variable

    @classmethod
    def from_categories(cls, categories: List[BudgetCategory]) -> "BudgetTotals":
        """Split categories into fixed and variable, leaving out excluded ones."""
        included = [c for c in categories if not c.is_excluded]
        fixed = [BudgetLine(c.name, c.monthly_budget) for c in included if c.is_fixed]
        variable = [
            BudgetLine(c.name, c.monthly_budget) for c in included if not c.is_fixed
        ]
        return cls(
            fixed=fixed,
            variable=variable,
            total_fixed=sum((line.amount for line in fixed), ZERO),
            total_variable=sum((line.amount for line in variable), ZERO),
        )


@dataclass(frozen=True)
class MonthToDate:
    """Whole-month spend measured against the persisted monthly budget."""

    spending: Dict[str, Decimal]
    total_spent: Decimal
    budget_remaining: Decimal
    days_in_month: int
    day_of_month: int
    days_remaining: int


@dataclass(frozen=True)
class FinancialSnapshot:
    as_of: date
    profile: UserProfile
    accounts: List[Account]
    debts: List[Debt]
    goals: List[Goal]
    rules: List[Rule]
    total_cash: Decimal
    total_investments: Decimal
    total_credit_card_debt: Decimal
    total_debt_payments: Decimal
    budget: BudgetTotals
    current_month: MonthToDate
    days_until_payday: int
    target_monthly_savings: Decimal
    pay_period: PayPeriod
    discretionary: DiscretionarySummary
    spending: SpendingStatus

    @property
    def total_savings(self) -> Decimal:
        """Spendable cash; kept under its older name for API consumers."""
        return self.total_cash

    @property
    def daily_spending_limit(self) -> int:
        return self.spending.daily_limit

    @property
    def spending_status(self) -> str:
        return self.spending.status

    @property
    def can_spend_today(self) -> bool:
        return self.spending.can_spend_today

    def to_dict(self) -> dict:
        """The full JSON document served by the status endpoint."""
        debts = []
        for debt in self.debts:
            entry = debt.to_dict()
            payoff = promo_payoff(debt, self.as_of)
            entry["promo"] = (
                {
                    "monthsRemaining": payoff.months_remaining,
                    "monthlyNeeded": payoff.monthly_needed,
                    "onTrack": payoff.on_track,
                }
                if payoff
                else None
            )
            debts.append(entry)

        month = self.current_month
        return {
            "asOf": self.as_of.isoformat(),
            "user": {
                "name": self.profile.name,
                "netMonthlyIncome": float(self.profile.net_monthly_income),
                "paySchedule": self.profile.pay_schedule,
            },
            "accounts": [
                {"name": a.name, "type": a.type, "balance": float(a.balance)}
                for a in self.accounts
            ],
            "totalSavings": float(self.total_savings),
            "totalCash": float(self.total_cash),
            "totalInvestments": float(self.total_investments),
            "totalCreditCardDebt": float(self.total_credit_card_debt),
            "debts": debts,
            "totalDebtPayments": float(self.total_debt_payments),
            "budget": {
                "fixed": [
                    {"name": line.name, "amount": float(line.amount)}
                    for line in self.budget.fixed
                ],
                "variable": [
                    {"name": line.name, "amount": float(line.amount)}
                    for line in self.budget.variable
                ],
                "totalFixed": float(self.budget.total_fixed),
                "totalVariable": float(self.budget.total_variable),
                "totalBudget": float(self.budget.total_budget),
            },
            "goals": [
                {
                    "name": g.name,
                    "target": float(g.target_amount),
                    "current": float(g.current_amount),
                    "priority": g.priority,
                    "percentComplete": g.percent_complete,
                }
                for g in self.goals
            ],
            "rules": [
                {"name": r.name, "condition": r.condition, "action": r.action}
                for r in self.rules
            ],
            "currentMonth": {
                "spending": {k: float(v) for k, v in month.spending.items()},
                "totalSpent": float(month.total_spent),
                "budgetRemaining": float(month.budget_remaining),
                "daysInMonth": month.days_in_month,
                "dayOfMonth": month.day_of_month,
                "daysRemaining": month.days_remaining,
            },
            "daysUntilPayday": self.days_until_payday,
            "targetMonthlySavings": float(self.target_monthly_savings),
            "dailySpendingLimit": self.daily_spending_limit,
            "canSpendToday": self.can_spend_today,
            "spendingStatus": self.spending_status,
            "payPeriod": self.pay_period.to_dict(),
            "discretionarySpending": self.discretionary.to_dict(),
        }


class SnapshotAssembler:
    """Builds FinancialSnapshot objects from the services container.

    The independent reads run concurrently on a thread pool; if any of them
    fails the whole build fails with SnapshotError.

    Args:
        services: Services container.
        max_workers: Thread pool size; defaults to config.snapshot_workers.
        table: Discretionary category allowances.
    """

    def __init__(
        self,
        services,
        max_workers: Optional[int] = None,
        table: Mapping[str, CategoryAllowance] = DISCRETIONARY_CATEGORIES,
    ):
        self.services = services
        self.max_workers = max_workers or getattr(services.config, "snapshot_workers", 8)
        self.table = table

    def build(self, today: Optional[date] = None) -> FinancialSnapshot:
        """Assemble a snapshot as of today (or the given date)."""
        today = today or date.today()
        started = time.perf_counter()

        pay_period = resolve_pay_period(today)
        month_start, month_end = month_window(today)

        transactions = self.services.transactions
        data = self._fetch_all(
            {
                "profile": self.services.profile.get,
                "accounts": self.services.accounts.find_all,
                "debts": self.services.debts.find_all,
                "budget_categories": self.services.budget_categories.find_all,
                "goals": self.services.goals.find_all,
                "rules": lambda: self.services.rules.find_all(active_only=True),
                "month_transactions": lambda: transactions.get_transactions_by_date_range(
                    month_start, month_end
                ),
                "period_transactions": lambda: transactions.get_transactions_by_date_range(
                    pay_period.start_date, pay_period.end_date
                ),
            }
        )

        accounts: List[Account] = data["accounts"]
        debts: List[Debt] = data["debts"]
        profile: UserProfile = data["profile"]

        total_cash = sum(
            (a.balance for a in accounts if a.type in CASH_ACCOUNT_TYPES), ZERO
        )
        total_investments = sum(
            (a.balance for a in accounts if a.type == "investment"), ZERO
        )
        total_credit_card_debt = sum(
            (d.current_balance or ZERO for d in debts if d.type == "credit_card"), ZERO
        )
        total_debt_payments = sum((d.monthly_payment for d in debts), ZERO)

        budget = BudgetTotals.from_categories(data["budget_categories"])

        month_spending = bucket_spending(data["month_transactions"], month_start, month_end)
        month_spent = sum(month_spending.values(), ZERO)
        current_month = MonthToDate(
            spending=month_spending,
            total_spent=month_spent,
            budget_remaining=budget.total_budget - month_spent,
            days_in_month=month_end.day,
            day_of_month=today.day,
            days_remaining=month_end.day - today.day,
        )

        by_category = aggregate_by_category(
            data["period_transactions"],
            pay_period.start_date,
            pay_period.end_date,
            self.table,
        )
        discretionary = summarize_discretionary(by_category, self.table)
        spending = classify(
            discretionary.remaining, pay_period.days_remaining, discretionary.by_category
        )

        snapshot = FinancialSnapshot(
            as_of=today,
            profile=profile,
            accounts=accounts,
            debts=debts,
            goals=data["goals"],
            rules=data["rules"],
            total_cash=total_cash,
            total_investments=total_investments,
            total_credit_card_debt=total_credit_card_debt,
            total_debt_payments=total_debt_payments,
            budget=budget,
            current_month=current_month,
            days_until_payday=days_until_payday(today),
            target_monthly_savings=profile.net_monthly_income - budget.total_budget,
            pay_period=pay_period,
            discretionary=discretionary,
            spending=spending,
        )

        logger.info(
            "Snapshot built in %.2fs as_of=%s daily_limit=%d status=%s",
            time.perf_counter() - started,
            today.isoformat(),
            spending.daily_limit,
            spending.status,
        )
        return snapshot

    def _fetch_all(self, reads: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
        """Run the reads concurrently and wait for all of them."""
        results: Dict[str, Any] = {}
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="snapshot"
        ) as pool:
            futures = {name: pool.submit(read) for name, read in reads.items()}
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except Exception as e:
                    for other in futures.values():
                        other.cancel()
                    logger.error(f"Snapshot read '{name}' failed: {e}")
                    raise SnapshotError(f"Failed to read {name}: {e}") from e
        return results


def build_snapshot(services, today: Optional[date] = None) -> FinancialSnapshot:
    """Convenience wrapper: assemble a snapshot with default settings."""
    return SnapshotAssembler(services).build(today)
