#!/usr/bin/env python3
"""Load a sample household into an empty database.

Run with: python -m scripts.seed
"""

import sqlite3
import sys
from datetime import date
from decimal import Decimal

from config import load_config
from db.migrator import Migrator
from services.base import Services

PROFILE = {"name": "Nico", "net_monthly_income": Decimal("11840.00")}

ACCOUNTS = [
    {
        "name": "Main Checking",
        "type": "checking",
        "balance": Decimal("2100.00"),
        "institution": "Bank of America",
    },
]

DEBTS = [
    {
        "name": "IRS 2023 Taxes",
        "debt_type": "irs",
        "monthly_payment": Decimal("426.00"),
        "original_amount": Decimal("54876.00"),
        "current_balance": Decimal("18137.37"),
        "interest_rate": Decimal("8.0"),
        "notes": "Consider paying off early to save about $3,400 in interest.",
    },
    {
        "name": "Car Loan",
        "debt_type": "car_loan",
        "monthly_payment": Decimal("568.00"),
        "notes": "1995 Honda Civic",
    },
    {
        "name": "LendingClub",
        "debt_type": "personal_loan",
        "monthly_payment": Decimal("325.00"),
    },
    {
        "name": "Capital One Venture",
        "debt_type": "credit_card",
        "monthly_payment": Decimal("500.00"),
        "current_balance": Decimal("6200.00"),
        "promo_end_date": date(2027, 6, 30),
        "promo_rate": Decimal("0"),
        "post_promo_rate": Decimal("27.99"),
    },
]

# (name, monthly budget, is_fixed, is_excluded)
BUDGET_CATEGORIES = [
    ("Rent", "3495.00", True, False),
    ("Loans", "1319.00", True, False),
    ("Utilities", "300.00", True, False),
    ("Insurance", "213.00", True, False),
    ("Gym", "335.00", True, False),
    ("Groceries", "400.00", False, False),
    ("Restaurants", "400.00", False, False),
    ("Delivery", "150.00", False, False),
    ("Transportation", "250.00", False, False),
    ("Subscriptions", "350.00", False, False),
    ("Pets", "175.00", False, False),
    ("Healthcare", "200.00", False, False),
    ("Entertainment", "100.00", False, False),
    ("Bars & Nightlife", "100.00", False, False),
    ("Shops", "150.00", False, False),
    ("Personal Care", "50.00", False, False),
    ("Other", "200.00", False, False),
    ("Moving (one off)", "0", False, True),
    ("Work Expenses", "0", False, True),
]

GOALS = [
    ("Emergency Fund", "25000.00", 1, "3 months of expenses"),
    ("Travel", "4000.00", 2, "1-2 trips per year"),
    ("Car Maintenance", "2000.00", 3, "Oil, tires, repairs for older car"),
]

RULES = [
    ("Low savings block", "savings < 5000", "block_discretionary_over_100"),
    ("Emergency fund priority", "emergency_fund < 25000", "warn_large_purchases"),
    ("Delivery warning", "delivery_mtd > 100", "warn_delivery_spending"),
]


def seed(services: Services) -> None:
    """Insert the sample household. Expects empty tables."""
    services.profile.save(**PROFILE)
    print("✓ Profile saved")

    services.accounts.replace_all(ACCOUNTS)
    print(f"✓ {len(ACCOUNTS)} account(s) added")

    for debt in DEBTS:
        fields = dict(debt)
        services.debts.create(
            fields.pop("name"), fields.pop("debt_type"), fields.pop("monthly_payment"), **fields
        )
    print(f"✓ {len(DEBTS)} debt(s) added")

    for name, amount, is_fixed, is_excluded in BUDGET_CATEGORIES:
        services.budget_categories.create(name, Decimal(amount), is_fixed, is_excluded)
    print(f"✓ {len(BUDGET_CATEGORIES)} budget categories added")

    for name, target, priority, notes in GOALS:
        services.goals.create(name, Decimal(target), priority=priority, notes=notes)
    print(f"✓ {len(GOALS)} goal(s) added")

    for name, condition, action in RULES:
        services.rules.create(name, condition, action)
    print(f"✓ {len(RULES)} rule(s) added")


def main():
    config = load_config()
    services = Services(config)
    Migrator(services.db_manager).apply_pending()

    if services.budget_categories.find_all():
        print("Database already has data; run scripts.reset first.")
        sys.exit(1)

    try:
        seed(services)
    except sqlite3.IntegrityError as e:
        print(f"Seeding failed: {e}")
        sys.exit(1)

    print("\n✓ Database seeded successfully!")


if __name__ == "__main__":
    main()
