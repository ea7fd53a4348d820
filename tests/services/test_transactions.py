import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from models.transaction import Transaction, compute_hash
from tests.helpers import make_transaction


class TestTransactionService:
    """Tests for TransactionService."""

    def test_create_transaction(self, services):
        """Test creating a single transaction."""
        transaction = Transaction.create_with_hash(
            transaction_date=date(2025, 1, 15),
            description="STARBUCKS",
            amount=Decimal("5.75"),
            category="Restaurants",
        )

        created = services.transactions.create(transaction)
        found = services.transactions.find(created.id)

        assert found.description == "STARBUCKS"
        assert found.amount == Decimal("5.75")
        assert found.category == "Restaurants"
        assert found.hash == compute_hash(date(2025, 1, 15), "STARBUCKS", Decimal("5.75"))
        assert found.created_at is not None

    def test_missing_category_defaults_to_other(self):
        transaction = Transaction.create_with_hash(
            transaction_date=date(2025, 1, 15), description="X", amount=Decimal("1")
        )

        assert transaction.category == "Other"

    def test_create_duplicate_hash_raises(self, services):
        services.transactions.create(make_transaction(date(2025, 1, 15), "5.75"))

        with pytest.raises(sqlite3.IntegrityError):
            services.transactions.create(make_transaction(date(2025, 1, 15), "5.75"))

    def test_bulk_create_empty_list(self, services):
        """Test bulk creating with empty list returns 0."""
        assert services.transactions.bulk_create([]) == 0

    def test_bulk_create_skips_stored_hashes(self, services):
        """Test that bulk_create skips duplicate transactions."""
        first = make_transaction(date(2025, 1, 15), "5.75")
        services.transactions.bulk_create([first])

        count = services.transactions.bulk_create(
            [make_transaction(date(2025, 1, 15), "5.75"), make_transaction(date(2025, 1, 16), "3")]
        )

        assert count == 1
        assert len(services.transactions.find_recent()) == 2

    def test_existing_hashes(self, services):
        stored = make_transaction(date(2025, 1, 15), "5.75")
        services.transactions.bulk_create([stored])

        found = services.transactions.existing_hashes([stored.hash, "not-a-hash"])

        assert found == {stored.hash}
        assert services.transactions.existing_hashes([]) == set()

    def test_date_range_is_inclusive(self, services):
        services.transactions.bulk_create(
            [
                make_transaction(date(2025, 2, 28), "1"),
                make_transaction(date(2025, 3, 1), "2"),
                make_transaction(date(2025, 3, 15), "3"),
                make_transaction(date(2025, 3, 16), "4"),
            ]
        )

        found = services.transactions.get_transactions_by_date_range(
            date(2025, 3, 1), date(2025, 3, 15)
        )

        assert sorted(t.amount for t in found) == [Decimal("2.00"), Decimal("3.00")]

    def test_date_range_can_leave_out_excluded(self, services):
        services.transactions.bulk_create(
            [
                make_transaction(date(2025, 3, 2), "10"),
                make_transaction(date(2025, 3, 3), "99", is_excluded=True),
            ]
        )

        found = services.transactions.get_transactions_by_date_range(
            date(2025, 3, 1), date(2025, 3, 31), include_excluded=False
        )

        assert [t.amount for t in found] == [Decimal("10.00")]

    def test_set_excluded_and_category(self, services):
        created = services.transactions.create(make_transaction(date(2025, 3, 2), "10"))

        assert services.transactions.set_excluded(created.id, True)
        assert services.transactions.set_category(created.id, "Shops")

        found = services.transactions.find(created.id)
        assert found.is_excluded is True
        assert found.category == "Shops"
