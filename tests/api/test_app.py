from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from advisor import ChatAdvisor
from api import create_app
from db.manager import StorageError
from llm.providers.base import AdvisorProvider
from tests.helpers import make_transaction


class EchoProvider(AdvisorProvider):
    def reply(self, system_prompt, history, message, parameters=None):
        return f"echo: {message}"


@pytest.fixture
def client(services):
    return TestClient(create_app(services, ChatAdvisor(services, EchoProvider())))


class TestStatusAndChat:
    """Tests for the status and chat endpoints."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_status(self, client, services):
        services.profile.save(name="Nico", net_monthly_income=Decimal("11840"))

        response = client.get("/api/status")

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["name"] == "Nico"
        assert body["spendingStatus"] in ("safe", "caution", "stop")
        assert body["discretionarySpending"]["totalBudget"] == 1125.0

    def test_status_storage_failure_is_500(self, client, services, monkeypatch):
        def broken():
            raise StorageError("database is locked")

        monkeypatch.setattr(services.accounts, "find_all", broken)

        response = client.get("/api/status")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch financial status"}

    def test_chat(self, client, services):
        response = client.post("/api/chat", json={"message": "Can I buy lunch?"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "echo: Can I buy lunch?"
        assert set(body["snapshot"]) == {"totalSavings", "budgetRemaining", "daysUntilPayday"}
        assert len(services.chat_history.recent()) == 2

    @pytest.mark.parametrize("payload", [{"message": ""}, {"message": 5}, {}])
    def test_chat_rejects_bad_message(self, client, payload):
        response = client.post("/api/chat", json=payload)

        assert response.status_code == 400

    def test_chat_without_provider_is_500(self, services):
        client = TestClient(create_app(services))

        response = client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process chat"}

    def test_chat_storage_outage_is_500_json(self, client, services, monkeypatch):
        def broken(*args, **kwargs):
            raise StorageError("database is locked")

        monkeypatch.setattr(services.accounts, "find_all", broken)
        monkeypatch.setattr(services.chat_history, "add_many", broken)

        response = client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process chat"}


class TestAccountsAndOnboarding:
    """Tests for account, debt and goal endpoints."""

    def test_update_account_balance(self, client, services):
        account = services.accounts.create("Checking", "checking", Decimal("100"))

        response = client.put(f"/api/accounts/{account.id}", json={"balance": 2500.5})

        assert response.status_code == 200
        assert response.json()["balance"] == 2500.5
        assert services.profile.get().last_balance_update is not None

    def test_update_unknown_account_is_404(self, client):
        response = client.put("/api/accounts/999", json={"balance": 1})

        assert response.status_code == 404

    def test_update_account_rejects_non_number(self, client, services):
        account = services.accounts.create("Checking", "checking", Decimal("100"))

        response = client.put(f"/api/accounts/{account.id}", json={"balance": "lots"})

        assert response.status_code == 400

    def test_onboarding_accounts_replace_all(self, client, services):
        services.accounts.create("Old", "checking", Decimal("1"))

        response = client.post(
            "/api/onboarding/accounts",
            json={
                "accounts": [
                    {"name": "Main Checking", "type": "checking", "balance": 2100},
                    {"name": "HYSA", "type": "savings", "balance": 5000, "institution": "Ally"},
                ]
            },
        )

        assert response.json() == {"success": True, "count": 2}
        listed = client.get("/api/onboarding/accounts").json()
        assert [a["name"] for a in listed] == ["HYSA", "Main Checking"]

    def test_onboarding_debts_update_and_insert(self, client, services):
        existing = services.debts.create("IRS", "irs", Decimal("426"))

        response = client.post(
            "/api/onboarding/debts",
            json={
                "debts": [
                    {"id": existing.id, "currentBalance": 18137.37, "interestRate": 8},
                    {"name": "LendingClub", "type": "personal_loan", "monthlyPayment": 325},
                ]
            },
        )

        assert response.json() == {"success": True, "updated": 1, "created": 1}
        assert services.debts.find(existing.id).current_balance == Decimal("18137.37")
        new_debt = next(d for d in services.debts.find_all() if d.name == "LendingClub")
        assert new_debt.monthly_payment == Decimal("325.00")
        assert new_debt.current_balance is None

    def test_onboarding_goals_and_goal_list(self, client, services):
        goal = services.goals.create("Emergency Fund", Decimal("25000"), priority=1)

        client.post(
            "/api/onboarding/goals",
            json={
                "goals": [
                    {"id": goal.id, "currentAmount": 2500},
                    {"name": "Travel", "targetAmount": 4000, "priority": 2},
                ]
            },
        )

        goals = client.get("/api/goals").json()
        assert [(g["name"], g["percentComplete"]) for g in goals] == [
            ("Emergency Fund", 10),
            ("Travel", 0),
        ]

    def test_onboarding_status_and_complete(self, client, services):
        status = client.get("/api/onboarding/status").json()
        assert status["complete"] is False
        assert status["missingData"] == ["account_balances", "debt_balances", "goals"]

        services.accounts.create("Checking", "checking", Decimal("100"))
        services.debts.create("IRS", "irs", Decimal("426"), current_balance=Decimal("100"))
        services.goals.create("Travel", Decimal("4000"))
        assert client.post("/api/onboarding/complete").json() == {"success": True}

        status = client.get("/api/onboarding/status").json()
        assert status["complete"] is True
        assert status["missingData"] == []
        assert status["lastBalanceUpdate"] is not None


class TestImport:
    """Tests for the CSV upload endpoint."""

    CSV = "Date,Description,Amount,Category\n03/01/2025,WHOLE FOODS,84.12,Groceries\n"

    def test_import_then_duplicate(self, client):
        files = {"file": ("march.csv", self.CSV, "text/csv")}

        first = client.post("/api/transactions/import", files=files).json()
        second = client.post(
            "/api/transactions/import", files={"file": ("march.csv", self.CSV, "text/csv")}
        ).json()

        assert (first["imported"], first["duplicates"]) == (1, 0)
        assert (second["imported"], second["duplicates"]) == (0, 1)
        assert first["dateRange"] == {"start": "2025-03-01", "end": "2025-03-01"}
        assert first["totalSpend"] == 84.12

    def test_no_file_is_400(self, client):
        response = client.post("/api/transactions/import")

        assert response.status_code == 400
        assert response.json()["error"] == "No file provided"

    def test_unusable_file_reports_headers(self, client):
        files = {"file": ("bad.csv", "When,What\n03/01/2025,Costco\n", "text/csv")}

        response = client.post("/api/transactions/import", files=files)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "No valid transactions found in CSV"
        assert body["headers"] == ["When", "What"]
        assert body["sampleRow"] == ["03/01/2025", "Costco"]


class TestTransactionCorrection:
    """Tests for correcting a stored transaction."""

    def test_category_correction_is_learned(self, client, services):
        stored = services.transactions.create(
            make_transaction(date(2025, 3, 4), "18.40", category="Other", description="CORNER CAFE")
        )

        response = client.patch(
            f"/api/transactions/{stored.id}", json={"category": "Restaurants"}
        )

        assert response.status_code == 200
        assert response.json()["category"] == "Restaurants"
        assert services.categorizer.categorize("CORNER CAFE", Decimal("3")).category == "Restaurants"

    def test_exclude_flag(self, client, services):
        stored = services.transactions.create(make_transaction(date(2025, 3, 4), "60.00"))

        response = client.patch(f"/api/transactions/{stored.id}", json={"isExcluded": True})

        assert response.json()["isExcluded"] is True
        assert services.transactions.find(stored.id).is_excluded is True

    def test_unknown_transaction_is_404(self, client):
        response = client.patch("/api/transactions/999", json={"category": "Pets"})

        assert response.status_code == 404
