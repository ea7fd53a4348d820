"""HTTP API for the dashboard and the chat advisor.

Build the app with create_app(); `spendwise serve` runs it under uvicorn.
"""

import time
from decimal import Decimal
from typing import Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from advisor import AdvisorError, ChatAdvisor
from api.schemas import (
    AccountsPayload,
    BalanceUpdate,
    ChatRequest,
    DebtsPayload,
    GoalsPayload,
    TransactionCorrection,
)
from ingestion import NoTransactionsError, TransactionImporter
from logger import get_logger
from tools.snapshot import SnapshotAssembler

logger = get_logger("api")

# User corrections clear the categorizer's learning threshold
CORRECTION_CONFIDENCE = 0.9

_DEBT_FIELDS = {
    "current_balance",
    "interest_rate",
    "monthly_payment",
    "promo_end_date",
    "promo_rate",
    "post_promo_rate",
    "notes",
}


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def onboarding_status(services) -> dict:
    """Which onboarding data is still missing, plus the last update stamps."""
    profile = services.profile.get()
    accounts = services.accounts.find_all()
    debts = services.debts.find_all()
    goals = services.goals.find_all()

    missing = []
    if not any(a.balance > 0 for a in accounts):
        missing.append("account_balances")
    if not debts or any(d.current_balance is None for d in debts):
        missing.append("debt_balances")
    if not goals:
        missing.append("goals")

    return {
        "complete": profile.onboarding_complete,
        "missingData": missing,
        "lastBalanceUpdate": (
            profile.last_balance_update.isoformat() if profile.last_balance_update else None
        ),
        "lastTransactionImport": (
            profile.last_transaction_import.isoformat()
            if profile.last_transaction_import
            else None
        ),
    }


def create_app(services, advisor: Optional[ChatAdvisor] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        services: Services container.
        advisor: Chat advisor; one without a provider is built if None, so
                 every chat request fails with a 500.

    Returns:
        The configured FastAPI app.
    """
    app = FastAPI(title="Spendwise API")
    assembler = SnapshotAssembler(services)
    advisor = advisor or ChatAdvisor(services, provider=None, assembler=assembler)
    importer = TransactionImporter(services)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
        return _error(400, "Invalid request body", details=jsonable_errors(exc))

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"in {time.perf_counter() - started:.2f}s"
        )
        return response

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/api/status")
    def status():
        try:
            return assembler.build().to_dict()
        except Exception as e:
            logger.error(f"Error fetching financial status: {e}")
            return _error(500, "Failed to fetch financial status")

    @app.post("/api/chat")
    def chat(body: ChatRequest):
        if not isinstance(body.message, str) or not body.message.strip():
            return _error(400, "Message is required")
        try:
            return advisor.chat(body.message).to_dict()
        except AdvisorError:
            return _error(500, "Failed to process chat")

    @app.put("/api/accounts/{account_id}")
    def update_account(account_id: int, body: BalanceUpdate):
        try:
            account = services.accounts.update_balance(account_id, body.balance)
            if account is not None:
                services.profile.touch_balance_update()
        except Exception as e:
            logger.error(f"Error updating account {account_id}: {e}")
            return _error(500, "Failed to update account")

        if account is None:
            return _error(404, "Account not found")
        return account.to_dict()

    @app.get("/api/onboarding/accounts")
    def list_accounts():
        try:
            return [a.to_dict() for a in services.accounts.find_all()]
        except Exception as e:
            logger.error(f"Error fetching accounts: {e}")
            return _error(500, "Failed to fetch accounts")

    @app.post("/api/onboarding/accounts")
    def save_accounts(body: AccountsPayload):
        try:
            count = services.accounts.replace_all(
                [a.model_dump() for a in body.accounts]
            )
            services.profile.touch_balance_update()
        except Exception as e:
            logger.error(f"Error saving accounts: {e}")
            return _error(500, "Failed to save accounts")
        return {"success": True, "count": count}

    @app.get("/api/onboarding/debts")
    def list_debts():
        try:
            return [d.to_dict() for d in services.debts.find_all()]
        except Exception as e:
            logger.error(f"Error fetching debts: {e}")
            return _error(500, "Failed to fetch debts")

    @app.post("/api/onboarding/debts")
    def save_debts(body: DebtsPayload):
        updated = created = 0
        try:
            for delta in body.debts:
                changes = delta.model_dump(exclude_unset=True, include=_DEBT_FIELDS)
                if delta.id:
                    if not changes:
                        continue
                    if services.debts.update(delta.id, **changes):
                        updated += 1
                    else:
                        logger.warning(f"Debt {delta.id} not found; skipped")
                elif delta.name:
                    changes.pop("monthly_payment", None)
                    services.debts.create(
                        delta.name,
                        delta.type,
                        delta.monthly_payment or Decimal("0"),
                        **changes,
                    )
                    created += 1
            services.profile.touch_balance_update()
        except Exception as e:
            logger.error(f"Error saving debts: {e}")
            return _error(500, "Failed to save debts")
        return {"success": True, "updated": updated, "created": created}

    @app.get("/api/onboarding/goals")
    def list_onboarding_goals():
        return goals()

    @app.post("/api/onboarding/goals")
    def save_goals(body: GoalsPayload):
        updated = created = 0
        try:
            for delta in body.goals:
                if delta.id:
                    if delta.current_amount is None:
                        continue
                    if services.goals.update_progress(delta.id, delta.current_amount):
                        updated += 1
                    else:
                        logger.warning(f"Goal {delta.id} not found; skipped")
                elif delta.name:
                    services.goals.create(
                        delta.name,
                        delta.target_amount or Decimal("0"),
                        current_amount=delta.current_amount or Decimal("0"),
                        priority=delta.priority,
                        target_date=delta.target_date,
                        notes=delta.notes,
                    )
                    created += 1
        except Exception as e:
            logger.error(f"Error saving goals: {e}")
            return _error(500, "Failed to save goals")
        return {"success": True, "updated": updated, "created": created}

    @app.get("/api/onboarding/status")
    def get_onboarding_status():
        try:
            return onboarding_status(services)
        except Exception as e:
            logger.error(f"Error checking onboarding status: {e}")
            return _error(500, "Failed to check onboarding status")

    @app.post("/api/onboarding/complete")
    def complete_onboarding():
        try:
            services.profile.mark_onboarding_complete()
        except Exception as e:
            logger.error(f"Error completing onboarding: {e}")
            return _error(500, "Failed to complete onboarding")
        return {"success": True}

    @app.get("/api/goals")
    def goals():
        try:
            return [g.to_dict() for g in services.goals.find_all()]
        except Exception as e:
            logger.error(f"Error fetching goals: {e}")
            return _error(500, "Failed to fetch goals")

    @app.post("/api/transactions/import")
    def import_transactions(
        file: Optional[UploadFile] = File(None), negate: bool = Form(False)
    ):
        if file is None:
            return _error(400, "No file provided")

        try:
            content = file.file.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            return _error(400, "File is not UTF-8 text")

        try:
            result = importer.import_text(content, filename=file.filename, negate=negate)
        except NoTransactionsError as e:
            return _error(
                400,
                "No valid transactions found in CSV",
                reason=str(e),
                headers=e.headers,
                sampleRow=e.sample_row,
            )
        except Exception as e:
            logger.error(f"Error importing transactions: {e}")
            return _error(500, "Failed to import transactions")
        return result.to_dict()

    @app.patch("/api/transactions/{transaction_id}")
    def correct_transaction(transaction_id: int, body: TransactionCorrection):
        try:
            transaction = services.transactions.find(transaction_id)
            if transaction is None:
                return _error(404, "Transaction not found")

            if body.category:
                services.transactions.set_category(transaction_id, body.category)
                services.categorizer.learn(
                    transaction.description, body.category, CORRECTION_CONFIDENCE
                )
            if body.is_excluded is not None:
                services.transactions.set_excluded(transaction_id, body.is_excluded)

            updated = services.transactions.find(transaction_id)
        except Exception as e:
            logger.error(f"Error updating transaction {transaction_id}: {e}")
            return _error(500, "Failed to update transaction")
        return updated.to_dict()

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors reduced to location and message."""
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
