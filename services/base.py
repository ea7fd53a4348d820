"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing. It also owns the process-wide
    transaction categorizer, so there is exactly one per container.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None, categorizer=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
            categorizer: Optional TransactionCategorizer; a default one is
                         built if None.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.accounts import AccountService
        from services.budget_categories import BudgetCategoryService
        from services.chat_history import ChatHistoryService
        from services.data_imports import DataImportService
        from services.debts import DebtService
        from services.goals import GoalService
        from services.profile import ProfileService
        from services.rules import RuleService
        from services.transactions import TransactionService
        from categorization import TransactionCategorizer

        self.accounts = AccountService(self.db_manager)
        self.budget_categories = BudgetCategoryService(self.db_manager)
        self.chat_history = ChatHistoryService(self.db_manager)
        self.data_imports = DataImportService(self.db_manager)
        self.debts = DebtService(self.db_manager)
        self.goals = GoalService(self.db_manager)
        self.profile = ProfileService(self.db_manager)
        self.rules = RuleService(self.db_manager)
        self.transactions = TransactionService(self.db_manager)
        self.categorizer = categorizer or TransactionCategorizer()
