import logging
from datetime import datetime
from decimal import Decimal
from models.budget import Budget
from models.category import Category
from models.report import BudgetProgress
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from services.aggregation import budget_progress, find_budget
from utils.currency import parse_amount
from utils.date_helpers import month_period

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(
        self,
        budget_dao: BudgetDAO,
        tx_dao: TransactionDAO,
        category_dao: CategoryDAO,
    ):
        self._budget_dao = budget_dao
        self._tx_dao = tx_dao
        self._category_dao = category_dao

    def get_budget_rows(
        self, now: datetime | None = None
    ) -> list[tuple[Category, Budget | None, BudgetProgress]]:
        """Every category with its matched budget and this month's progress."""
        ref = now or datetime.now()
        start, end = month_period(ref)
        transactions = self._tx_dao.get_by_period(start, end)
        budgets = self._budget_dao.get_all()
        rows = []
        for category in self._category_dao.get_all():
            progress = budget_progress(transactions, budgets, category, ref)
            rows.append((category, find_budget(budgets, category), progress))
        return rows

    def get_progress(self, category: Category, now: datetime | None = None) -> BudgetProgress:
        ref = now or datetime.now()
        start, end = month_period(ref)
        return budget_progress(
            self._tx_dao.get_by_period(start, end),
            self._budget_dao.get_all(),
            category,
            ref,
        )

    def set_budget(
        self, category: Category, amount: Decimal | str, now: datetime | None = None
    ) -> Budget:
        """Update the category's budget, or create one for the current month."""
        if not isinstance(amount, Decimal):
            amount = parse_amount(str(amount))
        if amount < 0:
            raise ValueError("Budget amount must be non-negative.")

        existing = find_budget(self._budget_dao.get_all(), category)
        if existing is not None:
            if existing.category_id is None:
                self._budget_dao.link_category(existing.id, category.id)
            return self._budget_dao.update_amount(existing.id, amount)

        start, end = month_period(now or datetime.now())
        logger.debug("Creating budget for %r: %s", category.name, amount)
        return self._budget_dao.create(
            Budget(
                name=category.name,
                amount=amount,
                period_start=start,
                period_end=end,
                category_id=category.id,
            )
        )

    def remove_budget(self, category: Category) -> bool:
        """Delete the category's budget. Returns False when none was set."""
        existing = find_budget(self._budget_dao.get_all(), category)
        if existing is None:
            return False
        self._budget_dao.delete(existing.id)
        return True
