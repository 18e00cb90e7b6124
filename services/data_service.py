"""Whole-ledger operations: consistent snapshots and the full reset."""
import logging

from database.db_manager import DatabaseManager
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.tag_dao import TagDAO
from database.transaction_dao import TransactionDAO
from models.report import LedgerSnapshot

logger = logging.getLogger(__name__)


class DataService:
    def __init__(
        self,
        db: DatabaseManager,
        category_dao: CategoryDAO,
        budget_dao: BudgetDAO,
        tx_dao: TransactionDAO,
        tag_dao: TagDAO,
    ):
        self._db = db
        self._category_dao = category_dao
        self._budget_dao = budget_dao
        self._tx_dao = tx_dao
        self._tag_dao = tag_dao

    def snapshot(self) -> LedgerSnapshot:
        """Read the whole ledger into immutable tuples for the aggregation engine."""
        return LedgerSnapshot(
            transactions=tuple(self._tx_dao.get_all()),
            categories=tuple(self._category_dao.get_all()),
            budgets=tuple(self._budget_dao.get_all()),
            tags=tuple(self._tag_dao.get_all()),
        )

    def reset_all_data(self, reseed: bool = False) -> None:
        """Erase every transaction, budget, category and tag.

        With reseed=True the default categories are restored immediately
        instead of on the next startup.
        """
        self._db.reset_all_data()
        if reseed and self._db.initialize():
            logger.info("Default categories restored after reset")
