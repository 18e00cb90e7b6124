from models.report import CashFlowBreakdown, CategoryBreakdown
from models.transaction import TransactionType
from database.transaction_dao import TransactionDAO
from services.aggregation import cash_flow_breakdown, category_breakdown


class ReportService:
    def __init__(self, tx_dao: TransactionDAO):
        self._tx_dao = tx_dao

    def get_breakdown(self, type_filter: TransactionType | None = None) -> CategoryBreakdown:
        """Category pie data; no filter sums income and expense together."""
        return category_breakdown(self._tx_dao.get_all(), type_filter)

    def get_cash_flow(self) -> CashFlowBreakdown:
        """Income and expense breakdowns as separate totals."""
        return cash_flow_breakdown(self._tx_dao.get_all())
