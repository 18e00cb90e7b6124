"""Derived records produced by the aggregation engine for display."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from models.transaction import TransactionType
from utils.constants import LABEL_SHARE_THRESHOLD


@dataclass(frozen=True)
class BudgetProgress:
    category_name: str
    ceiling: Decimal
    spent: Decimal
    remaining: Decimal
    progress_ratio: float   # clamped to [0, 1]
    is_over_budget: bool

    @property
    def has_budget(self) -> bool:
        return self.ceiling > 0


@dataclass(frozen=True)
class CategorySlice:
    category_name: str
    total: Decimal
    share: Optional[float]  # None when the grand total is not positive
    color_hex: str

    @property
    def show_label(self) -> bool:
        return self.share is not None and self.share > LABEL_SHARE_THRESHOLD


@dataclass(frozen=True)
class CategoryBreakdown:
    slices: tuple[CategorySlice, ...]
    grand_total: Decimal
    type_filter: Optional[TransactionType] = None

    @property
    def is_empty(self) -> bool:
        return not self.slices

    @property
    def title(self) -> str:
        if self.type_filter is TransactionType.EXPENSE:
            return "Total Expenses"
        if self.type_filter is TransactionType.INCOME:
            return "Total Income"
        return "Total Amount"


@dataclass(frozen=True)
class CashFlowBreakdown:
    income: CategoryBreakdown
    expense: CategoryBreakdown

    @property
    def net(self) -> Decimal:
        return self.income.grand_total - self.expense.grand_total


@dataclass(frozen=True)
class LedgerSnapshot:
    transactions: tuple
    categories: tuple
    budgets: tuple
    tags: tuple = ()
