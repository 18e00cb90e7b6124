"""Budget and analytics aggregation over a ledger snapshot.

Every function here is pure: it reads the transactions, categories and
budgets handed to it and returns new records. Sparse or dangling data
degrades to zero or empty results instead of raising.
"""
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from models.budget import Budget
from models.category import Category
from models.report import (
    BudgetProgress,
    CashFlowBreakdown,
    CategoryBreakdown,
    CategorySlice,
)
from models.transaction import Transaction, TransactionType
from utils.constants import UNCATEGORIZED_COLOR, UNCATEGORIZED_LABEL
from utils.date_helpers import month_period

ZERO = Decimal("0")


# ── Budget progress ───────────────────────────────────────────────────────────

def spent_in_period(
    transactions: Iterable[Transaction],
    category: Category,
    start: datetime,
    end: datetime,
) -> Decimal:
    """Sum of expense magnitudes for category within [start, end)."""
    total = ZERO
    for tx in transactions:
        if tx.type is not TransactionType.EXPENSE:
            continue
        if tx.category is None or tx.category.name != category.name:
            continue
        if tx.date < start or tx.date >= end:
            continue
        total += abs(tx.amount)
    return total


def find_budget(budgets: Iterable[Budget], category: Category) -> Optional[Budget]:
    """Budget linked to category by id, falling back to a name match."""
    budgets = list(budgets)
    for b in budgets:
        if b.category_id is not None and b.category_id == category.id:
            return b
    for b in budgets:
        if b.name == category.name:
            return b
    return None


def budget_progress(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    category: Category,
    now: datetime | None = None,
) -> BudgetProgress:
    """Current-month spend for category against its budget ceiling."""
    start, end = month_period(now or datetime.now())
    spent = spent_in_period(transactions, category, start, end)

    budget = find_budget(budgets, category)
    ceiling = budget.amount if budget is not None else ZERO
    remaining = ceiling - spent

    if ceiling > 0:
        ratio = float(spent / ceiling)
        ratio = min(max(ratio, 0.0), 1.0)
    else:
        ratio = 0.0

    return BudgetProgress(
        category_name=category.name,
        ceiling=ceiling,
        spent=spent,
        remaining=remaining,
        progress_ratio=ratio,
        is_over_budget=ceiling > 0 and remaining < 0,
    )


def budget_overview(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    categories: Iterable[Category],
    now: datetime | None = None,
) -> list[BudgetProgress]:
    """One progress record per category, in the order given."""
    ref = now or datetime.now()
    return [budget_progress(transactions, budgets, c, ref) for c in categories]


# ── Category breakdown ────────────────────────────────────────────────────────

def category_breakdown(
    transactions: Iterable[Transaction],
    type_filter: TransactionType | None = None,
) -> CategoryBreakdown:
    """Group transactions by category name for a pie chart.

    Expenses count by magnitude, income by signed amount. Groups that net
    to exactly zero are dropped. With no type_filter both types are summed
    into one total. A slice takes the colour of the last transaction seen
    in its group.
    """
    totals: dict[str, Decimal] = {}
    colors: dict[str, str] = {}
    for tx in transactions:
        if type_filter is not None and tx.type is not type_filter:
            continue
        key = tx.category.name if tx.category else UNCATEGORIZED_LABEL
        amount = abs(tx.amount) if tx.type is TransactionType.EXPENSE else tx.amount
        totals[key] = totals.get(key, ZERO) + amount
        colors[key] = tx.category.color_hex if tx.category else UNCATEGORIZED_COLOR

    kept = [(name, total) for name, total in totals.items() if total != 0]
    # sorted() is stable, so ties keep first-encountered order
    kept.sort(key=lambda item: item[1], reverse=True)

    grand_total = sum((total for _, total in kept), ZERO)
    slices = tuple(
        CategorySlice(
            category_name=name,
            total=total,
            share=float(total / grand_total) if grand_total > 0 else None,
            color_hex=colors[name],
        )
        for name, total in kept
    )
    return CategoryBreakdown(slices=slices, grand_total=grand_total, type_filter=type_filter)


def cash_flow_breakdown(transactions: Iterable[Transaction]) -> CashFlowBreakdown:
    """Income and expense breakdowns kept as two independent totals."""
    transactions = list(transactions)
    return CashFlowBreakdown(
        income=category_breakdown(transactions, TransactionType.INCOME),
        expense=category_breakdown(transactions, TransactionType.EXPENSE),
    )


def next_type_filter(
    current: TransactionType | None, selected: TransactionType
) -> TransactionType | None:
    """Picking the active filter again clears it."""
    return None if current is selected else selected
