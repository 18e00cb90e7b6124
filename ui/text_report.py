"""Plain-text rendering of budget rows, analytics and the ledger for the terminal."""
from models.category import Category
from models.report import BudgetProgress, CategoryBreakdown
from models.transaction import Transaction
from utils.currency import format_currency, format_percent
from utils.constants import DATE_FORMAT

BAR_WIDTH = 20


def progress_bar(ratio: float, width: int = BAR_WIDTH) -> str:
    filled = round(ratio * width)
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def remaining_label(progress: BudgetProgress, symbol: str = "$") -> str | None:
    """'Remaining: ...' or 'Over: ...'; None when no budget is set."""
    if not progress.has_budget:
        return None
    if progress.remaining >= 0:
        return f"Remaining: {format_currency(progress.remaining, symbol)}"
    return f"Over: {format_currency(-progress.remaining, symbol)}"


def budget_row_lines(category: Category, progress: BudgetProgress, symbol: str = "$") -> list[str]:
    ceiling = format_currency(progress.ceiling, symbol) if progress.ceiling != 0 else "No Budget"
    footer = f"Spent: {format_currency(progress.spent, symbol)}"
    label = remaining_label(progress, symbol)
    if label:
        footer += f"  |  {label}"
    return [
        f"{category.name}  ({ceiling})",
        f"  {progress_bar(progress.progress_ratio)} {format_percent(progress.progress_ratio)}",
        f"  {footer}",
    ]


def breakdown_lines(breakdown: CategoryBreakdown, symbol: str = "$") -> list[str]:
    if breakdown.is_empty:
        return ["No Data", "Add some transactions to see analytics."]
    width = max(len(s.category_name) for s in breakdown.slices)
    lines = []
    for s in breakdown.slices:
        share = format_percent(s.share) if s.share is not None else "-"
        lines.append(
            f"{s.category_name:<{width}}  {format_currency(s.total, symbol):>14}  {share:>5}"
        )
    lines.append(f"{breakdown.title}: {format_currency(breakdown.grand_total, symbol)}")
    return lines


def transaction_lines(transactions: list[Transaction], symbol: str = "$") -> list[str]:
    """One line per transaction in the order given, id last so it can be deleted."""
    if not transactions:
        return ["No transactions yet."]
    width = max(len(tx.category_name) for tx in transactions)
    lines = []
    for tx in transactions:
        line = (
            f"{tx.date.strftime(DATE_FORMAT)}  {tx.category_name:<{width}}  "
            f"{format_currency(tx.amount, symbol):>14} {tx.type.value:<7}"
        )
        if tx.note:
            line += f"  {tx.note}"
        lines.append(f"{line}  [{tx.id}]")
    return lines
