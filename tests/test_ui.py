from datetime import datetime
from decimal import Decimal

from matplotlib.figure import Figure

from models.category import Category
from models.report import BudgetProgress
from models.transaction import TransactionType
from services.aggregation import category_breakdown
from tests.helpers import make_tx
from ui.charts import draw_category_donut, render_category_chart
from ui.text_report import (
    breakdown_lines, budget_row_lines, progress_bar, remaining_label, transaction_lines,
)


def progress(ceiling, spent, ratio, over=False):
    ceiling, spent = Decimal(ceiling), Decimal(spent)
    return BudgetProgress("Food", ceiling, spent, ceiling - spent, ratio, over)


def test_donut_labels_only_large_slices(food, rent):
    breakdown = category_breakdown(
        [make_tx(70, food), make_tx(25, rent), make_tx(5, None)], TransactionType.EXPENSE
    )
    ax = Figure().add_subplot(111)
    labels = draw_category_donut(ax, breakdown)
    assert labels == ["Food\n70%", "Rent\n25%"]
    legend = [t.get_text() for t in ax.get_legend().get_texts()]
    assert legend == ["Food", "Rent", "Uncategorized"]


def test_donut_empty_state():
    ax = Figure().add_subplot(111)
    assert draw_category_donut(ax, category_breakdown([])) == []
    assert [t.get_text() for t in ax.texts] == ["No Data"]


def test_donut_skips_negative_slices_but_keeps_them_in_legend(salary):
    bonus = Category(name="Bonus", color_hex="#34C759")
    breakdown = category_breakdown(
        [make_tx(100, salary, type_=TransactionType.INCOME),
         make_tx(-20, bonus, type_=TransactionType.INCOME)],
        TransactionType.INCOME,
    )
    ax = Figure().add_subplot(111)
    draw_category_donut(ax, breakdown)
    legend = [t.get_text() for t in ax.get_legend().get_texts()]
    assert legend == ["Salary", "Bonus"]
    assert len(ax.patches) == 1


def test_donut_with_only_negative_slices_shows_no_data(salary):
    breakdown = category_breakdown(
        [make_tx(-20, salary, type_=TransactionType.INCOME)], TransactionType.INCOME
    )
    ax = Figure().add_subplot(111)
    assert draw_category_donut(ax, breakdown) == []
    assert [t.get_text() for t in ax.texts] == ["No Data"]


def test_render_chart_writes_png(tmp_path, food):
    path = tmp_path / "chart.png"
    render_category_chart(category_breakdown([make_tx(10, food)]), str(path), title="Total Amount")
    assert path.read_bytes().startswith(b"\x89PNG")


def test_remaining_label():
    assert remaining_label(progress("100", "35", 0.35)) == "Remaining: $65.00"
    assert remaining_label(progress("100", "150", 1.0, over=True)) == "Over: $50.00"
    assert remaining_label(progress("0", "15", 0.0)) is None


def test_budget_row_without_budget():
    lines = budget_row_lines(Category(name="Transport"), progress("0", "15", 0.0))
    assert lines[0] == "Transport  (No Budget)"
    assert lines[2] == "  Spent: $15.00"


def test_budget_row_with_budget():
    lines = budget_row_lines(Category(name="Food"), progress("100", "35", 0.35), symbol="€")
    assert lines[0] == "Food  (€100.00)"
    assert "35%" in lines[1]
    assert lines[2] == "  Spent: €35.00  |  Remaining: €65.00"


def test_progress_bar():
    assert progress_bar(0.0, width=4) == "[----]"
    assert progress_bar(0.5, width=4) == "[##--]"
    assert progress_bar(1.0, width=4) == "[####]"


def test_breakdown_lines(food, rent):
    breakdown = category_breakdown([make_tx(40, food), make_tx(60, rent)], TransactionType.EXPENSE)
    lines = breakdown_lines(breakdown)
    assert lines[0].startswith("Rent")
    assert lines[0].endswith("60%")
    assert lines[-1] == "Total Expenses: $100.00"
    assert breakdown_lines(category_breakdown([])) == [
        "No Data", "Add some transactions to see analytics."
    ]


def test_transaction_lines(food):
    txs = [
        make_tx(2000, None, type_=TransactionType.INCOME, date=datetime(2025, 3, 10)),
        make_tx("-12.5", food, date=datetime(2025, 3, 4), note="refund"),
    ]
    lines = transaction_lines(txs, symbol="€")
    assert lines[0].startswith("2025-03-10  Uncategorized")
    assert "€2,000.00 income" in lines[0]
    assert lines[0].endswith(f"[{txs[0].id}]")
    assert "-€12.50 expense  refund" in lines[1]
    assert transaction_lines([]) == ["No transactions yet."]
