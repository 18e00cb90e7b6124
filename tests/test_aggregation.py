from datetime import datetime
from decimal import Decimal

import pytest

from models.budget import Budget
from models.category import Category
from models.transaction import TransactionType
from services.aggregation import (
    budget_overview,
    budget_progress,
    cash_flow_breakdown,
    category_breakdown,
    find_budget,
    next_type_filter,
    spent_in_period,
)
from tests.helpers import NOW, make_tx

EXPENSE = TransactionType.EXPENSE
INCOME = TransactionType.INCOME


def make_budget(name, amount, category_id=None):
    return Budget(
        name=name,
        amount=Decimal(str(amount)),
        period_start=datetime(2025, 3, 1),
        period_end=datetime(2025, 4, 1),
        category_id=category_id,
    )


# ── Budget progress ───────────────────────────────────────────────────────────

def test_spent_takes_absolute_value_per_transaction(food):
    txs = [make_tx(10, food), make_tx(-5, food), make_tx(20, food)]
    progress = budget_progress(txs, [make_budget("Food", 100)], food, NOW)
    assert progress.spent == Decimal("35")
    assert progress.remaining == Decimal("65")
    assert progress.progress_ratio == 0.35
    assert not progress.is_over_budget


def test_spent_ignores_income_other_categories_and_uncategorized(food, rent):
    txs = [
        make_tx(10, food),
        make_tx(50, food, type_=INCOME),
        make_tx(70, rent),
        make_tx(30, None),
    ]
    start, end = datetime(2025, 3, 1), datetime(2025, 4, 1)
    assert spent_in_period(txs, food, start, end) == Decimal("10")


def test_category_match_is_by_name(food):
    same_name = Category(name="Food", color_hex="#000000")
    txs = [make_tx(12, same_name)]
    assert budget_progress(txs, [], food, NOW).spent == Decimal("12")


def test_month_boundaries(food):
    txs = [
        make_tx(1, food, date=datetime(2025, 3, 1)),        # period start: included
        make_tx(2, food, date=datetime(2025, 3, 31, 23, 59)),
        make_tx(4, food, date=datetime(2025, 4, 1)),        # period end: excluded
        make_tx(8, food, date=datetime(2025, 2, 28, 23, 59)),
    ]
    assert budget_progress(txs, [], food, NOW).spent == Decimal("3")


def test_december_period_rolls_into_january(food):
    now = datetime(2024, 12, 20)
    txs = [
        make_tx(5, food, date=datetime(2024, 12, 31, 22)),
        make_tx(7, food, date=datetime(2025, 1, 1)),
    ]
    assert budget_progress(txs, [], food, now).spent == Decimal("5")


def test_no_budget_means_zero_ceiling_and_no_progress(food):
    transport = Category(name="Transport")
    progress = budget_progress([make_tx(15, transport)], [make_budget("Food", 100)], transport, NOW)
    assert progress.ceiling == 0
    assert progress.progress_ratio == 0.0
    assert not progress.is_over_budget
    assert not progress.has_budget
    assert progress.spent == Decimal("15")


def test_over_budget_clamps_progress(food):
    progress = budget_progress([make_tx(150, food)], [make_budget("Food", 100)], food, NOW)
    assert progress.progress_ratio == 1.0
    assert progress.remaining == Decimal("-50")
    assert progress.is_over_budget


def test_no_transactions_means_nothing_spent(food):
    progress = budget_progress([], [make_budget("Food", 40)], food, NOW)
    assert progress.spent == 0
    assert progress.remaining == Decimal("40")
    assert progress.progress_ratio == 0.0


def test_find_budget_prefers_category_id(food):
    by_name = make_budget("Food", 10)
    by_id = make_budget("Groceries", 20, category_id=food.id)
    assert find_budget([by_name, by_id], food) is by_id


def test_find_budget_falls_back_to_first_name_match(food):
    first = make_budget("Food", 10)
    second = make_budget("Food", 20)
    assert find_budget([first, second], food) is first
    assert find_budget([], food) is None


def test_budget_overview_follows_category_order(food, rent):
    rows = budget_overview([make_tx(5, rent)], [make_budget("Rent", 50)], [rent, food], NOW)
    assert [r.category_name for r in rows] == ["Rent", "Food"]
    assert rows[0].progress_ratio == 0.1


def test_budget_progress_does_not_mutate_inputs(food):
    txs = [make_tx(-10, food)]
    budget_progress(txs, [], food, NOW)
    assert txs[0].amount == Decimal("-10")


# ── Category breakdown ────────────────────────────────────────────────────────

def test_expense_filter_groups_and_sorts(food, rent, salary):
    txs = [make_tx(40, food), make_tx(60, rent), make_tx(200, salary, type_=INCOME)]
    breakdown = category_breakdown(txs, EXPENSE)

    assert [s.category_name for s in breakdown.slices] == ["Rent", "Food"]
    assert [s.share for s in breakdown.slices] == [0.6, 0.4]
    assert breakdown.grand_total == Decimal("100")
    assert breakdown.title == "Total Expenses"


def test_net_zero_category_is_dropped(food, rent):
    txs = [make_tx(10, food), make_tx(-10, food, type_=INCOME), make_tx(5, rent)]
    breakdown = category_breakdown(txs, None)
    assert [s.category_name for s in breakdown.slices] == ["Rent"]


def test_offsetting_income_disappears(salary):
    txs = [make_tx(100, salary, type_=INCOME), make_tx(-100, salary, type_=INCOME)]
    assert category_breakdown(txs, INCOME).is_empty


def test_expenses_use_magnitude_so_signs_do_not_cancel(food):
    breakdown = category_breakdown([make_tx(10, food), make_tx(-10, food)], EXPENSE)
    assert breakdown.slices[0].total == Decimal("20")


def test_income_keeps_sign(salary):
    txs = [make_tx(300, salary, type_=INCOME), make_tx(-50, salary, type_=INCOME)]
    assert category_breakdown(txs, INCOME).grand_total == Decimal("250")


def test_uncategorized_bucket(food):
    breakdown = category_breakdown([make_tx(5, None), make_tx(3, food)], EXPENSE)
    first = breakdown.slices[0]
    assert first.category_name == "Uncategorized"
    assert first.color_hex == "#8E8E93"
    assert breakdown.slices[1].color_hex == "#FF9500"


def test_ties_keep_first_encountered_order(food, rent, salary):
    txs = [make_tx(10, rent), make_tx(10, food), make_tx(10, salary), make_tx(30, None)]
    names = [s.category_name for s in category_breakdown(txs, EXPENSE).slices]
    assert names == ["Uncategorized", "Rent", "Food", "Salary"]


def test_empty_input():
    breakdown = category_breakdown([], EXPENSE)
    assert breakdown.is_empty
    assert breakdown.grand_total == 0


def test_single_category_has_full_share(food):
    breakdown = category_breakdown([make_tx(12, food)], EXPENSE)
    assert breakdown.slices[0].share == 1.0


def test_sum_conservation_and_share_bounds(food, rent, salary):
    txs = [
        make_tx("12.34", food), make_tx("7.66", food), make_tx("33.33", rent),
        make_tx("0.01", salary), make_tx("-4.50", None),
    ]
    breakdown = category_breakdown(txs, EXPENSE)
    assert sum(s.total for s in breakdown.slices) == breakdown.grand_total
    assert all(0 <= s.share <= 1 for s in breakdown.slices)
    assert sum(s.share for s in breakdown.slices) == pytest.approx(1.0)


def test_non_positive_grand_total_suppresses_shares(salary):
    breakdown = category_breakdown([make_tx(-20, salary, type_=INCOME)], INCOME)
    assert breakdown.grand_total == Decimal("-20")
    assert breakdown.slices[0].share is None
    assert not breakdown.slices[0].show_label


def test_unfiltered_sums_both_types(food):
    txs = [make_tx(40, food), make_tx(10, food, type_=INCOME)]
    breakdown = category_breakdown(txs)
    assert breakdown.grand_total == Decimal("50")
    assert breakdown.title == "Total Amount"


def test_breakdown_is_idempotent(food, rent):
    txs = [make_tx(40, food), make_tx(60, rent)]
    assert category_breakdown(txs, EXPENSE) == category_breakdown(txs, EXPENSE)


def test_label_threshold(food, rent):
    txs = [make_tx(92, food), make_tx(8, rent)]
    slices = category_breakdown(txs, EXPENSE).slices
    assert slices[0].show_label
    assert not slices[1].show_label   # exactly 8% stays legend-only


def test_cash_flow_keeps_income_and_expense_apart(food, salary):
    txs = [make_tx(40, food), make_tx(-60, food), make_tx(250, salary, type_=INCOME)]
    flow = cash_flow_breakdown(txs)
    assert flow.expense.grand_total == Decimal("100")
    assert flow.income.grand_total == Decimal("250")
    assert flow.net == Decimal("150")
    assert flow.income.title == "Total Income"


def test_next_type_filter_toggles():
    assert next_type_filter(None, EXPENSE) is EXPENSE
    assert next_type_filter(EXPENSE, INCOME) is INCOME
    assert next_type_filter(INCOME, INCOME) is None


def test_slice_colour_comes_from_last_transaction_in_group(food):
    recoloured = Category(id=food.id, name="Food", color_hex="#123456")
    breakdown = category_breakdown([make_tx(5, food), make_tx(5, recoloured)], EXPENSE)
    assert breakdown.slices[0].color_hex == "#123456"
