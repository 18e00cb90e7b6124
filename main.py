import argparse
import logging
import sys

from database.db_manager import DatabaseManager
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from database.tag_dao import TagDAO
from database.transaction_dao import TransactionDAO

from services.budget_service import BudgetService
from services.category_service import CategoryService
from services.data_service import DataService
from services.report_service import ReportService
from services.transaction_service import TransactionService

from models.transaction import TransactionType
from ui.text_report import budget_row_lines, breakdown_lines, transaction_lines
from utils.app_config import default_db_path
from utils.constants import APP_NAME
from utils.currency import format_signed


class App:
    """Wires the store, DAOs and services together."""

    def __init__(self, db_path: str):
        self.db = DatabaseManager(db_path)
        self.db.initialize()

        category_dao = CategoryDAO(self.db)
        budget_dao = BudgetDAO(self.db)
        tx_dao = TransactionDAO(self.db)
        tag_dao = TagDAO(self.db)

        self.categories = CategoryService(category_dao, budget_dao)
        self.transactions = TransactionService(tx_dao, tag_dao)
        self.budgets = BudgetService(budget_dao, tx_dao, category_dao)
        self.reports = ReportService(tx_dao)
        self.data = DataService(self.db, category_dao, budget_dao, tx_dao, tag_dao)

    @property
    def currency_symbol(self) -> str:
        return self.db.get_setting("currency_symbol", "$")

    def require_category(self, name: str | None):
        if not name:
            return None
        category = self.categories.get_by_name(name)
        if category is None:
            raise ValueError(f"Unknown category: {name}")
        return category

    def close(self):
        self.db.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finance", description=f"{APP_NAME}: track spending against budgets.")
    parser.add_argument("--db", help="Path to the ledger database")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("budgets", help="Show this month's budget progress per category")

    p = sub.add_parser("set-budget", help="Set the budget for a category")
    p.add_argument("category")
    p.add_argument("amount")

    p = sub.add_parser("remove-budget", help="Remove the budget for a category")
    p.add_argument("category")

    p = sub.add_parser("add", help="Record a transaction")
    p.add_argument("amount")
    p.add_argument("--type", choices=[t.value for t in TransactionType], default="expense")
    p.add_argument("--category")
    p.add_argument("--note", default="")
    p.add_argument("--date", help="YYYY-MM-DD (default: now)")
    p.add_argument("--tag", action="append", default=[])

    p = sub.add_parser("transactions", help="List transactions, newest first")
    p.add_argument("--delete", metavar="ID", help="Delete the transaction with this id first")

    p = sub.add_parser("analytics", help="Show the category breakdown")
    p.add_argument("--type", choices=[t.value for t in TransactionType])
    p.add_argument("--chart", help="Write a donut chart image to this path")

    sub.add_parser("cashflow", help="Show income and expense totals side by side")

    p = sub.add_parser("categories", help="List or add categories")
    p.add_argument("--add")
    p.add_argument("--color", default="")
    p.add_argument("--delete")

    p = sub.add_parser("reset", help="Erase all transactions, budgets, categories and tags")
    p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    return parser


def run(app: App, args) -> int:
    symbol = app.currency_symbol

    if args.command == "budgets":
        for category, _budget, progress in app.budgets.get_budget_rows():
            print("\n".join(budget_row_lines(category, progress, symbol)))
    elif args.command == "set-budget":
        category = app.require_category(args.category)
        budget = app.budgets.set_budget(category, args.amount)
        print(f"Budget for {category.name} set to {budget.amount}")
    elif args.command == "remove-budget":
        category = app.require_category(args.category)
        if not app.budgets.remove_budget(category):
            print(f"No budget set for {category.name}")
    elif args.command == "add":
        tx = app.transactions.create(
            amount=args.amount,
            type_=args.type,
            date=args.date,
            category=app.require_category(args.category),
            note=args.note,
            tags=args.tag,
        )
        print(f"Recorded {tx.type.value} {tx.amount} ({tx.category_name})")
    elif args.command == "transactions":
        if args.delete:
            if app.transactions.get_by_id(args.delete) is None:
                raise ValueError(f"Transaction not found: {args.delete}")
            app.transactions.delete(args.delete)
            print(f"Deleted transaction {args.delete}")
        print("\n".join(transaction_lines(app.transactions.get_all(), symbol)))
    elif args.command == "analytics":
        type_filter = TransactionType(args.type) if args.type else None
        breakdown = app.reports.get_breakdown(type_filter)
        print("\n".join(breakdown_lines(breakdown, symbol)))
        if args.chart:
            from ui.charts import render_category_chart
            render_category_chart(breakdown, args.chart, title=breakdown.title)
            print(f"Chart written to {args.chart}")
    elif args.command == "cashflow":
        flow = app.reports.get_cash_flow()
        for breakdown in (flow.income, flow.expense):
            print("\n".join(breakdown_lines(breakdown, symbol)))
            print()
        print(f"Net: {format_signed(flow.net, symbol)}")
    elif args.command == "categories":
        if args.add:
            app.categories.create(args.add, args.color)
        if args.delete:
            category = app.require_category(args.delete)
            app.categories.delete(category.id)
        for c in app.categories.get_all():
            print(f"{c.color_hex}  {c.name}")
    elif args.command == "reset":
        if not args.yes:
            answer = input("Erase all app data? This permanently deletes all "
                           "transactions, budgets, categories, and tags. [y/N] ")
            if answer.strip().lower() != "y":
                return 1
        app.data.reset_all_data()
        print("All data erased.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    app = App(args.db or default_db_path())
    try:
        return run(app, args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(main())
