import sqlite3
from decimal import Decimal
from typing import Optional
from database.db_manager import DatabaseManager
from models.budget import Budget
from models.category import Category
from utils.date_helpers import from_storage, to_storage


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row, categories: list[Category] | None = None) -> Budget:
        return Budget(
            id=row["id"],
            name=row["name"],
            amount=Decimal(row["amount"]),
            period_start=from_storage(row["period_start"]),
            period_end=from_storage(row["period_end"]),
            category_id=row["category_id"],
            categories=categories or [],
        )

    def _categories_by_budget(self) -> dict[str, list[Category]]:
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT bc.budget_id, c.id, c.name, c.color_hex
               FROM budget_categories bc
               JOIN categories c ON c.id = bc.category_id"""
        ).fetchall()
        result: dict[str, list[Category]] = {}
        for row in rows:
            result.setdefault(row["budget_id"], []).append(
                Category(id=row["id"], name=row["name"], color_hex=row["color_hex"])
            )
        return result

    def get_all(self) -> list[Budget]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM budgets ORDER BY period_start, rowid"
        ).fetchall()
        cat_map = self._categories_by_budget()
        return [self._row_to_model(r, cat_map.get(r["id"])) for r in rows]

    def get_by_id(self, budget_id: str) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM budgets WHERE id = ?", (budget_id,)
        ).fetchone()
        if not row:
            return None
        return self._row_to_model(row, self._categories_by_budget().get(budget_id))

    def create(self, budget: Budget) -> Budget:
        conn = self._db.get_connection()
        try:
            conn.execute(
                """INSERT INTO budgets(id, name, amount, period_start, period_end, category_id)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    budget.id, budget.name, str(budget.amount),
                    to_storage(budget.period_start), to_storage(budget.period_end),
                    budget.category_id,
                ),
            )
            for cat in budget.categories:
                conn.execute(
                    "INSERT OR IGNORE INTO budget_categories(budget_id, category_id) VALUES (?, ?)",
                    (budget.id, cat.id),
                )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        return self.get_by_id(budget.id)

    def update_amount(self, budget_id: str, amount: Decimal) -> Optional[Budget]:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE budgets SET amount = ? WHERE id = ?", (str(amount), budget_id)
        )
        conn.commit()
        return self.get_by_id(budget_id)

    def link_category(self, budget_id: str, category_id: str) -> Optional[Budget]:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE budgets SET category_id = ? WHERE id = ?", (category_id, budget_id)
        )
        conn.commit()
        return self.get_by_id(budget_id)

    def rename_for_category(
        self, category_id: str, old_name: str, new_name: str, commit: bool = True
    ) -> int:
        """Keep budget names in step with a category rename. Returns count renamed.

        Budgets matched only by the old name are linked to the category as well.
        """
        conn = self._db.get_connection()
        cursor = conn.execute(
            """UPDATE budgets SET name = ?, category_id = ?
               WHERE category_id = ? OR (category_id IS NULL AND name = ?)""",
            (new_name, category_id, category_id, old_name),
        )
        if commit:
            conn.commit()
        return cursor.rowcount

    def delete(self, budget_id: str):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
        conn.commit()
