import logging
import sqlite3
from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category

logger = logging.getLogger(__name__)


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            color_hex=row["color_hex"],
        )

    def get_all(self) -> list[Category]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories ORDER BY rowid"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, category_id: str) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_name(self, name: str) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE name = ? ORDER BY rowid LIMIT 1", (name,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, category: Category) -> Category:
        conn = self._db.get_connection()
        conn.execute(
            "INSERT INTO categories(id, name, color_hex) VALUES (?, ?, ?)",
            (category.id, category.name, category.color_hex),
        )
        conn.commit()
        return self.get_by_id(category.id)

    def update(self, category_id: str, name: str, color_hex: str, commit: bool = True) -> Category:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE categories SET name=?, color_hex=? WHERE id=?",
            (name, color_hex, category_id),
        )
        if commit:
            conn.commit()
        return self.get_by_id(category_id)

    def delete(self, category_id: str):
        """Delete a category; transactions and budgets pointing at it are unlinked."""
        conn = self._db.get_connection()
        try:
            cursor = conn.execute(
                "UPDATE transactions SET category_id = NULL WHERE category_id = ?",
                (category_id,),
            )
            conn.execute(
                "UPDATE budgets SET category_id = NULL WHERE category_id = ?",
                (category_id,),
            )
            conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        logger.debug(
            "Deleted category %s, unlinked %d transaction(s)", category_id, cursor.rowcount
        )
