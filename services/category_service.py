import logging
import sqlite3
from database.budget_dao import BudgetDAO
from database.category_dao import CategoryDAO
from models.category import Category
from utils.constants import DEFAULT_CATEGORY_COLOR

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, category_dao: CategoryDAO, budget_dao: BudgetDAO):
        self._dao = category_dao
        self._budget_dao = budget_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_name(self, name: str) -> Category | None:
        return self._dao.get_by_name(name.strip())

    def create(self, name: str, color_hex: str = "") -> Category:
        name = self._clean_name(name)
        existing = [c.name.lower() for c in self._dao.get_all()]
        if name.lower() in existing:
            raise ValueError(f"A category named '{name}' already exists.")
        color = color_hex.strip() or DEFAULT_CATEGORY_COLOR
        return self._dao.create(Category(name=name, color_hex=color))

    def update(self, category_id: str, name: str, color_hex: str = "") -> Category:
        """Rename/recolour a category, carrying linked budgets along with it."""
        current = self._dao.get_by_id(category_id)
        if current is None:
            raise ValueError("Category not found.")
        name = self._clean_name(name)
        others = [c for c in self._dao.get_all() if c.id != category_id]
        if any(c.name.lower() == name.lower() for c in others):
            raise ValueError(f"A category named '{name}' already exists.")
        color = color_hex.strip() or current.color_hex

        conn = self._dao._db.get_connection()
        try:
            self._dao.update(category_id, name, color, commit=False)
            renamed = self._budget_dao.rename_for_category(
                category_id, current.name, name, commit=False
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        if current.name != name:
            logger.info("Renamed category %r to %r (%d budget(s) moved)", current.name, name, renamed)
        return self._dao.get_by_id(category_id)

    def delete(self, category_id: str):
        """Delete a category. Its transactions become uncategorized."""
        self._dao.delete(category_id)

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        return name
