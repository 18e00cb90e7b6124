import sqlite3
from datetime import datetime
from decimal import Decimal
from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category
from models.tag import Tag
from models.transaction import Transaction, TransactionType
from utils.date_helpers import from_storage, to_storage


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row, tags: list[Tag] | None = None) -> Transaction:
        category = None
        if row["category_id"] is not None and row["category_name"] is not None:
            category = Category(
                id=row["category_id"],
                name=row["category_name"],
                color_hex=row["category_color"],
            )
        return Transaction(
            id=row["id"],
            amount=Decimal(row["amount"]),
            date=from_storage(row["date"]),
            note=row["note"],
            type=TransactionType(row["type"]),
            category=category,
            tags=tags or [],
            is_recurring=bool(row["is_recurring"]),
            recurrence_rule=row["recurrence_rule"],
            created_at=from_storage(row["created_at"]),
            updated_at=from_storage(row["updated_at"]),
        )

    def _select(self) -> str:
        return """
            SELECT t.*,
                   c.name      AS category_name,
                   c.color_hex AS category_color
            FROM transactions t
            LEFT JOIN categories c ON t.category_id = c.id
        """

    def _tags_by_transaction(self, transaction_ids: list[str]) -> dict[str, list[Tag]]:
        """Fetch tags for many transactions in a single query."""
        if not transaction_ids:
            return {}
        conn = self._db.get_connection()
        placeholders = ",".join("?" * len(transaction_ids))
        rows = conn.execute(
            f"""SELECT tt.transaction_id, g.id, g.name
                FROM transaction_tags tt
                JOIN tags g ON g.id = tt.tag_id
                WHERE tt.transaction_id IN ({placeholders})
                ORDER BY g.name""",
            transaction_ids,
        ).fetchall()
        result: dict[str, list[Tag]] = {}
        for row in rows:
            result.setdefault(row["transaction_id"], []).append(
                Tag(id=row["id"], name=row["name"])
            )
        return result

    def get_all(self) -> list[Transaction]:
        """All transactions, newest first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " ORDER BY t.date DESC, t.rowid DESC"
        ).fetchall()
        tag_map = self._tags_by_transaction([r["id"] for r in rows])
        return [self._row_to_model(r, tag_map.get(r["id"])) for r in rows]

    def get_by_period(self, start: datetime, end: datetime) -> list[Transaction]:
        """Transactions dated within [start, end), newest first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            self._select() + " WHERE t.date >= ? AND t.date < ? ORDER BY t.date DESC, t.rowid DESC",
            (to_storage(start), to_storage(end)),
        ).fetchall()
        tag_map = self._tags_by_transaction([r["id"] for r in rows])
        return [self._row_to_model(r, tag_map.get(r["id"])) for r in rows]

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._select() + " WHERE t.id = ?", (tx_id,)
        ).fetchone()
        if not row:
            return None
        return self._row_to_model(row, self._tags_by_transaction([tx_id]).get(tx_id))

    def create(self, tx: Transaction) -> Transaction:
        conn = self._db.get_connection()
        try:
            conn.execute(
                """INSERT INTO transactions
                   (id, amount, date, note, type, category_id,
                    is_recurring, recurrence_rule, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    tx.id, str(tx.amount), to_storage(tx.date), tx.note, tx.type.value,
                    tx.category.id if tx.category else None,
                    1 if tx.is_recurring else 0, tx.recurrence_rule,
                    to_storage(tx.created_at), to_storage(tx.updated_at),
                ),
            )
            self._write_tags(conn, tx.id, tx.tags)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        return self.get_by_id(tx.id)

    def update(self, tx: Transaction) -> Transaction:
        conn = self._db.get_connection()
        try:
            conn.execute(
                """UPDATE transactions
                   SET amount=?, date=?, note=?, type=?, category_id=?,
                       is_recurring=?, recurrence_rule=?, updated_at=?
                   WHERE id=?""",
                (
                    str(tx.amount), to_storage(tx.date), tx.note, tx.type.value,
                    tx.category.id if tx.category else None,
                    1 if tx.is_recurring else 0, tx.recurrence_rule,
                    to_storage(datetime.now()), tx.id,
                ),
            )
            conn.execute("DELETE FROM transaction_tags WHERE transaction_id = ?", (tx.id,))
            self._write_tags(conn, tx.id, tx.tags)
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        return self.get_by_id(tx.id)

    def _write_tags(self, conn: sqlite3.Connection, tx_id: str, tags: list[Tag]):
        for tag in tags:
            conn.execute(
                "INSERT OR IGNORE INTO transaction_tags(transaction_id, tag_id) VALUES (?, ?)",
                (tx_id, tag.id),
            )

    def delete(self, tx_id: str):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        conn.commit()
