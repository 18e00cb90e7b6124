import logging
import sqlite3
import uuid

from utils.constants import DB_FILE, DEFAULT_CATEGORIES, DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self) -> bool:
        """Create schema, seed settings and, on an empty ledger, default categories.

        Returns True when default categories were inserted.
        """
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_settings(conn)
        seeded = self._seed_categories(conn)
        conn.commit()
        return seeded

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id         TEXT PRIMARY KEY,
                name       TEXT NOT NULL,
                color_hex  TEXT NOT NULL DEFAULT '#999999'
            );

            CREATE TABLE IF NOT EXISTS tags (
                id    TEXT PRIMARY KEY,
                name  TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id               TEXT PRIMARY KEY,
                amount           TEXT NOT NULL,
                date             TEXT NOT NULL,
                note             TEXT NOT NULL DEFAULT '',
                type             TEXT NOT NULL CHECK(type IN ('expense','income')),
                category_id      TEXT REFERENCES categories(id) ON DELETE SET NULL,
                is_recurring     INTEGER NOT NULL DEFAULT 0,
                recurrence_rule  TEXT,
                created_at       TEXT NOT NULL,
                updated_at       TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS transaction_tags (
                transaction_id  TEXT NOT NULL REFERENCES transactions(id) ON DELETE CASCADE,
                tag_id          TEXT NOT NULL REFERENCES tags(id) ON DELETE CASCADE,
                PRIMARY KEY (transaction_id, tag_id)
            );

            CREATE TABLE IF NOT EXISTS budgets (
                id            TEXT PRIMARY KEY,
                name          TEXT NOT NULL,
                amount        TEXT NOT NULL,
                period_start  TEXT NOT NULL,
                period_end    TEXT NOT NULL,
                category_id   TEXT REFERENCES categories(id) ON DELETE SET NULL
            );

            CREATE TABLE IF NOT EXISTS budget_categories (
                budget_id    TEXT NOT NULL REFERENCES budgets(id) ON DELETE CASCADE,
                category_id  TEXT NOT NULL REFERENCES categories(id) ON DELETE CASCADE,
                PRIMARY KEY (budget_id, category_id)
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date        ON transactions(date);
            CREATE INDEX IF NOT EXISTS idx_transactions_category_id ON transactions(category_id);
            CREATE INDEX IF NOT EXISTS idx_budgets_category_id      ON budgets(category_id);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_settings(self, conn: sqlite3.Connection):
        for key, value in DEFAULT_SETTINGS:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def _seed_categories(self, conn: sqlite3.Connection) -> bool:
        count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        if count:
            return False
        for cat in DEFAULT_CATEGORIES:
            conn.execute(
                "INSERT INTO categories(id, name, color_hex) VALUES (?, ?, ?)",
                (uuid.uuid4().hex, cat["name"], cat["color_hex"]),
            )
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return True

    def reset_all_data(self):
        """Erase every transaction, budget, category and tag in one transaction.

        Default categories come back on the next initialize().
        """
        conn = self.get_connection()
        try:
            conn.execute("DELETE FROM transaction_tags")
            conn.execute("DELETE FROM transactions")
            conn.execute("DELETE FROM budget_categories")
            conn.execute("DELETE FROM budgets")
            conn.execute("DELETE FROM categories")
            conn.execute("DELETE FROM tags")
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        logger.info("All ledger data erased from %s", self.db_path)

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
