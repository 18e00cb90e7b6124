from database.db_manager import DatabaseManager
from models.tag import Tag


class TagDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Tag:
        return Tag(id=row["id"], name=row["name"])

    def get_all(self) -> list[Tag]:
        conn = self._db.get_connection()
        rows = conn.execute("SELECT * FROM tags ORDER BY name").fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_or_create(self, name: str) -> Tag:
        conn = self._db.get_connection()
        row = conn.execute("SELECT * FROM tags WHERE name = ?", (name,)).fetchone()
        if row:
            return self._row_to_model(row)
        tag = Tag(name=name)
        conn.execute("INSERT INTO tags(id, name) VALUES (?, ?)", (tag.id, tag.name))
        conn.commit()
        return tag

    def delete(self, tag_id: str):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
        conn.commit()
