import logging
import sqlite3
import threading
import uuid
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional

from domain.entities import Task, utcnow
from domain.errors import PersistenceError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "completed")


def sqlite_path(database_url: str) -> str:
    """Turns ``sqlite:///todo.db`` (or a bare path) into something sqlite3 can open."""
    if database_url.startswith("sqlite:///"):
        return database_url[len("sqlite:///"):]
    if database_url.startswith("sqlite://"):
        return database_url[len("sqlite://"):] or ":memory:"
    return database_url


class Database:
    def __init__(self, database_url: str = "sqlite:///todo.db"):
        self.database_url = database_url
        self.db_name = sqlite_path(database_url)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            conn = sqlite3.connect(self.db_name, check_same_thread=False)
            self._init_db(conn)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not open task store at {self.db_name}: {e}") from e
        self._conn = conn
        logger.info(f"Task store connected: {self.db_name}")

    def close(self) -> None:
        if self._conn is None:
            return
        with self._lock:
            self._conn.close()
            self._conn = None
        logger.info("Task store connection closed")

    def _init_db(self, conn: sqlite3.Connection) -> None:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                completed INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL
            )
        """)
        conn.commit()

    def _execute(self, sql: str, params: tuple = (), fetch: Optional[Callable[[sqlite3.Cursor], Any]] = None) -> Any:
        """Runs one statement under the lock; rows are read by ``fetch`` before it is released."""
        if self._conn is None:
            raise PersistenceError("Task store is not connected")
        with self._lock:
            try:
                cursor = self._conn.execute(sql, params)
                result = fetch(cursor) if fetch else cursor.rowcount
                self._conn.commit()
                return result
            except sqlite3.Error as e:
                self._conn.rollback()
                raise PersistenceError(str(e)) from e

    @staticmethod
    def _row_to_task(row) -> Task:
        return Task(
            id=row[0],
            title=row[1],
            completed=bool(row[2]),
            created_at=datetime.fromisoformat(row[3]),
        )

    def insert(self, title: str) -> Task:
        task = Task(id=uuid.uuid4().hex, title=title, completed=False, created_at=utcnow())
        self._execute(
            "INSERT INTO tasks (id, title, completed, created_at) VALUES (?, ?, ?, ?)",
            (task.id, task.title, 0, task.created_at.isoformat()),
        )
        return task

    def list_all(self) -> List[Task]:
        rows = self._execute(
            "SELECT id, title, completed, created_at FROM tasks ORDER BY created_at DESC, rowid DESC",
            fetch=lambda cursor: cursor.fetchall(),
        )
        return [self._row_to_task(row) for row in rows]

    def get_by_id(self, task_id: str) -> Optional[Task]:
        row = self._execute(
            "SELECT id, title, completed, created_at FROM tasks WHERE id = ?",
            (task_id,),
            fetch=lambda cursor: cursor.fetchone(),
        )
        if row:
            return self._row_to_task(row)
        return None

    def find_and_update(self, task_id: str, fields: Mapping[str, Any]) -> Optional[Task]:
        changes = {key: fields[key] for key in UPDATABLE_FIELDS if key in fields}
        if not changes:
            return self.get_by_id(task_id)
        if changes.get("completed") is not None:
            changes["completed"] = 1 if changes["completed"] else 0
        assignments = ", ".join(f"{key} = ?" for key in changes)
        updated = self._execute(
            f"UPDATE tasks SET {assignments} WHERE id = ?",
            (*changes.values(), task_id),
        )
        if updated > 0:
            return self.get_by_id(task_id)
        return None

    def delete_by_id(self, task_id: str) -> None:
        self._execute("DELETE FROM tasks WHERE id = ?", (task_id,))
