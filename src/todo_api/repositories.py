from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator, List, Optional

from fastapi import Depends

from .db import COLS, STORE_NOW, get_connection
from .errors import StoreError
from .models import TodoEntity

_SELECT = f"SELECT {COLS.id}, {COLS.title}, {COLS.is_done}, {COLS.created_at} FROM {COLS.table}"


@contextmanager
def _store_errors(action: str) -> Generator[None, None, None]:
    try:
        yield
    except sqlite3.Error as e:
        raise StoreError(f"Failed to {action}: {e}") from e


def _row_to_entity(row: sqlite3.Row) -> TodoEntity:
    created_at = datetime.fromisoformat(row[COLS.created_at])
    if created_at.tzinfo is None:
        # SQLite's 'now' is UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return {
        "id": int(row[COLS.id]),
        "title": str(row[COLS.title]),
        "is_done": bool(row[COLS.is_done]),
        "created_at": created_at,
    }


# PUBLIC_INTERFACE
class TodoRepository:
    """
    Data access for the Todos table over a single, request-scoped connection.

    Every statement uses bound parameters; driver errors surface as StoreError.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def list_all(self) -> List[TodoEntity]:
        """Return every todo, newest first."""
        with _store_errors("list todos"):
            rows = self._conn.execute(
                f"{_SELECT} ORDER BY {COLS.created_at} DESC, {COLS.id} DESC"
            ).fetchall()
        return [_row_to_entity(r) for r in rows]

    def get_by_id(self, todo_id: int) -> Optional[TodoEntity]:
        """Return the todo with the given id, or None if there is none."""
        with _store_errors("read todo"):
            row = self._conn.execute(f"{_SELECT} WHERE {COLS.id} = ?", (todo_id,)).fetchone()
        return _row_to_entity(row) if row else None

    def insert(self, title: str) -> TodoEntity:
        """
        Insert a new, not-done todo stamped with the store's current time.

        Returns the row as stored, re-read by its freshly assigned id.
        """
        with _store_errors("insert todo"):
            cur = self._conn.execute(
                f"""
                INSERT INTO {COLS.table} ({COLS.title}, {COLS.is_done}, {COLS.created_at})
                VALUES (?, 0, {STORE_NOW})
                """,
                (title,),
            )
            new_id = cur.lastrowid
        created = self.get_by_id(new_id)
        if created is None:
            raise StoreError(f"Inserted todo {new_id} could not be read back")
        return created

    def update(self, todo_id: int, title: str, is_done: bool) -> Optional[TodoEntity]:
        """
        Overwrite title and is_done of an existing todo in one statement.

        Returns the updated row, or None if no todo has that id. Id and
        created_at are never written.
        """
        with _store_errors("update todo"):
            # fetchall steps the statement to completion so the autocommit lands
            rows = self._conn.execute(
                f"""
                UPDATE {COLS.table}
                SET {COLS.title} = ?, {COLS.is_done} = ?
                WHERE {COLS.id} = ?
                RETURNING {COLS.id}, {COLS.title}, {COLS.is_done}, {COLS.created_at}
                """,
                (title, 1 if is_done else 0, todo_id),
            ).fetchall()
        return _row_to_entity(rows[0]) if rows else None

    def delete(self, todo_id: int) -> bool:
        """Delete a todo by id. Return True if a row was removed, False if none matched."""
        with _store_errors("delete todo"):
            cur = self._conn.execute(f"DELETE FROM {COLS.table} WHERE {COLS.id} = ?", (todo_id,))
        return cur.rowcount > 0


# PUBLIC_INTERFACE
def get_repository(conn: sqlite3.Connection = Depends(get_connection)) -> TodoRepository:
    """FastAPI dependency returning a repository bound to the request's connection."""
    return TodoRepository(conn)
