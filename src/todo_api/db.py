from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator

from fastapi import Request

from .errors import StoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "Todos"
    id: str = "Id"
    title: str = "Title"
    is_done: str = "IsDone"
    created_at: str = "CreatedAt"


COLS = _Cols()

# Millisecond precision keeps rapid inserts distinguishable in list order.
STORE_NOW = "strftime('%Y-%m-%dT%H:%M:%f', 'now')"


def connect(db_path: str) -> sqlite3.Connection:
    """
    Open a connection to the SQLite store.

    Connections run in autocommit mode (every statement is its own
    transaction) and may be used from a different threadpool thread than the
    one that opened them.
    """
    try:
        conn = sqlite3.connect(db_path, isolation_level=None, check_same_thread=False)
    except sqlite3.Error as e:
        raise StoreError(f"Could not open database {db_path!r}") from e
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def scoped_connection(db_path: str) -> Generator[sqlite3.Connection, None, None]:
    """Yield a connection that is closed on every exit path."""
    conn = connect(db_path)
    try:
        yield conn
    finally:
        conn.close()


# PUBLIC_INTERFACE
def init_db(db_path: str) -> None:
    """Create the Todos table if it does not exist yet."""
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with scoped_connection(db_path) as conn:
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {COLS.table} (
                    {COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {COLS.title} TEXT NOT NULL
                        CHECK (length({COLS.title}) <= 200 AND length(trim({COLS.title})) > 0),
                    {COLS.is_done} BOOLEAN NOT NULL DEFAULT 0,
                    {COLS.created_at} TEXT NOT NULL DEFAULT ({STORE_NOW})
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{COLS.table}_created_at ON {COLS.table}({COLS.created_at})"
            )
        except sqlite3.Error as e:
            raise StoreError("Could not initialise the Todos table") from e
    logger.info("Database initialized at: %s", db_path)


# PUBLIC_INTERFACE
def get_connection(request: Request) -> Generator[sqlite3.Connection, None, None]:
    """
    FastAPI dependency: one store connection per request.

    The connection is released when the request finishes, whether the handler
    returned normally or raised.
    """
    settings = request.app.state.settings
    with scoped_connection(settings.database_path) as conn:
        yield conn
