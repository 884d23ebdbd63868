from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A Todo row as read from the store.

    Fields:
    - id: Unique integer identifier, assigned by the store
    - title: Short title (1..200 chars)
    - is_done: Completion flag, false on creation
    - created_at: UTC creation timestamp taken from the store clock
    """

    id: int
    title: str
    is_done: bool
    created_at: datetime
