from __future__ import annotations


class TodoServiceError(Exception):
    """Base class for errors raised by the todo service."""


# PUBLIC_INTERFACE
class ValidationError(TodoServiceError):
    """
    Caller input failed a structural check (e.g. empty or oversized title).

    Rendered as 400 with the message as a plain-text reason.
    """


# PUBLIC_INTERFACE
class NotFoundError(TodoServiceError):
    """The referenced todo id does not exist. Rendered as an empty 404."""

    def __init__(self, todo_id: int) -> None:
        super().__init__(f"Todo {todo_id} not found")
        self.todo_id = todo_id


# PUBLIC_INTERFACE
class StoreError(TodoServiceError):
    """Connectivity or constraint failure at the data layer."""


# PUBLIC_INTERFACE
class ConfigurationError(TodoServiceError):
    """Required configuration is missing or invalid at startup."""
