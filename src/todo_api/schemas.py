from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# camelCase on the wire, snake_case in Python; snake_case input is accepted too.
_WIRE_CONFIG = dict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Title rules are enforced by the validation layer so that violations are
    reported as 400 with a plain-text reason.
    """

    model_config = ConfigDict(
        **_WIRE_CONFIG,
        json_schema_extra={"example": {"title": "Buy milk"}},
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item (1..200 chars)")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for replacing the mutable fields of an existing Todo item.
    """

    model_config = ConfigDict(
        **_WIRE_CONFIG,
        json_schema_extra={"example": {"title": "Buy milk", "isDone": True}},
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item (1..200 chars)")
    is_done: bool = Field(default=False, description="Completion status flag")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        **_WIRE_CONFIG,
        json_schema_extra={
            "example": {
                "id": 123,
                "title": "Buy milk",
                "isDone": False,
                "createdAt": "2025-01-25T10:15:30.123000Z",
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    is_done: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp assigned by the store (UTC)")
