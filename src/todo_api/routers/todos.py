from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from ..errors import NotFoundError
from ..repositories import TodoRepository, get_repository
from ..schemas import TodoCreate, TodoOut, TodoUpdate
from ..validation import validate_title

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; ids outside it cannot exist.
TODO_ID_MIN = -(2**63)
TODO_ID_MAX = 2**63 - 1

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="List every Todo item, newest first.",
    responses={200: {"description": "List retrieved successfully"}},
)
def list_todos(repo: TodoRepository = Depends(get_repository)) -> List[TodoOut]:
    """
    List all todos ordered by creation time, newest first.
    """
    return [TodoOut(**it) for it in repo.list_all()]


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={
        200: {"description": "Todo found"},
        404: {"description": "Todo not found"},
    },
)
def get_todo(
    todo_id: int = Path(..., ge=TODO_ID_MIN, le=TODO_ID_MAX, description="Todo identifier"),
    repo: TodoRepository = Depends(get_repository),
) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    item = repo.get_by_id(todo_id)
    if item is None:
        raise NotFoundError(todo_id)
    return TodoOut(**item)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Invalid title"},
    },
)
def create_todo(
    payload: TodoCreate,
    response: Response,
    repo: TodoRepository = Depends(get_repository),
) -> TodoOut:
    """
    Create a new Todo. The Location header points at the new resource.
    """
    title = validate_title(payload.title)
    created = repo.insert(title)
    response.headers["Location"] = f"{router.prefix}/{created['id']}"
    logger.info("Created todo %d", created["id"])
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Replace Todo",
    description="Overwrite the title and completion flag of an existing Todo item.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "Invalid title"},
        404: {"description": "Todo not found"},
    },
)
def put_todo(
    payload: TodoUpdate,
    todo_id: int = Path(..., ge=TODO_ID_MIN, le=TODO_ID_MAX, description="Todo identifier"),
    repo: TodoRepository = Depends(get_repository),
) -> TodoOut:
    """
    Full replacement of the mutable fields; id and createdAt are kept.
    """
    title = validate_title(payload.title)
    updated = repo.update(todo_id, title, payload.is_done)
    if updated is None:
        raise NotFoundError(todo_id)
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(
    todo_id: int = Path(..., ge=TODO_ID_MIN, le=TODO_ID_MAX, description="Todo identifier"),
    repo: TodoRepository = Depends(get_repository),
) -> None:
    """
    Delete a Todo. Returns 204 on success, 404 if not found.
    """
    if not repo.delete(todo_id):
        raise NotFoundError(todo_id)
    logger.info("Deleted todo %d", todo_id)
    return None
