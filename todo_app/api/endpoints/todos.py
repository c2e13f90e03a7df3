"""
Todo CRUD endpoints - GET/POST/PUT/DELETE on the caller's own list.
Thin controller; TodoService holds the rules.
"""

from fastapi import APIRouter, HTTPException, status

from todo_app.core.dependencies import CurrentUser
from todo_app.db.repositories.todo_repository import TodoRepository
from todo_app.db.session import DbSession
from todo_app.schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from todo_app.schemas.user import MessageResponse
from todo_app.services.todo_service import EmptyTodoText, TodoService

router = APIRouter()


def _get_todo_service(session: DbSession) -> TodoService:
    return TodoService(TodoRepository(session))


@router.get("", response_model=list[TodoResponse])
async def list_todos(session: DbSession, user: CurrentUser):
    """All of the caller's todos, newest first."""
    return await _get_todo_service(session).list_todos(user.id)


@router.post("", response_model=TodoResponse)
async def create_todo(session: DbSession, data: TodoCreate, user: CurrentUser):
    try:
        return await _get_todo_service(session).create(user.id, data)
    except EmptyTodoText:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Todo text must not be empty",
        )


@router.put("/{todo_id}", response_model=TodoResponse | None)
async def update_todo(session: DbSession, todo_id: int, data: TodoUpdate, user: CurrentUser):
    """Partial update. Answers null when the id is missing or not the caller's."""
    return await _get_todo_service(session).update(user.id, todo_id, data)


@router.delete("/{todo_id}", response_model=MessageResponse)
async def delete_todo(session: DbSession, todo_id: int, user: CurrentUser):
    """Delete is idempotent: missing or foreign ids are a no-op."""
    await _get_todo_service(session).delete(user.id, todo_id)
    return MessageResponse(message="Todo deleted")
