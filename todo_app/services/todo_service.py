"""
Todo service - CRUD use cases scoped to the calling user.
Foreign and missing ids are treated the same: nothing happens.
"""

from todo_app.db.models.todo import Todo
from todo_app.db.repositories.todo_repository import TodoRepository
from todo_app.schemas.todo import TodoCreate, TodoResponse, TodoUpdate


class EmptyTodoText(ValueError):
    pass


class TodoService:
    def __init__(self, todo_repo: TodoRepository):
        self.todo_repo = todo_repo

    async def list_todos(self, user_id: int) -> list[TodoResponse]:
        todos = await self.todo_repo.list_for_user(user_id)
        return [TodoResponse.model_validate(t) for t in todos]

    async def create(self, user_id: int, data: TodoCreate) -> TodoResponse:
        """Insert an incomplete todo. Whitespace-only text is rejected."""
        if not data.text.strip():
            raise EmptyTodoText()
        todo = await self.todo_repo.add(Todo(text=data.text, completed=False, user_id=user_id))
        return TodoResponse.model_validate(todo)

    async def update(self, user_id: int, todo_id: int, data: TodoUpdate) -> TodoResponse | None:
        """Apply only the fields the client sent. None when the id is not the caller's."""
        changes = data.changes()
        if changes:
            todo = await self.todo_repo.update_owned(todo_id, user_id, changes)
        else:
            todo = await self.todo_repo.get_owned(todo_id, user_id)
        return TodoResponse.model_validate(todo) if todo else None

    async def delete(self, user_id: int, todo_id: int) -> bool:
        return await self.todo_repo.delete_owned(todo_id, user_id)
