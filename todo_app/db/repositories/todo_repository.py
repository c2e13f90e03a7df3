"""
Todo repository - every query is scoped by owner so one user never sees another's rows.
"""

from typing import Any

from sqlalchemy import delete, select

from todo_app.db.models.todo import Todo
from todo_app.db.repositories.base_repository import BaseRepository


class TodoRepository(BaseRepository[Todo]):
    """Owner-scoped todo queries."""

    def __init__(self, session):
        super().__init__(session, Todo)

    async def list_for_user(self, user_id: int) -> list[Todo]:
        """All of a user's todos, newest first. Id breaks ties on equal timestamps."""
        result = await self.session.execute(
            select(Todo)
            .where(Todo.user_id == user_id)
            .order_by(Todo.created_at.desc(), Todo.id.desc())
        )
        return list(result.scalars().all())

    async def get_owned(self, id: int, user_id: int) -> Todo | None:
        """Fetch a todo only if it belongs to user_id."""
        result = await self.session.execute(
            select(Todo).where(Todo.id == id, Todo.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def update_owned(self, id: int, user_id: int, changes: dict[str, Any]) -> Todo | None:
        """Apply changes to the row matching id AND owner. None when nothing matched."""
        todo = await self.get_owned(id, user_id)
        if todo is None:
            return None
        for field, value in changes.items():
            setattr(todo, field, value)
        await self.session.flush()
        await self.session.refresh(todo)
        return todo

    async def delete_owned(self, id: int, user_id: int) -> bool:
        """Delete the row matching id AND owner. Returns whether a row was removed."""
        result = await self.session.execute(
            delete(Todo).where(Todo.id == id, Todo.user_id == user_id)
        )
        return result.rowcount > 0
