# Repository pattern: data access kept out of services and endpoints

from todo_app.db.repositories.todo_repository import TodoRepository
from todo_app.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "TodoRepository"]
