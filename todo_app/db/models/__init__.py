from todo_app.db.models.todo import Todo
from todo_app.db.models.user import User

__all__ = ["User", "Todo"]
