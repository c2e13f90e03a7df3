"""
User model - identity record for local and Google logins.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from todo_app.db.base import Base


class User(Base):
    """User entity. Holds a password hash, a Google id, or both."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
