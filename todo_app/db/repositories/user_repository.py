"""
User repository - all user lookups used by authentication.
"""

from sqlalchemy import select

from todo_app.db.models.user import User
from todo_app.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - local login and registration checks."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_google_id(self, google_id: str) -> User | None:
        """Find user by Google subject id - federated login."""
        result = await self.session.execute(select(User).where(User.google_id == google_id))
        return result.scalar_one_or_none()
