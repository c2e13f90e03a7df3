"""
Auth service - registration, local login and federated (Google) login.
Endpoints stay thin: they translate the exceptions below into HTTP errors
and own the session cookie.
"""

import logging

from sqlalchemy.exc import IntegrityError

from todo_app.core.security import hash_password_async, verify_password_async
from todo_app.db.models.user import User
from todo_app.db.repositories.user_repository import UserRepository
from todo_app.schemas.user import RegisterRequest
from todo_app.services.google_oauth import ProviderProfile

logger = logging.getLogger(__name__)


class EmailAlreadyRegistered(Exception):
    pass


class InvalidCredentials(Exception):
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)
        self.message = message


class FederatedLoginError(Exception):
    pass


class AuthService:
    """Identity checks against the users table."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register(self, data: RegisterRequest) -> User:
        """Create a password user. Raises EmailAlreadyRegistered on duplicate email."""
        if await self.user_repo.get_by_email(data.email):
            raise EmailAlreadyRegistered(data.email)
        user = User(
            email=data.email,
            hashed_password=await hash_password_async(data.password),
            name=data.name,
        )
        try:
            user = await self.user_repo.add(user)
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            raise EmailAlreadyRegistered(data.email) from e
        logger.info("Registered user id=%s", user.id)
        return user

    async def login_local(self, email: str, password: str) -> User:
        """Email/password check. Raises InvalidCredentials on any mismatch."""
        user = await self.user_repo.get_by_email(email)
        if user is None:
            await verify_password_async(password, None)
            logger.info("Local login failed: unknown email")
            raise InvalidCredentials()
        if not user.hashed_password:
            logger.info("Local login refused for Google-only user id=%s", user.id)
            raise InvalidCredentials("Please use Google login")
        if not await verify_password_async(password, user.hashed_password):
            logger.info("Local login failed: bad password for user id=%s", user.id)
            raise InvalidCredentials()
        return user

    async def login_federated(self, profile: ProviderProfile) -> User:
        """
        Find or create the user for a Google profile. Idempotent on provider id.
        A verified email matching a password-only account links the Google id to it.
        """
        user = await self.user_repo.get_by_google_id(profile.provider_id)
        if user is not None:
            return user

        existing = await self.user_repo.get_by_email(profile.email)
        if existing is not None:
            if existing.google_id is None and profile.email_verified:
                existing.google_id = profile.provider_id
                await self.user_repo.session.flush()
                logger.info("Linked Google account to user id=%s", existing.id)
                return existing
            raise FederatedLoginError(f"Email {profile.email} belongs to another account")

        user = User(google_id=profile.provider_id, email=profile.email, name=profile.name)
        try:
            user = await self.user_repo.add(user)
        except IntegrityError as e:
            raise FederatedLoginError("Concurrent account creation") from e
        logger.info("Created Google user id=%s", user.id)
        return user
