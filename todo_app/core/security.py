"""
Security: password hashing, session tokens and signed OAuth state.
Hashing is CPU bound, so the async wrappers run it in the threadpool.
"""

import secrets
from datetime import datetime, timezone, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from todo_app.config import get_settings

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

OAUTH_STATE_PURPOSE = "google-oauth-state"
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Salted one-way hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain: str, hashed: str | None) -> bool:
    """Verify against hashed, or burn equivalent time when there is no hash to check."""
    # bcrypt would truncate, letting a longer password match on its first 72 bytes
    if hashed is None or len(plain.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        await run_in_threadpool(pwd_context.dummy_verify)
        return False
    return await run_in_threadpool(verify_password, plain, hashed)


def generate_session_token() -> str:
    """Opaque, unguessable session id for the cookie."""
    return secrets.token_urlsafe(32)


def create_oauth_state() -> str:
    """Signed, short-lived state parameter for the Google redirect (CSRF protection)."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.oauth_state_expire_minutes)
    to_encode = {
        "purpose": OAUTH_STATE_PURPOSE,
        "nonce": secrets.token_urlsafe(16),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_oauth_state(state: str | None) -> bool:
    """True when state was issued by create_oauth_state and has not expired."""
    if not state:
        return False
    try:
        payload = jwt.decode(state, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return False
    return payload.get("purpose") == OAUTH_STATE_PURPOSE
