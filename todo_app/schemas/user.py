"""User request/response schemas - API contract and validation."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from todo_app.core.security import BCRYPT_MAX_PASSWORD_BYTES


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # bcrypt ignores everything past 72 bytes
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    # Same normalization as registration, so the stored address matches
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    name: str | None = None

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    """Auth endpoints wrap the user: {"user": {...}}."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
