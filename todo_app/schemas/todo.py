"""Todo request/response schemas - REST API contract."""

from datetime import datetime

from pydantic import BaseModel, model_validator


class TodoCreate(BaseModel):
    text: str


class TodoUpdate(BaseModel):
    """
    Partial update. A field is applied only when present in the request body;
    absent fields are left untouched. Explicit null is rejected.
    """

    text: str | None = None
    completed: bool | None = None

    @model_validator(mode="after")
    def _reject_explicit_null(self) -> "TodoUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} must not be null")
        return self

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TodoResponse(BaseModel):
    id: int
    text: str
    completed: bool
    user_id: int
    created_at: datetime

    model_config = {"from_attributes": True}
