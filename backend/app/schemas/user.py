"""Pydantic schemas for Users."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value


class UserIdentity(BaseModel):
    """Minimal identity shown next to slots and requests."""

    user_id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class UserOut(UserIdentity):
    created_at: datetime


class UserRegistered(UserOut):
    access_token: str
    token_type: str = "bearer"
