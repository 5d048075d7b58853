"""Accounts and profile metadata."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user fields."""

    email: EmailStr
    full_name: str


class UserCreate(UserBase):
    """Registration payload."""

    password: str


class UserUpdate(BaseModel):
    """Profile update model."""

    full_name: Optional[str] = None


class User(UserBase):
    """Public profile, as returned by the API."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class UserInDB(User):
    """Stored account including the bcrypt hash."""

    hashed_password: str
