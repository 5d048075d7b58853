"""Locations: where a piece of work was done (office, home, client site)."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LocationBase(BaseModel):
    """Fields a user edits."""

    title: str = Field(min_length=1)
    description: str = ""


class LocationCreate(LocationBase):
    """Payload for POST /locations."""

    pass


class LocationUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class Location(LocationBase):
    """Stored location with ownership and audit fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
