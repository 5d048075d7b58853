"""Projects: the grouping every time log belongs to."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProjectBase(BaseModel):
    """Fields a user edits."""

    title: str = Field(min_length=1)
    description: str = ""


class ProjectCreate(ProjectBase):
    """Payload for POST /projects."""

    pass


class ProjectUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None


class Project(ProjectBase):
    """Stored project with ownership and audit fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
