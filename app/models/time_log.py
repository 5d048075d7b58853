"""Time log and archived time log model definitions."""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from app.utils.duration import (
    format_english,
    hours_minutes_to_decimal,
    parse_comma_shorthand,
)


class TimeLogBase(BaseModel):
    """Base time log fields."""

    title: str
    description: str = ""
    project_id: str
    location_id: Optional[str] = None
    deadline: Optional[date] = None
    duration: float = Field(default=0.0, ge=0)  # decimal hours

    @computed_field
    @property
    def duration_display(self) -> str:
        """Duration rendered as e.g. "1h 30m"."""
        return format_english(self.duration)


class TimeLogForm(BaseModel):
    """
    Submitted time log form.

    Fields are optional at the schema level so that missing values reach the
    service and come back as user-facing validation messages. Duration can be
    sent as decimal hours, as "H,MM" shorthand or as separate hour and minute
    fields.
    """

    title: Optional[str] = None
    description: str = ""
    project_id: Optional[str] = None
    location_id: Optional[str] = None
    deadline: Optional[date] = None
    duration: Optional[float] = None
    duration_text: Optional[str] = None
    hours: Optional[int] = Field(default=None, ge=0, le=24)
    minutes: Optional[int] = Field(default=None, ge=0, le=59)

    def resolved_duration(self) -> Optional[float]:
        """Decimal hours from whichever duration encoding was sent."""
        if self.duration is not None:
            return self.duration
        if self.duration_text is not None:
            return parse_comma_shorthand(self.duration_text)
        if self.hours is not None or self.minutes is not None:
            return hours_minutes_to_decimal(self.hours or 0, self.minutes or 0)
        return None


class TimeLogCreate(TimeLogForm):
    """Time log creation form."""

    pass


class TimeLogUpdate(TimeLogForm):
    """Time log edit form (full form resubmission)."""

    pass


class ArchivedTimeLogUpdate(TimeLogForm):
    """Edit form for an archived snapshot."""

    pass


class TimeLog(TimeLogBase):
    """Full time log model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    created_by: str
    updated_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class ArchivedTimeLog(TimeLogBase):
    """Snapshot of a time log taken just before an edit overwrote it."""

    id: str = Field(alias="_id", serialization_alias="id")
    original_id: str
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
