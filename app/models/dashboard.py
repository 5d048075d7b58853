"""Dashboard and activity summary model definitions."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, computed_field

from app.models.time_log import TimeLog
from app.utils.duration import format_english


class GoalStatus(str, Enum):
    """Classification of today's total against the daily target."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    OVERACHIEVED = "overachieved"


class GoalState(BaseModel):
    """Daily goal progress, derived and never stored."""

    target: float
    achieved: float
    progress: float  # percent, capped at 100
    remaining: float
    overtime: float
    status: GoalStatus


class DimensionTotal(BaseModel):
    """Summed duration for one project or location."""

    id: str
    total: float
    title: Optional[str] = None

    @computed_field
    @property
    def total_display(self) -> str:
        return format_english(self.total)


class ActivitySummary(BaseModel):
    """Aggregates over a user's time logs as of a reference instant."""

    today_total: float = 0.0
    week_total: float = 0.0
    month_total: float = 0.0
    average_daily: float = 0.0
    active_days: int = 0
    most_active_project: Optional[DimensionTotal] = None
    most_active_location: Optional[DimensionTotal] = None
    recent: list[TimeLog] = []


class Dashboard(BaseModel):
    """Dashboard view: activity summary plus daily goal."""

    summary: ActivitySummary
    goal: GoalState

    @computed_field
    @property
    def today_display(self) -> str:
        return format_english(self.summary.today_total)

    @computed_field
    @property
    def remaining_display(self) -> str:
        return format_english(self.goal.remaining)

    @computed_field
    @property
    def overtime_display(self) -> str:
        return format_english(self.goal.overtime)
