"""Dashboard service - activity summary and daily goal tracking."""
import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from app.config import settings
from app.models.dashboard import (
    ActivitySummary,
    Dashboard,
    DimensionTotal,
    GoalState,
    GoalStatus,
)
from app.models.time_log import TimeLog
from app.services.location_service import LocationService
from app.services.project_service import ProjectService
from app.services.time_log_service import TimeLogService

logger = logging.getLogger(__name__)

DEFAULT_DAILY_GOAL = 8.5


def _to_zone(timestamp: datetime, zone: Optional[tzinfo]) -> datetime:
    """
    Bring a stored timestamp into the reference zone.

    Naive timestamps are UTC. With a naive reference, everything is compared
    as naive UTC.
    """
    if zone is None:
        if timestamp.tzinfo is not None:
            return timestamp.astimezone(timezone.utc).replace(tzinfo=None)
        return timestamp

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(zone)


def _most_active(totals: dict[str, float]) -> Optional[DimensionTotal]:
    """Key with the strictly greatest total; ties go to the smallest key."""
    best_key = None
    for key in sorted(totals):
        if best_key is None or totals[key] > totals[best_key]:
            best_key = key

    if best_key is None:
        return None
    return DimensionTotal(id=best_key, total=totals[best_key])


def summarize_activity(
    entries: Iterable[TimeLog],
    now: datetime,
    window_days: int = 30,
    recent_limit: int = 3,
) -> ActivitySummary:
    """
    Reduce time logs to period totals, trailing-window stats and leaders.

    Args:
        entries: Time logs, already sorted newest first
        now: Reference instant; its zone defines calendar days
        window_days: Length of the trailing window for average/active days
        recent_limit: How many of the leading entries to return as recent

    Returns:
        ActivitySummary (all zeros for no entries)
    """
    entries = list(entries)
    zone = now.tzinfo

    day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    # Weeks start on Sunday
    week_start = day_start - timedelta(days=(day_start.weekday() + 1) % 7)
    month_start = day_start.replace(day=1)
    window_start = now - timedelta(days=window_days)

    today_total = 0.0
    week_total = 0.0
    month_total = 0.0
    window_total = 0.0
    active_dates = set()
    project_totals: dict[str, float] = defaultdict(float)
    location_totals: dict[str, float] = defaultdict(float)

    for entry in entries:
        created = _to_zone(entry.created_at, zone)
        duration = entry.duration or 0.0

        if created >= day_start:
            today_total += duration
        if created >= week_start:
            week_total += duration
        if created >= month_start:
            month_total += duration
        if created >= window_start:
            window_total += duration
            active_dates.add(created.date())

        if entry.project_id:
            project_totals[entry.project_id] += duration
        if entry.location_id:
            location_totals[entry.location_id] += duration

    active_days = len(active_dates)
    average_daily = window_total / active_days if active_days else 0.0

    return ActivitySummary(
        today_total=today_total,
        week_total=week_total,
        month_total=month_total,
        average_daily=average_daily,
        active_days=active_days,
        most_active_project=_most_active(project_totals),
        most_active_location=_most_active(location_totals),
        recent=entries[:recent_limit],
    )


def evaluate_goal(today_total: float, target: float = DEFAULT_DAILY_GOAL) -> GoalState:
    """
    Classify today's total against the daily target.

    Examples:
        >>> evaluate_goal(10, 8.5).status
        <GoalStatus.OVERACHIEVED: 'overachieved'>
    """
    achieved = max(today_total or 0.0, 0.0)

    if target > 0:
        progress = min(achieved / target * 100, 100.0)
    else:
        progress = 100.0
    remaining = max(target - achieved, 0.0)
    overtime = max(achieved - target, 0.0)

    if achieved == 0:
        status = GoalStatus.NOT_STARTED
    elif achieved < target:
        status = GoalStatus.IN_PROGRESS
    elif achieved == target:
        status = GoalStatus.COMPLETED
    else:
        status = GoalStatus.OVERACHIEVED

    return GoalState(
        target=target,
        achieved=achieved,
        progress=progress,
        remaining=remaining,
        overtime=overtime,
        status=status,
    )


class DashboardService:
    """Service assembling the dashboard view for a user."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.time_log_service = TimeLogService(db)
        self.project_service = ProjectService(db)
        self.location_service = LocationService(db)
        self.zone = ZoneInfo(settings.timezone)

    async def get_dashboard(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> Dashboard:
        """
        Load a user's time logs, projects and locations and summarise them.

        The three reads run concurrently; any failure aborts the whole view.

        Args:
            user_id: User ID
            now: Reference instant (defaults to the current time). A naive
                value is read as local time in the configured timezone.

        Returns:
            Dashboard with summary and goal state
        """
        if now is None:
            now = datetime.now(self.zone)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=self.zone)

        entries, projects, locations = await asyncio.gather(
            self.time_log_service.list_entries(user_id=user_id),
            self.project_service.list_projects(user_id=user_id),
            self.location_service.list_locations(user_id=user_id),
        )
        logger.debug(
            "Dashboard for user %s: %d logs, %d projects, %d locations",
            user_id,
            len(entries),
            len(projects),
            len(locations),
        )

        summary = summarize_activity(
            entries,
            now,
            window_days=settings.summary_window_days,
            recent_limit=settings.recent_logs_limit,
        )

        project_titles = {project.id: project.title for project in projects}
        location_titles = {location.id: location.title for location in locations}
        if summary.most_active_project:
            summary.most_active_project.title = project_titles.get(summary.most_active_project.id)
        if summary.most_active_location:
            summary.most_active_location.title = location_titles.get(summary.most_active_location.id)

        goal = evaluate_goal(summary.today_total, settings.daily_goal_hours)

        return Dashboard(summary=summary, goal=goal)
