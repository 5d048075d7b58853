"""Tests for Pydantic models."""
import pytest
from datetime import date, datetime
from pydantic import ValidationError


class TestProjectModel:
    """Tests for Project models."""

    def test_project_create_minimal(self):
        """Test creating a project with only a title."""
        from app.models.project import ProjectCreate

        project = ProjectCreate(title="Website Redesign")

        assert project.title == "Website Redesign"
        assert project.description == ""

    def test_project_create_missing_title(self):
        """Test that title is required and non-empty."""
        from app.models.project import ProjectCreate

        with pytest.raises(ValidationError):
            ProjectCreate()
        with pytest.raises(ValidationError):
            ProjectCreate(title="")

    def test_project_update_partial(self):
        """Test unset update fields are excluded from the dump."""
        from app.models.project import ProjectUpdate

        update = ProjectUpdate(description="Now with a client brief")

        assert update.model_dump(exclude_unset=True) == {"description": "Now with a client brief"}

    def test_project_model_alias_id_field(self):
        """Test the id is read from _id and written as id."""
        from app.models.project import Project

        now = datetime(2025, 3, 10, 9, 0)
        project = Project(
            _id="65f0c0ffee0000000000abcd",
            title="Website Redesign",
            created_by="user123",
            updated_by="user123",
            created_at=now,
            updated_at=now,
        )

        assert project.id == "65f0c0ffee0000000000abcd"
        assert project.model_dump(by_alias=True)["id"] == "65f0c0ffee0000000000abcd"


class TestLocationModel:
    """Tests for Location models."""

    def test_location_create(self):
        from app.models.location import LocationCreate

        location = LocationCreate(title="Office", description="3rd floor")

        assert location.title == "Office"
        assert location.description == "3rd floor"

    def test_location_update_rejects_empty_title(self):
        from app.models.location import LocationUpdate

        with pytest.raises(ValidationError):
            LocationUpdate(title="")


class TestUserModel:
    """Tests for User models."""

    def test_user_create_valid(self):
        """Test creating a user."""
        from app.models.user import UserCreate

        user = UserCreate(
            email="logger@example.com",
            full_name="Time Logger",
            password="password123",
        )

        assert user.email == "logger@example.com"
        assert user.full_name == "Time Logger"

    def test_user_create_invalid_email(self):
        """Test that email is validated."""
        from app.models.user import UserCreate

        with pytest.raises(ValidationError):
            UserCreate(email="not-an-email", full_name="Time Logger", password="x")

    def test_user_in_db_has_hashed_password(self):
        """Test UserInDB carries the hash but User doesn't."""
        from app.models.user import User, UserInDB

        now = datetime(2025, 3, 10, 9, 0)
        user = UserInDB(
            _id="user123",
            email="logger@example.com",
            full_name="Time Logger",
            hashed_password="$2b$12$hash",
            created_at=now,
            updated_at=now,
        )

        assert user.hashed_password == "$2b$12$hash"
        assert "hashed_password" not in User.model_fields


class TestTimeLogModel:
    """Tests for time log models."""

    def test_time_log_defaults_and_display(self):
        """Test defaults and the rendered duration."""
        from app.models.time_log import TimeLog

        now = datetime(2025, 3, 10, 9, 0)
        entry = TimeLog(
            _id="log1",
            title="Write report",
            project_id="proj1",
            duration=1.5,
            created_by="user123",
            updated_by="user123",
            created_at=now,
            updated_at=now,
        )

        assert entry.description == ""
        assert entry.location_id is None
        assert entry.deadline is None
        assert entry.duration_display == "1h 30m"
        assert entry.model_dump(by_alias=True)["duration_display"] == "1h 30m"

    def test_time_log_rejects_negative_duration(self):
        """Test stored durations are non-negative."""
        from app.models.time_log import TimeLog

        now = datetime(2025, 3, 10, 9, 0)
        with pytest.raises(ValidationError):
            TimeLog(
                _id="log1",
                title="Write report",
                project_id="proj1",
                duration=-1,
                created_by="user123",
                updated_by="user123",
                created_at=now,
                updated_at=now,
            )

    def test_form_accepts_empty_submission(self):
        """Test missing fields are left for the service to report."""
        from app.models.time_log import TimeLogCreate

        form = TimeLogCreate()

        assert form.title is None
        assert form.resolved_duration() is None

    def test_resolved_duration_precedence(self):
        """Test decimal hours win over shorthand, shorthand over fields."""
        from app.models.time_log import TimeLogUpdate

        assert TimeLogUpdate(duration=2, duration_text="1,30", hours=5).resolved_duration() == 2
        assert TimeLogUpdate(duration_text="1,30", hours=5).resolved_duration() == 1.5
        assert TimeLogUpdate(hours=5).resolved_duration() == 5
        assert TimeLogUpdate(minutes=45).resolved_duration() == 0.75

    def test_hour_and_minute_bounds(self):
        """Test the separate fields are bounded."""
        from app.models.time_log import TimeLogCreate

        TimeLogCreate(hours=24, minutes=59)
        with pytest.raises(ValidationError):
            TimeLogCreate(hours=25)
        with pytest.raises(ValidationError):
            TimeLogCreate(minutes=60)
        with pytest.raises(ValidationError):
            TimeLogCreate(hours=-1)

    def test_task_reference_is_ignored(self):
        """Test a time log form carries no task reference."""
        from app.models.time_log import TimeLogCreate

        form = TimeLogCreate(title="Write report", task_id="65f0c0ffee0000000000abcd")

        assert "task_id" not in TimeLogCreate.model_fields
        assert "task_id" not in form.model_dump()

    def test_deadline_parses_iso_date(self):
        from app.models.time_log import TimeLogCreate

        form = TimeLogCreate(deadline="2025-03-14")

        assert form.deadline == date(2025, 3, 14)


class TestDashboardModel:
    """Tests for dashboard models."""

    def test_goal_status_values(self):
        """Test GoalStatus enum has correct values."""
        from app.models.dashboard import GoalStatus

        assert GoalStatus.NOT_STARTED.value == "not-started"
        assert GoalStatus.IN_PROGRESS.value == "in-progress"
        assert GoalStatus.COMPLETED.value == "completed"
        assert GoalStatus.OVERACHIEVED.value == "overachieved"

    def test_empty_summary(self):
        """Test an empty summary is all zeros."""
        from app.models.dashboard import ActivitySummary

        summary = ActivitySummary()

        assert summary.today_total == 0
        assert summary.active_days == 0
        assert summary.most_active_project is None
        assert summary.recent == []

    def test_dashboard_displays(self):
        """Test the rendered totals."""
        from app.models.dashboard import ActivitySummary, Dashboard, GoalState, GoalStatus

        dashboard = Dashboard(
            summary=ActivitySummary(today_total=6.25),
            goal=GoalState(
                target=8.5,
                achieved=6.25,
                progress=6.25 / 8.5 * 100,
                remaining=2.25,
                overtime=0,
                status=GoalStatus.IN_PROGRESS,
            ),
        )

        assert dashboard.today_display == "6h 15m"
        assert dashboard.remaining_display == "2h 15m"
        assert dashboard.overtime_display == "0m"
        assert dashboard.model_dump()["goal"]["status"] == "in-progress"
