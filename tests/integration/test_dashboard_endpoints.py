"""Integration tests for the dashboard endpoint."""
from datetime import datetime, timedelta

import pytest


@pytest.mark.asyncio
class TestDashboard:
    """Tests for GET /dashboard."""

    async def test_empty_dashboard(self, app_client, auth_headers):
        """Test a new user gets zeros and a not-started goal."""
        response = await app_client.get("/dashboard", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["today_total"] == 0
        assert data["summary"]["active_days"] == 0
        assert data["summary"]["most_active_project"] is None
        assert data["summary"]["recent"] == []
        assert data["goal"]["status"] == "not-started"
        assert data["goal"]["target"] == 8.5
        assert data["remaining_display"] == "8h 30m"

    async def test_dashboard_after_logging(self, app_client, auth_headers):
        """Test today's logs drive totals, leaders and the goal."""
        project = (await app_client.post(
            "/projects", json={"title": "Website Redesign"}, headers=auth_headers
        )).json()
        for duration in (2, 3):
            await app_client.post(
                "/timelogs",
                json={
                    "title": "Work",
                    "project_id": project["id"],
                    "deadline": "2025-03-14",
                    "duration": duration,
                },
                headers=auth_headers,
            )

        # Slightly ahead of the stored timestamps
        now = (datetime.utcnow() + timedelta(seconds=5)).isoformat() + "+00:00"
        response = await app_client.get("/dashboard", params={"now": now}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["today_total"] == 5
        assert data["summary"]["active_days"] == 1
        assert data["summary"]["average_daily"] == 5
        assert data["summary"]["most_active_project"]["id"] == project["id"]
        assert data["summary"]["most_active_project"]["title"] == "Website Redesign"
        assert data["summary"]["most_active_project"]["total_display"] == "5h"
        assert len(data["summary"]["recent"]) == 2
        assert data["goal"]["status"] == "in-progress"
        assert data["today_display"] == "5h"
        assert data["remaining_display"] == "3h 30m"

    async def test_dashboard_requires_auth(self, app_client):
        response = await app_client.get("/dashboard")

        assert response.status_code == 401
