"""Integration tests for time log and archive endpoints."""
import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def references(app_client, auth_headers):
    """Create a project and a location to log against."""
    project = await app_client.post(
        "/projects", json={"title": "Website Redesign"}, headers=auth_headers
    )
    location = await app_client.post(
        "/locations", json={"title": "Office"}, headers=auth_headers
    )
    return {"project_id": project.json()["id"], "location_id": location.json()["id"]}


async def _create_log(app_client, auth_headers, references, **overrides):
    payload = {
        "title": "Write report",
        "project_id": references["project_id"],
        "location_id": references["location_id"],
        "deadline": "2025-03-14",
        "duration": 1.5,
    }
    payload.update(overrides)
    response = await app_client.post("/timelogs", json=payload, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestTimeLogCreate:
    """Tests for creating time logs."""

    async def test_create_time_log(self, app_client, auth_headers, references):
        """Test a complete form."""
        data = await _create_log(app_client, auth_headers, references)

        assert data["title"] == "Write report"
        assert data["duration"] == 1.5
        assert data["duration_display"] == "1h 30m"
        assert data["deadline"] == "2025-03-14"

    async def test_create_with_shorthand_duration(self, app_client, auth_headers, references):
        """Test the "H,MM" duration encoding."""
        data = await _create_log(
            app_client, auth_headers, references, duration=None, duration_text="2,15"
        )

        assert data["duration"] == 2.25

    async def test_create_defaults(self, app_client, auth_headers, references):
        """Test location and duration are optional on create."""
        response = await app_client.post(
            "/timelogs",
            json={
                "title": "Plan sprint",
                "project_id": references["project_id"],
                "deadline": "2025-03-14",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["duration"] == 0
        assert response.json()["location_id"] is None

    async def test_create_missing_title(self, app_client, auth_headers, references):
        """Test validation messages come back as 400."""
        response = await app_client.post(
            "/timelogs",
            json={"project_id": references["project_id"], "deadline": "2025-03-14"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a title"

    async def test_create_unknown_project(self, app_client, auth_headers):
        response = await app_client.post(
            "/timelogs",
            json={
                "title": "Write report",
                "project_id": "65f0c0ffee0000000000abcd",
                "deadline": "2025-03-14",
            },
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Project not found"


@pytest.mark.asyncio
class TestTimeLogEdit:
    """Tests for editing time logs and the archive history."""

    async def test_edit_with_archive(self, app_client, auth_headers, references):
        """Test accepting the archive prompt keeps the old values."""
        entry = await _create_log(app_client, auth_headers, references)

        response = await app_client.put(
            f"/timelogs/{entry['id']}",
            params={"archive": "true"},
            json={
                "title": "Write final report",
                "project_id": references["project_id"],
                "location_id": references["location_id"],
                "deadline": "2025-03-21",
                "duration": 2.5,
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Write final report"

        archives = await app_client.get(f"/timelogs/{entry['id']}/archives", headers=auth_headers)
        assert archives.status_code == 200
        assert len(archives.json()) == 1
        snapshot = archives.json()[0]
        assert snapshot["original_id"] == entry["id"]
        assert snapshot["title"] == "Write report"
        assert snapshot["duration"] == 1.5
        assert snapshot["deadline"] == "2025-03-14"

    async def test_edit_without_archive(self, app_client, auth_headers, references):
        """Test declining the prompt still applies the edit."""
        entry = await _create_log(app_client, auth_headers, references)

        response = await app_client.put(
            f"/timelogs/{entry['id']}",
            json={
                "title": "Write report",
                "project_id": references["project_id"],
                "location_id": references["location_id"],
                "deadline": "2025-03-14",
                "hours": 3,
                "minutes": 0,
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["duration"] == 3

        archives = await app_client.get(f"/timelogs/{entry['id']}/archives", headers=auth_headers)
        assert archives.json() == []

    async def test_edit_requires_duration(self, app_client, auth_headers, references):
        """Test an invalid edit writes neither snapshot nor update."""
        entry = await _create_log(app_client, auth_headers, references)

        response = await app_client.put(
            f"/timelogs/{entry['id']}",
            params={"archive": "true"},
            json={
                "title": "Write report",
                "project_id": references["project_id"],
                "location_id": references["location_id"],
                "deadline": "2025-03-14",
            },
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter duration"

        archives = await app_client.get(f"/timelogs/{entry['id']}/archives", headers=auth_headers)
        assert archives.json() == []

    async def test_edit_missing_entry(self, app_client, auth_headers, references):
        response = await app_client.put(
            "/timelogs/65f0c0ffee0000000000abcd",
            json={
                "title": "Write report",
                "project_id": references["project_id"],
                "location_id": references["location_id"],
                "deadline": "2025-03-14",
                "duration": 1,
            },
            headers=auth_headers,
        )

        assert response.status_code == 404

    async def test_edit_archive_in_place(self, app_client, auth_headers, references):
        """Test editing a snapshot doesn't create another one."""
        entry = await _create_log(app_client, auth_headers, references)
        edit = {
            "title": "Write final report",
            "project_id": references["project_id"],
            "location_id": references["location_id"],
            "deadline": "2025-03-21",
            "duration": 2.5,
        }
        await app_client.put(
            f"/timelogs/{entry['id']}", params={"archive": "true"}, json=edit, headers=auth_headers
        )
        archive_id = (await app_client.get(
            f"/timelogs/{entry['id']}/archives", headers=auth_headers
        )).json()[0]["id"]

        response = await app_client.put(
            f"/timelogs/{entry['id']}/archives/{archive_id}",
            json={
                "title": "Write report (v1)",
                "project_id": references["project_id"],
                "deadline": "2025-03-14",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Write report (v1)"
        assert response.json()["duration"] == 1.5

        archives = await app_client.get(f"/timelogs/{entry['id']}/archives", headers=auth_headers)
        assert len(archives.json()) == 1


@pytest.mark.asyncio
class TestTimeLogDelete:
    """Tests for deleting time logs and snapshots."""

    async def test_delete_removes_archives(self, app_client, auth_headers, references):
        """Test deleting a time log deletes its history."""
        entry = await _create_log(app_client, auth_headers, references)
        await app_client.put(
            f"/timelogs/{entry['id']}",
            params={"archive": "true"},
            json={
                "title": "Write report",
                "project_id": references["project_id"],
                "location_id": references["location_id"],
                "deadline": "2025-03-14",
                "duration": 2,
            },
            headers=auth_headers,
        )

        response = await app_client.delete(f"/timelogs/{entry['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted_count": 1, "archives_deleted": 1}

        response = await app_client.get(f"/timelogs/{entry['id']}", headers=auth_headers)
        assert response.status_code == 404

    async def test_delete_archive_keeps_entry(self, app_client, auth_headers, references):
        entry = await _create_log(app_client, auth_headers, references)
        await app_client.put(
            f"/timelogs/{entry['id']}",
            params={"archive": "true"},
            json={
                "title": "Write report",
                "project_id": references["project_id"],
                "location_id": references["location_id"],
                "deadline": "2025-03-14",
                "duration": 2,
            },
            headers=auth_headers,
        )
        archive_id = (await app_client.get(
            f"/timelogs/{entry['id']}/archives", headers=auth_headers
        )).json()[0]["id"]

        response = await app_client.delete(
            f"/timelogs/{entry['id']}/archives/{archive_id}", headers=auth_headers
        )

        assert response.status_code == 200
        response = await app_client.get(f"/timelogs/{entry['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["duration"] == 2

    async def test_list_filters_by_project(self, app_client, auth_headers, references):
        """Test the project filter."""
        other_project = (await app_client.post(
            "/projects", json={"title": "Mobile App"}, headers=auth_headers
        )).json()["id"]
        await _create_log(app_client, auth_headers, references, title="Redesign work")
        await _create_log(
            app_client, auth_headers, references, title="App work", project_id=other_project
        )

        response = await app_client.get(
            "/timelogs", params={"project_id": other_project}, headers=auth_headers
        )

        assert [e["title"] for e in response.json()] == ["App work"]
