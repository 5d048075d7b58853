"""Time log service - business logic for time logs and their archive history."""
import logging
import math
from datetime import date, datetime
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

from app.models.time_log import (
    ArchivedTimeLog,
    ArchivedTimeLogUpdate,
    TimeLog,
    TimeLogCreate,
    TimeLogForm,
    TimeLogUpdate,
)
from app.utils.errors import NotFoundError, to_object_id

logger = logging.getLogger(__name__)


def validate_form(form: TimeLogForm, live_edit: bool = False) -> Optional[float]:
    """
    Check a submitted time log form before any store call.

    Title, project and deadline are always required. Editing a live entry
    additionally requires a location and a positive duration.

    Args:
        form: Submitted form
        live_edit: True when the form edits an existing (non-archived) entry

    Returns:
        Decimal hours from the form, or None if no duration was sent

    Raises:
        ValueError: With a user-facing message for the first missing field
    """
    if not form.title or not form.title.strip():
        raise ValueError("Please enter a title")
    if not form.project_id:
        raise ValueError("Please select a project")
    if form.deadline is None:
        raise ValueError("Please enter a deadline")

    duration = form.resolved_duration()
    if duration is not None and (math.isnan(duration) or math.isinf(duration) or duration < 0):
        raise ValueError("Duration must be a non-negative number")

    if live_edit:
        if not form.location_id:
            raise ValueError("Please select a location")
        if not duration:
            raise ValueError("Please enter duration")

    return duration


def _deadline_to_doc(deadline: Optional[date]) -> Optional[datetime]:
    # BSON has no date type
    if deadline is None:
        return None
    return datetime.combine(deadline, datetime.min.time())


def _deadline_from_doc(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _original_key(entry_id: str) -> str:
    """Snapshot back-reference for an entry id: ObjectId hex, lowercased."""
    try:
        return str(ObjectId(entry_id))
    except (InvalidId, TypeError):
        return entry_id


class TimeLogService:
    """Service for handling time log operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.time_logs = db["time_logs"]
        self.archives = db["time_log_archives"]
        self.projects = db["projects"]
        self.locations = db["locations"]

    def _doc_to_entry(self, doc: dict) -> TimeLog:
        """
        Convert database document to TimeLog model.
        """
        return TimeLog(
            _id=str(doc["_id"]),
            title=doc["title"],
            description=doc.get("description") or "",
            project_id=doc["project_id"],
            location_id=doc.get("location_id"),
            deadline=_deadline_from_doc(doc.get("deadline")),
            duration=doc.get("duration") or 0.0,
            created_by=doc["created_by"],
            updated_by=doc.get("updated_by", doc["created_by"]),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _doc_to_archive(self, doc: dict) -> ArchivedTimeLog:
        """
        Convert database document to ArchivedTimeLog model.
        """
        return ArchivedTimeLog(
            _id=str(doc["_id"]),
            original_id=doc["original_id"],
            title=doc["title"],
            description=doc.get("description") or "",
            project_id=doc["project_id"],
            location_id=doc.get("location_id"),
            deadline=_deadline_from_doc(doc.get("deadline")),
            duration=doc.get("duration") or 0.0,
            created_by=doc["created_by"],
            created_at=doc["created_at"],
            updated_at=doc.get("updated_at", doc["created_at"]),
        )

    async def _find_owned(self, collection, doc_id: str, user_id: str) -> Optional[dict]:
        """Find a user's document by id; malformed ids find nothing."""
        try:
            object_id = ObjectId(doc_id)
        except (InvalidId, TypeError):
            return None
        return await collection.find_one({"_id": object_id, "created_by": user_id})

    async def _check_references(self, user_id: str, form: TimeLogForm) -> None:
        """
        Verify the referenced project (and location, if any) belong to the user.

        Raises:
            ValueError: If a reference doesn't resolve
        """
        if not await self._find_owned(self.projects, form.project_id, user_id):
            raise ValueError("Project not found")

        if form.location_id:
            if not await self._find_owned(self.locations, form.location_id, user_id):
                raise ValueError("Location not found")

    async def list_entries(
        self,
        user_id: str,
        project_id: Optional[str] = None,
        location_id: Optional[str] = None,
    ) -> list[TimeLog]:
        """
        List time logs for a user, newest first.

        Args:
            user_id: User ID
            project_id: Optional project filter
            location_id: Optional location filter

        Returns:
            List of time logs
        """
        query = {"created_by": user_id}

        if project_id:
            query["project_id"] = project_id
        if location_id:
            query["location_id"] = location_id

        cursor = self.time_logs.find(query).sort("created_at", -1)
        entry_docs = await cursor.to_list(length=None)

        return [self._doc_to_entry(doc) for doc in entry_docs]

    async def get_entry(self, user_id: str, entry_id: str) -> TimeLog:
        """
        Get a single time log.

        Raises:
            NotFoundError: If entry not found
        """
        object_id = to_object_id(entry_id, "Time log not found")

        entry_doc = await self.time_logs.find_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if not entry_doc:
            raise NotFoundError("Time log not found")

        return self._doc_to_entry(entry_doc)

    async def create_entry(
        self,
        user_id: str,
        entry_create: TimeLogCreate,
    ) -> TimeLog:
        """
        Create a time log.

        Duration defaults to 0 and location to none.

        Args:
            user_id: User ID
            entry_create: Submitted form

        Returns:
            Created time log

        Raises:
            ValueError: If a required field is missing or a reference is unknown
        """
        duration = validate_form(entry_create)
        await self._check_references(user_id, entry_create)

        now = datetime.utcnow()
        entry_doc = {
            "title": entry_create.title.strip(),
            "description": entry_create.description or "",
            "project_id": entry_create.project_id,
            "location_id": entry_create.location_id or None,
            "deadline": _deadline_to_doc(entry_create.deadline),
            "duration": duration or 0.0,
            "created_by": user_id,
            "updated_by": user_id,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.time_logs.insert_one(entry_doc)
        entry_doc["_id"] = result.inserted_id
        logger.info("Created time log %s for user %s", result.inserted_id, user_id)

        return self._doc_to_entry(entry_doc)

    async def _snapshot(self, user_id: str, existing: dict):
        """Write an archive snapshot of a live entry's current values."""
        now = datetime.utcnow()
        archive_doc = {
            "original_id": str(existing["_id"]),
            "title": existing["title"],
            "description": existing.get("description") or "",
            "project_id": existing["project_id"],
            "location_id": existing.get("location_id"),
            "deadline": existing.get("deadline"),
            "duration": existing.get("duration") or 0.0,
            "created_by": user_id,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.archives.insert_one(archive_doc)
        logger.info(
            "Archived time log %s as %s for user %s",
            existing["_id"],
            result.inserted_id,
            user_id,
        )
        return result.inserted_id

    async def update_entry(
        self,
        user_id: str,
        entry_id: str,
        entry_update: TimeLogUpdate,
        archive: bool = False,
    ) -> TimeLog:
        """
        Apply an edit to a live time log, optionally archiving it first.

        When ``archive`` is set, a snapshot of the entry's pre-edit values is
        written before the update. If the update then fails, the snapshot is
        removed again and the error is re-raised, so a failed edit leaves no
        trace. Declining (or dismissing) the archive prompt still applies the
        update.

        Args:
            user_id: User ID
            entry_id: Time log ID
            entry_update: Submitted form
            archive: Whether to snapshot the current values first

        Returns:
            Updated time log

        Raises:
            ValueError: If the form is invalid
            NotFoundError: If entry not found
        """
        duration = validate_form(entry_update, live_edit=True)
        object_id = to_object_id(entry_id, "Time log not found")

        existing = await self.time_logs.find_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if not existing:
            raise NotFoundError("Time log not found")

        await self._check_references(user_id, entry_update)

        archive_id = None
        if archive:
            archive_id = await self._snapshot(user_id, existing)

        update_doc = {
            "title": entry_update.title.strip(),
            "description": entry_update.description or "",
            "project_id": entry_update.project_id,
            "location_id": entry_update.location_id,
            "deadline": _deadline_to_doc(entry_update.deadline),
            "duration": duration,
            "updated_by": user_id,
            "updated_at": datetime.utcnow(),
        }

        try:
            updated_doc = await self.time_logs.find_one_and_update(
                {"_id": object_id, "created_by": user_id},
                {"$set": update_doc},
                return_document=True,
            )
            if not updated_doc:
                raise NotFoundError("Time log not found")
        except Exception:
            if archive_id is not None:
                logger.warning(
                    "Update of time log %s failed, removing archive %s",
                    entry_id,
                    archive_id,
                )
                await self.archives.delete_one({"_id": archive_id})
            raise

        logger.info("Updated time log %s for user %s", entry_id, user_id)
        return self._doc_to_entry(updated_doc)

    async def delete_entry(
        self,
        user_id: str,
        entry_id: str,
    ) -> dict:
        """
        Delete a time log and its archive history.

        Returns:
            Dictionary with deleted_count and archives_deleted

        Raises:
            NotFoundError: If entry not found
        """
        object_id = to_object_id(entry_id, "Time log not found")

        result = await self.time_logs.delete_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if result.deleted_count == 0:
            raise NotFoundError("Time log not found")

        archive_result = await self.archives.delete_many({
            "original_id": str(object_id),
            "created_by": user_id,
        })

        logger.info(
            "Deleted time log %s (%d archives) for user %s",
            entry_id,
            archive_result.deleted_count,
            user_id,
        )
        return {
            "deleted_count": result.deleted_count,
            "archives_deleted": archive_result.deleted_count,
        }

    async def list_archives(
        self,
        user_id: str,
        entry_id: str,
    ) -> list[ArchivedTimeLog]:
        """
        List archive snapshots of a time log, newest first.
        """
        cursor = self.archives.find({
            "original_id": _original_key(entry_id),
            "created_by": user_id,
        }).sort("created_at", -1)
        archive_docs = await cursor.to_list(length=None)

        return [self._doc_to_archive(doc) for doc in archive_docs]

    async def update_archive(
        self,
        user_id: str,
        entry_id: str,
        archive_id: str,
        archive_update: ArchivedTimeLogUpdate,
    ) -> ArchivedTimeLog:
        """
        Edit an archive snapshot in place.

        No new snapshot is taken. Duration is left unchanged when the form
        doesn't carry one.

        Raises:
            ValueError: If the form is invalid
            NotFoundError: If archive not found
        """
        duration = validate_form(archive_update)
        object_id = to_object_id(archive_id, "Archive not found")

        await self._check_references(user_id, archive_update)

        update_doc = {
            "title": archive_update.title.strip(),
            "description": archive_update.description or "",
            "project_id": archive_update.project_id,
            "location_id": archive_update.location_id or None,
            "deadline": _deadline_to_doc(archive_update.deadline),
            "updated_at": datetime.utcnow(),
        }
        if duration is not None:
            update_doc["duration"] = duration

        updated_doc = await self.archives.find_one_and_update(
            {"_id": object_id, "original_id": _original_key(entry_id), "created_by": user_id},
            {"$set": update_doc},
            return_document=True,
        )

        if not updated_doc:
            raise NotFoundError("Archive not found")

        logger.info("Updated archive %s for user %s", archive_id, user_id)
        return self._doc_to_archive(updated_doc)

    async def delete_archive(
        self,
        user_id: str,
        entry_id: str,
        archive_id: str,
    ) -> dict:
        """
        Delete a single archive snapshot. The live entry is untouched.

        Raises:
            NotFoundError: If archive not found
        """
        object_id = to_object_id(archive_id, "Archive not found")

        result = await self.archives.delete_one({
            "_id": object_id,
            "original_id": _original_key(entry_id),
            "created_by": user_id,
        })

        if result.deleted_count == 0:
            raise NotFoundError("Archive not found")

        logger.info("Deleted archive %s for user %s", archive_id, user_id)
        return {"deleted_count": result.deleted_count}

    async def total_duration_by_project(
        self,
        user_id: str,
        project_id: str,
    ) -> float:
        """
        Sum the durations of a project's time logs.

        Returns:
            Total decimal hours
        """
        cursor = self.time_logs.find(
            {"created_by": user_id, "project_id": project_id},
            {"duration": 1},
        )
        docs = await cursor.to_list(length=None)

        return sum(doc.get("duration") or 0.0 for doc in docs)
