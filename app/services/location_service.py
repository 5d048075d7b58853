"""Location service - business logic for location management."""
import logging
from datetime import datetime

from app.models.location import Location, LocationCreate, LocationUpdate
from app.utils.errors import NotFoundError, to_object_id

logger = logging.getLogger(__name__)


class LocationService:
    """Service for handling location operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.locations = db["locations"]

    def _doc_to_location(self, doc: dict) -> Location:
        """
        Convert database document to Location model.
        """
        return Location(
            _id=str(doc["_id"]),
            title=doc["title"],
            description=doc.get("description") or "",
            created_by=doc["created_by"],
            updated_by=doc.get("updated_by", doc["created_by"]),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_location(
        self,
        user_id: str,
        location_create: LocationCreate,
    ) -> Location:
        """
        Create a new location.

        Args:
            user_id: User ID who owns the location
            location_create: Location creation data

        Returns:
            Created location object
        """
        now = datetime.utcnow()
        location_doc = {
            "title": location_create.title,
            "description": location_create.description,
            "created_by": user_id,
            "updated_by": user_id,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.locations.insert_one(location_doc)
        location_doc["_id"] = result.inserted_id
        logger.info("Created location %s for user %s", result.inserted_id, user_id)

        return self._doc_to_location(location_doc)

    async def list_locations(self, user_id: str) -> list[Location]:
        """
        List locations for a user, newest first.

        Args:
            user_id: User ID

        Returns:
            List of locations
        """
        cursor = self.locations.find({"created_by": user_id}).sort("created_at", -1)
        location_docs = await cursor.to_list(length=None)

        return [self._doc_to_location(doc) for doc in location_docs]

    async def get_location(
        self,
        user_id: str,
        location_id: str,
    ) -> Location:
        """
        Get a location by ID.

        Raises:
            NotFoundError: If location not found
        """
        object_id = to_object_id(location_id, "Location not found")

        location_doc = await self.locations.find_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if not location_doc:
            raise NotFoundError("Location not found")

        return self._doc_to_location(location_doc)

    async def update_location(
        self,
        user_id: str,
        location_id: str,
        location_update: LocationUpdate,
    ) -> Location:
        """
        Update a location.

        Args:
            user_id: User ID
            location_id: Location ID
            location_update: Update data

        Returns:
            Updated location object

        Raises:
            NotFoundError: If location not found
        """
        object_id = to_object_id(location_id, "Location not found")

        update_doc = {
            "updated_by": user_id,
            "updated_at": datetime.utcnow(),
        }

        if location_update.title is not None:
            update_doc["title"] = location_update.title
        if location_update.description is not None:
            update_doc["description"] = location_update.description

        updated_doc = await self.locations.find_one_and_update(
            {"_id": object_id, "created_by": user_id},
            {"$set": update_doc},
            return_document=True,
        )

        if not updated_doc:
            raise NotFoundError("Location not found")

        logger.info("Updated location %s for user %s", location_id, user_id)
        return self._doc_to_location(updated_doc)

    async def delete_location(
        self,
        user_id: str,
        location_id: str,
    ) -> dict:
        """
        Delete a location (hard delete).

        Time logs that reference the location are left in place.

        Returns:
            Dictionary with deleted_count

        Raises:
            NotFoundError: If location not found
        """
        object_id = to_object_id(location_id, "Location not found")

        result = await self.locations.delete_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if result.deleted_count == 0:
            raise NotFoundError("Location not found")

        logger.info("Deleted location %s for user %s", location_id, user_id)
        return {"deleted_count": result.deleted_count}
