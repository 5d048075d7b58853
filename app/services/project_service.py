"""Project service - business logic for project management."""
import logging
from datetime import datetime

from app.models.project import Project, ProjectCreate, ProjectUpdate
from app.utils.errors import NotFoundError, to_object_id

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for handling project operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.projects = db["projects"]

    def _doc_to_project(self, doc: dict) -> Project:
        """
        Convert database document to Project model.
        """
        return Project(
            _id=str(doc["_id"]),
            title=doc["title"],
            description=doc.get("description") or "",
            created_by=doc["created_by"],
            updated_by=doc.get("updated_by", doc["created_by"]),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_project(
        self,
        user_id: str,
        project_create: ProjectCreate,
    ) -> Project:
        """
        Create a new project.

        Args:
            user_id: User ID who owns the project
            project_create: Project creation data

        Returns:
            Created project object
        """
        now = datetime.utcnow()
        project_doc = {
            "title": project_create.title,
            "description": project_create.description,
            "created_by": user_id,
            "updated_by": user_id,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.projects.insert_one(project_doc)
        project_doc["_id"] = result.inserted_id
        logger.info("Created project %s for user %s", result.inserted_id, user_id)

        return self._doc_to_project(project_doc)

    async def list_projects(self, user_id: str) -> list[Project]:
        """
        List projects for a user, newest first.

        Args:
            user_id: User ID

        Returns:
            List of projects
        """
        cursor = self.projects.find({"created_by": user_id}).sort("created_at", -1)
        project_docs = await cursor.to_list(length=None)

        return [self._doc_to_project(doc) for doc in project_docs]

    async def get_project(
        self,
        user_id: str,
        project_id: str,
    ) -> Project:
        """
        Get a project by ID.

        Raises:
            NotFoundError: If project not found
        """
        object_id = to_object_id(project_id, "Project not found")

        project_doc = await self.projects.find_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if not project_doc:
            raise NotFoundError("Project not found")

        return self._doc_to_project(project_doc)

    async def update_project(
        self,
        user_id: str,
        project_id: str,
        project_update: ProjectUpdate,
    ) -> Project:
        """
        Update a project.

        Args:
            user_id: User ID
            project_id: Project ID
            project_update: Update data

        Returns:
            Updated project object

        Raises:
            NotFoundError: If project not found
        """
        object_id = to_object_id(project_id, "Project not found")

        update_doc = {
            "updated_by": user_id,
            "updated_at": datetime.utcnow(),
        }

        if project_update.title is not None:
            update_doc["title"] = project_update.title
        if project_update.description is not None:
            update_doc["description"] = project_update.description

        updated_doc = await self.projects.find_one_and_update(
            {"_id": object_id, "created_by": user_id},
            {"$set": update_doc},
            return_document=True,
        )

        if not updated_doc:
            raise NotFoundError("Project not found")

        logger.info("Updated project %s for user %s", project_id, user_id)
        return self._doc_to_project(updated_doc)

    async def delete_project(
        self,
        user_id: str,
        project_id: str,
    ) -> dict:
        """
        Delete a project (hard delete).

        Time logs that reference the project are left in place.

        Returns:
            Dictionary with deleted_count

        Raises:
            NotFoundError: If project not found
        """
        object_id = to_object_id(project_id, "Project not found")

        result = await self.projects.delete_one({
            "_id": object_id,
            "created_by": user_id,
        })

        if result.deleted_count == 0:
            raise NotFoundError("Project not found")

        logger.info("Deleted project %s for user %s", project_id, user_id)
        return {"deleted_count": result.deleted_count}
