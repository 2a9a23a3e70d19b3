"""Project service - read-only project lookups for time tracking."""
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

from app.models.project import Project


class ProjectService:
    """Service for reading a user's projects."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.projects = db["projects"]

    def _doc_to_project(self, doc: dict) -> Project:
        """Convert database document to Project model."""
        return Project(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
        )

    async def list_projects(self, user_id: str) -> list[Project]:
        """
        List the projects a user can assign to a time entry.

        Args:
            user_id: User ID

        Returns:
            Projects sorted by name, empty if the user has none
        """
        cursor = self.projects.find({"user_id": user_id}).sort("name", 1)
        project_docs = await cursor.to_list(length=None)

        return [self._doc_to_project(doc) for doc in project_docs]

    async def get_project(self, user_id: str, project_id: str) -> Optional[Project]:
        """
        Get a user's project by ID.

        Args:
            user_id: User ID
            project_id: Project ID as offered in the selection list

        Returns:
            Project, or None if the user has no such project
        """
        # A 24-hex id may be stored as an ObjectId or as a plain string
        try:
            key = {"$in": [ObjectId(project_id), project_id]}
        except (InvalidId, TypeError):
            key = project_id

        doc = await self.projects.find_one({
            "_id": key,
            "user_id": user_id,
        })

        if not doc:
            return None

        return self._doc_to_project(doc)
