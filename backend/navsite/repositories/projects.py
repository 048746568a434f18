"""
Project repository.

CRUD over the ``projects`` collection. New projects go to the head of the
list so the default listing shows the most recently added link first;
updates keep a project at its current position.
"""

from navsite.core.exceptions import ValidationError
from navsite.core.logging_config import get_logger
from navsite.models.base import utc_now_iso
from navsite.repositories.collection import JsonListRepository, generate_id, stored_string
from navsite.schemas.project import DEFAULT_CATEGORY, Project, ProjectInput


logger = get_logger(__name__)

PROJECTS_KEY = "projects"


def _require_name_and_url(data: ProjectInput) -> None:
    if not (data.name or "").strip() or not (data.url or "").strip():
        raise ValidationError("Project name and url are required")


def _optional_fields(data: ProjectInput) -> dict:
    """Optional fields with their defaults applied."""
    return {
        "description": data.description or "",
        "category": data.category or DEFAULT_CATEGORY,
        "tags": list(data.tags) if data.tags else [],
    }


class ProjectRepository(JsonListRepository[Project]):
    """
    Repository for the project collection.

    Example:
        >>> repo = ProjectRepository(store)
        >>> project = await repo.create(ProjectInput(name="A", url="https://x.com"))
        >>> (await repo.list())[0].id == project.id
        True
    """

    storage_key = PROJECTS_KEY
    record_model = Project
    record_label = "Project"

    async def create(self, data: ProjectInput) -> Project:
        """
        Create a project and insert it at the head of the collection.

        Args:
            data: Project fields; name and url are required

        Returns:
            The stored project with generated id and timestamps

        Raises:
            ValidationError: If name or url is missing or blank
        """
        _require_name_and_url(data)

        now = utc_now_iso()
        project = Project(
            id=generate_id(),
            name=data.name,
            url=data.url,
            created_at=now,
            updated_at=now,
            **_optional_fields(data),
        )

        projects = await self._load_entries()
        projects.insert(0, project)
        await self._save(projects)

        logger.info(
            "Project created",
            extra={"key": self.storage_key, "record_id": project.id},
        )
        return project

    async def update(self, project_id: str, data: ProjectInput) -> Project:
        """
        Replace a project's fields in place.

        ``id`` and ``createdAt`` are kept; optional fields missing from
        ``data`` fall back to the same defaults as create.

        Args:
            project_id: Id of the project to update
            data: New field values; name and url are required

        Returns:
            The updated project

        Raises:
            ValidationError: If name or url is missing or blank
            NotFound: If no project has this id (nothing is written)
        """
        _require_name_and_url(data)

        projects = await self._load_entries()
        index = self._index_of(projects, project_id)
        if index is None:
            raise self._not_found(project_id)

        existing = projects[index]
        changes = {
            "name": data.name,
            "url": data.url,
            "updated_at": utc_now_iso(),
            **_optional_fields(data),
        }
        if isinstance(existing, Project):
            updated = existing.model_copy(update=changes)
        else:
            # Stored entry did not validate: rebuild it around its id
            updated = Project(
                id=project_id,
                created_at=stored_string(existing, "createdAt") or changes["updated_at"],
                **changes,
            )
        projects[index] = updated
        await self._save(projects)

        logger.info(
            "Project updated",
            extra={"key": self.storage_key, "record_id": project_id},
        )
        return updated
