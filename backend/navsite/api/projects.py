"""
Project endpoints.

Listing is public; create, update and delete require an admin token.
"""

from fastapi import APIRouter, status

from navsite.api.dependencies import AdminClaims, Projects
from navsite.schemas.auth import MessageResponse
from navsite.schemas.project import (
    ProjectInput,
    ProjectListResponse,
    ProjectResponse,
)

router = APIRouter(prefix="/projects")


@router.get("", response_model=ProjectListResponse)
async def list_projects(repo: Projects) -> ProjectListResponse:
    """
    List all projects, most recently created first.

    Filtering and search happen in the front-end.
    """
    return ProjectListResponse(projects=await repo.list())


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectInput,
    repo: Projects,
    admin: AdminClaims,
) -> ProjectResponse:
    """
    Create a project at the head of the list.

    Example:
        POST /api/projects
        Authorization: Bearer eyJ...
        {"name": "A", "url": "https://x.com", "tags": ["tool"]}

    Raises:
        401: Missing or invalid admin token
        400: Missing name or url
    """
    project = await repo.create(body)
    return ProjectResponse(message="Project created", project=project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectInput,
    repo: Projects,
    admin: AdminClaims,
) -> ProjectResponse:
    """
    Replace a project's fields, keeping its id, createdAt and position.

    Raises:
        401: Missing or invalid admin token
        400: Missing name or url
        404: Unknown project id
    """
    project = await repo.update(project_id, body)
    return ProjectResponse(message="Project updated", project=project)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    repo: Projects,
    admin: AdminClaims,
) -> MessageResponse:
    await repo.delete(project_id)
    return MessageResponse(message="Project deleted")
