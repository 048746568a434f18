"""
Pydantic schemas for projects (bookmarked links).

Stored records and API payloads use camelCase field names
(``createdAt``, ``updatedAt``); Python code uses snake_case.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_CATEGORY = "other"


class Project(BaseModel):
    """
    A stored project record.

    Attributes:
        id: Generated at creation, immutable, unique within the collection
        name: Display name
        url: Link target
        description: Free text, may be empty
        category: Category id, or a legacy literal such as "other"
        tags: Ordered tag list
        created_at: Creation timestamp (UTC ISO string)
        updated_at: Last update timestamp (UTC ISO string)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    name: str
    url: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    tags: List[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


class ProjectInput(BaseModel):
    """
    Request body for creating or updating a project.

    ``name`` and ``url`` are declared optional so that a missing value
    reaches the repository and is reported as a 400 with a readable
    message instead of a schema error.

    Defaults applied by the repository when a field is missing or empty:
        description -> ""
        category -> "other"
        tags -> []
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None


class ProjectResponse(BaseModel):
    """Response for create and update."""

    message: str
    project: Project


class ProjectListResponse(BaseModel):
    """Response for listing projects, newest first."""

    projects: List[Project]
