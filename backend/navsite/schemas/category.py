"""
Pydantic schemas for project categories.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Category(BaseModel):
    """
    A stored category record.

    Attributes:
        id: Generated at creation, immutable
        name: Display name, unique among categories (case-insensitive)
        created_at: Creation timestamp; records written by older clients may lack it
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    name: str
    created_at: Optional[str] = None


class CategoryInput(BaseModel):
    """Request body for creating or renaming a category."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None


class CategoryResponse(BaseModel):
    message: str
    category: Category


class CategoryListResponse(BaseModel):
    categories: List[Category]
