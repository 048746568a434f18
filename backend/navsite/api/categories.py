"""
Category endpoints.

Same auth rules as projects: listing is public, writes need an admin token.
"""

from fastapi import APIRouter, status

from navsite.api.dependencies import AdminClaims, Categories
from navsite.schemas.auth import MessageResponse
from navsite.schemas.category import (
    CategoryInput,
    CategoryListResponse,
    CategoryResponse,
)

router = APIRouter(prefix="/categories")


@router.get("", response_model=CategoryListResponse)
async def list_categories(repo: Categories) -> CategoryListResponse:
    return CategoryListResponse(categories=await repo.list())


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryInput,
    repo: Categories,
    admin: AdminClaims,
) -> CategoryResponse:
    """
    Create a category.

    Raises:
        401: Missing or invalid admin token
        400: Blank name
        409: A category with this name exists
    """
    category = await repo.create(body.name)
    return CategoryResponse(message="Category created", category=category)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    body: CategoryInput,
    repo: Categories,
    admin: AdminClaims,
) -> CategoryResponse:
    category = await repo.update(category_id, body.name)
    return CategoryResponse(message="Category updated", category=category)


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str,
    repo: Categories,
    admin: AdminClaims,
) -> MessageResponse:
    """
    Delete a category.

    Projects filed under it keep their category id; the front-end shows
    them without a category name.
    """
    await repo.delete(category_id)
    return MessageResponse(message="Category deleted")
