"""
Category repository.

CRUD over the ``categories`` collection, stored separately from projects.
Deleting a category leaves projects alone: a project whose ``category``
no longer resolves is still listed, just without a category name.
"""

from typing import Any, List, Optional

from navsite.core.exceptions import Conflict, ValidationError
from navsite.core.logging_config import get_logger
from navsite.models.base import utc_now_iso
from navsite.repositories.collection import JsonListRepository, generate_id, stored_string
from navsite.schemas.category import Category


logger = get_logger(__name__)

CATEGORIES_KEY = "categories"


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Category name is required")
    return cleaned


class CategoryRepository(JsonListRepository[Category]):
    """
    Repository for the category collection.

    Category names are unique, compared case-insensitively after
    stripping whitespace. The check runs against the list read at the
    start of the same call, so it shares the read-modify-write window of
    every other mutation.
    """

    storage_key = CATEGORIES_KEY
    record_model = Category
    record_label = "Category"

    @staticmethod
    def _ensure_unique(
        entries: List[Any],
        name: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        folded = name.casefold()
        for category in entries:
            if not isinstance(category, Category) or category.id == exclude_id:
                continue
            if category.name.strip().casefold() == folded:
                raise Conflict(f"Category already exists: {name}")

    async def create(self, name: Optional[str]) -> Category:
        """
        Create a category at the head of the collection.

        Args:
            name: Display name (stripped)

        Returns:
            The stored category

        Raises:
            ValidationError: If the name is blank
            Conflict: If another category already has this name
        """
        cleaned = _clean_name(name)

        categories = await self._load_entries()
        self._ensure_unique(categories, cleaned)

        category = Category(
            id=generate_id(),
            name=cleaned,
            created_at=utc_now_iso(),
        )
        categories.insert(0, category)
        await self._save(categories)

        logger.info(
            "Category created",
            extra={"key": self.storage_key, "record_id": category.id},
        )
        return category

    async def update(self, category_id: str, name: Optional[str]) -> Category:
        """
        Rename a category. ``id`` and ``createdAt`` are kept.

        Raises:
            ValidationError: If the name is blank
            NotFound: If no category has this id
            Conflict: If a different category already has this name
        """
        cleaned = _clean_name(name)

        categories = await self._load_entries()
        index = self._index_of(categories, category_id)
        if index is None:
            raise self._not_found(category_id)

        self._ensure_unique(categories, cleaned, exclude_id=category_id)

        existing = categories[index]
        if isinstance(existing, Category):
            updated = existing.model_copy(update={"name": cleaned})
        else:
            # Stored entry did not validate: rebuild it around its id
            updated = Category(
                id=category_id,
                name=cleaned,
                created_at=stored_string(existing, "createdAt"),
            )
        categories[index] = updated
        await self._save(categories)

        logger.info(
            "Category renamed",
            extra={"key": self.storage_key, "record_id": category_id},
        )
        return updated
