"""
Restaurants API — Category Service
===================================

What:  CRUD over the `categories` entity set.
Who:   Called by the /api/categories route handlers.

Error Mapping:
    missing id                     → NotFoundError      (404)
    body id ≠ path id              → ValidationError    (400)
    UPDATE hit 0 rows, row exists  → ConflictError      (500)
    entity set unreadable on read  → StoreUnavailableError (404)
    any other SQLAlchemy failure   → DatabaseError      (500)

The service is stateless: every call receives the request's session.
Changes are flushed here and committed by `get_db_session`.
"""

import logging
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurants_api.database import UNAVAILABLE_STORE_ERRORS
from restaurants_api.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from restaurants_api.models.category import Category
from restaurants_api.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Business logic for categories: list, get, create, update, delete."""

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """Return every category, in primary-key order. Empty list when none exist."""
        try:
            result = await db.execute(select(Category).order_by(Category.id))
            categories = result.scalars().all()
        except UNAVAILABLE_STORE_ERRORS as e:
            logger.error("Categories entity set unavailable: %s", str(e))
            raise StoreUnavailableError("categories")
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [CategoryResponse.model_validate(c) for c in categories]

    async def get_category(self, db: AsyncSession, category_id: int) -> CategoryResponse:
        """
        Retrieve a single category by id.

        Raises:
            NotFoundError: No category with this id (→ 404)
        """
        try:
            category = await db.get(Category, category_id)
        except UNAVAILABLE_STORE_ERRORS as e:
            logger.error("Categories entity set unavailable: %s", str(e))
            raise StoreUnavailableError("categories")
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %s: %s", category_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the category. Please try again.",
                context={"category_id": category_id},
            )

        if category is None:
            raise NotFoundError(resource="category", resource_id=category_id)

        return CategoryResponse.model_validate(category)

    async def create_category(
        self, db: AsyncSession, payload: CategoryCreate
    ) -> CategoryResponse:
        """Insert a category and return it with its database-assigned id."""
        category = Category(name=payload.name)
        try:
            db.add(category)
            await db.flush()  # assigns the identity value
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Entity set 'categories' is unavailable.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Category created: %s", category.id)
        return CategoryResponse.model_validate(category)

    async def update_category(
        self, db: AsyncSession, category_id: int, payload: CategoryUpdate
    ) -> None:
        """
        Overwrite the stored category with `payload`.

        How:
            1. Reject a body whose id differs from the path id
            2. UPDATE categories SET name = :name WHERE id = :id
            3. If no row changed, re-check existence: absent → NotFound,
               present → ConflictError

        Raises:
            ValidationError: payload.id != category_id (→ 400)
            NotFoundError:   No such category (→ 404)
            ConflictError:   Row exists but was not updated (→ 500)
        """
        if payload.id != category_id:
            raise ValidationError(
                message="The category id in the body does not match the id in the path.",
                field="id",
                context={"path_id": category_id, "body_id": payload.id},
            )

        try:
            result = await db.execute(
                update(Category)
                .where(Category.id == category_id)
                .values(name=payload.name)
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating category %s: %s", category_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the category. Please try again.",
                context={"category_id": category_id},
            )

        if result.rowcount == 0:
            if not await self.category_exists(db, category_id):
                raise NotFoundError(resource="category", resource_id=category_id)
            logger.error("Category %s exists but UPDATE affected no rows", category_id)
            raise ConflictError(context={"category_id": category_id})

        logger.info("Category updated: %s", category_id)

    async def delete_category(self, db: AsyncSession, category_id: int) -> None:
        """
        Remove a category. Its restaurants go with it (FK ON DELETE CASCADE).

        Raises:
            NotFoundError: No such category (→ 404)
        """
        try:
            category = await db.get(Category, category_id)
        except UNAVAILABLE_STORE_ERRORS as e:
            logger.error("Categories entity set unavailable: %s", str(e))
            raise StoreUnavailableError("categories")

        if category is None:
            raise NotFoundError(resource="category", resource_id=category_id)

        try:
            await db.delete(category)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting category %s: %s", category_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the category. Please try again.",
                context={"category_id": category_id},
            )

        logger.info("Category deleted: %s", category_id)

    async def category_exists(self, db: AsyncSession, category_id: int) -> bool:
        result = await db.execute(select(Category.id).where(Category.id == category_id))
        return result.scalar_one_or_none() is not None


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
