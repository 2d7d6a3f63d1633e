"""
Restaurants API — Restaurant Service
=====================================

What:  CRUD and filtered queries over the `restaurants` entity set.
Who:   Called by the /api/restaurants route handlers.

Category Resolution:
    Every restaurant returned to a client carries its category. The
    relationship is lazy="raise", so each read goes through
    `_with_category()`, which adds a joined load:

        SELECT restaurants.*, categories_1.*
        FROM restaurants
        LEFT OUTER JOIN categories AS categories_1
             ON categories_1.id = restaurants.category_id
        [WHERE ...] [ORDER BY ...]

    `populate_existing` refreshes restaurants already in the session's
    identity map, so a category change made earlier in the same session is
    reflected in the next read.

Error Mapping:
    missing id                       → NotFoundError         (404)
    categoryId not found on create   → ValidationError       (400)
    entity set unreadable on read    → StoreUnavailableError (404)
    any failure while updating       → DatabaseError         (500, logged)
"""

import logging
from typing import List

from sqlalchemy import Select, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from restaurants_api.database import UNAVAILABLE_STORE_ERRORS
from restaurants_api.exceptions import (
    DatabaseError,
    NotFoundError,
    RestaurantsAPIError,
    StoreUnavailableError,
    ValidationError,
)
from restaurants_api.models.category import Category
from restaurants_api.models.restaurant import Restaurant
from restaurants_api.schemas.restaurant import RestaurantCreateDTO, RestaurantResponse

logger = logging.getLogger(__name__)


class RestaurantService:
    """
    Business logic for restaurants.

    Responsibilities:
        - list / get / search_by_name / top_rated / by_category (reads)
        - create: validates the category, maps the DTO, persists
        - update: maps the DTO onto the stored row; failures become a 500
        - delete
    """

    @staticmethod
    def _with_category() -> Select:
        return (
            select(Restaurant)
            .options(joinedload(Restaurant.category))
            .execution_options(populate_existing=True)
        )

    async def _fetch_all(self, db: AsyncSession, query: Select) -> List[RestaurantResponse]:
        try:
            result = await db.execute(query)
            restaurants = result.scalars().all()
        except UNAVAILABLE_STORE_ERRORS as e:
            logger.error("Restaurants entity set unavailable: %s", str(e))
            raise StoreUnavailableError("restaurants")
        except SQLAlchemyError as e:
            logger.error("Database error querying restaurants: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve restaurants. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [RestaurantResponse.model_validate(r) for r in restaurants]

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_restaurants(self, db: AsyncSession) -> List[RestaurantResponse]:
        """All restaurants with their category, in primary-key order."""
        return await self._fetch_all(db, self._with_category().order_by(Restaurant.id))

    async def get_restaurant(self, db: AsyncSession, restaurant_id: int) -> RestaurantResponse:
        """
        Single restaurant with its category.

        Raises:
            NotFoundError: No restaurant with this id (→ 404)
        """
        items = await self._fetch_all(
            db, self._with_category().where(Restaurant.id == restaurant_id)
        )
        if not items:
            raise NotFoundError(resource="restaurant", resource_id=restaurant_id)
        return items[0]

    async def search_by_name(self, db: AsyncSession, name: str) -> List[RestaurantResponse]:
        """
        Restaurants whose name contains `name`.

        `%` and `_` in the input match literally. Case sensitivity is that of
        the database's LIKE (case-insensitive for ASCII on SQLite, per
        collation on PostgreSQL/MySQL).
        """
        query = (
            self._with_category()
            .where(Restaurant.name.contains(name, autoescape=True))
            .order_by(Restaurant.id)
        )
        return await self._fetch_all(db, query)

    async def top_rated(self, db: AsyncSession) -> List[RestaurantResponse]:
        """All restaurants, highest rating first; ties fall back to id order."""
        query = self._with_category().order_by(desc(Restaurant.rating), Restaurant.id)
        return await self._fetch_all(db, query)

    async def by_category(self, db: AsyncSession, category_id: int) -> List[RestaurantResponse]:
        """Restaurants in one category. An unknown category yields an empty list."""
        query = (
            self._with_category()
            .where(Restaurant.category_id == category_id)
            .order_by(Restaurant.id)
        )
        return await self._fetch_all(db, query)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_restaurant(
        self, db: AsyncSession, dto: RestaurantCreateDTO
    ) -> RestaurantResponse:
        """
        Create a restaurant from the DTO.

        Workflow:
            1. Resolve dto.category_id; missing → ValidationError, nothing persisted
            2. Map DTO fields onto a new Restaurant (id left to the database)
            3. Flush to obtain the id; the resolved category is attached

        Raises:
            ValidationError: category does not exist (→ 400)
            DatabaseError:   insert failed (→ 500)
        """
        try:
            category = await db.get(Category, dto.category_id)
        except SQLAlchemyError as e:
            logger.error("Database error resolving category %s: %s", dto.category_id, str(e))
            raise DatabaseError(
                message="Entity set 'restaurants' is unavailable.",
                context={"error_type": type(e).__name__},
            )

        if category is None:
            raise ValidationError(
                message="Invalid categoryId. Category not found.",
                field="categoryId",
                context={"category_id": dto.category_id},
            )

        restaurant = Restaurant(
            name=dto.name,
            address=dto.address,
            city=dto.city,
            category_id=dto.category_id,
            rating=dto.rating,
            category=category,
        )

        try:
            db.add(restaurant)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating restaurant: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Entity set 'restaurants' is unavailable.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Restaurant created: %s (category=%s)", restaurant.id, category.id)
        return RestaurantResponse.model_validate(restaurant)

    async def update_restaurant(
        self, db: AsyncSession, restaurant_id: int, dto: RestaurantCreateDTO
    ) -> None:
        """
        Overwrite name, address, city, category_id and rating from the DTO.

        The category id is not pre-validated here: an unknown id fails on the
        foreign key at flush time and is reported like any other failure.

        Raises:
            NotFoundError: No restaurant with this id (→ 404)
            DatabaseError: Anything else went wrong (→ 500, traceback logged)
        """
        try:
            restaurant = await db.get(Restaurant, restaurant_id)
            if restaurant is None:
                raise NotFoundError(resource="restaurant", resource_id=restaurant_id)

            restaurant.name = dto.name
            restaurant.address = dto.address
            restaurant.city = dto.city
            restaurant.category_id = dto.category_id
            restaurant.rating = dto.rating

            await db.flush()
        except RestaurantsAPIError:
            raise
        except Exception as e:
            logger.exception("Failed to update restaurant %s", restaurant_id)
            raise DatabaseError(
                message="An error occurred while updating the restaurant.",
                context={"restaurant_id": restaurant_id, "error_type": type(e).__name__},
            )

        logger.info("Restaurant updated: %s", restaurant_id)

    async def delete_restaurant(self, db: AsyncSession, restaurant_id: int) -> None:
        """
        Raises:
            NotFoundError: No restaurant with this id (→ 404)
        """
        try:
            restaurant = await db.get(Restaurant, restaurant_id)
        except UNAVAILABLE_STORE_ERRORS as e:
            logger.error("Restaurants entity set unavailable: %s", str(e))
            raise StoreUnavailableError("restaurants")

        if restaurant is None:
            raise NotFoundError(resource="restaurant", resource_id=restaurant_id)

        try:
            await db.delete(restaurant)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting restaurant %s: %s", restaurant_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the restaurant. Please try again.",
                context={"restaurant_id": restaurant_id},
            )

        logger.info("Restaurant deleted: %s", restaurant_id)


# ── Singleton Instance ────────────────────────────────────────────────────
restaurant_service = RestaurantService()
