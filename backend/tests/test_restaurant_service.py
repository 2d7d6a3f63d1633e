"""
Restaurants API — Restaurant Service Tests
===========================================

What we test:
    ✅ create validates the category and never persists on failure
    ✅ non-finite ratings are rejected by the DTO
    ✅ every read resolves the category
    ✅ search_by_name substring semantics (including literal wildcards)
    ✅ top_rated ordering
    ✅ by_category filtering
    ✅ update: NotFound, field overwrite, FK failure → DatabaseError
    ✅ delete
"""

import logging

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import func, select

from restaurants_api.exceptions import DatabaseError, NotFoundError, ValidationError
from restaurants_api.models import Category, Restaurant
from restaurants_api.schemas.restaurant import RestaurantCreateDTO
from restaurants_api.services.restaurant_service import RestaurantService


def make_dto(name="Le Bistro", category_id=1, rating=4.0, **overrides):
    fields = {
        "name": name,
        "address": "12 Rue Saint-Denis",
        "city": "Montreal",
        "category_id": category_id,
        "rating": rating,
    }
    fields.update(overrides)
    return RestaurantCreateDTO(**fields)


async def add_category(db, name="French"):
    category = Category(name=name)
    db.add(category)
    await db.flush()
    return category


class TestRestaurantServiceCreate:

    def setup_method(self):
        self.service = RestaurantService()

    @pytest.mark.asyncio
    async def test_create_with_unknown_category_is_rejected(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_restaurant(db_session, make_dto(category_id=404))

        assert exc_info.value.message == "Invalid categoryId. Category not found."
        count = await db_session.execute(select(func.count(Restaurant.id)))
        assert count.scalar() == 0

    @pytest.mark.asyncio
    async def test_create_maps_dto_and_resolves_category(self, db_session):
        category = await add_category(db_session)

        created = await self.service.create_restaurant(
            db_session, make_dto(name="Chez Paul", category_id=category.id, rating=4.5)
        )

        assert created.id is not None
        assert created.name == "Chez Paul"
        assert created.address == "12 Rue Saint-Denis"
        assert created.city == "Montreal"
        assert created.category_id == category.id
        assert created.rating == 4.5
        assert created.category is not None
        assert created.category.name == "French"

    @pytest.mark.asyncio
    async def test_rating_defaults_to_zero(self, db_session):
        category = await add_category(db_session)
        dto = RestaurantCreateDTO(
            name="Unrated", address="1 Street", city="Laval", category_id=category.id
        )

        created = await self.service.create_restaurant(db_session, dto)

        assert created.rating == 0.0

    @pytest.mark.parametrize("rating", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rating_is_rejected_by_dto(self, rating):
        with pytest.raises(SchemaValidationError):
            make_dto(rating=rating)


class TestRestaurantServiceQueries:

    def setup_method(self):
        self.service = RestaurantService()

    @pytest.mark.asyncio
    async def test_list_resolves_category(self, db_session):
        category = await add_category(db_session, "Seafood")
        await self.service.create_restaurant(db_session, make_dto("Oyster Bar", category.id))

        result = await self.service.list_restaurants(db_session)

        assert len(result) == 1
        assert result[0].category.id == category.id
        assert result[0].category.name == "Seafood"

    @pytest.mark.asyncio
    async def test_get_returns_restaurant_with_category(self, db_session):
        category = await add_category(db_session)
        created = await self.service.create_restaurant(db_session, make_dto("Chez Marc", category.id))

        fetched = await self.service.get_restaurant(db_session, created.id)

        assert fetched.id == created.id
        assert fetched.category.name == "French"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_restaurant(db_session, 12)
        assert exc_info.value.message == "Restaurant with id 12 not found."

    @pytest.mark.asyncio
    async def test_search_by_name_substring(self, db_session):
        category = await add_category(db_session)
        await self.service.create_restaurant(db_session, make_dto("Le Bistro", category.id))
        await self.service.create_restaurant(db_session, make_dto("Café", category.id))

        result = await self.service.search_by_name(db_session, "Bistro")

        assert [r.name for r in result] == ["Le Bistro"]
        assert result[0].category.name == "French"

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, db_session):
        category = await add_category(db_session)
        await self.service.create_restaurant(db_session, make_dto("100% Vegan", category.id))
        await self.service.create_restaurant(db_session, make_dto("Burger Shack", category.id))

        assert [r.name for r in await self.service.search_by_name(db_session, "%")] == ["100% Vegan"]
        assert await self.service.search_by_name(db_session, "_") == []

    @pytest.mark.asyncio
    async def test_top_rated_orders_by_rating_desc(self, db_session):
        category = await add_category(db_session)
        for name, rating in (("Mid", 3.5), ("Best", 4.8), ("Worst", 2.1)):
            await self.service.create_restaurant(db_session, make_dto(name, category.id, rating))

        result = await self.service.top_rated(db_session)

        assert [r.rating for r in result] == [4.8, 3.5, 2.1]
        assert [r.name for r in result] == ["Best", "Mid", "Worst"]

    @pytest.mark.asyncio
    async def test_by_category_filters(self, db_session):
        pizza = await add_category(db_session, "Pizza")
        sushi = await add_category(db_session, "Sushi")
        await self.service.create_restaurant(db_session, make_dto("Napoli", pizza.id))
        await self.service.create_restaurant(db_session, make_dto("Roma", pizza.id))
        await self.service.create_restaurant(db_session, make_dto("Tokyo", sushi.id))

        result = await self.service.by_category(db_session, pizza.id)

        assert sorted(r.name for r in result) == ["Napoli", "Roma"]
        assert all(r.category_id == pizza.id for r in result)
        assert await self.service.by_category(db_session, 9999) == []


class TestRestaurantServiceUpdate:

    def setup_method(self):
        self.service = RestaurantService()

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, db_session, caplog):
        with caplog.at_level(logging.ERROR, logger="restaurants_api.services.restaurant_service"):
            with pytest.raises(NotFoundError):
                await self.service.update_restaurant(db_session, 77, make_dto())

        assert not [r for r in caplog.records if r.exc_info]

    @pytest.mark.asyncio
    async def test_update_overwrites_all_dto_fields(self, db_session):
        french = await add_category(db_session, "French")
        thai = await add_category(db_session, "Thai")
        created = await self.service.create_restaurant(db_session, make_dto("Old", french.id, 1.0))

        await self.service.update_restaurant(
            db_session,
            created.id,
            make_dto("New", thai.id, 4.2, address="9 Elm", city="Ottawa"),
        )

        fetched = await self.service.get_restaurant(db_session, created.id)
        assert fetched.name == "New"
        assert fetched.address == "9 Elm"
        assert fetched.city == "Ottawa"
        assert fetched.rating == 4.2
        assert fetched.category_id == thai.id
        assert fetched.category.name == "Thai"

    @pytest.mark.asyncio
    async def test_update_to_unknown_category_is_generic_failure(self, db_session):
        category = await add_category(db_session)
        created = await self.service.create_restaurant(db_session, make_dto("Keep", category.id))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_restaurant(
                db_session, created.id, make_dto("Broken", category_id=31337)
            )

        assert exc_info.value.message == "An error occurred while updating the restaurant."
        await db_session.rollback()


class TestRestaurantServiceDelete:

    def setup_method(self):
        self.service = RestaurantService()

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, db_session):
        category = await add_category(db_session)
        created = await self.service.create_restaurant(db_session, make_dto("Gone", category.id))

        await self.service.delete_restaurant(db_session, created.id)

        with pytest.raises(NotFoundError):
            await self.service.get_restaurant(db_session, created.id)

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_restaurant(db_session, 5)
