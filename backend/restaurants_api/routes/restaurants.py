"""
Restaurants API — Restaurant Route Handlers
============================================

What:  /api/restaurants — CRUD plus three filtered listings.

Route Inventory:
    GET    /api/restaurants                          list (category resolved)
    GET    /api/restaurants/SearchByName?name=...    substring match on name
    GET    /api/restaurants/TopRated                 sorted by rating, desc
    GET    /api/restaurants/ByCategory/{categoryId}  filter by category
    GET    /api/restaurants/{id}                     single restaurant
    POST   /api/restaurants                          create from DTO   (token)
    PUT    /api/restaurants/{id}                     update from DTO   (token)
    DELETE /api/restaurants/{id}                     delete            (token)

The fixed-segment routes are declared before `/{restaurant_id}` so that
"TopRated" is never parsed as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from restaurants_api.database import get_db_session
from restaurants_api.schemas.common import ErrorResponse
from restaurants_api.schemas.restaurant import RestaurantCreateDTO, RestaurantResponse
from restaurants_api.security import require_token
from restaurants_api.services.restaurant_service import restaurant_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/restaurants", tags=["Restaurants"])

_READ_ERRORS = {404: {"description": "Entity set unavailable", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[RestaurantResponse],
    responses=_READ_ERRORS,
    summary="List all restaurants with their category",
)
async def list_restaurants(
    db: AsyncSession = Depends(get_db_session),
) -> List[RestaurantResponse]:
    return await restaurant_service.list_restaurants(db)


@router.get(
    "/SearchByName",
    response_model=List[RestaurantResponse],
    responses=_READ_ERRORS,
    summary="Search restaurants by name",
)
async def search_by_name(
    name: str = Query(..., description="Substring to look for in restaurant names"),
    db: AsyncSession = Depends(get_db_session),
) -> List[RestaurantResponse]:
    return await restaurant_service.search_by_name(db, name)


@router.get(
    "/TopRated",
    response_model=List[RestaurantResponse],
    responses=_READ_ERRORS,
    summary="Restaurants ordered by rating, best first",
)
async def top_rated(
    db: AsyncSession = Depends(get_db_session),
) -> List[RestaurantResponse]:
    return await restaurant_service.top_rated(db)


@router.get(
    "/ByCategory/{category_id}",
    response_model=List[RestaurantResponse],
    responses=_READ_ERRORS,
    summary="Restaurants in a category",
)
async def by_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[RestaurantResponse]:
    return await restaurant_service.by_category(db, category_id)


@router.get(
    "/{restaurant_id}",
    response_model=RestaurantResponse,
    responses={404: {"description": "Restaurant not found", "model": ErrorResponse}},
    summary="Get a restaurant by id",
)
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> RestaurantResponse:
    return await restaurant_service.get_restaurant(db, restaurant_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RestaurantResponse,
    responses={
        400: {"description": "Invalid categoryId", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        500: {"description": "Entity set unavailable", "model": ErrorResponse},
    },
    dependencies=[Depends(require_token)],
    summary="Create a restaurant",
)
async def create_restaurant(
    dto: RestaurantCreateDTO,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> RestaurantResponse:
    created = await restaurant_service.create_restaurant(db, dto)
    response.headers["Location"] = str(
        request.url_for("get_restaurant", restaurant_id=created.id)
    )
    return created


@router.put(
    "/{restaurant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Restaurant not found", "model": ErrorResponse},
        500: {"description": "Update failed", "model": ErrorResponse},
    },
    dependencies=[Depends(require_token)],
    summary="Update a restaurant",
)
async def update_restaurant(
    restaurant_id: int,
    dto: RestaurantCreateDTO,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await restaurant_service.update_restaurant(db, restaurant_id, dto)


@router.delete(
    "/{restaurant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Restaurant not found", "model": ErrorResponse},
    },
    dependencies=[Depends(require_token)],
    summary="Delete a restaurant",
)
async def delete_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await restaurant_service.delete_restaurant(db, restaurant_id)
