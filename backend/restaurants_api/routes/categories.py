"""
Restaurants API — Category Route Handlers
==========================================

What:  /api/categories — list, get, create, update, delete.
How:   Extracts path/body parameters, delegates to CategoryService, sets the
       status code and Location header. Errors are raised by the service and
       formatted by the global handlers.

Writes require a bearer token (`require_token`); reads are anonymous.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from restaurants_api.database import get_db_session
from restaurants_api.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)
from restaurants_api.schemas.common import ErrorResponse
from restaurants_api.security import require_token
from restaurants_api.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get(
    "",
    response_model=List[CategoryResponse],
    responses={404: {"description": "Entity set unavailable", "model": ErrorResponse}},
    summary="List all categories",
)
async def list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    return await category_service.list_categories(db)


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get a category by id",
)
async def get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.get_category(db, category_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CategoryResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        500: {"description": "Entity set unavailable", "model": ErrorResponse},
    },
    dependencies=[Depends(require_token)],
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    """Creates the category and points `Location` at its GET endpoint."""
    created = await category_service.create_category(db, payload)
    response.headers["Location"] = str(
        request.url_for("get_category", category_id=created.id)
    )
    return created


@router.put(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Body id does not match path id", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    dependencies=[Depends(require_token)],
    summary="Replace a category",
)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await category_service.update_category(db, category_id, payload)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
    },
    dependencies=[Depends(require_token)],
    summary="Delete a category and its restaurants",
)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> None:
    await category_service.delete_category(db, category_id)
