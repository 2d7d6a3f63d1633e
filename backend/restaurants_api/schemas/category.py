"""
Restaurants API — Category Schemas
===================================

What:  Request and response shapes for /api/categories.

    CategoryCreate   POST body. An `id` sent by the client is ignored;
                     identifiers are always assigned by the database.
    CategoryUpdate   PUT body. Must carry the id, which has to match the path.
    CategoryResponse What every category endpoint returns.
"""

from pydantic import Field

from restaurants_api.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255, description="Category name")


class CategoryUpdate(CamelModel):
    id: int = Field(description="Must equal the id in the request path")
    name: str = Field(min_length=1, max_length=255, description="Category name")


class CategoryResponse(CamelModel):
    id: int = Field(description="Database-assigned identifier")
    name: str = Field(description="Category name")
