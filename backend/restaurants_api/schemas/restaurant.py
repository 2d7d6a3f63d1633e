"""
Restaurants API — Restaurant Schemas
=====================================

What:  The restaurant input DTO and the response model.

Design Decision:
    Clients never submit a Restaurant entity. They send RestaurantCreateDTO,
    which has no `id` and no nested `category`, for both create and update.
    The service maps its fields onto the ORM object. Responses embed the
    resolved category so clients do not need a second request.
"""

from typing import Optional

from pydantic import Field

from restaurants_api.schemas.category import CategoryResponse
from restaurants_api.schemas.common import CamelModel


class RestaurantCreateDTO(CamelModel):
    """Input shape for POST and PUT /api/restaurants."""
    name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=255)
    category_id: int = Field(description="Id of an existing category")
    rating: float = Field(default=0.0, allow_inf_nan=False)


class RestaurantResponse(CamelModel):
    id: int
    name: str
    address: str
    city: str
    category_id: int
    rating: float = Field(allow_inf_nan=False)
    category: Optional[CategoryResponse] = Field(
        default=None,
        description="The restaurant's category, resolved by a join",
    )
