"""
Restaurants API — ORM Models
=============================

Importing this package registers every table on `Base.metadata`, which is
what Alembic autogenerate and the test fixtures rely on.
"""

from restaurants_api.models.category import Category
from restaurants_api.models.restaurant import Restaurant
from restaurants_api.models.user import User

__all__ = ["Category", "Restaurant", "User"]
