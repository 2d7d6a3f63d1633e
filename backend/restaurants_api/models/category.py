"""
Restaurants API — Category SQLAlchemy Model
============================================

What:  ORM model for the `categories` table.
Who:   Used by CategoryService for CRUD and referenced by Restaurant.

Table Design:
    - Integer identity primary key assigned by the database
    - name: VARCHAR(255), required

    Categories carry no back-reference collection. Removing a category relies
    on the `restaurants.category_id` foreign key (ON DELETE CASCADE) to remove
    its restaurants, so deleting never has to load them first.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from restaurants_api.database import Base


class Category(Base):
    """A restaurant category such as "Italian" or "Street food"."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
