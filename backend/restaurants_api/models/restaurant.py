"""
Restaurants API — Restaurant SQLAlchemy Model
==============================================

What:  ORM model for the `restaurants` table and its many-to-one link to
       `categories`.
Who:   Used by RestaurantService; Alembic reads it for the schema.

Table Design:
    - Integer identity primary key assigned by the database
    - name / address / city: VARCHAR(255), required
    - category_id: FK → categories.id, ON DELETE CASCADE, indexed
    - rating: float, defaults to 0

Relationship loading:
    `category` is declared with lazy="raise". Async sessions cannot lazy-load
    on attribute access, so every query that returns restaurants to a client
    must ask for the category explicitly (see RestaurantService._with_category).
"""

from sqlalchemy import Float, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurants_api.database import Base
from restaurants_api.models.category import Category


class Restaurant(Base):
    """
    A restaurant belonging to exactly one category.

    Query Patterns:
        - List / top rated / search: SELECT ... JOIN categories
        - By category: SELECT ... WHERE category_id = :id
          → Uses ix_restaurants_category_id
    """

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    )

    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        server_default=text("0"),
    )

    category: Mapped[Category] = relationship(lazy="raise")

    __table_args__ = (
        Index("ix_restaurants_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Restaurant(id={self.id}, name='{self.name}', "
            f"category_id={self.category_id}, rating={self.rating})>"
        )
