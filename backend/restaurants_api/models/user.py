"""
Restaurants API — User SQLAlchemy Model
========================================

What:  ORM model for the `users` table, read by the login service only.

There is no registration flow: rows are provisioned directly in the database.
`password` holds the plaintext password; see DESIGN.md for why hashing was
left as an open decision.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from restaurants_api.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    surname: Mapped[str] = mapped_column(String(255), nullable=False)
    given_name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        # Never include the password
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
