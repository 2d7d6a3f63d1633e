"""
Restaurants API — Login Service
================================

What:  Checks a username/password pair against the `users` table and issues
       an access token on success.
Who:   Called by POST /api/login.

Flow:
    Unauthenticated ──(credentials match)──▶ Authenticated (token issued)
                    └─(no match)───────────▶ Rejected (404 "User not found")

Matching rules:
    - username: case-insensitive (`lower(username) = lower(:username)`)
    - password: exact, case-sensitive, compared in Python with
      hmac.compare_digest so the database collation cannot loosen it
"""

import hmac
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurants_api.config import Settings, settings
from restaurants_api.exceptions import DatabaseError, NotFoundError
from restaurants_api.models.user import User
from restaurants_api.schemas.auth import TokenResponse
from restaurants_api.security import create_access_token

logger = logging.getLogger(__name__)


class LoginService:
    """Credential check plus token issuance. Holds only its configuration."""

    def __init__(self, config: Settings):
        self.config = config

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Return the matching user.

        Raises:
            NotFoundError: No user with this username/password (→ 404)
        """
        try:
            result = await db.execute(
                select(User)
                .where(func.lower(User.username) == func.lower(username))
                .order_by(User.id)
            )
            candidates = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        for user in candidates:
            if hmac.compare_digest(user.password.encode("utf-8"), password.encode("utf-8")):
                return user

        # Unknown user and wrong password are indistinguishable to the caller
        logger.info("Login rejected for username '%s'", username)
        raise NotFoundError(resource="user", message="User not found")

    async def login(self, db: AsyncSession, username: str, password: str) -> TokenResponse:
        user = await self.authenticate(db, username, password)
        token = create_access_token(user, self.config)
        logger.info("Issued token for user %s (role=%s)", user.id, user.role)
        return TokenResponse(token=token)


login_service = LoginService(settings)
