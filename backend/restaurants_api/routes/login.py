"""
Restaurants API — Login Route
==============================

What:  POST /api/login exchanges a username/password for a signed token.
       Unknown credentials answer 404 "User not found".
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurants_api.database import get_db_session
from restaurants_api.schemas.auth import LoginRequest, TokenResponse
from restaurants_api.schemas.common import ErrorResponse
from restaurants_api.services.login_service import login_service

router = APIRouter(prefix="/api", tags=["Login"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Log in and receive an access token",
)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await login_service.login(db, credentials.username, credentials.password)
