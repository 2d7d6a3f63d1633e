"""
Restaurants API — Access Tokens
================================

What:  Issues and verifies the signed JWTs returned by POST /api/login.
How:   PyJWT with a symmetric key from `Settings`; every token carries the
       user's identity claims, the configured issuer and audience, and an
       expiry `jwt_expires_minutes` after issuance.
Who:   LoginService calls `create_access_token`; mutating routes depend on
       `require_token`.

Validation on protected requests:
    signature, `exp` (lifetime), `iss`, `aud`, and presence of `sub`.
    Any failure is an AuthenticationError (401) with a reason that does not
    reveal which check failed beyond "expired" vs "invalid".

A missing, placeholder or short `JWT_KEY` fails closed: issuing answers 500
and every presented token is rejected with 401.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from restaurants_api.config import Settings, get_settings
from restaurants_api.exceptions import AuthenticationError, RestaurantsAPIError
from restaurants_api.models.user import User
from restaurants_api.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

# auto_error=False: a missing header should produce our 401 body, not
# FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(
    user: User,
    config: Settings,
    now: Optional[datetime] = None,
) -> str:
    """Encode a signed token for `user` that expires after `config.jwt_expires_minutes`."""
    key_problem = config.jwt_key_problem()
    if key_problem:
        logger.error("Refusing to issue a token: %s", key_problem)
        raise RestaurantsAPIError(message="Token signing is not configured.")

    issued_at = now or datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user.username,
        "email": user.email_address,
        "given_name": user.given_name,
        "family_name": user.surname,
        "role": user.role,
        "iss": config.jwt_issuer,
        "aud": config.jwt_audience,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(minutes=config.jwt_expires_minutes)).timestamp()),
    }
    return jwt.encode(payload, config.jwt_key, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: Settings) -> TokenClaims:
    """
    Verify `token` and return its claims.

    Raises:
        AuthenticationError: expired, badly signed, wrong issuer/audience,
                             or structurally invalid token.
    """
    key_problem = config.jwt_key_problem()
    if key_problem:
        logger.error("Refusing to verify a token: %s", key_problem)
        raise AuthenticationError(message="Invalid token")

    try:
        payload = jwt.decode(
            token,
            config.jwt_key,
            algorithms=[config.jwt_algorithm],
            audience=config.jwt_audience,
            issuer=config.jwt_issuer,
            options={"require": ["exp", "iat", "iss", "aud", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(message="Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info("Rejected access token: %s", type(e).__name__)
        raise AuthenticationError(message="Invalid token")

    return TokenClaims(**payload)


async def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    config: Settings = Depends(get_settings),
) -> TokenClaims:
    """FastAPI dependency guarding mutating endpoints."""
    if credentials is None:
        raise AuthenticationError()
    return decode_access_token(credentials.credentials, config)
