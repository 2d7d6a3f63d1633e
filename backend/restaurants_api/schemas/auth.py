"""
Restaurants API — Authentication Schemas
=========================================

What:  Login request/response bodies and the decoded token claims.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class TokenResponse(BaseModel):
    token: str = Field(description="Signed JWT; send as `Authorization: Bearer <token>`")


class TokenClaims(BaseModel):
    """
    Claims carried by an access token.

    `sub` is the username (the name identifier); the remaining identity
    claims are copied from the user row at issuance.
    """
    sub: str
    email: str
    given_name: str
    family_name: str
    role: str
    iss: str
    aud: str
    iat: int
    exp: int
