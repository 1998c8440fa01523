"""Pydantic models for Bitbucket API responses."""

from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Response from the OAuth2 access token endpoint."""

    access_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    scopes: str | None = None
