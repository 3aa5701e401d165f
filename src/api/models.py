"""Pydantic models for API request/response."""

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class ProviderRequest(BaseModel):
    """Request model for creating or updating a provider.

    Fields are optional here so that presence and length rules are
    reported by the provider service as one field -> messages map.
    """
    name: str | None = Field(None, description="Provider name (1-200 characters)")
    document: str | None = Field(None, description="Tax document identifier (1-14 characters)")


class ProviderResponse(BaseModel):
    """Response model for provider."""
    id: str = Field(..., description="Provider ID")
    name: str
    document: str


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ClaimResponse(BaseModel):
    type: str
    value: str


class UserTokenResponse(BaseModel):
    """Identity summary returned next to the access token."""
    id: str
    email: str
    claims: list[ClaimResponse] = Field(default_factory=list)


class TokenResponse(BaseModel):
    """Response model for register/login."""
    access_token: str
    token_type: str = "bearer"
    issued_at: datetime
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user_token: UserTokenResponse


class AuthenticatedUser(BaseModel):
    """Caller identity decoded from a bearer token."""
    id: str
    email: str
    claims: dict[str, str] = Field(default_factory=dict)
    roles: list[str] = Field(default_factory=list)


class ValidationProblemResponse(BaseModel):
    """Field-level validation failure body."""
    title: str = "One or more validation errors occurred."
    errors: dict[str, list[str]]


class IdentityErrorResponse(BaseModel):
    """Registration failure body."""
    errors: list[dict[str, str]]
