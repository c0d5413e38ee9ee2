"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Request fields are optional at the schema level so that missing fields are
reported by the domain as a client error (400) rather than a 422.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(default=None, alias="confirmPassword")


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    success: bool = True
    message: str


class VerifyTokenRequest(BaseModel):
    """Request model for token verification."""

    email: str | None = None
    token: str | None = Field(default=None, description="5-digit verification token")


class VerifyTokenResponse(BaseModel):
    """Response model for successful verification, carrying the session credential."""

    success: bool = True
    message: str
    token: str = Field(..., description="Signed session credential (JWT)")


class PublicKeyResponse(BaseModel):
    """Response model for public key retrieval."""

    success: bool = True
    public_key: str = Field(..., serialization_alias="publicKey")


class PingResponse(BaseModel):
    """Response model for liveness check."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
