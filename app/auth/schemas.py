"""Auth domain schemas.

Request schemas for token verification and invitation claims. Responses use
the role-shaped account schemas from app.user.schemas.
"""

from pydantic import BaseModel, EmailStr, Field

from app.user.models import UserRole


class VerifyTokenRequest(BaseModel):
    """Request schema for token verification.

    ``role`` is only used when the identity has no account yet.
    """

    token: str = Field(min_length=1)
    role: UserRole | None = None


class CompleteRegistrationRequest(BaseModel):
    """Request schema for claiming a pending invitation."""

    token: str = Field(min_length=1)
    email: EmailStr
