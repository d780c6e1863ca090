"""Session (authentication) schemas."""

from pydantic import BaseModel, EmailStr, Field


class SessionCreate(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=1, description="User password")


class SessionUser(BaseModel):
    """Public view of the authenticated user."""

    id: int
    name: str

    model_config = {"from_attributes": True}


class SessionToken(BaseModel):
    """Login response schema."""

    user: SessionUser
    token: str = Field(..., description="JWT access token")
