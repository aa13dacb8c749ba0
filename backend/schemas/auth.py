"""Pydantic schemas for admin login."""
from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Admin credentials."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Issued or current admin session."""

    token: str | None = None
    username: str
    expiresAt: datetime
