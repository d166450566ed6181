"""Pydantic schemas for session endpoints."""

from __future__ import annotations

from pydantic import EmailStr, Field
from src.core.auth import Role

from . import ApiModel


class RegisterRequest(ApiModel):
    """Request schema for self-registration."""

    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr = Field(..., description="User email address")
    role: Role = Field(default=Role.STUDENT, description="User role (defaults to student)")
    student_id: str | None = None
    company: str | None = None
    department: str | None = None
    phone: str | None = None


class LoginRequest(ApiModel):
    """Request schema for login; accounts are identified by email alone."""

    email: EmailStr = Field(..., description="User email address")


class SessionResponse(ApiModel):
    user_id: str
    name: str
    email: str
    role: Role
    status: str


class TokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    session: SessionResponse
