"""
Pydantic models for user data.

``UserRead`` deliberately has no password field: building it from a
stored record drops the bcrypt digest, so no response can leak it.
Request models declare every field optional; presence of required
fields is checked by ``UserService`` so the error messages match the
public API contract.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class LoginRequest(CamelModel):
    email: Optional[str] = Field(None, examples=["agent@example.com"])
    password: Optional[str] = Field(None, examples=["hunter2"])


class UserCreate(CamelModel):
    """Schema for an administrator creating a user.

    ``email``, ``password`` and ``codename`` are required.  ``rank``,
    ``goat_level``, ``rizz`` and ``is_admin`` fall back to the member
    defaults when omitted.
    """

    email: Optional[str] = Field(None, examples=["agent@example.com"])
    password: Optional[str] = None
    codename: Optional[str] = Field(None, examples=["Agent-X7K2QP"])
    rank: Optional[str] = Field(None, examples=["Initiate"])
    goat_level: Optional[int] = Field(None, examples=[50])
    rizz: Optional[int] = Field(None, examples=[50])
    is_admin: Optional[bool] = None


class UserUpdate(CamelModel):
    """Schema for updating a user.

    Only fields that are present and not null are written; everything
    else keeps its stored value.
    """

    codename: Optional[str] = None
    rank: Optional[str] = None
    goat_level: Optional[int] = None
    rizz: Optional[int] = None
    status: Optional[str] = None
    is_admin: Optional[bool] = None


class UserRead(CamelModel):
    """Schema for reading a user from the API."""

    id: int
    email: Optional[str] = None
    codename: Optional[str] = None
    rank: Optional[str] = None
    goat_level: Optional[int] = None
    rizz: Optional[int] = None
    status: Optional[str] = None
    is_admin: bool = False
    join_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LoginResponse(CamelModel):
    token: str
    user: UserRead
