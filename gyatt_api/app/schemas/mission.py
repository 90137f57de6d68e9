"""
Pydantic schemas for missions.

A mission is a task descriptor managed by administrators and visible
to every authenticated member.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class MissionCreate(CamelModel):
    """Schema for creating a mission.  ``title`` and ``description`` are required."""

    title: Optional[str] = Field(None, examples=["Operation Sunrise"])
    description: Optional[str] = Field(None, examples=["Meet at dawn."])
    required_rank: Optional[str] = Field(None, examples=["Initiate"])
    status: Optional[str] = Field(None, examples=["Active"])


class MissionUpdate(CamelModel):
    """Schema for updating a mission; omitted fields keep their value."""

    title: Optional[str] = None
    description: Optional[str] = None
    required_rank: Optional[str] = None
    status: Optional[str] = None


class MissionRead(CamelModel):
    """Stored mission as served.  Older records may lack any field but ``id``."""

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    required_rank: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
