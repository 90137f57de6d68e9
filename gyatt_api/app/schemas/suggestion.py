"""
Pydantic schemas for member suggestions.

The submitter's codename is copied into the suggestion when it is
created (wire name ``from``); it is not updated if the user is later
renamed or deleted.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class SuggestionCreate(CamelModel):
    text: Optional[str] = Field(None, examples=["More missions on weekends"])


class SuggestionRead(CamelModel):
    id: int
    text: Optional[str] = None
    from_codename: Optional[str] = Field(None, alias="from")
    user_id: Optional[int] = None
    date: Optional[str] = None
    created_at: Optional[str] = None
