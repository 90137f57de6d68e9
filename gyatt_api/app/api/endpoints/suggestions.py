"""
Suggestion endpoints.

Any authenticated member can submit a suggestion.  Reading and
deleting the suggestion box is reserved for administrators.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from gyatt_api.app.api.deps import get_suggestion_service
from gyatt_api.app.core.security import get_current_user, require_admin
from gyatt_api.app.schemas.common import MessageResponse
from gyatt_api.app.schemas.suggestion import SuggestionCreate, SuggestionRead
from gyatt_api.app.services.suggestion_service import SuggestionService

router = APIRouter()


@router.get("", response_model=List[SuggestionRead], response_model_exclude_none=True)
async def list_suggestions(
    current_user: Dict[str, Any] = Depends(require_admin),
    service: SuggestionService = Depends(get_suggestion_service),
) -> List[SuggestionRead]:
    return await service.list_suggestions()


@router.post("", response_model=SuggestionRead, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_suggestion(
    payload: SuggestionCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: SuggestionService = Depends(get_suggestion_service),
) -> SuggestionRead:
    """Submit a suggestion as the authenticated caller."""
    return await service.create_suggestion(payload, current_user["id"])


@router.delete("/{suggestion_id}", response_model=MessageResponse)
async def delete_suggestion(
    suggestion_id: int,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: SuggestionService = Depends(get_suggestion_service),
) -> MessageResponse:
    await service.delete_suggestion(suggestion_id)
    return MessageResponse(message="Suggestion deleted successfully")
