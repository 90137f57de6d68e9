"""
User management endpoints.

All routes here are restricted to administrators.  Password digests
are never part of a response: every route returns ``UserRead``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from gyatt_api.app.api.deps import get_user_service
from gyatt_api.app.core.security import require_admin
from gyatt_api.app.schemas.common import MessageResponse
from gyatt_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from gyatt_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserRead], response_model_exclude_none=True)
async def list_users(
    current_user: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> List[UserRead]:
    """Return every user (admin only)."""
    return await service.list_users()


@router.post("", response_model=UserRead, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Create a user.

    ``email``, ``password`` and ``codename`` are required; an email
    that is already registered is rejected with 400.
    """
    return await service.create_user(payload)


@router.put("/{user_id}", response_model=UserRead, response_model_exclude_none=True)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Update a user's codename, rank, stats, status or admin flag."""
    return await service.update_user(user_id, payload)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
