"""Profile of the authenticated caller."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from gyatt_api.app.api.deps import get_user_service
from gyatt_api.app.core.security import get_current_user
from gyatt_api.app.schemas.user import UserRead
from gyatt_api.app.services.user_service import UserService

router = APIRouter()


@router.get("/profile", response_model=UserRead, response_model_exclude_none=True)
async def get_profile(
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Return the caller's own record.  404 if the account was deleted."""
    return await service.get_user_by_id(current_user["id"])
