"""
Mission endpoints.

Members may list missions; administrators may create, update and
delete them.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from gyatt_api.app.api.deps import get_mission_service
from gyatt_api.app.core.security import get_current_user, require_admin
from gyatt_api.app.schemas.common import MessageResponse
from gyatt_api.app.schemas.mission import MissionCreate, MissionRead, MissionUpdate
from gyatt_api.app.services.mission_service import MissionService

router = APIRouter()


@router.get("", response_model=List[MissionRead], response_model_exclude_none=True)
async def list_missions(
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: MissionService = Depends(get_mission_service),
) -> List[MissionRead]:
    return await service.list_missions()


@router.post("", response_model=MissionRead, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_mission(
    payload: MissionCreate,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: MissionService = Depends(get_mission_service),
) -> MissionRead:
    """Create a new mission (admin only)."""
    return await service.create_mission(payload)


@router.put("/{mission_id}", response_model=MissionRead, response_model_exclude_none=True)
async def update_mission(
    mission_id: int,
    payload: MissionUpdate,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: MissionService = Depends(get_mission_service),
) -> MissionRead:
    """Update an existing mission (admin only)."""
    return await service.update_mission(mission_id, payload)


@router.delete("/{mission_id}", response_model=MessageResponse)
async def delete_mission(
    mission_id: int,
    current_user: Dict[str, Any] = Depends(require_admin),
    service: MissionService = Depends(get_mission_service),
) -> MessageResponse:
    """Delete a mission (admin only)."""
    await service.delete_mission(mission_id)
    return MessageResponse(message="Mission deleted successfully")
