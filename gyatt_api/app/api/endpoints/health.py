"""Liveness probe."""

from fastapi import APIRouter, Depends

from gyatt_api.app.core.config import Settings, get_settings
from gyatt_api.app.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", message=f"{settings.project_name} is running")
