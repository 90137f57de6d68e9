"""
FastAPI dependency providers.

The record store and settings are attached to ``app.state`` by
``create_app``; these providers build the services for each request
from them.
"""

from fastapi import Depends, Request

from ..core.config import Settings, get_settings
from ..core.store import RecordStore
from ..services.mission_service import MissionService
from ..services.suggestion_service import SuggestionService
from ..services.user_service import UserService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_user_service(
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(store, settings)


def get_mission_service(store: RecordStore = Depends(get_store)) -> MissionService:
    return MissionService(store)


def get_suggestion_service(store: RecordStore = Depends(get_store)) -> SuggestionService:
    return SuggestionService(store)
