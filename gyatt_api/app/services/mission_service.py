"""
Service layer for missions.

Provides CRUD operations over the ``missions`` collection.  Only
administrators should be allowed to create, update or delete
missions; listing is open to every authenticated member.  Access
checks happen at the endpoint level.
"""

import logging
from typing import List

from ..core.errors import NotFound, ValidationError
from ..core.store import MISSIONS, RecordStore, find_by_id, now_iso, remove_by_id
from ..schemas.mission import MissionCreate, MissionRead, MissionUpdate

logger = logging.getLogger(__name__)


class MissionService:
    """Service class for managing missions."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def list_missions(self) -> List[MissionRead]:
        return [MissionRead.model_validate(record) for record in self.store.load(MISSIONS)]

    async def create_mission(self, data: MissionCreate) -> MissionRead:
        """Insert a new mission and return the created record.

        ``required_rank`` defaults to ``Initiate`` and ``status`` to
        ``Active`` when not provided.
        """
        if not data.title or not data.description:
            raise ValidationError("Title and description required")
        with self.store.transaction(MISSIONS) as records:
            record = {
                "id": self.store.allocate_id(MISSIONS, records),
                "title": data.title,
                "description": data.description,
                "requiredRank": data.required_rank or "Initiate",
                "status": data.status or "Active",
                "createdAt": now_iso(),
            }
            records.append(record)
        logger.info("Created mission %s", record["id"])
        return MissionRead.model_validate(record)

    async def update_mission(self, mission_id: int, data: MissionUpdate) -> MissionRead:
        """Update an existing mission.

        Only fields provided in ``data`` will be updated.  Raises
        ``NotFound`` if the mission does not exist.
        """
        changes = data.model_dump(by_alias=True, exclude_none=True)
        with self.store.transaction(MISSIONS) as records:
            record = find_by_id(records, mission_id)
            if record is None:
                raise NotFound("Mission not found")
            record.update(changes)
            record["updatedAt"] = now_iso()
        logger.info("Updated mission %s", mission_id)
        return MissionRead.model_validate(record)

    async def delete_mission(self, mission_id: int) -> None:
        with self.store.transaction(MISSIONS) as records:
            if not remove_by_id(records, mission_id):
                raise NotFound("Mission not found")
        logger.info("Deleted mission %s", mission_id)
