"""
Service layer for member suggestions.

Any authenticated member may submit a suggestion; only administrators
list or delete them.  The submitter's codename and id are copied into
the suggestion at creation time.
"""

import logging
from typing import List

from ..core.errors import NotFound, ValidationError
from ..core.store import SUGGESTIONS, USERS, RecordStore, find_by_id, now_iso, remove_by_id
from ..schemas.suggestion import SuggestionCreate, SuggestionRead

logger = logging.getLogger(__name__)


class SuggestionService:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    async def list_suggestions(self) -> List[SuggestionRead]:
        return [SuggestionRead.model_validate(record) for record in self.store.load(SUGGESTIONS)]

    async def create_suggestion(self, data: SuggestionCreate, user_id: int) -> SuggestionRead:
        """Store a suggestion submitted by the user with ``user_id``.

        Raises ``ValidationError`` if the text is empty and ``NotFound``
        if the submitter's account no longer exists (their token may
        outlive the account).
        """
        if not data.text:
            raise ValidationError("Suggestion text required")
        user = find_by_id(self.store.load(USERS), user_id)
        if user is None:
            raise NotFound("User not found")
        with self.store.transaction(SUGGESTIONS) as records:
            timestamp = now_iso()
            record = {
                "id": self.store.allocate_id(SUGGESTIONS, records),
                "text": data.text,
                "from": user.get("codename"),
                "userId": user["id"],
                "date": timestamp,
                "createdAt": timestamp,
            }
            records.append(record)
        logger.info("Stored suggestion %s from user %s", record["id"], user_id)
        return SuggestionRead.model_validate(record)

    async def delete_suggestion(self, suggestion_id: int) -> None:
        with self.store.transaction(SUGGESTIONS) as records:
            if not remove_by_id(records, suggestion_id):
                raise NotFound("Suggestion not found")
        logger.info("Deleted suggestion %s", suggestion_id)
