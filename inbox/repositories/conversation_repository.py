import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from inbox.config import get_settings
from inbox.models.conversation import ConversationDocument
from inbox.utils.ids import normalize_id_fields, to_object_id


logger = logging.getLogger(__name__)


class ConversationRepository:

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: Optional[str] = None) -> None:
        self._db = db
        self._collection_name = collection_name or get_settings().conversations_collection

    @property
    def collection(self):
        return self._db[self._collection_name]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("participated_user_ids", ASCENDING)])
        await self.collection.create_index([("updated_at", DESCENDING)])

    async def find_one(self, conversation_id) -> Optional[ConversationDocument]:
        doc = await self.collection.find_one({"_id": to_object_id(conversation_id)})
        if doc:
            normalize_id_fields(doc)
        return doc

    async def update(self, conversation_id, patch: Dict[str, Any]) -> bool:
        result = await self.collection.update_one(
            {"_id": to_object_id(conversation_id)},
            {"$set": patch},
        )
        return bool(result.matched_count)

    async def add_participant(self, conversation_id, user_id: str) -> bool:
        # $addToSet keeps this a no-op for known participants
        result = await self.collection.update_one(
            {"_id": to_object_id(conversation_id)},
            {"$addToSet": {"participated_user_ids": user_id}},
        )
        if result.modified_count:
            logger.debug("Added participant %s to conversation %s", user_id, conversation_id)
        return bool(result.modified_count)
