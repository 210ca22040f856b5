from typing import Any, Dict, List, Optional, Sequence, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING

from inbox.config import get_settings
from inbox.utils.ids import normalize_id_fields, to_object_id


Sort = Sequence[Tuple[str, int]]


class MessageRepository:

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: Optional[str] = None) -> None:
        self._db = db
        self._collection_name = collection_name or get_settings().messages_collection

    @property
    def collection(self):
        return self._db[self._collection_name]

    async def ensure_indexes(self) -> None:
        await self.collection.create_index([("conversation_id", ASCENDING), ("created_at", ASCENDING)])
        await self.collection.create_index([("conversation_id", ASCENDING), ("customer_id", ASCENDING)])

    def _query(self, filter: Dict[str, Any]) -> Dict[str, Any]:
        query = dict(filter)
        if "conversation_id" in query:
            query["conversation_id"] = to_object_id(query["conversation_id"])
        return query

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        doc: Dict[str, Any] = dict(fields)
        doc["conversation_id"] = to_object_id(doc["conversation_id"])
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        # copy so the document handed to insert_one keeps its ObjectId reference
        return normalize_id_fields(dict(doc), "conversation_id")

    async def count(self, filter: Dict[str, Any]) -> int:
        return await self.collection.count_documents(self._query(filter))

    async def find_one(self, filter: Dict[str, Any], sort: Optional[Sort] = None) -> Optional[Dict[str, Any]]:
        doc = await self.collection.find_one(self._query(filter), sort=list(sort) if sort else None)
        if doc:
            normalize_id_fields(doc, "conversation_id")
        return doc

    async def find(self, filter: Dict[str, Any], sort: Optional[Sort] = None) -> List[Dict[str, Any]]:
        cursor = self.collection.find(self._query(filter))
        if sort:
            cursor = cursor.sort(list(sort))
        items = await cursor.to_list(length=None)
        for it in items:
            normalize_id_fields(it, "conversation_id")
        return items

    async def update_many(self, filter: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, int]:
        result = await self.collection.update_many(self._query(filter), {"$set": patch})
        return {"matched": result.matched_count or 0, "modified": result.modified_count or 0}
