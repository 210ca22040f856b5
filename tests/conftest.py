"""In-memory stand-ins for the Motor repositories."""
import itertools
from typing import Any, Dict, List, Optional

import pytest

from inbox.services.message_service import MessageService


def _matches(doc: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    for field, cond in filter.items():
        if isinstance(cond, dict):
            if "$exists" in cond and (field in doc) != cond["$exists"]:
                return False
            if "$ne" in cond and doc.get(field) == cond["$ne"]:
                return False
        elif doc.get(field) != cond:
            return False
    return True


def _sorted(docs: List[Dict[str, Any]], sort) -> List[Dict[str, Any]]:
    for field, direction in reversed(list(sort or [])):
        docs = sorted(docs, key=lambda d: d[field], reverse=direction < 0)
    return docs


class FakeConversationRepository:

    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.writes: List[tuple] = []

    def insert(self, conversation_id: str, **fields) -> Dict[str, Any]:
        doc = {"_id": conversation_id, "message_count": 0, "content": "", "participated_user_ids": [], **fields}
        self.docs[conversation_id] = doc
        return doc

    async def find_one(self, conversation_id) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(conversation_id)
        return dict(doc) if doc else None

    async def update(self, conversation_id, patch: Dict[str, Any]) -> bool:
        self.writes.append(("update", conversation_id, dict(patch)))
        if conversation_id not in self.docs:
            return False
        self.docs[conversation_id].update(patch)
        return True

    async def add_participant(self, conversation_id, user_id: str) -> bool:
        self.writes.append(("add_participant", conversation_id, user_id))
        doc = self.docs.get(conversation_id)
        if doc is None or user_id in doc["participated_user_ids"]:
            return False
        doc["participated_user_ids"].append(user_id)
        return True


class FakeMessageRepository:

    def __init__(self) -> None:
        self.docs: List[Dict[str, Any]] = []
        self._ids = itertools.count(1)

    async def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(fields)
        # zero padded so string order follows insertion order
        doc["_id"] = f"m{next(self._ids):06d}"
        self.docs.append(doc)
        return dict(doc)

    async def count(self, filter: Dict[str, Any]) -> int:
        return sum(1 for d in self.docs if _matches(d, filter))

    async def find_one(self, filter: Dict[str, Any], sort=None) -> Optional[Dict[str, Any]]:
        found = await self.find(filter, sort)
        return found[0] if found else None

    async def find(self, filter: Dict[str, Any], sort=None) -> List[Dict[str, Any]]:
        return [dict(d) for d in _sorted([d for d in self.docs if _matches(d, filter)], sort)]

    async def update_many(self, filter: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, int]:
        matched = modified = 0
        for doc in self.docs:
            if not _matches(doc, filter):
                continue
            matched += 1
            if any(doc.get(k, object()) != v for k, v in patch.items()):
                doc.update(patch)
                modified += 1
        return {"matched": matched, "modified": modified}


@pytest.fixture
def conversation_repo() -> FakeConversationRepository:
    repo = FakeConversationRepository()
    repo.insert("c1", customer_id="cust1")
    return repo


@pytest.fixture
def message_repo() -> FakeMessageRepository:
    return FakeMessageRepository()


@pytest.fixture
def service(message_repo, conversation_repo) -> MessageService:
    return MessageService(message_repo, conversation_repo)
