import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

from inbox.exceptions import NotFoundError, ValidationError
from inbox.models.message import MessageDocument, ReadStatus
from inbox.repositories.conversation_repository import ConversationRepository
from inbox.repositories.message_repository import MessageRepository
from inbox.schemas.message import MarkReadResult, MessageCreate
from inbox.utils.text import is_blank


logger = logging.getLogger(__name__)


class MessageService:
    """Conversation aggregates (preview, message count, participants) are derived
    from the message stream with separate store writes, not one transaction.
    The count is re-queried after each insert rather than incremented, so a
    lost update is corrected by the next message; concurrent writers on the
    same conversation can still observe a stale count in between.
    """

    def __init__(self, message_repo: MessageRepository, conversation_repo: ConversationRepository) -> None:
        self._message_repo = message_repo
        self._conversation_repo = conversation_repo

    async def add_message(self, doc: MessageCreate, user_id: Optional[str] = None) -> MessageDocument:
        conversation = await self._conversation_repo.find_one(doc.conversation_id)
        if not conversation:
            logger.warning("Rejected message for unknown conversation %s", doc.conversation_id)
            raise NotFoundError("Conversation", doc.conversation_id)

        content = doc.content or ""
        attachments = doc.attachments or []

        if not attachments and is_blank(content):
            raise ValidationError("content required", {"conversation_id": doc.conversation_id})
        if user_id and doc.customer_id:
            raise ValidationError(
                "message must have exactly one author",
                {"user_id": user_id, "customer_id": doc.customer_id},
            )

        # preview goes first; if the insert below fails it stays ahead of the stream
        await self._conversation_repo.update(doc.conversation_id, {"content": content})

        fields = doc.model_dump(exclude_none=True)
        fields["content"] = content
        fields["attachments"] = attachments
        if user_id:
            fields["user_id"] = user_id
        return await self.create_message(fields)

    async def create_message(self, fields: Dict[str, Any]) -> MessageDocument:
        doc: Dict[str, Any] = {
            "internal": False,
            "content": "",
            "attachments": [],
            **fields,
            "created_at": datetime.now(timezone.utc),
        }
        doc["mentioned_user_ids"] = list(dict.fromkeys(fields.get("mentioned_user_ids") or []))
        message = await self._message_repo.create(doc)
        conversation_id = message["conversation_id"]

        message_count = await self._message_repo.count({"conversation_id": conversation_id})
        await self._conversation_repo.update(
            conversation_id,
            {
                "message_count": message_count,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        logger.debug("Conversation %s recounted at %d messages", conversation_id, message_count)

        author_id = message.get("user_id") or message.get("customer_id")
        if author_id:
            await self._conversation_repo.add_participant(conversation_id, author_id)
        for mentioned_id in message["mentioned_user_ids"]:
            await self._conversation_repo.add_participant(conversation_id, mentioned_id)

        logger.info(
            "Added message %s to conversation %s (internal=%s)",
            message["_id"],
            conversation_id,
            message["internal"],
        )
        return message

    async def get_non_answered_message(self, conversation_id: str) -> Optional[MessageDocument]:
        return await self._message_repo.find_one(
            {"conversation_id": conversation_id, "customer_id": {"$exists": True}},
            sort=[("created_at", DESCENDING), ("_id", DESCENDING)],
        )

    async def get_admin_messages(self, conversation_id: str) -> List[MessageDocument]:
        # internal notes never reach the customer queue
        return await self._message_repo.find(
            {
                "conversation_id": conversation_id,
                "user_id": {"$exists": True},
                "is_customer_read": {"$ne": ReadStatus.READ.to_field()},
                "internal": {"$ne": True},
            },
            sort=[("created_at", ASCENDING), ("_id", ASCENDING)],
        )

    async def mark_sent_as_read_messages(self, conversation_id: str) -> MarkReadResult:
        # only never-evaluated flags move; explicit unread stays unread
        result = await self._message_repo.update_many(
            {
                "conversation_id": conversation_id,
                "user_id": {"$exists": True},
                "is_customer_read": ReadStatus.UNEVALUATED.condition(),
            },
            {"is_customer_read": ReadStatus.READ.to_field()},
        )
        logger.debug("Marked %d messages read in conversation %s", result["modified"], conversation_id)
        return MarkReadResult(**result)
