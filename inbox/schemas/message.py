from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from inbox.models.message import ReadStatus


class MessageCreate(BaseModel):

    # the router fills this from the path
    conversation_id: str = ""
    content: Optional[str] = None
    attachments: Optional[List[Dict[str, Any]]] = None
    mentioned_user_ids: Optional[List[str]] = None
    # None lets the service apply its default
    internal: Optional[bool] = None
    customer_id: Optional[str] = None
    status: Optional[str] = None
    tweet_reply_to_id: Optional[str] = None
    tweet_reply_to_screen_name: Optional[str] = None
    comment_reply_to_id: Optional[str] = None


class MessagePublic(BaseModel):

    id: str
    conversation_id: str
    content: str = ""
    attachments: List[Dict[str, Any]] = Field(default_factory=list)
    mentioned_user_ids: List[str] = Field(default_factory=list)
    customer_id: Optional[str] = None
    user_id: Optional[str] = None
    internal: bool = False
    is_customer_read: ReadStatus = ReadStatus.UNEVALUATED
    status: Optional[str] = None
    created_at: datetime
    tweet_reply_to_id: Optional[str] = None
    tweet_reply_to_screen_name: Optional[str] = None
    comment_reply_to_id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "MessagePublic":
        data = {k: v for k, v in doc.items() if k not in ("_id", "is_customer_read")}
        return cls(
            id=str(doc["_id"]),
            is_customer_read=ReadStatus.from_document(doc),
            **{**data, "conversation_id": str(doc["conversation_id"])},
        )


class MessageList(BaseModel):

    items: List[MessagePublic]


class MarkReadResult(BaseModel):

    matched: int = 0
    modified: int = 0
