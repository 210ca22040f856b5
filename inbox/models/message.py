from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict


class ReadStatus(str, Enum):
    """Customer read state of an operator message.

    Stored as a missing ``is_customer_read`` field (never evaluated),
    ``False`` (unread) or ``True`` (read).
    """

    UNEVALUATED = "unevaluated"
    UNREAD = "unread"
    READ = "read"

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ReadStatus":
        value = doc.get("is_customer_read")
        if value is None:
            return cls.UNEVALUATED
        return cls.READ if value else cls.UNREAD

    def to_field(self) -> Optional[bool]:
        if self is ReadStatus.UNEVALUATED:
            return None
        return self is ReadStatus.READ

    def condition(self) -> Any:
        """Query condition on ``is_customer_read`` matching this state."""
        if self is ReadStatus.UNEVALUATED:
            return {"$exists": False}
        return self.to_field()


class MessageDocument(TypedDict, total=False):
    _id: Any
    conversation_id: Any
    content: str
    attachments: List[Dict[str, Any]]
    mentioned_user_ids: List[str]
    # exactly one of customer_id / user_id identifies the author
    customer_id: str
    user_id: str
    internal: bool
    # absent until evaluated, see ReadStatus
    is_customer_read: bool
    status: Optional[str]
    created_at: datetime
    # reply routing for social integrations
    tweet_reply_to_id: str
    tweet_reply_to_screen_name: str
    comment_reply_to_id: str
