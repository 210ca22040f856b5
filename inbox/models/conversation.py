from datetime import datetime
from typing import Any, List, Optional, TypedDict


class ConversationDocument(TypedDict, total=False):
    _id: Any
    customer_id: Optional[str]
    # preview of the most recently added message
    content: str
    # recomputed from the messages collection on every write
    message_count: int
    participated_user_ids: List[str]
    created_at: datetime
    updated_at: datetime
