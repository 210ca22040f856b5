from typing import Optional

from fastapi import APIRouter, Depends, Header, status

from inbox.database.connection import mongo_db_dependency
from inbox.repositories.conversation_repository import ConversationRepository
from inbox.repositories.message_repository import MessageRepository
from inbox.schemas.message import MarkReadResult, MessageCreate, MessageList, MessagePublic
from inbox.services.message_service import MessageService


router = APIRouter(prefix="/conversations/{conversation_id}/messages", tags=["messages"])


def get_message_service(db = Depends(mongo_db_dependency)) -> MessageService:
    msg_repo = MessageRepository(db)
    convo_repo = ConversationRepository(db)
    return MessageService(msg_repo, convo_repo)


@router.post("", response_model=MessagePublic, status_code=status.HTTP_201_CREATED)
async def add_message(conversation_id: str, body: MessageCreate, x_user_id: Optional[str] = Header(None), service: MessageService = Depends(get_message_service)):
    # path wins over any id sent in the body
    doc = body.model_copy(update={"conversation_id": conversation_id})
    message = await service.add_message(doc, user_id=x_user_id)
    return MessagePublic.from_document(message)


@router.get("/non-answered", response_model=Optional[MessagePublic])
async def get_non_answered_message(conversation_id: str, service: MessageService = Depends(get_message_service)):
    message = await service.get_non_answered_message(conversation_id)
    return MessagePublic.from_document(message) if message else None


@router.get("/admin", response_model=MessageList)
async def get_admin_messages(conversation_id: str, service: MessageService = Depends(get_message_service)):
    messages = await service.get_admin_messages(conversation_id)
    return MessageList(items=[MessagePublic.from_document(m) for m in messages])


@router.post("/mark-read", response_model=MarkReadResult)
async def mark_sent_as_read_messages(conversation_id: str, service: MessageService = Depends(get_message_service)):
    return await service.mark_sent_as_read_messages(conversation_id)
