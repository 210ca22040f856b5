import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from inbox.database.connection import close_mongo_connection, connect_to_mongo, get_database
from inbox.exceptions import InboxError, NotFoundError, StorageError, ValidationError
from inbox.repositories.conversation_repository import ConversationRepository
from inbox.repositories.message_repository import MessageRepository
from inbox.routers.messages import router as messages_router
from inbox.utils.logging_setup import configure_logging


logger = logging.getLogger("inbox")


@asynccontextmanager
async def lifespan(app: FastAPI):

    configure_logging()
    await connect_to_mongo()
    db = get_database()
    await ConversationRepository(db).ensure_indexes()
    await MessageRepository(db).ensure_indexes()
    try:
        yield
    finally:
        await close_mongo_connection()


app = FastAPI(title="Inbox conversation messages", lifespan=lifespan)


app.include_router(messages_router)


_STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


@app.exception_handler(InboxError)
async def inbox_error_handler(request: Request, exc: InboxError):
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(
        status_code=status_code,
        content={"error_code": exc.error_code, "message": exc.message, "details": exc.details},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error_code": "STORAGE_ERROR", "message": "storage unavailable", "details": {}},
    )


@app.get("/health")
async def health():

    db = get_database()
    await db.command("ping")
    return {"status": "ok"}
