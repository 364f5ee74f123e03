"""
Message routes: sending, full history, paged history and the event stream.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from muzechat.api.dependencies import get_optional_user
from muzechat.db.session import SessionLocal, get_db
from muzechat.models.user import User
from muzechat.schemas.message import MessageCreate, MessagePage, MessageResponse, MessageSendResponse
from muzechat.services import message_service
from muzechat.services.event_service import broker, room_event_stream

router = APIRouter(tags=["messages"])


def serialize_message(message) -> dict:
    return MessageResponse.model_validate(message).model_dump(mode="json")


@router.post("/messages", response_model=MessageSendResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Post a message to a room and push it to the room's live streams."""
    message = message_service.send_message(
        current_user, message_data.content, message_data.room_id, db
    )
    payload = MessageResponse.model_validate(message)
    broker.publish(message.room_id, payload.model_dump(mode="json"))
    return MessageSendResponse(message=payload)


@router.get("/rooms/{room_id}/messages", response_model=List[MessageResponse])
async def list_messages(room_id: int, db: Session = Depends(get_db)):
    """Full history of a room, oldest first. Never fails; empty on error."""
    return message_service.list_messages(room_id, db)


@router.get("/rooms/{room_id}/messages/page", response_model=MessagePage)
async def list_messages_page(
    room_id: int,
    before: Optional[int] = Query(None, description="Id of the oldest message already loaded"),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """Latest messages, or the page older than ``before``."""
    messages, has_more = message_service.list_messages_page(room_id, db, before=before, limit=limit)
    return MessagePage(
        messages=[MessageResponse.model_validate(m) for m in messages],
        has_more=has_more,
        next_before=messages[0].id if has_more and messages else None
    )


@router.get("/rooms/{room_id}/events")
async def stream_room_events(
    room_id: int,
    request: Request,
    after: Optional[int] = Query(None, description="Replay messages with a larger id first"),
    last_event_id: Optional[int] = Header(None)
):
    """Server-Sent Events stream of new messages in a room."""
    replay_from = after if after is not None else last_event_id
    
    def load_backlog() -> List[dict]:
        if replay_from is None:
            return []
        # The request-scoped session is closed once streaming starts
        db = SessionLocal()
        try:
            return [serialize_message(m) for m in message_service.list_messages_after(room_id, replay_from, db)]
        finally:
            db.close()
    
    return StreamingResponse(
        room_event_stream(room_id, load_backlog, request.is_disconnected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}
    )
