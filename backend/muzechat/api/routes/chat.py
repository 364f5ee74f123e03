"""
Chat view route: the data behind the main chat screen in one call.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from muzechat.api.dependencies import get_current_user
from muzechat.db.session import get_db
from muzechat.models.user import User
from muzechat.schemas.chat import ChatViewResponse
from muzechat.schemas.message import MessageResponse
from muzechat.schemas.room import RoomResponse
from muzechat.schemas.user import UserResponse
from muzechat.services import message_service, room_service

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("", response_model=ChatViewResponse)
async def get_chat_view(
    room: Optional[int] = Query(None, description="Active room id"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Current user, all rooms, and the active room's history.
    
    The active room is the requested one, otherwise the newest room.
    """
    rooms = room_service.list_rooms(db)
    current_room_id = room if room is not None else (rooms[0].id if rooms else None)
    messages = message_service.list_messages(current_room_id, db) if current_room_id else []
    
    return ChatViewResponse(
        user=UserResponse.model_validate(current_user),
        rooms=[RoomResponse.model_validate(r) for r in rooms],
        current_room_id=current_room_id,
        messages=[MessageResponse.model_validate(m) for m in messages]
    )
