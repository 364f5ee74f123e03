"""
Pydantic schemas for the chat view.
"""
from pydantic import BaseModel
from typing import List, Optional
from muzechat.schemas.user import UserResponse
from muzechat.schemas.room import RoomResponse
from muzechat.schemas.message import MessageResponse


class ChatViewResponse(BaseModel):
    """Everything a client needs to render the chat screen."""
    user: UserResponse
    rooms: List[RoomResponse] = []
    current_room_id: Optional[int] = None
    messages: List[MessageResponse] = []
