"""
Pydantic schemas for Message entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class MessageCreate(BaseModel):
    """Schema for sending a message."""
    content: Optional[str] = None
    room_id: Optional[int] = None


class MessageResponse(BaseModel):
    """Schema for message response, joined with the author."""
    id: int
    content: str
    user_id: int
    room_id: int
    created_at: datetime
    username: Optional[str] = None
    avatar_url: Optional[str] = None
    
    class Config:
        from_attributes = True


class MessageSendResponse(BaseModel):
    """Schema for send result."""
    success: bool = True
    message: MessageResponse


class MessagePage(BaseModel):
    """
    One page of a room's history, oldest first.
    
    ``next_before`` is the cursor for the next (older) page and is only set
    when ``has_more`` is true.
    """
    messages: List[MessageResponse] = []
    has_more: bool = False
    next_before: Optional[int] = None
