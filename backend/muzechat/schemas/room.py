"""
Pydantic schemas for ChatRoom entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class RoomCreate(BaseModel):
    """Schema for room creation."""
    name: Optional[str] = None
    description: Optional[str] = None


class RoomResponse(BaseModel):
    """Schema for room response."""
    id: int
    name: str
    description: Optional[str] = None
    created_by: int
    created_by_username: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class RoomCreateResponse(BaseModel):
    """Schema for room creation result."""
    success: bool = True
    room: RoomResponse
