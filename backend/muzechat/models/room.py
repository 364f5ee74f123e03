"""
Chat room and membership models.
"""
from datetime import datetime
from sqlalchemy import Column, String, Text, ForeignKey, Integer, DateTime
from sqlalchemy.orm import relationship
from muzechat.db.base import Base, BaseModel


class ChatRoom(BaseModel):
    """A named conversation scope; any user may post to any room."""
    __tablename__ = "chat_rooms"
    
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    
    # Relationships
    creator = relationship("User", back_populates="rooms_created")
    members = relationship("RoomMember", back_populates="room", cascade="all, delete-orphan")
    messages = relationship("Message", back_populates="room", cascade="all, delete-orphan")
    
    @property
    def created_by_username(self) -> str:
        return self.creator.username if self.creator else None


class RoomMember(Base):
    """Junction table for ChatRoom and User many-to-many relationship."""
    __tablename__ = "room_members"
    
    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    room_id = Column(Integer, ForeignKey("chat_rooms.id"), primary_key=True, index=True)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    user = relationship("User", back_populates="memberships")
    room = relationship("ChatRoom", back_populates="members")
