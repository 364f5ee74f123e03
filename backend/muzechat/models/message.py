"""
Message model.
"""
from sqlalchemy import Column, Text, ForeignKey, Integer, Index
from sqlalchemy.orm import relationship
from muzechat.db.base import BaseModel


class Message(BaseModel):
    """Immutable post in a chat room, ordered by (created_at, id)."""
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_room_created", "room_id", "created_at", "id"),
    )
    
    content = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("chat_rooms.id"), nullable=False, index=True)
    
    # Relationships
    user = relationship("User", back_populates="messages")
    room = relationship("ChatRoom", back_populates="messages")
    
    @property
    def username(self) -> str:
        return self.user.username if self.user else None
    
    @property
    def avatar_url(self) -> str:
        return self.user.avatar_url if self.user else None
