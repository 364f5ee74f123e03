"""
User model for chat identities.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from muzechat.db.base import BaseModel


class User(BaseModel):
    """Identity record, created on first login and never mutated."""
    __tablename__ = "users"
    
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    avatar_url = Column(String(500), nullable=True)
    
    # Relationships
    rooms_created = relationship("ChatRoom", back_populates="creator")
    memberships = relationship("RoomMember", back_populates="user")
    messages = relationship("Message", back_populates="user")
