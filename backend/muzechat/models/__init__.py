"""Models package - Import all models for SQLAlchemy registration."""
from muzechat.models.user import User
from muzechat.models.room import ChatRoom, RoomMember
from muzechat.models.message import Message

__all__ = [
    "User",
    "ChatRoom",
    "RoomMember",
    "Message",
]
