"""
Message service for posting and reading room history.

Messages are ordered by (created_at, id). Read paths never raise: a store
failure is logged and degrades to an empty result.
"""
import logging
from typing import List, Optional, Tuple
from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from muzechat.core.config import settings
from muzechat.core.exceptions import AuthenticationRequired, RoomNotFoundError, StoreError, ValidationError
from muzechat.models.message import Message
from muzechat.models.room import ChatRoom
from muzechat.models.user import User

logger = logging.getLogger(__name__)


def _room_messages(room_id: int, db: Session):
    return db.query(Message).options(
        joinedload(Message.user)
    ).filter(Message.room_id == room_id)


def send_message(
    user: Optional[User],
    content: Optional[str],
    room_id: Optional[int],
    db: Session
) -> Message:
    """Append a message to a room. Content is stored exactly as given."""
    if user is None:
        raise AuthenticationRequired()
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("Message cannot be empty")
    if room_id is None:
        raise ValidationError("Room is required")
    
    try:
        room_exists = db.query(ChatRoom.id).filter(ChatRoom.id == room_id).first()
        if not room_exists:
            raise RoomNotFoundError()
        
        message = Message(content=content, user_id=user.id, room_id=room_id)
        db.add(message)
        db.commit()
        db.refresh(message)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error sending message to room {room_id} for user {user.id}: {e}", exc_info=True)
        raise StoreError("Message could not be sent")
    
    logger.debug(f"User {user.id} posted message {message.id} in room {room_id}")
    return message


def list_messages(room_id: int, db: Session) -> List[Message]:
    """Return the full history of a room, oldest first."""
    try:
        return _room_messages(room_id, db).order_by(
            Message.created_at.asc(), Message.id.asc()
        ).all()
    except SQLAlchemyError as e:
        logger.error(f"Error listing messages for room {room_id}: {e}", exc_info=True)
        return []


def clamp_page_size(limit: Optional[int]) -> int:
    """Apply the default and maximum page size."""
    if not limit or limit < 1:
        return settings.MESSAGE_PAGE_SIZE
    return min(limit, settings.MESSAGE_MAX_PAGE_SIZE)


def list_messages_page(
    room_id: int,
    db: Session,
    before: Optional[int] = None,
    limit: Optional[int] = None
) -> Tuple[List[Message], bool]:
    """
    Return the newest messages older than the ``before`` cursor.
    
    Without a cursor this is the latest page. The page comes back oldest
    first together with a flag telling whether older messages remain.
    An unknown cursor yields an empty page.
    """
    limit = clamp_page_size(limit)
    try:
        query = _room_messages(room_id, db)
        if before is not None:
            cursor = db.query(Message).filter(
                Message.id == before,
                Message.room_id == room_id
            ).first()
            if cursor is None:
                return [], False
            query = query.filter(or_(
                Message.created_at < cursor.created_at,
                and_(Message.created_at == cursor.created_at, Message.id < cursor.id)
            ))
        
        rows = query.order_by(
            Message.created_at.desc(), Message.id.desc()
        ).limit(limit + 1).all()
    except SQLAlchemyError as e:
        logger.error(f"Error paging messages for room {room_id}: {e}", exc_info=True)
        return [], False
    
    has_more = len(rows) > limit
    page = rows[:limit]
    page.reverse()
    return page, has_more


def list_messages_after(room_id: int, after_id: int, db: Session) -> List[Message]:
    """Return messages posted after the message with id ``after_id``."""
    try:
        return _room_messages(room_id, db).filter(
            Message.id > after_id
        ).order_by(Message.created_at.asc(), Message.id.asc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error loading messages after {after_id} in room {room_id}: {e}", exc_info=True)
        return []
