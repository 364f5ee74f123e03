"""
Room service for chat room business logic.
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
from muzechat.core.exceptions import AuthenticationRequired, RoomNotFoundError, StoreError, ValidationError
from muzechat.core.utils import normalize_text
from muzechat.db.session import unit_of_work
from muzechat.models.room import ChatRoom, RoomMember
from muzechat.models.user import User

logger = logging.getLogger(__name__)


def list_rooms(db: Session) -> List[ChatRoom]:
    """List every room, newest first. Returns [] if the store fails."""
    try:
        return db.query(ChatRoom).options(
            joinedload(ChatRoom.creator)
        ).order_by(ChatRoom.created_at.desc(), ChatRoom.id.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Error listing rooms: {e}", exc_info=True)
        return []


def get_room(room_id: int, db: Session) -> Optional[ChatRoom]:
    """Get room by id."""
    return db.query(ChatRoom).filter(ChatRoom.id == room_id).first()


def create_room(
    user: Optional[User],
    name: Optional[str],
    description: Optional[str] = None,
    db: Session = None
) -> ChatRoom:
    """
    Create a room and enroll its creator as the first member.
    
    Both rows are written in one transaction: either the room exists with
    its creator as member, or neither row was written.
    """
    if user is None:
        raise AuthenticationRequired()
    
    name = normalize_text(name)
    if not name:
        raise ValidationError("Room name is required")
    description = normalize_text(description) or None
    
    user_id = user.id
    try:
        with unit_of_work(db):
            room = ChatRoom(name=name, description=description, created_by=user_id)
            db.add(room)
            db.flush()
            room_id = room.id
            db.add(RoomMember(user_id=user_id, room_id=room_id))
    except SQLAlchemyError as e:
        logger.error(f"Error creating room '{name}' for user {user_id}: {e}", exc_info=True)
        raise StoreError("Room could not be created")
    
    # Both rows are committed at this point; only reloading can still fail
    try:
        db.refresh(room)
    except SQLAlchemyError as e:
        logger.error(f"Room {room_id} was created but could not be reloaded: {e}", exc_info=True)
        raise StoreError("Room was created but could not be loaded, please refresh")
    
    logger.info(f"User {user_id} created room {room_id} ({name})")
    return room


def get_membership(room_id: int, user_id: int, db: Session) -> Optional[RoomMember]:
    return db.query(RoomMember).filter(
        RoomMember.room_id == room_id,
        RoomMember.user_id == user_id
    ).first()


def join_room(user: Optional[User], room_id: int, db: Session) -> bool:
    """
    Record membership of user in a room.
    
    Returns True if a membership row was added, False if the user was
    already a member.
    """
    if user is None:
        raise AuthenticationRequired()
    
    try:
        if get_room(room_id, db) is None:
            raise RoomNotFoundError()
        if get_membership(room_id, user.id, db):
            return False
        with unit_of_work(db):
            db.add(RoomMember(user_id=user.id, room_id=room_id))
    except IntegrityError:
        # A concurrent join inserted the same membership first
        db.rollback()
        return False
    except SQLAlchemyError as e:
        logger.error(f"Error adding user {user.id} to room {room_id}: {e}", exc_info=True)
        raise StoreError("Could not join room")
    return True


def list_members(room_id: int, db: Session) -> List[User]:
    """List the members of a room in join order."""
    try:
        if get_room(room_id, db) is None:
            raise RoomNotFoundError()
        return db.query(User).join(RoomMember, RoomMember.user_id == User.id).filter(
            RoomMember.room_id == room_id
        ).order_by(RoomMember.joined_at, User.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error listing members of room {room_id}: {e}", exc_info=True)
        return []
