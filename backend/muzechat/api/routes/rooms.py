"""
Chat room routes.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from muzechat.api.dependencies import get_optional_user
from muzechat.db.session import get_db
from muzechat.models.user import User
from muzechat.schemas.room import RoomCreate, RoomCreateResponse, RoomResponse
from muzechat.schemas.user import ActionResult, UserResponse
from muzechat.services import room_service

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("", response_model=List[RoomResponse])
async def list_rooms(db: Session = Depends(get_db)):
    """List all rooms, newest first."""
    return room_service.list_rooms(db)


@router.post("", response_model=RoomCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    room_data: RoomCreate,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Create a room; the creator becomes its first member."""
    room = room_service.create_room(current_user, room_data.name, room_data.description, db)
    return RoomCreateResponse(room=RoomResponse.model_validate(room))


@router.post("/{room_id}/join", response_model=ActionResult)
async def join_room(
    room_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Join a room. Joining twice is a no-op."""
    room_service.join_room(current_user, room_id, db)
    return ActionResult()


@router.get("/{room_id}/members", response_model=List[UserResponse])
async def list_members(room_id: int, db: Session = Depends(get_db)):
    """List room members."""
    return room_service.list_members(room_id, db)
