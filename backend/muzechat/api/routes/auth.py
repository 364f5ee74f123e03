"""
Authentication routes for login, logout and the current user.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from muzechat.api.dependencies import get_optional_user
from muzechat.core.config import settings
from muzechat.core.security import create_session_token
from muzechat.db.session import get_db
from muzechat.models.user import User
from muzechat.schemas.user import ActionResult, LoginResponse, UserLogin, UserResponse
from muzechat.services.identity_service import resolve_user

router = APIRouter(prefix="/auth", tags=["auth"])

SESSION_MAX_AGE = 60 * 60 * 24 * settings.SESSION_EXPIRE_DAYS


def set_session_cookie(response: Response, user_id: int) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(user_id),
        max_age=SESSION_MAX_AGE,
        httponly=True,
        secure=settings.is_production,
        samesite="lax"
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="lax"
    )


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """Log in by username and email; unknown identities are created."""
    user = resolve_user(credentials.username, credentials.email, db)
    set_session_cookie(response, user.id)
    return LoginResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=ActionResult)
async def logout(response: Response):
    """Clear the session cookie."""
    clear_session_cookie(response)
    return ActionResult()


@router.get("/me", response_model=Optional[UserResponse])
async def get_current_user_info(user: Optional[User] = Depends(get_optional_user)):
    """Get the current user, or null when not logged in."""
    return user
