"""
Request dependencies for resolving the session user.
"""
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from muzechat.core.config import settings
from muzechat.core.exceptions import AuthenticationRequired
from muzechat.core.security import user_id_from_token
from muzechat.db.session import get_db
from muzechat.models.user import User
from muzechat.services.identity_service import get_user_by_id


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """
    Resolve the caller from the session cookie.
    
    A missing or invalid token, or a token for a user that no longer exists,
    yields None rather than an error.
    """
    user_id = user_id_from_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if user_id is None:
        return None
    return get_user_by_id(user_id, db)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Require an authenticated caller."""
    if user is None:
        raise AuthenticationRequired()
    return user
