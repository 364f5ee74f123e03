"""
Identity service: resolve a login to a user, creating it on first contact.
"""
import logging
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from muzechat.core.exceptions import StoreError, ValidationError
from muzechat.core.utils import build_avatar_url, normalize_text
from muzechat.models.user import User

logger = logging.getLogger(__name__)


def find_user(username: str, email: str, db: Session) -> Optional[User]:
    """
    Find a user whose username or email matches.
    
    A match on either field is enough, so "alice" with a new email still
    resolves to the existing alice. When the two fields point at different
    users the oldest one wins.
    """
    return db.query(User).filter(
        or_(User.username == username, User.email == email)
    ).order_by(User.id).first()


def _create_user(username: str, email: str, db: Session) -> User:
    user = User(
        username=username,
        email=email,
        avatar_url=build_avatar_url(username)
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent login for the same identity
        db.rollback()
        existing = find_user(username, email, db)
        if existing is None:
            raise
        return existing
    db.refresh(user)
    logger.info(f"Created user {user.id} ({username})")
    return user


def resolve_user(username: Optional[str], email: Optional[str], db: Session) -> User:
    """Return the user matching username or email, creating one if none does."""
    username = normalize_text(username)
    email = normalize_text(email)
    if not username or not email:
        raise ValidationError("Username and email are required")
    
    try:
        user = find_user(username, email, db)
        if user is None:
            user = _create_user(username, email, db)
        return user
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Login failed for '{username}': {e}", exc_info=True)
        raise StoreError("Login failed, please try again")


def get_user_by_id(user_id: int, db: Session) -> Optional[User]:
    """Look up a user by id; store errors are logged and treated as a miss."""
    try:
        return db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Error loading user {user_id}: {e}", exc_info=True)
        return None
