"""
Security utilities for signed session tokens.
"""
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from muzechat.core.config import settings


def create_session_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed session token for a user id."""
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(days=settings.SESSION_EXPIRE_DAYS)
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> Optional[dict]:
    """Decode and verify a session token."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        return None


def user_id_from_token(token: Optional[str]) -> Optional[int]:
    """
    Resolve the user id carried by a session token.
    
    Returns None for a missing, tampered, expired or malformed token.
    """
    if not token:
        return None
    payload = decode_session_token(token)
    if not payload:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
