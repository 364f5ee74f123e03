"""
Utility functions for the application.
"""
from typing import Any, Dict
from urllib.parse import quote
from muzechat.core.config import settings


def build_avatar_url(username: str) -> str:
    """Derive the avatar URL for a username (same username, same avatar)."""
    return settings.AVATAR_URL_TEMPLATE.format(seed=quote(username, safe=""))


def normalize_text(value: Any) -> str:
    """Return a stripped string, or an empty string for None / non-strings."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def format_error(message: str) -> Dict[str, Any]:
    """Format error response."""
    return {"error": message}
