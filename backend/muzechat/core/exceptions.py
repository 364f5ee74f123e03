"""
Exception hierarchy for chat operations.

Every error raised by the services carries a user-facing message and the HTTP
status it maps to. The API layer renders all of them as ``{"error": message}``.
"""


class ChatError(Exception):
    """Base class for all chat errors."""
    
    status_code: int = 400
    default_message: str = "Request failed"
    
    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)
    
    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(ChatError):
    """A required field is missing or blank."""
    status_code = 400
    default_message = "Invalid input"


class RoomNotFoundError(ValidationError):
    status_code = 404
    default_message = "Chat room not found"


class AuthenticationRequired(ChatError):
    """No valid session for a protected operation."""
    status_code = 401
    default_message = "Please log in first"


class StoreError(ChatError):
    """
    Persistence failure.
    
    The message is always generic; the underlying database error is logged
    where it is caught and never exposed to the client.
    """
    status_code = 500
    default_message = "Something went wrong, please try again"
