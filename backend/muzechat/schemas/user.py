"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema."""
    username: str
    email: str


class UserResponse(UserBase):
    """Schema for user response."""
    id: int
    avatar_url: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """
    Schema for login.
    
    Fields are optional here so that a missing value reaches the service and
    is reported with the same message as a blank one.
    """
    username: Optional[str] = None
    email: Optional[str] = None


class LoginResponse(BaseModel):
    """Schema for login result."""
    success: bool = True
    user: UserResponse


class ActionResult(BaseModel):
    """Schema for operations that only report success."""
    success: bool = True
