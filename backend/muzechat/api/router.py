"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from muzechat.api.routes import auth, rooms, messages, chat

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(rooms.router)
api_router.include_router(messages.router)
api_router.include_router(chat.router)
