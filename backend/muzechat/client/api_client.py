"""
Async HTTP client for the chat API.

The session cookie set by login is kept in the httpx cookie jar, so every
later call on the same client is authenticated.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx

logger = logging.getLogger(__name__)


class ChatClientError(Exception):
    """The API answered with {"error": ...} or a non-JSON failure."""
    
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ChatClient:
    """Thin wrapper over the /api routes."""
    
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport = None
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            timeout=timeout,
            transport=transport
        )
    
    async def __aenter__(self) -> "ChatClient":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
    
    async def aclose(self) -> None:
        await self._client.aclose()
    
    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        try:
            data = response.json()
        except ValueError:
            data = None
        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ChatClientError(message or f"HTTP {response.status_code}", response.status_code)
        return data
    
    async def login(self, username: str, email: str) -> Dict[str, Any]:
        data = await self._request("POST", "/auth/login", json={"username": username, "email": email})
        return data["user"]
    
    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")
    
    async def current_user(self) -> Optional[Dict[str, Any]]:
        return await self._request("GET", "/auth/me")
    
    async def list_rooms(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/rooms")
    
    async def create_room(self, name: str, description: str = None) -> Dict[str, Any]:
        data = await self._request("POST", "/rooms", json={"name": name, "description": description})
        return data["room"]
    
    async def send_message(self, room_id: int, content: str) -> Dict[str, Any]:
        data = await self._request("POST", "/messages", json={"content": content, "room_id": room_id})
        return data["message"]
    
    async def list_messages(self, room_id: int) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/rooms/{room_id}/messages")
