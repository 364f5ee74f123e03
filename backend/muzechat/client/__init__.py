"""HTTP client and polling loop for the chat API."""
from muzechat.client.api_client import ChatClient, ChatClientError
from muzechat.client.poller import RoomPoller

__all__ = ["ChatClient", "ChatClientError", "RoomPoller"]
