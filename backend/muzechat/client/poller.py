"""
Polling retrieval loop for one active room.

The poller is Idle until a room is selected, then re-fetches that room's
full history every interval and replaces its local copy wholesale. Selecting
another room cancels the running poll task before starting the new one, so
at most one poll task exists at a time.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional
import httpx
from muzechat.client.api_client import ChatClient, ChatClientError
from muzechat.core.config import settings

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[int, List[Dict[str, Any]]], None]


class RoomPoller:
    """Keeps ``messages`` in sync with the active room by polling."""
    
    def __init__(
        self,
        client: ChatClient,
        interval: float = None,
        on_update: Optional[UpdateCallback] = None
    ):
        self.client = client
        self.interval = interval if interval is not None else settings.POLL_INTERVAL_SECONDS
        self.on_update = on_update
        self.room_id: Optional[int] = None
        self.messages: List[Dict[str, Any]] = []
        self._task: Optional[asyncio.Task] = None
    
    @property
    def is_polling(self) -> bool:
        return self._task is not None and not self._task.done()
    
    async def select_room(self, room_id: int, initial_messages: List[Dict[str, Any]] = None) -> None:
        """Make ``room_id`` the active room and start polling it."""
        await self._cancel()
        self.room_id = room_id
        self.messages = list(initial_messages) if initial_messages is not None else []
        self._task = asyncio.create_task(self._run(room_id))
    
    async def clear(self) -> None:
        """Stop polling and drop the active room."""
        await self._cancel()
        self.room_id = None
        self.messages = []
    
    async def close(self) -> None:
        await self._cancel()
    
    async def refresh(self) -> bool:
        """Fetch the active room once, outside the timer. Returns True on success."""
        if self.room_id is None:
            return False
        return await self._fetch(self.room_id)
    
    async def send(self, content: str) -> bool:
        """Send to the active room, then refresh immediately if it was accepted."""
        if self.room_id is None:
            return False
        try:
            await self.client.send_message(self.room_id, content)
        except (ChatClientError, httpx.HTTPError) as e:
            logger.warning(f"Send to room {self.room_id} failed: {e}")
            return False
        await self.refresh()
        return True
    
    async def _run(self, room_id: int) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self._fetch(room_id)
    
    async def _fetch(self, room_id: int) -> bool:
        try:
            messages = await self.client.list_messages(room_id)
        except (ChatClientError, httpx.HTTPError) as e:
            logger.warning(f"Polling room {room_id} failed: {e}")
            return False
        # The room may have changed while the request was in flight
        if room_id != self.room_id:
            return False
        self.messages = messages
        if self.on_update:
            try:
                self.on_update(room_id, messages)
            except Exception:
                logger.error(f"Update callback failed for room {room_id}", exc_info=True)
        return True
    
    async def _cancel(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        if task.done():
            if not task.cancelled() and task.exception() is not None:
                logger.error(f"Poll task for room {self.room_id} had stopped", exc_info=task.exception())
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
