"""
In-process fan-out of new messages to room subscribers.

Each open event stream owns one bounded queue registered under its room. A
send publishes to every queue of that room; a full queue drops the event and
the client catches up through its last seen id on reconnect.
"""
import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Iterable, Optional, Set
from muzechat.core.config import settings

logger = logging.getLogger(__name__)


class RoomEventBroker:
    """Per-room publish/subscribe over asyncio queues."""
    
    def __init__(self, queue_size: int = 100):
        self._queue_size = queue_size
        self._subscribers: Dict[int, Set[asyncio.Queue]] = {}
    
    def subscribe(self, room_id: int) -> asyncio.Queue:
        queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers.setdefault(room_id, set()).add(queue)
        return queue
    
    def unsubscribe(self, room_id: int, queue: asyncio.Queue) -> None:
        queues = self._subscribers.get(room_id)
        if not queues:
            return
        queues.discard(queue)
        if not queues:
            del self._subscribers[room_id]
    
    @asynccontextmanager
    async def subscription(self, room_id: int) -> AsyncIterator[asyncio.Queue]:
        queue = self.subscribe(room_id)
        try:
            yield queue
        finally:
            self.unsubscribe(room_id, queue)
    
    def subscriber_count(self, room_id: int) -> int:
        return len(self._subscribers.get(room_id, ()))
    
    def publish(self, room_id: int, event: Dict[str, Any]) -> int:
        """Deliver an event to every subscriber of a room; returns how many got it."""
        delivered = 0
        for queue in list(self._subscribers.get(room_id, ())):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Subscriber queue full for room {room_id}, dropping event {event.get('id')}")
        return delivered


broker = RoomEventBroker(queue_size=settings.STREAM_QUEUE_SIZE)


def format_sse(data: Dict[str, Any], event: str = "message", event_id: Optional[int] = None) -> str:
    """Encode one Server-Sent Events frame."""
    lines = []
    if event_id is not None:
        lines.append(f"id: {event_id}")
    lines.append(f"event: {event}")
    lines.append(f"data: {json.dumps(data)}")
    return "\n".join(lines) + "\n\n"


KEEPALIVE_FRAME = ": keepalive\n\n"


async def room_event_stream(
    room_id: int,
    load_backlog: Callable[[], Iterable[Dict[str, Any]]],
    is_disconnected: Callable[[], Awaitable[bool]],
    event_broker: RoomEventBroker = None,
    keepalive: float = None
) -> AsyncIterator[str]:
    """
    Yield SSE frames for a room until the client goes away.
    
    The subscription is opened before the backlog is read so nothing posted
    in between is lost; events already covered by the backlog are skipped.
    """
    event_broker = event_broker or broker
    keepalive = keepalive if keepalive is not None else settings.STREAM_KEEPALIVE_SECONDS
    
    async with event_broker.subscription(room_id) as queue:
        last_id = 0
        for item in load_backlog():
            last_id = max(last_id, item["id"])
            yield format_sse(item, event_id=item["id"])
        
        while not await is_disconnected():
            try:
                item = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield KEEPALIVE_FRAME
                continue
            if item["id"] <= last_id:
                continue
            last_id = item["id"]
            yield format_sse(item, event_id=item["id"])
