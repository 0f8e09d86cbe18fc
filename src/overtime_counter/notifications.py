from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, Set

from .core.logging import get_logger

logger = get_logger(__name__)

EARNINGS_UPDATE = "earnings-update"
SESSION_COMPLETE = "session-complete"
SESSION_DATA = "session-data"

_subscriber_ids = itertools.count(1)


@dataclass(eq=False)
class Subscriber:
    """One connected client. Messages are queued on the client's own event loop."""

    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue
    id: int = field(default_factory=lambda: next(_subscriber_ids))
    sessions: Set[str] = field(default_factory=set)

    def push(self, event: str, payload: Dict[str, Any]) -> None:
        self.loop.call_soon_threadsafe(self._deliver, {"event": event, "data": payload})

    def _deliver(self, message: Dict[str, Any]) -> None:
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("subscriber_queue_full", subscriber=self.id, event=message["event"])

    async def receive(self) -> Dict[str, Any]:
        return await self.queue.get()


class NotificationHub:
    """Fan-out of per-session events to subscribed clients.

    Delivery is best-effort: a client that is not connected when an event is
    published never sees it.
    """

    def __init__(self, queue_size: int = 256) -> None:
        self.queue_size = queue_size
        self._rooms: Dict[str, Set[Subscriber]] = {}
        self._subscribers: Set[Subscriber] = set()

    def connect(self) -> Subscriber:
        subscriber = Subscriber(loop=asyncio.get_running_loop(), queue=asyncio.Queue(maxsize=self.queue_size))
        self._subscribers.add(subscriber)
        return subscriber

    def join(self, subscriber: Subscriber, session_id: str) -> None:
        self._rooms.setdefault(session_id, set()).add(subscriber)
        subscriber.sessions.add(session_id)

    def leave(self, subscriber: Subscriber, session_id: str) -> None:
        room = self._rooms.get(session_id)
        if room is not None:
            room.discard(subscriber)
            if not room:
                del self._rooms[session_id]
        subscriber.sessions.discard(session_id)

    def disconnect(self, subscriber: Subscriber) -> None:
        for session_id in list(subscriber.sessions):
            self.leave(subscriber, session_id)
        self._subscribers.discard(subscriber)

    def publish(self, session_id: str, event: str, payload: Dict[str, Any]) -> int:
        room = self._rooms.get(session_id)
        if not room:
            return 0
        for subscriber in list(room):
            try:
                subscriber.push(event, payload)
            except RuntimeError:
                # loop already closed
                logger.warning("subscriber_gone", subscriber=subscriber.id, session_id=session_id)
                self.disconnect(subscriber)
        return len(room)

    def subscriber_count(self, session_id: str | None = None) -> int:
        if session_id is None:
            return len(self._subscribers)
        return len(self._rooms.get(session_id, ()))
