"""Per-connection notification channel for WebSocket clients."""

import asyncio
from collections.abc import Mapping
from typing import Any

from gpsfeed.service import CHANNEL_NAME

__all__ = ["WebSocketSession"]

_QUEUE_MAX_SIZE = 10


def _enqueue_message(queue: asyncio.Queue[dict[str, Any]], message: dict[str, Any]) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


class WebSocketSession:
    """Channel delivering subscription pushes to one WebSocket client.

    Pushes are queued in a bounded queue drained by the connection's sender
    task. The oldest notification is dropped when the queue is full so a
    slow client never stalls the dispatcher. Once the client is gone the
    session is closed and every later ``push`` reports that nobody listens,
    which ends the subscription.

    Args:
        max_size: Queue capacity in messages.
    """

    def __init__(self, max_size: int = _QUEUE_MAX_SIZE) -> None:
        self.queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=max_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def push(self, subscription_id: int, document: Mapping[str, Any]) -> bool:
        if self._closed:
            return False
        _enqueue_message(
            self.queue,
            {"event": CHANNEL_NAME, "id": subscription_id, "data": dict(document)},
        )
        return True
