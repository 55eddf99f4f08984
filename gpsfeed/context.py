"""GPSContext: all mutable feed state, owned by one event loop.

There is no module-level state in ``gpsfeed``. The frame history, the
representation cache, the subscription registry and the stream framer live
on a context object created by the host and passed to whatever needs them.

All methods must be called from the thread running the owning event loop;
the context does no locking.
"""

import time
from collections.abc import Callable

from gpsfeed.nmea.framer import DEFAULT_CAPACITY, LineFramer
from gpsfeed.nmea.sentence import SentenceDecoder
from gpsfeed.position.cache import PositionCache
from gpsfeed.position.history import DEFAULT_HISTORY_SIZE, FrameHistory
from gpsfeed.subscription.dispatcher import Dispatcher
from gpsfeed.subscription.registry import SubscriptionRegistry

__all__ = ["GPSContext", "monotonic_ms"]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GPSContext:
    """Wire the feed components together.

    Data flows ``framer -> decoder -> history``; the cache and the
    dispatcher read from the history.

    Args:
        history_size: Number of frames retained.
        line_capacity: LineFramer buffer size in bytes.
        max_subscriptions: Registry limit, ``None`` for unbounded.
        clock: Millisecond clock used by ``dispatch``.
    """

    def __init__(
        self,
        history_size: int = DEFAULT_HISTORY_SIZE,
        line_capacity: int = DEFAULT_CAPACITY,
        max_subscriptions: int | None = None,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        self.history = FrameHistory(history_size)
        self.cache = PositionCache(self.history)
        self.registry = SubscriptionRegistry(max_subscriptions)
        self.dispatcher = Dispatcher(self.registry, self.cache, self.history)
        self.decoder = SentenceDecoder(self.history.push)
        self.framer = LineFramer(self.decoder.decode, capacity=line_capacity)
        self._clock = clock

    def dispatch(self) -> int:
        """Run one dispatch pass at the current clock value."""
        return self.dispatcher.tick(self._clock())
