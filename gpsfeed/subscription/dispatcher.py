"""Dispatcher: push cached documents to subscribers whose period elapsed."""

import structlog

from gpsfeed.position.cache import PositionCache
from gpsfeed.position.history import FrameHistory
from gpsfeed.subscription.registry import SubscriptionRegistry

__all__ = ["Dispatcher"]

log = structlog.get_logger()


class Dispatcher:
    """Drive period buckets from an external clock.

    Each ``tick`` visits the buckets in period order. A bucket is due when
    at least its period elapsed since it last fired; a due bucket pushes the
    current document of each subscription's representation to that
    subscription's channel. A channel reporting that nobody listens any more
    ends its subscription. Buckets left empty are dropped at the end of the
    pass.

    A tick does nothing while no frame was stored since the last pass that
    pushed, so unchanged data is never sent twice.

    Args:
        registry: Subscriptions to serve.
        cache: Source of Position Documents.
        history: Frame store, consulted for its generation counter.
    """

    def __init__(
        self,
        registry: SubscriptionRegistry,
        cache: PositionCache,
        history: FrameHistory,
    ) -> None:
        self._registry = registry
        self._cache = cache
        self._history = history
        self._delivered_generation = history.generation

    @property
    def pending(self) -> bool:
        """True when frames arrived that no pass has pushed yet."""
        return self._history.generation != self._delivered_generation

    def tick(self, now_ms: float) -> int:
        """Run one dispatch pass.

        Args:
            now_ms: Current clock value in milliseconds. Only differences
                between successive values matter.

        Returns:
            Number of documents delivered.
        """
        if not self.pending:
            self._registry.prune()
            return 0

        generation = self._history.generation
        delivered = 0
        fired = False
        for bucket in self._registry.buckets:
            if not bucket.subscription_ids or not bucket.is_due(now_ms):
                continue
            bucket.last_fired_ms = now_ms
            fired = True
            for subscription in self._registry.subscriptions_of(bucket):
                document = self._cache.document(subscription.representation)
                if subscription.channel.push(subscription.id, document):
                    log.debug("position_pushed", id=subscription.id, period_ms=bucket.period_ms)
                    delivered += 1
                else:
                    log.info("subscription_listener_gone", id=subscription.id)
                    self._registry.discard(subscription)

        if fired:
            self._delivered_generation = generation
        self._registry.prune()
        return delivered
