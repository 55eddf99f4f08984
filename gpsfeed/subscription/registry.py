"""Subscription registry: subscriptions grouped into period buckets.

Ownership model:
    * The registry holds every Subscription in an id -> Subscription map.
    * Each PeriodBucket holds the ids of its subscriptions, never the
      objects, so removing a subscription is a dictionary delete plus a set
      discard. No cross-linked lists to repair.
    * A Subscription references its bucket, which the bucket does not own
      in return.

Buckets are kept sorted by period. A bucket left without subscriptions is
not removed immediately; ``prune`` drops it on the next dispatch pass.
"""

import bisect
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

from gpsfeed.errors import BadIdError, ResourceExhaustedError
from gpsfeed.position.representation import Representation
from gpsfeed.subscription.period import normalize_period

__all__ = [
    "Channel",
    "PeriodBucket",
    "Subscription",
    "SubscriptionRegistry",
]

log = structlog.get_logger()

# Ids are positive 31-bit integers; allocation wraps back to 1.
_MAX_ID = 2**31 - 1


class Channel(Protocol):
    """Notification channel back to the caller that subscribed."""

    def push(self, subscription_id: int, document: Mapping[str, Any]) -> bool:
        """Deliver ``document``; return False when nobody listens any more."""
        ...


@dataclass(eq=False)
class PeriodBucket:
    """Subscriptions sharing one normalized refresh period.

    Attributes:
        period_ms: Normalized refresh period.
        subscription_ids: Ids of the subscriptions refreshed together.
        last_fired_ms: Clock value of the last refresh, ``None`` until the
            bucket fires for the first time.
    """

    period_ms: int
    subscription_ids: set[int] = field(default_factory=set)
    last_fired_ms: float | None = None

    def is_due(self, now_ms: float) -> bool:
        return self.last_fired_ms is None or now_ms - self.last_fired_ms >= self.period_ms


@dataclass(eq=False)
class Subscription:
    """A live listener registration."""

    id: int
    representation: Representation
    bucket: PeriodBucket
    channel: Channel


class SubscriptionRegistry:
    """Registry of subscriptions indexed by id and grouped by period.

    Args:
        max_subscriptions: Upper bound on live subscriptions; ``None`` means
            unbounded.
    """

    def __init__(self, max_subscriptions: int | None = None) -> None:
        self._max_subscriptions = max_subscriptions
        self._buckets: list[PeriodBucket] = []
        self._subscriptions: dict[int, Subscription] = {}
        self._last_id = 0

    @property
    def buckets(self) -> tuple[PeriodBucket, ...]:
        """Buckets in ascending period order, empty ones included until pruned."""
        return tuple(self._buckets)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __contains__(self, subscription_id: object) -> bool:
        return subscription_id in self._subscriptions

    def __iter__(self) -> Iterator[Subscription]:
        return iter(list(self._subscriptions.values()))

    def get(self, subscription_id: int) -> Subscription | None:
        return self._subscriptions.get(subscription_id)

    def subscriptions_of(self, bucket: PeriodBucket) -> list[Subscription]:
        """Subscriptions of ``bucket`` in id order."""
        return [self._subscriptions[sid] for sid in sorted(bucket.subscription_ids)]

    def _allocate_id(self) -> int:
        candidate = self._last_id
        while True:
            candidate = candidate + 1 if candidate < _MAX_ID else 1
            if candidate not in self._subscriptions:
                self._last_id = candidate
                return candidate

    def _bucket_for(self, period_ms: int) -> PeriodBucket:
        index = bisect.bisect_left(self._buckets, period_ms, key=lambda b: b.period_ms)
        if index < len(self._buckets) and self._buckets[index].period_ms == period_ms:
            return self._buckets[index]
        bucket = PeriodBucket(period_ms=period_ms)
        self._buckets.insert(index, bucket)
        log.debug("period_bucket_created", period_ms=period_ms)
        return bucket

    def subscribe(
        self,
        representation: Representation,
        requested_period_ms: int,
        channel: Channel,
    ) -> Subscription:
        """Register a new subscription.

        Every call creates a fresh subscription with a fresh id, even when an
        identical (representation, period) pair already exists.

        Args:
            representation: Representation pushed to this subscriber.
            requested_period_ms: Requested refresh period; normalized with
                ``normalize_period``.
            channel: Where documents are pushed.

        Returns:
            The new Subscription.

        Raises:
            ResourceExhaustedError: If ``max_subscriptions`` is reached.
                Nothing is registered in that case.
        """
        if (
            self._max_subscriptions is not None
            and len(self._subscriptions) >= self._max_subscriptions
        ):
            raise ResourceExhaustedError(
                f"subscription limit of {self._max_subscriptions} reached"
            )

        bucket = self._bucket_for(normalize_period(requested_period_ms))
        subscription = Subscription(
            id=self._allocate_id(),
            representation=representation,
            bucket=bucket,
            channel=channel,
        )
        self._subscriptions[subscription.id] = subscription
        bucket.subscription_ids.add(subscription.id)
        log.info(
            "subscription_created",
            id=subscription.id,
            type=representation.wire_name,
            period_ms=bucket.period_ms,
        )
        return subscription

    def discard(self, subscription: Subscription) -> None:
        """Remove ``subscription`` from its bucket and from the id index."""
        subscription.bucket.subscription_ids.discard(subscription.id)
        self._subscriptions.pop(subscription.id, None)
        log.info("subscription_removed", id=subscription.id)

    def unsubscribe(self, subscription_id: int) -> Subscription:
        """Remove the subscription with ``subscription_id``.

        Its bucket is kept until the next ``prune``.

        Raises:
            BadIdError: If no such subscription exists.
        """
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None:
            raise BadIdError(f"no subscription with id {subscription_id}")
        self.discard(subscription)
        return subscription

    def prune(self) -> int:
        """Drop buckets without subscriptions; return how many were dropped."""
        kept = [bucket for bucket in self._buckets if bucket.subscription_ids]
        dropped = len(self._buckets) - len(kept)
        if dropped:
            self._buckets = kept
            log.debug("period_buckets_pruned", count=dropped)
        return dropped
