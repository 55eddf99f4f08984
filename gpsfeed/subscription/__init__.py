"""Period-bucketed subscriptions and their dispatch."""

from gpsfeed.subscription.dispatcher import Dispatcher
from gpsfeed.subscription.period import normalize_period
from gpsfeed.subscription.registry import (
    Channel,
    PeriodBucket,
    Subscription,
    SubscriptionRegistry,
)

__all__ = [
    "Channel",
    "Dispatcher",
    "PeriodBucket",
    "Subscription",
    "SubscriptionRegistry",
    "normalize_period",
]
