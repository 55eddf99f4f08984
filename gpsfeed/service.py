"""PositionService: the get / subscribe / unsubscribe query surface.

Arguments arrive as a remote caller sent them (type names as strings,
periods and ids as numbers or numeric strings) and are validated here, so
any transport can expose the service with a thin adapter. Failures raise a
``GPSFeedError`` subclass whose ``code`` is the wire-visible error name.
"""

from typing import Any

from gpsfeed.context import GPSContext
from gpsfeed.errors import BadIdError, MissingIdError, SubscriptionFailedError
from gpsfeed.position.cache import PositionDocument
from gpsfeed.position.representation import Representation
from gpsfeed.subscription.registry import Channel

__all__ = ["CHANNEL_NAME", "DEFAULT_PERIOD_MS", "PositionService"]

CHANNEL_NAME = "gps"
DEFAULT_PERIOD_MS = 2000


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"not an integer: {value!r}")


class PositionService:
    """Caller-facing operations over a GPSContext.

    Args:
        context: Feed state to query.
        default_period_ms: Period used when ``subscribe`` gets none.
    """

    def __init__(
        self, context: GPSContext, default_period_ms: int = DEFAULT_PERIOD_MS
    ) -> None:
        self._context = context
        self._default_period_ms = default_period_ms

    def get(self, type_name: str | None = None) -> PositionDocument:
        """Return the current Position Document.

        Raises:
            UnknownTypeError: If ``type_name`` is not a representation name.
        """
        return self._context.cache.document(Representation.from_name(type_name))

    def subscribe(
        self,
        type_name: str | None,
        period: Any,
        channel: Channel,
    ) -> dict[str, Any]:
        """Register ``channel`` for periodic position pushes.

        Args:
            type_name: Representation name; ``None`` selects WGS84.
            period: Requested period in ms; ``None`` selects the default.
            channel: Receives the pushes.

        Returns:
            ``{"name": "gps", "id": <subscription id>}``.

        Raises:
            UnknownTypeError: If ``type_name`` is unknown.
            SubscriptionFailedError: If ``period`` is not an integer.
            ResourceExhaustedError: If the subscription limit is reached.
        """
        representation = Representation.from_name(type_name)
        if period is None:
            period_ms = self._default_period_ms
        else:
            try:
                period_ms = _parse_int(period)
            except ValueError as e:
                raise SubscriptionFailedError(f"invalid period: {period!r}") from e

        subscription = self._context.registry.subscribe(representation, period_ms, channel)
        return {"name": CHANNEL_NAME, "id": subscription.id}

    def unsubscribe(self, subscription_id: Any, channel: Channel | None = None) -> None:
        """Cancel a subscription; it receives no push from the next pass on.

        Args:
            subscription_id: Id returned by ``subscribe``.
            channel: When given, the subscription must belong to it.

        Raises:
            MissingIdError: If ``subscription_id`` is ``None``.
            BadIdError: If it is not an integer, not registered, or owned by
                another channel.
        """
        if subscription_id is None:
            raise MissingIdError("missing subscription id")
        try:
            parsed = _parse_int(subscription_id)
        except ValueError as e:
            raise BadIdError(f"invalid subscription id: {subscription_id!r}") from e

        registry = self._context.registry
        subscription = registry.get(parsed)
        if subscription is None or (channel is not None and subscription.channel is not channel):
            raise BadIdError(f"no subscription with id {parsed}")
        registry.discard(subscription)
