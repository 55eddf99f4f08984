"""Republish an NMEA 0183 GPS feed to periodic subscribers."""

from gpsfeed.connection import ConnectionManager
from gpsfeed.context import GPSContext
from gpsfeed.errors import (
    BadIdError,
    GPSFeedError,
    MissingIdError,
    ResourceExhaustedError,
    SubscriptionFailedError,
    UnknownTypeError,
)
from gpsfeed.nmea import Frame, LineFramer, decode_angle, decode_time_of_day
from gpsfeed.position import FrameHistory, PositionCache, Representation
from gpsfeed.service import PositionService
from gpsfeed.subscription import Dispatcher, SubscriptionRegistry, normalize_period

__all__ = [
    "BadIdError",
    "ConnectionManager",
    "Dispatcher",
    "Frame",
    "FrameHistory",
    "GPSContext",
    "GPSFeedError",
    "LineFramer",
    "MissingIdError",
    "PositionCache",
    "PositionService",
    "Representation",
    "ResourceExhaustedError",
    "SubscriptionFailedError",
    "SubscriptionRegistry",
    "UnknownTypeError",
    "decode_angle",
    "decode_time_of_day",
    "normalize_period",
]
