"""Frame history and Position Document caching."""

from gpsfeed.position.cache import PositionCache, PositionDocument
from gpsfeed.position.history import FrameHistory
from gpsfeed.position.representation import Representation, format_dms

__all__ = [
    "FrameHistory",
    "PositionCache",
    "PositionDocument",
    "Representation",
    "format_dms",
]
