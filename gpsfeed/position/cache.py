"""PositionCache: lazily built, memoized Position Documents.

A Position Document is the dictionary handed to callers for one
representation:

    {"type": "DMS.kn", "time": 45319000, "latitude": "48°7'2.280\\"N",
     "longitude": "11°31'0.000\\"E", "speed": 22.4, "track": 84.4}

Keys whose source value is absent from the newest Frame are omitted, never
defaulted. Documents are built on first read and reused until a new Frame is
stored, at which point every cached document and every cached part is
dropped at once.

Parts shared between representations are computed once per Frame:

    * time, altitude and track are common to all four representations
    * latitude/longitude are shared per coordinate system (the three DMS
      representations use the same strings)
    * speed is shared per unit
"""

from collections.abc import Callable, Hashable
from typing import Any

import structlog

from gpsfeed.nmea.types import Frame
from gpsfeed.position.history import FrameHistory
from gpsfeed.position.representation import (
    CoordinateSystem,
    Representation,
    SpeedUnit,
    format_dms,
)

__all__ = ["PositionCache", "PositionDocument"]

log = structlog.get_logger()

PositionDocument = dict[str, Any]


class PositionCache:
    """Per-representation cache of documents for the newest frame.

    Returned documents are shared between callers and must be treated as
    read-only.

    Args:
        history: Frame store whose newest frame is presented.

    Example:
        >>> cache = PositionCache(history)
        >>> cache.document(Representation.WGS84)
        {'type': 'WGS84', 'time': 45319000, 'latitude': 48.1173, ...}
    """

    def __init__(self, history: FrameHistory) -> None:
        self._history = history
        self._generation = history.generation
        self._documents: dict[Representation, PositionDocument] = {}
        self._parts: dict[Hashable, Any] = {}

    @property
    def stale(self) -> bool:
        """True when a frame was stored after the cache was last refreshed."""
        return self._generation != self._history.generation

    def invalidate(self) -> None:
        """Drop every cached document and part."""
        self._documents.clear()
        self._parts.clear()

    def document(self, representation: Representation) -> PositionDocument:
        """Return the Position Document of the newest frame in ``representation``."""
        if self.stale:
            self.invalidate()
            self._generation = self._history.generation

        document = self._documents.get(representation)
        if document is None:
            document = self._build(representation, self._history.latest)
            self._documents[representation] = document
        return document

    def _part(self, key: Hashable, build: Callable[[], Any]) -> Any:
        if key not in self._parts:
            self._parts[key] = build()
        return self._parts[key]

    def _build(
        self, representation: Representation, frame: Frame | None
    ) -> PositionDocument:
        log.debug("building_position", type=representation.wire_name)
        document: PositionDocument = {"type": representation.wire_name}
        if frame is None:
            return document

        coordinates = representation.coordinates
        unit = representation.speed_unit
        parts = {
            "time": self._part("time", lambda: frame.time_of_day_millis),
            "altitude": self._part("altitude", lambda: frame.altitude_meters),
            "track": self._part("track", lambda: frame.track_degrees),
            "latitude": self._part(
                ("latitude", coordinates),
                lambda: _coordinate(frame.latitude_degrees, coordinates, True),
            ),
            "longitude": self._part(
                ("longitude", coordinates),
                lambda: _coordinate(frame.longitude_degrees, coordinates, False),
            ),
            "speed": self._part(
                ("speed", unit),
                lambda: _speed(frame.speed_meters_per_second, unit),
            ),
        }
        document.update((key, value) for key, value in parts.items() if value is not None)
        return document


def _coordinate(
    angle: float | None, coordinates: CoordinateSystem, is_latitude: bool
) -> float | str | None:
    if angle is None:
        return None
    if coordinates is CoordinateSystem.DMS:
        return format_dms(angle, is_latitude)
    return angle


def _speed(speed: float | None, unit: SpeedUnit) -> float | None:
    if speed is None:
        return None
    return unit.from_meters_per_second(speed)
