"""Output representations of a position.

Subscribers choose how a position is presented: decimal WGS84 degrees with
speed in m/s, or a degrees-minutes-seconds string with speed in km/h, mph
or knots. A representation is the pair (coordinate system, speed unit); its
wire name is what callers pass as ``type``.

    Wire name    Coordinates            Speed
    ---------    -----------            -----
    WGS84        decimal degrees        m/s
    DMS.km/h     D°M'S.sss"H string     km/h
    DMS.mph      D°M'S.sss"H string     mph
    DMS.kn       D°M'S.sss"H string     knots
"""

from enum import Enum

from gpsfeed.errors import UnknownTypeError

__all__ = [
    "CoordinateSystem",
    "Representation",
    "SpeedUnit",
    "format_dms",
]

_METERS_PER_STATUTE_MILE = 1609.344
_METERS_PER_NAUTICAL_MILE = 1852.0
_SECONDS_PER_HOUR = 3600.0
_MILLIARCSECONDS_PER_MINUTE = 60 * 1000
_MILLIARCSECONDS_PER_DEGREE = 60 * _MILLIARCSECONDS_PER_MINUTE


class CoordinateSystem(Enum):
    WGS84 = "wgs84"
    DMS = "dms"


class SpeedUnit(Enum):
    """Speed unit; the value is the conversion factor from m/s."""

    METERS_PER_SECOND = 1.0
    KILOMETERS_PER_HOUR = _SECONDS_PER_HOUR / 1000.0
    MILES_PER_HOUR = _SECONDS_PER_HOUR / _METERS_PER_STATUTE_MILE
    KNOTS = _SECONDS_PER_HOUR / _METERS_PER_NAUTICAL_MILE

    def from_meters_per_second(self, speed: float) -> float:
        return speed * self.value


class Representation(Enum):
    """Closed set of position representations offered to callers."""

    WGS84 = ("WGS84", CoordinateSystem.WGS84, SpeedUnit.METERS_PER_SECOND)
    DMS_KMH = ("DMS.km/h", CoordinateSystem.DMS, SpeedUnit.KILOMETERS_PER_HOUR)
    DMS_MPH = ("DMS.mph", CoordinateSystem.DMS, SpeedUnit.MILES_PER_HOUR)
    DMS_KN = ("DMS.kn", CoordinateSystem.DMS, SpeedUnit.KNOTS)

    def __init__(
        self,
        wire_name: str,
        coordinates: CoordinateSystem,
        speed_unit: SpeedUnit,
    ) -> None:
        self.wire_name = wire_name
        self.coordinates = coordinates
        self.speed_unit = speed_unit

    @classmethod
    def default(cls) -> "Representation":
        return cls.WGS84

    @classmethod
    def from_name(cls, name: str | None) -> "Representation":
        """Look up a representation by wire name.

        Args:
            name: Wire name such as ``"DMS.kn"``; ``None`` selects WGS84.

        Raises:
            UnknownTypeError: If ``name`` is not one of the wire names.
        """
        if name is None:
            return cls.default()
        for representation in cls:
            if representation.wire_name == name:
                return representation
        raise UnknownTypeError(f"unknown representation type: {name!r}")


def format_dms(angle: float, is_latitude: bool) -> str:
    """Format an angle as a degrees-minutes-seconds string.

    Latitudes are signed (negative = South). Longitudes use the eastward
    0..360 convention: values above 180 are West and shown as ``360 - angle``.

    Example:
        >>> format_dms(48.1173, is_latitude=True)
        '48°7\\'2.280"N'
        >>> format_dms(348.48333333333335, is_latitude=False)
        '11°31\\'0.000"W'
    """
    if is_latitude:
        hemisphere = "N" if angle >= 0 else "S"
        angle = abs(angle)
    elif angle <= 180.0:
        hemisphere = "E"
    else:
        hemisphere = "W"
        angle = 360.0 - angle

    # Rounded once in thousandths of an arc second: seconds never print as 60.000
    total = round(angle * _MILLIARCSECONDS_PER_DEGREE)
    degrees, total = divmod(total, _MILLIARCSECONDS_PER_DEGREE)
    minutes, milliarcseconds = divmod(total, _MILLIARCSECONDS_PER_MINUTE)
    seconds = milliarcseconds / 1000.0
    return f"{degrees}°{minutes}'{seconds:.3f}\"{hemisphere}"
