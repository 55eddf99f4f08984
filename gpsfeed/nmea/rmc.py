"""RMC sentence parser.

RMC (Recommended Minimum Specific GNSS Data) supplies time, position, ground
speed and track. It carries no altitude.

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W,A*6A
           |      | |        | |         | |     |     |      |     | |
           |      | |        | |         | |     |     |      |     | +-- Mode (NMEA 2.3+)
           |      | |        | |         | |     |     |      +-----+-- Magnetic variation
           |      | |        | |         | |     |     +-- Date (DDMMYY)
           |      | |        | |         | |     +-- Track made good (degrees true)
           |      | |        | |         | +-- Ground speed (knots)
           |      | |        | +---------+-- Longitude + E/W
           |      | +--------+-- Latitude + N/S
           |      +-- Status (A = active, V = void)
           +-- UTC time (HHMMSS[.fff])

Only status ``A`` is accepted. The date is accepted but not decoded.
"""

from gpsfeed.nmea.fields import (
    float_field,
    latitude_field,
    longitude_field,
    split_fields,
    time_field,
)
from gpsfeed.nmea.types import Frame

__all__ = ["parse_rmc"]

# Fields following the "RMC," tag
_FIELD_COUNT = 12

_TIME = 0
_STATUS = 1
_LATITUDE, _LATITUDE_HEMISPHERE = 2, 3
_LONGITUDE, _LONGITUDE_HEMISPHERE = 4, 5
_SPEED_KNOTS = 6
_TRACK = 7

# 1 knot = 1852 m / 3600 s
_KNOTS_TO_METERS_PER_SECOND = 1852.0 / 3600.0


def parse_rmc(payload: str) -> Frame | None:
    """Parse the payload of an RMC sentence into a Frame.

    Args:
        payload: Everything after the ``"RMC,"`` tag, checksum removed.

    Returns:
        A Frame with time, latitude, longitude, speed and track set (speed
        and track are ``None`` when their fields are empty, e.g. while
        stationary), or ``None`` if:
        - The payload does not have exactly 12 fields
        - Status is not ``A``
        - Any time, coordinate or hemisphere field is empty or malformed
        - A speed or track field is malformed

    Example:
        >>> frame = parse_rmc("123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W,A")
        >>> frame.speed_meters_per_second
        11.523555555555555
        >>> parse_rmc("123519,V,,,,,,,230394,,,N") is None
        True
    """
    fields = split_fields(payload, _FIELD_COUNT)
    if fields is None or fields[_STATUS] != "A":
        return None

    try:
        speed_knots = float_field(fields[_SPEED_KNOTS])
        return Frame(
            time_of_day_millis=time_field(fields[_TIME]),
            latitude_degrees=latitude_field(
                fields[_LATITUDE], fields[_LATITUDE_HEMISPHERE]
            ),
            longitude_degrees=longitude_field(
                fields[_LONGITUDE], fields[_LONGITUDE_HEMISPHERE]
            ),
            speed_meters_per_second=(
                speed_knots * _KNOTS_TO_METERS_PER_SECOND
                if speed_knots is not None
                else None
            ),
            track_degrees=float_field(fields[_TRACK]),
        )
    except ValueError:
        return None
