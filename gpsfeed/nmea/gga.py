"""GGA sentence parser.

GGA (Global Positioning System Fix Data) supplies time, position, fix
quality and altitude. It carries no speed or track.

GGA Sentence Format:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
           |      |        | |         | | |  |   |     | |    | | |
           |      |        | |         | | |  |   |     | |    | | +-- DGPS station id
           |      |        | |         | | |  |   |     | |    | +-- DGPS age
           |      |        | |         | | |  |   |     | +----+-- Geoid height
           |      |        | |         | | |  |   +-----+-- Altitude above MSL (M=meters)
           |      |        | |         | | |  +-- HDOP
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (0 = no fix)
           |      |        | +---------+-- Longitude + E/W
           |      +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS[.fff])

A sentence with fix quality 0 is rejected as a whole: without a fix the
position fields are meaningless.
"""

from gpsfeed.nmea.fields import (
    altitude_field,
    latitude_field,
    longitude_field,
    split_fields,
    time_field,
)
from gpsfeed.nmea.types import Frame

__all__ = ["parse_gga"]

# Fields following the "GGA," tag
_FIELD_COUNT = 14

_TIME = 0
_LATITUDE, _LATITUDE_HEMISPHERE = 1, 2
_LONGITUDE, _LONGITUDE_HEMISPHERE = 3, 4
_FIX_QUALITY = 5
_ALTITUDE, _ALTITUDE_UNIT = 8, 9


def _has_fix(value: str) -> bool:
    try:
        return int(value) != 0
    except ValueError:
        return False


def parse_gga(payload: str) -> Frame | None:
    """Parse the payload of a GGA sentence into a Frame.

    Args:
        payload: Everything after the ``"GGA,"`` tag, checksum removed.

    Returns:
        A Frame with time, latitude, longitude and altitude set, or ``None``
        if:
        - The payload does not have exactly 14 fields
        - Fix quality is empty, non-numeric or 0
        - Any time, coordinate, hemisphere or altitude field is empty or
          malformed

    Example:
        >>> frame = parse_gga("123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,")
        >>> frame.altitude_meters
        545.4
        >>> parse_gga("123519,,,,,0,00,,,,,,,") is None
        True
    """
    fields = split_fields(payload, _FIELD_COUNT)
    if fields is None or not _has_fix(fields[_FIX_QUALITY]):
        return None

    try:
        return Frame(
            time_of_day_millis=time_field(fields[_TIME]),
            latitude_degrees=latitude_field(
                fields[_LATITUDE], fields[_LATITUDE_HEMISPHERE]
            ),
            longitude_degrees=longitude_field(
                fields[_LONGITUDE], fields[_LONGITUDE_HEMISPHERE]
            ),
            altitude_meters=altitude_field(fields[_ALTITUDE], fields[_ALTITUDE_UNIT]),
        )
    except ValueError:
        return None
