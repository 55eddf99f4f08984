"""Decoded GPS frame type.

Design Decisions:
    1. Optional fields (``X | None``): GGA and RMC each carry only part of a
       fix. GGA has no speed or track, RMC has no altitude. ``None`` marks a
       value the source sentence did not supply, so consumers never mistake
       "not reported" for a measured zero.

    2. Frozen dataclass: a Frame is stored in the history ring and read by the
       representation cache long after it was decoded. It must never change
       after construction.

    3. Eastward longitude: longitudes are normalized to 0..360 degrees east,
       so western longitudes are stored as ``360 - w``. Presentation layers
       convert back to a hemisphere letter.
"""

from dataclasses import dataclass

__all__ = ["Frame"]


@dataclass(frozen=True)
class Frame:
    """One decoded GPS fix.

    Attributes:
        time_of_day_millis: UTC time of the fix in milliseconds since
            midnight. None if not supplied.

        latitude_degrees: Latitude in decimal degrees, positive=North.
            Range: -90.0 to +90.0. None if not supplied.

        longitude_degrees: Longitude in decimal degrees, measured eastward.
            Range: 0.0 to 360.0. None if not supplied.

        altitude_meters: Altitude above mean sea level in meters. Supplied
            by GGA only.

        speed_meters_per_second: Ground speed in m/s, converted from the
            knots reported by RMC. Supplied by RMC only.

        track_degrees: Track made good relative to true north in degrees.
            Supplied by RMC only.

    Example:
        >>> frame = decode_sentence("GPRMC,123519,A,4807.038,N,01131.000,W,022.4,084.4,230394,003.1,W,A")
        >>> frame.longitude_degrees
        348.48333333333335
        >>> frame.altitude_meters is None
        True
    """

    time_of_day_millis: int | None = None
    latitude_degrees: float | None = None
    longitude_degrees: float | None = None
    altitude_meters: float | None = None
    speed_meters_per_second: float | None = None
    track_degrees: float | None = None
