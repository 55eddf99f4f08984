"""NMEA field tokenizing and per-field decoding.

Sentence payloads are comma-separated and each sentence kind has a fixed
number of fields. ``split_fields`` enforces that arity so the sentence
parsers can index fields without bounds checks.

The ``*_field`` helpers decode a single field (or a value/hemisphere pair).
Optional decimal fields (speed, track) may be empty, meaning "not
supplied", and yield ``None``. Coordinates, their hemisphere indicators,
the altitude and its unit are mandatory. Any field that violates its
grammar raises ``ValueError`` so the caller can reject the whole sentence.
"""

import re

from gpsfeed.nmea.codec import decode_angle, decode_time_of_day

__all__ = [
    "altitude_field",
    "float_field",
    "latitude_field",
    "longitude_field",
    "split_fields",
    "time_field",
]

_FULL_CIRCLE_DEGREES = 360.0
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def split_fields(text: str, count: int) -> list[str] | None:
    """Split a sentence payload on commas, requiring exactly ``count`` fields.

    Args:
        text: Payload following the sentence tag (e.g. everything after
            ``"GPGGA,"``), without the checksum suffix.
        count: Number of fields the sentence grammar defines.

    Returns:
        The list of field strings, or ``None`` on an arity mismatch.

    Example:
        >>> split_fields("a,,c", 3)
        ['a', '', 'c']
        >>> split_fields("a,b", 3) is None
        True
    """
    fields = text.split(",")
    if len(fields) != count:
        return None
    return fields


def float_field(value: str) -> float | None:
    """Decode a plain decimal field such as speed or track.

    Only ``[+-]digits[.digits]`` is accepted; spellings Python's ``float``
    also takes (``nan``, ``inf``, ``1_0``, padded text) are grammar errors.
    """
    if not value:
        return None
    if _DECIMAL.fullmatch(value) is None:
        raise ValueError(f"invalid decimal field: {value!r}")
    return float(value)


def time_field(value: str) -> int:
    """Decode a mandatory ``HHMMSS[.fff]`` field into milliseconds."""
    milliseconds = decode_time_of_day(value)
    if milliseconds is None:
        raise ValueError(f"invalid time of day: {value!r}")
    return milliseconds


def _angle_field(value: str, hemisphere: str, allowed: tuple[str, str]) -> float:
    if hemisphere not in allowed:
        raise ValueError(f"invalid hemisphere: {hemisphere!r}")
    angle = decode_angle(value)
    if angle is None:
        raise ValueError(f"invalid angle: {value!r}")
    return angle


def latitude_field(value: str, hemisphere: str) -> float:
    """Decode a latitude and its ``N``/``S`` indicator to signed degrees.

    South is negative. The indicator is mandatory, so an empty pair is
    rejected like any other malformed latitude.
    """
    angle = _angle_field(value, hemisphere, ("N", "S"))
    if hemisphere == "S":
        return -angle
    return angle


def longitude_field(value: str, hemisphere: str) -> float:
    """Decode a longitude and its ``E``/``W`` indicator to eastward degrees.

    Longitudes are kept in the 0..360 eastward convention: a western
    longitude ``w`` is stored as ``360 - w``.
    """
    angle = _angle_field(value, hemisphere, ("E", "W"))
    if hemisphere == "W":
        return _FULL_CIRCLE_DEGREES - angle
    return angle


def altitude_field(value: str, unit: str) -> float:
    """Decode an altitude whose unit field must be ``M`` (meters)."""
    if unit != "M":
        raise ValueError(f"invalid altitude unit: {unit!r}")
    altitude = float_field(value)
    if altitude is None:
        raise ValueError("altitude unit without a value")
    return altitude
