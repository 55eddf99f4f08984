"""Fixed-format NMEA numeric field decoding.

NMEA 0183 encodes time of day and coordinates as plain digit runs whose
meaning depends on their position rather than on separators:

    Time of day:   HHMMSS[.fff[f]]    e.g. "123519.00"
    Latitude:      DDMM.MMMM          e.g. "4807.038"   (48 deg 07.038 min)
    Longitude:     DDDMM.MMMM         e.g. "01131.000"  (11 deg 31.000 min)

Both decoders are pure functions returning ``None`` for any input that does
not follow the grammar; they never raise on bad input. The hemisphere letter
that accompanies a coordinate is not handled here: ``decode_angle`` always
returns the unsigned magnitude and the caller applies the sign.
"""

__all__ = ["decode_angle", "decode_time_of_day"]

_DIGITS = frozenset("0123456789")

# The two digits immediately before the decimal point are minutes; at most
# three whole-degree digits may precede them (DDDMM).
_MAX_INTEGER_DIGITS = 5

_MILLISECONDS_PER_SECOND = 1000
_MAX_FRACTION_DIGITS = 4


def _is_digits(text: str) -> bool:
    return all(character in _DIGITS for character in text)


def _valid_clock(text: str) -> bool:
    """Check the six HHMMSS digits against their allowed ranges."""
    hour_tens, hour_units, minute_tens, minute_units, second_tens, second_units = text
    return (
        "0" <= hour_tens <= "2"
        and "0" <= hour_units <= ("3" if hour_tens == "2" else "9")
        and "0" <= minute_tens <= "5"
        and "0" <= minute_units <= "9"
        and "0" <= second_tens <= "5"
        and "0" <= second_units <= "9"
    )


def _fraction_to_milliseconds(fraction: str) -> int | None:
    """Convert the digits after the seconds' decimal point to milliseconds.

    Up to three digits are taken as-is; a fourth digit rounds the last
    retained one half-up. More than four digits is a grammar violation.
    """
    if len(fraction) > _MAX_FRACTION_DIGITS or not _is_digits(fraction):
        return None
    milliseconds = int(fraction[:3].ljust(3, "0"))
    if len(fraction) == _MAX_FRACTION_DIGITS and fraction[3] >= "5":
        milliseconds += 1
    return milliseconds


def decode_time_of_day(text: str) -> int | None:
    """Decode an NMEA ``HHMMSS[.fff]`` time into milliseconds since midnight.

    Args:
        text: Time field from a GGA or RMC sentence.

    Returns:
        Milliseconds since midnight, or ``None`` if any digit is out of range
        (hour above 23, minute or second above 59) or an unexpected character
        follows the seconds.

    Example:
        >>> decode_time_of_day("235959")
        86399000
        >>> decode_time_of_day("123519.25")
        45319250
        >>> decode_time_of_day("246000") is None
        True
    """
    clock = text[:6]
    if len(clock) != 6 or not _valid_clock(clock):
        return None

    hours, minutes, seconds = int(clock[0:2]), int(clock[2:4]), int(clock[4:6])
    milliseconds = ((hours * 60 + minutes) * 60 + seconds) * _MILLISECONDS_PER_SECOND

    rest = text[6:]
    if not rest:
        return milliseconds
    if rest[0] != ".":
        return None

    fraction = _fraction_to_milliseconds(rest[1:])
    if fraction is None:
        return None
    return milliseconds + fraction


def decode_angle(text: str) -> float | None:
    """Decode an NMEA ``[D]DDMM.MMMM`` angle into unsigned decimal degrees.

    The string is split at the decimal point: the two digits just before it
    and everything after it are minutes, anything further left is whole
    degrees. The result is ``degrees + minutes / 60``.

    Args:
        text: Latitude or longitude field, without its hemisphere letter.

    Returns:
        Unsigned decimal degrees, or ``None`` if a non-digit appears or more
        than three degree digits precede the minutes.

    Example:
        >>> decode_angle("4807.038")   # 48 deg 07.038 min
        48.1173
        >>> decode_angle("01131.000")  # 11 deg 31.000 min
        11.516666666666667
    """
    dot = text.find(".")
    if dot < 0:
        dot = len(text)
    if dot > _MAX_INTEGER_DIGITS:
        return None

    minutes_start = max(dot - 2, 0)
    whole_degrees = text[:minutes_start]
    whole_minutes = text[minutes_start:dot]
    fraction = text[dot + 1 :]

    if not (_is_digits(whole_degrees) and _is_digits(whole_minutes) and _is_digits(fraction)):
        return None
    if not whole_minutes and not fraction:
        return None

    degrees = int(whole_degrees) if whole_degrees else 0
    minutes = float(text[minutes_start:])
    return degrees + minutes / 60.0
