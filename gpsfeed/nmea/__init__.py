"""NMEA 0183 stream framing and GGA/RMC decoding."""

from gpsfeed.nmea.codec import decode_angle, decode_time_of_day
from gpsfeed.nmea.framer import LineFramer
from gpsfeed.nmea.gga import parse_gga
from gpsfeed.nmea.rmc import parse_rmc
from gpsfeed.nmea.sentence import SentenceDecoder, decode_sentence
from gpsfeed.nmea.types import Frame

__all__ = [
    "Frame",
    "LineFramer",
    "SentenceDecoder",
    "decode_angle",
    "decode_sentence",
    "decode_time_of_day",
    "parse_gga",
    "parse_rmc",
]
