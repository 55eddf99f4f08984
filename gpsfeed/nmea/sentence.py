"""Sentence dispatch: route a framed NMEA sentence to its parser.

A framed sentence is the text between the leading ``$`` and the checksum
delimiter, e.g. ``"GPGGA,123519,4807.038,N,..."``. The first two characters
are the talker id, which is not checked; characters 3-5 select the sentence
kind. Only GGA and RMC are recognized, everything else is ignored.
"""

from collections.abc import Callable

import structlog

from gpsfeed.nmea.gga import parse_gga
from gpsfeed.nmea.rmc import parse_rmc
from gpsfeed.nmea.types import Frame

__all__ = ["SentenceDecoder", "decode_sentence"]

log = structlog.get_logger()

_TAG_END = 6

_PARSERS: dict[str, Callable[[str], Frame | None]] = {
    "GGA,": parse_gga,
    "RMC,": parse_rmc,
}


def decode_sentence(sentence: str) -> Frame | None:
    """Decode one framed sentence into a Frame.

    Args:
        sentence: Sentence text without ``$`` and without checksum.

    Returns:
        The decoded Frame, or ``None`` for unrecognized sentence kinds and
        for GGA/RMC sentences that fail validation. Decoding is all or
        nothing: a partly valid sentence produces no Frame.
    """
    parser = _PARSERS.get(sentence[2:_TAG_END])
    if parser is None:
        return None
    return parser(sentence[_TAG_END:])


class SentenceDecoder:
    """Decode framed sentences and hand every successful Frame to a sink.

    Args:
        on_frame: Receives each decoded Frame, normally ``FrameHistory.push``.
    """

    def __init__(self, on_frame: Callable[[Frame], None]) -> None:
        self._on_frame = on_frame

    def decode(self, sentence: str) -> Frame | None:
        """Decode ``sentence``; on success pass the Frame to ``on_frame``."""
        frame = decode_sentence(sentence)
        if frame is None:
            log.debug("sentence_ignored", sentence=sentence)
            return None
        self._on_frame(frame)
        log.debug(
            "frame_decoded",
            time=frame.time_of_day_millis,
            latitude=frame.latitude_degrees,
            longitude=frame.longitude_degrees,
            altitude=frame.altitude_meters,
            speed=frame.speed_meters_per_second,
            track=frame.track_degrees,
        )
        return frame
