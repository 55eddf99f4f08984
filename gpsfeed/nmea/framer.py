"""LineFramer: reassemble NMEA sentences from raw socket bytes.

The upstream stream is a sequence of ``\\r\\n``-terminated ASCII lines that
arrive in arbitrary chunks. The framer buffers bytes until a ``\\n`` is
seen and then decides whether the completed line is a candidate sentence:

    * it starts with ``$``
    * it ends with ``\\r`` before the ``\\n``
    * no overflow happened since the previous ``\\n``

A candidate is stripped of its ``*HH`` checksum suffix (when the ``*`` sits
four bytes before the line end) or of the trailing ``\\r``, and the text
after ``$`` is handed to the sentence callback.

Overflow handling:
    The buffer holds ``capacity`` bytes (160 by default, a typical NMEA
    sentence with margin). When it fills without a ``\\n`` its contents are
    discarded and an overflow flag is raised. The next completed line is
    known to be truncated and is dropped; the flag is cleared at that
    ``\\n``.

Note:
    The checksum digits are discarded without verification. Sentences with a
    corrupted checksum are decoded like any other.
"""

import socket
from collections.abc import Callable

import structlog

__all__ = ["DEFAULT_CAPACITY", "LineFramer"]

log = structlog.get_logger()

DEFAULT_CAPACITY = 160

_CHECKSUM_SUFFIX_LENGTH = 4  # "*HH\r"


class LineFramer:
    """Stateful splitter turning a byte stream into framed NMEA sentences.

    Args:
        on_sentence: Called with each candidate sentence (text after ``$``,
            without checksum and line terminator).
        capacity: Size of the line buffer in bytes.
    """

    def __init__(
        self,
        on_sentence: Callable[[str], object],
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._on_sentence = on_sentence
        self._capacity = capacity
        self._buffer = bytearray()
        self._overflow = False

    @property
    def overflow(self) -> bool:
        """True while the line being accumulated is known to be truncated."""
        return self._overflow

    def reset(self) -> None:
        """Forget any partial line, e.g. after reconnecting."""
        self._buffer.clear()
        self._overflow = False

    def _accumulate(self, chunk: bytes) -> None:
        self._buffer += chunk
        while len(self._buffer) >= self._capacity:
            del self._buffer[: self._capacity]
            if not self._overflow:
                log.warning("nmea_line_overflow", capacity=self._capacity)
            self._overflow = True

    def _complete_line(self) -> None:
        line = bytes(self._buffer)
        self._buffer.clear()
        truncated = self._overflow
        self._overflow = False

        if truncated or not line.startswith(b"$") or not line.endswith(b"\r"):
            return

        if len(line) >= _CHECKSUM_SUFFIX_LENGTH and line[-_CHECKSUM_SUFFIX_LENGTH] == ord("*"):
            line = line[:-_CHECKSUM_SUFFIX_LENGTH]
        else:
            line = line[:-1]
        self._on_sentence(line[1:].decode("ascii", errors="replace"))

    def feed(self, data: bytes) -> None:
        """Consume a chunk of stream bytes, emitting every completed sentence."""
        start = 0
        while True:
            newline = data.find(b"\n", start)
            if newline < 0:
                self._accumulate(data[start:])
                return
            self._accumulate(data[start:newline])
            self._complete_line()
            start = newline + 1

    def read_from(self, sock: socket.socket) -> int:
        """Drain every byte currently readable on a non-blocking socket.

        Args:
            sock: Connected socket in non-blocking mode.

        Returns:
            Number of bytes consumed during this call.

        Raises:
            EOFError: If the peer closed the stream.
            OSError: On any read failure other than "would block" or an
                interrupted call.
        """
        total = 0
        while True:
            try:
                data = sock.recv(self._capacity)
            except BlockingIOError:
                return total
            except InterruptedError:
                continue
            if not data:
                raise EOFError("NMEA stream ended.")
            total += len(data)
            self.feed(data)
