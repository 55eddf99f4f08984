"""Fixed-capacity ring of the most recently decoded frames."""

from collections.abc import Iterator

from gpsfeed.nmea.types import Frame

__all__ = ["DEFAULT_HISTORY_SIZE", "FrameHistory"]

DEFAULT_HISTORY_SIZE = 10


class FrameHistory:
    """Circular history of decoded frames.

    New frames are written one slot *below* the current cursor (modulo the
    ring size), so the cursor always designates the newest frame and the slot
    it moves into holds the oldest one, which is overwritten.

    ``generation`` counts every push. Readers compare it with the value they
    last saw to know whether new data arrived; it never decreases.

    Args:
        size: Number of frames retained.

    Example:
        >>> history = FrameHistory()
        >>> history.latest is None
        True
        >>> history.push(Frame(altitude_meters=12.0))
        >>> history.latest.altitude_meters
        12.0
    """

    def __init__(self, size: int = DEFAULT_HISTORY_SIZE) -> None:
        if size < 1:
            raise ValueError("history size must be positive")
        self._slots: list[Frame | None] = [None] * size
        self._cursor = 0
        self._generation = 0

    @property
    def size(self) -> int:
        return len(self._slots)

    @property
    def generation(self) -> int:
        """Number of frames pushed since creation."""
        return self._generation

    @property
    def latest(self) -> Frame | None:
        """Newest frame, or ``None`` before the first successful decode."""
        return self._slots[self._cursor]

    def push(self, frame: Frame) -> None:
        """Store ``frame`` as the newest entry, evicting the oldest."""
        self._cursor = (self._cursor or len(self._slots)) - 1
        self._slots[self._cursor] = frame
        self._generation += 1

    def __len__(self) -> int:
        return min(self._generation, len(self._slots))

    def __iter__(self) -> Iterator[Frame]:
        """Yield retained frames from oldest to newest."""
        size = len(self._slots)
        for offset in range(len(self) - 1, -1, -1):
            frame = self._slots[(self._cursor + offset) % size]
            if frame is not None:
                yield frame
