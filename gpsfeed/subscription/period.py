"""Refresh period normalization.

Requested periods are quantized so that subscribers asking for similar
rates share one period bucket. Periods are counted in 100 ms steps, clamped
to 1..600 steps (100 ms .. 60 s), and truncated to their five most
significant bits. The grid therefore stays 100 ms wide up to 3.1 s and
widens as the period grows:

    requested (ms)    bucket (ms)
    --------------    -----------
    50                100
    2000              2000
    3150              3100
    5100              5000
    60000             57600
"""

__all__ = ["MAX_PERIOD_MS", "MIN_PERIOD_MS", "normalize_period"]

_STEP_MS = 100
MIN_PERIOD_MS = 100
MAX_PERIOD_MS = 60000

_SIGNIFICANT_BITS = 5


def normalize_period(requested_ms: int) -> int:
    """Map a requested refresh period onto the bucket grid.

    The mapping is monotonic, idempotent and always returns a multiple of
    100 ms.

    Args:
        requested_ms: Period asked for by the subscriber, in milliseconds.

    Returns:
        The bucket period in milliseconds.
    """
    clamped = min(max(requested_ms, MIN_PERIOD_MS), MAX_PERIOD_MS)
    steps = clamped // _STEP_MS
    shift = max(steps.bit_length() - _SIGNIFICANT_BITS, 0)
    return ((steps >> shift) << shift) * _STEP_MS
