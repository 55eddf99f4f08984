"""Periodic dispatch tick for the position feed."""

import asyncio

from gpsfeed.context import GPSContext

__all__ = ["run_dispatch_loop"]


async def run_dispatch_loop(context: GPSContext, interval_ms: int) -> None:
    """Run a dispatch pass every ``interval_ms`` until cancelled.

    Pushes due at a given period are delivered at most ``interval_ms`` late
    when no upstream data arrives to trigger a pass earlier.

    Args:
        context: Feed state owned by the running event loop.
        interval_ms: Tick spacing in milliseconds.
    """
    interval = interval_ms / 1000.0
    while True:
        await asyncio.sleep(interval)
        context.dispatch()
