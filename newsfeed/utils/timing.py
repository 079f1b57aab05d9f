"""Cancellable waits for the worker loop and rate limiting."""

import asyncio


async def wait_or_stop(stop_event: asyncio.Event | None, seconds: float) -> bool:
    """
    Sleep ``seconds`` unless ``stop_event`` fires first.

    Returns:
        True when the stop event fired
    """
    if stop_event is None:
        await asyncio.sleep(seconds)
        return False
    if stop_event.is_set():
        return True
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=seconds)
    except TimeoutError:
        return False
    return True
