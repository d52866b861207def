# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.utils.async_thread.py

Bridge from asyncio to the blocking serial driver.

Driver operations block on the serial port for up to their reply
timeout. run_in_thread moves such a call onto a small shared pool of
I/O threads so the event loop keeps running meanwhile. Callers are
responsible for serializing calls on one port (see AsyncRn2903).
"""

import asyncio
import atexit
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable

logger = logging.getLogger(__name__)

# One worker per port is enough; a few allow several modules per process
_IO_POOL = ThreadPoolExecutor(
    max_workers=4,
    thread_name_prefix='RN2903IO'
)


async def run_in_thread(func: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Await a blocking driver operation on the serial I/O pool.

    Args:
        func: Driver method, e.g. txvr.radio_rx
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Whatever func returns; exceptions it raises propagate unchanged

    Example:
        packet = await run_in_thread(txvr.radio_rx, 0)
    """
    loop = asyncio.get_running_loop()
    name = getattr(func, "__name__", repr(func))
    started = time.monotonic()
    try:
        return await loop.run_in_executor(_IO_POOL, partial(func, *args, **kwargs))
    finally:
        logger.debug(f"{name} returned after {time.monotonic() - started:.3f}s")


atexit.register(lambda: _IO_POOL.shutdown(wait=False))
