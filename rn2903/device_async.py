# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.device_async.py

asyncio adapter for the blocking Rn2903 driver.

Each call runs the blocking operation in the shared thread pool while
holding an asyncio.Lock, so at most one transaction is ever in flight on
the serial link. Waiting for the lock can be bounded with queue_timeout;
the blocking call itself is bounded by the driver's own timeouts and is
never cancelled part-way through.

The lock is created on first use so that it belongs to the event loop
actually running the calls, not whichever loop existed at construction.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Union

import async_timeout

from .core.command import Command
from .core.response import ClassifiedResponse
from .core.state import DeviceState
from .core.types import ModulationMode, NvmAddress, Packet
from .device import Rn2903
from .exceptions import TransceiverBusy
from .utils.async_thread import run_in_thread

logger = logging.getLogger(__name__)


class AsyncRn2903:
    """
    Serialized asyncio front-end for an Rn2903.

    Args:
        driver: Driver instance, owned by this adapter from now on
        queue_timeout: Maximum wait for a previous call to finish
            (None = wait indefinitely)
    """

    def __init__(self, driver: Rn2903, queue_timeout: Optional[float] = None):
        self.driver = driver
        self.queue_timeout = queue_timeout
        self._lock: Optional[asyncio.Lock] = None

    @property
    def lock(self) -> asyncio.Lock:
        """Lock serializing calls; created inside the running loop."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    @property
    def state(self) -> DeviceState:
        return self.driver.state

    async def _call(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        lock = self.lock
        try:
            async with async_timeout.timeout(self.queue_timeout):
                await lock.acquire()
        except asyncio.TimeoutError:
            raise TransceiverBusy(
                f"Driver still busy after {self.queue_timeout}s"
            ) from None
        try:
            return await run_in_thread(func, *args, **kwargs)
        finally:
            lock.release()

    async def close(self) -> None:
        await self._call(self.driver.close)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def verify(self) -> str:
        return await self._call(self.driver.verify)

    # Raw access

    async def transact(self, command: Union[str, bytes, Command], timeout: Optional[float] = None) -> ClassifiedResponse:
        return await self._call(self.driver.transact, command, timeout)

    async def read_line(self, timeout: Optional[float] = None) -> bytes:
        return await self._call(self.driver.read_line, timeout)

    # System

    async def system_version(self) -> str:
        return await self._call(self.driver.system_version)

    async def system_version_bytes(self) -> bytes:
        return await self._call(self.driver.system_version_bytes)

    async def system_module_reset(self) -> Optional[bytes]:
        return await self._call(self.driver.system_module_reset)

    async def system_factory_reset(self) -> Optional[bytes]:
        return await self._call(self.driver.system_factory_reset)

    async def system_get_nvm(self, addr: NvmAddress) -> int:
        return await self._call(self.driver.system_get_nvm, addr)

    async def system_set_nvm(self, addr: NvmAddress, value: int) -> None:
        await self._call(self.driver.system_set_nvm, addr, value)

    async def system_set_pin_digital(self, pin: str, high: bool) -> None:
        await self._call(self.driver.system_set_pin_digital, pin, high)

    async def system_get_vdd(self) -> int:
        return await self._call(self.driver.system_get_vdd)

    async def system_get_hweui(self) -> bytes:
        return await self._call(self.driver.system_get_hweui)

    # MAC

    async def mac_pause(self) -> Optional[int]:
        return await self._call(self.driver.mac_pause)

    async def mac_resume(self) -> None:
        await self._call(self.driver.mac_resume)

    async def mac_get_status(self) -> int:
        return await self._call(self.driver.mac_get_status)

    async def mac_get_deveui(self) -> bytes:
        return await self._call(self.driver.mac_get_deveui)

    # Radio

    async def radio_set_modulation_mode(self, mode: ModulationMode) -> None:
        await self._call(self.driver.radio_set_modulation_mode, mode)

    async def radio_get_modulation_mode(self) -> ModulationMode:
        return await self._call(self.driver.radio_get_modulation_mode)

    async def radio_set_frequency(self, hz: int) -> None:
        await self._call(self.driver.radio_set_frequency, hz)

    async def radio_get_frequency(self) -> int:
        return await self._call(self.driver.radio_get_frequency)

    async def radio_set_spreading_factor(self, sf: int) -> None:
        await self._call(self.driver.radio_set_spreading_factor, sf)

    async def radio_set_power(self, dbm: int) -> None:
        await self._call(self.driver.radio_set_power, dbm)

    async def radio_rx(self, window_size: int, timeout: Optional[float] = None) -> Optional[Packet]:
        return await self._call(self.driver.radio_rx, window_size, timeout)

    async def radio_tx(self, payload: bytes, timeout: Optional[float] = None) -> None:
        await self._call(self.driver.radio_tx, payload, timeout)

    def __repr__(self) -> str:
        return f"AsyncRn2903({self.driver!r})"
