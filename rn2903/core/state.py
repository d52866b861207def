# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.core.state.py

Protocol state model for the RN2903.

The module boots with its LoRaWAN stack running. Radio commands are only
accepted once the stack has been paused with ``mac pause``, and only one
radio receive/transmit may be outstanding at a time.

The device cannot be asked whether its stack is paused, so the driver
keeps an optimistic cache. The cache is updated only after the device
has confirmed a transition, never speculatively. Precondition failures
are raised locally before any I/O.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ..exceptions import (
    CannotPause,
    CannotResume,
    NetworkStackPaused,
    TransceiverBusy,
)

logger = logging.getLogger(__name__)


@dataclass
class DeviceState:
    """
    Driver's view of the module's mode.

    Attributes:
        network_stack_active: LoRaWAN stack running (boot default)
        radio_operation_in_flight: A radio command is outstanding
    """
    network_stack_active: bool = True
    radio_operation_in_flight: bool = False


class ProtocolStateModel:
    """
    Gates MAC and radio operations against DeviceState.

    One instance per driver; never shared.
    """

    def __init__(self) -> None:
        self._state = DeviceState()
        logger.debug(f"State model initialized: {self._state}")

    @property
    def state(self) -> DeviceState:
        """Copy of the current state; mutating it has no effect."""
        return DeviceState(
            network_stack_active=self._state.network_stack_active,
            radio_operation_in_flight=self._state.radio_operation_in_flight,
        )

    @property
    def network_stack_active(self) -> bool:
        return self._state.network_stack_active

    @property
    def radio_operation_in_flight(self) -> bool:
        return self._state.radio_operation_in_flight

    def check_can_pause(self) -> None:
        """
        Raises:
            CannotPause: Stack already paused or a radio operation is running
        """
        if not self._state.network_stack_active:
            raise CannotPause("Network stack already paused")
        if self._state.radio_operation_in_flight:
            raise CannotPause("Radio operation in flight")

    def check_can_resume(self) -> None:
        """
        Raises:
            CannotResume: Stack already active or a radio operation is running
        """
        if self._state.network_stack_active:
            raise CannotResume("Network stack already active")
        if self._state.radio_operation_in_flight:
            raise CannotResume("Radio operation in flight")

    def require_network_stack(self) -> None:
        """
        Gate for MAC operations.

        Raises:
            NetworkStackPaused: Stack has been paused by this driver
        """
        if not self._state.network_stack_active:
            raise NetworkStackPaused("Network stack is paused; call mac_resume() first")

    def require_radio(self) -> None:
        """
        Gate for radio operations.

        Raises:
            TransceiverBusy: Stack active or another radio operation running
        """
        if self._state.network_stack_active:
            raise TransceiverBusy("Network stack is active; call mac_pause() first")
        if self._state.radio_operation_in_flight:
            raise TransceiverBusy("Another radio operation is in flight")

    @contextmanager
    def radio_operation(self) -> Iterator[None]:
        """
        Hold the radio for the duration of the block.

        The in-flight flag is cleared on exit whether the block
        succeeds or raises.

        Raises:
            TransceiverBusy: On entry, if require_radio() fails
        """
        self.require_radio()
        self._state.radio_operation_in_flight = True
        logger.debug("Radio operation started")
        try:
            yield
        finally:
            self._state.radio_operation_in_flight = False
            logger.debug("Radio operation finished")

    def mark_paused(self) -> None:
        """Record a confirmed mac pause."""
        self._change(network_stack_active=False)

    def mark_resumed(self) -> None:
        """Record a confirmed mac resume."""
        self._change(network_stack_active=True)

    def mark_reset(self) -> None:
        """Record a confirmed module reboot: back to boot defaults."""
        self._change(network_stack_active=True)
        self._state.radio_operation_in_flight = False

    def _change(self, network_stack_active: bool) -> None:
        old = self._state.network_stack_active
        self._state.network_stack_active = network_stack_active
        logger.debug(
            f"State change: stack "
            f"{'active' if old else 'paused'} -> "
            f"{'active' if network_stack_active else 'paused'}"
        )

    def __repr__(self) -> str:
        return (f"ProtocolStateModel(stack_active={self._state.network_stack_active}, "
                f"radio_in_flight={self._state.radio_operation_in_flight})")
