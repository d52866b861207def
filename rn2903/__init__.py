# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903 - Typed command driver for the Microchip RN2903 LoRa transceiver

Provides:
- Rn2903 synchronous driver and AsyncRn2903 asyncio adapter
- pyserial transport (serial ports, serial-over-TCP)
- Typed replies and errors for every supported command
"""

__version__ = "0.1.0"

from .core import (
    ClassifiedResponse,
    Command,
    DEFAULT_CONFIG,
    DeviceErrorKind,
    DeviceState,
    ModulationMode,
    NvmAddress,
    Packet,
    ProtocolStateModel,
    RN2903Config,
    ResponseKind,
    TransactionEngine,
    classify,
)
from .device import Rn2903
from .device_async import AsyncRn2903
from .exceptions import (
    BadResponse,
    CannotPause,
    CannotResume,
    DeviceError,
    InvalidAddress,
    NetworkStackPaused,
    ProtocolStateError,
    RN2903Error,
    TransceiverBusy,
    TransportError,
    TransportTimeout,
    WrongDevice,
)
from .interfaces import BaseTransport, SerialTransport, create_transport
from .utils import configure_logging

__all__ = [
    # Driver
    'Rn2903',
    'AsyncRn2903',

    # Core
    'ClassifiedResponse',
    'Command',
    'DEFAULT_CONFIG',
    'DeviceErrorKind',
    'DeviceState',
    'ModulationMode',
    'NvmAddress',
    'Packet',
    'ProtocolStateModel',
    'RN2903Config',
    'ResponseKind',
    'TransactionEngine',
    'classify',

    # Transports
    'BaseTransport',
    'SerialTransport',
    'create_transport',

    # Exceptions
    'RN2903Error',
    'TransportError',
    'TransportTimeout',
    'DeviceError',
    'BadResponse',
    'WrongDevice',
    'ProtocolStateError',
    'CannotPause',
    'CannotResume',
    'TransceiverBusy',
    'NetworkStackPaused',
    'InvalidAddress',

    # Utilities
    'configure_logging',
]
