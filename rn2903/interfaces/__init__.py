# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
RN2903 Transport Interfaces

Provides:
- BaseTransport for custom channels
- SerialTransport (pyserial; serial ports and serial-over-TCP)
"""

from typing import Optional

from ..core.config import RN2903Config
from ..exceptions import TransportError
from .transport import BaseTransport
from .serial_transport import SerialTransport

__all__ = [
    'BaseTransport',
    'SerialTransport',
    'create_transport',
]


def create_transport(connection_string: str, config: Optional[RN2903Config] = None) -> BaseTransport:
    """
    Create an unopened transport from a connection string.

    Formats:
    - Serial: "serial:/dev/ttyUSB0" or "serial:/dev/ttyUSB0:57600"
    - TCP: "tcp:localhost:7000" (serial-over-TCP bridge such as ser2net)

    Args:
        connection_string: Transport-specific connection string
        config: Driver configuration (baud rate overridden if given)

    Returns:
        Configured transport instance
    """
    if connection_string.startswith("serial:"):
        _, rest = connection_string.split(":", 1)
        port, sep, baud = rest.rpartition(":")
        if not sep or not baud.isdigit():
            port, baud = rest, ""
        if baud:
            config = (config or RN2903Config()).with_overrides(baudrate=int(baud))
        return SerialTransport(port, config)
    elif connection_string.startswith("tcp:"):
        _, host, port = connection_string.split(":")
        return SerialTransport(f"socket://{host}:{int(port)}", config)
    else:
        raise TransportError(f"Unknown transport: {connection_string}")
