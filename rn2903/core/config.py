# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.core.config.py

Driver configuration: serial link settings and per-command timeouts.

Serial settings follow Microchip document 40001811 revision B
(57600 baud, 8N1, no flow control).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import serial


@dataclass(frozen=True)
class RN2903Config:
    """
    RN2903 driver configuration.

    Attributes:
        baudrate: Serial baud rate
        bytesize: Data bits
        parity: pyserial parity constant
        stopbits: pyserial stop bits constant
        command_timeout: Reply timeout for ordinary commands (seconds)
        reset_timeout: Reply timeout for sys reset / sys factoryRESET
        rx_timeout: Wait for the radio rx result line (None = forever)
        tx_timeout: Wait for the radio tx result line
        firmware_name: Expected prefix of the sys get ver banner
    """
    baudrate: int = 57600
    bytesize: int = serial.EIGHTBITS
    parity: str = serial.PARITY_NONE
    stopbits: float = serial.STOPBITS_ONE
    command_timeout: float = 1.0
    reset_timeout: float = 3.0
    rx_timeout: Optional[float] = None
    tx_timeout: float = 10.0
    firmware_name: str = "RN2903"

    def __post_init__(self) -> None:
        if self.baudrate <= 0:
            raise ValueError(f"Invalid baudrate: {self.baudrate}")
        for name in ("command_timeout", "reset_timeout", "tx_timeout"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.rx_timeout is not None and self.rx_timeout <= 0:
            raise ValueError("rx_timeout must be positive or None")

    def serial_settings(self) -> Dict[str, Any]:
        """Keyword arguments for serial.Serial / serial.serial_for_url."""
        return {
            "baudrate": self.baudrate,
            "bytesize": self.bytesize,
            "parity": self.parity,
            "stopbits": self.stopbits,
            "xonxoff": False,
            "rtscts": False,
            "timeout": self.command_timeout,
        }

    def with_overrides(self, **kwargs: Any) -> "RN2903Config":
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)


DEFAULT_CONFIG = RN2903Config()
