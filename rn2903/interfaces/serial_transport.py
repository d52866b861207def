# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.interfaces.serial_transport.py

pyserial transport for the RN2903.

Any pyserial URL is accepted as the port: a device path such as
``/dev/ttyUSB0`` or ``COM3``, ``socket://host:port`` for a serial-over-TCP
bridge, or ``loop://`` for testing.
"""

import logging
from typing import Optional

import serial

from .transport import BaseTransport
from ..core.config import DEFAULT_CONFIG, RN2903Config
from ..exceptions import TransportError, TransportTimeout

logger = logging.getLogger(__name__)


class SerialTransport(BaseTransport):
    """
    Serial port transport

    Args:
        port: Device path or pyserial URL
        config: Serial settings (defaults to the RN2903 datasheet values)
    """

    def __init__(self, port: str, config: Optional[RN2903Config] = None):
        self.port = port
        self.config = config or DEFAULT_CONFIG
        self._serial: Optional[serial.SerialBase] = None

    @classmethod
    def from_serial(cls, handle: serial.SerialBase, config: Optional[RN2903Config] = None) -> "SerialTransport":
        """Wrap an already-open pyserial handle."""
        transport = cls(handle.port or "", config)
        transport._serial = handle
        return transport

    @property
    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        if self.is_open:
            return
        try:
            self._serial = serial.serial_for_url(
                self.port,
                **self.config.serial_settings()
            )
            logger.info(f"Opened serial port {self.port}@{self.config.baudrate}")
        except serial.SerialException as e:
            raise TransportError(f"Serial open failed: {e}") from e

    def close(self) -> None:
        if self._serial:
            self._serial.close()
            self._serial = None
            logger.info(f"Closed serial port {self.port}")

    def _require_open(self) -> serial.SerialBase:
        if not self.is_open:
            raise TransportError("Not connected")
        return self._serial

    def write(self, data: bytes) -> None:
        port = self._require_open()
        try:
            port.write(data)
            port.flush()
        except serial.SerialException as e:
            raise TransportError(f"Send failed: {e}") from e

    def read_until(self, delimiter: bytes, timeout: Optional[float]) -> bytes:
        port = self._require_open()
        try:
            port.timeout = timeout
            data = port.read_until(delimiter)
        except serial.SerialException as e:
            raise TransportError(f"Receive failed: {e}") from e
        if not data.endswith(delimiter):
            raise TransportTimeout(timeout, data)
        return data

    def discard_input(self) -> None:
        port = self._require_open()
        try:
            port.reset_input_buffer()
        except serial.SerialException as e:
            raise TransportError(f"Input flush failed: {e}") from e

    def __repr__(self) -> str:
        return f"SerialTransport({self.port!r}, open={self.is_open})"
