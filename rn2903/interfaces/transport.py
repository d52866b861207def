# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.interfaces.transport.py

Base transport interface.

A transport is a duplex byte channel, exclusively owned by one driver
instance, supplying a single write and a blocking read-until-delimiter.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class BaseTransport(ABC):
    """
    Abstract base class for byte-stream transports.

    Subclasses implement open/close, write and read_until. The driver
    never opens or configures the channel itself; it is handed an
    already-open transport.
    """

    @abstractmethod
    def open(self) -> None:
        """Open the underlying channel"""

    @abstractmethod
    def close(self) -> None:
        """Close the underlying channel"""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the channel is currently open"""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write all of data in one operation.

        Raises:
            TransportError: On I/O failure
        """

    @abstractmethod
    def read_until(self, delimiter: bytes, timeout: Optional[float]) -> bytes:
        """
        Read up to and including delimiter.

        Args:
            delimiter: Terminator to wait for
            timeout: Maximum wait in seconds (None = block forever)

        Returns:
            Bytes read, ending with delimiter

        Raises:
            TransportTimeout: Delimiter not seen before the timeout
            TransportError: On I/O failure
        """

    def discard_input(self) -> None:
        """Drop any unread input. Default: nothing buffered to drop."""

    def __enter__(self):
        if not self.is_open:
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
