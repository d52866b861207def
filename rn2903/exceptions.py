# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.exceptions.py

Exception hierarchy for the RN2903 driver.

Every failure the driver can report is a subclass of RN2903Error:
- TransportError / TransportTimeout: the serial link failed or went quiet
- DeviceError: the module understood the command and rejected it
- BadResponse: the reply had an unexpected shape for the command sent
- ProtocolStateError: a local precondition failed before any I/O
- InvalidAddress: an NVM address outside the user range
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .core.response import DeviceErrorKind


class RN2903Error(Exception):
    """Base exception for all RN2903 driver errors"""


class TransportError(RN2903Error):
    """I/O failure on the byte channel to the module"""


class TransportTimeout(TransportError):
    """No complete reply line arrived before the timeout"""

    def __init__(self, timeout: Optional[float], partial: bytes = b"") -> None:
        self.timeout = timeout
        self.partial = partial
        super().__init__(f"No reply within {timeout}s (partial={partial!r})")


class DeviceError(RN2903Error):
    """
    The module rejected a command.

    Attributes:
        kind: DeviceErrorKind reported by the module
        response: Raw reply line as received
    """

    def __init__(self, kind: "DeviceErrorKind", response: bytes = b"") -> None:
        self.kind = kind
        self.response = response
        super().__init__(f"Device error {kind.name}: {response!r}")


class BadResponse(RN2903Error):
    """Reply did not match any shape expected for the command issued"""

    def __init__(self, command: str, response: bytes) -> None:
        self.command = command
        self.response = response
        super().__init__(f"Unexpected reply to '{command}': {response!r}")


class WrongDevice(RN2903Error):
    """The connected module did not identify itself as an RN2903"""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"Could not verify version string. Expected a RN2903 firmware "
            f"revision, got '{version}'"
        )


class ProtocolStateError(RN2903Error):
    """Operation is illegal in the driver's current protocol state"""


class CannotPause(ProtocolStateError):
    """The network stack could not be paused"""


class CannotResume(ProtocolStateError):
    """The network stack could not be resumed"""


class TransceiverBusy(ProtocolStateError):
    """Radio is owned by the network stack or another radio operation"""


class NetworkStackPaused(ProtocolStateError):
    """MAC operation attempted while the network stack is paused"""


class InvalidAddress(RN2903Error, ValueError):
    """NVM address outside the user-accessible range"""


__all__ = [
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
]
