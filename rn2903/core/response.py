# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.core.response.py

Classification of RN2903 reply lines.

Every reply is one CRLF-terminated line. After the delimiter is stripped
the line is one of:
- the success token "ok"
- an error token from the device vocabulary (first word of the line)
- a value whose shape depends on the command that produced it

Unknown words that look like error tokens (``*_err``, ``invalid_*``)
still classify as device errors with kind UNKNOWN. Anything else is a
value when the caller expects one and UNRECOGNIZED otherwise. The raw
bytes are always kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional

SUCCESS_TOKEN = b"ok"
DELIMITER = b"\r\n"


class ResponseKind(Enum):
    """Classification tags"""
    OK = auto()
    VALUE = auto()
    DEVICE_ERROR = auto()
    UNRECOGNIZED = auto()


class DeviceErrorKind(Enum):
    """Error categories defined by the RN2903 firmware"""
    INVALID_PARAMETER = "invalid_param"
    INVALID_COMMAND = "err"
    BUSY = "busy"
    NOT_JOINED = "not_joined"
    NO_FREE_CHANNEL = "no_free_ch"
    SILENT = "silent"
    MAC_PAUSED = "mac_paused"
    KEYS_NOT_INITIALIZED = "keys_not_init"
    INVALID_DATA_LENGTH = "invalid_data_len"
    INVALID_CLASS = "invalid_class"
    FRAME_COUNTER_ERROR = "fram_counter_err_rejoin_needed"
    MULTICAST_KEYS_NOT_SET = "multicast_keys_not_set"
    DENIED = "denied"
    MAC_ERROR = "mac_err"
    RADIO_ERROR = "radio_err"
    UNKNOWN = "unknown"

    @property
    def token(self) -> bytes:
        return self.value.encode("ascii")


_ERROR_TOKENS: Dict[bytes, DeviceErrorKind] = {
    kind.token: kind
    for kind in DeviceErrorKind
    if kind is not DeviceErrorKind.UNKNOWN
}


@dataclass(frozen=True)
class ClassifiedResponse:
    """
    Typed interpretation of one reply line.

    Attributes:
        kind: ResponseKind tag
        value: Raw line (delimiter stripped)
        error: DeviceErrorKind for DEVICE_ERROR, otherwise None
    """
    kind: ResponseKind
    value: bytes = b""
    error: Optional[DeviceErrorKind] = None

    @property
    def is_ok(self) -> bool:
        return self.kind is ResponseKind.OK

    @property
    def is_value(self) -> bool:
        return self.kind is ResponseKind.VALUE

    @property
    def is_error(self) -> bool:
        return self.kind is ResponseKind.DEVICE_ERROR

    def text(self) -> str:
        """Value decoded as ASCII, unknown bytes replaced."""
        return self.value.decode("ascii", errors="replace")

    def __repr__(self) -> str:
        if self.error is not None:
            return f"ClassifiedResponse({self.kind.name}, {self.error.name}, {self.value!r})"
        return f"ClassifiedResponse({self.kind.name}, {self.value!r})"


def _looks_like_error(word: bytes) -> bool:
    return word.endswith(b"_err") or word.startswith(b"invalid_")


def classify(line: bytes, expect_value: bool = False) -> ClassifiedResponse:
    """
    Classify a reply line.

    Args:
        line: Reply with or without the trailing CRLF
        expect_value: True when the command that produced the reply
            answers with a value (version string, NVM byte, ...)

    Returns:
        ClassifiedResponse. Never OK unless the line is exactly "ok".
    """
    if line.endswith(DELIMITER):
        line = line[:-len(DELIMITER)]

    if line == SUCCESS_TOKEN:
        return ClassifiedResponse(ResponseKind.OK, line)

    words = line.split()
    if words:
        first = words[0]
        kind = _ERROR_TOKENS.get(first)
        if kind is None and len(words) == 1 and _looks_like_error(first):
            kind = DeviceErrorKind.UNKNOWN
        if kind is not None:
            return ClassifiedResponse(ResponseKind.DEVICE_ERROR, line, kind)

    if line and expect_value:
        return ClassifiedResponse(ResponseKind.VALUE, line)
    return ClassifiedResponse(ResponseKind.UNRECOGNIZED, line)
