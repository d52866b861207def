# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.core.types.py

Value types passed to and returned from the typed operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..exceptions import InvalidAddress

NVM_START = 0x300
NVM_END = 0x3FF


@dataclass(frozen=True)
class NvmAddress:
    """
    Address in the RN2903 user NVM region (0x300-0x3FF inclusive).

    Args:
        value: Integer address

    Raises:
        InvalidAddress: If value lies outside the user region
    """
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidAddress(f"NVM address must be an int, got {self.value!r}")
        if not NVM_START <= self.value <= NVM_END:
            raise InvalidAddress(
                f"NVM address 0x{self.value:x} outside "
                f"0x{NVM_START:x}-0x{NVM_END:x}"
            )

    def to_param(self) -> str:
        """Address as the module expects it on the command line."""
        return f"{self.value:x}"

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"NvmAddress(0x{self.value:x})"


class ModulationMode(Enum):
    """Radio modulation schemes supported by the module"""
    LORA = "lora"
    FSK = "fsk"

    @classmethod
    def parse(cls, text: str) -> "ModulationMode":
        """Interpret the reply of radio get mod."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown modulation mode: {text!r}") from None


@dataclass(frozen=True)
class Packet:
    """One received radio payload"""
    data: bytes

    def hex(self) -> str:
        return self.data.hex()

    def __len__(self) -> int:
        return len(self.data)

    def __bytes__(self) -> bytes:
        return self.data
