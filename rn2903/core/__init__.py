# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
RN2903 Core Module

Contains:
- Command construction and reply classification
- Transaction engine (one write, at most one read)
- Protocol state model (network stack paused/active, radio in flight)
- Value types and configuration
"""

from .command import Command
from .config import RN2903Config, DEFAULT_CONFIG
from .response import (
    ClassifiedResponse,
    DeviceErrorKind,
    ResponseKind,
    classify,
)
from .state import DeviceState, ProtocolStateModel
from .transaction import TransactionEngine
from .types import ModulationMode, NvmAddress, Packet

__all__ = [
    'Command',
    'RN2903Config',
    'DEFAULT_CONFIG',
    'ClassifiedResponse',
    'DeviceErrorKind',
    'ResponseKind',
    'classify',
    'DeviceState',
    'ProtocolStateModel',
    'TransactionEngine',
    'ModulationMode',
    'NvmAddress',
    'Packet',
]
