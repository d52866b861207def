# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/conftest.py

Shared fixtures:
- ScriptedTransport: in-memory transport that answers scripted replies
  to each command and records every write, read and input flush
- driver / paused_driver: Rn2903 instances wired to a ScriptedTransport
"""

import logging
from collections import deque
from typing import Deque, Dict, Generator, List, Optional, Tuple

import pytest

from rn2903.core.config import RN2903Config
from rn2903.device import Rn2903
from rn2903.exceptions import TransportTimeout
from rn2903.interfaces.transport import BaseTransport

# Scripted reply meaning "nothing arrives before the timeout"
TIMEOUT = object()


class ScriptedTransport(BaseTransport):
    """Mock transport for driver testing."""

    def __init__(self):
        self.writes: List[bytes] = []
        self.reads = 0
        self.discards = 0
        self.read_timeouts: List[Optional[float]] = []
        self._script: Dict[bytes, Deque[Tuple]] = {}
        self._pending: Deque = deque()
        self._open = True

    def script(self, command: bytes, *replies) -> "ScriptedTransport":
        """Queue replies for the next write of command (CRLF optional)."""
        if not command.endswith(b"\r\n"):
            command += b"\r\n"
        self._script.setdefault(command, deque()).append(replies)
        return self

    def feed(self, *replies) -> None:
        """Make replies readable without a preceding write."""
        self._pending.extend(replies)

    def clear_log(self) -> None:
        """Forget recorded writes, reads and flushes."""
        self.writes.clear()
        self.read_timeouts.clear()
        self.reads = 0
        self.discards = 0

    def open(self) -> None:
        self._open = True

    def close(self) -> None:
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def write(self, data: bytes) -> None:
        self.writes.append(data)
        queued = self._script.get(data)
        if queued:
            self._pending.extend(queued.popleft())

    def read_until(self, delimiter: bytes, timeout: Optional[float]) -> bytes:
        self.reads += 1
        self.read_timeouts.append(timeout)
        if not self._pending:
            raise TransportTimeout(timeout)
        reply = self._pending.popleft()
        if reply is TIMEOUT:
            raise TransportTimeout(timeout)
        if not reply.endswith(delimiter):
            reply += delimiter
        return reply

    def discard_input(self) -> None:
        self.discards += 1
        self._pending.clear()


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> Generator[None, None, None]:
    """Configure logging for all tests"""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    yield


@pytest.fixture
def transport() -> ScriptedTransport:
    return ScriptedTransport()


@pytest.fixture
def config() -> RN2903Config:
    return RN2903Config(command_timeout=0.5, rx_timeout=2.0, tx_timeout=2.0)


@pytest.fixture
def driver(transport, config) -> Rn2903:
    return Rn2903(transport, config)


@pytest.fixture
def paused_driver(driver, transport) -> Rn2903:
    """Driver whose network stack has been paused."""
    transport.script(b"mac pause", b"4294967245")
    driver.mac_pause()
    transport.clear_log()
    return driver


def pytest_configure(config: pytest.Config) -> None:
    """Pytest configuration hook"""
    config.addinivalue_line(
        "markers",
        "hardware: mark test that requires actual hardware"
    )
