# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.core.transaction.py

Request/response engine.

One transaction is exactly one write of a CRLF-terminated command
followed by at most one read of a CRLF-terminated reply. Timeouts are
reported to the caller as TransportTimeout and never retried here.

The engine assumes strictly sequential use; it does no locking of its
own. Input left over from an earlier timed-out transaction is discarded
before each new command is written.
"""

from __future__ import annotations

import logging
from typing import Optional

from .command import Command
from .response import DELIMITER, ClassifiedResponse, classify
from ..interfaces.transport import BaseTransport

logger = logging.getLogger(__name__)


class TransactionEngine:
    """
    Serializes commands onto a transport and classifies replies.

    Args:
        transport: Open transport exclusively owned by this engine
        delimiter: Line terminator used by the module
    """

    def __init__(self, transport: BaseTransport, delimiter: bytes = DELIMITER):
        self.transport = transport
        self.delimiter = delimiter

    def transact(
        self,
        command: Command,
        timeout: Optional[float],
        expect_value: bool = False,
    ) -> ClassifiedResponse:
        """
        Write one command and read back its classified reply.

        Args:
            command: Command to send
            timeout: Maximum wait for the reply delimiter (None = forever)
            expect_value: Whether the command answers with a value

        Returns:
            ClassifiedResponse for the reply line

        Raises:
            TransportTimeout: No reply line before the timeout
            TransportError: I/O failure
        """
        self.transport.discard_input()
        wire = bytes(command)
        logger.debug(f">> {command.text}")
        self.transport.write(wire)
        return self.read_response(timeout, expect_value)

    def read_response(
        self,
        timeout: Optional[float],
        expect_value: bool = False,
    ) -> ClassifiedResponse:
        """
        Read and classify one more reply line without writing.

        Used for commands such as radio rx whose result arrives as a
        second line after the initial acknowledgement.
        """
        raw = self.read_raw(timeout)
        response = classify(raw, expect_value=expect_value)
        logger.debug(f"<< {raw!r} -> {response.kind.name}")
        return response

    def read_raw(self, timeout: Optional[float]) -> bytes:
        """Read one reply line and strip the delimiter."""
        raw = self.transport.read_until(self.delimiter, timeout)
        if raw.endswith(self.delimiter):
            raw = raw[:-len(self.delimiter)]
        return raw

    def __repr__(self) -> str:
        return f"TransactionEngine({self.transport!r})"
