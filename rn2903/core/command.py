# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.core.command.py

Protocol command construction.

A command is a line of space-separated ASCII tokens terminated by CRLF,
e.g. ``sys get nvm 300\\r\\n``. Commands are built fresh per call and
never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .response import DELIMITER

Token = Union[str, int]


@dataclass(frozen=True)
class Command:
    """
    Immutable protocol command.

    Attributes:
        tokens: Command words, without delimiter
    """
    tokens: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("Empty command")
        for token in self.tokens:
            if not token or any(c.isspace() for c in token):
                raise ValueError(f"Invalid command token: {token!r}")
            if not token.isascii():
                raise ValueError(f"Non-ASCII command token: {token!r}")

    @classmethod
    def build(cls, *tokens: Token) -> "Command":
        """Build from words; ints are rendered in decimal."""
        return cls(tuple(str(t) for t in tokens))

    @classmethod
    def parse(cls, text: Union[str, bytes]) -> "Command":
        """Build from a raw command line such as ``"mac pause"``."""
        if isinstance(text, bytes):
            text = text.decode("ascii")
        text = text.rstrip("\r\n")
        return cls(tuple(text.split()))

    @property
    def text(self) -> str:
        return " ".join(self.tokens)

    def __bytes__(self) -> bytes:
        return self.text.encode("ascii") + DELIMITER

    def __str__(self) -> str:
        return self.text
