# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
RN2903 Utilities Module

Provides logging setup and helpers for running the blocking driver
under asyncio.
"""

from typing import List

from .async_thread import run_in_thread

__all__: List[str] = [
    'run_in_thread',
    'configure_logging',
]


def configure_logging(level: str = "INFO") -> None:
    """
    Configure package-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    import logging
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )
