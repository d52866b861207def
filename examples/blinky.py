# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
examples/blinky.py

Reset the module and toggle pin GPIO10 on and off.
This corresponds to the blue user LED on the LoStik.

Run with:
    python examples/blinky.py /dev/ttyUSB0
"""

import logging
import sys
import time

from rn2903 import Rn2903, configure_logging

logger = logging.getLogger("blinky")


def main() -> int:
    if len(sys.argv) <= 1:
        print("blinky.py <serial port>", file=sys.stderr)
        return 1

    configure_logging("INFO")
    with Rn2903.open(sys.argv[1]) as txvr:
        logger.info(f"Successfully connected. Version: {txvr.system_version()}")
        txvr.system_module_reset()
        txvr.mac_pause()

        try:
            while True:
                txvr.system_set_pin_digital("GPIO10", True)
                time.sleep(1.0)
                txvr.system_set_pin_digital("GPIO10", False)
                time.sleep(1.0)
        except KeyboardInterrupt:
            logger.info("Interrupt received - shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
