# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
examples/version.py

Connect to an RN2903 and print its firmware version.

Run with:
    python examples/version.py /dev/ttyUSB0
"""

import sys

from rn2903 import Rn2903, RN2903Error, configure_logging


def main() -> int:
    if len(sys.argv) <= 1:
        print("version.py <serial port>", file=sys.stderr)
        return 1

    configure_logging("INFO")
    try:
        with Rn2903.open(sys.argv[1]) as txvr:
            print(f"Successfully connected. Version: {txvr.system_version()}")
            print(f"Supply voltage: {txvr.system_get_vdd()} mV")
            print(f"Hardware EUI:   {txvr.system_get_hweui().hex().upper()}")
    except RN2903Error as e:
        print(f"Could not read from device: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
