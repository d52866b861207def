# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
examples/nvm_set_get.py

Get, modify, check, and restore the contents of NVM address 0x300.
GPIO10 is lit while reading and GPIO11 while writing.

Run with:
    python examples/nvm_set_get.py /dev/ttyUSB0
"""

import sys

from rn2903 import NvmAddress, Rn2903, configure_logging

ADDRESS = NvmAddress(0x300)
TEST_VALUE = 0xAB


def main() -> int:
    if len(sys.argv) <= 1:
        print("nvm_set_get.py <serial port>", file=sys.stderr)
        return 1

    configure_logging("INFO")
    with Rn2903.open(sys.argv[1]) as txvr:
        print(f"Successfully connected. Version: {txvr.system_version()}")
        txvr.system_module_reset()
        txvr.mac_pause()

        txvr.system_set_pin_digital("GPIO10", True)
        prev = txvr.system_get_nvm(ADDRESS)
        print(f"Previous value: {prev:#x}")
        txvr.system_set_pin_digital("GPIO10", False)

        txvr.system_set_pin_digital("GPIO11", True)
        txvr.system_set_nvm(ADDRESS, TEST_VALUE)
        print("Wrote new value")
        txvr.system_set_pin_digital("GPIO11", False)

        txvr.system_set_pin_digital("GPIO10", True)
        new = txvr.system_get_nvm(ADDRESS)
        print(f"New value: {new:#x}")
        txvr.system_set_pin_digital("GPIO10", False)

        txvr.system_set_pin_digital("GPIO11", True)
        txvr.system_set_nvm(ADDRESS, prev)
        print("Restored old value")
        txvr.system_set_pin_digital("GPIO11", False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
