# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
examples/lora_packet_rx.py

Receive LoRa packets and print their hex values, flashing GPIO10
(the LoStik user LED) for each packet.

Run with:
    python examples/lora_packet_rx.py /dev/ttyUSB0
"""

import sys
import time

from rn2903 import ModulationMode, Rn2903, configure_logging


def main() -> int:
    if len(sys.argv) <= 1:
        print("lora_packet_rx.py <serial port>", file=sys.stderr)
        return 1

    configure_logging("INFO")
    with Rn2903.open(sys.argv[1]) as txvr:
        print(f"Successfully connected. Version: {txvr.system_version()}")
        txvr.mac_pause()
        txvr.radio_set_modulation_mode(ModulationMode.LORA)
        txvr.system_set_pin_digital("GPIO10", False)

        try:
            while True:
                packet = txvr.radio_rx(0)
                if packet is None:
                    continue
                print(packet.hex().upper())
                txvr.system_set_pin_digital("GPIO10", True)
                time.sleep(0.1)
                txvr.system_set_pin_digital("GPIO10", False)
        except KeyboardInterrupt:
            print("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
