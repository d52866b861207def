# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
rn2903.device.py

Typed command interface to a Microchip RN2903 LoRa transceiver.

Each operation validates its inputs, consults the protocol state model,
formats one command, runs it through the transaction engine and decodes
the classified reply into a Python value or raises a typed error.

Usage::

    with Rn2903.open("/dev/ttyUSB0") as txvr:
        print(txvr.system_version())
        txvr.mac_pause()
        txvr.radio_set_modulation_mode(ModulationMode.LORA)
        packet = txvr.radio_rx(0)

The driver is synchronous and must be used from one thread at a time.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Union

from .core.command import Command
from .core.config import DEFAULT_CONFIG, RN2903Config
from .core.response import ClassifiedResponse, DeviceErrorKind, ResponseKind
from .core.state import DeviceState, ProtocolStateModel
from .core.transaction import TransactionEngine
from .core.types import ModulationMode, NvmAddress, Packet
from .exceptions import (
    BadResponse,
    CannotPause,
    CannotResume,
    DeviceError,
    WrongDevice,
)
from .interfaces.serial_transport import SerialTransport
from .interfaces.transport import BaseTransport

logger = logging.getLogger(__name__)

# Pins accepted by sys set pindig
PINS = frozenset(
    [f"GPIO{n}" for n in range(15)]
    + ["UART_CTS", "UART_RTS", "TEST0", "TEST1"]
)

FREQUENCY_MIN = 902_000_000
FREQUENCY_MAX = 928_000_000
POWER_MIN = 2
POWER_MAX = 20
SPREADING_FACTORS = range(7, 13)
RX_WINDOW_MAX = 0xFFFF
TX_PAYLOAD_MAX = 255

RADIO_RX_PREFIX = b"radio_rx"
RADIO_TX_OK = b"radio_tx_ok"

# Numeric replies: bare digits only, no sign, prefix, separator or padding
HEX_DIGITS = re.compile(rb"[0-9A-Fa-f]+")
DECIMAL_DIGITS = re.compile(rb"[0-9]+")


class Rn2903:
    """
    Handle to a serial link connected to an RN2903 module.

    Args:
        transport: Open transport, exclusively owned by this driver
        config: Timeouts and serial settings
    """

    def __init__(self, transport: BaseTransport, config: Optional[RN2903Config] = None):
        self.config = config or DEFAULT_CONFIG
        self.transport = transport
        self.engine = TransactionEngine(transport)
        self.protocol = ProtocolStateModel()

    @classmethod
    def open(cls, port: str, config: Optional[RN2903Config] = None) -> "Rn2903":
        """
        Open a connection to a module at the given port and verify it.

        Raises:
            TransportError: Port could not be opened
            WrongDevice: Module is not an RN2903
        """
        transport = SerialTransport(port, config)
        transport.open()
        driver = cls(transport, config)
        try:
            driver.verify()
        except Exception:
            transport.close()
            raise
        return driver

    @property
    def state(self) -> DeviceState:
        return self.protocol.state

    def close(self) -> None:
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def verify(self) -> str:
        """
        Check that the module identifies itself as an RN2903.

        Returns:
            Version banner

        Raises:
            WrongDevice: Banner does not start with config.firmware_name
        """
        try:
            version = self.system_version()
        except BadResponse as e:
            raise WrongDevice(e.response.decode("ascii", errors="replace")) from e
        if not version.startswith(self.config.firmware_name):
            raise WrongDevice(version)
        logger.info(f"Connected to {version}")
        return version

    # Raw access

    def transact(self, command: Union[str, bytes, Command], timeout: Optional[float] = None) -> ClassifiedResponse:
        """
        Send an arbitrary command and return its classified reply.

        No state checks are applied; the caller owns the consequences.
        """
        if not isinstance(command, Command):
            command = Command.parse(command)
        return self.engine.transact(command, self._timeout(timeout), expect_value=True)

    def read_line(self, timeout: Optional[float] = None) -> bytes:
        """Read one more raw reply line (delimiter stripped)."""
        return self.engine.read_raw(self._timeout(timeout))

    def _timeout(self, timeout: Optional[float]) -> float:
        return self.config.command_timeout if timeout is None else timeout

    def _run(self, command: Command, expect_value: bool = False, timeout: Optional[float] = None) -> ClassifiedResponse:
        return self.engine.transact(command, self._timeout(timeout), expect_value)

    def _expect_ok(self, command: Command, timeout: Optional[float] = None) -> None:
        response = self._run(command, timeout=timeout)
        if response.is_error:
            raise DeviceError(response.error, response.value)
        if not response.is_ok:
            raise BadResponse(command.text, response.value)

    def _expect_value(self, command: Command) -> ClassifiedResponse:
        response = self._run(command, expect_value=True)
        if not response.is_value:
            raise BadResponse(command.text, response.value)
        return response

    def _expect_hex(self, command: Command, length: int) -> bytes:
        response = self._expect_value(command)
        if len(response.value) != 2 * length or not HEX_DIGITS.fullmatch(response.value):
            raise BadResponse(command.text, response.value)
        return bytes.fromhex(response.text())

    def _expect_int(self, command: Command, base: int = 10) -> int:
        response = self._expect_value(command)
        digits = HEX_DIGITS if base == 16 else DECIMAL_DIGITS
        if not digits.fullmatch(response.value):
            raise BadResponse(command.text, response.value)
        return int(response.value, base)

    # System

    def system_version_bytes(self) -> bytes:
        """
        Query the module for its firmware version banner.

        Returns:
            Raw banner, e.g. b"RN2903 1.0.3 Aug  8 2017 15:11:09"

        Raises:
            BadResponse: Reply was not a value
        """
        return self._expect_value(Command.build("sys", "get", "ver")).value

    def system_version(self) -> str:
        """Firmware version banner as text."""
        return self.system_version_bytes().decode("ascii", errors="replace").strip()

    def system_module_reset(self) -> Optional[bytes]:
        """
        Reboot the module. The LoRaWAN stack is active again afterwards.

        The serial link may need reinitializing after the reboot; this
        is not detected here.

        Returns:
            Version banner printed by the rebooted module, or None if it
            answered with a bare "ok"
        """
        return self._reset(Command.build("sys", "reset"))

    def system_factory_reset(self) -> Optional[bytes]:
        """
        Restore factory defaults and reboot. See system_module_reset().
        """
        return self._reset(Command.build("sys", "factoryRESET"))

    def _reset(self, command: Command) -> Optional[bytes]:
        response = self._run(command, expect_value=True, timeout=self.config.reset_timeout)
        if response.is_ok:
            banner = None
        elif response.is_value and response.value.startswith(self.config.firmware_name.encode("ascii")):
            banner = response.value
        else:
            raise BadResponse(command.text, response.value)
        self.protocol.mark_reset()
        logger.info(f"Module reset ({command.text})")
        return banner

    def system_get_nvm(self, addr: NvmAddress) -> int:
        """
        Read one byte of user NVM.

        Raises:
            BadResponse: Reply was not a single hex byte
        """
        command = Command.build("sys", "get", "nvm", addr.to_param())
        value = self._expect_int(command, base=16)
        if not 0 <= value <= 0xFF:
            raise BadResponse(command.text, f"{value:x}".encode("ascii"))
        return value

    def system_set_nvm(self, addr: NvmAddress, value: int) -> None:
        """
        Write one byte of user NVM.

        Raises:
            ValueError: value not in 0-255
            DeviceError: Module rejected the write
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"NVM value must be 0-255, got {value}")
        self._expect_ok(Command.build("sys", "set", "nvm", addr.to_param(), f"{value:02x}"))

    def system_set_pin_digital(self, pin: str, high: bool) -> None:
        """Drive a GPIO pin, e.g. GPIO10 for the LoStik user LED."""
        if pin not in PINS:
            raise ValueError(f"Unknown pin: {pin}")
        self._expect_ok(Command.build("sys", "set", "pindig", pin, int(bool(high))))

    def system_get_vdd(self) -> int:
        """Supply voltage in millivolts."""
        return self._expect_int(Command.build("sys", "get", "vdd"))

    def system_get_hweui(self) -> bytes:
        """Preprogrammed 8-byte hardware EUI."""
        return self._expect_hex(Command.build("sys", "get", "hweui"), 8)

    # MAC

    def mac_pause(self) -> Optional[int]:
        """
        Pause the LoRaWAN stack so radio commands may be used.

        Returns:
            Pause length in milliseconds reported by the module, or None
            if it answered with a bare "ok"

        Raises:
            CannotPause: Already paused, or the module refused
        """
        self.protocol.check_can_pause()
        command = Command.build("mac", "pause")
        response = self._run(command, expect_value=True)
        if response.is_error:
            raise CannotPause(f"Module refused to pause: {response.value!r}")
        if response.is_ok:
            duration = None
        elif response.is_value and response.value.isdigit():
            duration = int(response.value)
        else:
            raise BadResponse(command.text, response.value)
        self.protocol.mark_paused()
        return duration

    def mac_resume(self) -> None:
        """
        Resume the LoRaWAN stack.

        Raises:
            CannotResume: Not paused, or the module refused
        """
        self.protocol.check_can_resume()
        command = Command.build("mac", "resume")
        response = self._run(command)
        if response.is_error:
            raise CannotResume(f"Module refused to resume: {response.value!r}")
        if not response.is_ok:
            raise BadResponse(command.text, response.value)
        self.protocol.mark_resumed()

    def mac_get_status(self) -> int:
        """32-bit MAC status word."""
        self.protocol.require_network_stack()
        return self._expect_int(Command.build("mac", "get", "status"), base=16)

    def mac_get_deveui(self) -> bytes:
        """Configured 8-byte device EUI."""
        self.protocol.require_network_stack()
        return self._expect_hex(Command.build("mac", "get", "deveui"), 8)

    # Radio

    def radio_set_modulation_mode(self, mode: ModulationMode) -> None:
        """
        Raises:
            TransceiverBusy: Network stack not paused
            DeviceError: Module rejected the mode
        """
        mode = ModulationMode(mode)
        with self.protocol.radio_operation():
            self._expect_ok(Command.build("radio", "set", "mod", mode.value))

    def radio_get_modulation_mode(self) -> ModulationMode:
        command = Command.build("radio", "get", "mod")
        with self.protocol.radio_operation():
            response = self._expect_value(command)
        try:
            return ModulationMode.parse(response.text())
        except ValueError:
            raise BadResponse(command.text, response.value) from None

    def radio_set_frequency(self, hz: int) -> None:
        if not FREQUENCY_MIN <= hz <= FREQUENCY_MAX:
            raise ValueError(f"Frequency {hz} outside {FREQUENCY_MIN}-{FREQUENCY_MAX} Hz")
        with self.protocol.radio_operation():
            self._expect_ok(Command.build("radio", "set", "freq", hz))

    def radio_get_frequency(self) -> int:
        with self.protocol.radio_operation():
            return self._expect_int(Command.build("radio", "get", "freq"))

    def radio_set_spreading_factor(self, sf: int) -> None:
        if sf not in SPREADING_FACTORS:
            raise ValueError(f"Spreading factor must be 7-12, got {sf}")
        with self.protocol.radio_operation():
            self._expect_ok(Command.build("radio", "set", "sf", f"sf{sf}"))

    def radio_set_power(self, dbm: int) -> None:
        if not POWER_MIN <= dbm <= POWER_MAX:
            raise ValueError(f"Power must be {POWER_MIN}-{POWER_MAX} dBm, got {dbm}")
        with self.protocol.radio_operation():
            self._expect_ok(Command.build("radio", "set", "pwr", dbm))

    def radio_rx(self, window_size: int, timeout: Optional[float] = None) -> Optional[Packet]:
        """
        Receive one packet.

        Args:
            window_size: Receive window (symbols for LoRa, ms for FSK);
                0 keeps the receiver open until a packet arrives
            timeout: Wait for the result line (defaults to config.rx_timeout)

        Returns:
            Packet, or None if the window closed without data. None is a
            normal polling result, not a failure.

        Raises:
            TransceiverBusy: Network stack not paused
            DeviceError: Module rejected the command
            TransportTimeout: No result line in time
        """
        if not 0 <= window_size <= RX_WINDOW_MAX:
            raise ValueError(f"Window size must be 0-{RX_WINDOW_MAX}, got {window_size}")
        if timeout is None:
            timeout = self.config.rx_timeout
        command = Command.build("radio", "rx", window_size)
        with self.protocol.radio_operation():
            response = self._run(command, expect_value=True)
            if response.is_ok:
                response = self.engine.read_response(timeout, expect_value=True)
            return self._decode_rx(command, response)

    def _decode_rx(self, command: Command, response: ClassifiedResponse) -> Optional[Packet]:
        if response.error is DeviceErrorKind.RADIO_ERROR:
            return None
        if response.is_error:
            raise DeviceError(response.error, response.value)
        words = response.value.split()
        if response.kind is ResponseKind.VALUE and words and words[0] == RADIO_RX_PREFIX:
            payload = words[1] if len(words) > 1 else b""
            try:
                return Packet(bytes.fromhex(payload.decode("ascii")))
            except ValueError:
                raise BadResponse(command.text, response.value) from None
        raise BadResponse(command.text, response.value)

    def radio_tx(self, payload: bytes, timeout: Optional[float] = None) -> None:
        """
        Transmit one packet.

        Raises:
            ValueError: Payload empty or over 255 bytes
            TransceiverBusy: Network stack not paused
            DeviceError: Module rejected the command, or RADIO_ERROR if
                the transmission failed
        """
        payload = bytes(payload)
        if not 1 <= len(payload) <= TX_PAYLOAD_MAX:
            raise ValueError(f"Payload must be 1-{TX_PAYLOAD_MAX} bytes, got {len(payload)}")
        if timeout is None:
            timeout = self.config.tx_timeout
        command = Command.build("radio", "tx", payload.hex())
        with self.protocol.radio_operation():
            self._expect_ok(command)
            response = self.engine.read_response(timeout, expect_value=True)
            if response.is_error:
                raise DeviceError(response.error, response.value)
            if response.value != RADIO_TX_OK:
                raise BadResponse(command.text, response.value)

    def __repr__(self) -> str:
        return f"Rn2903({self.transport!r}, {self.protocol!r})"
