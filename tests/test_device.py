# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/test_device.py

Typed operation tests against a scripted transport.

Covers:
- System queries, resets and NVM access
- mac pause/resume and the state transitions they confirm
- Radio gating, modulation, rx and tx
- Error propagation (DeviceError, BadResponse, TransportTimeout)
"""

from unittest.mock import patch

import pytest

from rn2903.core.response import DeviceErrorKind, ResponseKind
from rn2903.core.types import ModulationMode, NvmAddress, Packet
from rn2903.device import Rn2903
from rn2903.exceptions import (
    BadResponse,
    CannotPause,
    CannotResume,
    DeviceError,
    InvalidAddress,
    NetworkStackPaused,
    TransceiverBusy,
    TransportError,
    TransportTimeout,
    WrongDevice,
)

from .conftest import TIMEOUT, ScriptedTransport

VERSION = b"RN2903 1.0.3 Aug  8 2017 15:11:09"


class TestSystem:
    def test_version_bytes(self, driver, transport):
        transport.script(b"sys get ver", VERSION)
        assert driver.system_version_bytes() == VERSION
        assert transport.writes == [b"sys get ver\r\n"]

    def test_version_text(self, driver, transport):
        transport.script(b"sys get ver", VERSION)
        assert driver.system_version() == VERSION.decode()

    @pytest.mark.parametrize("reply", [b"invalid_param", b"ok", b""])
    def test_version_bad_response(self, driver, transport, reply):
        transport.script(b"sys get ver", reply)
        with pytest.raises(BadResponse):
            driver.system_version_bytes()

    def test_verify(self, driver, transport):
        transport.script(b"sys get ver", VERSION)
        assert driver.verify() == VERSION.decode()

    def test_verify_wrong_device(self, driver, transport):
        transport.script(b"sys get ver", b"RN2483 1.0.4 Oct 12 2017 14:59:25")
        with pytest.raises(WrongDevice) as excinfo:
            driver.verify()
        assert excinfo.value.version.startswith("RN2483")

    def test_verify_garbage(self, driver, transport):
        transport.script(b"sys get ver", b"err")
        with pytest.raises(WrongDevice):
            driver.verify()

    @pytest.mark.parametrize("method,command", [
        ("system_module_reset", b"sys reset\r\n"),
        ("system_factory_reset", b"sys factoryRESET\r\n"),
    ])
    def test_reset_with_banner(self, paused_driver, transport, method, command):
        transport.script(command, VERSION)
        assert getattr(paused_driver, method)() == VERSION
        assert transport.writes == [command]
        assert paused_driver.state.network_stack_active
        assert transport.read_timeouts == [paused_driver.config.reset_timeout]

    def test_reset_with_ok(self, paused_driver, transport):
        transport.script(b"sys reset", b"ok")
        assert paused_driver.system_module_reset() is None
        assert paused_driver.state.network_stack_active

    @pytest.mark.parametrize("reply", [b"invalid_param", b"garbage"])
    def test_reset_bad_response_keeps_state(self, paused_driver, transport, reply):
        transport.script(b"sys reset", reply)
        with pytest.raises(BadResponse):
            paused_driver.system_module_reset()
        assert not paused_driver.state.network_stack_active

    def test_get_nvm(self, driver, transport):
        transport.script(b"sys get nvm 300", b"AB")
        assert driver.system_get_nvm(NvmAddress(0x300)) == 0xAB

    def test_get_nvm_single_digit(self, driver, transport):
        transport.script(b"sys get nvm 3ff", b"7")
        assert driver.system_get_nvm(NvmAddress(0x3FF)) == 7

    @pytest.mark.parametrize("reply", [
        b"ok", b"invalid_param", b"zz", b"1FF",
        b"0x1f", b"+ff", b"-1", b"1_f", b" 1f", b"1f ",
    ])
    def test_get_nvm_bad_response(self, driver, transport, reply):
        transport.script(b"sys get nvm 300", reply)
        with pytest.raises(BadResponse):
            driver.system_get_nvm(NvmAddress(0x300))

    def test_set_nvm(self, driver, transport):
        transport.script(b"sys set nvm 300 ab", b"ok")
        driver.system_set_nvm(NvmAddress(0x300), 0xAB)
        assert transport.writes == [b"sys set nvm 300 ab\r\n"]

    def test_set_nvm_zero_padded(self, driver, transport):
        transport.script(b"sys set nvm 301 05", b"ok")
        driver.system_set_nvm(NvmAddress(0x301), 5)

    def test_set_nvm_rejected(self, driver, transport):
        transport.script(b"sys set nvm 300 ab", b"invalid_param")
        with pytest.raises(DeviceError) as excinfo:
            driver.system_set_nvm(NvmAddress(0x300), 0xAB)
        assert excinfo.value.kind is DeviceErrorKind.INVALID_PARAMETER

    @pytest.mark.parametrize("value", [-1, 256])
    def test_set_nvm_value_range(self, driver, transport, value):
        with pytest.raises(ValueError):
            driver.system_set_nvm(NvmAddress(0x300), value)
        assert transport.writes == []

    def test_nvm_address_checked_before_io(self, driver, transport):
        with pytest.raises(InvalidAddress):
            driver.system_get_nvm(NvmAddress(0x100))
        assert transport.writes == []

    def test_set_pin_digital(self, driver, transport):
        transport.script(b"sys set pindig GPIO10 1", b"ok")
        transport.script(b"sys set pindig GPIO10 0", b"ok")
        driver.system_set_pin_digital("GPIO10", True)
        driver.system_set_pin_digital("GPIO10", False)
        assert len(transport.writes) == 2

    def test_set_pin_unknown(self, driver, transport):
        with pytest.raises(ValueError):
            driver.system_set_pin_digital("GPIO99", True)
        assert transport.writes == []

    def test_get_vdd(self, driver, transport):
        transport.script(b"sys get vdd", b"3298")
        assert driver.system_get_vdd() == 3298

    def test_get_hweui(self, driver, transport):
        transport.script(b"sys get hweui", b"0004A30B001A2B3C")
        assert driver.system_get_hweui() == bytes.fromhex("0004A30B001A2B3C")

    def test_get_hweui_wrong_length(self, driver, transport):
        transport.script(b"sys get hweui", b"0004A30B")
        with pytest.raises(BadResponse):
            driver.system_get_hweui()

    def test_get_hweui_spaced(self, driver, transport):
        transport.script(b"sys get hweui", b"00 04 A3 0B 00 1A 2B")
        with pytest.raises(BadResponse):
            driver.system_get_hweui()

    @pytest.mark.parametrize("reply", [b"3_300", b"+3300", b"-3300", b" 3300", b"3300 ", b"3.3", b"0x0ce4"])
    def test_get_vdd_bad_response(self, driver, transport, reply):
        transport.script(b"sys get vdd", reply)
        with pytest.raises(BadResponse):
            driver.system_get_vdd()

    def test_get_status_bad_response(self, driver, transport):
        transport.script(b"mac get status", b"0x00000401")
        with pytest.raises(BadResponse):
            driver.mac_get_status()


class TestMac:
    def test_pause_ok(self, driver, transport):
        transport.script(b"mac pause", b"ok")
        assert driver.mac_pause() is None
        assert not driver.state.network_stack_active
        assert transport.writes == [b"mac pause\r\n"]

    def test_pause_duration(self, driver, transport):
        transport.script(b"mac pause", b"4294967245")
        assert driver.mac_pause() == 4294967245
        assert not driver.state.network_stack_active

    def test_pause_refused(self, driver, transport):
        transport.script(b"mac pause", b"busy")
        with pytest.raises(CannotPause):
            driver.mac_pause()
        assert driver.state.network_stack_active

    def test_pause_bad_response(self, driver, transport):
        transport.script(b"mac pause", b"paused for a while")
        with pytest.raises(BadResponse):
            driver.mac_pause()
        assert driver.state.network_stack_active

    def test_pause_timeout_keeps_state(self, driver, transport):
        transport.script(b"mac pause", TIMEOUT)
        with pytest.raises(TransportTimeout):
            driver.mac_pause()
        assert driver.state.network_stack_active

    def test_pause_twice(self, paused_driver, transport):
        with pytest.raises(CannotPause):
            paused_driver.mac_pause()
        assert transport.writes == []

    def test_resume(self, paused_driver, transport):
        transport.script(b"mac resume", b"ok")
        paused_driver.mac_resume()
        assert paused_driver.state.network_stack_active

    def test_resume_without_pause(self, driver, transport):
        with pytest.raises(CannotResume):
            driver.mac_resume()
        assert transport.writes == []

    def test_resume_refused(self, paused_driver, transport):
        transport.script(b"mac resume", b"invalid_param")
        with pytest.raises(CannotResume):
            paused_driver.mac_resume()
        assert not paused_driver.state.network_stack_active

    def test_get_status(self, driver, transport):
        transport.script(b"mac get status", b"00000401")
        assert driver.mac_get_status() == 0x401

    def test_get_deveui(self, driver, transport):
        transport.script(b"mac get deveui", b"0004A30B001A2B3C")
        assert driver.mac_get_deveui().hex() == "0004a30b001a2b3c"

    def test_mac_blocked_while_paused(self, paused_driver, transport):
        with pytest.raises(NetworkStackPaused):
            paused_driver.mac_get_status()
        assert transport.writes == []

    def test_resume_restores_mac_and_blocks_radio(self, paused_driver, transport):
        transport.script(b"mac resume", b"ok")
        transport.script(b"mac get status", b"00000000")
        paused_driver.mac_resume()
        assert paused_driver.mac_get_status() == 0
        with pytest.raises(TransceiverBusy):
            paused_driver.radio_set_modulation_mode(ModulationMode.LORA)


class TestRadio:
    def test_radio_before_pause_no_io(self, driver, transport):
        with pytest.raises(TransceiverBusy):
            driver.radio_set_modulation_mode(ModulationMode.LORA)
        with pytest.raises(TransceiverBusy):
            driver.radio_rx(0)
        with pytest.raises(TransceiverBusy):
            driver.radio_tx(b"hi")
        assert transport.writes == []
        assert transport.reads == 0

    def test_pause_then_radio(self, driver, transport):
        transport.script(b"mac pause", b"ok")
        transport.script(b"radio set mod lora", b"ok")
        driver.mac_pause()
        driver.radio_set_modulation_mode(ModulationMode.LORA)
        assert transport.writes[-1] == b"radio set mod lora\r\n"

    def test_set_modulation_invalid_param(self, paused_driver, transport):
        transport.script(b"radio set mod fsk", b"invalid_param")
        with pytest.raises(DeviceError) as excinfo:
            paused_driver.radio_set_modulation_mode(ModulationMode.FSK)
        assert excinfo.value.kind is DeviceErrorKind.INVALID_PARAMETER
        assert not paused_driver.state.radio_operation_in_flight

    def test_set_modulation_from_string(self, paused_driver, transport):
        transport.script(b"radio set mod fsk", b"ok")
        paused_driver.radio_set_modulation_mode("fsk")

    def test_get_modulation(self, paused_driver, transport):
        transport.script(b"radio get mod", b"lora")
        assert paused_driver.radio_get_modulation_mode() is ModulationMode.LORA

    def test_get_modulation_unknown(self, paused_driver, transport):
        transport.script(b"radio get mod", b"ook")
        with pytest.raises(BadResponse):
            paused_driver.radio_get_modulation_mode()

    def test_frequency(self, paused_driver, transport):
        transport.script(b"radio set freq 915000000", b"ok")
        transport.script(b"radio get freq", b"915000000")
        paused_driver.radio_set_frequency(915_000_000)
        assert paused_driver.radio_get_frequency() == 915_000_000

    def test_frequency_out_of_band(self, paused_driver, transport):
        with pytest.raises(ValueError):
            paused_driver.radio_set_frequency(868_100_000)
        assert transport.writes == []

    def test_spreading_factor(self, paused_driver, transport):
        transport.script(b"radio set sf sf12", b"ok")
        paused_driver.radio_set_spreading_factor(12)
        with pytest.raises(ValueError):
            paused_driver.radio_set_spreading_factor(6)

    def test_power(self, paused_driver, transport):
        transport.script(b"radio set pwr 20", b"ok")
        paused_driver.radio_set_power(20)
        with pytest.raises(ValueError):
            paused_driver.radio_set_power(21)

    def test_rx_packet(self, paused_driver, transport):
        transport.script(b"radio rx 0", b"ok", b"radio_rx  48656C6C6F")
        packet = paused_driver.radio_rx(0)
        assert packet == Packet(b"Hello")
        assert transport.writes == [b"radio rx 0\r\n"]
        assert transport.reads == 2
        assert transport.read_timeouts == [0.5, 2.0]
        assert not paused_driver.state.radio_operation_in_flight

    def test_rx_window_closed(self, paused_driver, transport):
        transport.script(b"radio rx 100", b"ok", b"radio_err")
        assert paused_driver.radio_rx(100) is None

    def test_rx_radio_err_first_line(self, paused_driver, transport):
        transport.script(b"radio rx 100", b"radio_err")
        assert paused_driver.radio_rx(100) is None
        assert transport.reads == 1

    def test_rx_rejected(self, paused_driver, transport):
        transport.script(b"radio rx 0", b"busy")
        with pytest.raises(DeviceError) as excinfo:
            paused_driver.radio_rx(0)
        assert excinfo.value.kind is DeviceErrorKind.BUSY

    def test_rx_malformed_payload(self, paused_driver, transport):
        transport.script(b"radio rx 0", b"ok", b"radio_rx  XYZ")
        with pytest.raises(BadResponse):
            paused_driver.radio_rx(0)

    def test_rx_timeout_clears_flag(self, paused_driver, transport):
        transport.script(b"radio rx 65535", TIMEOUT)
        with pytest.raises(TransportTimeout):
            paused_driver.radio_rx(65535)
        assert not paused_driver.state.radio_operation_in_flight

        transport.script(b"radio set mod lora", b"ok")
        paused_driver.radio_set_modulation_mode(ModulationMode.LORA)

    def test_rx_custom_timeout(self, paused_driver, transport):
        transport.script(b"radio rx 0", b"ok", TIMEOUT)
        with pytest.raises(TransportTimeout):
            paused_driver.radio_rx(0, timeout=0.1)
        assert transport.read_timeouts[-1] == 0.1

    @pytest.mark.parametrize("window", [-1, 65536])
    def test_rx_window_range(self, paused_driver, transport, window):
        with pytest.raises(ValueError):
            paused_driver.radio_rx(window)
        assert transport.writes == []

    def test_tx(self, paused_driver, transport):
        transport.script(b"radio tx 48656c6c6f", b"ok", b"radio_tx_ok")
        paused_driver.radio_tx(b"Hello")
        assert transport.reads == 2
        assert transport.read_timeouts[-1] == paused_driver.config.tx_timeout

    def test_tx_failed(self, paused_driver, transport):
        transport.script(b"radio tx 01", b"ok", b"radio_err")
        with pytest.raises(DeviceError) as excinfo:
            paused_driver.radio_tx(b"\x01")
        assert excinfo.value.kind is DeviceErrorKind.RADIO_ERROR
        assert not paused_driver.state.radio_operation_in_flight

    def test_tx_rejected(self, paused_driver, transport):
        transport.script(b"radio tx 01", b"invalid_param")
        with pytest.raises(DeviceError):
            paused_driver.radio_tx(b"\x01")
        assert transport.reads == 1

    @pytest.mark.parametrize("payload", [b"", bytes(256)])
    def test_tx_payload_size(self, paused_driver, transport, payload):
        with pytest.raises(ValueError):
            paused_driver.radio_tx(payload)
        assert transport.writes == []


class TestRawAccess:
    def test_transact(self, driver, transport):
        transport.script(b"sys get ver", VERSION)
        response = driver.transact("sys get ver")
        assert response.kind is ResponseKind.VALUE
        assert response.value == VERSION

    def test_read_line(self, driver, transport):
        transport.feed(b"radio_rx  00")
        assert driver.read_line() == b"radio_rx  00"


class TestLifecycle:
    def test_context_manager_closes(self, transport):
        with Rn2903(transport) as txvr:
            assert txvr.transport is transport
        assert not transport.is_open

    def test_open_verifies(self):
        scripted = ScriptedTransport().script(b"sys get ver", VERSION)
        with patch("rn2903.device.SerialTransport", return_value=scripted) as factory:
            txvr = Rn2903.open("/dev/ttyUSB0")
        factory.assert_called_once_with("/dev/ttyUSB0", None)
        assert txvr.transport is scripted

    def test_open_closes_on_wrong_device(self):
        scripted = ScriptedTransport().script(b"sys get ver", b"RN2483 1.0.4")
        with patch("rn2903.device.SerialTransport", return_value=scripted):
            with pytest.raises(WrongDevice):
                Rn2903.open("/dev/ttyUSB0")
        assert not scripted.is_open

    def test_open_closes_on_timeout(self):
        scripted = ScriptedTransport()
        with patch("rn2903.device.SerialTransport", return_value=scripted):
            with pytest.raises(TransportError):
                Rn2903.open("/dev/ttyUSB0")
        assert not scripted.is_open
