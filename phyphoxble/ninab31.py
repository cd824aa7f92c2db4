"""Driver for a u-blox NINA-B31 module speaking AT commands over a serial line."""

from __future__ import annotations

import time
from typing import Protocol

import serial

_UNSOLICITED_CONNECT = "UUBTACLC:0"
_UNSOLICITED_DISCONNECT = "UUBTACLD:0"
_CHAR_WRITTEN = "UUBTGRW:"

MAX_NAME_LENGTH = 29
MAX_TEXT_VALUE_LENGTH = 40
MAX_BINARY_VALUE_LENGTH = 20
MIN_CONNECTION_INTERVAL = 32
MAX_CONNECTION_INTERVAL = 16384


class Stream(Protocol):
    """What the driver needs from a serial port."""

    @property
    def in_waiting(self) -> int: ...

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> int | None: ...

    def flush(self) -> None: ...


def _to_int(text: str) -> int:
    """Leading integer of ``text``, 0 when there is none."""
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for char in text:
        if not char.isdigit():
            break
        digits += char
    return sign * int(digits) if digits else 0


def open_serial(device: str, baudrate: int = 115200) -> serial.Serial:
    """Open the serial port the module is attached to, without blocking reads."""
    return serial.Serial(device, baudrate=baudrate, timeout=0)


class NinaB31:
    """A NINA-B31 module acting as a BLE peripheral."""

    def __init__(self, stream: Stream) -> None:
        self.stream = stream
        self.connected = False
        self._input = ""

    def _read_char(self) -> str | None:
        if not self.stream.in_waiting:
            return None
        data = self.stream.read(1)
        return data.decode("latin-1") if data else None

    def _send(self, command: str) -> None:
        while self.stream.in_waiting:
            self.stream.read(self.stream.in_waiting)
        self.stream.write(command.encode("latin-1") + b"\r")
        self.stream.flush()

    def _await_reply(self, timeout: int) -> str | None:
        """Collect the reply until OK; None on ERROR or after ``timeout`` ms."""
        received = ""
        start = time.monotonic()
        while timeout == 0 or (time.monotonic() - start) * 1000 < timeout:
            char = self._read_char()
            if char is None:
                continue
            received += char
            if received.endswith("ERROR\r"):
                return None
            if received.endswith("OK\r"):
                return received
        return None

    def config_module(self) -> bool:
        """Store 115200 baud without flow control and restart the module."""
        for command in ("AT+UMRS=115200,2,8,1,1", "AT&W0", "AT+CPWROFF"):
            self.stream.write(command.encode("latin-1") + b"\r")
        self.stream.flush()
        time.sleep(2.0)
        return self.check_response("ATE0", 500)

    def begin(self) -> bool:
        """Make sure the module answers, reconfiguring it if needed."""
        time.sleep(0.5)
        self.check_response("AT", 500)
        for _ in range(3):
            if self.check_response("ATE0", 500) or self.config_module():
                return True
        return False

    def set_local_name(self, name: str) -> bool:
        if len(name) > MAX_NAME_LENGTH:
            raise ValueError(f"name longer than {MAX_NAME_LENGTH} characters")
        return self.check_response(f'AT+UBTLN="{name}"', 1000)

    def advertise(self) -> bool:
        return self.check_response("AT+UBTDM=3", 1000)

    def stop_advertise(self) -> bool:
        return self.check_response("AT+UBTDM=1", 1000)

    def set_connection_interval(self, min_interval: int, max_interval: int) -> bool:
        """Set the connection interval range, in units of 1.25 ms."""
        for interval in (min_interval, max_interval):
            if not MIN_CONNECTION_INTERVAL <= interval <= MAX_CONNECTION_INTERVAL:
                raise ValueError(f"connection interval {interval} out of range")
        if max_interval < min_interval:
            raise ValueError("maximum interval below minimum interval")
        return self.check_response(
            f"AT+UBTLECFG=1,{min_interval}", 1000
        ) and self.check_response(f"AT+UBTLECFG=2,{max_interval}", 1000)

    def write_value(self, characteristic: int, value: str) -> bool:
        """Notify a hex-encoded value; False when no central is connected."""
        if len(value) > MAX_TEXT_VALUE_LENGTH:
            raise ValueError(f"value longer than {MAX_TEXT_VALUE_LENGTH} characters")
        if not self.connected:
            return False
        return self.check_response(f"AT+UBTGSN=0,{characteristic},{value}", 1000)

    def write_bytes(self, characteristic: int, data: bytes) -> bool:
        """Notify raw bytes; False when no central is connected."""
        if len(data) > MAX_BINARY_VALUE_LENGTH:
            raise ValueError(f"more than {MAX_BINARY_VALUE_LENGTH} bytes")
        if not self.connected:
            return False
        return self.check_response(
            f"AT+UBTGSN=0,{characteristic},{bytes(data).hex()}", 1000
        )

    def parse_response(self, command: str, timeout: int) -> int | None:
        """Send ``command`` and return the number after the colon of its reply."""
        self._send(command)
        reply = self._await_reply(timeout)
        if reply is None:
            return None
        colon = reply.find(":")
        if colon == -1:
            return None
        comma = reply.find(",")
        if comma != -1:
            return _to_int(reply[colon + 1 : comma])
        return _to_int(reply[colon + 1 :])

    def check_response(self, command: str, timeout: int) -> bool:
        """Send ``command`` and report whether the module answered OK in time."""
        self._send(command)
        return self._await_reply(timeout) is not None

    def _check_unsolicited(self) -> bool:
        if _UNSOLICITED_CONNECT in self._input:
            self.connected = True
            return True
        if _UNSOLICITED_DISCONNECT in self._input:
            self.connected = False
            return True
        return False

    def poll(self) -> bool:
        """Read one character; True once a line other than a link event is complete."""
        char = self._read_char()
        if char is None:
            return False
        self._input += char
        if not self._input.endswith("\r"):
            return False
        if self._check_unsolicited():
            self.flush_input()
            return False
        return True

    def check_char_written(self, handle: int) -> str | None:
        """The value written to characteristic ``handle`` in the current line."""
        line = self._input
        if _CHAR_WRITTEN not in line:
            return None
        first = line.find(",")
        second = line.find(",", first + 1) if first != -1 else -1
        third = line.find(",", second + 1) if second != -1 else -1
        if first == -1 or second == -1 or third == -1:
            return None
        if _to_int(line[first + 1 : second]) != handle:
            return None
        return line[second + 1 : third]

    def flush_input(self) -> None:
        self._input = ""