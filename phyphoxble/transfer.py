"""Wire format shared by every phyphox BLE peripheral.

Covers the service and characteristic UUIDs, the framing used to send an
experiment to the phone, the float encoding of data packets and the
decoding of experiment events written by the phone.
"""

from __future__ import annotations

import struct
import zlib
from collections.abc import Iterator
from dataclasses import dataclass

EXPERIMENT_SERVICE_UUID = "cddf0001-30f7-4671-8b43-5e40ba53514a"
EXPERIMENT_CHARACTERISTIC_UUID = "cddf0002-30f7-4671-8b43-5e40ba53514a"
EXPERIMENT_CONTROL_CHARACTERISTIC_UUID = "cddf0003-30f7-4671-8b43-5e40ba53514a"
EVENT_CHARACTERISTIC_UUID = "cddf0004-30f7-4671-8b43-5e40ba53514a"

DATA_SERVICE_UUID = "cddf1001-30f7-4671-8b43-5e40ba53514a"
DATA_CHARACTERISTIC_UUID = "cddf1002-30f7-4671-8b43-5e40ba53514a"
CONFIG_CHARACTERISTIC_UUID = "cddf1003-30f7-4671-8b43-5e40ba53514a"

DEFAULT_DEVICE_NAME = "phyphox-Arduino"
CONFIG_SIZE = 20
PACKET_SIZE = 20
EVENT_SIZE = 17

_MAGIC = b"phyphox"
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


@dataclass(frozen=True)
class ExperimentEvent:
    """An event the phone reports, such as starting or pausing the experiment."""

    event_type: int
    experiment_time: int
    system_time: int


def _as_bytes(experiment: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(experiment, str):
        return experiment.encode("utf-8")
    return bytes(experiment)


def crc32(data: bytes | bytearray | memoryview, initial: int = 0) -> int:
    """CRC-32 (polynomial 0xEDB88320) of ``data``, continuing from ``initial``."""
    return zlib.crc32(bytes(data), initial & _MASK32) & _MASK32


def swap_int64(value: int) -> int:
    """Reverse the byte order of a signed 64 bit integer."""
    raw = (value & _MASK64).to_bytes(8, "little")
    return int.from_bytes(raw, "big", signed=True)


def transfer_header(experiment: bytes | bytearray | memoryview | str) -> bytes:
    """The 20 byte packet announcing an experiment: magic, size and checksum."""
    data = _as_bytes(experiment)
    header = (
        _MAGIC
        + (len(data) & _MASK32).to_bytes(4, "big")
        + crc32(data).to_bytes(4, "big")
    )
    return header.ljust(PACKET_SIZE, b"\x00")


def experiment_packets(
    experiment: bytes | bytearray | memoryview | str,
) -> Iterator[bytes]:
    """Yield the header followed by the experiment in packets of 20 bytes."""
    data = _as_bytes(experiment)
    yield transfer_header(data)
    for start in range(0, len(data), PACKET_SIZE):
        yield data[start : start + PACKET_SIZE]


def pack_floats(*args: float) -> bytes:
    """Encode values as consecutive little-endian 32 bit floats."""
    if not args:
        raise ValueError("at least one value is required")
    return struct.pack(f"<{len(args)}f", *args)


def unpack_floats(data: bytes | bytearray | memoryview, count: int) -> tuple[float, ...]:
    """Decode the first ``count`` little-endian 32 bit floats of ``data``."""
    if count < 0:
        raise ValueError("count must not be negative")
    needed = 4 * count
    if len(data) < needed:
        raise ValueError(f"{needed} bytes needed, {len(data)} given")
    return struct.unpack_from(f"<{count}f", bytes(data))


def parse_event(data: bytes | bytearray | memoryview) -> ExperimentEvent:
    """Decode the 17 bytes the phone writes to the event characteristic."""
    raw = bytes(data)
    if len(raw) < EVENT_SIZE:
        raise ValueError(f"an event needs {EVENT_SIZE} bytes, {len(raw)} given")
    return ExperimentEvent(
        event_type=raw[0],
        experiment_time=int.from_bytes(raw[1:9], "big", signed=True),
        system_time=int.from_bytes(raw[9:17], "big", signed=True),
    )


def requests_transfer(control_value: int | bytes | bytearray | memoryview) -> bool:
    """Whether a write to the control characteristic asks for the experiment."""
    if isinstance(control_value, int):
        first = control_value
    else:
        raw = bytes(control_value)
        if not raw:
            return False
        first = raw[0]
    return bool(first & 0x01)