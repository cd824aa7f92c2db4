"""A phyphox BLE peripheral running on a NINA-B31 module."""

from __future__ import annotations

import contextlib
import time
from collections.abc import Callable

from .experiment import Experiment, default_experiment
from .ninab31 import MAX_TEXT_VALUE_LENGTH, NinaB31
from .transfer import experiment_packets, pack_floats, requests_transfer, unpack_floats

DEFAULT_PERIPHERAL_NAME = "phyphox-senseBox"

ADVERTISING_DATA = "020A0605121800280011074A5153BA405E438B7146F7300100DFCD"

_EXPERIMENT_SERVICE = "CDDF000130F746718B435E40BA53514A"
_CONTROL_CHARACTERISTIC = "CDDF000330F746718B435E40BA53514A,1a,1,1"
_EXPERIMENT_CHARACTERISTIC = "CDDF000230F746718B435E40BA53514A,1a,1,1"
_DATA_SERVICE = "CDDF100130F746718B435E40BA53514A"
_DATA_CHARACTERISTIC = "CDDF100230F746718B435E40BA53514A,1a,1,1"
_CONFIG_CHARACTERISTIC = "CDDF100330F746718B435E40BA53514A,1a,1,1"

_VALUE_BUFFER_SIZE = 21
_PACKET_DELAY = 0.005
_POLL_DELAY = 0.005


def parse_hex_value(text: str | None) -> bytes | None:
    """Decode the hex text the module reports for a written characteristic.

    Returns None for missing, empty, too long, odd-length or non-hex text.
    """
    if not text or len(text) > MAX_TEXT_VALUE_LENGTH or len(text) % 2:
        return None
    try:
        return bytes.fromhex(text)
    except ValueError:
        return None


class PhyphoxPeripheral:
    """Serves a phyphox experiment and data channels through a NINA-B31 module."""

    def __init__(self, port: NinaB31, device_name: str = DEFAULT_PERIPHERAL_NAME) -> None:
        self.port = port
        self.device_name = device_name
        self.min_con_interval = 12
        self.max_con_interval = 48
        self.slave_latency = 0
        self.timeout = 50
        self.mtu = 20
        self.config_handler: Callable[[], None] | None = None
        self.experiment_data: bytes | None = None
        self.transferred = False
        self.handles: dict[str, int] = {}
        self._control = bytearray(_VALUE_BUFFER_SIZE)
        self._config = bytearray(_VALUE_BUFFER_SIZE)

    def _register(self, name: str, command: str) -> None:
        handle = self.port.parse_response(command, 1000)
        self.handles[name] = -1 if handle is None else handle

    def start(self, experiment: Experiment | bytes | str | None = None) -> None:
        """Set up the GATT services, load the experiment and start advertising.

        Without an experiment, the one added before is served, or else the
        default experiment.
        """
        port = self.port
        port.begin()
        port.stop_advertise()
        port.check_response(f"AT+UBTAD={ADVERTISING_DATA}", 1000)
        self._register("experiment_service", f"AT+UBTGSER={_EXPERIMENT_SERVICE}")
        self._register("control", f"AT+UBTGCHA={_CONTROL_CHARACTERISTIC}")
        self._register("experiment", f"AT+UBTGCHA={_EXPERIMENT_CHARACTERISTIC}")
        self._register("data_service", f"AT+UBTGSER={_DATA_SERVICE}")
        self._register("data", f"AT+UBTGCHA={_DATA_CHARACTERISTIC}")
        self._register("config", f"AT+UBTGCHA={_CONFIG_CHARACTERISTIC}")

        if isinstance(experiment, Experiment):
            self.add_experiment(experiment)
        elif isinstance(experiment, str):
            self.experiment_data = experiment.encode("utf-8")
        elif experiment is not None:
            self.experiment_data = bytes(experiment)
        elif self.experiment_data is None:
            self.add_experiment(default_experiment())

        # An interval the module cannot take leaves its own setting in place.
        with contextlib.suppress(ValueError):
            port.set_connection_interval(self.min_con_interval, self.max_con_interval)
        port.check_response(f"AT+UBTAD={ADVERTISING_DATA}", 1000)
        port.advertise()
        port.set_local_name(self.device_name)

    def add_experiment(self, experiment: Experiment) -> None:
        """Render ``experiment`` and keep it for the next transfer."""
        self.experiment_data = experiment.to_xml(self.device_name).encode("utf-8")

    def transfer_experiment(self) -> None:
        """Send the experiment to the phone through the experiment characteristic."""
        if self.experiment_data is None:
            raise RuntimeError("no experiment to transfer")
        self.port.stop_advertise()
        handle = self.handles.get("experiment", -1)
        for index, packet in enumerate(experiment_packets(self.experiment_data)):
            self.port.write_bytes(handle, packet)
            if index:
                time.sleep(_PACKET_DELAY)
        self.transferred = True
        self.port.advertise()

    def write(self, *args: float) -> bool:
        """Send up to five floats to the phone once it has the experiment."""
        if not self.transferred:
            return False
        return self.port.write_bytes(self.handles.get("data", -1), pack_floats(*args))

    def read_bytes(self, size: int) -> bytes:
        """The first ``size`` bytes last written to the config characteristic."""
        return bytes(self._config[:size])

    def read_float(self) -> float:
        """The first float last written to the config characteristic."""
        return unpack_floats(self._config, 1)[0]

    def _store(self, target: bytearray, value: bytes) -> None:
        target[: len(value)] = value

    def _control_written(self) -> None:
        if requests_transfer(self._control[0]):
            self.transferred = False
            self.transfer_experiment()
        else:
            self.transferred = True

    def poll(self) -> None:
        """Handle one character of module output and any completed write."""
        if not self.port.poll():
            return
        control = parse_hex_value(self.port.check_char_written(self.handles.get("control", -1)))
        if control is not None:
            self._store(self._control, control)
            self._control_written()
        config = parse_hex_value(self.port.check_char_written(self.handles.get("config", -1)))
        if config is not None:
            self._store(self._config, config)
            if self.config_handler is not None:
                self.config_handler()
        self.port.flush_input()

    def poll_for(self, timeout: float) -> None:
        """Keep polling for ``timeout`` milliseconds."""
        start = time.monotonic()
        while (time.monotonic() - start) * 1000 < timeout:
            self.poll()
            time.sleep(_POLL_DELAY)