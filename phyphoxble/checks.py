"""Validation of user input and reporting of the errors it finds.

Setters on experiment elements never raise: the first problem an element
runs into is recorded on it, and the experiment later shows it to the user
in an "ERRORS" view.
"""

from __future__ import annotations

from dataclasses import dataclass

# Experiment capacity
N_VIEWS = 15
N_SENSORS = 5
N_ELEMENTS = 20
N_EXPORT_SETS = 10
N_CHANNEL = 10
NUMBER_OF_CHANNELS = 5

# Graph styles
STYLE_LINES = "lines"
STYLE_DOTS = "dots"
STYLE_VBARS = "vbars"
STYLE_HBARS = "hbars"
STYLE_MAP = "map"
STYLES = frozenset({STYLE_LINES, STYLE_DOTS, STYLE_VBARS, STYLE_HBARS, STYLE_MAP})

# Axis layouts
LAYOUT_AUTO = "auto"
LAYOUT_EXTEND = "extend"
LAYOUT_FIXED = "fixed"
LAYOUTS = frozenset({LAYOUT_AUTO, LAYOUT_EXTEND, LAYOUT_FIXED})

# Phone sensors
SENSOR_ACCELEROMETER = "accelerometer"
SENSOR_ACCELEROMETER_WITHOUT_G = "linear_acceleration"
SENSOR_GYROSCOPE = "gyroscope"
SENSOR_MAGNETOMETER = "magnetometer"
SENSOR_PRESSURE = "pressure"
SENSOR_TEMPERATURE = "temperature"
SENSOR_LIGHT = "light"
SENSOR_HUMIDITY = "humidity"
SENSOR_PROXIMITY = "proximity"

SENSOR_TYPES = frozenset(
    {
        "accelerometer",
        "linear_acceleration",
        "gyroscope",
        "light",
        "magnetic_field",
        "pressure",
        "temperature",
    }
)
COMPONENTS = frozenset({"x", "y", "z", "abs", "accuracy", "t"})

# Colours
COLOR_RED = "fe005d"
COLOR_BLUE = "39a2ff"
COLOR_GREEN = "2bfb4c"
COLOR_ORANGE = "ff7e22"
COLOR_WHITE = "ffffff"
COLOR_YELLOW = "edf668"
COLOR_MAGENTA = "eb46f4"

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class Error:
    """A problem found in the configuration of an element."""

    message: str = ""

    def to_xml(self) -> str:
        """Render the error as an info field shown in red."""
        text = self.message or "Unknown Error"
        return (
            f'\t\t<info  label="ERROR FOUND: {text}" color="ff0000">\n'
            "\t\t</info>\n"
        )


class ErrorRecorder:
    """Keeps the first error reported to an object."""

    def __init__(self) -> None:
        self.error: Error | None = None

    def record(self, error: Error | None) -> Error | None:
        """Remember ``error`` unless an earlier one is already held."""
        if self.error is None:
            self.error = error
        return self.error


def _error(code: str, origin: str) -> Error:
    return Error(f"{code}, in {origin}(). \n")


def check_length(text: str, max_length: int, origin: str) -> Error | None:
    """Fail with ERR_01 if ``text`` is longer than ``max_length`` bytes."""
    if len(text.encode("utf-8")) > max_length:
        return _error("ERR_01", origin)
    return None


def check_upper(value: int, upper: int, origin: str) -> Error | None:
    """Fail with ERR_02 if ``value`` exceeds ``upper``."""
    if value > upper:
        return _error("ERR_02", origin)
    return None


def check_hex(text: str, origin: str) -> Error | None:
    """Fail with ERR_03 unless ``text`` is a six digit hex colour."""
    if len(text) != 6 or any(char not in _HEX_DIGITS for char in text):
        return _error("ERR_03", origin)
    return None


def check_style(text: str, origin: str) -> Error | None:
    """Fail with ERR_04 unless ``text`` is a known graph style."""
    if text not in STYLES:
        return _error("ERR_04", origin)
    return None


def check_layout(text: str, origin: str) -> Error | None:
    """Fail with ERR_05 unless ``text`` is a known axis layout."""
    if text not in LAYOUTS:
        return _error("ERR_05", origin)
    return None


def check_sensor(text: str, origin: str) -> Error | None:
    """Fail with ERR_04 unless ``text`` is a supported sensor type."""
    if text not in SENSOR_TYPES:
        return _error("ERR_04", origin)
    return None


def check_component(text: str, origin: str) -> Error | None:
    """Fail with ERR_04 unless ``text`` is a sensor component name."""
    if text not in COMPONENTS:
        return _error("ERR_04", origin)
    return None