"""A complete phyphox experiment and its XML description."""

from __future__ import annotations

from typing import TypeVar

from .checks import N_ELEMENTS, N_EXPORT_SETS, N_SENSORS, N_VIEWS, NUMBER_OF_CHANNELS
from .graph import Graph
from .layout import ExportSet, Sensor, View
from .widgets import InfoField, Value

DEFAULT_MTU = 20

_DATA_CHAR = "cddf1002-30f7-4671-8b43-5e40ba53514a"
_CONFIG_CHAR = "cddf1003-30f7-4671-8b43-5e40ba53514a"

_MAX_REPORTED_ELEMENT_ERRORS = 3

_T = TypeVar("_T")


def _place(slots: list[_T | None], item: _T) -> int | None:
    """Put ``item`` into the first free slot and return its index."""
    for index, used in enumerate(slots):
        if used is None:
            slots[index] = item
            return index
    return None


class Experiment:
    """Everything the phone needs to show and record the device's data."""

    number_of_channels = NUMBER_OF_CHANNELS

    def __init__(self) -> None:
        self.title: str | None = None
        self.category: str | None = None
        self.description: str | None = None
        self.color: str | None = None
        self.subscribe_on_start: bool | None = None
        self.repeating = 0
        self.mtu = DEFAULT_MTU
        self.views: list[View | None] = [None] * N_VIEWS
        self.sensors: list[Sensor | None] = [None] * N_SENSORS
        self.export_sets: list[ExportSet | None] = [None] * N_EXPORT_SETS

    def add_view(self, view: View) -> None:
        """Add ``view`` to the first free slot; ignored when all are used."""
        _place(self.views, view)

    def add_sensor(self, sensor: Sensor) -> None:
        """Add a phone sensor and show its raw data in the last view."""
        if _place(self.sensors, sensor) is None:
            return
        raw = self.views[-1]
        if raw is None:
            raw = View()
            raw.set_label("SENSOR RAW DATA")
            self.views[-1] = raw
            info = InfoField()
            info.info = sensor.type
            raw.add_element(info)
        for component, buffer in sensor.mapping:
            value = Value()
            value.input_value = buffer
            value.label = component
            raw.add_element(value)

    def add_export_set(self, export_set: ExportSet) -> None:
        """Add an export set to the first free slot; ignored when all are used."""
        _place(self.export_sets, export_set)

    def set_title(self, title: str) -> None:
        self.title = title

    def set_category(self, category: str) -> None:
        self.category = category

    def set_description(self, description: str) -> None:
        self.description = description

    def set_color(self, color: str) -> None:
        self.color = color

    def set_repeating(self, repeating: int) -> None:
        self.repeating = repeating

    def set_subscribe_on_start(self, subscribe: bool) -> None:
        self.subscribe_on_start = bool(subscribe)

    def _channel_outputs(self) -> list[str]:
        outputs = []
        for channel in range(1, self.number_of_channels + 1):
            offset = (channel - 1) * 4
            if self.repeating <= 0:
                outputs.append(
                    f'\t\t<output char="{_DATA_CHAR}" conversion="float32LittleEndian" '
                    f'offset="{offset}">CH{channel}</output>\n'
                )
            else:
                outputs.append(
                    f'<output char="{_DATA_CHAR}" conversion="float32LittleEndian" '
                    f'offset="{offset}" repeating="{self.repeating}" >CH{channel}'
                    "</output>\n\t\t"
                )
        return outputs

    def _errors_xml(self) -> str:
        reports: list[str] = []
        for view in self.views:
            if view is None:
                continue
            for element in view.elements:
                if len(reports) >= _MAX_REPORTED_ELEMENT_ERRORS:
                    break
                if element.error is not None:
                    reports.append(element.error.to_xml())
        reports.extend(
            sensor.error.to_xml()
            for sensor in self.sensors
            if sensor is not None and sensor.error is not None
        )
        if not reports:
            return ""
        return (
            '\t<view label="ERRORS"> \n'
            + "".join(reports)
            + '\t\t<info  label="DE: Siehe Dokumentation für mehr Informationen '
            'zu Fehlern.">\n'
            "\t\t</info>\n"
            '\t\t<info  label="EN: Please check the documentation for more '
            'information about errors.">\n'
            "\t\t</info>\n"
            "\t</view>\n"
        )

    def header_xml(self, device_name: str) -> str:
        """Render everything up to and including the opening of the views."""
        title = "Arduino-Experiment" if self.title is None else self.title
        category = "Arduino Experiments" if self.category is None else self.category
        description = (
            "An experiment created with the phyphox BLE library for "
            "Arduino-compatible micro controllers."
            if self.description is None
            else self.description
        )
        parts = [
            '<phyphox version="1.15">\n',
            f"<title>{title}</title>\n",
            f"<category>{category}</category>\n",
            f"<description>{description}</description>\n",
            "<data-containers>\n",
            '\t<container size="0" static="false">CH0</container>\n',
        ]
        parts.extend(
            f'\t<container size="0" static="false">CB{index}</container>\n'
            for index in range(1, 6)
        )
        parts.extend(
            f'\t<container size="0" static="false">CH{index}</container>\n'
            for index in range(1, self.number_of_channels + 1)
        )
        parts.append("</data-containers>\n")

        parts.append("<input>\n")
        parts.append(f'\t<bluetooth name="{device_name}')
        if self.mtu != DEFAULT_MTU:
            parts.append(f'" mtu="{self.mtu}')
        subscribe = "true" if self.subscribe_on_start else "false"
        parts.append(
            f'" id="phyphoxBLE" mode="notification" subscribeOnStart="{subscribe}">\n\t\t'
        )
        parts.extend(self._channel_outputs())
        parts.append(f'<output char="{_DATA_CHAR}" extra="time">CH0</output>')
        parts.append("\n\t</bluetooth>\n")
        parts.extend(sensor.to_xml() for sensor in self.sensors if sensor is not None)
        parts.append("</input>\n")

        parts.append("<output>\n")
        parts.append(f'\t<bluetooth id="phyphoxBLE" name="{device_name}">\n\t\t')
        for index, offset in enumerate((0, 4, 8, 12, 16), start=1):
            offset_attr = f' offset="{offset}"' if offset else ""
            parts.append(
                f'\t\t<input char="{_CONFIG_CHAR}" conversion="float32LittleEndian"'
                f"{offset_attr}>CB{index}</input>\n"
            )
        parts.append("\t</bluetooth>\n")
        parts.append("</output>\n")

        parts.append('<analysis sleep="0"  onUserInput="false"></analysis>\n')
        parts.append("<views>\n")
        parts.append(self._errors_xml())
        return "".join(parts)

    def views_xml(self) -> str:
        """Render every view in slot order."""
        return "".join(view.to_xml() for view in self.views if view is not None)

    def footer_xml(self) -> str:
        """Close the views and render the export sets."""
        parts = ["</views>\n", "<export>\n"]
        sets = [export for export in self.export_sets if export is not None]
        if sets:
            parts.extend(export.to_xml() for export in sets)
        else:
            parts.append('\t<set name="mySet">\n')
            parts.extend(
                f'\t\t<data name="myData{index}">CH{index}</data>\n'
                for index in range(self.number_of_channels + 1)
            )
            parts.append("\t</set>\n")
        parts.append("</export>\n")
        parts.append("</phyphox>")
        return "".join(parts)

    def to_xml(self, device_name: str) -> str:
        """Render the whole experiment for a device called ``device_name``."""
        return self.header_xml(device_name) + self.views_xml() + self.footer_xml()


def default_experiment() -> Experiment:
    """The experiment sent when the user supplies none: channel 1 over time."""
    experiment = Experiment()
    view = View()
    graph = Graph()
    graph.set_channel(0, 1)
    view.add_element(graph)
    experiment.add_view(view)
    return experiment