"""Views, export sets and phone sensors of an experiment."""

from __future__ import annotations

from .checks import (
    N_ELEMENTS,
    N_EXPORT_SETS,
    ErrorRecorder,
    check_component,
    check_length,
    check_sensor,
    check_upper,
)
from .widgets import Element

MAX_SENSOR_OUTPUTS = 5


class View:
    """A page of the experiment holding up to a fixed number of elements."""

    def __init__(self) -> None:
        self.label: str | None = None
        self.xml_attribute: str | None = None
        self.elements: list[Element] = []

    def set_label(self, label: str) -> None:
        self.label = label

    def add_element(self, element: Element) -> None:
        """Append ``element``; ignored once the view is full."""
        if len(self.elements) < N_ELEMENTS:
            self.elements.append(element)

    def set_xml_attribute(self, xml: str) -> None:
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        """Render the view; elements holding an error are left out."""
        parts = ["\t<view"]
        parts.append(' label="label"' if self.label is None else f' label="{self.label}"')
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n")
        parts.extend(
            element.to_xml() for element in self.elements if element.error is None
        )
        parts.append("\t</view>\n")
        return "".join(parts)


class ExportSet:
    """A named group of exported data columns."""

    def __init__(self) -> None:
        self.label: str | None = None
        self.xml_attribute: str | None = None
        self.elements: list[Element] = []

    def set_label(self, label: str) -> None:
        self.label = label

    def add_element(self, element: Element) -> None:
        """Append ``element``; ignored once the set is full."""
        if len(self.elements) < N_EXPORT_SETS:
            self.elements.append(element)

    def set_xml_attribute(self, xml: str) -> None:
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        parts = ["\t<set"]
        parts.append(' label="label"' if self.label is None else f' name="{self.label}"')
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n")
        parts.extend(element.to_xml() for element in self.elements)
        parts.append("\t</set>\n")
        return "".join(parts)


class Sensor(ErrorRecorder):
    """A phone sensor whose components are routed into device channels."""

    def __init__(self) -> None:
        super().__init__()
        self.type: str | None = None
        self.mapping: list[tuple[str, str]] = []
        self.rate: int | None = None
        self.average: bool | None = None
        self.xml_attribute: str | None = None

    def set_type(self, sensor_type: str) -> None:
        self.record(check_sensor(sensor_type, "setType"))
        self.type = sensor_type

    def map_channel(self, component: str, channel: int) -> None:
        """Route ``component`` into channel ``CB<channel>``."""
        if len(self.mapping) >= MAX_SENSOR_OUTPUTS:
            return
        self.record(check_component(component, "routeData"))
        self.record(check_upper(channel, 5, "routeData"))
        self.mapping.append((component, f"CB{channel}"))

    def set_average(self, average: bool) -> None:
        self.average = bool(average)

    def set_rate(self, rate: int) -> None:
        self.record(check_upper(rate, 100, "setRate"))
        self.rate = rate

    def set_xml_attribute(self, xml: str) -> None:
        self.record(check_length(xml, 98, "setXMLAttribute"))
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        """Render the sensor input, or nothing if it holds an error."""
        if self.error is not None:
            return ""
        parts = [f'\t<sensor type="{self.type or ""}"']
        parts.append(' rate="80"' if self.rate is None else f' rate="{self.rate}"')
        if self.average is None:
            parts.append(' average="false"')
        else:
            parts.append(f' average="{"true" if self.average else "false"}"')
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n")
        parts.extend(
            f'\t\t<output component="{component}">{buffer}</output>\n'
            for component, buffer in self.mapping
        )
        parts.append("\t</sensor>\n")
        return "".join(parts)