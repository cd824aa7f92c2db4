"""Graphs and the data series they plot."""

from __future__ import annotations

from .checks import (
    LAYOUTS,
    N_CHANNEL,
    NUMBER_OF_CHANNELS,
    ErrorRecorder,
    check_hex,
    check_layout,
    check_length,
    check_style,
    check_upper,
)
from .widgets import Element


def _attr(name: str, value: object) -> str:
    return f' {name}="{value}"'


class Subgraph(ErrorRecorder):
    """One series of a graph: a pair of channels with its own look."""

    def __init__(self) -> None:
        super().__init__()
        self.input_x: str | None = None
        self.input_y: str | None = None
        self.color: str | None = None
        self.width: str | None = None
        self.style: str | None = None

    def set_color(self, color: str) -> None:
        self.record(check_hex(color, "setColor"))
        self.color = color

    def set_style(self, style: str) -> None:
        """Set the style; an unknown style is reported and not applied."""
        error = check_style(style, "setStyle")
        self.record(error)
        if error is None:
            self.style = style

    def set_linewidth(self, width: float) -> None:
        self.record(check_upper(int(width), 10, "setLinewidth"))
        self.width = f"{width:.2f}"

    def set_channel(self, x: int, y: int) -> None:
        self.record(check_upper(x, NUMBER_OF_CHANNELS, "setChannel"))
        self.record(check_upper(y, NUMBER_OF_CHANNELS, "setChannel"))
        self.input_x = f"CH{x}"
        self.input_y = f"CH{y}"

    def to_xml(self) -> str:
        parts = ['\n\t\t\t<input axis="x"']
        if self.color is not None:
            parts.append(_attr("color", self.color))
        if self.style is not None:
            parts.append(_attr("style", self.style))
        if self.width is not None:
            parts.append(_attr("linewidth", self.width))
        parts.append(">")
        parts.append(self.input_x or "CH0")
        parts.append('</input>\n\t\t\t<input axis="y">')
        parts.append(self.input_y or "CH1")
        parts.append("</input>")
        return "".join(parts)


class Graph(Element):
    """A plot of one or more channel pairs."""

    def __init__(self) -> None:
        super().__init__()
        self.unit_x: str | None = None
        self.unit_y: str | None = None
        self.label_x: str | None = None
        self.label_y: str | None = None
        self.x_precision: int | None = None
        self.y_precision: int | None = None
        self.min_x: str | None = None
        self.max_x: str | None = None
        self.min_y: str | None = None
        self.max_y: str | None = None
        self.time_on_x: str | None = None
        self.time_on_y: str | None = None
        self.system_time: str | None = None
        self.xml_attribute: str | None = None
        self.first_subgraph = Subgraph()
        self.subgraphs: list[Subgraph | None] = [None] * N_CHANNEL

    def set_unit_x(self, unit: str) -> None:
        self.record(check_length(unit, 5, "setUnitX"))
        self.unit_x = unit

    def set_unit_y(self, unit: str) -> None:
        self.record(check_length(unit, 5, "setUnitY"))
        self.unit_y = unit

    def set_label_x(self, label: str) -> None:
        self.record(check_length(label, 20, "setLabelX"))
        self.label_x = label

    def set_label_y(self, label: str) -> None:
        self.record(check_length(label, 20, "setLabelY"))
        self.label_y = label

    def set_x_precision(self, precision: int) -> None:
        self.record(check_upper(precision, 9999, "setXPrecision"))
        self.x_precision = precision

    def set_y_precision(self, precision: int) -> None:
        self.record(check_upper(precision, 9999, "setYPrecision"))
        self.y_precision = precision

    def set_time_on_x(self, enabled: bool) -> None:
        self.time_on_x = "true" if enabled else "false"

    def set_time_on_y(self, enabled: bool) -> None:
        self.time_on_y = "true" if enabled else "false"

    def set_system_time(self, enabled: bool) -> None:
        self.system_time = "true" if enabled else "false"

    def set_channel(self, x: int, y: int) -> None:
        """Plot channel ``y`` over channel ``x`` as the first series."""
        self.record(check_upper(x, NUMBER_OF_CHANNELS, "setChannel"))
        self.record(check_upper(y, NUMBER_OF_CHANNELS, "setChannel"))
        self.first_subgraph.input_x = f"CH{x}"
        self.first_subgraph.input_y = f"CH{y}"
        self.subgraphs[0] = self.first_subgraph

    def add_subgraph(self, subgraph: Subgraph) -> None:
        """Add a series to the first free slot; ignored when all are used."""
        slot = next(
            (index for index, used in enumerate(self.subgraphs) if used is None),
            None,
        )
        if slot is None:
            return
        self.subgraphs[slot] = subgraph
        self.record(subgraph.error)

    def set_style(self, style: str) -> None:
        self.first_subgraph.set_style(style)

    def set_color(self, color: str) -> None:
        self.first_subgraph.set_color(color)

    def set_linewidth(self, width: float) -> None:
        self.first_subgraph.set_linewidth(width)

    def _scale(self, axis: str, value: float, layout: str, origin: str) -> str | None:
        if layout in LAYOUTS:
            return f' scale{axis}="{layout}" {axis[0].lower()}{axis[1:]}="{value:g}"'
        self.record(check_layout(layout, origin))
        return None

    def set_min_x(self, value: float, layout: str) -> None:
        scale = self._scale("MinX", value, layout, "setMinX")
        if scale is not None:
            self.min_x = scale

    def set_max_x(self, value: float, layout: str) -> None:
        scale = self._scale("MaxX", value, layout, "setMaxX")
        if scale is not None:
            self.max_x = scale

    def set_min_y(self, value: float, layout: str) -> None:
        scale = self._scale("MinY", value, layout, "setMinY")
        if scale is not None:
            self.min_y = scale

    def set_max_y(self, value: float, layout: str) -> None:
        scale = self._scale("MaxY", value, layout, "setMaxY")
        if scale is not None:
            self.max_y = scale

    def set_xml_attribute(self, xml: str) -> None:
        self.record(check_length(xml, 98, "setXMLAttribute"))
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        parts = [
            "\t\t<graph",
            _attr("label", self.label if self.label else "myLabel"),
            _attr("labelX", self.label_x if self.label_x is not None else "label x"),
            _attr("labelY", self.label_y if self.label_y is not None else "label y"),
        ]
        if self.unit_x is not None:
            parts.append(_attr("unitX", self.unit_x))
        if self.unit_y is not None:
            parts.append(_attr("unitY", self.unit_y))
        if self.x_precision is not None:
            parts.append(_attr("xPrecision", self.x_precision))
        if self.y_precision is not None:
            parts.append(_attr("yPrecision", self.y_precision))
        parts.extend(
            scale
            for scale in (self.min_x, self.max_x, self.min_y, self.max_y)
            if scale is not None
        )
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        if self.time_on_x is not None:
            parts.append(_attr("timeOnX", self.time_on_x))
        if self.time_on_y is not None:
            parts.append(_attr("timeOnY", self.time_on_y))
        if self.system_time is not None:
            parts.append(_attr("systemTime", self.system_time))
        parts.append(">")
        parts.extend(sub.to_xml() for sub in self.subgraphs if sub is not None)
        parts.append("\n\t\t</graph>\n")
        return "".join(parts)