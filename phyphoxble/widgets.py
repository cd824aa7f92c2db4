"""Simple view and export elements of a phyphox experiment."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .checks import (
    NUMBER_OF_CHANNELS,
    ErrorRecorder,
    check_hex,
    check_length,
    check_upper,
)


def _attr(name: str, value: object) -> str:
    return f' {name}="{value}"'


class Element(ErrorRecorder, ABC):
    """Base of everything that can be placed in a view or export set."""

    def __init__(self) -> None:
        super().__init__()
        self.label: str | None = None

    def set_label(self, label: str) -> None:
        self.record(check_length(label, 41, "setLabel"))
        self.label = label

    @abstractmethod
    def to_xml(self) -> str:
        """Render the element as phyphox XML."""


class Edit(Element):
    """An input field whose value is sent back to the device."""

    def __init__(self) -> None:
        super().__init__()
        self.unit: str | None = None
        self.signed: str | None = None
        self.decimal: str | None = None
        self.xml_attribute: str | None = None
        self.buffer: str | None = None

    def set_unit(self, unit: str) -> None:
        self.record(check_length(unit, 12, "setUnit"))
        self.unit = unit

    def set_signed(self, signed: bool) -> None:
        self.signed = "true" if signed else "false"

    def set_decimal(self, decimal: bool) -> None:
        self.decimal = "true" if decimal else "false"

    def set_xml_attribute(self, xml: str) -> None:
        self.record(check_length(xml, 98, "setXMLAttribute"))
        self.xml_attribute = " " + xml

    def set_channel(self, channel: int) -> None:
        self.record(check_upper(channel, 5, "setChannel"))
        self.buffer = f"CB{channel}"

    def to_xml(self) -> str:
        parts = ["\t\t<edit", _attr("label", self.label if self.label else "label")]
        if self.signed is not None:
            parts.append(_attr("signed", self.signed))
        if self.decimal is not None:
            parts.append(_attr("decimal", self.decimal))
        if self.unit is not None:
            parts.append(_attr("unit", self.unit))
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n")
        parts.append(f"\t\t<output>{self.buffer or 'CH5'}</output>\n")
        parts.append("\t\t</edit>\n")
        return "".join(parts)


class InfoField(Element):
    """A block of static text."""

    def __init__(self) -> None:
        super().__init__()
        self.info: str | None = None
        self.color: str | None = None
        self.xml_attribute: str | None = None

    def set_info(self, info: str) -> None:
        self.record(check_length(info, 191, "setInfo"))
        self.info = info

    def set_color(self, color: str) -> None:
        self.record(check_hex(color, "setColor"))
        self.color = color

    def set_xml_attribute(self, xml: str) -> None:
        self.record(check_length(xml, 98, "setXMLAttribute"))
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        parts = ["\t\t<info"]
        if self.info is None:
            parts.append(' label="infotext"')
        else:
            parts.append(f' label="{self.info} "')
        if self.color is not None:
            parts.append(_attr("color", self.color))
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n\t\t</info>\n")
        return "".join(parts)


class Separator(Element):
    """Vertical space between other elements."""

    def __init__(self) -> None:
        super().__init__()
        self.color: str | None = None
        self.height: float | None = None
        self.xml_attribute: str | None = None

    def set_height(self, height: float) -> None:
        self.record(check_upper(int(height), 10, "setHeight"))
        self.height = height

    def set_color(self, color: str) -> None:
        self.record(check_hex(color, "setColor"))
        self.color = color

    def set_xml_attribute(self, xml: str) -> None:
        self.record(check_length(xml, 98, "setXMLAttribute"))
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        parts = ["\t\t<separator"]
        if self.height is None:
            parts.append(' height="0.1"')
        else:
            parts.append(_attr("height", f"{self.height:.2f}"))
        if self.color is not None:
            parts.append(_attr("setColor", self.color))
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n\t\t</separator>\n")
        return "".join(parts)


class Value(Element):
    """Shows the latest number of a data channel."""

    def __init__(self) -> None:
        super().__init__()
        self.precision: int | None = None
        self.unit: str | None = None
        self.color: str | None = None
        self.input_value: str | None = None
        self.xml_attribute: str | None = None

    def set_precision(self, precision: int) -> None:
        self.record(check_upper(precision, 999, "setPrecision"))
        self.precision = precision

    def set_unit(self, unit: str) -> None:
        self.record(check_length(unit, 12, "setUnit"))
        self.unit = unit

    def set_color(self, color: str) -> None:
        self.record(check_hex(color, "setColor"))
        self.color = color

    def set_channel(self, channel: int) -> None:
        self.record(check_upper(channel, NUMBER_OF_CHANNELS, "setChannel"))
        self.input_value = f"CH{channel}"

    def set_xml_attribute(self, xml: str) -> None:
        self.record(check_length(xml, 98, "setXMLAttribute"))
        self.xml_attribute = " " + xml

    def to_xml(self) -> str:
        parts = ["\t\t<value", _attr("label", self.label if self.label else "myLabel")]
        if self.precision is not None:
            parts.append(_attr("precision", self.precision))
        if self.unit is not None:
            parts.append(_attr("unit", self.unit))
        parts.append(' facor="1"')
        if self.color is not None:
            parts.append(_attr("color", self.color))
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append(">\n")
        parts.append(f"\t\t\t<input>{self.input_value or 'CH3'}")
        parts.append("</input>\n\t\t</value>\n")
        return "".join(parts)


class ExportData(Element):
    """One column of an export set."""

    def __init__(self) -> None:
        super().__init__()
        self.buffer: str | None = None
        self.xml_attribute: str | None = None

    def set_datachannel(self, channel: int) -> None:
        self.buffer = f"CH{channel}"

    def set_xml_attribute(self, xml: str) -> None:
        self.xml_attribute = " " + xml

    def set_label(self, label: str) -> None:
        self.label = label

    def to_xml(self) -> str:
        parts = ['\t\t<data name="', self.label if self.label else "label"]
        if self.xml_attribute:
            parts.append(self.xml_attribute)
        parts.append('">')
        parts.append(self.buffer or "CH1")
        parts.append("</data>\n")
        return "".join(parts)