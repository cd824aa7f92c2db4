import re

import pytest

from phyphoxble.checks import COLOR_GREEN
from phyphoxble.widgets import Edit, Element, ExportData, InfoField, Separator, Value


def _attrs(xml):
    return dict(re.findall(r'(\w+)="([^"]*)"', xml))


def test_element_is_abstract():
    with pytest.raises(TypeError):
        Element()


def test_set_label_too_long_records_error_but_keeps_label():
    value = Value()
    long_label = "x" * 42
    value.set_label(long_label)
    assert value.error.message.startswith("ERR_01")
    assert "setLabel" in value.error.message
    assert value.label == long_label


def test_set_label_at_limit_is_fine():
    value = Value()
    value.set_label("x" * 41)
    assert value.error is None
    assert _attrs(value.to_xml())["label"] == "x" * 41


def test_edit_default_xml():
    assert Edit().to_xml() == (
        '\t\t<edit label="label">\n\t\t<output>CH5</output>\n\t\t</edit>\n'
    )


def test_edit_attributes_and_order():
    edit = Edit()
    edit.set_label("speed")
    edit.set_unit("m/s")
    edit.set_decimal(False)
    edit.set_signed(True)
    edit.set_channel(3)
    xml = edit.to_xml()
    attrs = _attrs(xml)
    assert attrs["label"] == "speed"
    assert attrs["unit"] == "m/s"
    assert attrs["signed"] == "true"
    assert attrs["decimal"] == "false"
    assert xml.index("signed=") < xml.index("decimal=") < xml.index("unit=")
    assert "CB3" in xml
    assert edit.error is None


def test_edit_channel_above_limit():
    edit = Edit()
    edit.set_channel(6)
    assert edit.error.message.startswith("ERR_02")


def test_edit_unit_too_long():
    edit = Edit()
    edit.set_unit("u" * 13)
    assert edit.error.message.startswith("ERR_01")


def test_edit_xml_attribute_inserted():
    edit = Edit()
    edit.set_xml_attribute('default="4"')
    assert _attrs(edit.to_xml())["default"] == "4"


def test_info_default_label():
    assert ' label="infotext"' in InfoField().to_xml()


def test_info_text_and_color():
    info = InfoField()
    info.set_info("hello")
    info.set_color(COLOR_GREEN)
    attrs = _attrs(info.to_xml())
    assert attrs["label"].rstrip() == "hello"
    assert attrs["color"] == COLOR_GREEN
    assert info.error is None


def test_info_bad_color_records_error():
    info = InfoField()
    info.set_color("zz")
    assert info.error.message.startswith("ERR_03")
    assert info.color == "zz"


def test_info_text_too_long():
    info = InfoField()
    info.set_info("a" * 192)
    assert info.error.message.startswith("ERR_01")


def test_separator_default_height():
    assert ' height="0.1"' in Separator().to_xml()


def test_separator_height_two_decimals():
    separator = Separator()
    separator.set_height(2.5)
    height = _attrs(separator.to_xml())["height"]
    assert float(height) == 2.5
    assert len(height.split(".")[1]) == 2


def test_separator_height_above_limit():
    separator = Separator()
    separator.set_height(11)
    assert separator.error.message.startswith("ERR_02")


def test_separator_color_attribute():
    separator = Separator()
    separator.set_color(COLOR_GREEN)
    assert _attrs(separator.to_xml())["setColor"] == COLOR_GREEN


def test_value_default_xml():
    assert Value().to_xml() == (
        '\t\t<value label="myLabel" facor="1">\n'
        "\t\t\t<input>CH3</input>\n\t\t</value>\n"
    )


def test_value_configured():
    value = Value()
    value.set_precision(2)
    value.set_unit("V")
    value.set_channel(2)
    value.set_color(COLOR_GREEN)
    xml = value.to_xml()
    attrs = _attrs(xml)
    assert attrs["precision"] == "2"
    assert attrs["unit"] == "V"
    assert attrs["color"] == COLOR_GREEN
    assert "CH2" in xml
    assert xml.endswith("</input>\n\t\t</value>\n")


def test_value_first_error_sticks():
    value = Value()
    value.set_unit("u" * 13)
    value.set_precision(1000)
    assert "setUnit" in value.error.message


def test_value_channel_above_limit():
    value = Value()
    value.set_channel(6)
    assert value.error.message.startswith("ERR_02")


def test_export_data_default_xml():
    assert ExportData().to_xml() == '\t\t<data name="label">CH1</data>\n'


def test_export_data_configured():
    data = ExportData()
    data.set_label("temperature")
    data.set_datachannel(4)
    xml = data.to_xml()
    assert _attrs(xml)["name"] == "temperature"
    assert "CH4" in xml
    assert data.error is None


def test_export_data_long_label_not_checked():
    data = ExportData()
    data.set_label("n" * 60)
    assert data.error is None
    assert _attrs(data.to_xml())["name"] == "n" * 60