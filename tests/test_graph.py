import pytest

from phyphoxble.graph import Graph, Subgraph


def test_default_graph_labels():
    xml = Graph().to_xml()
    assert xml.startswith("\t\t<graph")
    assert ' label="myLabel"' in xml
    assert ' labelX="label x"' in xml
    assert ' labelY="label y"' in xml
    assert xml.endswith("\n\t\t</graph>\n")
    assert "<input" not in xml


def test_set_channel_adds_first_series():
    graph = Graph()
    graph.set_channel(0, 1)
    xml = graph.to_xml()
    assert '<input axis="x">CH0</input>' in xml
    assert '<input axis="y">CH1</input>' in xml
    assert graph.error is None


def test_set_channel_over_limit_records_error():
    graph = Graph()
    graph.set_channel(0, 9)
    assert graph.error.message.startswith("ERR_02")
    assert "setChannel" in graph.error.message


def test_unit_too_long_records_error():
    graph = Graph()
    graph.set_unit_x("abcdefg")
    assert graph.error.message.startswith("ERR_01")
    assert "setUnitX" in graph.error.message


def test_first_error_is_kept():
    graph = Graph()
    graph.set_unit_x("abcdefg")
    graph.set_x_precision(100000)
    assert graph.error.message.startswith("ERR_01")


def test_units_and_precision_rendered():
    graph = Graph()
    graph.set_unit_x("s")
    graph.set_unit_y("m")
    graph.set_x_precision(3)
    graph.set_label_x("time")
    xml = graph.to_xml()
    assert ' unitX="s"' in xml
    assert ' unitY="m"' in xml
    assert ' xPrecision="3"' in xml
    assert ' labelX="time"' in xml


def test_min_x_fixed_layout():
    graph = Graph()
    graph.set_min_x(1.5, "fixed")
    assert ' scaleMinX="fixed" minX="1.5"' in graph.to_xml()


def test_max_y_extend_layout():
    graph = Graph()
    graph.set_max_y(2.0, "extend")
    assert ' scaleMaxY="extend" maxY="2"' in graph.to_xml()


def test_invalid_layout_records_error_and_skips_scale():
    graph = Graph()
    graph.set_min_x(1.0, "bogus")
    assert graph.error.message.startswith("ERR_05")
    assert "setMinX" in graph.error.message
    assert "scaleMinX" not in graph.to_xml()


@pytest.mark.parametrize(
    "setter, name",
    [("set_time_on_x", "timeOnX"), ("set_time_on_y", "timeOnY"), ("set_system_time", "systemTime")],
)
def test_time_flags(setter, name):
    graph = Graph()
    getattr(graph, setter)(True)
    assert f' {name}="true"' in graph.to_xml()
    getattr(graph, setter)(False)
    assert f' {name}="false"' in graph.to_xml()


def test_style_delegates_to_first_series():
    graph = Graph()
    graph.set_channel(0, 1)
    graph.set_style("dots")
    graph.set_color("ff0000")
    assert ' style="dots"' in graph.to_xml()
    assert ' color="ff0000"' in graph.to_xml()


def test_subgraph_defaults():
    xml = Subgraph().to_xml()
    assert '<input axis="x">CH0</input>' in xml
    assert '<input axis="y">CH1</input>' in xml


def test_subgraph_invalid_style_not_applied():
    sub = Subgraph()
    sub.set_style("zigzag")
    assert sub.style is None
    assert sub.error.message.startswith("ERR_04")


def test_subgraph_linewidth_format():
    sub = Subgraph()
    sub.set_linewidth(2)
    assert ' linewidth="2.00"' in sub.to_xml()


def test_subgraph_linewidth_too_large():
    sub = Subgraph()
    sub.set_linewidth(11.5)
    assert sub.error.message.startswith("ERR_02")


def test_subgraph_bad_color():
    sub = Subgraph()
    sub.set_color("xyz")
    assert sub.error.message.startswith("ERR_03")


def test_subgraph_channels():
    sub = Subgraph()
    sub.set_channel(2, 3)
    xml = sub.to_xml()
    assert '<input axis="x">CH2</input>' in xml
    assert '<input axis="y">CH3</input>' in xml


def test_add_subgraph_takes_over_error():
    sub = Subgraph()
    sub.set_color("nothex")
    graph = Graph()
    graph.add_subgraph(sub)
    assert graph.error == sub.error


def test_add_subgraph_capacity():
    graph = Graph()
    for _ in range(12):
        graph.add_subgraph(Subgraph())
    assert graph.to_xml().count('axis="x"') == 10