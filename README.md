# phyphoxble

`phyphoxble` describes a phyphox experiment in Python and turns it into the
experiment XML that the phyphox app loads. It also provides what is needed to
send that experiment and live measurement data to the app over Bluetooth Low
Energy.

The package has four parts:

- **Experiment building.** `phyphoxble.experiment`, `phyphoxble.layout`,
  `phyphoxble.graph` and `phyphoxble.widgets` hold the pieces of an experiment:
  views, graphs with one or more series, values, info fields, separators, edit
  fields, phone sensors and export sets.
- **Validation.** `phyphoxble.checks` checks lengths, upper limits, hex colours,
  graph styles, axis layouts, sensor types and sensor components. Setters never
  raise. Each element keeps the first error it runs into, as an `Error` in its
  `error` attribute. An element that holds an error is left out of its view, and
  a sensor that holds an error is left out of the input section. The problems
  are listed in an `ERRORS` view at the top of the generated experiment, so they
  show up in the app. That view lists at most three element errors and every
  sensor error.
- **Transfer framing.** `phyphoxble.transfer` holds the service and
  characteristic UUIDs. It builds the transfer header, which carries the size
  and a CRC-32, and cuts the experiment into 20-byte packets. It also packs and
  unpacks little-endian float32 data and decodes the experiment events that the
  app writes.
- **A serial BLE module driver.** `phyphoxble.ninab31` speaks the AT command
  set of a u-blox NINA-B31 module over a serial line. `phyphoxble.peripheral`
  builds a complete phyphox peripheral on top of it.

## Installation

```
pip install phyphoxble
```

Run the test suite with:

```
pip install "phyphoxble[test]"
pytest
```

## Building an experiment

```python
from phyphoxble.experiment import Experiment
from phyphoxble.graph import Graph
from phyphoxble.layout import View
from phyphoxble.widgets import Value

experiment = Experiment()
experiment.set_title("Temperature")
experiment.set_category("Arduino Experiments")
experiment.set_description("Temperature measured by the board.")

view = View()
view.set_label("Measurement")

graph = Graph()
graph.set_label("Temperature over time")
graph.set_unit_x("s")
graph.set_unit_y("°C")
graph.set_label_x("time")
graph.set_label_y("T")
graph.set_channel(0, 1)          # CH0 is time, CH1 the first data channel

current = Value()
current.set_label("T")
current.set_unit("°C")
current.set_precision(2)
current.set_channel(1)

view.add_element(graph)
view.add_element(current)
experiment.add_view(view)

xml = experiment.to_xml("phyphox-Arduino")
```

`to_xml` returns the whole document. `header_xml`, `views_xml` and `footer_xml`
return its three parts separately. `default_experiment()` returns the simple
experiment used when none is supplied: one view with a graph of channel 1 over
time.

An experiment has fixed capacities: 15 views, 5 sensors and 10 export sets. A
view holds 20 elements and a graph holds 10 series. Anything added beyond
these limits is ignored.

A graph can plot more than one series. Call `add_subgraph` with a `Subgraph`
that has its own channels, colour, style and line width. The axis ranges are
set with `set_min_x`, `set_max_x`, `set_min_y` and `set_max_y`, each together
with a layout of `"auto"`, `"extend"` or `"fixed"`.

### Smartphone sensors

A `Sensor` asks the phone to stream one of its own sensors back to the board:

```python
from phyphoxble.layout import Sensor

accelerometer = Sensor()
accelerometer.set_type("accelerometer")
accelerometer.set_average(True)
accelerometer.set_rate(50)
accelerometer.map_channel("x", 1)
accelerometer.map_channel("y", 2)
experiment.add_sensor(accelerometer)
```

Map the channels before you add the sensor. If the last view slot is free,
adding a sensor puts a "SENSOR RAW DATA" view there. That view starts with an
info field naming the sensor type. Each sensor that is added then puts a value
field into that view for each of its mapped components.

### Export sets

```python
from phyphoxble.layout import ExportSet
from phyphoxble.widgets import ExportData

export = ExportSet()
export.set_label("Temperature")
column = ExportData()
column.set_label("T (°C)")
column.set_datachannel(1)
export.add_element(column)
experiment.add_export_set(export)
```

If no export set is added, a default set `mySet` exports `CH0` (time) and every
data channel.

## Transfer framing

The phyphox app receives an experiment as a 20-byte header followed by
packets of up to 20 bytes:

```python
from phyphoxble.transfer import crc32, experiment_packets, transfer_header

payload = xml.encode()
header = transfer_header(payload)    # b"phyphox", size, CRC-32, zero padding
packets = list(experiment_packets(payload))   # header first, then the data
```

Measurement data is sent as little-endian float32 values:

```python
from phyphoxble.transfer import pack_floats, unpack_floats

frame = pack_floats(21.5, 1013.2)
values = unpack_floats(frame, 2)
```

`parse_event` decodes the 17-byte event that the app writes when an experiment
is started, paused or cleared. It returns an `ExperimentEvent` with the event
type, the experiment time and the system time. `requests_transfer` tells
whether a value written to the control characteristic asks for the experiment.
`swap_int64` reverses the byte order of a signed 64-bit integer.

## Running a peripheral on a NINA-B31 module

```python
from phyphoxble.ninab31 import NinaB31, open_serial
from phyphoxble.peripheral import PhyphoxPeripheral

port = NinaB31(open_serial("/dev/ttyACM0", 115200))
peripheral = PhyphoxPeripheral(port, "phyphox-senseBox")
peripheral.start(experiment)

while True:
    peripheral.poll()
    peripheral.write(21.5)
```

`start` does the following:

- checks that the module answers;
- registers the experiment and data services and their characteristics;
- sets the connection interval, the advertising data and the local name;
- starts advertising.

It accepts an `Experiment`, ready-made experiment bytes or text, or nothing. If
it gets nothing, it uses the experiment added before with `add_experiment`, or
else the default experiment.

Each call to `poll` handles one character of output from the module. When a
line is complete, `poll` acts on it:

- If the app asks for the experiment, `poll` sends it with
  `transfer_experiment`.
- If the app writes to the config characteristic, `poll` stores the value and
  calls `config_handler`, if one is set.

Read the stored value back with `read_float` or `read_bytes`. `poll_for` keeps
polling for a given number of milliseconds.

`write` sends up to five floats. It returns `False` until the app has received
the experiment. It also returns `False` while no central is connected; the
driver tracks connections from the module's link events.

The `NinaB31` driver raises `ValueError` in these cases:

- a local name longer than 29 characters;
- a connection interval outside 32–16384, or a maximum below the minimum;
- a text value longer than 40 characters;
- binary data longer than 20 bytes.

## What the package does not do

The only BLE transport included is the NINA-B31 module, driven over a serial
port. The package has no BLE stack of its own and does not use the host
computer's Bluetooth adapter. It has no command-line program. The experiment
colour and the MTU are kept on an `Experiment`. The colour is not written into
the XML. The MTU only appears in the XML when it differs from 20.