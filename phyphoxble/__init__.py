"""Build phyphox experiments, frame them for BLE transfer and serve them through a NINA-B31 module."""

__version__ = "0.1.0"