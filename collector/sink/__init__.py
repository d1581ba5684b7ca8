"""Sinks de series temporales."""

from .base import NullSink, SinkWriteError, TimeSeriesSink
from .influx import InfluxSink
from .line_protocol import encode_point, encode_points

__all__ = [
    "TimeSeriesSink",
    "NullSink",
    "SinkWriteError",
    "InfluxSink",
    "encode_point",
    "encode_points",
]
