"""Codificación de DataPoint a InfluxDB line protocol.

FORMATO: measurement[,tag=v...] field=v[,field=v...] timestamp_ns
- tags ordenados por clave
- comas, espacios e '=' escapados con backslash
"""

from __future__ import annotations

import math
from typing import Iterable

from ..domain.sample import DataPoint


def _escape_measurement(value: str) -> str:
    return value.replace(",", r"\,").replace(" ", r"\ ")


def _escape_key(value: str) -> str:
    return value.replace(",", r"\,").replace("=", r"\=").replace(" ", r"\ ")


def _format_field_value(value: float) -> str:
    v = float(value)
    if math.isnan(v) or math.isinf(v):
        raise ValueError(f"Field value must be finite, got {v}")
    return repr(v)


def encode_point(point: DataPoint) -> str:
    if not point.fields:
        raise ValueError(f"Point {point.measurement!r} has no fields")

    head = _escape_measurement(point.measurement)
    for key in sorted(point.tags):
        value = point.tags[key]
        if value == "":
            continue
        head += f",{_escape_key(key)}={_escape_key(value)}"

    fields = ",".join(
        f"{_escape_key(k)}={_format_field_value(v)}" for k, v in point.fields.items()
    )
    return f"{head} {fields} {int(point.timestamp_ns)}"


def encode_points(points: Iterable[DataPoint]) -> str:
    return "\n".join(encode_point(p) for p in points)
