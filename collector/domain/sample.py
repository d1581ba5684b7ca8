"""Modelos de dominio del pipeline de telemetría.

Sample → Batch → DataPoint (formato del sink):
- Sample: una adquisición (campos numéricos + tipo de sensor + timestamp ns)
- Batch: grupo ordenado e inmutable de Samples de una ventana
- DataPoint: punto listo para el sink (measurement, tags, fields, ts)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Sample:
    """Lectura de un instante. Inmutable una vez creada."""

    fields: Mapping[str, float]
    sensor_type: str
    timestamp_ns: int

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("Sample requires at least one field")
        object.__setattr__(
            self, "fields", MappingProxyType({k: float(v) for k, v in self.fields.items()})
        )

    def to_point(self, measurement: str) -> "DataPoint":
        return DataPoint(
            measurement=measurement,
            tags={"sensor_type": self.sensor_type},
            fields=self.fields,
            timestamp_ns=self.timestamp_ns,
        )


@dataclass(frozen=True)
class Batch:
    """Grupo de Samples de una ventana de adquisición.

    Invariantes:
    - nunca vacío
    - timestamps no decrecientes
    - inmutable (tuple), pasa de Acquirer a Forwarder sin mutación compartida
    """

    sequence: int
    samples: tuple[Sample, ...]

    def __post_init__(self) -> None:
        samples = tuple(self.samples)
        if not samples:
            raise ValueError("Batch cannot be empty")
        for prev, cur in zip(samples, samples[1:]):
            if cur.timestamp_ns < prev.timestamp_ns:
                raise ValueError(
                    f"Batch {self.sequence}: timestamps out of order "
                    f"({cur.timestamp_ns} < {prev.timestamp_ns})"
                )
        object.__setattr__(self, "samples", samples)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    @property
    def first_timestamp_ns(self) -> int:
        return self.samples[0].timestamp_ns

    @property
    def last_timestamp_ns(self) -> int:
        return self.samples[-1].timestamp_ns

    def to_points(self, measurement: str) -> list["DataPoint"]:
        return [s.to_point(measurement) for s in self.samples]


@dataclass(frozen=True)
class DataPoint:
    """Punto para el sink de series temporales."""

    measurement: str
    tags: Mapping[str, str] = field(default_factory=dict)
    fields: Mapping[str, float] = field(default_factory=dict)
    timestamp_ns: int = 0
