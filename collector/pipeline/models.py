"""Modelos del pipeline: estado, opciones y resultado."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class PipelineState(str, Enum):
    """Estados del pipeline."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class SourceMode(str, Enum):
    """Origen de las muestras."""
    SIMULATE = "simulate"
    DEVICE = "device"


@dataclass(frozen=True)
class PipelineOptions:
    """Parámetros de una ejecución."""
    batch_count: int
    batch_size: int
    interval_seconds: float
    channel_capacity: int
    bucket: str
    measurement: str = "machine_1"
    sensor_type: str = "temperature"


@dataclass
class PipelineResult:
    """Resultado combinado: el primer error fatal gana."""
    state: PipelineState
    error: Optional[BaseException] = None
    failed_task: Optional[str] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.state == PipelineState.COMPLETED

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
