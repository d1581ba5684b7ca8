"""Collector runner configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from collector.pipeline.models import SourceMode


@dataclass(frozen=True)
class RunnerConfig:
    """Overrides de línea de comandos (None = usar Settings)."""
    mode: SourceMode
    batch_count: Optional[int]
    batch_size: Optional[int]
    interval_ms: Optional[int]
    channel_capacity: Optional[int]
    dry_run: bool
