"""Pipeline: supervisor de dos tareas + construcción desde configuración."""

from .factory import build_options, build_sink, build_source, check_device, run_pipeline
from .models import PipelineOptions, PipelineResult, PipelineState, SourceMode
from .supervisor import PipelineSupervisor

__all__ = [
    "PipelineSupervisor",
    "PipelineOptions",
    "PipelineResult",
    "PipelineState",
    "SourceMode",
    "build_options",
    "build_source",
    "build_sink",
    "run_pipeline",
    "check_device",
]
