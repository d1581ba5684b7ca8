"""Domain layer - Samples, Batches y configuración de dispositivo."""

from .device_config import DeviceConfig, demo_machine_config
from .sample import Batch, DataPoint, Sample

__all__ = ["Batch", "DataPoint", "DeviceConfig", "Sample", "demo_machine_config"]
