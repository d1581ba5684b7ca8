"""Adquisición de muestras.

- random_walk.py: Modelo de simulación (función pura step)
- sources.py: SimulatedSource, DeviceSource
- acquirer.py: Acquirer con corrección de deriva
"""

from .acquirer import AcquisitionState, Acquirer
from .random_walk import RandomWalkModel, RandomWalkState, step
from .sources import DeviceSource, SampleSource, SimulatedSource

__all__ = [
    "Acquirer",
    "AcquisitionState",
    "RandomWalkModel",
    "RandomWalkState",
    "step",
    "SampleSource",
    "SimulatedSource",
    "DeviceSource",
]
