"""Fuentes de muestras para el Acquirer.

- SimulatedSource: random-walk en memoria
- DeviceSource: check + arm al iniciar, una lectura MWR por tick
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from ..device.driver import DeviceDriver, check_connection
from ..device.errors import DeviceError
from ..device.readout import parse_readout
from ..domain.device_config import DeviceConfig
from .random_walk import DEFAULT_CHANNELS, RandomWalkModel

logger = logging.getLogger(__name__)


class SampleSource(Protocol):
    """Origen de los valores de cada muestra."""

    async def start(self) -> None:
        ...

    async def read(self) -> dict[str, float]:
        ...


class SimulatedSource:
    """Valores de un modelo random-walk (sin dispositivo)."""

    def __init__(self, model: RandomWalkModel | None = None):
        self._model = model or RandomWalkModel()

    async def start(self) -> None:
        logger.info("[SOURCE] Simulation mode: %s", ", ".join(self._model.state.as_fields()))

    async def read(self) -> dict[str, float]:
        return self._model.advance()


class DeviceSource:
    """Lecturas del dispositivo real a través del driver.

    Los errores del driver se propagan sin reintentos.
    """

    def __init__(
        self,
        driver: DeviceDriver,
        config: DeviceConfig,
        field_names: Sequence[str] = DEFAULT_CHANNELS,
    ):
        self._driver = driver
        self._config = config
        self._field_names = tuple(field_names)

    async def start(self) -> None:
        await check_connection(self._driver, self._config)
        ack = await self._driver.arm_monitoring(
            self._config.address, self._config.set_monitor_command
        )
        logger.info("[SOURCE] Monitoring armed on %s (ack=%r)", self._config.address, ack)

    async def read(self) -> dict[str, float]:
        command = self._config.monitor_readout_command
        raw = await self._driver.read_samples(self._config.address, command)
        try:
            return parse_readout(raw, self._field_names)
        except ValueError as e:
            raise DeviceError(self._config.address, command, f"invalid readout {raw!r}: {e}") from e
