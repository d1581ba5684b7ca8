"""Acquirer: produce N batches de M muestras a cadencia fija.

El sleep se calcula contra el calendario acumulado (next_tick += interval),
no como un retardo fijo por iteración: una iteración lenta acorta las
esperas siguientes y el retraso no se acumula en toda la ejecución.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from ..domain.sample import Batch, Sample
from ..relay.channel import RelayChannel
from .sources import SampleSource

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]
WallClockNs = Callable[[], int]


@dataclass
class AcquisitionState:
    """Estado privado del Acquirer; nadie más tiene referencia."""
    next_tick: float
    last_timestamp_ns: int = 0


class Acquirer:
    """Productor del pipeline.

    - Una lectura de la fuente por tick
    - Timestamps de reloj de pared en ns, estrictamente crecientes
    - Al completar cada batch lo envía al canal (backpressure si está lleno)
    - Al terminar (o fallar) cierra el canal para que el Forwarder drene
    """

    def __init__(
        self,
        source: SampleSource,
        channel: RelayChannel[Batch],
        *,
        interval_seconds: float,
        batch_size: int,
        batch_count: int,
        sensor_type: str = "temperature",
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
        wall_clock_ns: WallClockNs = time.time_ns,
    ):
        if interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0, got {interval_seconds}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        if batch_count < 0:
            raise ValueError(f"batch_count must be >= 0, got {batch_count}")

        self._source = source
        self._channel = channel
        self._interval = interval_seconds
        self._batch_size = batch_size
        self._batch_count = batch_count
        self._sensor_type = sensor_type
        self._clock = clock
        self._sleep = sleep
        self._wall_clock_ns = wall_clock_ns

        self._batches_emitted = 0
        self._samples_acquired = 0
        self._overruns = 0

    async def run(self) -> None:
        """Ejecuta la adquisición completa.

        Raises:
            ChannelClosedError: si el receptor desapareció
            DeviceError: fallos del driver (sin reintentos)
        """
        try:
            await self._source.start()
            state = AcquisitionState(next_tick=self._clock())

            for sequence in range(self._batch_count):
                samples = []
                for _ in range(self._batch_size):
                    samples.append(await self._acquire(state))
                batch = Batch(sequence=sequence, samples=tuple(samples))

                await self._channel.send(batch)
                self._batches_emitted += 1
                logger.debug(
                    "[ACQUIRER] Batch %d sent (%d samples, depth=%d)",
                    sequence, len(batch), self._channel.size,
                )

            logger.info(
                "[ACQUIRER] Completed %d batches x %d samples (overruns=%d)",
                self._batches_emitted, self._batch_size, self._overruns,
            )
        finally:
            await self._channel.close()

    async def _acquire(self, state: AcquisitionState) -> Sample:
        state.next_tick += self._interval

        fields = await self._source.read()
        timestamp_ns = max(self._wall_clock_ns(), state.last_timestamp_ns + 1)
        state.last_timestamp_ns = timestamp_ns
        sample = Sample(fields=fields, sensor_type=self._sensor_type, timestamp_ns=timestamp_ns)
        self._samples_acquired += 1

        now = self._clock()
        if now < state.next_tick:
            await self._sleep(state.next_tick - now)
        else:
            self._overruns += 1
        return sample

    @property
    def stats(self) -> dict:
        return {
            "batches_emitted": self._batches_emitted,
            "samples_acquired": self._samples_acquired,
            "overruns": self._overruns,
        }
