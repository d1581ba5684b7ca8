"""Supervisor del pipeline: dos tareas, un resultado.

IDLE → RUNNING → {COMPLETED | FAILED}

- RUNNING al lanzar Acquirer y Forwarder
- COMPLETED cuando el Acquirer termina sus N batches, cierra el canal y el
  Forwarder drena el resto
- FAILED si alguna tarea termina con error; se reporta el primero
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..acquisition.acquirer import Acquirer, Clock, Sleeper
from ..acquisition.sources import SampleSource
from ..domain.sample import Batch
from ..forwarder import Forwarder
from ..relay.channel import RelayChannel
from ..relay.relay_config import RelayConfig
from ..sink.base import TimeSeriesSink
from .models import PipelineOptions, PipelineResult, PipelineState

logger = logging.getLogger(__name__)


class PipelineSupervisor:
    """Construye el canal, lanza ambas tareas y espera a que terminen.

    No inspecciona el contenido de los batches.
    """

    def __init__(
        self,
        source: SampleSource,
        sink: TimeSeriesSink,
        options: PipelineOptions,
        *,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleeper] = None,
    ):
        self._source = source
        self._sink = sink
        self._options = options
        self._clock = clock
        self._sleep = sleep
        self._state = PipelineState.IDLE

        self.channel: Optional[RelayChannel[Batch]] = None
        self.acquirer: Optional[Acquirer] = None
        self.forwarder: Optional[Forwarder] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    async def run(self) -> PipelineResult:
        if self._state != PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already started (state={self._state.value})")

        opts = self._options
        self.channel = RelayChannel(RelayConfig(capacity=opts.channel_capacity))

        timing = {}
        if self._clock is not None:
            timing["clock"] = self._clock
        if self._sleep is not None:
            timing["sleep"] = self._sleep

        self.acquirer = Acquirer(
            self._source,
            self.channel,
            interval_seconds=opts.interval_seconds,
            batch_size=opts.batch_size,
            batch_count=opts.batch_count,
            sensor_type=opts.sensor_type,
            **timing,
        )
        self.forwarder = Forwarder(
            self.channel,
            self._sink,
            bucket=opts.bucket,
            measurement=opts.measurement,
        )

        tasks = {
            asyncio.create_task(self.acquirer.run(), name="acquirer"),
            asyncio.create_task(self.forwarder.run(), name="forwarder"),
        }
        self._state = PipelineState.RUNNING
        logger.info(
            "[PIPELINE] Running: batches=%d batch_size=%d interval=%.3fs capacity=%d",
            opts.batch_count, opts.batch_size, opts.interval_seconds, opts.channel_capacity,
        )

        errors: list[tuple[str, BaseException]] = []
        pending = tasks
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for task in sorted(done, key=lambda t: t.get_name()):
                exc = task.exception()
                if exc is not None:
                    logger.error("[PIPELINE] Task %s failed: %r", task.get_name(), exc)
                    errors.append((task.get_name(), exc))

        stats = self.stats
        if errors:
            self._state = PipelineState.FAILED
            name, error = errors[0]
            logger.error("[PIPELINE] Failed (%s): %s", name, error)
            return PipelineResult(self._state, error=error, failed_task=name, stats=stats)

        self._state = PipelineState.COMPLETED
        logger.info("[PIPELINE] Completed. %s", stats)
        return PipelineResult(self._state, stats=stats)

    @property
    def stats(self) -> dict:
        return {
            "acquirer": self.acquirer.stats if self.acquirer else {},
            "forwarder": self.forwarder.stats if self.forwarder else {},
            "channel": self.channel.stats if self.channel else {},
        }
