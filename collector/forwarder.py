"""Forwarder: canal de relevo → sink de series temporales.

GARANTÍAS:
- Entrega en el mismo orden de producción (canal FIFO, un consumidor)
- At-most-once: un batch cuyo write falla se registra y se descarta
  (sin reintento, sin reencolar)
- Un write fallido nunca detiene el pipeline
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from .domain.sample import Batch
from .relay.channel import RelayChannel
from .sink.base import TimeSeriesSink

logger = logging.getLogger(__name__)


class Forwarder:
    """Consumidor del pipeline.

    Uso:
        forwarder = Forwarder(channel, sink, bucket="telemetry", measurement="machine_1")
        await forwarder.run()
    """

    def __init__(
        self,
        channel: RelayChannel[Batch],
        sink: TimeSeriesSink,
        *,
        bucket: str,
        measurement: str,
    ):
        self._channel = channel
        self._sink = sink
        self._bucket = bucket
        self._measurement = measurement

        self._batches_written = 0
        self._batches_dropped = 0
        self._points_written = 0
        self._dropped_sequences: list[int] = []

    async def run(self) -> None:
        """Drena el canal hasta la señal terminal."""
        try:
            while True:
                batch = await self._channel.receive()
                if batch is None:
                    break
                await self._forward(batch)
        finally:
            await self._channel.detach_receiver()

        logger.info(
            "[FORWARDER] Channel drained: written=%d dropped=%d points=%d",
            self._batches_written, self._batches_dropped, self._points_written,
        )

    async def _forward(self, batch: Batch) -> bool:
        logger.debug(
            "[FORWARDER] %s: receive %d data (batch=%d)",
            datetime.now(timezone.utc).isoformat(), len(batch), batch.sequence,
        )
        points = batch.to_points(self._measurement)

        try:
            await self._sink.write(self._bucket, points)
        except Exception as e:
            self._batches_dropped += 1
            self._dropped_sequences.append(batch.sequence)
            logger.error(
                "[FORWARDER] Dropped batch=%d size=%d: %s",
                batch.sequence, len(batch), e,
            )
            return False

        self._batches_written += 1
        self._points_written += len(points)
        return True

    @property
    def stats(self) -> dict:
        return {
            "batches_written": self._batches_written,
            "batches_dropped": self._batches_dropped,
            "points_written": self._points_written,
            "dropped_sequences": list(self._dropped_sequences),
        }
